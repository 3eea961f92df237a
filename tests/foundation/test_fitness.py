import math

import pytest

from optkit.foundation.exceptions import IncomparableFitnessError
from optkit.foundation.fitness import Direction, Fitness


def test_maximisation_prefers_larger_values():
    assert Fitness.maximisation(2.0) > Fitness.maximisation(1.0)
    assert Fitness.maximisation(1.0) < Fitness.maximisation(2.0)
    assert Fitness.maximisation(2.0).is_better_than(Fitness.maximisation(1.0))


def test_minimisation_prefers_smaller_values():
    assert Fitness.minimisation(1.0) > Fitness.minimisation(2.0)
    assert not Fitness.minimisation(2.0).is_better_than(Fitness.minimisation(1.0))


def test_equal_values_are_not_better_but_are_at_least_as_good():
    a, b = Fitness.minimisation(3.0), Fitness.minimisation(3.0)
    assert not a.is_better_than(b)
    assert a >= b and a <= b
    assert a == b


def test_mixed_directions_are_incomparable():
    with pytest.raises(IncomparableFitnessError):
        Fitness.maximisation(1.0).is_better_than(Fitness.minimisation(1.0))
    with pytest.raises(IncomparableFitnessError):
        Fitness.maximisation(1.0) > Fitness.minimisation(0.0)  # noqa: B015


def test_inferior_loses_to_any_real_value():
    for direction in Direction:
        worst = Fitness.inferior(direction)
        assert worst.is_inferior
        assert Fitness(0.0, direction) > worst
        assert math.isinf(worst.value)


def test_value_and_direction_are_coerced():
    fitness = Fitness(3, "maximise")
    assert fitness.direction is Direction.MAXIMISE
    assert isinstance(fitness.value, float)
    assert float(fitness) == 3.0
    assert str(Direction.MINIMISE) == "minimise"


def test_fitness_is_immutable():
    fitness = Fitness.minimisation(1.0)
    with pytest.raises(AttributeError):
        fitness.value = 2.0  # type: ignore[misc]


def test_comparison_with_non_fitness_is_unsupported():
    with pytest.raises(TypeError):
        Fitness.minimisation(1.0) < 2.0  # noqa: B015
