import numpy as np
import pytest

from optkit.engine.algorithm.termination import (
    FitnessThreshold,
    MaximumIterations,
    Stagnation,
    StoppingCondition,
    first_met,
)
from optkit.foundation.exceptions import ConfigurationError
from optkit.foundation.fitness import Fitness


class FakeAlgorithm:
    def __init__(self, value=10.0, iterations=0, maximise=False):
        self.value = value
        self.iterations = iterations
        self.maximise = maximise

    def get_best_solution(self):
        make = Fitness.maximisation if self.maximise else Fitness.minimisation
        return np.zeros(1), make(self.value)


def test_conditions_satisfy_protocol():
    for condition in (MaximumIterations(1), FitnessThreshold(0.0), Stagnation(1)):
        assert isinstance(condition, StoppingCondition)


def test_maximum_iterations():
    condition = MaximumIterations(3)
    assert not condition.is_met(FakeAlgorithm(iterations=2))
    assert condition.is_met(FakeAlgorithm(iterations=3))
    assert not condition.converged
    with pytest.raises(ConfigurationError):
        MaximumIterations(0)


def test_fitness_threshold_follows_direction():
    condition = FitnessThreshold(1.0)
    assert condition.is_met(FakeAlgorithm(value=0.5))
    assert condition.is_met(FakeAlgorithm(value=1.0))
    assert not condition.is_met(FakeAlgorithm(value=1.5))
    assert condition.is_met(FakeAlgorithm(value=1.5, maximise=True))
    assert condition.converged


def test_stagnation_counts_rounds_without_improvement():
    condition = Stagnation(patience=2, tolerance=0.1)
    algorithm = FakeAlgorithm(value=10.0)
    assert not condition.is_met(algorithm)
    algorithm.value = 9.95  # inside tolerance
    assert not condition.is_met(algorithm)
    algorithm.value = 5.0
    assert not condition.is_met(algorithm)
    assert not condition.is_met(algorithm)
    assert condition.is_met(algorithm)

    condition.reset()
    assert not condition.is_met(algorithm)


def test_first_met_evaluates_every_condition_once():
    calls = []

    class Spy:
        converged = False

        def __init__(self, result):
            self.result = result

        def is_met(self, algorithm):
            calls.append(self)
            return self.result

    a, b, c = Spy(False), Spy(True), Spy(True)
    assert first_met([a, b, c], FakeAlgorithm()) is b
    assert calls == [a, b, c]
    assert first_met([], FakeAlgorithm()) is None
