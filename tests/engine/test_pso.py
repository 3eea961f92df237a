import numpy as np
import pytest
from numpy.testing import assert_array_equal

from optkit.engine.algorithm import PSO, PopulationBasedAlgorithm, PSOConfig
from optkit.engine.algorithm.pso import ConstantAcceleration, FIPSAcceleration, build_acceleration
from optkit.foundation.exceptions import AlgorithmStateError
from optkit.foundation.problem import EqualMaxima, FunctionMaximisationProblem, FunctionMinimisationProblem, Spherical


def _pso(seed=0, pop_size=20, **kwargs):
    builder = PSOConfig().pop_size(pop_size).seed(seed)
    for key, value in kwargs.items():
        getattr(builder, key)(value)
    return PSO(builder.fixed())


def test_pso_satisfies_protocol():
    assert isinstance(_pso(), PopulationBasedAlgorithm)


def test_unbound_swarm_cannot_initialise_or_report():
    pso = _pso()
    with pytest.raises(AlgorithmStateError):
        pso.initialise()
    with pytest.raises(AlgorithmStateError):
        pso.get_best_solution()


def test_minimises_spherical():
    problem = FunctionMinimisationProblem(Spherical(dimension=5))
    pso = _pso(seed=1)
    pso.set_optimisation_problem(problem)
    pso.initialise()
    _, start = pso.get_best_solution()
    for _ in range(100):
        pso.perform_iteration()
    x, best = pso.get_best_solution()

    assert pso.iterations == 100
    assert best.value < start.value
    assert best.value < 1e-2
    assert problem.domain.contains(x)


def test_maximises_equal_maxima():
    problem = FunctionMaximisationProblem(EqualMaxima())
    pso = _pso(seed=2, pop_size=10)
    pso.set_optimisation_problem(problem)
    for _ in range(50):
        pso.perform_iteration()
    _, best = pso.get_best_solution()
    assert best.value == pytest.approx(1.0, abs=1e-3)


def test_positions_stay_in_domain_and_velocities_are_clamped():
    problem = FunctionMinimisationProblem(Spherical(domain="R(-1, 1)^3"))
    pso = _pso(seed=3, vmax_fraction=0.1)
    pso.set_optimisation_problem(problem)
    for _ in range(20):
        pso.perform_iteration()
        assert np.all(np.abs(pso.positions) <= 1.0)
        assert np.all(np.abs(pso.velocities) <= 0.2 + 1e-12)


def test_same_seed_same_trajectory():
    problem = FunctionMinimisationProblem(Spherical(dimension=4))
    runs = []
    for _ in range(2):
        pso = _pso(seed=11)
        pso.set_optimisation_problem(problem)
        for _ in range(10):
            pso.perform_iteration()
        runs.append(pso.get_best_solution()[0])
    assert_array_equal(runs[0], runs[1])


def test_rebinding_restarts_the_swarm():
    pso = _pso()
    pso.set_optimisation_problem(FunctionMinimisationProblem(Spherical(dimension=4)))
    pso.perform_iteration()
    pso.set_optimisation_problem(FunctionMinimisationProblem(Spherical(dimension=2)))
    assert not pso.initialised
    pso.perform_iteration()
    assert pso.positions.shape == (20, 2)


def test_best_solution_is_a_copy():
    pso = _pso()
    pso.set_optimisation_problem(FunctionMinimisationProblem(Spherical(dimension=2)))
    pso.perform_iteration()
    x, _ = pso.get_best_solution()
    x[:] = 99.0
    assert not np.any(pso.get_best_solution()[0] == 99.0)


def test_acceleration_strategies():
    rng = np.random.default_rng(0)
    assert ConstantAcceleration(1.5).get(rng) == 1.5
    draws = [FIPSAcceleration(2.0).get(rng) for _ in range(200)]
    assert all(0.0 <= d < 2.0 for d in draws)
    assert len(set(draws)) > 1
    assert isinstance(build_acceleration("fips", 1.0), FIPSAcceleration)
    assert isinstance(build_acceleration("constant", 1.0), ConstantAcceleration)
