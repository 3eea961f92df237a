import logging

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from optkit.engine.algorithm import PSO, MaximumIterations, PSOConfig
from optkit.engine.coevolution import CoevolutionState, CooperativeCoevolutionAlgorithm
from optkit.experiment import (
    BestFitness,
    CollectorObserver,
    ConsoleObserver,
    ContextVectorSnapshot,
    InMemoryMeasurementCollector,
    Iterations,
)
from optkit.foundation.exceptions import DimensionMismatchError, EvaluationError
from optkit.foundation.observer import Observer
from optkit.foundation.problem import FunctionMinimisationProblem, Spherical


def _coordinator(observers, rounds=4):
    populations = [PSO(PSOConfig().pop_size(6).seed(i).fixed()) for i in range(2)]
    return CooperativeCoevolutionAlgorithm(
        populations,
        FunctionMinimisationProblem(Spherical(dimension=6)),
        stopping_conditions=[MaximumIterations(rounds)],
        observers=observers,
        seed=0,
    )


def test_observers_satisfy_protocol():
    assert isinstance(ConsoleObserver(), Observer)
    assert isinstance(CollectorObserver(InMemoryMeasurementCollector()), Observer)


def test_collector_observer_samples_start_and_every_round():
    collector = InMemoryMeasurementCollector([Iterations(), BestFitness(), ContextVectorSnapshot()])
    algorithm = _coordinator([CollectorObserver(collector)])
    result = algorithm.run()

    assert collector.column("Iterations") == [0, 1, 2, 3, 4]
    assert collector.closed
    assert_array_equal(collector.column("ContextVectorSnapshot")[-1], result.solution)
    best = collector.column("BestFitness")
    assert best[-1] == pytest.approx(result.fitness.value)


def test_collector_observer_can_leave_collector_open():
    collector = InMemoryMeasurementCollector([Iterations()])
    _coordinator([CollectorObserver(collector, close_on_end=False)], rounds=2).run()
    assert not collector.closed
    collector.close()


def test_collector_released_when_a_round_fails():
    class Broken:
        iterations = 0

        def set_optimisation_problem(self, problem):
            self.problem = problem

        def perform_iteration(self):
            raise ValueError("diverged")

        def get_best_solution(self):
            return np.zeros(self.problem.domain.dimension), self.problem.evaluate(
                np.zeros(self.problem.domain.dimension)
            )

    collector = InMemoryMeasurementCollector([Iterations()])
    algorithm = CooperativeCoevolutionAlgorithm(
        [PSO(PSOConfig().pop_size(4).seed(0).fixed()), Broken()],
        FunctionMinimisationProblem(Spherical(dimension=4)),
        stopping_conditions=[MaximumIterations(3)],
        observers=[CollectorObserver(collector)],
        seed=0,
    )
    with pytest.raises(Exception, match="Sub-optimizer 1"):
        algorithm.run()
    assert collector.closed
    assert collector.samples == [(0,)]


def test_wrong_length_best_fails_the_round_and_releases_the_collector():
    class Overlong(PSO):
        def get_best_solution(self):
            best, fitness = super().get_best_solution()
            if self.iterations >= 1:
                return np.append(best, 0.0), fitness
            return best, fitness

    collector = InMemoryMeasurementCollector([Iterations()])
    ends = []

    class EndRecorder:
        def on_start(self, ctx):
            pass

        def on_round(self, round_index, algorithm):
            pass

        def on_end(self, algorithm, reason):
            ends.append(reason)

    algorithm = CooperativeCoevolutionAlgorithm(
        [PSO(PSOConfig().pop_size(4).seed(0).fixed()), Overlong(PSOConfig().pop_size(4).seed(1).fixed())],
        FunctionMinimisationProblem(Spherical(dimension=4)),
        stopping_conditions=[MaximumIterations(3)],
        observers=[CollectorObserver(collector), EndRecorder()],
        seed=0,
    )
    with pytest.raises(EvaluationError) as info:
        algorithm.run()

    assert info.value.sub_optimizer == 1
    assert isinstance(info.value.__cause__, DimensionMismatchError)
    assert algorithm.state is CoevolutionState.TERMINATED
    assert algorithm.iterations == 0
    assert collector.closed
    assert ends == ["evaluation failed in sub-optimizer 1"]


def test_collector_released_when_a_stopping_condition_raises():
    class Exploding:
        converged = False

        def is_met(self, algorithm):
            if algorithm.iterations == 2:
                raise RuntimeError("condition broke")
            return False

    collector = InMemoryMeasurementCollector([Iterations()])
    algorithm = _coordinator([CollectorObserver(collector)])
    algorithm.stopping_conditions = [Exploding()]
    with pytest.raises(RuntimeError, match="condition broke"):
        algorithm.run()

    assert algorithm.state is CoevolutionState.TERMINATED
    assert collector.closed
    assert collector.column("Iterations") == [0, 1, 2]


def test_console_observer_logs_progress(caplog):
    caplog.set_level(logging.INFO, logger="optkit")
    _coordinator([ConsoleObserver(every=2)]).run()
    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("Algorithm: CooperativeCoevolutionAlgorithm") for m in messages)
    assert any(m.startswith("Populations: 2") for m in messages)
    assert any(m.startswith("Round 2 |") for m in messages)
    assert any(m.startswith("Round 4 |") for m in messages)
    assert not any(m.startswith("Round 3 |") for m in messages)
    assert any("Stopped after 4 rounds" in m for m in messages)
