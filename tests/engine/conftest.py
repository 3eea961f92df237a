from __future__ import annotations

import threading

import numpy as np
import pytest

from optkit.foundation.fitness import Fitness


class ScriptedPopulation:
    """Sub-optimizer whose best solution after round ``r`` is ``base + r``.

    Every step records the context snapshot its adapter sees and evaluates
    the new best through the adapter, so tests can inspect both what was read
    during a round and what the coordinator wrote afterwards.
    """

    def __init__(self, base: float, fail_on_round: int | None = None, barrier: threading.Barrier | None = None):
        self.base = float(base)
        self.fail_on_round = fail_on_round
        self.barrier = barrier
        self.iterations = 0
        self.problem = None
        self.seen: list[np.ndarray] = []
        self.reported: list[np.ndarray] = []
        self._best: np.ndarray | None = None
        self._fitness: Fitness | None = None

    def set_optimisation_problem(self, problem) -> None:
        self.problem = problem

    def initialise(self) -> None:
        self._propose()

    def perform_iteration(self) -> None:
        if self.fail_on_round is not None and self.iterations + 1 == self.fail_on_round:
            raise RuntimeError(f"population {self.base} exploded")
        if self.barrier is not None:
            self.barrier.wait(timeout=5)
        self.seen.append(np.array(self.problem.context.snapshot()))
        self.iterations += 1
        self._propose()

    def _propose(self) -> None:
        length = self.problem.domain.dimension
        self._best = np.full(length, self.base + self.iterations)
        self._fitness = self.problem.evaluate(self._best)

    def get_best_solution(self):
        best = self._best.copy()
        self.reported.append(best.copy())
        return best, self._fitness


@pytest.fixture
def scripted_population():
    return ScriptedPopulation
