"""
Stopping conditions.

Conditions are plain predicates over an algorithm's exposed state
(``iterations`` and ``get_best_solution()``). The cooperative coordinator
checks them at round boundaries only. ``converged`` tells whether meeting a
condition means the search converged, as opposed to running out of budget.
"""

from __future__ import annotations

import math
from typing import Any, Protocol, Sequence, runtime_checkable

from optkit.foundation.exceptions import ConfigurationError
from optkit.foundation.fitness import Fitness


@runtime_checkable
class StoppingCondition(Protocol):
    converged: bool

    def is_met(self, algorithm: Any) -> bool: ...


class MaximumIterations:
    converged = False

    def __init__(self, iterations: int) -> None:
        if iterations < 1:
            raise ConfigurationError(f"MaximumIterations needs a positive budget, got {iterations}.")
        self.iterations = int(iterations)

    def is_met(self, algorithm: Any) -> bool:
        return algorithm.iterations >= self.iterations

    def __repr__(self) -> str:
        return f"MaximumIterations({self.iterations})"


class FitnessThreshold:
    """Met once the best fitness is at least as good as ``target``."""

    converged = True

    def __init__(self, target: float) -> None:
        self.target = float(target)

    def is_met(self, algorithm: Any) -> bool:
        _, best = algorithm.get_best_solution()
        return best >= Fitness(self.target, best.direction)

    def __repr__(self) -> str:
        return f"FitnessThreshold({self.target:g})"


class Stagnation:
    """Met when the best value has not improved by more than ``tolerance`` for ``patience`` checks."""

    converged = True

    def __init__(self, patience: int, tolerance: float = 0.0) -> None:
        if patience < 1:
            raise ConfigurationError(f"Stagnation needs a positive patience, got {patience}.")
        self.patience = int(patience)
        self.tolerance = float(tolerance)
        self._reference: Fitness | None = None
        self._stale = 0

    def reset(self) -> None:
        self._reference = None
        self._stale = 0

    def is_met(self, algorithm: Any) -> bool:
        _, best = algorithm.get_best_solution()
        if self._reference is None or self._reference.direction is not best.direction:
            self._reference = best
            self._stale = 0
            return False
        improvement = abs(best.value - self._reference.value)
        if best.is_better_than(self._reference) and (math.isinf(improvement) or improvement > self.tolerance):
            self._reference = best
            self._stale = 0
            return False
        self._stale += 1
        return self._stale >= self.patience

    def __repr__(self) -> str:
        return f"Stagnation(patience={self.patience}, tolerance={self.tolerance:g})"


def first_met(conditions: Sequence[StoppingCondition], algorithm: Any) -> StoppingCondition | None:
    """Return the first condition that holds, evaluating every condition exactly once."""
    met = [condition for condition in conditions if condition.is_met(algorithm)]
    return met[0] if met else None


__all__ = [
    "StoppingCondition",
    "MaximumIterations",
    "FitnessThreshold",
    "Stagnation",
    "first_met",
]
