"""
Sequential niching by fitness derating.

After each run of a maximiser the best solution is recorded with
:meth:`DeratingFunctionMaximisationProblem.add_solution`. Later runs see a
fitness landscape whose peaks near recorded solutions are scaled down, so they
are pushed towards maxima not found yet (Beasley, Bull and Martin, 1993).

Distances are normalised by the span of the first domain dimension only, and
every recorded solution within the radius scales the fitness again, in the
order the solutions were added.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from types import MappingProxyType

import numpy as np

from optkit.foundation.exceptions import BoundsError, ProblemDimensionError
from optkit.foundation.fitness import Fitness
from optkit.foundation.problem.base import FunctionMaximisationProblem
from optkit.foundation.problem.functions import ContinuousFunction

from .derating import DeratingFunction, MaximumDeratingFunction


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _frozen(values: np.ndarray) -> np.ndarray:
    values = np.array(values, dtype=float)
    values.setflags(write=False)
    return values


class DeratingFunctionMaximisationProblem(FunctionMaximisationProblem):
    """Maximise ``function`` with its fitness derated around recorded solutions.

    Parameters
    ----------
    function : ContinuousFunction
        The raw objective.
    derating_function : DeratingFunction, optional
        Defaults to ``MaximumDeratingFunction()``.

    Notes
    -----
    A keyed :meth:`add_solution` with a key already in use replaces the
    lookup entry but the solution is still appended to the list, so both
    solutions keep derating the landscape.
    """

    def __init__(
        self,
        function: ContinuousFunction,
        derating_function: DeratingFunction | None = None,
        *,
        check_bounds: bool = False,
    ) -> None:
        super().__init__(function, check_bounds=check_bounds)
        if self.domain.span(0) == 0:
            raise BoundsError(
                f"Niching normalises distances by the width of dimension 0, which is zero for {function!r}."
            )
        self.derating_function = derating_function if derating_function is not None else MaximumDeratingFunction()
        self._solutions: list[np.ndarray] = []
        self._keyed: dict[Hashable, np.ndarray] = {}

    @property
    def solutions(self) -> tuple[np.ndarray, ...]:
        return tuple(self._solutions)

    @property
    def keyed_solutions(self) -> Mapping[Hashable, np.ndarray]:
        return MappingProxyType(self._keyed)

    def normalise(self, distance: float) -> float:
        return float(distance) / abs(self.domain.upper[0] - self.domain.lower[0])

    def get_raw_fitness(self, x: np.ndarray) -> float:
        return self._raw_value(x)

    def calculate_fitness(self, x: np.ndarray) -> Fitness:
        x = np.asarray(x, dtype=float)
        value = self.get_raw_fitness(x)
        radius = self.derating_function.radius
        for solution in self._solutions:
            distance = self.normalise(np.linalg.norm(x - solution))
            if distance < radius:
                value *= self.derating_function(distance)
        return Fitness.maximisation(value)

    def evaluate(self, x: np.ndarray) -> Fitness:
        return self.calculate_fitness(x)

    def add_solution(self, solution: np.ndarray, key: Hashable | None = None) -> None:
        """Record a found solution; with ``key`` it is also stored in the lookup."""
        solution = _frozen(solution)
        if solution.shape != (self.domain.dimension,):
            raise ProblemDimensionError(
                f"Recorded solutions must have length {self.domain.dimension}, got shape {solution.shape}.",
                expected=self.domain.dimension,
                actual=int(solution.size),
            )
        if key is not None:
            if key in self._keyed:
                _logger().debug("Key %r already recorded; replacing its lookup entry", key)
            self._keyed[key] = solution
        self._solutions.append(solution)
        _logger().debug("Recorded solution %d: %s", len(self._solutions), solution)

    def clear(self) -> None:
        self._solutions.clear()
        self._keyed.clear()


__all__ = ["DeratingFunctionMaximisationProblem"]
