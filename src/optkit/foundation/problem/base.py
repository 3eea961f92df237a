"""
Function-backed optimisation problems.

A problem pairs a :class:`~optkit.foundation.problem.functions.ContinuousFunction`
with an optimisation direction and turns the function's scalar result into a
direction-tagged :class:`~optkit.foundation.fitness.Fitness`. Decorator
problems (the cooperative adapter, the derating problem) wrap problems rather
than subclassing deeper.

Example::

    from optkit.foundation.problem.base import FunctionMinimisationProblem
    from optkit.foundation.problem.functions import Spherical

    problem = FunctionMinimisationProblem(Spherical(dimension=10))
    fitness = problem.evaluate(np.zeros(10))   # Fitness(0.0, minimise)
"""

from __future__ import annotations

import threading

import numpy as np

from optkit.foundation.domain import Domain
from optkit.foundation.exceptions import EvaluationError, ProblemDimensionError
from optkit.foundation.fitness import Direction, Fitness
from optkit.foundation.problem.functions import ContinuousFunction


class FunctionOptimisationProblem:
    """Optimise a continuous function in a given direction.

    ``evaluations`` counts calls to :meth:`evaluate`; the counter is safe to
    update from the worker threads of a parallel cooperative round.
    """

    def __init__(
        self,
        function: ContinuousFunction,
        direction: Direction = Direction.MINIMISE,
        *,
        check_bounds: bool = False,
    ) -> None:
        self.function = function
        self.direction = Direction(direction)
        self.check_bounds = check_bounds
        self._evaluations = 0
        self._lock = threading.Lock()

    @property
    def domain(self) -> Domain:
        return self.function.domain

    @property
    def evaluations(self) -> int:
        return self._evaluations

    def reset_evaluations(self) -> None:
        with self._lock:
            self._evaluations = 0

    def _validate(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if x.ndim != 1 or x.size != self.domain.dimension:
            raise ProblemDimensionError(
                f"{type(self).__name__} expects a vector of length {self.domain.dimension}, got shape {x.shape}.",
                expected=self.domain.dimension,
                actual=int(x.size),
            )
        if self.check_bounds and not self.domain.contains(x):
            raise EvaluationError("Candidate lies outside the problem domain.", solution=x.copy())
        return x

    def _raw_value(self, x: np.ndarray) -> float:
        x = self._validate(x)
        with self._lock:
            self._evaluations += 1
        return self.function(x)

    def evaluate(self, x: np.ndarray) -> Fitness:
        return Fitness(self._raw_value(x), self.direction)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.function!r})"


class FunctionMinimisationProblem(FunctionOptimisationProblem):
    def __init__(self, function: ContinuousFunction, *, check_bounds: bool = False) -> None:
        super().__init__(function, Direction.MINIMISE, check_bounds=check_bounds)


class FunctionMaximisationProblem(FunctionOptimisationProblem):
    def __init__(self, function: ContinuousFunction, *, check_bounds: bool = False) -> None:
        super().__init__(function, Direction.MAXIMISE, check_bounds=check_bounds)


__all__ = [
    "FunctionOptimisationProblem",
    "FunctionMinimisationProblem",
    "FunctionMaximisationProblem",
]
