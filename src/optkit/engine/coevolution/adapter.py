from __future__ import annotations

import numpy as np

from optkit.foundation.domain import Domain
from optkit.foundation.exceptions import DimensionMismatchError, ProblemDimensionError
from optkit.foundation.fitness import Direction, Fitness
from optkit.foundation.problem.types import OptimisationProblem

from .allocation import DimensionAllocation
from .context import ContextReader


class CooperativeCoevolutionProblemAdapter:
    """Present one allocation of a full problem as a problem of its own.

    A candidate of ``allocation.length`` components is completed with the
    remaining components of a snapshot of the context vector and evaluated
    on the full problem. The adapter never writes to the context.
    """

    def __init__(
        self,
        problem: OptimisationProblem,
        allocation: DimensionAllocation,
        context: ContextReader,
    ) -> None:
        allocation.validate(problem.domain.dimension)
        if context.dimension != problem.domain.dimension:
            raise ProblemDimensionError(
                f"Context vector has {context.dimension} components, the problem has {problem.domain.dimension}.",
                expected=problem.domain.dimension,
                actual=context.dimension,
            )
        self.problem = problem
        self.allocation = allocation
        self.context = context
        self._bound_dimension = context.dimension
        self._domain = problem.domain.subdomain(allocation.offset, allocation.length)

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def direction(self) -> Direction:
        return self.problem.direction

    def compose(self, partial: np.ndarray) -> np.ndarray:
        """Full-length candidate: the context snapshot with this allocation overwritten."""
        partial = np.asarray(partial, dtype=float)
        if partial.shape != (self.allocation.length,):
            raise DimensionMismatchError(self.allocation.length, int(partial.size))
        snapshot = self.context.snapshot()
        if snapshot.size != self._bound_dimension:
            raise ProblemDimensionError(
                f"Context vector changed from {self._bound_dimension} to {snapshot.size} components since binding.",
                expected=self._bound_dimension,
                actual=int(snapshot.size),
            )
        candidate = snapshot.copy()
        candidate[self.allocation.as_slice()] = partial
        return candidate

    def evaluate(self, partial: np.ndarray) -> Fitness:
        return self.problem.evaluate(self.compose(partial))

    def __repr__(self) -> str:
        return (
            f"CooperativeCoevolutionProblemAdapter(offset={self.allocation.offset}, "
            f"length={self.allocation.length}, problem={self.problem!r})"
        )


__all__ = ["CooperativeCoevolutionProblemAdapter"]
