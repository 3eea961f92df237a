"""
Problem distribution strategies.

A strategy splits the dimensions of the full problem into contiguous
allocations, one per population, and rebinds every population to an adapter
over its allocation. Allocations are returned in population order.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from optkit.foundation.exceptions import (
    IndivisibleDimensionError,
    InsufficientPopulationsError,
    InvalidStrategyError,
)
from optkit.foundation.problem.types import OptimisationProblem

from .adapter import CooperativeCoevolutionProblemAdapter
from .allocation import DimensionAllocation, check_partition
from .context import ContextReader


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@runtime_checkable
class ProblemDistributionStrategy(Protocol):
    def distribute(
        self,
        populations: Sequence[Any],
        problem: OptimisationProblem,
        context: ContextReader,
    ) -> list[DimensionAllocation]: ...


def _bind(
    populations: Sequence[Any],
    lengths: Sequence[int],
    problem: OptimisationProblem,
    context: ContextReader,
) -> list[DimensionAllocation]:
    allocations = []
    offset = 0
    for length in lengths:
        allocations.append(DimensionAllocation(offset, length))
        offset += length
    check_partition(allocations, problem.domain.dimension)
    # Populations are only rebound once the whole partition is valid.
    for index, (population, allocation) in enumerate(zip(populations, allocations)):
        population.set_optimisation_problem(
            CooperativeCoevolutionProblemAdapter(problem, allocation, context)
        )
        _logger().debug("Population %d owns dimensions [%d, %d)", index, allocation.offset, allocation.stop)
    return allocations


def _check_populations(populations: Sequence[Any]) -> None:
    if len(populations) < 2:
        raise InsufficientPopulationsError(len(populations))


class ImperfectSplitDistributionStrategy:
    """Spread ``D`` dimensions over ``N`` populations as evenly as possible.

    Every population gets ``D // N`` dimensions and the first ``D % N``
    populations get one more, so slice lengths differ by at most one. With
    ``D < N`` the trailing populations would be left empty, which is rejected
    by :class:`DimensionAllocation`.
    """

    def distribute(
        self,
        populations: Sequence[Any],
        problem: OptimisationProblem,
        context: ContextReader,
    ) -> list[DimensionAllocation]:
        _check_populations(populations)
        dimension = problem.domain.dimension
        base, remainder = divmod(dimension, len(populations))
        lengths = [base + 1 if i < remainder else base for i in range(len(populations))]
        return _bind(populations, lengths, problem, context)


class PerfectSplitDistributionStrategy:
    """Equal slices of ``D / N`` dimensions; refuses a ``D`` that ``N`` does not divide."""

    def distribute(
        self,
        populations: Sequence[Any],
        problem: OptimisationProblem,
        context: ContextReader,
    ) -> list[DimensionAllocation]:
        _check_populations(populations)
        dimension = problem.domain.dimension
        if dimension % len(populations) != 0:
            raise IndivisibleDimensionError(dimension, len(populations))
        length = dimension // len(populations)
        return _bind(populations, [length] * len(populations), problem, context)


DISTRIBUTION_STRATEGIES: dict[str, Callable[[], ProblemDistributionStrategy]] = {
    "imperfect": ImperfectSplitDistributionStrategy,
    "perfect": PerfectSplitDistributionStrategy,
}


def get_distribution_strategy(name: str) -> ProblemDistributionStrategy:
    key = name.lower()
    try:
        factory = DISTRIBUTION_STRATEGIES[key]
    except KeyError as exc:
        raise InvalidStrategyError(name, sorted(DISTRIBUTION_STRATEGIES)) from exc
    return factory()


__all__ = [
    "ProblemDistributionStrategy",
    "ImperfectSplitDistributionStrategy",
    "PerfectSplitDistributionStrategy",
    "DISTRIBUTION_STRATEGIES",
    "get_distribution_strategy",
]
