"""
Cooperative coevolution: dimension allocation, the shared context vector and the coordinator.
"""

from .adapter import CooperativeCoevolutionProblemAdapter
from .algorithm import CoevolutionResult, CoevolutionState, CooperativeCoevolutionAlgorithm
from .allocation import DimensionAllocation, check_partition
from .context import ContextReader, ContextVector
from .distribution import (
    ImperfectSplitDistributionStrategy,
    PerfectSplitDistributionStrategy,
    ProblemDistributionStrategy,
    get_distribution_strategy,
)

__all__ = [
    "CooperativeCoevolutionAlgorithm",
    "CoevolutionState",
    "CoevolutionResult",
    "CooperativeCoevolutionProblemAdapter",
    "DimensionAllocation",
    "check_partition",
    "ContextReader",
    "ContextVector",
    "ProblemDistributionStrategy",
    "ImperfectSplitDistributionStrategy",
    "PerfectSplitDistributionStrategy",
    "get_distribution_strategy",
]
