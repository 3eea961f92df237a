"""
optkit: cooperative coevolution and sequential niching for continuous optimisation.
"""

from .engine.algorithm import PSO, FitnessThreshold, MaximumIterations, PSOConfig, Stagnation
from .engine.algorithm.config import CoevolutionConfig
from .engine.coevolution import (
    CooperativeCoevolutionAlgorithm,
    CooperativeCoevolutionProblemAdapter,
    ImperfectSplitDistributionStrategy,
    PerfectSplitDistributionStrategy,
)
from .engine.niching import (
    DeratingFunctionMaximisationProblem,
    ExponentialDeratingFunction,
    MaximumDeratingFunction,
)
from .foundation.domain import Domain
from .foundation.fitness import Direction, Fitness
from .foundation.logging import configure_optkit_logging
from .foundation.problem import (
    FunctionMaximisationProblem,
    FunctionMinimisationProblem,
    get_function,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Domain",
    "Direction",
    "Fitness",
    "FunctionMinimisationProblem",
    "FunctionMaximisationProblem",
    "get_function",
    "PSO",
    "PSOConfig",
    "CoevolutionConfig",
    "MaximumIterations",
    "FitnessThreshold",
    "Stagnation",
    "CooperativeCoevolutionAlgorithm",
    "CooperativeCoevolutionProblemAdapter",
    "ImperfectSplitDistributionStrategy",
    "PerfectSplitDistributionStrategy",
    "DeratingFunctionMaximisationProblem",
    "MaximumDeratingFunction",
    "ExponentialDeratingFunction",
    "configure_optkit_logging",
]
