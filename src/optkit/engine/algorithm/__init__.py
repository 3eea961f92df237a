"""
Single-population algorithms, their configuration and stopping conditions.
"""

from .config import CoevolutionConfig, CoevolutionConfigData, PSOConfig, PSOConfigData
from .protocol import PopulationBasedAlgorithm
from .pso import PSO, ConstantAcceleration, FIPSAcceleration
from .termination import FitnessThreshold, MaximumIterations, Stagnation, StoppingCondition

__all__ = [
    "PopulationBasedAlgorithm",
    "PSO",
    "ConstantAcceleration",
    "FIPSAcceleration",
    "PSOConfig",
    "PSOConfigData",
    "CoevolutionConfig",
    "CoevolutionConfigData",
    "StoppingCondition",
    "MaximumIterations",
    "FitnessThreshold",
    "Stagnation",
]
