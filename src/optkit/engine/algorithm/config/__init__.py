"""Declarative algorithm configuration builders and their frozen data classes."""

from .coevolution import CoevolutionConfig, CoevolutionConfigData
from .pso import PSOConfig, PSOConfigData

__all__ = [
    "CoevolutionConfig",
    "CoevolutionConfigData",
    "PSOConfig",
    "PSOConfigData",
]
