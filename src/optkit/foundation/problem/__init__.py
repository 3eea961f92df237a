"""
Problem definitions: the problem protocol, function-backed problems and the
benchmark function catalogue.
"""

from .base import FunctionMaximisationProblem, FunctionMinimisationProblem, FunctionOptimisationProblem
from .functions import (
    ContinuousFunction,
    EqualMaxima,
    HyperEllipsoid,
    Schwefel,
    Spherical,
    available_functions,
    get_function,
)
from .types import OptimisationProblem

__all__ = [
    "OptimisationProblem",
    "FunctionOptimisationProblem",
    "FunctionMinimisationProblem",
    "FunctionMaximisationProblem",
    "ContinuousFunction",
    "Spherical",
    "HyperEllipsoid",
    "Schwefel",
    "EqualMaxima",
    "available_functions",
    "get_function",
]
