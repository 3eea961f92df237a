"""
Sequential niching: derating functions and the derated maximisation problem.
"""

from .derating import DeratingFunction, ExponentialDeratingFunction, MaximumDeratingFunction
from .problem import DeratingFunctionMaximisationProblem

__all__ = [
    "DeratingFunction",
    "MaximumDeratingFunction",
    "ExponentialDeratingFunction",
    "DeratingFunctionMaximisationProblem",
]
