"""
Sub-optimizer protocol.

Defines the interface every population-based algorithm must follow to take
part in a cooperative run (or to be driven and measured on its own).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from optkit.foundation.fitness import Fitness
from optkit.foundation.problem.types import OptimisationProblem


@runtime_checkable
class PopulationBasedAlgorithm(Protocol):
    """
    Protocol for population-based search algorithms.

    Implementations may additionally provide ``initialise()``; when present,
    the cooperative coordinator calls it once after binding the algorithm
    to its adapter problem and before the first round.

    Attributes:
        iterations: Number of completed calls to ``perform_iteration()``.
    """

    iterations: int

    def set_optimisation_problem(self, problem: OptimisationProblem) -> None:
        """Bind (or rebind) the problem the algorithm searches."""
        ...

    def perform_iteration(self) -> None:
        """
        Advance the search by exactly one step.

        Must only touch the algorithm's own state; evaluations go through
        the bound problem.
        """
        ...

    def get_best_solution(self) -> tuple[np.ndarray, Fitness]:
        """Return a copy of the best position found so far and its fitness."""
        ...


__all__ = ["PopulationBasedAlgorithm"]
