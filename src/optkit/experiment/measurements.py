"""
Measurements sampled from a running algorithm.

A measurement reads an algorithm's exposed state (``iterations``,
``get_best_solution()``, ``positions``, ``context``) and returns a value that
later changes to the algorithm cannot alter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from optkit.foundation.exceptions import MeasurementError


def _read_only(values: np.ndarray) -> np.ndarray:
    values = np.array(values, dtype=float)
    values.setflags(write=False)
    return values


class Measurement(ABC):
    """Base class; ``description`` labels the column in collected output."""

    def __init__(self, description: str | None = None) -> None:
        self.description = description or type(self).__name__

    @abstractmethod
    def get_value(self, algorithm: Any) -> Any: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


class Iterations(Measurement):
    def get_value(self, algorithm: Any) -> int:
        return int(algorithm.iterations)


class BestFitness(Measurement):
    def get_value(self, algorithm: Any) -> float:
        _, fitness = algorithm.get_best_solution()
        return float(fitness.value)


class BestSolution(Measurement):
    def get_value(self, algorithm: Any) -> np.ndarray:
        solution, _ = algorithm.get_best_solution()
        return _read_only(solution)


class Diversity(Measurement):
    """Mean Euclidean distance of the population to its centroid.

    Algorithms that expose no ``positions`` (a cooperative coordinator, for
    one) report ``0.0``.
    """

    def get_value(self, algorithm: Any) -> float:
        positions = getattr(algorithm, "positions", None)
        if positions is None:
            return 0.0
        positions = np.asarray(positions, dtype=float)
        if positions.ndim != 2 or positions.shape[0] == 0:
            return 0.0
        centroid = positions.mean(axis=0)
        return float(np.linalg.norm(positions - centroid, axis=1).mean())


class ContextVectorSnapshot(Measurement):
    def get_value(self, algorithm: Any) -> np.ndarray:
        context = getattr(algorithm, "context", None)
        if context is None:
            raise MeasurementError(f"{type(algorithm).__name__} has no context vector to sample.")
        return context.snapshot()


__all__ = [
    "Measurement",
    "Iterations",
    "BestFitness",
    "BestSolution",
    "Diversity",
    "ContextVectorSnapshot",
]
