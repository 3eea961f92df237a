from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from optkit.foundation.domain import Domain
from optkit.foundation.fitness import Direction, Fitness


@runtime_checkable
class OptimisationProblem(Protocol):
    domain: Domain
    direction: Direction

    def evaluate(self, x: np.ndarray) -> Fitness: ...


__all__ = ["OptimisationProblem"]
