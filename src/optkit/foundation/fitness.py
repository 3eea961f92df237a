"""
Direction-tagged fitness values.

A fitness only makes sense together with the direction of the problem that
produced it, so the two travel together. Ordering operators read as
"better than": ``a > b`` holds when ``a`` is the better fitness under the
shared direction, regardless of whether that direction maximises or
minimises.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .exceptions import IncomparableFitnessError


class Direction(str, Enum):
    """Optimisation direction of a problem."""

    MAXIMISE = "maximise"
    MINIMISE = "minimise"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Fitness:
    value: float
    direction: Direction

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "direction", Direction(self.direction))

    @classmethod
    def maximisation(cls, value: float) -> "Fitness":
        return cls(value, Direction.MAXIMISE)

    @classmethod
    def minimisation(cls, value: float) -> "Fitness":
        return cls(value, Direction.MINIMISE)

    @classmethod
    def inferior(cls, direction: Direction) -> "Fitness":
        """Worst possible fitness for ``direction``; anything real beats it."""
        direction = Direction(direction)
        value = -math.inf if direction is Direction.MAXIMISE else math.inf
        return cls(value, direction)

    @property
    def is_inferior(self) -> bool:
        return self == Fitness.inferior(self.direction)

    def is_better_than(self, other: "Fitness") -> bool:
        if other.direction is not self.direction:
            raise IncomparableFitnessError(str(self.direction), str(other.direction))
        if self.direction is Direction.MAXIMISE:
            return self.value > other.value
        return self.value < other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Fitness):
            return NotImplemented
        return self.is_better_than(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fitness):
            return NotImplemented
        return other.is_better_than(self)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Fitness):
            return NotImplemented
        return not other.is_better_than(self)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Fitness):
            return NotImplemented
        return not self.is_better_than(other)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:g} ({self.direction})"


__all__ = ["Direction", "Fitness"]
