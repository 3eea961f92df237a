from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from optkit.foundation.exceptions import ConfigurationError


@dataclass(frozen=True)
class DimensionAllocation:
    """Contiguous index range ``[offset, offset + length)`` of the full problem vector."""

    offset: int
    length: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ConfigurationError(f"Allocation offset must be non-negative, got {self.offset}.")
        if self.length < 1:
            raise ConfigurationError(f"Allocation length must be positive, got {self.length}.")

    @property
    def stop(self) -> int:
        return self.offset + self.length

    def as_slice(self) -> slice:
        return slice(self.offset, self.stop)

    def indices(self) -> range:
        return range(self.offset, self.stop)

    def validate(self, dimension: int) -> None:
        if self.stop > dimension:
            raise ConfigurationError(
                f"Allocation [{self.offset}, {self.stop}) exceeds problem dimension {dimension}."
            )


def check_partition(allocations: Sequence[DimensionAllocation], dimension: int) -> None:
    """Raise unless ``allocations`` are pairwise disjoint and cover ``[0, dimension)`` exactly."""
    owners = np.full(dimension, -1, dtype=int)
    for i, allocation in enumerate(allocations):
        allocation.validate(dimension)
        window = owners[allocation.as_slice()]
        if np.any(window >= 0):
            clash = allocation.offset + int(np.argmax(window >= 0))
            raise ConfigurationError(
                f"Allocations {int(window[window >= 0][0])} and {i} overlap at index {clash}."
            )
        owners[allocation.as_slice()] = i
    if np.any(owners < 0):
        gap = int(np.argmax(owners < 0))
        raise ConfigurationError(f"No allocation covers index {gap} of {dimension}.")


__all__ = ["DimensionAllocation", "check_partition"]
