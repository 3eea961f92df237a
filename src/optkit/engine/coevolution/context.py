"""
Shared context vector of a cooperative run.

The coordinator owns the live buffer. Everybody else reads read-only
snapshots; the only write path is :meth:`ContextVector.apply`, which the
coordinator calls once per round at the barrier.
"""

from __future__ import annotations

import threading
from typing import Iterable, Protocol

import numpy as np

from optkit.foundation.exceptions import DimensionMismatchError, ProblemDimensionError

from .allocation import DimensionAllocation


class ContextReader(Protocol):
    """Read side of the context vector; all an adapter ever gets to see."""

    @property
    def dimension(self) -> int: ...

    def snapshot(self) -> np.ndarray: ...


class ContextVector:
    def __init__(self, values: np.ndarray) -> None:
        self._lock = threading.Lock()
        self._values = self._coerce(values)
        self._version = 0

    @staticmethod
    def _coerce(values: np.ndarray) -> np.ndarray:
        values = np.array(values, dtype=float)
        if values.ndim != 1 or values.size == 0:
            raise ProblemDimensionError(
                f"A context vector must be a non-empty 1-D vector, got shape {values.shape}."
            )
        return values

    @property
    def dimension(self) -> int:
        return int(self._values.size)

    @property
    def version(self) -> int:
        """Number of completed writes; bumps once per barrier update."""
        return self._version

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the current components."""
        with self._lock:
            copy = self._values.copy()
        copy.setflags(write=False)
        return copy

    def apply(self, updates: Iterable[tuple[DimensionAllocation, np.ndarray]]) -> None:
        """Write every ``(allocation, values)`` pair in one pass.

        All pairs are validated before the first component changes, so a bad
        update leaves the vector untouched.
        """
        checked = []
        for allocation, values in updates:
            values = np.asarray(values, dtype=float)
            if values.shape != (allocation.length,):
                raise DimensionMismatchError(allocation.length, int(values.size), "context update")
            allocation.validate(self.dimension)
            checked.append((allocation, values))
        with self._lock:
            for allocation, values in checked:
                self._values[allocation.as_slice()] = values
            self._version += 1

    def reset(self, values: np.ndarray) -> None:
        """Replace the whole vector; the dimensionality may change."""
        values = self._coerce(values)
        with self._lock:
            self._values = values
            self._version += 1

    def __len__(self) -> int:
        return self.dimension

    def __repr__(self) -> str:
        return f"ContextVector(dimension={self.dimension}, version={self._version})"


__all__ = ["ContextReader", "ContextVector"]
