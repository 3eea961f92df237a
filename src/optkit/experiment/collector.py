"""
Measurement collectors.

A collector is a resource: it is opened on first use and must be released on
every exit path. Use it as a context manager (or through
:func:`measurement_session`) so that an exception in the optimisation loop
still closes it::

    with CSVMeasurementCollector("run.csv", [Iterations(), BestFitness()]) as collector:
        for _ in range(100):
            algorithm.perform_iteration()
            collector.measure(algorithm)
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterable, Iterator, TypeVar

import numpy as np

from optkit.foundation.exceptions import MeasurementError

from .measurements import Measurement


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


C = TypeVar("C", bound="MeasurementCollector")


class MeasurementCollector(ABC):
    def __init__(self, measurements: Iterable[Measurement] = ()) -> None:
        self._measurements: list[Measurement] = list(measurements)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def measurements(self) -> tuple[Measurement, ...]:
        return tuple(self._measurements)

    def add(self, measurement: Measurement) -> None:
        self._check_open("add a measurement")
        self._measurements.append(measurement)

    def get_descriptions(self) -> list[str]:
        return [m.description for m in self._measurements]

    def measure(self, algorithm: Any) -> list[Any]:
        """Sample every measurement once and hand the row to :meth:`_write`."""
        self._check_open("measure")
        row = [m.get_value(algorithm) for m in self._measurements]
        self._write(row)
        return row

    def close(self) -> None:
        """Release the collector; further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            self._release()
        finally:
            _logger().debug("%s closed", type(self).__name__)

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise MeasurementError(f"Cannot {operation}: {type(self).__name__} is closed.")

    @abstractmethod
    def _write(self, row: list[Any]) -> None: ...

    def _release(self) -> None:
        """Free held resources; called exactly once."""

    def __enter__(self: C) -> C:
        self._check_open("enter")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InMemoryMeasurementCollector(MeasurementCollector):
    """Keeps every sampled row; handy for tests and notebooks."""

    def __init__(self, measurements: Iterable[Measurement] = ()) -> None:
        super().__init__(measurements)
        self._samples: list[tuple[Any, ...]] = []

    @property
    def samples(self) -> list[tuple[Any, ...]]:
        return list(self._samples)

    def column(self, description: str) -> list[Any]:
        try:
            index = self.get_descriptions().index(description)
        except ValueError as exc:
            raise MeasurementError(f"No measurement named {description!r}.") from exc
        return [row[index] for row in self._samples]

    def _write(self, row: list[Any]) -> None:
        self._samples.append(tuple(row))


def _cell(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return " ".join(repr(float(v)) for v in value.ravel())
    return value


class CSVMeasurementCollector(MeasurementCollector):
    """Stream rows to a CSV file whose header holds the measurement descriptions.

    The file is opened on the first :meth:`measure` call; vector values are
    written as space-separated numbers in a single cell.
    """

    def __init__(self, path: str | Path, measurements: Iterable[Measurement] = ()) -> None:
        super().__init__(measurements)
        self.path = Path(path)
        self._handle: IO[str] | None = None
        self._writer: Any = None

    def _open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._handle)
        self._writer.writerow(self.get_descriptions())
        _logger().debug("Writing measurements to %s", self.path)

    def add(self, measurement: Measurement) -> None:
        if self._handle is not None:
            raise MeasurementError("Cannot add a measurement after the CSV header was written.")
        super().add(measurement)

    def _write(self, row: list[Any]) -> None:
        if self._handle is None:
            self._open()
        self._writer.writerow([_cell(value) for value in row])

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._writer = None


@contextmanager
def measurement_session(collector: C) -> Iterator[C]:
    """Yield ``collector`` and close it however the block exits."""
    try:
        yield collector
    finally:
        collector.close()


__all__ = [
    "MeasurementCollector",
    "InMemoryMeasurementCollector",
    "CSVMeasurementCollector",
    "measurement_session",
]
