"""
Experiment layer: measurements, collectors and run observers.
"""

from .collector import (
    CSVMeasurementCollector,
    InMemoryMeasurementCollector,
    MeasurementCollector,
    measurement_session,
)
from .measurements import (
    BestFitness,
    BestSolution,
    ContextVectorSnapshot,
    Diversity,
    Iterations,
    Measurement,
)
from .observers import CollectorObserver, ConsoleObserver

__all__ = [
    "Measurement",
    "Iterations",
    "BestFitness",
    "BestSolution",
    "Diversity",
    "ContextVectorSnapshot",
    "MeasurementCollector",
    "InMemoryMeasurementCollector",
    "CSVMeasurementCollector",
    "measurement_session",
    "CollectorObserver",
    "ConsoleObserver",
]
