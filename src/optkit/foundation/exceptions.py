"""
optkit exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All optkit-specific exceptions inherit from OptkitError for easy catching.

Example:
    try:
        result = coordinator.run()
    except OptkitError as e:
        print(f"Run failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class OptkitError(Exception):
    """
    Base exception for all optkit errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(OptkitError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InsufficientPopulationsError(ConfigurationError):
    """Raised when a cooperative run is given fewer than two sub-optimizers."""

    def __init__(self, count: int) -> None:
        message = (
            f"Cooperative coevolution needs at least two cooperating populations, got {count}."
        )
        suggestion = "Pass two or more sub-optimizers to the distribution strategy"
        super().__init__(message, suggestion, {"populations": count})


class DimensionMismatchError(ConfigurationError):
    """Raised when a vector does not match the length of its dimension allocation."""

    def __init__(self, expected: int, actual: int, what: str = "partial solution") -> None:
        message = f"Expected a {what} of length {expected}, got length {actual}."
        suggestion = "Make sure the sub-optimizer searches the domain of its bound adapter"
        super().__init__(message, suggestion, {"expected": expected, "actual": actual})


class IndivisibleDimensionError(ConfigurationError):
    """Raised when an equal split is requested for a dimension that does not divide evenly."""

    def __init__(self, dimension: int, populations: int) -> None:
        message = (
            f"Cannot split {dimension} dimensions equally between {populations} populations."
        )
        suggestion = "Use the 'imperfect' distribution strategy or change the number of populations"
        super().__init__(message, suggestion, {"dimension": dimension, "populations": populations})


class InvalidStrategyError(ConfigurationError):
    """Raised when an unknown distribution strategy is specified."""

    def __init__(self, strategy: str, available: list[str] | None = None) -> None:
        available = available or ["imperfect", "perfect"]
        message = f"Unknown distribution strategy '{strategy}'."
        suggestion = f"Available strategies: {', '.join(available)}"
        super().__init__(message, suggestion, {"strategy": strategy, "available": available})


class InvalidFunctionError(ConfigurationError):
    """Raised when an unknown benchmark function is specified."""

    def __init__(self, function: str, available: list[str] | None = None) -> None:
        message = f"Unknown function '{function}'."
        if available:
            suggestion = f"Available functions: {', '.join(available)}"
        else:
            suggestion = "Use available_functions() to see registered functions."
        super().__init__(message, suggestion, {"function": function})


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or set it on {config_class} before calling fixed()"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(OptkitError):
    """Base class for problem-related errors."""

    pass


class ProblemDimensionError(ProblemError):
    """Raised when a candidate or context does not have the problem's dimensionality."""

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        suggestion = "Check that candidates and context vectors have the problem's dimension"
        super().__init__(message, suggestion, {"expected": expected, "actual": actual})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure lower <= upper for every dimension and bounds have matching shapes"
        super().__init__(message, suggestion)


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(OptkitError):
    """Raised when optimization fails during execution."""

    pass


class EvaluationError(OptimizationError):
    """Raised when objective evaluation fails.

    ``sub_optimizer`` is the position of the offending population inside a
    cooperative run, or ``None`` outside of one.
    """

    def __init__(
        self,
        message: str,
        solution: Any = None,
        sub_optimizer: int | None = None,
    ) -> None:
        self.sub_optimizer = sub_optimizer
        suggestion = "Check your problem's evaluate() function for errors"
        super().__init__(message, suggestion, {"solution": solution, "sub_optimizer": sub_optimizer})


class IncomparableFitnessError(OptimizationError):
    """Raised when fitness values with different directions are compared."""

    def __init__(self, left: str, right: str) -> None:
        message = f"Cannot compare a {left} fitness with a {right} fitness."
        suggestion = "Only compare fitness values produced by problems with the same direction"
        super().__init__(message, suggestion, {"left": left, "right": right})


class AlgorithmStateError(OptimizationError):
    """Raised when an operation is not valid in the algorithm's current state."""

    def __init__(self, operation: str, state: str) -> None:
        message = f"Cannot {operation} while the algorithm is {state}."
        suggestion = "Create a new algorithm instance or call initialise() first"
        super().__init__(message, suggestion, {"operation": operation, "state": state})


# =============================================================================
# Data/IO Errors
# =============================================================================


class DataError(OptkitError):
    """Base class for data-related errors."""

    pass


class MeasurementError(DataError):
    """Raised when a measurement collector is used after it was released."""

    def __init__(self, message: str) -> None:
        suggestion = "Open a new collector; released collectors cannot record samples"
        super().__init__(message, suggestion)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "OptkitError",
    # Configuration
    "ConfigurationError",
    "InsufficientPopulationsError",
    "DimensionMismatchError",
    "IndivisibleDimensionError",
    "InvalidStrategyError",
    "InvalidFunctionError",
    "MissingConfigError",
    # Problem
    "ProblemError",
    "ProblemDimensionError",
    "BoundsError",
    # Runtime
    "OptimizationError",
    "EvaluationError",
    "IncomparableFitnessError",
    "AlgorithmStateError",
    # Data/IO
    "DataError",
    "MeasurementError",
]
