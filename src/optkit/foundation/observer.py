from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass
class RunContext:
    """
    Encapsulates the static context of an optimization run.
    Passed to on_start events.
    """

    problem: Any  # Problem instance
    algorithm: Any  # Algorithm instance driving the run
    config: Any = None  # Frozen config data, if the run was configured from one
    algorithm_name: str = "unknown"


@runtime_checkable
class Observer(Protocol):
    """
    Observer interface for run lifecycle events.
    Events are only emitted at round boundaries, never while a round is in progress.
    """

    def on_start(self, ctx: RunContext) -> None:
        """Called once, after initialisation and before the first round."""
        ...

    def on_round(self, round_index: int, algorithm: Any) -> None:
        """Called after every completed round (the context vector is already updated)."""
        ...

    def on_end(self, algorithm: Any, reason: str) -> None:
        """Called once when the run stops, with a short reason."""
        ...


__all__ = ["RunContext", "Observer"]
