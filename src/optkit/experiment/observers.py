from __future__ import annotations

import logging
from typing import Any

from optkit.foundation.observer import Observer, RunContext

from .collector import MeasurementCollector


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class CollectorObserver(Observer):
    """
    Feed a measurement collector from run events.
    Samples the initial state on start and once after every round; the
    collector is closed when the run ends.
    """

    def __init__(self, collector: MeasurementCollector, *, close_on_end: bool = True) -> None:
        self.collector = collector
        self.close_on_end = close_on_end

    def on_start(self, ctx: RunContext) -> None:
        self.collector.measure(ctx.algorithm)

    def on_round(self, round_index: int, algorithm: Any) -> None:
        self.collector.measure(algorithm)

    def on_end(self, algorithm: Any, reason: str) -> None:
        if self.close_on_end:
            self.collector.close()


class ConsoleObserver(Observer):
    """
    Observer that logs run status to the console/log.
    Progress lines are emitted every ``every`` rounds.
    """

    def __init__(self, every: int = 10) -> None:
        self.every = max(1, int(every))

    def on_start(self, ctx: RunContext) -> None:
        _logger().info("%s", "=" * 80)
        _logger().info("Algorithm: %s", ctx.algorithm_name)
        domain = getattr(ctx.problem, "domain", None)
        _logger().info("Problem: %r", ctx.problem)
        if domain is not None:
            _logger().info("Decision variables: %s", domain.dimension)
        populations = getattr(ctx.algorithm, "populations", None)
        if populations is not None:
            _logger().info("Populations: %d", len(populations))
        _logger().info("%s", "-" * 80)

    def on_round(self, round_index: int, algorithm: Any) -> None:
        if round_index % self.every:
            return
        _, fitness = algorithm.get_best_solution()
        _logger().info("Round %d | best %s", round_index, fitness)

    def on_end(self, algorithm: Any, reason: str) -> None:
        try:
            _, fitness = algorithm.get_best_solution()
        except Exception:
            _logger().debug("No best solution available at end of run", exc_info=True)
            fitness = None
        _logger().info(
            "Stopped after %s rounds (%s) | best %s",
            getattr(algorithm, "iterations", "?"),
            reason,
            fitness if fitness is not None else "n/a",
        )


__all__ = ["CollectorObserver", "ConsoleObserver"]
