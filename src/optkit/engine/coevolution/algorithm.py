"""Cooperative coevolution coordinator.

Reference:
    Potter, M. A. and De Jong, K. A. (1994). A cooperative coevolutionary
    approach to function optimization. PPSN III, pp. 249-257.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

import numpy as np

from optkit.foundation.exceptions import (
    AlgorithmStateError,
    ConfigurationError,
    DimensionMismatchError,
    EvaluationError,
    InsufficientPopulationsError,
)
from optkit.foundation.fitness import Fitness
from optkit.foundation.observer import Observer, RunContext
from optkit.foundation.problem.types import OptimisationProblem
from optkit.engine.algorithm.protocol import PopulationBasedAlgorithm
from optkit.engine.algorithm.termination import MaximumIterations, StoppingCondition, first_met

from .allocation import DimensionAllocation
from .context import ContextVector
from .distribution import ProblemDistributionStrategy, get_distribution_strategy


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class CoevolutionState(str, Enum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    CONVERGED = "converged"
    TERMINATED = "terminated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CoevolutionResult:
    """Outcome of :meth:`CooperativeCoevolutionAlgorithm.run`."""

    solution: np.ndarray
    fitness: Fitness
    rounds: int
    state: CoevolutionState
    reason: str


class CooperativeCoevolutionAlgorithm:
    """Optimise one problem with several populations, each owning a slice of the dimensions.

    Every round steps each population once against a frozen snapshot of the
    context vector, then writes every population's best partial solution back
    in a single barrier update. A round either completes as a whole or fails
    as a whole; a failed round leaves the context vector as it was.

    Parameters
    ----------
    populations : sequence of PopulationBasedAlgorithm
        At least two sub-optimizers. They are rebound to adapters during
        :meth:`initialise`.
    problem : OptimisationProblem
        The full problem.
    distribution : str or ProblemDistributionStrategy
        ``"imperfect"`` (default), ``"perfect"`` or a strategy instance.
    stopping_conditions : sequence of StoppingCondition, optional
        Checked after every round; :meth:`run` needs at least one.
    max_workers : int, optional
        Step populations on a thread pool of this size; ``None`` or ``1``
        steps them one after another.
    context_seed : array-like, optional
        Initial context vector; defaults to a uniform sample of the domain.
    seed : int, optional
        Seed for the default context sample.
    observers : sequence of Observer, optional
        Notified at round boundaries only.
    """

    def __init__(
        self,
        populations: Sequence[PopulationBasedAlgorithm],
        problem: OptimisationProblem,
        *,
        distribution: str | ProblemDistributionStrategy = "imperfect",
        stopping_conditions: Sequence[StoppingCondition] = (),
        max_workers: int | None = None,
        context_seed: np.ndarray | None = None,
        seed: int | None = None,
        observers: Sequence[Observer] = (),
    ) -> None:
        if len(populations) < 2:
            raise InsufficientPopulationsError(len(populations))
        self.populations = list(populations)
        self.problem = problem
        self.distribution = (
            get_distribution_strategy(distribution) if isinstance(distribution, str) else distribution
        )
        self.stopping_conditions = list(stopping_conditions)
        self.max_workers = max_workers
        self.observers = list(observers)
        self.rng = np.random.default_rng(seed)
        self._context_seed = context_seed
        self.iterations = 0
        self.state = CoevolutionState.INITIALIZING
        self.context: ContextVector | None = None
        self.allocations: list[DimensionAllocation] = []
        self._best: tuple[np.ndarray, Fitness] | None = None
        self._cancelled = False
        self._initialised = False
        self._pool: ThreadPoolExecutor | None = None

    @classmethod
    def from_config(
        cls,
        config: Any,
        populations: Sequence[PopulationBasedAlgorithm],
        problem: OptimisationProblem,
        **kwargs: Any,
    ) -> "CooperativeCoevolutionAlgorithm":
        """Build from a :class:`CoevolutionConfigData`; ``max_iterations`` becomes a stopping condition."""
        if len(populations) != config.populations:
            raise ConfigurationError(
                f"Config expects {config.populations} populations, got {len(populations)}."
            )
        conditions = list(kwargs.pop("stopping_conditions", ()))
        if config.max_iterations is not None:
            conditions.append(MaximumIterations(config.max_iterations))
        return cls(
            populations,
            problem,
            distribution=config.distribution,
            stopping_conditions=conditions,
            max_workers=config.max_workers,
            seed=config.seed,
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialise(self) -> None:
        """Distribute the problem, seed the context vector and let every population initialise."""
        if self.state is not CoevolutionState.INITIALIZING:
            raise AlgorithmStateError("initialise", str(self.state))
        domain = self.problem.domain
        if self._context_seed is not None:
            seed = np.asarray(self._context_seed, dtype=float)
        else:
            seed = domain.sample(self.rng)
        self.context = ContextVector(seed)
        self.allocations = self.distribution.distribute(self.populations, self.problem, self.context)
        for index, population in enumerate(self.populations):
            init = getattr(population, "initialise", None)
            if callable(init):
                self._guarded(index, init)
        self._barrier()
        self._initialised = True
        _logger().debug(
            "Initialised %d populations over %d dimensions", len(self.populations), domain.dimension
        )

    def perform_iteration(self) -> None:
        """Run one round: step every population, then update the context vector."""
        if self.state in (CoevolutionState.CONVERGED, CoevolutionState.TERMINATED):
            raise AlgorithmStateError("perform a round", str(self.state))
        if not self._initialised:
            self.initialise()
        self.state = CoevolutionState.RUNNING
        if self._parallel:
            self._step_parallel()
        else:
            for index, population in enumerate(self.populations):
                self._guarded(index, population.perform_iteration)
        self._barrier()
        self.iterations += 1
        _logger().debug("Round %d done, best %s", self.iterations, self._best[1] if self._best else "n/a")

    def run(self) -> CoevolutionResult:
        """Loop rounds until a stopping condition holds or :meth:`cancel` is called.

        Observers always receive ``on_end``, also when the run fails; a failed
        run ends in ``TERMINATED``.
        """
        if not self.stopping_conditions:
            raise AlgorithmStateError("run without stopping conditions", str(self.state))
        if not self._initialised:
            self.initialise()
        ctx = RunContext(
            problem=self.problem,
            algorithm=self,
            algorithm_name=type(self).__name__,
        )
        _logger().info(
            "Cooperative run started: %d populations, %s",
            len(self.populations),
            type(self.distribution).__name__,
        )
        reason = ""
        try:
            if self._parallel:
                self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="optkit-cc")
            for observer in self.observers:
                observer.on_start(ctx)
            while True:
                if self._cancelled:
                    self.state = CoevolutionState.TERMINATED
                    reason = "cancelled"
                    break
                self.perform_iteration()
                for observer in self.observers:
                    observer.on_round(self.iterations, self)
                condition = first_met(self.stopping_conditions, self)
                if condition is not None:
                    converged = condition.converged
                    self.state = CoevolutionState.CONVERGED if converged else CoevolutionState.TERMINATED
                    reason = repr(condition)
                    break
        except BaseException as exc:
            self.state = CoevolutionState.TERMINATED
            if isinstance(exc, EvaluationError) and exc.sub_optimizer is not None:
                reason = f"evaluation failed in sub-optimizer {exc.sub_optimizer}"
            else:
                reason = f"failed: {type(exc).__name__}"
            _logger().info("Cooperative run aborted after %d rounds: %s", self.iterations, reason)
            self._notify_end(reason)
            raise
        finally:
            self._shutdown_pool()

        _logger().info("Cooperative run stopped after %d rounds (%s): %s", self.iterations, self.state, reason)
        self._notify_end(reason)
        solution, fitness = self.get_best_solution()
        return CoevolutionResult(solution, fitness, self.iterations, self.state, reason)

    def cancel(self) -> None:
        """Request a stop; honoured at the next round boundary."""
        self._cancelled = True

    def close(self) -> None:
        """Release the worker pool held for parallel rounds."""
        self._shutdown_pool()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_best_solution(self) -> tuple[np.ndarray, Fitness]:
        """The context vector and its fitness on the full problem."""
        if self._best is None:
            raise AlgorithmStateError("read the best solution", str(self.state))
        solution, fitness = self._best
        return solution.copy(), fitness

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def _parallel(self) -> bool:
        return self.max_workers is not None and self.max_workers > 1

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _fail(self, index: int, exc: BaseException) -> EvaluationError:
        self.state = CoevolutionState.TERMINATED
        _logger().error("Sub-optimizer %d failed: %s", index, exc)
        return EvaluationError(
            f"Sub-optimizer {index} failed during round {self.iterations + 1}: {exc}",
            sub_optimizer=index,
        )

    def _guarded(self, index: int, step: Any) -> None:
        try:
            step()
        except Exception as exc:
            raise self._fail(index, exc) from exc

    def _notify_end(self, reason: str) -> None:
        for observer in self.observers:
            observer.on_end(self, reason)

    def _shutdown_pool(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def _step_parallel(self) -> None:
        # Outside run() rounds are driven one at a time; open the pool lazily.
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="optkit-cc")
        futures = [self._pool.submit(population.perform_iteration) for population in self.populations]
        errors = [(index, future.exception()) for index, future in enumerate(futures)]
        for index, exc in errors:
            if exc is not None:
                raise self._fail(index, exc) from exc

    def _barrier(self) -> None:
        """Write every population's best partial solution, then evaluate the composite."""
        updates = []
        for index, (population, allocation) in enumerate(zip(self.populations, self.allocations)):
            try:
                partial, _ = population.get_best_solution()
                partial = np.asarray(partial, dtype=float)
                if partial.shape != (allocation.length,):
                    raise DimensionMismatchError(allocation.length, partial.size)
            except Exception as exc:
                raise self._fail(index, exc) from exc
            updates.append((allocation, partial))
        assert self.context is not None
        self.context.apply(updates)
        composite = np.array(self.context.snapshot())
        try:
            fitness = self.problem.evaluate(composite)
        except Exception as exc:
            self.state = CoevolutionState.TERMINATED
            raise EvaluationError(f"Evaluating the context vector failed: {exc}", solution=composite) from exc
        self._best = (composite, fitness)

    def __repr__(self) -> str:
        return (
            f"CooperativeCoevolutionAlgorithm(populations={len(self.populations)}, "
            f"state={self.state}, rounds={self.iterations})"
        )


__all__ = ["CoevolutionState", "CoevolutionResult", "CooperativeCoevolutionAlgorithm"]
