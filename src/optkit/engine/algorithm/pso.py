"""Global-best particle swarm optimisation.

A small, single-objective PSO that satisfies the sub-optimizer protocol, so
it can drive a problem on its own or act as one population of a cooperative
run. Velocities are clamped to a fraction of each dimension's span and
positions are clipped to the domain after every move.

Reference:
    Kennedy, J. and Eberhart, R. (1995). Particle swarm optimization.
    Proceedings of ICNN'95, pp. 1942-1948.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from optkit.engine.algorithm.config import PSOConfigData
from optkit.foundation.exceptions import AlgorithmStateError
from optkit.foundation.fitness import Fitness

if TYPE_CHECKING:
    from optkit.foundation.problem.types import OptimisationProblem


__all__ = ["PSO", "ConstantAcceleration", "FIPSAcceleration", "build_acceleration"]


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class ConstantAcceleration:
    def __init__(self, acceleration: float) -> None:
        self.acceleration = float(acceleration)

    def get(self, rng: np.random.Generator) -> float:
        return self.acceleration


class FIPSAcceleration:
    """Acceleration rescaled by a fresh ``U(0, 1)`` draw on every use."""

    def __init__(self, acceleration: float = 1.0) -> None:
        self.acceleration = float(acceleration)

    def get(self, rng: np.random.Generator) -> float:
        return self.acceleration * float(rng.random())


def build_acceleration(kind: str, acceleration: float) -> Any:
    if kind == "fips":
        return FIPSAcceleration(acceleration)
    return ConstantAcceleration(acceleration)


class PSO:
    """Global-best particle swarm.

    Parameters
    ----------
    config : PSOConfigData
        Swarm settings (size, inertia, accelerations, velocity clamp, seed).
    problem : OptimisationProblem, optional
        Problem to search; can also be bound later with
        :meth:`set_optimisation_problem`.
    rng : np.random.Generator, optional
        Random generator; defaults to one seeded from ``config.seed``.

    Examples
    --------
    >>> from optkit.engine.algorithm.config import PSOConfig
    >>> pso = PSO(PSOConfig().pop_size(20).seed(1).fixed(), problem)
    >>> for _ in range(100):
    ...     pso.perform_iteration()
    >>> x, fitness = pso.get_best_solution()
    """

    def __init__(
        self,
        config: PSOConfigData,
        problem: "OptimisationProblem | None" = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.cfg = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.social = build_acceleration(config.acceleration, config.c2)
        self.cognitive = build_acceleration(config.acceleration, config.c1)
        self.iterations = 0
        self._problem: "OptimisationProblem | None" = None
        self._X: np.ndarray | None = None
        self._V: np.ndarray | None = None
        self._vmax: np.ndarray | None = None
        self._pbest_X: np.ndarray | None = None
        self._pbest_F: list[Fitness] = []
        self._best_idx = 0
        if problem is not None:
            self.set_optimisation_problem(problem)

    # -------------------------------------------------------------------------
    # Protocol
    # -------------------------------------------------------------------------

    def set_optimisation_problem(self, problem: "OptimisationProblem") -> None:
        """Bind a new problem; the swarm is re-created on the next step."""
        self._problem = problem
        self._X = None

    @property
    def optimisation_problem(self) -> "OptimisationProblem | None":
        return self._problem

    @property
    def initialised(self) -> bool:
        return self._X is not None

    def initialise(self) -> None:
        """Scatter the swarm uniformly over the domain and evaluate it."""
        if self._problem is None:
            raise AlgorithmStateError("initialise", "unbound (no optimisation problem)")
        domain = self._problem.domain
        self._X = domain.sample(self.rng, self.cfg.pop_size)
        self._V = np.zeros_like(self._X)
        self._vmax = self.cfg.vmax_fraction * (domain.upper - domain.lower)
        self._pbest_X = self._X.copy()
        self._pbest_F = [self._problem.evaluate(x) for x in self._X]
        self._best_idx = self._select_best()
        self.iterations = 0
        _logger().debug(
            "PSO initialised: %d particles over %d dimensions", self.cfg.pop_size, domain.dimension
        )

    def perform_iteration(self) -> None:
        if not self.initialised:
            self.initialise()
        assert self._problem is not None
        domain = self._problem.domain
        X, V = self._X, self._V
        gbest = self._pbest_X[self._best_idx]

        r1 = self.rng.random(size=X.shape)
        r2 = self.rng.random(size=X.shape)
        cognitive = self.cognitive.get(self.rng) * r1 * (self._pbest_X - X)
        social = self.social.get(self.rng) * r2 * (gbest - X)
        V = self.cfg.inertia * V + cognitive + social
        V = np.clip(V, -self._vmax, self._vmax)

        X = X + V
        np.clip(X, domain.lower, domain.upper, out=X)

        for i, x in enumerate(X):
            fitness = self._problem.evaluate(x)
            if fitness.is_better_than(self._pbest_F[i]):
                self._pbest_F[i] = fitness
                self._pbest_X[i] = x

        self._X, self._V = X, V
        self._best_idx = self._select_best()
        self.iterations += 1

    def get_best_solution(self) -> tuple[np.ndarray, Fitness]:
        if not self.initialised:
            raise AlgorithmStateError("report a best solution", "not initialised")
        return self._pbest_X[self._best_idx].copy(), self._pbest_F[self._best_idx]

    # -------------------------------------------------------------------------
    # Exposed state
    # -------------------------------------------------------------------------

    @property
    def positions(self) -> np.ndarray:
        if self._X is None:
            return np.empty((0, 0))
        return self._X.copy()

    @property
    def velocities(self) -> np.ndarray:
        if self._V is None:
            return np.empty((0, 0))
        return self._V.copy()

    def _select_best(self) -> int:
        best = 0
        for i in range(1, len(self._pbest_F)):
            if self._pbest_F[i].is_better_than(self._pbest_F[best]):
                best = i
        return best

    def __repr__(self) -> str:
        return f"PSO(pop_size={self.cfg.pop_size}, acceleration='{self.cfg.acceleration}')"
