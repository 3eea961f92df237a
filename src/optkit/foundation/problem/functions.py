"""
Benchmark objective functions.

Every function is a plain callable over a 1-D candidate together with the
default domain it is usually studied on. Problems wrap functions (see
:mod:`optkit.foundation.problem.base`); functions themselves know nothing
about optimisation direction.
"""

from __future__ import annotations

import math

import numpy as np

from optkit.foundation.domain import Domain
from optkit.foundation.exceptions import InvalidFunctionError


class ContinuousFunction:
    """Base class for real-valued benchmark functions.

    Subclasses set ``default_domain`` and implement :meth:`evaluate`. The
    dimensionality follows the domain, so ``Spherical(dimension=10)`` and
    ``Spherical(domain="R(-1, 1)^10")`` are both valid.
    """

    name: str = "function"
    default_domain: str = "R(-1, 1)^30"

    def __init__(self, domain: Domain | str | None = None, *, dimension: int | None = None) -> None:
        if domain is None:
            domain = Domain.parse(self.default_domain)
            if dimension is not None:
                domain = Domain.uniform(float(domain.lower[0]), float(domain.upper[0]), dimension)
        elif isinstance(domain, str):
            domain = Domain.parse(domain)
        self.domain = domain

    @property
    def dimension(self) -> int:
        return self.domain.dimension

    @property
    def minimum(self) -> float | None:
        """Known global minimum value, if there is one."""
        return None

    @property
    def maximum(self) -> float | None:
        """Known global maximum value, if there is one."""
        return None

    def evaluate(self, x: np.ndarray) -> float:
        raise NotImplementedError(f"{type(self).__name__} must implement evaluate(self, x).")

    def __call__(self, x: np.ndarray) -> float:
        return float(self.evaluate(np.asarray(x, dtype=float)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain='{self.domain}')"


class Spherical(ContinuousFunction):
    name = "spherical"
    default_domain = "R(-5.12, 5.12)^30"

    @property
    def minimum(self) -> float:
        return 0.0

    def evaluate(self, x: np.ndarray) -> float:
        return float(np.dot(x, x))


class HyperEllipsoid(ContinuousFunction):
    """Axis-parallel hyper-ellipsoid: ``sum((i + 1)^2 * x_i^2)``."""

    name = "hyperellipsoid"
    default_domain = "R(-1, 1)^30"

    @property
    def minimum(self) -> float:
        return 0.0

    def evaluate(self, x: np.ndarray) -> float:
        weights = np.arange(1, x.size + 1, dtype=float) ** 2
        return float(np.sum(weights * x * x))


SCHWEFEL_CONSTANT = 418.9828872724338


class Schwefel(ContinuousFunction):
    """Schwefel's function, shifted so that it is non-negative on its domain.

    ``f(x) = 418.98289 n + sum(x_i sin(sqrt(|x_i|)))``; the minimum lies at
    ``x_i = -420.9687``.
    """

    name = "schwefel"
    default_domain = "R(-500, 500)^30"

    @property
    def minimum(self) -> float:
        return 0.0

    def evaluate(self, x: np.ndarray) -> float:
        return float(SCHWEFEL_CONSTANT * x.size + np.sum(x * np.sin(np.sqrt(np.abs(x)))))


class EqualMaxima(ContinuousFunction):
    """``sin^6(5 pi x)`` averaged over the dimensions.

    Five equally tall peaks (value 1) per dimension at ``x = 0.1, 0.3, ...,
    0.9``; the usual test landscape for sequential niching.
    """

    name = "equal_maxima"
    default_domain = "R(0, 1)^1"

    @property
    def maximum(self) -> float:
        return 1.0

    def evaluate(self, x: np.ndarray) -> float:
        return float(np.mean(np.sin(5.0 * math.pi * x) ** 6))


FUNCTIONS: dict[str, type[ContinuousFunction]] = {
    cls.name: cls for cls in (Spherical, HyperEllipsoid, Schwefel, EqualMaxima)
}


def available_functions() -> list[str]:
    return sorted(FUNCTIONS)


def get_function(name: str, **kwargs) -> ContinuousFunction:
    cls = FUNCTIONS.get(name.lower())
    if cls is None:
        raise InvalidFunctionError(name, available_functions())
    return cls(**kwargs)


__all__ = [
    "ContinuousFunction",
    "Spherical",
    "HyperEllipsoid",
    "Schwefel",
    "EqualMaxima",
    "FUNCTIONS",
    "available_functions",
    "get_function",
]
