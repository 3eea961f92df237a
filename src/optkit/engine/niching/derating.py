from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

from optkit.foundation.exceptions import ConfigurationError


@runtime_checkable
class DeratingFunction(Protocol):
    """Scale factor applied to a raw fitness near an already-found solution.

    Called with a normalised distance ``d`` (``0 <= d < radius``); returns the
    multiplier for the raw fitness. Never called at or beyond the radius.
    """

    radius: float

    def __call__(self, distance: float) -> float: ...


def _check_radius(radius: float) -> float:
    radius = float(radius)
    if not radius > 0.0:
        raise ConfigurationError(f"Derating radius must be positive, got {radius}.")
    return radius


class MaximumDeratingFunction:
    """Power-law derating ``(d / radius) ** alpha``; 1 outside the radius."""

    def __init__(self, radius: float = 0.25, alpha: float = 2.0) -> None:
        self.radius = _check_radius(radius)
        if alpha <= 0.0:
            raise ConfigurationError(f"Derating exponent must be positive, got {alpha}.")
        self.alpha = float(alpha)

    def __call__(self, distance: float) -> float:
        if distance < self.radius:
            return (distance / self.radius) ** self.alpha
        return 1.0

    def __repr__(self) -> str:
        return f"MaximumDeratingFunction(radius={self.radius:g}, alpha={self.alpha:g})"


class ExponentialDeratingFunction:
    """Exponential derating; ``strength`` is the multiplier at distance 0."""

    def __init__(self, radius: float = 0.25, strength: float = 0.1) -> None:
        self.radius = _check_radius(radius)
        if not 0.0 < strength < 1.0:
            raise ConfigurationError(f"Derating strength must lie in (0, 1), got {strength}.")
        self.strength = float(strength)

    def __call__(self, distance: float) -> float:
        if distance < self.radius:
            return math.exp(math.log(self.strength) * (self.radius - distance) / self.radius)
        return 1.0

    def __repr__(self) -> str:
        return f"ExponentialDeratingFunction(radius={self.radius:g}, strength={self.strength:g})"


__all__ = ["DeratingFunction", "MaximumDeratingFunction", "ExponentialDeratingFunction"]
