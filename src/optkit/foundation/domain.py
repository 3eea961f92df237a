"""
Continuous search domains.

A domain is the per-dimension box ``[lower_i, upper_i]`` a problem is defined
on. Domains can be written as strings in the compact notation used by the
benchmark suite, e.g. ``"R(-500, 500)^30"`` or ``"R(0, 1)^2,R(-5, 5)"``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np

from .exceptions import BoundsError

_COMPONENT = re.compile(
    r"^\s*R\s*\(\s*(?P<lo>[-+0-9.eE]+)\s*,\s*(?P<hi>[-+0-9.eE]+)\s*\)\s*(?:\^\s*(?P<n>\d+))?\s*$"
)


def _split_components(text: str) -> list[str]:
    # Commas also separate the bounds inside "R(lo, hi)", so only split at depth zero.
    parts: list[str] = []
    depth = 0
    current = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def _frozen(values: np.ndarray) -> np.ndarray:
    values = np.array(values, dtype=float)
    values.setflags(write=False)
    return values


@dataclass(frozen=True, eq=False)
class Domain:
    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self) -> None:
        lower = np.atleast_1d(np.asarray(self.lower, dtype=float))
        upper = np.atleast_1d(np.asarray(self.upper, dtype=float))
        if lower.size == 1 and upper.size > 1:
            lower = np.full(upper.shape, lower[0])
        if upper.size == 1 and lower.size > 1:
            upper = np.full(lower.shape, upper[0])
        if lower.ndim != 1 or lower.shape != upper.shape:
            raise BoundsError(
                f"Lower and upper bounds must be 1-D with equal length, got {lower.shape} and {upper.shape}."
            )
        if lower.size == 0:
            raise BoundsError("A domain needs at least one dimension.")
        if not (np.all(np.isfinite(lower)) and np.all(np.isfinite(upper))):
            raise BoundsError("Domain bounds must be finite.")
        if np.any(lower > upper):
            bad = int(np.argmax(lower > upper))
            raise BoundsError(f"Lower bound exceeds upper bound in dimension {bad}: {lower[bad]} > {upper[bad]}.")
        object.__setattr__(self, "lower", _frozen(lower))
        object.__setattr__(self, "upper", _frozen(upper))

    @classmethod
    def uniform(cls, lower: float, upper: float, dimension: int) -> "Domain":
        if dimension < 1:
            raise BoundsError(f"Domain dimension must be positive, got {dimension}.")
        return cls(np.full(dimension, lower, dtype=float), np.full(dimension, upper, dtype=float))

    @classmethod
    def parse(cls, text: str) -> "Domain":
        """Build a domain from its string form, e.g. ``"R(-5.12, 5.12)^30"``."""
        lower: list[float] = []
        upper: list[float] = []
        for component in _split_components(text):
            match = _COMPONENT.match(component)
            if match is None:
                raise BoundsError(f"Cannot parse domain component '{component.strip()}' in '{text}'.")
            count = int(match.group("n") or 1)
            if count < 1:
                raise BoundsError(f"Domain component '{component.strip()}' repeats zero times.")
            try:
                lo, hi = float(match.group("lo")), float(match.group("hi"))
            except ValueError as exc:
                raise BoundsError(f"Invalid bound in domain component '{component.strip()}'.") from exc
            lower.extend([lo] * count)
            upper.extend([hi] * count)
        return cls(np.asarray(lower), np.asarray(upper))

    @property
    def dimension(self) -> int:
        return int(self.lower.size)

    def span(self, index: int = 0) -> float:
        return float(abs(self.upper[index] - self.lower[index]))

    def subdomain(self, offset: int, length: int) -> "Domain":
        if offset < 0 or length < 1 or offset + length > self.dimension:
            raise BoundsError(
                f"Slice [{offset}, {offset + length}) lies outside a domain of dimension {self.dimension}."
            )
        return Domain(self.lower[offset : offset + length], self.upper[offset : offset + length])

    def contains(self, x: np.ndarray) -> bool:
        x = np.asarray(x, dtype=float)
        if x.shape != self.lower.shape:
            return False
        return bool(np.all(x >= self.lower) and np.all(x <= self.upper))

    def clip(self, x: np.ndarray) -> np.ndarray:
        return np.clip(x, self.lower, self.upper)

    def sample(self, rng: np.random.Generator, n: int | None = None) -> np.ndarray:
        size = self.dimension if n is None else (n, self.dimension)
        return rng.uniform(self.lower, self.upper, size=size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return bool(np.array_equal(self.lower, other.lower) and np.array_equal(self.upper, other.upper))

    def __hash__(self) -> int:
        return hash((self.lower.tobytes(), self.upper.tobytes()))

    def __str__(self) -> str:
        parts = []
        for lo, hi in zip(self.lower, self.upper):
            token = f"R({lo:g}, {hi:g})"
            if parts and parts[-1][0] == token:
                parts[-1][1] += 1
            else:
                parts.append([token, 1])
        return ",".join(token if count == 1 else f"{token}^{count}" for token, count in parts)


__all__ = ["Domain"]
