"""PSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from optkit.foundation.exceptions import ConfigurationError

from .base import _require_fields, _require_positive, _SerializableConfig

ACCELERATIONS = ("constant", "fips")


@dataclass(frozen=True)
class PSOConfigData(_SerializableConfig):
    pop_size: int
    inertia: float = 0.729844
    c1: float = 1.496180
    c2: float = 1.496180
    vmax_fraction: float = 0.5
    acceleration: str = "constant"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        _require_positive(self.pop_size, "pop_size", "PSO")
        _require_positive(self.vmax_fraction, "vmax_fraction", "PSO")
        if self.acceleration not in ACCELERATIONS:
            raise ConfigurationError(
                f"Unknown acceleration '{self.acceleration}' for PSO.",
                suggestion=f"Available accelerations: {', '.join(ACCELERATIONS)}",
            )


class PSOConfig:
    """Declarative configuration holder for PSO settings."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def pop_size(self, value: int) -> "PSOConfig":
        self._cfg["pop_size"] = value
        return self

    def inertia(self, value: float) -> "PSOConfig":
        self._cfg["inertia"] = value
        return self

    def c1(self, value: float) -> "PSOConfig":
        self._cfg["c1"] = value
        return self

    def c2(self, value: float) -> "PSOConfig":
        self._cfg["c2"] = value
        return self

    def vmax_fraction(self, value: float) -> "PSOConfig":
        self._cfg["vmax_fraction"] = value
        return self

    def acceleration(self, value: str) -> "PSOConfig":
        self._cfg["acceleration"] = value
        return self

    def seed(self, value: int) -> "PSOConfig":
        self._cfg["seed"] = value
        return self

    def fixed(self) -> PSOConfigData:
        _require_fields(self._cfg, ("pop_size",), "PSO")
        return PSOConfigData(
            pop_size=int(self._cfg["pop_size"]),
            inertia=float(self._cfg.get("inertia", 0.729844)),
            c1=float(self._cfg.get("c1", 1.496180)),
            c2=float(self._cfg.get("c2", 1.496180)),
            vmax_fraction=float(self._cfg.get("vmax_fraction", 0.5)),
            acceleration=str(self._cfg.get("acceleration", "constant")).lower(),
            seed=self._cfg.get("seed"),
        )
