"""Cooperative coevolution configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from optkit.foundation.exceptions import InvalidStrategyError

from .base import _require_fields, _require_positive, _SerializableConfig

DISTRIBUTIONS = ("imperfect", "perfect")


@dataclass(frozen=True)
class CoevolutionConfigData(_SerializableConfig):
    populations: int
    distribution: str = "imperfect"
    max_iterations: Optional[int] = None
    max_workers: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        _require_positive(self.populations, "populations", "Coevolution")
        _require_positive(self.max_iterations, "max_iterations", "Coevolution")
        _require_positive(self.max_workers, "max_workers", "Coevolution")
        if self.distribution not in DISTRIBUTIONS:
            raise InvalidStrategyError(self.distribution, list(DISTRIBUTIONS))


class CoevolutionConfig:
    """Declarative configuration holder for cooperative coevolution runs."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def populations(self, value: int) -> "CoevolutionConfig":
        self._cfg["populations"] = value
        return self

    def distribution(self, value: str) -> "CoevolutionConfig":
        self._cfg["distribution"] = value
        return self

    def max_iterations(self, value: int) -> "CoevolutionConfig":
        self._cfg["max_iterations"] = value
        return self

    def max_workers(self, value: int) -> "CoevolutionConfig":
        self._cfg["max_workers"] = value
        return self

    def seed(self, value: int) -> "CoevolutionConfig":
        self._cfg["seed"] = value
        return self

    def fixed(self) -> CoevolutionConfigData:
        _require_fields(self._cfg, ("populations",), "Coevolution")
        return CoevolutionConfigData(
            populations=int(self._cfg["populations"]),
            distribution=str(self._cfg.get("distribution", "imperfect")).lower(),
            max_iterations=self._cfg.get("max_iterations"),
            max_workers=self._cfg.get("max_workers"),
            seed=self._cfg.get("seed"),
        )
