"""Base utilities for algorithm configuration."""

from __future__ import annotations

import json
from dataclasses import MISSING, asdict, fields
from typing import Any, Dict, Mapping, Tuple, TypeVar

from optkit.foundation.exceptions import ConfigurationError, MissingConfigError

T = TypeVar("T", bound="_SerializableConfig")


class _SerializableConfig:
    """Mixin to serialize dataclass configs."""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls: type[T], data: Mapping[str, Any]) -> T:
        declared = fields(cls)  # type: ignore[arg-type]
        known = {f.name for f in declared}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"{cls.__name__} got unknown configuration fields: {', '.join(unknown)}",
                suggestion=f"Known fields: {', '.join(sorted(known))}",
            )
        for f in declared:
            if f.default is MISSING and f.default_factory is MISSING and f.name not in data:
                raise MissingConfigError(f.name, config_class=cls.__name__)
        return cls(**dict(data))


def _require_fields(cfg: Dict[str, Any], required: Tuple[str, ...], name: str) -> None:
    """Validate that required fields are present in configuration."""
    for field in required:
        if field not in cfg:
            raise MissingConfigError(field, config_class=f"{name}Config")


def _require_positive(value: Any, field: str, name: str) -> None:
    if value is not None and value <= 0:
        raise ConfigurationError(f"{name} configuration field '{field}' must be positive, got {value}.")
