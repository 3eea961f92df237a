"""
Config loading utilities for programmatic entrypoints.

A config file holds one mapping per section, for example::

    coevolution:
      populations: 3
      distribution: imperfect
      max_iterations: 200
    pso:
      pop_size: 20
      acceleration: fips
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from optkit.engine.algorithm.config import CoevolutionConfigData, PSOConfigData
from optkit.foundation.exceptions import ConfigurationError

SECTIONS = {
    "coevolution": CoevolutionConfigData,
    "pso": PSOConfigData,
}


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON configuration file into a plain dictionary.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' does not exist.")
    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("YAML config requested but PyYAML is not installed. Install with 'pip install optkit[yaml]'.") from exc
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    else:
        with config_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{config_path}' must contain a mapping at the top level.")
    return data


def load_configs(path: str | Path) -> Dict[str, Any]:
    """
    Load a config file and build the frozen config data for every known section.

    Unknown sections are rejected so that typos do not silently fall back to defaults.
    """
    raw = load_config_file(path)
    unknown = sorted(set(raw) - set(SECTIONS))
    if unknown:
        raise ConfigurationError(
            f"Unknown config sections: {', '.join(unknown)}",
            suggestion=f"Known sections: {', '.join(sorted(SECTIONS))}",
        )
    return {name: SECTIONS[name].from_dict(section or {}) for name, section in raw.items()}


__all__ = ["load_config_file", "load_configs"]
