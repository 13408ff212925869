"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"
_CONFIG_ENV = "SUDOKU_CONFIG"

_LOGGER = logging.getLogger(__name__)

# Environment variables that take precedence over values from the TOML file.
_ENV_OVERRIDES = {
    "SUDOKU_TRACE_LEVEL": "solver.trace_level",
    "SUDOKU_LOG_DIR": "log.dir",
}


def _config_path() -> Path:
    override = os.environ.get(_CONFIG_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary.

    A missing file yields an empty mapping so callers fall back to their
    built-in defaults.
    """
    path = _config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        _LOGGER.debug("Configuration file %s not found; using defaults", path)
        return {}


def reload() -> None:
    """Clear the cached configuration."""

    get_config.cache_clear()


def get_section(path: str, default: Any = None) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


def get_setting(path: str, default: Any = None, env: Mapping[str, str] | None = None) -> Any:
    """Resolve ``path`` with precedence environment > TOML > ``default``."""

    env_map = os.environ if env is None else env
    for key, target in _ENV_OVERRIDES.items():
        if target == path:
            value = env_map.get(key)
            if value is not None and value.strip():
                return value.strip()
    return get_section(path, default)


__all__ = ["get_config", "get_section", "get_setting", "reload"]
