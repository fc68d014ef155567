"""Merge configuration from CLI values, environment, a config file and defaults."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from discrete_powerlaw.exceptions import ConfigValidationError
from discrete_powerlaw.utils.logging import get_logger

log = get_logger(__name__, component="config")

Caster = Callable[[Any], Any]


def load_config_file(path: Path | str) -> Dict[str, Any]:
    """Read a YAML (``.yml``/``.yaml``) or JSON mapping."""
    path = Path(path)
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    text = path.read_text()
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            content = yaml.safe_load(text)
        else:
            content = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigValidationError(f"Could not parse config file {path}: {exc}") from exc
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping")
    return content


def _cast(key: str, value: Any, casters: Mapping[str, Caster]) -> Any:
    caster = casters.get(key)
    if caster is None or value is None:
        return value
    try:
        return caster(value)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"Invalid value for {key}: {value!r}") from exc


def load_config_with_precedence(
    config_path: Optional[Path | str],
    env_prefix: str,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Optional[Mapping[str, Caster]] = None,
) -> Dict[str, Any]:
    """Resolve every key in ``defaults``: CLI (when not None) > ENV > file > default.

    Environment variables are ``<env_prefix><KEY>`` in upper case. Keys in the
    file that are not in ``defaults`` are rejected.
    """
    casters = casters or {}
    merged: Dict[str, Any] = dict(defaults)

    if config_path is not None:
        file_values = load_config_file(config_path)
        unknown = set(file_values) - set(defaults)
        if unknown:
            raise ConfigValidationError(f"Unknown config keys in {config_path}: {sorted(unknown)}")
        for key, value in file_values.items():
            merged[key] = value

    for key in defaults:
        env_value = os.environ.get(f"{env_prefix}{key.upper()}")
        if env_value is not None and env_value != "":
            merged[key] = env_value

    for key, value in cli_values.items():
        if value is not None:
            merged[key] = value

    resolved = {key: _cast(key, value, casters) for key, value in merged.items()}
    log.debug("Resolved configuration", extra={"config_path": str(config_path) if config_path else None})
    return resolved


__all__ = ["load_config_file", "load_config_with_precedence"]
