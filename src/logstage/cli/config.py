"""Configuration utilities for the logstage CLI.

This module loads an optional JSON configuration file and merges it with
command-line overrides into a TransferConfig.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

from logstage.core.config import TransferConfig


class ConfigError(Exception):
    """Configuration file could not be used."""


def config_keys() -> set[str]:
    """Get the keys accepted in a configuration file."""
    return {f.name for f in fields(TransferConfig)}


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration values from a JSON file.

    Args:
        path: JSON file holding an object.

    Returns:
        Configuration values keyed by TransferConfig field name.

    Raises:
        ConfigError: If the file is unreadable, not a JSON object, or has
            unknown keys.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    unknown = sorted(set(data) - config_keys())
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return data


def build_config(values: dict[str, Any], **overrides: Any) -> TransferConfig:
    """Build a TransferConfig from file values and CLI overrides.

    Overrides set to None are ignored so file values survive.

    Raises:
        ConfigError: If a value is out of range.
    """
    merged = dict(values)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    if "temp_dir" in merged and merged["temp_dir"] is not None:
        merged["temp_dir"] = Path(merged["temp_dir"])
    try:
        return TransferConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
