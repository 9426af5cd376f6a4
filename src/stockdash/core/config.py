"""Configuration loading utilities."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

# tomllib is available in Python 3.11+, use tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from dotenv import load_dotenv

from stockdash.models.config import AppConfig


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Args:
        path: Path to the TOML file

    Returns:
        Dictionary with TOML contents

    Raises:
        FileNotFoundError: If file doesn't exist
        tomllib.TOMLDecodeError: If file is invalid TOML
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_app_config(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
) -> AppConfig:
    """Load application configuration.

    Environment variables (and a ``.env`` file, if present) are read first;
    values from an optional TOML file override them.

    Example TOML format:
        [perplexity]
        model = "sonar-pro"

        [feed]
        interval = 0.5

    Args:
        config_path: Optional TOML file with overrides
        env_file: Optional dotenv file (defaults to ./.env)

    Returns:
        AppConfig object
    """
    load_dotenv(dotenv_path=env_file)
    config = AppConfig()
    if config_path is None:
        return config

    overrides = load_toml(config_path)
    merged = config.model_dump()
    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return AppConfig(**merged)
