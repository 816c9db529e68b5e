"""Configuration loading for GoldJournal.

Settings live in a toml file at ``~/.config/goldjournal/config.toml``; the
``GOLDJOURNAL_CONFIG`` environment variable points somewhere else.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "goldjournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "goldjournal.db"

DEFAULT_CONFIG: dict[str, Any] = {
    "journal": {
        "db_path": str(DEFAULT_DB_PATH),
        "default_market": "GC",
    },
    "display": {
        "currency": "$",
    },
}


class ConfigError(Exception):
    """Raised when the config file exists but cannot be parsed."""


def get_config_path() -> Path:
    """Path of the active config file."""
    override = os.environ.get("GOLDJOURNAL_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration, filling gaps with defaults.

    Args:
        path: Config file to read. Defaults to ``get_config_path()``.

    Returns:
        Config dict. A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid toml.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return _merge(DEFAULT_CONFIG, {})

    try:
        loaded = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return _merge(DEFAULT_CONFIG, loaded)


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write the default configuration to disk and return its path."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_db_path(config: dict[str, Any]) -> Path:
    """Database location from config."""
    return Path(config.get("journal", {}).get("db_path", DEFAULT_DB_PATH)).expanduser()
