"""
Configuration loader: reads bootstrap.yml into BootstrapSettings.

Resolution order for the file:
    --config flag  >  PB_CONFIG env var  >  bootstrap.yml found walking up from cwd

A missing file is not an error: every setting has a default.
A file that exists but cannot be parsed IS an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from ptero_bootstrap.core.errors import BootstrapError
from ptero_bootstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "bootstrap.yml"

# Env vars that override individual settings
_ENV_OVERRIDES = {
    "PB_GITHUB_SOURCE": "github_source",
    "PB_SCRIPT_RELEASE": "script_release",
}


class ConfigError(BootstrapError):
    """Raised when bootstrap configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for bootstrap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to bootstrap.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> BootstrapSettings:
    """Load and validate bootstrap settings.

    Args:
        path: Explicit path to bootstrap.yml. If None, uses PB_CONFIG
            or searches upward from cwd.

    Returns:
        Validated BootstrapSettings (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    explicit = path is not None
    if path is None and os.environ.get("PB_CONFIG"):
        path = Path(os.environ["PB_CONFIG"])
        explicit = True
    if path is None:
        path = find_config_file()

    data: dict = {}
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
    elif not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
    else:
        data = _read_yaml(path)

    for env_key, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            data[field_name] = value

    try:
        settings = BootstrapSettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid bootstrap configuration: {e}") from e

    logger.info(
        "Settings loaded (source=%s, release=%s)",
        settings.github_source, settings.script_release,
    )
    return settings


def _read_yaml(path: Path) -> dict:
    logger.debug("Loading bootstrap config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept either a flat file or everything under a "bootstrap" key
    if isinstance(data.get("bootstrap"), dict):
        data = data["bootstrap"]
    return dict(data)
