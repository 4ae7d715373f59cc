"""
Settings loader — reads the optional proxylaunch settings file.

It reads YAML, validates against the pydantic ``Settings`` schema and
returns a typed object.  The file is never written; without one the
built-in defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from proxylaunch.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default settings filename under the XDG config directory
SETTINGS_FILE = "config.yml"

# Env var pointing at a settings file
ENV_CONFIG = "PXL_CONFIG"


class ConfigError(Exception):
    """Raised when the settings file is invalid or an explicit one is missing."""


def default_settings_path() -> Path | None:
    """Where the settings file lives when none is given explicitly.

    ``$PXL_CONFIG`` wins, then ``$XDG_CONFIG_HOME/proxylaunch/config.yml``,
    then ``~/.config/proxylaunch/config.yml``.  Returns None when no home
    directory can be determined and neither variable is set.
    """
    env = os.environ.get(ENV_CONFIG)
    if env:
        return Path(env).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "proxylaunch" / SETTINGS_FILE

    try:
        return Path.home() / ".config" / "proxylaunch" / SETTINGS_FILE
    except (RuntimeError, KeyError):
        return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file.  If None, the default location is
            used and a missing file simply means defaults.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is
            unreadable or invalid.
    """
    explicit = path is not None
    if path is None:
        path = default_settings_path()

    if path is None or not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No settings file, using defaults")
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info(
        "Loaded settings: placeholder '%s' (%d), %d extra root(s)",
        settings.placeholder.name,
        settings.placeholder.app_id,
        len(settings.extra_roots),
    )
    return settings
