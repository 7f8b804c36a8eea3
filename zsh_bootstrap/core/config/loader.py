"""
Configuration loader — reads the optional settings YAML into Settings.

Lookup order for the settings file:
    explicit path (--config)  >  $ZSH_BOOTSTRAP_CONFIG  >
    ~/.config/zsh-bootstrap/config.yml (only if present)

No file at all is fine: the defaults reproduce the stock installer.
``$ZSH_CUSTOM`` overrides the custom directory unless the file sets it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from zsh_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ZSH_BOOTSTRAP_CONFIG"
DEFAULT_CONFIG_SUBPATH = Path(".config") / "zsh-bootstrap" / "config.yml"


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


def find_config_file(home: Path | None = None) -> Path | None:
    """Locate the settings file, or None when the defaults apply."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()

    candidate = (home or Path.home()) / DEFAULT_CONFIG_SUBPATH
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None = None, home: Path | None = None) -> Settings:
    """Load and validate installer settings.

    Args:
        path: Explicit settings file. If None, see ``find_config_file``.
        home: Home directory override (tests point this at tmp_path).

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If an explicit or env-selected file is missing,
            is not valid YAML, or fails validation.
    """
    if path is None:
        path = find_config_file(home)

    data: dict = {}
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        logger.debug("Loading settings from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Expected a YAML mapping in {path}, got {type(loaded).__name__}"
            )
        data = loaded

    if home is not None and "home" not in data:
        data["home"] = home

    zsh_custom = os.environ.get("ZSH_CUSTOM")
    if zsh_custom and "zsh_custom" not in data:
        data["zsh_custom"] = Path(zsh_custom).expanduser()

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    logger.info(
        "Settings: %d plugins, %d external, zshrc=%s",
        len(settings.plugins), len(settings.plugin_sources), settings.zshrc_path,
    )
    return settings
