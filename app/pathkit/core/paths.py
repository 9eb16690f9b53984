"""Locations of pathkit's own files.

Everything lives in one XDG config directory, ``$XDG_CONFIG_HOME/pathkit``
or ``~/.config/pathkit`` when the variable is unset or empty.
"""

import os
from pathlib import Path

APP_NAME = "pathkit"

SETTINGS_FILE = "config.toml"
THEME_FILE = "theme.toml"


def get_config_dir() -> Path:
    """Return the pathkit config directory (it may not exist yet)."""
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / APP_NAME


def _config_file(name: str) -> Path:
    return get_config_dir() / name


def get_settings_path() -> Path:
    return _config_file(SETTINGS_FILE)


def get_user_theme_path() -> Path:
    return _config_file(THEME_FILE)


def ensure_config_dir() -> Path:
    """Create the config directory and its parents.

    Returns:
        The config directory.

    Raises:
        RuntimeError: If it cannot be created.
    """
    config_dir = get_config_dir()
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {config_dir}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {config_dir}: {e}"
        raise RuntimeError(msg) from e
    return config_dir
