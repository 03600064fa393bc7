"""Platform-aware user directories.

Locates the user-level config directory that holds `please/config.toml`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import is_windows

__all__ = [
    "clear_caches",
    "home",
    "user_config_dir",
]

APP_NAME = "please"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then falls back to Path.home().
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: ~/.config/please/ (Linux/macOS, or $XDG_CONFIG_HOME/please/)
    or %APPDATA%/please/ (Windows).
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def clear_caches() -> None:
    """Clear cached paths (tests change HOME / XDG_CONFIG_HOME)."""
    home.cache_clear()
    user_config_dir.cache_clear()
