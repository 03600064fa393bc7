"""Operating system detection.

Only the OS family matters here: it decides the name of the git executable.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "default_git_executable",
    "detect_platform",
    "is_windows",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self == Platform.WINDOWS else ""

    def exe_name(self, name: str) -> str:
        """Get executable name with platform-appropriate suffix.

        Example: exe_name("git") -> "git.exe" on Windows, "git" elsewhere.
        """
        return f"{name}{self.exe_suffix}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS


def default_git_executable() -> str:
    """Name of the git executable for the running platform."""
    return detect_platform().exe_name("git")
