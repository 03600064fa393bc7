"""Platform abstraction layer."""

from .detection import (
    Platform,
    default_git_executable,
    detect_platform,
    is_windows,
)
from .paths import (
    home,
    user_config_dir,
)
from .process import (
    CommandFailed,
    CommandResult,
    CommandSucceeded,
    CommandTerminated,
    ProcessLaunchError,
    run,
)

__all__ = [
    # detection
    "Platform",
    "default_git_executable",
    "detect_platform",
    "is_windows",
    # paths
    "home",
    "user_config_dir",
    # process
    "CommandFailed",
    "CommandResult",
    "CommandSucceeded",
    "CommandTerminated",
    "ProcessLaunchError",
    "run",
]
