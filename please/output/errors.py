"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from please.core.config import ConfigError
from please.core.errors import ErrorCode
from please.core.root import RootError
from please.git.directory import ScanError
from please.git.repository import GitError
from please.output.console import Style
from please.services.batch import ProjectNotFound

if TYPE_CHECKING:
    from please.output.console import ConsoleProtocol

__all__ = ["AppError", "error_exit_code", "print_error"]

AppError = ConfigError | RootError | ScanError | ProjectNotFound | GitError


def print_error(error: AppError, console: ConsoleProtocol) -> None:
    """Print an error to the console with appropriate formatting."""
    match error:
        case ConfigError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"config: {path}", Style.DIM)
        case RootError(message=message, env_var=env_var):
            console.error(message)
            hint = "pass --path" if env_var is None else f"set {env_var} or pass --path"
            console.print(f"hint: {hint}", Style.DIM)
        case ScanError(message=message):
            console.error(message)
        case ProjectNotFound():
            console.error(error.message)
            if error.hint:
                console.print(error.hint, Style.DIM)
        case GitError():
            console.error(error.message)


def error_exit_code(error: AppError) -> int:
    """Get exit code for an error."""
    match error:
        case ConfigError() | RootError():
            return int(ErrorCode.ENV_ERROR)
        case ScanError():
            return int(ErrorCode.IO_ERROR)
        case ProjectNotFound():
            return int(ErrorCode.USER_ERROR)
        case GitError():
            return int(ErrorCode.GIT_ERROR)
