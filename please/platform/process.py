"""Blocking subprocess execution with classified outcomes.

A command either exits 0 (its stdout is returned), exits with another code,
or is killed by a signal and never reports a code. Each case is its own
result type so callers can match on them. Failing to start the process at
all is not a result: it raises `ProcessLaunchError`.

Usage:
    match run(["git", "status"], cwd=repo_path):
        case CommandSucceeded(output):
            print(output)
        case CommandFailed(returncode):
            print(f"exit {returncode}")
        case CommandTerminated():
            pass
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "CommandFailed",
    "CommandResult",
    "CommandSucceeded",
    "CommandTerminated",
    "ProcessLaunchError",
    "run",
]


@dataclass(frozen=True, slots=True)
class CommandSucceeded:
    """Process exited with code 0.

    Attributes:
        output: Captured standard output.
    """

    output: str


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """Process exited with a non-zero code."""

    returncode: int


@dataclass(frozen=True, slots=True)
class CommandTerminated:
    """Process ended without an exit code (killed by a signal)."""


CommandResult = CommandSucceeded | CommandFailed | CommandTerminated


class ProcessLaunchError(RuntimeError):
    """The executable could not be started at all."""

    def __init__(self, command: Sequence[str], cause: OSError) -> None:
        self.command = tuple(command)
        self.cause = cause
        super().__init__(f"failed to launch {self.command[0]}: {cause}")


def run(cmd: Sequence[str], cwd: Path) -> CommandResult:
    """Execute a command and classify how it ended.

    Standard input is inherited so the command can prompt (e.g. for
    credentials), standard output is captured, and standard error goes
    straight to the terminal. Blocks until the process exits; there is no
    timeout.

    Args:
        cmd: Executable and arguments.
        cwd: Working directory for the command.

    Returns:
        The classified outcome.

    Raises:
        ProcessLaunchError: The executable is missing or not runnable.
    """
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd),
            stdin=None,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise ProcessLaunchError(cmd, e) from e

    if proc.returncode == 0:
        return CommandSucceeded(output=proc.stdout or "")
    # POSIX reports death by signal N as returncode -N
    if proc.returncode < 0:
        return CommandTerminated()
    return CommandFailed(returncode=proc.returncode)
