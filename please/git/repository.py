"""Git repository abstraction.

`Repository.run` executes a single git subcommand and hands back the raw
classified outcome; batch status/pull are built on it. The branch helpers
used by cleanup return Result types carrying a `GitError` that knows which
operation failed and with which exit code.

Usage:
    repo = Repository(Path.cwd())

    match repo.current_branch():
        case Ok(branch):
            print(f"On {branch}")
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from please.core.result import Err, Ok, Result
from please.platform.detection import default_git_executable
from please.platform.process import (
    CommandFailed,
    CommandResult,
    CommandSucceeded,
    run as run_process,
)

__all__ = [
    "CURRENT_BRANCH_MARKER",
    "GitError",
    "GitOp",
    "Repository",
    "parse_branches",
]

CURRENT_BRANCH_MARKER = "*"

GitOp = Literal["checkout", "pull", "delete", "current_branch", "read_branches"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        operation: Which operation failed
        target: Branch the operation acted on, if any
        returncode: Exit code; None when git was terminated without one
    """

    operation: GitOp
    target: str | None = None
    returncode: int | None = None

    @property
    def message(self) -> str:
        code = self.returncode
        match self.operation:
            case "checkout":
                if code is not None:
                    return f"Unable to checkout to {self.target} code[{code}]"
                return f"Git checkout to {self.target} failed with an unexpected error"
            case "pull":
                if code is not None:
                    return f"Git pull errored. Code[{code}]"
                return "Git pull failed with an unexpected error"
            case "delete":
                if code is not None:
                    return f"Deleting branch {self.target} failed. Code[{code}]"
                return f"Deleting branch {self.target} failed"
            case "current_branch":
                if code is not None:
                    return f"Unable to read current branch. Code[{code}]"
                return "Unable to read current branch"
            case "read_branches":
                if code is not None:
                    return f"Unable to read branches. Code[{code}]"
                return "Unable to read branches"

    def __str__(self) -> str:
        return self.message


def parse_branches(output: str) -> tuple[str, ...]:
    """Parse `git branch` output into branch names.

    Each line is `<optional current marker><whitespace><name>`; the marker is
    dropped, names are trimmed, and blank lines are ignored.
    """
    names: list[str] = []
    for line in output.splitlines():
        name = line.strip()
        if name.startswith(CURRENT_BRANCH_MARKER):
            name = name[len(CURRENT_BRANCH_MARKER) :].strip()
        if name:
            names.append(name)
    return tuple(names)


class Repository:
    """A git working tree.

    Every git invocation runs with the repository as its working directory;
    the caller's own working directory is never changed.

    Attributes:
        path: Repository root (or any directory inside it)
    """

    def __init__(self, path: Path, *, executable: str | None = None) -> None:
        self.path = path
        self._executable = executable or default_git_executable()

    @property
    def executable(self) -> str:
        return self._executable

    def run(self, *args: str) -> CommandResult:
        """Run `git <args>` in this repository.

        Raises:
            ProcessLaunchError: git cannot be started
        """
        return run_process([self._executable, *args], cwd=self.path)

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked-out branch ("" on a detached HEAD)."""
        return self._read(("branch", "--show-current"), "current_branch").map(str.strip)

    def branches(self) -> Result[tuple[str, ...], GitError]:
        """All local branch names, in git's listing order."""
        return self._read(("branch",), "read_branches").map(parse_branches)

    def checkout(self, target: str) -> Result[None, GitError]:
        return self._mutate(("checkout", target), "checkout", target)

    def pull(self) -> Result[None, GitError]:
        return self._mutate(("pull",), "pull", None)

    def delete_branch(self, branch: str) -> Result[None, GitError]:
        """Delete a merged local branch (`git branch -d`)."""
        return self._mutate(("branch", "-d", branch), "delete", branch)

    def _read(self, args: tuple[str, ...], op: GitOp) -> Result[str, GitError]:
        match self.run(*args):
            case CommandSucceeded(output=output):
                return Ok(output)
            case CommandFailed(returncode=code):
                return Err(GitError(operation=op, returncode=code))
            case _:
                return Err(GitError(operation=op))

    def _mutate(self, args: tuple[str, ...], op: GitOp, target: str | None) -> Result[None, GitError]:
        match self.run(*args):
            case CommandSucceeded():
                return Ok(None)
            case CommandFailed(returncode=code):
                return Err(GitError(operation=op, target=target, returncode=code))
            case _:
                return Err(GitError(operation=op, target=target))
