"""Branch cleanup - leave a finished feature branch for the main line.

Reads the checked-out branch, picks the target branch by priority
(develop, main, master by default), asks for confirmation, then runs
`checkout <target>`, `pull`, `branch -d <old>`.

Policy:
- Nothing is changed unless the user answers y/yes.
- The three mutating steps are fail-fast: the first failure stops the
  sequence and is returned. Completed steps are not undone.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from please.core.config import DEFAULT_BRANCH_PRIORITY
from please.core.result import Err, Ok, Result
from please.git.repository import GitError
from please.output.console import ConsoleProtocol, Style

__all__ = [
    "AFFIRMATIVE_ANSWERS",
    "BranchCleaner",
    "BranchOps",
    "CleanupOutcome",
    "CleanupSession",
    "CleanupState",
    "determine_target",
    "user_confirmed",
]

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})

UNRESOLVED_MESSAGE = "Unable to determine target branch to checkout to"
DETACHED_MESSAGE = "Not on a branch (detached HEAD), nothing to clean up"
CONFIRM_PROMPT = "Proceed? [y/N]"


class BranchOps(Protocol):
    """The git operations cleanup needs (see `please.git.Repository`)."""

    def current_branch(self) -> Result[str, GitError]: ...

    def branches(self) -> Result[tuple[str, ...], GitError]: ...

    def checkout(self, target: str) -> Result[None, GitError]: ...

    def pull(self) -> Result[None, GitError]: ...

    def delete_branch(self, branch: str) -> Result[None, GitError]: ...


class CleanupState(StrEnum):
    READ_STATE = "read_state"
    DETERMINE_TARGET = "determine_target"
    AWAIT_CONFIRMATION = "await_confirmation"
    PROCEEDING = "proceeding"
    # terminal
    UNRESOLVED = "unresolved"
    DETACHED = "detached"
    ALREADY_CURRENT = "already_current"
    ABORTED = "aborted"
    DONE = "done"


class CleanupOutcome(StrEnum):
    """How a cleanup that did not fail ended."""

    UNRESOLVED = "unresolved"
    DETACHED = "detached"
    ALREADY_CURRENT = "already_current"
    ABORTED = "aborted"
    DONE = "done"


_TERMINAL = frozenset(CleanupState(o.value) for o in CleanupOutcome)


@dataclass(frozen=True, slots=True)
class CleanupSession:
    state: CleanupState
    current: str = ""
    branches: tuple[str, ...] = ()
    target: str | None = None


StepResult = Result[CleanupSession, GitError]
Prompt = Callable[[str], str]


def determine_target(
    branches: Sequence[str],
    priority: Sequence[str] = DEFAULT_BRANCH_PRIORITY,
) -> str | None:
    """First branch of `priority` that exists in `branches`, or None."""
    available = set(branches)
    for candidate in priority:
        if candidate in available:
            return candidate
    return None


def user_confirmed(answer: str) -> bool:
    """True only for y/yes, ignoring case and surrounding whitespace."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


class BranchCleaner:
    """State machine driving one cleanup run.

    Attributes:
        history: States visited, in order (starts with READ_STATE)
    """

    def __init__(
        self,
        *,
        repo: BranchOps,
        console: ConsoleProtocol,
        prompt: Prompt,
        priority: Sequence[str] = DEFAULT_BRANCH_PRIORITY,
    ) -> None:
        self._repo = repo
        self._console = console
        self._prompt = prompt
        self._priority = tuple(priority)
        self.history: list[CleanupState] = []

    def run(self) -> Result[CleanupOutcome, GitError]:
        handlers: Mapping[CleanupState, Callable[[CleanupSession], StepResult]] = {
            CleanupState.READ_STATE: self._read_state,
            CleanupState.DETERMINE_TARGET: self._determine_target,
            CleanupState.AWAIT_CONFIRMATION: self._await_confirmation,
            CleanupState.PROCEEDING: self._proceed,
        }

        session = CleanupSession(state=CleanupState.READ_STATE)
        self.history = [session.state]
        while session.state not in _TERMINAL:
            outcome = handlers[session.state](session)
            if isinstance(outcome, Err):
                return outcome
            session = outcome.value
            self.history.append(session.state)

        return Ok(CleanupOutcome(session.state.value))

    def _read_state(self, s: CleanupSession) -> StepResult:
        current = self._repo.current_branch()
        if isinstance(current, Err):
            return current
        branches = self._repo.branches()
        if isinstance(branches, Err):
            return branches
        return Ok(
            replace(
                s,
                state=CleanupState.DETERMINE_TARGET,
                current=current.value,
                branches=branches.value,
            )
        )

    def _determine_target(self, s: CleanupSession) -> StepResult:
        target = determine_target(s.branches, self._priority)
        if target is None:
            self._console.print(UNRESOLVED_MESSAGE, Style.WARNING)
            return Ok(replace(s, state=CleanupState.UNRESOLVED))

        if not s.current:
            self._console.print(DETACHED_MESSAGE, Style.WARNING)
            return Ok(replace(s, state=CleanupState.DETACHED, target=target))

        if target == s.current:
            self._console.print(f"Current branch is already {target}")
            return Ok(replace(s, state=CleanupState.ALREADY_CURRENT, target=target))

        return Ok(replace(s, state=CleanupState.AWAIT_CONFIRMATION, target=target))

    def _await_confirmation(self, s: CleanupSession) -> StepResult:
        self._console.print(f"Will checkout to {s.target} and delete {s.current}", Style.BOLD)
        if not user_confirmed(self._prompt(CONFIRM_PROMPT)):
            self._console.print("Aborting")
            return Ok(replace(s, state=CleanupState.ABORTED))
        return Ok(replace(s, state=CleanupState.PROCEEDING))

    def _proceed(self, s: CleanupSession) -> StepResult:
        target = s.target
        if target is None:
            self._console.print(UNRESOLVED_MESSAGE, Style.WARNING)
            return Ok(replace(s, state=CleanupState.UNRESOLVED))

        checked_out = self._repo.checkout(target)
        if isinstance(checked_out, Err):
            return checked_out
        self._console.print(f"Switched to {target}", Style.SUCCESS)

        pulled = self._repo.pull()
        if isinstance(pulled, Err):
            return pulled
        self._console.print("Pulled the latest changes", Style.SUCCESS)

        deleted = self._repo.delete_branch(s.current)
        if isinstance(deleted, Err):
            return deleted
        self._console.print(f"{s.current} has been deleted", Style.SUCCESS)

        return Ok(replace(s, state=CleanupState.DONE))
