"""Tests for please.services.cleanup module."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from please.core.result import Err, Ok, Result
from please.git.repository import GitError
from please.output.console import MockConsole, Style
from please.services.cleanup import (
    BranchCleaner,
    CleanupOutcome,
    CleanupSession,
    CleanupState,
    determine_target,
    user_confirmed,
)


@dataclass
class FakeRepo:
    """In-memory BranchOps that records mutating calls."""

    current: str = "feature/login"
    local: tuple[str, ...] = ("develop", "feature/login", "main")
    fail: dict[str, GitError] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def current_branch(self) -> Result[str, GitError]:
        if "current_branch" in self.fail:
            return Err(self.fail["current_branch"])
        return Ok(self.current)

    def branches(self) -> Result[tuple[str, ...], GitError]:
        if "read_branches" in self.fail:
            return Err(self.fail["read_branches"])
        return Ok(self.local)

    def checkout(self, target: str) -> Result[None, GitError]:
        self.calls.append(f"checkout {target}")
        if "checkout" in self.fail:
            return Err(self.fail["checkout"])
        return Ok(None)

    def pull(self) -> Result[None, GitError]:
        self.calls.append("pull")
        if "pull" in self.fail:
            return Err(self.fail["pull"])
        return Ok(None)

    def delete_branch(self, branch: str) -> Result[None, GitError]:
        self.calls.append(f"delete {branch}")
        if "delete" in self.fail:
            return Err(self.fail["delete"])
        return Ok(None)


class _Answers:
    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._answers.pop(0)


def _cleaner(repo: FakeRepo, answer: str = "y") -> tuple[BranchCleaner, MockConsole, _Answers]:
    console = MockConsole()
    prompt = _Answers(answer)
    return BranchCleaner(repo=repo, console=console, prompt=prompt), console, prompt


# =============================================================================
# Pure helpers
# =============================================================================


class TestDetermineTarget:
    @pytest.mark.parametrize(
        ("branches", "expected"),
        [
            (["main", "test", "develop"], "develop"),
            (["test", "main", "test2"], "main"),
            (["test", "other"], None),
            (["develop", "main", "master"], "develop"),
            (["feature/x", "main", "master"], "main"),
            (["master", "feature/x"], "master"),
            (["feature/x", "hotfix"], None),
            ([], None),
        ],
    )
    def test_default_priority(self, branches: list[str], expected: str | None) -> None:
        assert determine_target(branches) == expected

    def test_match_is_exact(self) -> None:
        assert determine_target(["Main", "develop2"]) is None

    def test_custom_priority(self) -> None:
        assert determine_target(["main", "trunk"], ["trunk", "main"]) == "trunk"


class TestUserConfirmed:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " yes \n"])
    def test_affirmative(self, answer: str) -> None:
        assert user_confirmed(answer)

    @pytest.mark.parametrize("answer", ["", "n", "no", "yep", "ye", "y es"])
    def test_anything_else_declines(self, answer: str) -> None:
        assert not user_confirmed(answer)


# =============================================================================
# State machine
# =============================================================================


class TestHappyPath:
    def test_checkout_pull_delete(self) -> None:
        repo = FakeRepo()
        cleaner, console, prompt = _cleaner(repo)

        result = cleaner.run()

        assert result == Ok(CleanupOutcome.DONE)
        assert repo.calls == ["checkout develop", "pull", "delete feature/login"]
        assert console.messages == [
            "Will checkout to develop and delete feature/login",
            "Switched to develop",
            "Pulled the latest changes",
            "feature/login has been deleted",
        ]
        assert prompt.prompts == ["Proceed? [y/N]"]

    def test_history(self) -> None:
        cleaner, _, _ = _cleaner(FakeRepo())

        cleaner.run()

        assert cleaner.history == [
            CleanupState.READ_STATE,
            CleanupState.DETERMINE_TARGET,
            CleanupState.AWAIT_CONFIRMATION,
            CleanupState.PROCEEDING,
            CleanupState.DONE,
        ]


class TestNoChanges:
    def test_already_on_target(self) -> None:
        repo = FakeRepo(current="main", local=("main", "feature/x"))
        cleaner, console, prompt = _cleaner(repo)

        result = cleaner.run()

        assert result == Ok(CleanupOutcome.ALREADY_CURRENT)
        assert console.messages == ["Current branch is already main"]
        assert repo.calls == []
        assert prompt.prompts == []

    def test_unresolved_target(self) -> None:
        repo = FakeRepo(current="feature/x", local=("feature/x", "hotfix"))
        cleaner, console, prompt = _cleaner(repo)

        result = cleaner.run()

        assert result == Ok(CleanupOutcome.UNRESOLVED)
        assert console.messages == ["Unable to determine target branch to checkout to"]
        assert console.outputs[0].style == Style.WARNING
        assert repo.calls == []
        assert prompt.prompts == []

    def test_detached_head(self) -> None:
        repo = FakeRepo(current="", local=("main",))
        cleaner, console, _ = _cleaner(repo)

        assert cleaner.run() == Ok(CleanupOutcome.DETACHED)
        assert repo.calls == []
        assert "detached HEAD" in console.text

    @pytest.mark.parametrize("answer", ["n", "", "nope"])
    def test_declined(self, answer: str) -> None:
        repo = FakeRepo()
        cleaner, console, _ = _cleaner(repo, answer)

        result = cleaner.run()

        assert result == Ok(CleanupOutcome.ABORTED)
        assert repo.calls == []
        assert console.messages[-1] == "Aborting"


class TestFailures:
    def test_read_current_branch_error(self) -> None:
        error = GitError(operation="current_branch", returncode=128)
        repo = FakeRepo(fail={"current_branch": error})
        cleaner, console, _ = _cleaner(repo)

        assert cleaner.run() == Err(error)
        assert repo.calls == []
        assert console.outputs == []

    def test_read_branches_error(self) -> None:
        error = GitError(operation="read_branches")
        repo = FakeRepo(fail={"read_branches": error})
        cleaner, _, _ = _cleaner(repo)

        assert cleaner.run() == Err(error)
        assert cleaner.history == [CleanupState.READ_STATE]

    def test_checkout_failure_stops_everything(self) -> None:
        error = GitError(operation="checkout", target="develop", returncode=1)
        repo = FakeRepo(fail={"checkout": error})
        cleaner, console, _ = _cleaner(repo)

        assert cleaner.run() == Err(error)
        assert repo.calls == ["checkout develop"]
        assert console.find("Switched") == []

    def test_pull_failure_skips_delete(self) -> None:
        error = GitError(operation="pull", returncode=1)
        repo = FakeRepo(fail={"pull": error})
        cleaner, console, _ = _cleaner(repo)

        assert cleaner.run() == Err(error)
        assert repo.calls == ["checkout develop", "pull"]
        assert console.messages[-1] == "Switched to develop"

    def test_delete_failure(self) -> None:
        error = GitError(operation="delete", target="feature/login", returncode=1)
        repo = FakeRepo(fail={"delete": error})
        cleaner, _, _ = _cleaner(repo)

        result = cleaner.run()

        assert result == Err(error)
        assert repo.calls == ["checkout develop", "pull", "delete feature/login"]
        assert isinstance(result, Err)
        assert result.error.message == "Deleting branch feature/login failed. Code[1]"


class TestProceedWithoutTarget:
    def test_nothing_is_changed(self) -> None:
        repo = FakeRepo()
        cleaner, console, _ = _cleaner(repo)

        result = cleaner._proceed(CleanupSession(state=CleanupState.PROCEEDING, current="feature/login"))

        assert isinstance(result, Ok)
        assert result.value.state == CleanupState.UNRESOLVED
        assert repo.calls == []
        assert console.messages == ["Unable to determine target branch to checkout to"]


class TestPriority:
    def test_custom_priority_is_used(self) -> None:
        repo = FakeRepo(current="topic", local=("main", "topic", "trunk"))
        console = MockConsole()
        cleaner = BranchCleaner(
            repo=repo,
            console=console,
            prompt=lambda _: "yes",
            priority=("trunk", "main"),
        )

        assert cleaner.run() == Ok(CleanupOutcome.DONE)
        assert repo.calls[0] == "checkout trunk"
