"""Batch execution of a git subcommand across discovered repositories.

Policy:
- Repositories are processed one at a time, in discovery order.
- Every repository gets exactly one console line, except when git was
  terminated without an exit code, which produces none.
- A failing repository never stops the batch.
- A parent-level project (the root is itself a repository) runs nothing; it
  is reported back in `BatchReport.parent_level` instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from please.core.result import Err, Ok, Result
from please.git.directory import Directory, ScanError
from please.git.repository import Repository
from please.git.scanner import Project, ProjectScanner
from please.output.console import ConsoleProtocol, Style
from please.platform.process import (
    CommandFailed,
    CommandResult,
    CommandSucceeded,
)

__all__ = [
    "ALL_PROJECTS",
    "BatchError",
    "BatchExecutor",
    "BatchReport",
    "GitOperation",
    "ProjectNotFound",
    "RepoResult",
    "Runner",
    "format_failure",
    "format_success",
    "git_runner",
    "select_projects",
]

ALL_PROJECTS = "all"

# (subcommand, working directory) -> outcome
Runner = Callable[[str, Path], CommandResult]


class GitOperation(StrEnum):
    """Subcommands that can be run as a batch."""

    STATUS = "status"
    PULL = "pull"


@dataclass(frozen=True, slots=True)
class ProjectNotFound:
    """No discovered project matches the requested name."""

    name: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"Project {self.name} not found"

    @property
    def hint(self) -> str | None:
        if not self.available:
            return None
        return f"Available: {', '.join(self.available)}"


BatchError = ScanError | ProjectNotFound


@dataclass(frozen=True, slots=True)
class RepoResult:
    """Outcome of one repository in a batch.

    Attributes:
        project: Name of the owning project
        repo: The repository
        result: How git ended
    """

    project: str
    repo: Directory
    result: CommandResult

    @property
    def ok(self) -> bool:
        return isinstance(self.result, CommandSucceeded)


@dataclass
class BatchReport:
    """Everything a batch did, in execution order."""

    operation: GitOperation
    results: list[RepoResult] = field(default_factory=list)
    parent_level: list[Project] = field(default_factory=list)

    @property
    def failed(self) -> list[RepoResult]:
        return [r for r in self.results if not r.ok]


def git_runner(executable: str | None = None) -> Runner:
    """Runner that executes the subcommand with git inside the repository."""

    def run(subcommand: str, path: Path) -> CommandResult:
        return Repository(path, executable=executable).run(subcommand)

    return run


def format_success(name: str, output: str) -> str:
    text = output.strip()
    return f"{name}: {text or '(no output)'}"


def format_failure(name: str, returncode: int) -> str:
    return f"{name}: failed with code {returncode}"


def select_projects(projects: list[Project], selector: str) -> Result[list[Project], ProjectNotFound]:
    """Pick projects by name (case-insensitive) or all of them for `all`."""
    wanted = selector.lower()
    if wanted == ALL_PROJECTS:
        return Ok(list(projects))

    matched = [p for p in projects if p.name.lower() == wanted]
    if not matched:
        return Err(
            ProjectNotFound(
                name=selector,
                available=tuple(sorted({p.name for p in projects}, key=str.lower)),
            )
        )
    return Ok(matched)


class BatchExecutor:
    """Runs one git subcommand in every repository of the selected projects."""

    def __init__(
        self,
        *,
        scanner: ProjectScanner,
        runner: Runner,
        console: ConsoleProtocol,
    ) -> None:
        self._scanner = scanner
        self._runner = runner
        self._console = console

    def run(
        self,
        root: Path,
        selector: str,
        operation: GitOperation,
    ) -> Result[BatchReport, BatchError]:
        """Scan `root`, select projects, and run `operation` in each repository.

        Returns:
            Ok(BatchReport) once every selected repository was visited;
            Err(ScanError | ProjectNotFound) before any git process runs
        """
        scanned = self._scanner.scan(root)
        if isinstance(scanned, Err):
            return scanned

        selected = select_projects(scanned.value, selector)
        if isinstance(selected, Err):
            return selected

        report = BatchReport(operation=operation)
        for project in selected.value:
            if project.repos is None:
                report.parent_level.append(project)
                continue
            for repo in project.repos:
                result = self._runner(operation.value, repo.path)
                self._emit(repo, result)
                report.results.append(RepoResult(project=project.name, repo=repo, result=result))

        return Ok(report)

    def _emit(self, repo: Directory, result: CommandResult) -> None:
        match result:
            case CommandSucceeded(output=output):
                self._console.print(format_success(repo.name, output), Style.SUCCESS)
            case CommandFailed(returncode=code):
                self._console.print(format_failure(repo.name, code), Style.ERROR)
            case _:
                pass
