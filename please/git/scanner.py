"""Project discovery - classify a directory tree into projects.

A project is either:
- the root itself, when the root is a repository (`repos is None`), or
- any directory with one or more repositories directly beneath it
  (`repos` lists them).

Discovery never descends into a repository, so nested repositories and
submodules are not reported.

Usage:
    scanner = ProjectScanner(DirectoryReader())
    match scanner.scan(Path("~/dev").expanduser()):
        case Ok(projects):
            for project in projects:
                print(project.name, project.repo_names)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from please.core.result import Err, Ok, Result

from .directory import Directory, DirectoryReader, ScanError, dir_name

__all__ = [
    "Project",
    "ProjectScanner",
]


@dataclass(frozen=True, slots=True)
class Project:
    """A group of repositories discovered under one directory.

    Attributes:
        name: Directory name
        path: Directory path
        repos: Repositories directly beneath `path`, in enumeration order;
            None when `path` is itself the repository
    """

    name: str
    path: Path
    repos: tuple[Directory, ...] | None = None

    @property
    def is_parent_level(self) -> bool:
        """True if the project directory is itself a repository."""
        return self.repos is None

    @property
    def repo_names(self) -> list[str]:
        return [r.name for r in self.repos or ()]


@dataclass
class _Frame:
    """One directory being walked: its unvisited children and the repos found so far."""

    path: Path
    pending: Iterator[Directory]
    repos: list[Directory] = field(default_factory=list)


class ProjectScanner:
    """Walks a directory tree and groups repositories into projects."""

    def __init__(self, reader: DirectoryReader) -> None:
        self._reader = reader

    def scan(self, root: Path) -> Result[list[Project], ScanError]:
        """Discover all projects under `root`.

        Returns:
            Ok(projects), deepest projects first; Err(ScanError) if a
            directory cannot be read or nothing was found
        """
        root = root.absolute()
        listing = self._reader.list_subdirectories(root)
        if isinstance(listing, Err):
            return listing

        if self._reader.is_repository(listing.value):
            return Ok([Project(name=dir_name(root), path=root)])

        walked = self._walk(root, listing.value)
        if isinstance(walked, Err):
            return walked

        if not walked.value:
            return Err(
                ScanError(
                    kind="no_projects_found",
                    message=f"No projects found in {root}",
                    path=root,
                )
            )
        return walked

    def _walk(self, root: Path, children: list[Directory]) -> Result[list[Project], ScanError]:
        """Depth-first walk with an explicit stack.

        A level's project is emitted once all of its children are visited,
        after any projects found beneath it.
        """
        projects: list[Project] = []
        stack = [_Frame(path=root, pending=iter(children))]

        while stack:
            frame = stack[-1]
            child = next(frame.pending, None)

            if child is None:
                stack.pop()
                if frame.repos:
                    projects.append(
                        Project(
                            name=dir_name(frame.path),
                            path=frame.path,
                            repos=tuple(frame.repos),
                        )
                    )
                continue

            listing = self._reader.list_subdirectories(child.path)
            if isinstance(listing, Err):
                return listing

            if self._reader.is_repository(listing.value):
                frame.repos.append(child)
            else:
                stack.append(_Frame(path=child.path, pending=iter(listing.value)))

        return Ok(projects)
