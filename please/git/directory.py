"""Directory listing and repository detection.

A directory is a repository when one of its immediate subdirectories is
named exactly like the marker (`.git` by default).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from please.core.config import GIT_MARKER_DIR
from please.core.result import Err, Ok, Result

__all__ = [
    "NAME_UNAVAILABLE",
    "Directory",
    "DirectoryReader",
    "ScanError",
    "dir_name",
]

NAME_UNAVAILABLE = "Name_Unavailable"

SkipHandler = Callable[[Path, OSError], None]


@dataclass(frozen=True, slots=True)
class ScanError:
    """Error raised while discovering projects.

    Attributes:
        kind: What went wrong
        message: Human-readable description
        path: Directory involved, if any
    """

    kind: Literal["unreadable_root", "no_projects_found"]
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Directory:
    """A directory found by a single listing."""

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> Directory:
        return cls(name=dir_name(path), path=path)


def dir_name(path: Path) -> str:
    """Final path segment, or a placeholder for paths like `/`."""
    return path.name or NAME_UNAVAILABLE


class DirectoryReader:
    """Lists subdirectories and recognizes repositories.

    Entries that cannot be inspected are skipped. `on_skip`, when given, is
    told about each of them; the listing itself stays silent.
    """

    def __init__(
        self,
        *,
        marker: str = GIT_MARKER_DIR,
        on_skip: SkipHandler | None = None,
    ) -> None:
        self._marker = marker
        self._on_skip = on_skip

    @property
    def marker(self) -> str:
        return self._marker

    def list_subdirectories(self, path: Path) -> Result[list[Directory], ScanError]:
        """List the immediate subdirectories of `path`.

        Symlinks to directories count as directories. Order is whatever the
        filesystem enumerates.

        Returns:
            Ok(directories), or Err(ScanError) if `path` cannot be opened
        """
        try:
            entries = os.scandir(path)
        except OSError as e:
            return Err(
                ScanError(
                    kind="unreadable_root",
                    message=f"Failed to read directory at {path}: {e.strerror or e}",
                    path=path,
                )
            )

        dirs: list[Directory] = []
        with entries:
            for entry in entries:
                try:
                    if entry.is_dir():
                        dirs.append(Directory(name=entry.name, path=Path(entry.path)))
                except OSError as e:
                    self._skipped(Path(entry.path), e)
        return Ok(dirs)

    def is_repository(self, dirs: Sequence[Directory]) -> bool:
        """True if the marker directory is among `dirs` (case-sensitive)."""
        return any(d.name == self._marker for d in dirs)

    def _skipped(self, path: Path, error: OSError) -> None:
        if self._on_skip is not None:
            self._on_skip(path, error)
