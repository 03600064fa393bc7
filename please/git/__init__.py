"""Git discovery and operations.

This module provides:
- DirectoryReader / ProjectScanner: find repositories under a root and group
  them into projects
- Repository: run git subcommands in one working tree

Usage:
    from please.git import DirectoryReader, ProjectScanner, Repository

    scanner = ProjectScanner(DirectoryReader())
    match scanner.scan(root):
        case Ok(projects):
            for project in projects:
                for repo in project.repos or ():
                    Repository(repo.path).run("status")
        case Err(error):
            print(error.message)
"""

from please.git.directory import (
    NAME_UNAVAILABLE,
    Directory,
    DirectoryReader,
    ScanError,
    dir_name,
)
from please.git.repository import (
    GitError,
    Repository,
    parse_branches,
)
from please.git.scanner import (
    Project,
    ProjectScanner,
)

__all__ = [
    # Directory
    "NAME_UNAVAILABLE",
    "Directory",
    "DirectoryReader",
    "ScanError",
    "dir_name",
    # Repository
    "GitError",
    "Repository",
    "parse_branches",
    # Scanner
    "Project",
    "ProjectScanner",
]
