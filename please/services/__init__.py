"""Services: batch execution and branch cleanup."""

from .batch import (
    BatchExecutor,
    BatchReport,
    GitOperation,
    ProjectNotFound,
)
from .cleanup import (
    BranchCleaner,
    CleanupOutcome,
    determine_target,
    user_confirmed,
)

__all__ = [
    "BatchExecutor",
    "BatchReport",
    "BranchCleaner",
    "CleanupOutcome",
    "GitOperation",
    "ProjectNotFound",
    "determine_target",
    "user_confirmed",
]
