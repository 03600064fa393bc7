"""Exit codes for CLI commands.

Every command maps its failure to one of these codes so scripts wrapping
`please` can tell a typo in a project name apart from a broken environment.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (unknown project name, bad arguments)
    - 2: Environment error (root not resolved, invalid config, git missing)
    - 3: Git error (a branch cleanup step failed)
    - 5: I/O error (root unreadable, nothing discovered)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
