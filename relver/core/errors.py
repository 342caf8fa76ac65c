"""Exit codes for the relver CLI.

Handled aborts (nothing to release, dirty working tree, cancelled selection)
exit with OK. Only fatal failures map to a non-zero code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success or handled abort
    - 1: User error (bad config, invalid input)
    - 3: Git command failed (tag, commit, push, status)
    - 4: Network error (remote unreachable)
    - 5: I/O error (version file or changelog unreadable/unwritable)
    """

    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
