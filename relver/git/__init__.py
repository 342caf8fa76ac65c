"""Git operations module.

Usage:
    from relver.git import Repository

    repo = Repository(Path("/path/to/repo"))
    status = repo.status()
    if status.is_ok() and not status.unwrap().is_clean:
        print("commit or stash first")
"""

from relver.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]
