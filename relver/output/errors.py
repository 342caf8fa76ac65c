"""Error presentation utilities.

Centralized release error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relver.core.config import ConfigError
from relver.core.errors import ErrorCode
from relver.output.console import Style
from relver.services.release.errors import (
    ChangelogWriteFailed,
    CorruptVersionFile,
    DirtyWorkingTree,
    GitCommandFailed,
    InvalidTag,
    MissingTag,
    NetworkError,
    NoVersionTags,
    NothingToRelease,
    ReleaseError,
    VersionFileWriteFailed,
)

if TYPE_CHECKING:
    from relver.output.console import ConsoleProtocol

__all__ = ["print_config_error", "print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error; handled aborts are shown as plain messages."""
    match error:
        case NothingToRelease(base=base):
            console.print(f"No changes to release since {base}, exiting.")
        case NoVersionTags():
            console.print("No version tags found, nothing to promote.")
        case DirtyWorkingTree(count=count, untracked=untracked, renamed=renamed, modified=modified):
            console.error(
                f"There are {count} uncommitted files. "
                "Please commit or stash them before proceeding."
            )
            console.print(
                f"untracked: {untracked}, renamed: {renamed}, modified: {modified}", Style.DIM
            )
        case MissingTag(tag=tag):
            console.warning(f"tag '{tag}' does not exist")
        case CorruptVersionFile(path=path, content=content, reason=reason):
            console.error(f"corrupt version file {path}: {reason}")
            if content:
                console.print(f"content: {content!r}", Style.DIM)
            console.print("hint: expected a single line like 4.1.2.0", Style.DIM)
        case VersionFileWriteFailed(path=path, reason=reason):
            console.error(f"failed to write {path}: {reason}")
        case ChangelogWriteFailed(path=path, reason=reason):
            console.error(f"failed to update changelog {path}: {reason}")
        case NetworkError(command=command, message=message):
            console.error(f"git {command} failed: remote unreachable")
            console.print(message, Style.DIM)
        case GitCommandFailed(command=command, message=message, returncode=rc):
            console.error(f"git {command} failed (exit {rc})")
            console.print(message, Style.DIM)
        case InvalidTag(tag=tag):
            console.error(f"not a version tag: {tag}")


def release_error_exit_code(error: ReleaseError) -> int:
    """Exit code for a release error (OK for handled aborts)."""
    match error:
        case NothingToRelease() | NoVersionTags() | DirtyWorkingTree() | MissingTag():
            return int(ErrorCode.OK)
        case CorruptVersionFile() | VersionFileWriteFailed() | ChangelogWriteFailed():
            return int(ErrorCode.IO_ERROR)
        case NetworkError():
            return int(ErrorCode.NETWORK_ERROR)
        case GitCommandFailed():
            return int(ErrorCode.GIT_ERROR)
        case InvalidTag():
            return int(ErrorCode.USER_ERROR)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.path is not None:
        console.print(f"config: {error.path}", Style.DIM)
