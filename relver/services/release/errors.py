from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CorruptVersionFile:
    path: Path
    content: str
    reason: str


@dataclass(frozen=True, slots=True)
class VersionFileWriteFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class NetworkError:
    """The remote could not be reached (fetch)."""

    command: str
    message: str


@dataclass(frozen=True, slots=True)
class MissingTag:
    tag: str


@dataclass(frozen=True, slots=True)
class DirtyWorkingTree:
    count: int
    untracked: int = 0
    renamed: int = 0
    modified: int = 0


@dataclass(frozen=True, slots=True)
class GitCommandFailed:
    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class NoVersionTags:
    pass


@dataclass(frozen=True, slots=True)
class InvalidTag:
    tag: str


@dataclass(frozen=True, slots=True)
class NothingToRelease:
    base: str


@dataclass(frozen=True, slots=True)
class ChangelogWriteFailed:
    path: Path
    reason: str


ReleaseError = (
    CorruptVersionFile
    | VersionFileWriteFailed
    | NetworkError
    | MissingTag
    | DirtyWorkingTree
    | GitCommandFailed
    | NoVersionTags
    | InvalidTag
    | NothingToRelease
    | ChangelogWriteFailed
)
