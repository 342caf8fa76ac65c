"""Tests for relver.output.errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from relver.core.config import ConfigError
from relver.core.errors import ErrorCode
from relver.output.console import MockConsole
from relver.output.errors import print_config_error, print_release_error, release_error_exit_code
from relver.services.release.errors import (
    ChangelogWriteFailed,
    CorruptVersionFile,
    DirtyWorkingTree,
    GitCommandFailed,
    InvalidTag,
    MissingTag,
    NetworkError,
    NothingToRelease,
    NoVersionTags,
    ReleaseError,
    VersionFileWriteFailed,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NothingToRelease(base="4.1.2.9"), ErrorCode.OK),
        (NoVersionTags(), ErrorCode.OK),
        (DirtyWorkingTree(count=2), ErrorCode.OK),
        (MissingTag(tag="9.9.9.9"), ErrorCode.OK),
        (CorruptVersionFile(path=Path("v"), content="4.1", reason="bad"), ErrorCode.IO_ERROR),
        (VersionFileWriteFailed(path=Path("v"), reason="ro"), ErrorCode.IO_ERROR),
        (ChangelogWriteFailed(path=Path("c"), reason="ro"), ErrorCode.IO_ERROR),
        (NetworkError(command="fetch --tags", message="unreachable"), ErrorCode.NETWORK_ERROR),
        (GitCommandFailed(command="push --tags", message="denied"), ErrorCode.GIT_ERROR),
        (InvalidTag(tag="UAT-LATEST"), ErrorCode.USER_ERROR),
    ],
)
def test_exit_codes(error: ReleaseError, code: ErrorCode) -> None:
    assert release_error_exit_code(error) == int(code)


def test_handled_aborts_are_not_errors() -> None:
    console = MockConsole()
    print_release_error(NothingToRelease(base="4.1.2.9"), console)
    print_release_error(NoVersionTags(), console)

    assert not console.has_error()
    assert console.find("No changes to release")


def test_dirty_tree_message() -> None:
    console = MockConsole()
    print_release_error(DirtyWorkingTree(count=3, untracked=1, renamed=1, modified=1), console)

    assert console.find("There are 3 uncommitted files")
    assert console.find("untracked: 1, renamed: 1, modified: 1")


def test_git_failure_shows_stderr() -> None:
    console = MockConsole()
    print_release_error(
        GitCommandFailed(command="push --tags", message="remote: denied", returncode=128), console
    )

    assert console.messages == ["error: git push --tags failed (exit 128)", "remote: denied"]


def test_config_error() -> None:
    console = MockConsole()
    print_config_error(ConfigError("Invalid TOML syntax", path=Path("relver.toml")), console)

    assert console.has_error()
    assert console.find("relver.toml")
