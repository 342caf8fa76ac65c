"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from relver.core.result import Err, Ok
from relver.git.repository import GitStatus, Repository, StatusEntry


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    """Create a mock CompletedProcess."""
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def _git_args(mock_run: MagicMock) -> list[str]:
    """Arguments after ``git -C <path>`` of the last call."""
    cmd = mock_run.call_args.args[0]
    return cmd[3:]


# =============================================================================
# StatusEntry / GitStatus
# =============================================================================


class TestStatusEntry:
    def test_untracked(self) -> None:
        entry = StatusEntry(xy="??", path="new.py")
        assert entry.is_untracked is True
        assert entry.is_modified is False

    def test_renamed(self) -> None:
        entry = StatusEntry(xy="R ", path="old.py -> new.py")
        assert entry.is_renamed is True
        assert entry.is_modified is False

    def test_modified(self) -> None:
        assert StatusEntry(xy=" M", path="a.py").is_modified is True
        assert StatusEntry(xy="A ", path="a.py").is_modified is True


class TestGitStatus:
    def test_clean(self) -> None:
        assert GitStatus(branch="main").is_clean is True

    def test_counts(self) -> None:
        status = GitStatus(
            branch="main",
            entries=(
                StatusEntry(xy="??", path="a"),
                StatusEntry(xy="??", path="b"),
                StatusEntry(xy="R ", path="c -> d"),
                StatusEntry(xy=" M", path="e"),
            ),
        )
        assert status.is_clean is False
        assert status.untracked_count == 2
        assert status.renamed_count == 1
        assert status.modified_count == 1


# =============================================================================
# Repository - mocked subprocess
# =============================================================================


class TestRepository:
    def test_exists(self, tmp_path: Path) -> None:
        assert Repository(tmp_path).exists() is False
        (tmp_path / ".git").mkdir()
        assert Repository(tmp_path).exists() is True

    @patch("subprocess.run")
    def test_status_clean(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="## main...origin/main\n")

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        assert result.value.branch == "main"
        assert result.value.is_clean is True

    @patch("subprocess.run")
    def test_status_with_changes(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="## main...origin/main [ahead 1]\nM  staged.py\n M unstaged.py\n?? new.py\n"
        )

        result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        status = result.value
        assert status.branch == "main"
        assert len(status.entries) == 3
        assert status.untracked_count == 1

    @patch("subprocess.run")
    def test_status_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128, stderr="fatal: not a git repository"
        )

        result = Repository(tmp_path).status()

        assert isinstance(result, Err)
        assert result.error.command == "status"
        assert "not a git repository" in result.error.message
        assert result.error.returncode == 128

    @patch("subprocess.run")
    def test_tags(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="4.1.2.10\n4.1.2.9\nUAT-LATEST\n")

        result = Repository(tmp_path).tags()

        assert result == Ok(("4.1.2.10", "4.1.2.9", "UAT-LATEST"))
        assert _git_args(mock_run) == ["tag", "--list"]

    @patch("subprocess.run")
    def test_has_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="abc123\n")
        assert Repository(tmp_path).has_tag("4.1.2.9") is True
        assert _git_args(mock_run) == ["rev-parse", "-q", "--verify", "refs/tags/4.1.2.9"]

        mock_run.return_value = make_completed_process(returncode=1)
        assert Repository(tmp_path).has_tag("9.9.9.9") is False

    @patch("subprocess.run")
    def test_log_subjects(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="✨ newest\nfix typo\n\U0001f41b older")

        result = Repository(tmp_path).log_subjects("4.1.2.9")

        assert result == Ok(("✨ newest", "fix typo", "\U0001f41b older"))
        assert _git_args(mock_run) == [
            "log",
            "4.1.2.9..HEAD",
            "--pretty=format:%s",
            "--no-merges",
        ]

    @patch("subprocess.run")
    def test_create_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert Repository(tmp_path).create_tag("PRODUCTION-LATEST", "4.1.2.10") == Ok(None)
        assert _git_args(mock_run) == ["tag", "PRODUCTION-LATEST", "4.1.2.10"]

    @patch("subprocess.run")
    def test_delete_tags(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        repo = Repository(tmp_path)

        repo.delete_tag("UAT-LATEST")
        assert _git_args(mock_run) == ["tag", "-d", "UAT-LATEST"]

        repo.delete_remote_tag("origin", "UAT-LATEST")
        assert _git_args(mock_run) == ["push", "origin", "--delete", "UAT-LATEST"]

    @patch("subprocess.run")
    def test_push_tags_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=1, stderr="fatal: unable to access remote"
        )

        result = Repository(tmp_path).push_tags("origin")

        assert isinstance(result, Err)
        assert result.error.command == "push --tags"
        assert _git_args(mock_run) == ["push", "origin", "--tags"]

    @patch("subprocess.run")
    def test_network_commands_use_long_timeout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        repo = Repository(tmp_path)

        repo.fetch_tags("origin")
        assert _git_args(mock_run) == ["fetch", "origin", "--tags"]
        assert mock_run.call_args.kwargs["timeout"] == 180.0

        repo.tags()
        assert mock_run.call_args.kwargs["timeout"] == 30.0

    @patch("subprocess.run")
    def test_add_and_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        repo = Repository(tmp_path)

        repo.add([tmp_path / "CHANGELOG.md", tmp_path / "version.txt"])
        assert _git_args(mock_run) == [
            "add",
            "--",
            str(tmp_path / "CHANGELOG.md"),
            str(tmp_path / "version.txt"),
        ]

        repo.commit("chore: update changelog for 4.1.2.10")
        assert _git_args(mock_run) == ["commit", "-m", "chore: update changelog for 4.1.2.10"]

