from __future__ import annotations

from relver.core.result import Err, Ok, Result
from relver.git.repository import GitError, Repository
from relver.output.console import ConsoleProtocol, Style
from relver.services.release.errors import GitCommandFailed, MissingTag, NetworkError
from relver.services.release.version import Version, parse_version, sort_version_tags


def _git_failed(e: GitError) -> GitCommandFailed:
    return GitCommandFailed(command=e.command, message=e.message, returncode=e.returncode)


class TagStore:
    """Version and marker tags of one repository and its remote.

    Version tags (``X.Y.Z.R``) are created once and never moved. Marker
    tags (``UAT-LATEST``, ``PRODUCTION-LATEST``, ``X.Y.Z.PRODUCTION``) are
    moved by deleting them everywhere and creating them again.
    """

    def __init__(self, *, repo: Repository, remote: str, console: ConsoleProtocol) -> None:
        self._repo = repo
        self._remote = remote
        self._console = console

    def fetch_remote_tags(self) -> Result[None, NetworkError]:
        fetched = self._repo.fetch_tags(self._remote)
        if isinstance(fetched, Err):
            return Err(NetworkError(command=fetched.error.command, message=fetched.error.message))
        return Ok(None)

    def list_version_tags(self) -> Result[tuple[str, ...], GitCommandFailed]:
        """Version tags, highest ``(X, Y, Z, R)`` first."""
        tags = self._repo.tags()
        if isinstance(tags, Err):
            return Err(_git_failed(tags.error))
        return Ok(sort_version_tags(tags.value))

    def latest_version_tag(self) -> Result[str | None, GitCommandFailed]:
        tags = self.list_version_tags()
        if isinstance(tags, Err):
            return tags
        return Ok(tags.value[0] if tags.value else None)

    def newer_tag_than(self, version: Version) -> Result[str | None, GitCommandFailed]:
        """Highest version tag greater than ``version``, if the remote moved ahead."""
        tags = self.list_version_tags()
        if isinstance(tags, Err):
            return tags
        for tag in tags.value:
            parsed = parse_version(tag)
            if parsed is not None and parsed > version:
                return Ok(tag)
        return Ok(None)

    def tag_exists(self, name: str) -> bool:
        return self._repo.has_tag(name)

    def commits_since(self, tag: str) -> Result[tuple[str, ...], GitCommandFailed]:
        """Non-merge commit subjects from ``tag`` to HEAD, newest first.

        A missing ``tag`` is not an error: a warning is printed and the
        result is empty.
        """
        if not self.tag_exists(tag):
            self._warn_missing(MissingTag(tag=tag))
            return Ok(())

        subjects = self._repo.log_subjects(tag)
        if isinstance(subjects, Err):
            return Err(_git_failed(subjects.error))
        return Ok(subjects.value)

    def create_tag(self, name: str, ref: str = "HEAD") -> Result[None, GitCommandFailed]:
        created = self._repo.create_tag(name, ref)
        if isinstance(created, Err):
            return Err(_git_failed(created.error))
        return Ok(None)

    def ensure_tag_absent(self, name: str) -> Ok[None]:
        """Delete ``name`` on the remote and locally; always succeeds.

        A failed deletion means the tag was already absent there. Each
        failure is still reported at dim level.
        """
        remote_deleted = self._repo.delete_remote_tag(self._remote, name)
        if isinstance(remote_deleted, Err):
            self._console.print(
                f"{name}: not deleted on {self._remote} ({remote_deleted.error.message})",
                Style.DIM,
            )

        local_deleted = self._repo.delete_tag(name)
        if isinstance(local_deleted, Err):
            self._console.print(
                f"{name}: not deleted locally ({local_deleted.error.message})",
                Style.DIM,
            )

        return Ok(None)

    def move_marker(self, name: str, ref: str) -> Result[None, GitCommandFailed]:
        """Point marker tag ``name`` at ``ref``, whether or not it exists yet."""
        self.ensure_tag_absent(name)
        return self.create_tag(name, ref)

    def push_tags(self) -> Result[None, GitCommandFailed]:
        pushed = self._repo.push_tags(self._remote)
        if isinstance(pushed, Err):
            return Err(_git_failed(pushed.error))
        return Ok(None)

    def _warn_missing(self, missing: MissingTag) -> None:
        self._console.warning(f"tag '{missing.tag}' does not exist, skipping changelog")
