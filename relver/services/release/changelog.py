from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.git.repository import Repository
from relver.services.release.errors import ChangelogWriteFailed, GitCommandFailed


BREAKING = "\U0001f4a5"  # 💥
FEATURE = "\u2728"  # ✨
FIX = "\U0001f41b"  # 🐛

QUALIFYING_MARKERS: tuple[str, ...] = (BREAKING, FEATURE, FIX)


@dataclass(frozen=True, slots=True)
class ChangelogEntry:
    version: str
    day: date
    subjects: tuple[str, ...]

    def render(self) -> str:
        lines = [f"## {self.version} ({self.day.isoformat()})"]
        lines.extend(f"- {s}" for s in self.subjects)
        return "\n".join(lines) + "\n\n"


def is_qualifying(subject: str) -> bool:
    stripped = subject.strip()
    return bool(stripped) and stripped[0] in QUALIFYING_MARKERS


def filter_qualifying(subjects: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Subjects starting with a breaking/feature/fix marker, order preserved."""
    return tuple(s for s in subjects if is_qualifying(s))


def _today() -> date:
    return datetime.now(UTC).date()


def append_entry(
    *,
    path: Path,
    version: str,
    subjects: tuple[str, ...],
    today: date | None = None,
) -> Result[ChangelogEntry, ChangelogWriteFailed]:
    """Prepend a ``## <version> (<date>)`` block to ``path``.

    Subjects keep log order (newest first). The file is created when missing.
    """
    entry = ChangelogEntry(
        version=version,
        day=today or _today(),
        subjects=filter_qualifying(subjects),
    )

    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
        path.write_text(entry.render() + existing, encoding="utf-8")
    except OSError as e:
        return Err(ChangelogWriteFailed(path=path, reason=str(e)))

    return Ok(entry)


def commit_changelog(
    *,
    repo: Repository,
    changelog_path: Path,
    version_path: Path,
    message: str,
) -> Result[None, GitCommandFailed]:
    """Stage the changelog and version file and commit them with ``message``."""
    staged = repo.add([changelog_path, version_path])
    if isinstance(staged, Err):
        e = staged.error
        return Err(GitCommandFailed(command=e.command, message=e.message, returncode=e.returncode))

    committed = repo.commit(message)
    if isinstance(committed, Err):
        e = committed.error
        return Err(GitCommandFailed(command=e.command, message=e.message, returncode=e.returncode))

    return Ok(None)


def append_and_commit(
    *,
    repo: Repository,
    changelog_path: Path,
    version_path: Path,
    version: str,
    subjects: tuple[str, ...],
    message_template: str,
    today: date | None = None,
) -> Result[ChangelogEntry | None, ChangelogWriteFailed | GitCommandFailed]:
    """Prepend an entry and commit it; a no-op when nothing qualifies.

    Returns Ok(None) when there were zero qualifying subjects.
    """
    if not filter_qualifying(subjects):
        return Ok(None)

    written = append_entry(path=changelog_path, version=version, subjects=subjects, today=today)
    if isinstance(written, Err):
        return written

    committed = commit_changelog(
        repo=repo,
        changelog_path=changelog_path,
        version_path=version_path,
        message=message_template.format(version=version),
    )
    if isinstance(committed, Err):
        return committed

    return Ok(written.value)
