"""Git repository plumbing.

``Repository`` wraps the handful of git commands relver needs: working
tree status, tag listing/creation/deletion, subject log, staging,
committing and pushing. Every method returns a Result; deciding which
failures matter is left to the release services.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.tags():
        case Ok(names):
            print(", ".join(names))
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.platform.process import ProcessError
from relver.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (e.g. "push --tags")
        message: Error message, usually git's stderr
        returncode: Process return code (-1 for timeout / missing git)
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``git status --porcelain`` line.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??", "R ")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"

    @property
    def is_renamed(self) -> bool:
        return "R" in self.xy

    @property
    def is_modified(self) -> bool:
        """True for any tracked change other than a rename."""
        return not self.is_untracked and not self.is_renamed


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed working tree status.

    Attributes:
        branch: Current branch name ("" when unknown)
        entries: All status entries (staged, unstaged, untracked)
    """

    branch: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return len(self.entries) == 0

    @property
    def untracked_count(self) -> int:
        return sum(1 for e in self.entries if e.is_untracked)

    @property
    def renamed_count(self) -> int:
        return sum(1 for e in self.entries if e.is_renamed)

    @property
    def modified_count(self) -> int:
        return sum(1 for e in self.entries if e.is_modified)


class Repository:
    """A local git checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a git repository (a .git dir, or a .git file for worktrees)."""
        return (self.path / ".git").exists()

    def status(self) -> Result[GitStatus, GitError]:
        """Run ``git status --porcelain=v1 -b`` and parse it."""
        result = self._git(["status", "--porcelain=v1", "-b"], command="status")
        if isinstance(result, Err):
            return result
        return Ok(self._parse_status(result.value))

    def fetch_tags(self, remote: str) -> Result[str, GitError]:
        """Fetch all tags from ``remote``."""
        result = self._git(["fetch", remote, "--tags"], command="fetch --tags")
        return result.map(str.strip)

    def tags(self) -> Result[tuple[str, ...], GitError]:
        """All local tag names, in git's default (refname) order."""
        result = self._git(["tag", "--list"], command="tag --list")
        if isinstance(result, Err):
            return result
        return Ok(tuple(ln.strip() for ln in result.value.splitlines() if ln.strip()))

    def has_tag(self, name: str) -> bool:
        """True when ``refs/tags/<name>`` resolves locally."""
        result = self._run(["rev-parse", "-q", "--verify", f"refs/tags/{name}"])
        return isinstance(result, Ok)

    def log_subjects(self, since: str, until: str = "HEAD") -> Result[tuple[str, ...], GitError]:
        """Subject lines of non-merge commits in ``since..until``, newest first."""
        result = self._git(
            ["log", f"{since}..{until}", "--pretty=format:%s", "--no-merges"],
            command="log",
        )
        if isinstance(result, Err):
            return result
        return Ok(tuple(ln for ln in result.value.splitlines() if ln.strip()))

    def create_tag(self, name: str, ref: str = "HEAD") -> Result[None, GitError]:
        """Create a lightweight tag ``name`` pointing at ``ref``."""
        result = self._git(["tag", name, ref], command=f"tag {name}")
        return result.map(lambda _: None)

    def delete_tag(self, name: str) -> Result[None, GitError]:
        result = self._git(["tag", "-d", name], command=f"tag -d {name}")
        return result.map(lambda _: None)

    def delete_remote_tag(self, remote: str, name: str) -> Result[None, GitError]:
        result = self._git(
            ["push", remote, "--delete", name],
            command=f"push --delete {name}",
        )
        return result.map(lambda _: None)

    def push_tags(self, remote: str) -> Result[None, GitError]:
        result = self._git(["push", remote, "--tags"], command="push --tags")
        return result.map(lambda _: None)

    def add(self, paths: list[Path]) -> Result[None, GitError]:
        result = self._git(["add", "--", *(str(p) for p in paths)], command="add")
        return result.map(lambda _: None)

    def commit(self, message: str) -> Result[None, GitError]:
        result = self._git(["commit", "-m", message], command="commit")
        return result.map(lambda _: None)

    def _git(self, args: list[str], *, command: str) -> Result[str, GitError]:
        """Run git and convert a ProcessError into a GitError labelled ``command``."""
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _parse_status(self, output: str) -> GitStatus:
        """Parse git status --porcelain=v1 -b output."""
        lines = [ln for ln in output.splitlines() if ln.strip()]
        if not lines:
            return GitStatus(branch="")

        branch = ""
        if lines[0].startswith("##"):
            # ## branch...upstream [ahead N]
            head = lines[0][2:].strip().split(" [", 1)[0]
            branch = head.split("...", 1)[0].strip()
            lines = lines[1:]

        entries = tuple(
            StatusEntry(xy=line[:2], path=line[3:]) for line in lines if len(line) >= 4
        )
        return GitStatus(branch=branch, entries=entries)
