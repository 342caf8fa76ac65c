from __future__ import annotations

from pathlib import Path

from relver.core.result import Err, Ok
from relver.output.console import MockConsole, Style
from relver.services.release.errors import GitCommandFailed, NetworkError
from relver.services.release.tags import TagStore
from relver.services.release.version import Version

from relver.test.services._fakes import FakeRepository


def _store(repo: FakeRepository) -> tuple[TagStore, MockConsole]:
    console = MockConsole()
    return TagStore(repo=repo, remote="origin", console=console), console


def test_list_version_tags_descending_numeric(tmp_path: Path) -> None:
    repo = FakeRepository(
        tmp_path,
        tags={"4.1.2.9": "a", "4.1.2.10": "b", "UAT-LATEST": "b", "4.1.2.PRODUCTION": "a"},
    )
    store, _ = _store(repo)

    assert store.list_version_tags() == Ok(("4.1.2.10", "4.1.2.9"))
    assert store.latest_version_tag() == Ok("4.1.2.10")


def test_latest_version_tag_none(tmp_path: Path) -> None:
    store, _ = _store(FakeRepository(tmp_path, tags={"UAT-LATEST": "a"}))

    assert store.latest_version_tag() == Ok(None)


def test_newer_tag_than(tmp_path: Path) -> None:
    store, _ = _store(FakeRepository(tmp_path, tags={"4.1.2.9": "a", "4.1.3.1": "b"}))

    assert store.newer_tag_than(Version(4, 1, 2, 9)) == Ok("4.1.3.1")
    assert store.newer_tag_than(Version(4, 1, 3, 1)) == Ok(None)


def test_fetch_failure_is_network_error(tmp_path: Path) -> None:
    store, _ = _store(FakeRepository(tmp_path, fail={"fetch"}))

    result = store.fetch_remote_tags()

    assert isinstance(result, Err)
    assert isinstance(result.error, NetworkError)


def test_commits_since_missing_tag_warns(tmp_path: Path) -> None:
    store, console = _store(FakeRepository(tmp_path))

    assert store.commits_since("9.9.9.9") == Ok(())
    assert console.has_warning()
    assert console.find("9.9.9.9")


def test_commits_since_existing_tag(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags={"4.1.2.9": "a"}, log={"4.1.2.9": ("✨ b", "✨ a")})
    store, console = _store(repo)

    assert store.commits_since("4.1.2.9") == Ok(("✨ b", "✨ a"))
    assert not console.has_warning()


def test_ensure_tag_absent_always_succeeds(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path)
    store, console = _store(repo)

    assert store.ensure_tag_absent("PRODUCTION-LATEST") == Ok(None)
    assert "push --delete PRODUCTION-LATEST" in repo.calls
    assert "tag -d PRODUCTION-LATEST" in repo.calls
    assert all(o.style == Style.DIM for o in console.outputs)
    assert len(console.outputs) == 2


def test_move_marker_when_marker_missing(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags={"4.1.2.10": "c9"})
    store, _ = _store(repo)

    assert store.move_marker("PRODUCTION-LATEST", "4.1.2.10") == Ok(None)
    assert repo.local_tags["PRODUCTION-LATEST"] == "c9"


def test_move_marker_when_marker_exists(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags={"4.1.2.10": "c9", "PRODUCTION-LATEST": "c1"})
    store, console = _store(repo)

    assert store.move_marker("PRODUCTION-LATEST", "4.1.2.10") == Ok(None)
    assert repo.local_tags["PRODUCTION-LATEST"] == "c9"
    assert "PRODUCTION-LATEST" not in repo.remote_tags
    assert console.outputs == []


def test_push_failure_is_surfaced(tmp_path: Path) -> None:
    store, _ = _store(FakeRepository(tmp_path, fail={"push"}))

    result = store.push_tags()

    assert isinstance(result, Err)
    assert isinstance(result.error, GitCommandFailed)
