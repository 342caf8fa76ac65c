from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relver.core.config import Config
from relver.core.result import Err, Ok, Result
from relver.git.repository import Repository
from relver.output.console import ConsoleProtocol, Style
from relver.services.release.changelog import append_and_commit, append_entry, filter_qualifying
from relver.services.release.errors import (
    DirtyWorkingTree,
    GitCommandFailed,
    InvalidTag,
    NoVersionTags,
    NothingToRelease,
    ReleaseError,
)
from relver.services.release.tags import TagStore
from relver.services.release.version import Version, parse_version
from relver.services.release.version_file import read_version, write_version


ReleaseAction = Literal["uat_release", "start_next_release", "prod_release", "new_generation"]


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything a release transition touches, passed in explicitly."""

    repo: Repository
    tags: TagStore
    version_path: Path
    changelog_path: Path
    config: Config
    console: ConsoleProtocol


@dataclass(frozen=True, slots=True)
class Preflight:
    """State gathered once before the release menu is shown.

    Attributes:
        version: Content of the version file
        latest_tag: Highest version tag, if any
        newer_tag: Highest tag above ``version`` (the remote moved ahead)
    """

    version: Version
    latest_tag: str | None
    newer_tag: str | None

    @property
    def display_version(self) -> str:
        return self.newer_tag or self.version.to_tag()

    @property
    def uat_target(self) -> Version:
        return self.version.next_revision()

    @property
    def base_ref(self) -> str:
        """Ref the next UAT changelog is computed from."""
        return self.latest_tag or self.newer_tag or self.version.to_tag()


@dataclass(frozen=True, slots=True)
class MenuChoice:
    action: ReleaseAction
    label: str
    detail: str


@dataclass(frozen=True, slots=True)
class UatReleased:
    version: Version
    subjects: tuple[str, ...]
    committed: bool


@dataclass(frozen=True, slots=True)
class ProdPromoted:
    tag: str
    production_tag: str
    production_marker: str


def build_release_context(
    *, repo_root: Path, config: Config, console: ConsoleProtocol
) -> ReleaseContext:
    repo = Repository(repo_root)
    return ReleaseContext(
        repo=repo,
        tags=TagStore(repo=repo, remote=config.git.remote, console=console),
        version_path=repo_root / config.files.version,
        changelog_path=repo_root / config.files.changelog,
        config=config,
        console=console,
    )


def ensure_clean_working_tree(ctx: ReleaseContext) -> Result[None, ReleaseError]:
    status = ctx.repo.status()
    if isinstance(status, Err):
        e = status.error
        return Err(GitCommandFailed(command=e.command, message=e.message, returncode=e.returncode))

    s = status.value
    if not s.is_clean:
        return Err(
            DirtyWorkingTree(
                count=len(s.entries),
                untracked=s.untracked_count,
                renamed=s.renamed_count,
                modified=s.modified_count,
            )
        )
    return Ok(None)


def preflight(ctx: ReleaseContext) -> Result[Preflight, ReleaseError]:
    """Dirty-tree guard, remote tag fetch, version read and drift detection.

    Nothing is mutated here; any Err aborts the run before the menu.
    """
    clean = ensure_clean_working_tree(ctx)
    if isinstance(clean, Err):
        return clean

    fetched = ctx.tags.fetch_remote_tags()
    if isinstance(fetched, Err):
        return fetched

    version = read_version(ctx.version_path)
    if isinstance(version, Err):
        return version

    latest = ctx.tags.latest_version_tag()
    if isinstance(latest, Err):
        return latest

    newer = ctx.tags.newer_tag_than(version.value)
    if isinstance(newer, Err):
        return newer

    if newer.value is not None:
        ctx.console.warning(
            f"tag {newer.value} is ahead of {ctx.config.files.version} ({version.value})"
        )

    return Ok(Preflight(version=version.value, latest_tag=latest.value, newer_tag=newer.value))


def menu_choices(pre: Preflight) -> tuple[MenuChoice, ...]:
    return (
        MenuChoice(
            action="uat_release",
            label="UAT release",
            detail=(
                f"current version: {pre.display_version}, "
                f"changes will be tagged as {pre.uat_target}"
            ),
        ),
        MenuChoice(
            action="start_next_release",
            label="UAT start work on next release",
            detail=f"{pre.version} -> {pre.version.next_release()}",
        ),
        MenuChoice(
            action="prod_release",
            label="PROD release",
            detail="promote a UAT tag to production",
        ),
        MenuChoice(
            action="new_generation",
            label="GENERATION",
            detail=f"{pre.version} -> {pre.version.next_generation()}",
        ),
    )


def uat_release(ctx: ReleaseContext, pre: Preflight) -> Result[UatReleased, ReleaseError]:
    """Release ``R + 1`` to UAT.

    Order: changelog subjects, version file, changelog (+ commit), version
    tag, UAT marker, push. Without qualifying commits nothing is written.
    A failure part-way leaves earlier steps in place.
    """
    target = pre.uat_target
    ctx.console.info(f"Preparing UAT release: {target}")

    subjects = ctx.tags.commits_since(pre.base_ref)
    if isinstance(subjects, Err):
        return subjects

    qualifying = filter_qualifying(subjects.value)
    if not qualifying:
        return Err(NothingToRelease(base=pre.base_ref))

    ctx.console.print(f"Changes since {pre.base_ref}:")
    for subject in qualifying:
        ctx.console.print(f"  {subject}")

    written = write_version(ctx.version_path, target)
    if isinstance(written, Err):
        return written

    tag = target.to_tag()
    committed = False
    if ctx.config.changelog.commit:
        entry = append_and_commit(
            repo=ctx.repo,
            changelog_path=ctx.changelog_path,
            version_path=ctx.version_path,
            version=tag,
            subjects=qualifying,
            message_template=ctx.config.changelog.commit_message,
        )
        if isinstance(entry, Err):
            return entry
        committed = entry.value is not None
    else:
        appended = append_entry(path=ctx.changelog_path, version=tag, subjects=qualifying)
        if isinstance(appended, Err):
            return appended

    created = ctx.tags.create_tag(tag)
    if isinstance(created, Err):
        return created

    moved = ctx.tags.move_marker(ctx.config.markers.uat, tag)
    if isinstance(moved, Err):
        return moved

    pushed = ctx.tags.push_tags()
    if isinstance(pushed, Err):
        return pushed

    return Ok(UatReleased(version=target, subjects=qualifying, committed=committed))


def start_next_release(ctx: ReleaseContext, pre: Preflight) -> Result[Version, ReleaseError]:
    """Z + 1, R = 0. Only the version file changes."""
    target = pre.version.next_release()
    written = write_version(ctx.version_path, target)
    if isinstance(written, Err):
        return written
    return Ok(target)


def new_generation(ctx: ReleaseContext, pre: Preflight) -> Result[Version, ReleaseError]:
    """Y + 1, Z = 0, R = 0. Only the version file changes."""
    target = pre.version.next_generation()
    written = write_version(ctx.version_path, target)
    if isinstance(written, Err):
        return written
    return Ok(target)


def prod_candidates(ctx: ReleaseContext) -> Result[tuple[str, ...], ReleaseError]:
    """UAT tags that can be promoted, highest first."""
    tags = ctx.tags.list_version_tags()
    if isinstance(tags, Err):
        return tags
    if not tags.value:
        return Err(NoVersionTags())
    return Ok(tags.value)


def prod_release(ctx: ReleaseContext, tag: str) -> Result[ProdPromoted, ReleaseError]:
    """Point the production markers at UAT tag ``tag`` and push.

    Each marker is moved and pushed in turn; the version file is untouched.
    """
    version = parse_version(tag)
    if version is None:
        return Err(InvalidTag(tag=tag))

    markers = (ctx.config.markers.production, version.production_tag())
    for marker in markers:
        moved = ctx.tags.move_marker(marker, tag)
        if isinstance(moved, Err):
            return moved
        pushed = ctx.tags.push_tags()
        if isinstance(pushed, Err):
            return pushed
        ctx.console.print(f"{marker} -> {tag}", Style.DIM)

    return Ok(
        ProdPromoted(
            tag=tag,
            production_tag=version.production_tag(),
            production_marker=ctx.config.markers.production,
        )
    )
