from __future__ import annotations

from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.services.release.errors import CorruptVersionFile, VersionFileWriteFailed
from relver.services.release.version import Version, parse_version


def read_version(path: Path) -> Result[Version, CorruptVersionFile]:
    """Read the single ``X.Y.Z.R`` line from ``path``.

    Surrounding whitespace is ignored. Wrong segment count, non-numeric or
    signed segments, leading zeros, and unreadable files are all ``CorruptVersionFile``.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(CorruptVersionFile(path=path, content="", reason=f"cannot read: {e}"))

    content = raw.strip()
    segments = content.split(".")
    if len(segments) != 4:
        return Err(
            CorruptVersionFile(
                path=path,
                content=content,
                reason=f"expected 4 dot-separated integers, found {len(segments)}",
            )
        )

    version = parse_version(content)
    if version is None:
        return Err(
            CorruptVersionFile(
                path=path,
                content=content,
                reason="every segment must be a non-negative integer",
            )
        )
    if any(len(s) > 1 and s.startswith("0") for s in segments):
        return Err(
            CorruptVersionFile(
                path=path,
                content=content,
                reason="segments must not have leading zeros",
            )
        )
    return Ok(version)


def write_version(path: Path, version: Version) -> Result[None, VersionFileWriteFailed]:
    # Single write call; a partial write is not recovered.
    try:
        path.write_text(version.to_tag(), encoding="utf-8")
    except OSError as e:
        return Err(VersionFileWriteFailed(path=path, reason=str(e)))
    return Ok(None)
