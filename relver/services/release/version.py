from __future__ import annotations

import re
from dataclasses import dataclass


VERSION_TAG_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)\.(\d+)$", re.ASCII)


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """Four-component release version ``X.Y.Z.R``.

    ``fixed`` never moves, ``generation`` is bumped for a new product
    generation, ``release`` when work on the next UAT release starts and
    ``revision`` on every UAT release. Field order gives numeric ordering.
    """

    fixed: int
    generation: int
    release: int
    revision: int

    def __str__(self) -> str:
        return self.to_tag()

    def to_tag(self) -> str:
        return f"{self.fixed}.{self.generation}.{self.release}.{self.revision}"

    def production_tag(self) -> str:
        """Marker tag for the promoted release line, e.g. ``4.1.2.PRODUCTION``."""
        return f"{self.fixed}.{self.generation}.{self.release}.PRODUCTION"

    def next_revision(self) -> Version:
        return Version(self.fixed, self.generation, self.release, self.revision + 1)

    def next_release(self) -> Version:
        return Version(self.fixed, self.generation, self.release + 1, 0)

    def next_generation(self) -> Version:
        return Version(self.fixed, self.generation + 1, 0, 0)


def parse_version(text: str) -> Version | None:
    """Parse ``X.Y.Z.R``; anything else (including marker tags) is None."""
    m = VERSION_TAG_RE.fullmatch(text)
    if m is None:
        return None
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)), int(m.group(4)))


def is_version_tag(tag: str) -> bool:
    return VERSION_TAG_RE.fullmatch(tag) is not None


def sort_version_tags(tags: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Version tags only, highest first, compared as integer tuples."""
    parsed = [(v, t) for t in tags if (v := parse_version(t)) is not None]
    parsed.sort(key=lambda item: item[0], reverse=True)
    return tuple(t for _, t in parsed)
