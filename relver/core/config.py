"""Typed loading of the optional ``relver.toml`` file.

Every key is optional; a missing file yields the defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "Config",
    "ConfigError",
    "FilesConfig",
    "GitConfig",
    "MarkersConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relver.toml"

DEFAULT_VERSION_FILE = "version.txt"
DEFAULT_CHANGELOG_FILE = "CHANGELOG.md"
DEFAULT_REMOTE = "origin"
DEFAULT_COMMIT_MESSAGE = "chore: update changelog for {version}"
DEFAULT_UAT_MARKER = "UAT-LATEST"
DEFAULT_PRODUCTION_MARKER = "PRODUCTION-LATEST"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FilesConfig:
    """Paths relative to the repository root."""

    version: str = DEFAULT_VERSION_FILE
    changelog: str = DEFAULT_CHANGELOG_FILE


@dataclass(frozen=True, slots=True)
class GitConfig:
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    """Whether (and how) the changelog update is committed.

    ``commit_message`` is formatted with ``version``.
    """

    commit: bool = True
    commit_message: str = DEFAULT_COMMIT_MESSAGE


@dataclass(frozen=True, slots=True)
class MarkersConfig:
    uat: str = DEFAULT_UAT_MARKER
    production: str = DEFAULT_PRODUCTION_MARKER


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    files: FilesConfig = field(default_factory=FilesConfig)
    git: GitConfig = field(default_factory=GitConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    markers: MarkersConfig = field(default_factory=MarkersConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        files: StrDict = get_table(data, "files") or {}
        git: StrDict = get_table(data, "git") or {}
        changelog: StrDict = get_table(data, "changelog") or {}
        markers: StrDict = get_table(data, "markers") or {}

        commit = get_bool(changelog, "commit")
        message = get_str(changelog, "commit_message") or DEFAULT_COMMIT_MESSAGE
        if "{version}" not in message:
            raise ValueError("changelog.commit_message must contain '{version}'")

        return cls(
            files=FilesConfig(
                version=get_str(files, "version") or DEFAULT_VERSION_FILE,
                changelog=get_str(files, "changelog") or DEFAULT_CHANGELOG_FILE,
            ),
            git=GitConfig(remote=get_str(git, "remote") or DEFAULT_REMOTE),
            changelog=ChangelogConfig(
                commit=True if commit is None else commit,
                commit_message=message,
            ),
            markers=MarkersConfig(
                uat=get_str(markers, "uat") or DEFAULT_UAT_MARKER,
                production=get_str(markers, "production") or DEFAULT_PRODUCTION_MARKER,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relver.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[Config, ConfigError]:
    """Load ``relver.toml`` from ``repo_root``; defaults when the file is absent.

    A file that exists but does not parse is still an error.
    """
    path = repo_root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
