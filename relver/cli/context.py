from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relver.core.config import Config, load_config_or_default
from relver.core.errors import ErrorCode
from relver.core.result import Err
from relver.git.repository import Repository
from relver.output.console import ConsoleProtocol, RichConsole
from relver.output.errors import print_config_error


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: Config
    console: ConsoleProtocol


def build_context(repo: Path | None = None) -> CLIContext:
    console = RichConsole()

    try:
        root = (repo or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --repo: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not Repository(root).exists():
        console.error(f"{root} is not a git repository (missing .git)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        print_config_error(config_result.error, console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(repo_root=root, config=config_result.value, console=console)
