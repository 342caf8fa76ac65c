"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TypeVar

import typer

from relver.core.result import Err, Result
from relver.output.console import ConsoleProtocol
from relver.output.errors import print_release_error, release_error_exit_code
from relver.services.release.errors import ReleaseError

T = TypeVar("T")


def exit_on_error(result: Result[T, ReleaseError], console: ConsoleProtocol) -> None:
    """Print and exit if result is Err, otherwise return.

    Handled aborts (nothing to release, dirty tree) exit with code 0.
    """
    if isinstance(result, Err):
        print_release_error(result.error, console)
        raise typer.Exit(code=release_error_exit_code(result.error))
