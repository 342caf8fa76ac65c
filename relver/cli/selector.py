from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

import typer

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _clear() -> None:
    sys.stdout.write("\x1b[2J\x1b[H")


def _read_key() -> str:
    if os.name == "nt":
        import msvcrt

        ch = msvcrt.getwch()
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("q", "Q", "\x03"):
            return "cancel"
        if ch in ("\x00", "\xe0"):
            ch2 = msvcrt.getwch()
            if ch2 == "H":
                return "up"
            if ch2 == "P":
                return "down"
        return "other"

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("q", "Q", "\x03"):
            return "cancel"
        if ch == "\x1b":
            if sys.stdin.read(1) == "[":
                c3 = sys.stdin.read(1)
                if c3 == "A":
                    return "up"
                if c3 == "B":
                    return "down"
            return "cancel"
        return "other"
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _pad(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: max(0, width - 3)] + "..."
    return text.ljust(width)


def _render(
    *, title: str, subtitle: str | None, options: list[SelectorOption[object]], index: int
) -> None:
    _clear()
    print(_paint(title, "1", "96"))
    if subtitle is not None:
        print(_paint(subtitle, "2", "37"))
    print()

    cols = max(72, min(140, shutil.get_terminal_size((100, 30)).columns))
    label_w = max(20, min(36, max(len(o.label) for o in options)))
    detail_w = max(18, cols - (label_w + 10))

    for i, opt in enumerate(options):
        marker = ">" if i == index else " "
        line = f"{marker} {_pad(opt.label, label_w)}  {_pad(opt.detail or '', detail_w)}"
        if i == index:
            print(_paint(line, "1", "30", "46"))
        else:
            print(_paint(line, "97"))

    print()
    print(
        _paint("Keys:", "1", "96")
        + " "
        + _paint("Up/Down", "1", "97")
        + " + Enter, "
        + _paint("q", "1", "97")
        + ": cancel"
    )
    sys.stdout.flush()


def _select_arrow(
    *, title: str, subtitle: str | None, options: list[SelectorOption[T]], initial_index: int
) -> SelectorResult[T]:
    idx = max(0, min(initial_index, len(options) - 1))
    casted: list[SelectorOption[object]] = [
        SelectorOption(value=o.value, label=o.label, detail=o.detail) for o in options
    ]

    while True:
        _render(title=title, subtitle=subtitle, options=casted, index=idx)
        key = _read_key()

        if key == "up":
            idx = (idx - 1) % len(options)
        elif key == "down":
            idx = (idx + 1) % len(options)
        elif key == "enter":
            _clear()
            return SelectorResult(action="select", value=options[idx].value, index=idx)
        elif key == "cancel":
            _clear()
            return SelectorResult(action="cancel", value=None, index=idx)


def _select_numbered(
    *, title: str, options: list[SelectorOption[T]], initial_index: int
) -> SelectorResult[T]:
    """Plain numbered prompt for terminals without raw key input. 0 cancels."""
    typer.echo(title)
    for i, opt in enumerate(options, start=1):
        suffix = f"  ({opt.detail})" if opt.detail else ""
        typer.echo(f"  {i}. {opt.label}{suffix}")

    while True:
        choice: int = typer.prompt("Select", default=initial_index + 1, type=int)
        if choice == 0:
            return SelectorResult(action="cancel", value=None, index=initial_index)
        if 1 <= choice <= len(options):
            return SelectorResult(action="select", value=options[choice - 1].value, index=choice - 1)
        typer.echo(f"Enter a number between 1 and {len(options)} (0 to cancel).")


def select_one(
    *,
    title: str,
    options: list[SelectorOption[T]],
    subtitle: str | None = None,
    initial_index: int = 0,
) -> SelectorResult[T]:
    """Let the user pick one option.

    Uses arrow-key navigation on a TTY and a numbered prompt otherwise.
    """
    if not options:
        raise ValueError("selector requires at least one option")

    if is_interactive_terminal():
        return _select_arrow(
            title=title, subtitle=subtitle, options=options, initial_index=initial_index
        )
    return _select_numbered(title=title, options=options, initial_index=initial_index)
