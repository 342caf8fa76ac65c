from __future__ import annotations

from pathlib import Path

import typer

from relver import __version__
from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import build_context
from relver.cli.selector import SelectorOption, select_one
from relver.output.console import ConsoleProtocol
from relver.services.release.service import (
    MenuChoice,
    Preflight,
    ReleaseAction,
    ReleaseContext,
    build_release_context,
    menu_choices,
    new_generation,
    preflight,
    prod_candidates,
    prod_release,
    start_next_release,
    uat_release,
)


def release(
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (defaults to the current directory).",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Pick one release action and run it."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    ctx = build_context(repo)
    rctx = build_release_context(repo_root=ctx.repo_root, config=ctx.config, console=ctx.console)

    pre = preflight(rctx)
    exit_on_error(pre, ctx.console)

    action = select_action(menu_choices(pre.unwrap()))
    if action is None:
        ctx.console.print("Cancelled.")
        return

    run_action(rctx, pre.unwrap(), action)


def select_action(choices: tuple[MenuChoice, ...]) -> ReleaseAction | None:
    picked = select_one(
        title="Select release type:",
        options=[SelectorOption(value=c.action, label=c.label, detail=c.detail) for c in choices],
    )
    if picked.action != "select":
        return None
    return picked.value


def select_prod_tag(tags: tuple[str, ...]) -> str | None:
    picked = select_one(
        title="Select UAT tag to promote to PROD:",
        options=[SelectorOption(value=t, label=t) for t in tags],
    )
    if picked.action != "select":
        return None
    return picked.value


def run_action(rctx: ReleaseContext, pre: Preflight, action: ReleaseAction) -> None:
    console: ConsoleProtocol = rctx.console

    match action:
        case "uat_release":
            released = uat_release(rctx, pre)
            exit_on_error(released, console)
            console.success(f"UAT released: {released.unwrap().version}")
        case "start_next_release":
            started = start_next_release(rctx, pre)
            exit_on_error(started, console)
            console.success(f"Started work on UAT release: {started.unwrap()}")
        case "prod_release":
            candidates = prod_candidates(rctx)
            exit_on_error(candidates, console)
            tag = select_prod_tag(candidates.unwrap())
            if tag is None:
                console.print("Cancelled.")
                return
            promoted = prod_release(rctx, tag)
            exit_on_error(promoted, console)
            p = promoted.unwrap()
            console.success(f"Promoted {p.tag} -> {p.production_tag} & {p.production_marker}")
        case "new_generation":
            generation = new_generation(rctx, pre)
            exit_on_error(generation, console)
            console.success(f"Generation version updated to: {generation.unwrap()}")
