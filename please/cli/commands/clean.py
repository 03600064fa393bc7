"""Clean command - switch to the main line branch and delete the current one."""

from __future__ import annotations

from pathlib import Path

import typer

from please.cli.commands._helpers import git_launch_guard, unwrap_or_exit
from please.cli.context import build_context
from please.git.repository import Repository
from please.services.cleanup import BranchCleaner


def _ask(message: str) -> str:
    # end of input counts as a declined prompt
    try:
        return typer.prompt(message, default="", show_default=False)
    except typer.Abort:
        return ""


def clean(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Auto-confirm (do not prompt)"),
) -> None:
    """Checkout develop/main/master, pull it, and delete the branch you were on.

    Operates on the repository in the current working directory.
    """
    cli = build_context(ctx.obj)
    repo = Repository(Path.cwd(), executable=cli.config.git)

    cleaner = BranchCleaner(
        repo=repo,
        console=cli.console,
        prompt=(lambda _: "y") if yes else _ask,
        priority=cli.config.branch_priority,
    )
    with git_launch_guard(cli):
        unwrap_or_exit(cleaner.run(), cli)
