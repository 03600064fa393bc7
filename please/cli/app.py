from __future__ import annotations

from pathlib import Path

import typer

from please import __version__
from please.cli.commands.batch_cmd import pull, status
from please.cli.commands.clean import clean
from please.cli.commands.list_cmd import list_projects
from please.cli.context import GlobalOptions
from please.core.config import DEFAULT_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Run git operations across every repository under a workspace root.",
)


# Commands
app.command("list")(list_projects)
app.command()(status)
app.command()(pull)
app.command()(clean)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory with Git repositories (overrides the environment variable)",
    ),
    override_default: str | None = typer.Option(
        None,
        "--override-default",
        "-o",
        help=f"Read the root from this environment variable instead of {DEFAULT_ENV_VAR}",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: $PLEASE_CONFIG or the user config directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report unreadable entries"),
) -> None:
    ctx.obj = GlobalOptions(
        path=path,
        override_default=override_default,
        config_path=config,
        verbose=verbose,
    )


def main() -> None:
    app()
