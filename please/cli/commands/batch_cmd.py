"""Status and pull commands - run git in every repository of a project."""

from __future__ import annotations

import typer

from please.cli.commands._helpers import git_launch_guard, unwrap_or_exit
from please.cli.context import CLIContext, build_context, resolve_root_or_exit
from please.output.console import Style
from please.services.batch import BatchExecutor, BatchReport, GitOperation, git_runner

_NAME_HELP = "Project name (case-insensitive), or 'all' for every project"


def _run(ctx: typer.Context, name: str, operation: GitOperation) -> None:
    cli = build_context(ctx.obj)
    root = resolve_root_or_exit(cli, ctx.obj)

    executor = BatchExecutor(
        scanner=cli.scanner(),
        runner=git_runner(cli.config.git),
        console=cli.console,
    )
    with git_launch_guard(cli):
        report = unwrap_or_exit(executor.run(root, name, operation), cli)

    _print_summary(report, cli)


def _print_summary(report: BatchReport, cli: CLIContext) -> None:
    for project in report.parent_level:
        cli.console.warning(
            f"{project.name} is itself a repository ({project.path}); "
            f"{report.operation} only runs for repositories nested in a project"
        )

    failed = report.failed
    if failed:
        cli.console.print(
            f"{len(failed)} of {len(report.results)} repositories did not {report.operation} cleanly",
            Style.DIM,
        )


def status(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=_NAME_HELP),
) -> None:
    """Run `git status` in each repository of a project."""
    _run(ctx, name, GitOperation.STATUS)


def pull(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=_NAME_HELP),
) -> None:
    """Run `git pull` in each repository of a project."""
    _run(ctx, name, GitOperation.PULL)
