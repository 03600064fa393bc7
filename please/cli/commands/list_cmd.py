"""List command - show every project discovered under the root."""

from __future__ import annotations

import typer

from please.cli.commands._helpers import unwrap_or_exit
from please.cli.context import build_context, resolve_root_or_exit
from please.git.scanner import Project
from please.output.console import ConsoleProtocol


def render_projects(projects: list[Project], console: ConsoleProtocol) -> None:
    """Print projects, listing the repositories of each aggregator."""
    for project in projects:
        if project.repos is None:
            console.header(f"Project found: {project.name}, {project.path}")
            continue
        console.header(f"Project {project.name}, {project.path}, with Git repositories:")
        for repo in project.repos:
            console.print(f"  - {repo.name}")


def list_projects(ctx: typer.Context) -> None:
    """List all Git repositories under the root, grouped by project."""
    cli = build_context(ctx.obj)
    root = resolve_root_or_exit(cli, ctx.obj)

    projects = unwrap_or_exit(cli.scanner().scan(root), cli)
    render_projects(projects, cli.console)
