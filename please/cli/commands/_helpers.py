"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import typer

from please.core.errors import ErrorCode
from please.core.result import Err, Result
from please.output.console import Style
from please.output.errors import AppError, error_exit_code, print_error
from please.platform.process import ProcessLaunchError

if TYPE_CHECKING:
    from please.cli.context import CLIContext


def unwrap_or_exit[T](result: Result[T, AppError], ctx: CLIContext) -> T:
    """Return the value of an Ok result; print the error and exit otherwise.

    This replaces the common pattern:
        match result:
            case Err(e):
                print_error(e, ctx.console)
                raise typer.Exit(code=error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))
    return result.value


@contextmanager
def git_launch_guard(ctx: CLIContext) -> Iterator[None]:
    """Turn a git launch failure into an environment error exit."""
    try:
        yield
    except ProcessLaunchError as e:
        ctx.console.error(str(e))
        ctx.console.print("hint: install git or set [git] executable in the config file", Style.DIM)
        exit_with_code(int(ErrorCode.ENV_ERROR))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
