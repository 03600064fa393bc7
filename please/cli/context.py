from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from please.core.config import Config, default_config_path, load_config, load_config_or_default
from please.core.errors import ErrorCode
from please.core.result import Err
from please.core.root import RootSource, resolve_root
from please.git.directory import DirectoryReader
from please.git.scanner import ProjectScanner
from please.output.console import ConsoleProtocol, RichConsole, Style
from please.output.errors import error_exit_code, print_error


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name."""

    path: str | None = None
    override_default: str | None = None
    config_path: Path | None = None
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    verbose: bool = False

    def scanner(self) -> ProjectScanner:
        on_skip = None
        if self.verbose:
            console = self.console

            def on_skip(path: Path, error: OSError) -> None:
                console.warning(f"skipped unreadable entry {path}: {error.strerror or error}")

        return ProjectScanner(DirectoryReader(marker=self.config.marker_dir, on_skip=on_skip))


def build_context(options: GlobalOptions | None) -> CLIContext:
    options = options or GlobalOptions()
    console = RichConsole()

    if options.config_path is not None:
        config_result = load_config(options.config_path.expanduser())
    else:
        config_result = load_config_or_default(default_config_path())
    if isinstance(config_result, Err):
        print_error(config_result.error, console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(config=config_result.value, console=console, verbose=options.verbose)


def _source_label(source: RootSource, options: GlobalOptions, config: Config) -> str:
    match source:
        case "path":
            return "--path"
        case "override":
            return f"${options.override_default}"
        case "default":
            return f"${config.default_env_var}"


def resolve_root_or_exit(ctx: CLIContext, options: GlobalOptions | None) -> Path:
    """Discovery root for this invocation; exits when it cannot be resolved."""
    options = options or GlobalOptions()
    result = resolve_root(
        path=options.path,
        override_var=options.override_default,
        default_var=ctx.config.default_env_var,
    )
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))

    info = result.value
    if ctx.verbose:
        label = _source_label(info.source, options, ctx.config)
        ctx.console.print(f"root: {info.root} (from {label})", Style.DIM)
    return info.root
