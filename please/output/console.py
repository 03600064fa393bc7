"""Console output abstraction.

Services write to a `ConsoleProtocol` rather than to stdout so that the batch
executor's result lines and the cleaner's messages can be captured in tests
(`MockConsole`) and styled with Rich in production (`RichConsole`).

Messages are plain text. Git output routinely contains square brackets
(`[new branch]`, `[ahead 1]`), so `RichConsole` never interprets message text
as Rich markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Where user-facing output goes."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message verbatim with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None:
        """Print a section header preceded by a blank line."""
        ...

    def newline(self) -> None: ...


_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "bright_green bold",
}


class RichConsole:
    """Console implementation using Rich.

    Errors and warnings go to stderr, everything else to stdout.
    """

    def __init__(self, *, stdout: Console | None = None, stderr: Console | None = None) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._out = stdout or Console(highlight=False, soft_wrap=True)
        self._err = stderr or Console(stderr=True, highlight=False, soft_wrap=True)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=_RICH_STYLES.get(style) or None, markup=False)

    def success(self, message: str) -> None:
        self._out.print(self._prefixed("[green]OK[/green]", message))

    def error(self, message: str) -> None:
        self._err.print(self._prefixed("[red bold]error:[/red bold]", message))

    def warning(self, message: str) -> None:
        self._err.print(self._prefixed("[yellow]warning:[/yellow]", message))

    def info(self, message: str) -> None:
        self._out.print(self._prefixed("[cyan]info:[/cyan]", message))

    def header(self, message: str) -> None:
        self._out.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._out.print()

    @staticmethod
    def _prefixed(prefix: str, message: str) -> str:
        from rich.markup import escape

        return f"{prefix} {escape(message)}"


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
