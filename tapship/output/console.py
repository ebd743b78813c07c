"""Console output for release runs.

Services report progress, the commands they run and the errors they hit
through ConsoleProtocol. RichConsole writes styled output to the terminal
(errors go to stderr); MockConsole records everything for assertions.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Output sink used by every service."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def command(self, cmd: Sequence[str]) -> None:
        """Echo a command line before it runs."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...


def format_command(cmd: Sequence[str]) -> str:
    """Render an argument list for display, quoting args with spaces."""
    parts = [f'"{arg}"' if (" " in arg or not arg) else arg for arg in cmd]
    return "$ " + " ".join(parts)


class RichConsole:
    """Production console backed by Rich."""

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        target = self._err if style == Style.ERROR else self._out
        if rich_style:
            target.print(message, style=rich_style, markup=False)
        else:
            target.print(message, markup=False)

    def command(self, cmd: Sequence[str]) -> None:
        self._out.print(format_command(cmd), style="dim", markup=False)

    def success(self, message: str) -> None:
        self._out.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._out.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def header(self, message: str) -> None:
        self._out.print(f"\n[blue bold]{_escape(message)}[/blue bold]")


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """One captured line."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that records output instead of printing it.

    Safe to share between packaging threads.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def _record(self, message: str, style: Style) -> None:
        with self._lock:
            self.outputs.append(OutputRecord(message, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._record(message, style)

    def command(self, cmd: Sequence[str]) -> None:
        self._record(format_command(cmd), Style.DIM)

    def success(self, message: str) -> None:
        self._record(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self._record(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self._record(f"warning: {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self._record(f"info: {message}", Style.INFO)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def commands(self) -> list[str]:
        """Echoed command lines, without the ``$ `` prefix."""
        return [o.message[2:] for o in self.outputs if o.message.startswith("$ ")]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
