"""Console output abstraction.

Services print through ``ConsoleProtocol`` so they never depend on a
specific backend: ``RichConsole`` writes to the terminal, ``MockConsole``
captures records for tests.
"""

from __future__ import annotations

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
    ERROR = auto()  # Red, fatal or user-visible error
    DEBUG = auto()  # Dimmed diagnostic trace

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print one line verbatim (no markup interpretation, no wrapping)."""
        ...

    def error(self, message: str) -> None:
        """Print an ``error:`` line."""
        ...

    def debug(self, message: str) -> None:
        """Print a ``debug:`` diagnostic line."""
        ...


class RichConsole:
    """Console implementation using Rich.

    Args:
        stderr: Write to standard error instead of standard output
    """

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, emoji=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.DEBUG: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(
            message,
            style=self._style_map.get(style) or None,
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )

    def error(self, message: str) -> None:
        self._prefixed("error:", "red bold", message)

    def debug(self, message: str) -> None:
        self._prefixed("debug:", "dim", message)

    def _prefixed(self, prefix: str, style: str, message: str) -> None:
        from rich.text import Text

        line = Text(prefix, style=style)
        line.append(f" {message}")
        self._console.print(line, highlight=False, soft_wrap=True)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    # Test helper methods

    def clear(self) -> None:
        """Clear all captured output."""
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        """Check if any error was printed."""
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        """Count outputs with a specific style."""
        return sum(1 for o in self.outputs if o.style == style)
