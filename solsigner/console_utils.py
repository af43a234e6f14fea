from __future__ import annotations

"""Utilities for rich console output."""

from rich.console import Console
from rich.markup import escape
from rich.text import Text

__all__ = [
    "console",
    "console_print",
    "console_info",
    "console_success",
    "console_warning",
    "console_error",
    "console_field",
]

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def console_print(*args, **kwargs) -> None:
    """Proxy to :meth:`rich.console.Console.print` for consistency."""
    console.print(*args, **kwargs)


def console_info(message: str, *args, **kwargs) -> None:
    console.print(f"[blue]{message}[/]", *args, **kwargs)


def console_success(message: str, *args, **kwargs) -> None:
    console.print(f"[green]{message}[/]", *args, **kwargs)


def console_warning(message: str, *args, **kwargs) -> None:
    """Print *message* as a yellow warning."""
    console.print(f"[yellow]{message}[/]", *args, **kwargs)


def console_error(message: str, *args, **kwargs) -> None:
    """Print *message* as a red error on stderr."""
    err_console.print(f"[red]{escape(message)}[/]", *args, **kwargs)


def console_field(label: str, value: object) -> None:
    """Print a cyan ``label:`` followed by ``value`` verbatim."""
    console.print(f"[cyan]{escape(label)}:[/]", Text(str(value)))
