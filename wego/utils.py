"""Shared console helpers for wego.

All user-facing output goes through the module-level Rich ``console`` so
colour handling and test capture live in one place.
"""

from __future__ import annotations

import time

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(highlight=False, soft_wrap=True)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.0421) -> "42ms"
        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0ms"
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


def elapsed_ms(started: float) -> int:
    """Milliseconds since *started* (a ``time.monotonic()`` reading)."""
    return int((time.monotonic() - started) * 1000)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a red ``Warning:`` prefix followed by *message*."""
    console.print(f"[bold red]Warning:[/bold red] [red]{escape(message)}[/red]")


def print_done(target: str, action: str, style: str = "green") -> None:
    """Print ``<target>, <action>`` with the target highlighted."""
    console.print(f"[{style}]{escape(target)}[/{style}], {escape(action)}")


def print_summary_table(rows: list[tuple[str, ...]], headers: tuple[str, ...], title: str) -> None:
    """Print a simple table with one row per tuple.

    Args:
        rows: Table rows; each tuple must match *headers* in length.
        headers: Column titles.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for index, header in enumerate(headers):
        table.add_column(header, style="dim" if index == 0 else None, no_wrap=index == 0)

    for row in rows:
        table.add_row(*(escape(str(cell)) for cell in row))

    console.print(table)
