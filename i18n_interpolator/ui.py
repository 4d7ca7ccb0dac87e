"""
Console output helpers built on rich.

Results go to stdout; errors and warnings go to stderr so that rendered
documents piped from the CLI stay clean.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

BADGE = "[bold white on dark_cyan] i18n [/bold white on dark_cyan]"
PANEL_WIDTH = 70


def _emit(target: Console, mark: str, message: str, details: str = "", details_style: str = "dim"):
    target.print(f"{BADGE} {mark} {message}")
    if details:
        target.print(f"    [{details_style}]{details}[/{details_style}]")


def success(message: str, details: str = ""):
    """Report a completed action."""
    _emit(console, "[green]✓[/green]", message, details)


def error(message: str, details: str = ""):
    _emit(err_console, "[red]✗[/red]", message, details, details_style="red")


def warning(message: str, details: str = ""):
    _emit(err_console, "[yellow]⚠[/yellow]", message, details)


def info(message: str):
    console.print(message)


def section(title: str):
    console.print()
    console.print(f"[bold cyan]━━━ {title} ━━━[/bold cyan]")
    console.print()


def status_box(title: str, items: dict[str, str]):
    """
    Print labelled values inside a bordered panel.

    Args:
        title: Panel title
        items: Label to value, shown in insertion order
    """
    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="dim", no_wrap=True)
    grid.add_column()
    for label, value in items.items():
        grid.add_row(f"{label}:", value)

    console.print(
        Panel(grid, title=f"[bold]{title}[/bold]", border_style="cyan", padding=(1, 2), width=PANEL_WIDTH)
    )


def data_table(columns: list[dict[str, Any]], rows: list[list[Any]]):
    """
    Print rows under column headings.

    Args:
        columns: One dict per column with "name" and optional "style"/"justify"
        rows: Cell values in column order, converted with str()
    """
    table = Table(border_style="dim", padding=(0, 1))
    for column in columns:
        table.add_column(
            column["name"], style=column.get("style", "white"), justify=column.get("justify", "left")
        )
    for row in rows:
        table.add_row(*(str(cell) for cell in row))
    console.print(table)
    console.print()
