"""
Sheets CLI Display

Rich table formatting for terminal output.
"""
from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sheet_engine.workbook import Workbook
from sheet_io.xlsx_validation import SheetSummary


console = Console()

MAX_HEADER_PREVIEW = 8


def display_header(title: str) -> None:
    """Display a section header."""
    console.print()
    console.print(Panel(Text(title, style="bold white"), style="blue"))


def _header_preview(names: list[str]) -> str:
    shown = ", ".join(names[:MAX_HEADER_PREVIEW])
    if len(names) > MAX_HEADER_PREVIEW:
        shown += f", … (+{len(names) - MAX_HEADER_PREVIEW})"
    return shown


def display_workbook(workbook: Workbook) -> None:
    """Display the included sheets of a workbook built in this run."""
    display_header(f"Workbook {workbook.path.name}")

    if workbook.is_empty:
        console.print("[yellow]No sheet received any data[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right")
    table.add_column("Sheet", style="bold")
    table.add_column("Columns", justify="right")
    table.add_column("Rows", justify="right")
    table.add_column("Header", style="dim")

    for sheet in workbook.sheets:
        table.add_row(
            str(sheet.sheet_id),
            sheet.name,
            str(len(sheet.columns)),
            str(sheet.row_count),
            _header_preview(sheet.header),
        )

    console.print(table)


def display_summaries(title: str, summaries: list[SheetSummary]) -> None:
    """Display sheets read back from an xlsx file."""
    display_header(title)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Sheet", style="bold")
    table.add_column("Columns", justify="right")
    table.add_column("Body Rows", justify="right")
    table.add_column("Header", style="dim")

    for s in summaries:
        table.add_row(s.name, str(len(s.header)), str(s.body_rows), _header_preview(s.header))

    console.print(table)
