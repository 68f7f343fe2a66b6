"""
Sheets CLI Application

Typer-based command-line interface for building result workbooks.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sheet_engine.address import decode_address, encode_address
from sheet_engine.workbook import Workbook
from sheet_io.readers import read_batches, read_settings
from sheet_io.writers import export_csv
from sheet_io.xlsx_validation import sheet_summaries
from sheet_ui_cli.display import display_summaries, display_workbook
from sheet_ui_cli.logging_config import setup_logging


app = typer.Typer(
    name="sheets",
    help="Incremental multi-sheet result workbooks",
    add_completion=False,
)

console = Console()


def _require_file(path: Path) -> Path:
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")
    if not path.is_file():
        raise typer.BadParameter(f"Path is not a file: {path}")
    return path


@app.command()
def record(
    input_file: Path = typer.Argument(
        ...,
        help="Batch file (YAML or JSON)",
    ),
    output: Path = typer.Option(
        ...,
        "--output", "-o",
        help="Output Excel file path",
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template", "-t",
        help="Existing workbook used as the starting point",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Workbook settings file (YAML or JSON)",
    ),
    csv_dir: Optional[Path] = typer.Option(
        None,
        "--csv-dir",
        help="Directory to export CSV files",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Suppress table output",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Log level: DEBUG, INFO, WARNING or ERROR",
    ),
) -> None:
    """
    Write row batches from an input file into a workbook.

    Each batch names a sheet, scalar parameters and result arrays; sheets that
    never receive data are left out of the file.
    """
    try:
        setup_logging(log_level)
        _require_file(input_file)
        console.print(f"[dim]Reading batches: {input_file}[/dim]")
        batch_file = read_batches(input_file)

        settings = batch_file.settings
        if config:
            settings = read_settings(_require_file(config))

        if template:
            workbook = Workbook.from_template(output, _require_file(template), settings=settings)
        else:
            workbook = Workbook.create(output, settings=settings)

        for batch in batch_file.batches:
            sheet = workbook.get_or_create_sheet(batch.sheet, never_include=batch.never_include)
            sheet.add_rows(batch.parameters, batch.results)

        if not quiet:
            display_workbook(workbook)

        if csv_dir:
            files = export_csv(workbook, csv_dir)
            console.print(f"[green]✓ Exported {len(files)} CSV files to {csv_dir}[/green]")

        workbook.close()
        console.print(f"[green]✓ Wrote {len(workbook.sheets)} sheet(s) to {output}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def inspect(
    xlsx_file: Path = typer.Argument(
        ...,
        help="Workbook to inspect",
    ),
) -> None:
    """Show sheets, headers and row counts of an existing workbook."""
    try:
        _require_file(xlsx_file)
        display_summaries(f"Workbook {xlsx_file.name}", sheet_summaries(xlsx_file))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def address(
    value: str = typer.Argument(
        ...,
        help="Cell reference to decode (AA1) or column index to encode (27)",
    ),
    row: int = typer.Argument(
        1,
        help="Row index when encoding",
    ),
) -> None:
    """Convert between cell references and (column, row) indexes."""
    try:
        if value.isdigit():
            console.print(encode_address(int(value), row))
        else:
            col, decoded_row = decode_address(value)
            console.print(f"{col} {decoded_row}")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
