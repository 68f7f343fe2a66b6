"""
Sheet I/O Writers

Serialize an in-memory workbook to XLSX, and export sheets to CSV.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from sheet_engine.address import column_letter
from sheet_engine.errors import PersistFailure
from sheet_engine.models import CellKind, CellValue
from sheet_engine.settings import WorkbookSettings

if TYPE_CHECKING:
    from sheet_engine.sheet import SheetTab
    from sheet_engine.workbook import Workbook as SheetWorkbook


logger = logging.getLogger(__name__)

VBA_SUFFIXES = (".xlsm", ".xltm")
TEMPLATE_SUFFIXES = (".xltx", ".xltm")


def _style_header(ws, columns: list[int]) -> None:
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="2E75B6", end_color="2E75B6", fill_type="solid")
    thin_border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    for col in columns:
        cell = ws.cell(row=1, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = thin_border
        cell.alignment = Alignment(horizontal="center")


def _auto_fit_columns(ws, sheet: "SheetTab", max_width: int) -> None:
    for column in sheet.columns:
        letter = column_letter(column.index)
        width = min(column.width + 2, max_width)
        if column.from_template and letter in ws.column_dimensions:
            # Never narrow a column the template sized itself
            width = max(width, ws.column_dimensions[letter].width or 0)
        ws.column_dimensions[letter].width = width


def _write_cell(ws, row: int, col: int, cell: CellValue, settings: WorkbookSettings) -> None:
    value = cell.value
    if cell.kind == CellKind.TEXT:
        value = ILLEGAL_CHARACTERS_RE.sub("", value)
    target = ws.cell(row=row, column=col, value=value)
    if cell.kind == CellKind.TEXT and value.startswith("="):
        # Text that looks like a formula stays text
        target.data_type = "s"
    elif cell.kind == CellKind.DATETIME:
        target.number_format = settings.date_format


def _write_sheet(ws, sheet: "SheetTab", settings: WorkbookSettings) -> None:
    new_header_cols = []
    for column in sheet.columns:
        if column.from_template:
            continue
        ws.cell(row=1, column=column.index, value=column.name)
        new_header_cols.append(column.index)

    for row in sheet.rows:
        for col, cell in row:
            _write_cell(ws, row.index, col, cell, settings)

    if settings.style_header:
        # Existing template headers keep their own styling
        _style_header(ws, new_header_cols)
    if settings.auto_fit:
        _auto_fit_columns(ws, sheet, settings.max_column_width)


def _open_target_book(workbook: "SheetWorkbook", path: Path) -> Workbook:
    template = workbook.template
    if template is None:
        wb = Workbook()
        if not workbook.is_empty:
            wb.remove(wb.active)
        return wb
    wb = load_workbook(template, keep_vba=template.suffix.lower() in VBA_SUFFIXES)
    wb.template = path.suffix.lower() in TEMPLATE_SUFFIXES
    return wb


def save_workbook(workbook: "SheetWorkbook", path: str | Path) -> Path:
    """
    Write every included sheet of ``workbook`` to ``path``.

    Sheets are written in directory order. A workbook with no included sheets
    is saved with a single blank sheet.

    Raises:
        PersistFailure: If the destination exists and overwriting is disabled,
            or the file cannot be written
    """
    path = Path(path)
    settings = workbook.settings

    if path.exists() and not settings.overwrite:
        raise PersistFailure(f"Destination already exists: {path}")

    wb = _open_target_book(workbook, path)
    for sheet in workbook.sheets:
        if sheet.name in wb.sheetnames:
            ws = wb[sheet.name]
        else:
            ws = wb.create_sheet(title=sheet.name)
        _write_sheet(ws, sheet, settings)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except OSError as e:
        logger.error("Failed to save workbook to %s: %s", path, e)
        raise PersistFailure(f"Cannot write workbook to {path}: {e}") from e

    logger.info("Saved %d sheet(s) to %s", len(workbook.sheets), path)
    return path


def export_csv(workbook: "SheetWorkbook", output_dir: str | Path) -> list[Path]:
    """
    Export included sheets to CSV files (one per sheet).

    Args:
        workbook: Workbook to export
        output_dir: Directory to write CSV files

    Returns:
        List of created file paths
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    created_files = []
    for sheet in workbook.sheets:
        file_path = output_dir / f"{sheet.name}.csv"
        sheet.to_frame().to_csv(file_path, index=False)
        created_files.append(file_path)

    return created_files
