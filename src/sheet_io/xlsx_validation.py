"""Read-back helpers for checking written workbooks."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from openpyxl import load_workbook


@dataclass(frozen=True)
class SheetSummary:
    name: str
    header: list[str]
    body_rows: int


def load_workbook_values(path: str | Path):
    return load_workbook(path, data_only=False)


def read_header(wb, sheet: str) -> list[Any]:
    ws = wb[sheet]
    header = [cell.value for cell in ws[1]]
    while header and header[-1] is None:
        header.pop()
    return header


def read_rows(wb, sheet: str) -> list[list[Any]]:
    ws = wb[sheet]
    return [list(row) for row in ws.iter_rows(min_row=2, values_only=True)]


def sheet_summaries(path: str | Path) -> list[SheetSummary]:
    wb = load_workbook(path, read_only=True)
    summaries = []
    for ws in wb.worksheets:
        rows = ws.iter_rows(values_only=True)
        first = next(rows, None) or ()
        header = [str(v) for v in first if v is not None]
        body = sum(1 for row in rows if any(v is not None for v in row))
        summaries.append(SheetSummary(name=ws.title, header=header, body_rows=body))
    wb.close()
    return summaries
