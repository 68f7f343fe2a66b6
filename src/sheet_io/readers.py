"""
Sheet I/O Readers

YAML/JSON input parsing and template workbook scanning.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

import yaml
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from sheet_engine.errors import TemplateError
from sheet_engine.settings import WorkbookSettings
from sheet_io.schema import BatchFile


logger = logging.getLogger(__name__)

TEMPLATE_SUFFIXES = (".xlsx", ".xlsm", ".xltx", ".xltm")


@dataclass
class TemplateSheet:
    """Header and extent of a sheet found in a template file."""
    name: str
    header: list[tuple[int, str]] = field(default_factory=list)
    last_row: int = 1


# ============================================================================
# TEMPLATES
# ============================================================================

def read_template_sheets(path: str | Path) -> list[TemplateSheet]:
    """
    Scan every sheet of a template workbook.

    The header is read left to right from row 1; blank header cells are
    skipped but keep their column position.

    Raises:
        TemplateError: If the file is missing or is not a valid workbook
    """
    path = Path(path)
    if path.suffix.lower() not in TEMPLATE_SUFFIXES:
        raise TemplateError(f"Unsupported template format: {path.suffix}")
    try:
        wb = load_workbook(path)
    except (OSError, InvalidFileException, BadZipFile, KeyError) as e:
        raise TemplateError(f"Cannot open template {path}: {e}") from e

    sheets = []
    try:
        for ws in wb.worksheets:
            header = []
            for cell in ws[1]:
                if cell.value is None or str(cell.value).strip() == "":
                    continue
                header.append((cell.column, str(cell.value)))
            sheets.append(TemplateSheet(name=ws.title, header=header, last_row=max(ws.max_row, 1)))
            logger.debug("Template sheet %r: %d header column(s), last row %d", ws.title, len(header), ws.max_row)
    finally:
        wb.close()
    return sheets


# ============================================================================
# INPUT FILES
# ============================================================================

def read_yaml(path: str | Path) -> Any:
    """Read raw data from a YAML file."""
    path = Path(path)
    with open(path, "r") as f:
        return yaml.safe_load(f)


def read_json(path: str | Path) -> Any:
    """Read raw data from a JSON file."""
    path = Path(path)
    with open(path, "r") as f:
        return json.load(f)


def read_data_file(path: str | Path) -> Any:
    """
    Read raw data from a file (auto-detects format).

    Args:
        path: Path to input file (YAML or JSON)
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        return read_yaml(path)
    elif suffix == ".json":
        return read_json(path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")


def read_settings(path: str | Path) -> WorkbookSettings:
    """Read workbook settings from a YAML or JSON file."""
    data = read_data_file(path) or {}
    return WorkbookSettings.model_validate(data)


def read_batches(path: str | Path) -> BatchFile:
    """
    Read row batches from a YAML or JSON file.

    A bare list is accepted as the list of batches.
    """
    data = read_data_file(path) or {}
    if isinstance(data, list):
        data = {"batches": data}
    return BatchFile.model_validate(data)
