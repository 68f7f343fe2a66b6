"""
Cell Value Encoding

Chooses the cell type of a supplied value from its runtime type.
"""
from __future__ import annotations

import math
import numbers
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from sheet_engine.models import CellKind, CellValue


def _naive_utc(value: datetime) -> datetime:
    # xlsx stores no timezone information
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _unwrap_scalar(value: Any) -> Any:
    # numpy bool, integer and float scalars convert to builtins
    if type(value).__module__ != "numpy":
        return value
    kind = getattr(getattr(value, "dtype", None), "kind", "")
    return value.item() if kind in ("b", "i", "u", "f") else value


def _encode_float(value: float, rendered: str) -> CellValue:
    # xlsx has no representation for NaN or infinities
    if math.isnan(value):
        return CellValue(CellKind.TEXT, "NaN", "NaN")
    if math.isinf(value):
        text = "Infinity" if value > 0 else "-Infinity"
        return CellValue(CellKind.TEXT, text, text)
    return CellValue(CellKind.FLOAT, value, rendered)


def encode_value(value: Any) -> CellValue:
    """
    Encode a Python value as a typed cell.

    bool is tested before the integer check since it is an int subclass.
    Non-finite floats become text. Anything unrecognized, including None,
    becomes text.
    """
    value = _unwrap_scalar(value)
    if isinstance(value, bool):
        return CellValue(CellKind.BOOLEAN, value, str(value))
    if isinstance(value, numbers.Integral):
        return CellValue(CellKind.INTEGER, int(value), str(int(value)))
    if isinstance(value, Decimal):
        return _encode_float(float(value), str(value))
    if isinstance(value, numbers.Real):
        return _encode_float(float(value), str(float(value)))
    if isinstance(value, datetime):
        return CellValue(CellKind.DATETIME, _naive_utc(value), str(value))
    if isinstance(value, date):
        return CellValue(CellKind.DATETIME, value, value.isoformat())
    if isinstance(value, str):
        return CellValue(CellKind.TEXT, value, value)
    if value is None:
        return CellValue(CellKind.TEXT, "", "")
    text = str(value)
    return CellValue(CellKind.TEXT, text, text)
