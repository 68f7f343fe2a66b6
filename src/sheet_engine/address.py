"""
Cell Address Conversion

A1-style cell references: bijective base-26 column letters followed by the
row number.
"""
from __future__ import annotations

from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from sheet_engine.errors import AddressDecodeError, AddressRangeExceeded


# Last column of the xlsx format ("XFD")
MAX_COLUMNS = 16384
MAX_ROW = 2**31 - 1


def _check_column(col: int) -> None:
    if col <= 0:
        raise AddressRangeExceeded(f"Column index must be greater than 0, got {col}")
    if col > MAX_COLUMNS:
        raise AddressRangeExceeded(f"Column index {col} exceeds the maximum of {MAX_COLUMNS}")


def column_letter(col: int) -> str:
    """Return the column letters for a 1-based column index."""
    _check_column(col)
    return get_column_letter(col)


def encode_address(col: int, row: int) -> str:
    """
    Encode a 1-based (column, row) pair as a cell reference.

    >>> encode_address(27, 5)
    'AA5'
    """
    if row <= 0 or row > MAX_ROW:
        raise AddressRangeExceeded(f"Row index {row} is outside 1..{MAX_ROW}")
    return f"{column_letter(col)}{row}"


def decode_address(text: str) -> tuple[int, int]:
    """
    Decode a cell reference into a 1-based (column, row) pair.

    Column letters are case-insensitive. Absolute markers ("$A$1") are accepted.
    """
    if not isinstance(text, str) or not text.strip():
        raise AddressDecodeError(f"Invalid cell reference: {text!r}")
    try:
        letters, row = coordinate_from_string(text.strip())
    except CellCoordinatesException as e:
        raise AddressDecodeError(f"Invalid cell reference: {text!r}") from e
    try:
        col = column_index_from_string(letters)
    except ValueError as e:
        raise AddressRangeExceeded(f"Column {letters!r} exceeds the maximum of {MAX_COLUMNS}") from e
    _check_column(col)
    if row > MAX_ROW:
        raise AddressRangeExceeded(f"Row index {row} is outside 1..{MAX_ROW}")
    return col, row
