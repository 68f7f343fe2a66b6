"""
Sheet Tab

One named sheet of a workbook: header columns, body rows and the
pending/included lifecycle.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

import pandas as pd

from sheet_engine.columns import ColumnRegistry
from sheet_engine.models import Column, Row
from sheet_engine.rows import RowBuilder
from sheet_engine.values import encode_value

if TYPE_CHECKING:
    from sheet_engine.workbook import Workbook


logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_DATA_ROW = 2


class SheetTab:
    """
    Accumulates rows for one sheet.

    A sheet starts pending and joins the workbook's sheet directory on its
    first data-carrying write. Rows are held in memory until the workbook is
    closed. Not thread-safe: callers serialize writes to the same sheet.
    """

    def __init__(
        self,
        workbook: "Workbook",
        name: str,
        never_include: bool = False,
        allow_new_columns: bool = True,
        header: Optional[Sequence[tuple[int, str]]] = None,
        last_row: int = HEADER_ROW,
    ):
        """
        Args:
            workbook: Owning workbook
            name: Sheet name, already sanitized by the caller
            never_include: Never add this sheet to the workbook directory
            allow_new_columns: False for a fixed schema
            header: ``(column index, name)`` pairs of an existing header row
            last_row: Last used row of an existing sheet
        """
        self.workbook = workbook
        self.name = name
        self.never_include = never_include
        self.sheet_id: Optional[int] = None
        self.columns = ColumnRegistry(allow_new_columns=allow_new_columns)
        for index, column_name in header or ():
            self.columns.register_existing(column_name, index)
        self.first_row = max(last_row + 1, FIRST_DATA_ROW)
        self.next_row = self.first_row
        self._rows: list[Row] = []
        self._builder = RowBuilder(self.columns)

    def __repr__(self) -> str:
        state = "included" if self.included else "pending"
        return f"SheetTab({self.name!r}, {state}, columns={len(self.columns)}, rows={len(self._rows)})"

    @property
    def included(self) -> bool:
        return self.sheet_id is not None

    @property
    def allow_new_columns(self) -> bool:
        return self.columns.allow_new_columns

    @property
    def header(self) -> list[str]:
        return self.columns.names()

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column(self, name: str) -> Optional[Column]:
        return self.columns.get(name)

    def row(self, index: int) -> Optional[Row]:
        """Return the body row with the given 1-based sheet row index."""
        position = index - self.first_row
        if 0 <= position < len(self._rows):
            return self._rows[position]
        return None

    def ensure_inclusion(self) -> None:
        """Add the sheet to the workbook directory, once."""
        if self.included or self.never_include:
            return
        self.workbook._include(self)

    def add_rows(
        self,
        parameters: Mapping[str, Any],
        results: Mapping[str, Sequence[Any]],
    ) -> list[int]:
        """
        Append one batch of rows.

        Args:
            parameters: Scalar values repeated on every produced row
            results: Arrays contributing one element per produced row

        Returns:
            Row indexes written, in ascending order (empty for an empty batch)
        """
        self.workbook._check_open()
        if not parameters and not results:
            return []
        self.ensure_inclusion()

        # Rows are only appended once the whole batch has been built
        rows = self._builder.build(parameters, results, self.next_row)
        self._rows.extend(rows)
        self.next_row += len(rows)
        return [row.index for row in rows]

    def set_cell(self, row_index: int, name: str, value: Any) -> bool:
        """
        Replace the value of one cell in an already written row.

        The column is created if needed and allowed. Returns False when a fixed
        schema drops the column.

        Raises:
            KeyError: If the sheet has no body row with that index
        """
        self.workbook._check_open()
        row = self.row(row_index)
        if row is None:
            raise KeyError(row_index)
        index = self.columns.resolve_or_create(name)
        if index is None:
            return False
        cell = encode_value(value)
        self.columns.observe(index, cell.width)
        row.set(index, cell)
        return True

    def to_frame(self) -> pd.DataFrame:
        """Body rows as a DataFrame with the header names as columns."""
        columns = self.columns.columns
        records = []
        for row in self._rows:
            records.append([
                row.cells[c.index].value if c.index in row.cells else None
                for c in columns
            ])
        return pd.DataFrame(
            records,
            columns=[c.name for c in columns],
            index=[row.index for row in self._rows],
        )
