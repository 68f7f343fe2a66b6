"""
Sheet Engine Core Data Models

Cells, columns and rows of the in-memory sheet table.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterator, Union


class CellKind(str, Enum):
    """Storage type of a cell value."""
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATETIME = "datetime"


class ColumnState(str, Enum):
    """Whether a column has been confirmed by written data."""
    PROVISIONAL = "provisional"  # scanned from a template header, not yet written
    RESOLVED = "resolved"


CellData = Union[int, float, bool, str, datetime, date]


# ============================================================================
# CELLS
# ============================================================================

@dataclass(frozen=True)
class CellValue:
    """A typed cell value together with its textual rendering."""
    kind: CellKind
    value: CellData
    rendered: str

    @property
    def width(self) -> int:
        return len(self.rendered)


# ============================================================================
# COLUMNS AND ROWS
# ============================================================================

@dataclass
class Column:
    """A named column of a sheet."""
    name: str
    index: int
    width: int = 0
    state: ColumnState = ColumnState.RESOLVED
    from_template: bool = False

    def observe(self, rendered_width: int) -> None:
        """Widen the column to fit a written value and mark it resolved."""
        self.width = max(self.width, rendered_width)
        self.state = ColumnState.RESOLVED

    @property
    def provisional(self) -> bool:
        return self.state == ColumnState.PROVISIONAL


@dataclass
class Row:
    """A physical body row: sparse mapping of column index to cell value."""
    index: int
    cells: dict[int, CellValue] = field(default_factory=dict)

    def set(self, column: int, value: CellValue) -> None:
        self.cells[column] = value

    def get(self, column: int) -> CellValue | None:
        return self.cells.get(column)

    def __iter__(self) -> Iterator[tuple[int, CellValue]]:
        """Iterate cells in ascending column order."""
        for column in sorted(self.cells):
            yield column, self.cells[column]

    def __len__(self) -> int:
        return len(self.cells)

    def values(self) -> dict[int, CellData]:
        return {column: cell.value for column, cell in self}
