"""
Column Registry

Maps column names to stable 1-based indexes for a single sheet.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from sheet_engine.address import MAX_COLUMNS
from sheet_engine.errors import AddressRangeExceeded
from sheet_engine.models import Column, ColumnState


logger = logging.getLogger(__name__)


class ColumnRegistry:
    """
    Column lookup for one sheet.

    Indexes are assigned in first-seen order and never change. When
    ``allow_new_columns`` is False the registry is fixed: unknown names
    resolve to nothing and no column is created.
    """

    def __init__(self, allow_new_columns: bool = True):
        self.allow_new_columns = allow_new_columns
        self._by_name: dict[str, Column] = {}
        self._by_index: dict[int, Column] = {}

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    @property
    def columns(self) -> list[Column]:
        """Columns ordered by index."""
        return [self._by_index[i] for i in sorted(self._by_index)]

    @property
    def last_index(self) -> int:
        return max(self._by_index, default=0)

    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    def get(self, name: str) -> Optional[Column]:
        return self._by_name.get(name)

    def register_existing(self, name: str, index: int) -> Column:
        """Register a column read from an existing header (template case)."""
        if index <= 0 or index > MAX_COLUMNS:
            raise AddressRangeExceeded(f"Header column {index} is outside 1..{MAX_COLUMNS}")
        if name in self._by_name:
            logger.debug("Duplicate header %r at column %d ignored", name, index)
            return self._by_name[name]
        column = Column(
            name=name,
            index=index,
            width=len(name),
            state=ColumnState.PROVISIONAL,
            from_template=True,
        )
        self._by_name[name] = column
        self._by_index[index] = column
        return column

    def resolve(self, name: str) -> tuple[int, bool]:
        """Return ``(index, found)``; index is 0 when the name is unknown."""
        column = self._by_name.get(name)
        if column is None:
            return 0, False
        return column.index, True

    def resolve_or_create(self, name: str) -> Optional[int]:
        """
        Return the index of ``name``, creating the column when permitted.

        Returns None when the name is unknown and new columns are not allowed.
        """
        index, found = self.resolve(name)
        if found:
            return index
        if not self.allow_new_columns:
            logger.debug("Dropping unknown column %r (fixed schema)", name)
            return None

        index = self.last_index + 1
        if index > MAX_COLUMNS:
            raise AddressRangeExceeded(
                f"Cannot add column {name!r}: sheet already has {MAX_COLUMNS} columns"
            )
        column = Column(name=name, index=index, width=len(name))
        self._by_name[name] = column
        self._by_index[index] = column
        logger.debug("Created column %r at index %d", name, index)
        return index

    def observe(self, index: int, width: int) -> None:
        """Record the rendered width of a value written through a column."""
        self._by_index[index].observe(width)
