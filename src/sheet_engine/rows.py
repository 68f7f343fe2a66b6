"""
Row Builder

Turns a batch of named parameters and result arrays into physical rows.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from sheet_engine.columns import ColumnRegistry
from sheet_engine.models import Row
from sheet_engine.values import encode_value


def row_count(results: Mapping[str, Sequence[Any]]) -> int:
    """Number of physical rows a batch produces: the longest array, at least 1."""
    return max([1] + [len(values) for values in results.values()])


class RowBuilder:
    """Resolves field names against a column registry and fills rows."""

    def __init__(self, registry: ColumnRegistry):
        self.registry = registry

    def _resolve_all(self, names) -> dict[str, int]:
        resolved: dict[str, int] = {}
        for name in names:
            index = self.registry.resolve_or_create(name)
            if index is not None:
                resolved[name] = index
        return resolved

    def build(
        self,
        parameters: Mapping[str, Any],
        results: Mapping[str, Sequence[Any]],
        first_row: int,
    ) -> list[Row]:
        """
        Build the rows for one batch, starting at row index ``first_row``.

        Every parameter is repeated on each produced row; element ``i`` of a
        result array lands on row ``first_row + i``. Names dropped by a fixed
        schema are skipped.
        """
        # Parameters first, then results: new columns are created in that order
        param_columns = self._resolve_all(parameters)
        result_columns = self._resolve_all(results)

        param_cells = {}
        for name, index in param_columns.items():
            cell = encode_value(parameters[name])
            self.registry.observe(index, cell.width)
            param_cells[index] = cell

        rows = []
        for i in range(row_count(results)):
            row = Row(index=first_row + i, cells=dict(param_cells))
            for name, index in result_columns.items():
                values = results[name]
                if len(values) > i:
                    cell = encode_value(values[i])
                    self.registry.observe(index, cell.width)
                    row.set(index, cell)
            rows.append(row)
        return rows
