"""
Unit Tests for the Row Builder
"""
from sheet_engine.columns import ColumnRegistry
from sheet_engine.rows import RowBuilder, row_count


class TestRowCount:

    def test_no_results_gives_one_row(self):
        assert row_count({}) == 1

    def test_longest_array_wins(self):
        assert row_count({"a": [1], "b": [1, 2, 3], "c": []}) == 3

    def test_all_empty_arrays_gives_one_row(self):
        assert row_count({"a": [], "b": []}) == 1


class TestRowBuilder:
    """Building rows from parameters and result arrays."""

    def test_fan_out(self):
        builder = RowBuilder(ColumnRegistry())
        rows = builder.build({"Step": "A"}, {"X": [1, 2, 3]}, first_row=2)

        assert [r.index for r in rows] == [2, 3, 4]
        for row, expected in zip(rows, [1, 2, 3]):
            assert row.values() == {1: "A", 2: expected}

    def test_short_arrays_leave_cells_empty(self):
        reg = ColumnRegistry()
        rows = RowBuilder(reg).build({}, {"X": [1, 2], "Y": [9]}, first_row=2)
        y = reg.resolve("Y")[0]
        assert rows[0].get(y).value == 9
        assert rows[1].get(y) is None

    def test_cells_ordered_by_column(self):
        reg = ColumnRegistry()
        for name in ["A", "B", "C"]:
            reg.resolve_or_create(name)
        rows = RowBuilder(reg).build({"C": 3, "A": 1, "B": 2}, {}, first_row=2)
        assert [col for col, _ in rows[0]] == [1, 2, 3]

    def test_widths_observed(self):
        reg = ColumnRegistry()
        RowBuilder(reg).build({"P": "a much longer value"}, {"X": [1, 123456]}, first_row=2)
        assert reg.get("P").width == len("a much longer value")
        assert reg.get("X").width == 6

    def test_fixed_schema_drops_fields(self):
        reg = ColumnRegistry(allow_new_columns=False)
        reg.register_existing("A", 1)
        reg.register_existing("B", 2)
        rows = RowBuilder(reg).build({"A": 1, "C": 5}, {"B": [7]}, first_row=2)
        assert len(reg) == 2
        assert rows[0].values() == {1: 1, 2: 7}
