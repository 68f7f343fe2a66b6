"""
Unit Tests for the Column Registry
"""
import pytest

from sheet_engine.address import MAX_COLUMNS
from sheet_engine.columns import ColumnRegistry
from sheet_engine.errors import AddressRangeExceeded
from sheet_engine.models import ColumnState


class TestResolve:
    """Lookup and on-demand creation."""

    def test_unknown_name(self):
        reg = ColumnRegistry()
        assert reg.resolve("X") == (0, False)

    def test_create_in_first_seen_order(self):
        reg = ColumnRegistry()
        assert reg.resolve_or_create("B") == 1
        assert reg.resolve_or_create("A") == 2
        assert reg.resolve_or_create("B") == 1
        assert reg.names() == ["B", "A"]
        assert reg.resolve("A") == (2, True)

    def test_names_are_case_sensitive(self):
        reg = ColumnRegistry()
        assert reg.resolve_or_create("value") == 1
        assert reg.resolve_or_create("Value") == 2
        assert len(reg) == 2

    def test_header_width_is_name_length(self):
        reg = ColumnRegistry()
        reg.resolve_or_create("Frequency")
        assert reg.get("Frequency").width == len("Frequency")

    def test_fixed_schema_drops_unknown(self):
        reg = ColumnRegistry(allow_new_columns=False)
        reg.register_existing("A", 1)
        assert reg.resolve_or_create("C") is None
        assert reg.resolve_or_create("A") == 1
        assert "C" not in reg
        assert len(reg) == 1


class TestObserve:
    """Width tracking."""

    def test_width_grows_only(self):
        reg = ColumnRegistry()
        index = reg.resolve_or_create("X")
        reg.observe(index, 10)
        reg.observe(index, 3)
        assert reg.get("X").width == 10

    def test_observe_resolves_template_column(self):
        reg = ColumnRegistry()
        reg.register_existing("Gain", 1)
        assert reg.get("Gain").state == ColumnState.PROVISIONAL
        reg.observe(1, 4)
        assert reg.get("Gain").state == ColumnState.RESOLVED


class TestExistingHeader:
    """Columns scanned from an existing header row."""

    def test_new_columns_follow_last_existing(self):
        reg = ColumnRegistry()
        reg.register_existing("A", 1)
        reg.register_existing("C", 3)
        assert reg.resolve_or_create("D") == 4
        assert [c.index for c in reg.columns] == [1, 3, 4]

    def test_duplicate_header_keeps_leftmost(self):
        reg = ColumnRegistry()
        reg.register_existing("A", 1)
        reg.register_existing("A", 2)
        assert reg.resolve("A") == (1, True)


class TestOverflow:
    """Column limit of the file format."""

    def test_column_past_limit_raises(self):
        reg = ColumnRegistry()
        reg.register_existing("last", MAX_COLUMNS)
        with pytest.raises(AddressRangeExceeded):
            reg.resolve_or_create("one too many")
        assert "one too many" not in reg
