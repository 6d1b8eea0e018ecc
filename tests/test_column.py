# ==============================================
# Tests for the Column Model
# ==============================================

import pytest

from hbase_mapper.errors import TableDefinitionError
from hbase_mapper.schema import (
    ColumnType,
    HBaseColumn,
    column_family_of,
    find_row_key_index,
    get_column_families,
    without_row_key,
)


class TestHBaseColumn:
    def test_family_only_name(self):
        column = HBaseColumn.from_name("info", 2, ColumnType.MAP)
        assert column.column_family == "info"
        assert column.qualifier == ""
        assert column.cell_name == "info:"
        assert not column.is_row_key

    def test_family_and_qualifier_name(self):
        column = HBaseColumn.from_name("address:city", 3, ColumnType.STRING)
        assert column.column_family == "address"
        assert column.qualifier_name == "city"
        assert column.cell_name == "address:city"

    def test_row_key_name_gives_row_key_column(self):
        column = HBaseColumn.from_name("_id", 1, ColumnType.BIGINT)
        assert column.is_row_key
        assert column.column_family is None
        assert column.qualifier_name == "_id"

    def test_custom_row_key_name(self):
        column = HBaseColumn.from_name("id", 1, ColumnType.STRING, row_key_name="id")
        assert column.is_row_key

    def test_row_key_has_no_cell_name(self):
        with pytest.raises(ValueError):
            HBaseColumn.row_key("_id", 1, ColumnType.STRING).cell_name

    def test_position_starts_at_one(self):
        with pytest.raises(ValueError):
            HBaseColumn.from_name("info", 0, ColumnType.MAP)

    def test_regular_column_needs_family(self):
        with pytest.raises(ValueError):
            HBaseColumn.from_name(":orphan", 2, ColumnType.STRING)


class TestColumnHelpers:
    @pytest.fixture
    def columns(self):
        return [
            HBaseColumn.row_key("_id", 1, ColumnType.STRING),
            HBaseColumn.from_name("info:name", 2, ColumnType.STRING),
            HBaseColumn.from_name("address", 3, ColumnType.MAP),
            HBaseColumn.from_name("info:age", 4, ColumnType.INTEGER),
        ]

    def test_column_family_of(self, columns):
        assert column_family_of(columns[0]) == "_id"
        assert column_family_of(columns[1]) == "info"

    def test_get_column_families_is_distinct_and_ordered(self, columns):
        assert get_column_families(columns) == ["info", "address"]

    def test_without_row_key(self, columns):
        assert [c.name for c in without_row_key(columns)] == ["info:name", "address", "info:age"]


class TestFindRowKeyIndex:
    def test_found(self):
        assert find_row_key_index(["name", "_id", "age"]) == 1

    def test_not_found(self):
        assert find_row_key_index(["name", "age"]) is None

    def test_empty(self):
        assert find_row_key_index([]) is None

    def test_duplicate_is_rejected(self):
        with pytest.raises(TableDefinitionError):
            find_row_key_index(["_id", "name", "_id"])
