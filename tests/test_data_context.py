# ==============================================
# Tests for HBaseDataContext
# ==============================================

import pytest

from hbase_mapper.config import AppConfig, SchemaConfig
from hbase_mapper.data_context import HBaseDataContext
from hbase_mapper.errors import InvalidArgumentError, SchemaMismatchError, TableNotFoundError
from hbase_mapper.schema import ColumnType, ResolutionState, SimpleTableDef


@pytest.fixture
def people_def():
    return SimpleTableDef(
        "people", ["info:name", "_id", "info:age"], [ColumnType.STRING, ColumnType.BIGINT, ColumnType.INTEGER]
    )


class TestSchema:
    def test_declared_tables_first_then_store_tables(self, config, pool, store, people_def):
        store.add_table("people", ["info"])
        store.add_table("orders", ["line"])
        context = HBaseDataContext(config=config, pool=pool, table_defs=[people_def])

        schema = context.get_schema()
        assert schema.name == "test"
        assert schema.table_names == ["people", "orders"]
        assert schema.get_table("people").state is ResolutionState.RESOLVED
        # Store tables are discovered lazily
        assert schema.get_table("orders").state is ResolutionState.UNRESOLVED
        assert "families" not in store.call_names()

    def test_schema_is_built_once(self, context, store):
        assert context.get_schema() is context.get_schema()
        assert store.call_names().count("tables") == 1

    def test_unknown_table(self, context):
        with pytest.raises(TableNotFoundError):
            context.get_table("nope")

    def test_custom_row_key_name(self, pool, store):
        store.add_table("users", ["info"])
        config = AppConfig(schema=SchemaConfig(row_key_name="key", default_row_key_type=ColumnType.BIGINT))
        context = HBaseDataContext(config=config, pool=pool)
        row_key = context.get_table("users").row_key_column
        assert row_key.name == "key"
        assert row_key.column_type is ColumnType.BIGINT


class TestCreateAndDrop:
    def test_create_registers_table(self, context, store):
        table = context.create_table("users", ["_id", "info", "address"])

        assert store.tables["users"]["families"] == ["info", "address"]
        assert context.get_table("users") is table
        assert [(c.name, c.position) for c in table.columns] == [("_id", 1), ("info", 2), ("address", 3)]
        assert table.columns[1].column_type is ColumnType.MAP

    def test_repeated_family_names_collapse(self, context, store):
        table = context.create_table("users", ["info", "address", "info"])

        assert store.tables["users"]["families"] == ["info", "address"]
        assert context.get_table("users") is table
        assert table.column_names == ["_id", "info", "address"]

    def test_create_declared_table_checks_families(self, config, pool, store, people_def):
        context = HBaseDataContext(config=config, pool=pool, table_defs=[people_def])
        with pytest.raises(SchemaMismatchError):
            context.create_table("people", ["info", "extra"])
        assert "create_table" not in store.call_names()

        assert context.create_table("people", ["info"]) is context.get_table("people")
        assert "people" in store.tables

    def test_drop_unregisters_table(self, context, store):
        context.create_table("users", ["info"])
        context.drop_table("users")
        assert "users" not in store.tables
        assert "users" not in context.get_schema()


class TestRows:
    @pytest.fixture
    def people(self, config, pool, store, people_def):
        store.add_table("people", ["info"])
        return HBaseDataContext(config=config, pool=pool, table_defs=[people_def])

    def test_insert_and_get_row(self, people, store):
        people.insert("people", {"_id": 7, "info:name": "John", "info:age": 31})

        assert store.tables["people"]["rows"] == {b"7": {b"info:name": b"John", b"info:age": b"31"}}
        assert people.get_row("people", 7) == {"_id": 7, "info:name": "John", "info:age": 31}

    def test_get_missing_row(self, people):
        assert people.get_row("people", 1) is None

    def test_insert_without_row_key(self, people, store):
        with pytest.raises(InvalidArgumentError):
            people.insert("people", {"info:name": "John"})
        assert "put" not in store.call_names()

    def test_insert_unknown_family(self, people, store):
        with pytest.raises(SchemaMismatchError) as excinfo:
            people.insert("people", {"_id": 1, "billing:iban": "X"})
        assert excinfo.value.column_family == "billing"
        assert "put" not in store.call_names()

    def test_discovered_family_accepts_any_qualifier(self, context, store):
        store.add_table("events", ["data"])
        context.insert("events", {"_id": "e1", "data": {"kind": "click", "x": 10}, "data:y": 20})

        assert store.tables["events"]["rows"][b"e1"] == {b"data:kind": b"click", b"data:x": b"10", b"data:y": b"20"}
        assert context.get_row("events", "e1") == {"_id": "e1", "data": {"kind": "click", "x": "10", "y": "20"}}

    def test_delete(self, people, store):
        people.insert("people", {"_id": 7, "info:name": "John"})
        people.delete("people", 7)
        people.delete("people", 7)
        assert store.tables["people"]["rows"] == {}
        assert store.call_names().count("delete") == 1

    def test_scan_honours_max_rows(self, pool, store):
        store.add_table("events", ["data"], rows={
            b"1": {b"data:a": b"x"}, b"2": {b"data:a": b"y"}, b"3": {b"data:a": b"z"},
        })
        context = HBaseDataContext(config=AppConfig(schema=SchemaConfig(max_rows=2)), pool=pool)

        rows = context.scan("events")
        assert rows == [{"_id": "1", "data": {"a": "x"}}, {"_id": "2", "data": {"a": "y"}}]
        assert len(context.scan("events", limit=1)) == 1
