# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# HBase itself is replaced by an in-memory fake of the parts of
# happybase the mapper uses:
#   - FakePool        → ConnectionPool.connection() context manager
#   - FakeConnection  → table(), tables(), create/disable/delete_table()
#   - FakeTable       → row(), put(), delete(), scan(), families()
#
# Every store call is recorded in `store.calls` so tests can
# assert what did (or did not) reach HBase.
#
# ==============================================

from contextlib import contextmanager

import pytest

from hbase_mapper.config import AppConfig, SchemaConfig
from hbase_mapper.data_context import HBaseDataContext
from hbase_mapper.storage.hbase_client import HBaseClient


class FakeStore:
    """Shared state behind every fake connection."""

    def __init__(self):
        self.tables = {}      # name -> {"families": [...], "rows": {key: {col: value}}, "enabled": bool}
        self.calls = []
        self.fail_with = None

    def add_table(self, name, families, rows=None):
        self.tables[name] = {"families": list(families), "rows": dict(rows or {}), "enabled": True}

    def record(self, *call):
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    def call_names(self):
        return [call[0] for call in self.calls]


class FakeTable:
    def __init__(self, store, name):
        self._store = store
        self.name = name

    def _data(self):
        try:
            return self._store.tables[self.name]
        except KeyError:
            raise OSError(f"Table {self.name} not found") from None

    def families(self):
        self._store.record("families", self.name)
        return {family.encode(): {"max_versions": 3} for family in self._data()["families"]}

    def row(self, row):
        self._store.record("row", self.name, row)
        return dict(self._data()["rows"].get(row, {}))

    def put(self, row, data):
        self._store.record("put", self.name, row, dict(data))
        self._data()["rows"].setdefault(row, {}).update(data)

    def delete(self, row):
        self._store.record("delete", self.name, row)
        self._data()["rows"].pop(row, None)

    def scan(self, limit=None):
        self._store.record("scan", self.name, limit)
        rows = sorted(self._data()["rows"].items())
        for i, (key, cells) in enumerate(rows):
            if limit is not None and i >= limit:
                return
            yield key, dict(cells)


class FakeConnection:
    def __init__(self, store):
        self._store = store

    def table(self, name):
        return FakeTable(self._store, name)

    def tables(self):
        self._store.record("tables")
        return [name.encode() for name in self._store.tables]

    def create_table(self, name, families):
        self._store.record("create_table", name, dict(families))
        if not families:
            # happybase refuses this before talking to HBase
            raise ValueError(f"Cannot create table {name!r} (no column families specified)")
        if name in self._store.tables:
            raise OSError(f"Table {name} already exists")
        self._store.add_table(name, list(families))

    def disable_table(self, name):
        self._store.record("disable_table", name)
        self._store.tables[name]["enabled"] = False

    def delete_table(self, name):
        self._store.record("delete_table", name)
        if self._store.tables[name]["enabled"]:
            raise OSError(f"Table {name} must be disabled first")
        del self._store.tables[name]


class FakePool:
    def __init__(self, store):
        self.store = store
        self.checked_out = 0
        self.checkouts = 0

    @contextmanager
    def connection(self, timeout=None):
        self.checked_out += 1
        self.checkouts += 1
        try:
            yield FakeConnection(self.store)
        finally:
            self.checked_out -= 1


@pytest.fixture
def store():
    """An empty in-memory HBase."""
    return FakeStore()


@pytest.fixture
def pool(store):
    return FakePool(store)


@pytest.fixture
def client(pool):
    return HBaseClient(pool)


@pytest.fixture
def config():
    return AppConfig(schema=SchemaConfig(schema_name="test"))


@pytest.fixture
def context(config, pool):
    return HBaseDataContext(config=config, pool=pool)
