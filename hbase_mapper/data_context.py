# ==============================================
# HBaseDataContext — entry point
# ==============================================
#
# PURPOSE:
#   Ties configuration, the HBaseClient and the HBaseSchema
#   together. Users interact with this class; the schema and
#   storage packages are internal.
#
# HOW IT CONNECTS THE PIECES:
#
#   SimpleTableDef (optional) ──► HBaseTable ──► resolved columns
#                                                     │
#          insert(dict) ── validate families ◄────────┘
#                │
#                ▼
#           HBaseClient ──► happybase pool ──► HBase
#
# CLASS: HBaseDataContext
# -----------------------
#
#   Constructor:
#   ------------
#   - __init__(config=None, pool=None, table_defs=())
#       1. Load config (from .env or passed in)
#       2. Build the connection pool unless one is passed in
#       3. Remember the declared table definitions
#
#   Public Methods:
#   ---------------
#   - get_schema() -> HBaseSchema        (built once)
#   - get_table(name) -> HBaseTable
#   - create_table(name, column_families) -> HBaseTable
#   - drop_table(name) -> None
#   - insert(table_name, row: dict) -> None
#   - delete(table_name, row_key) -> None
#   - get_row(table_name, row_key) -> dict | None
#   - scan(table_name, limit=None) -> list[dict]
#
# ==============================================

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from hbase_mapper.config import AppConfig, create_connection_pool, get_config
from hbase_mapper.errors import InvalidArgumentError, SchemaMismatchError
from hbase_mapper.schema.column import HBaseColumn, column_family_of
from hbase_mapper.schema.column_type import DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES, ColumnType
from hbase_mapper.schema.schema import HBaseSchema
from hbase_mapper.schema.table import HBaseTable
from hbase_mapper.schema.table_def import SimpleTableDef
from hbase_mapper.storage.codec import ENCODING, decode_value
from hbase_mapper.storage.hbase_client import HBaseClient

logger = logging.getLogger(__name__)


class HBaseDataContext:
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        pool=None,
        table_defs: Iterable[SimpleTableDef] = ()
    ):
        self.config = config or get_config()
        if pool is None:
            pool = create_connection_pool(self.config.hbase)
        self.row_key_name = self.config.schema.row_key_name
        self.default_row_key_type = self.config.schema.default_row_key_type
        self.client = HBaseClient(pool, row_key_name=self.row_key_name)
        self._table_defs = list(table_defs)
        self._schema: Optional[HBaseSchema] = None
        self._schema_lock = threading.Lock()

    def _new_table(self, table_def: SimpleTableDef, schema: HBaseSchema) -> HBaseTable:
        return HBaseTable(
            table_def,
            schema=schema,
            client=self.client,
            row_key_name=self.row_key_name,
            default_row_key_type=self.default_row_key_type
        )

    def get_schema(self) -> HBaseSchema:
        """
        Build the schema on first call.

        Declared tables come first, in the order they were passed in;
        every other table HBase lists is added with discovered columns.
        """
        with self._schema_lock:
            if self._schema is None:
                schema = HBaseSchema(self.config.schema.schema_name)
                for table_def in self._table_defs:
                    schema.add_table(self._new_table(table_def, schema))
                for table_name in self.client.list_tables():
                    if table_name not in schema:
                        schema.add_table(self._new_table(SimpleTableDef(table_name), schema))
                logger.info("Built schema %s with %d tables", schema.name, len(schema))
                self._schema = schema
            return self._schema

    def get_table(self, table_name: str) -> HBaseTable:
        return self.get_schema().get_table(table_name)

    def create_table(self, table_name: str, column_families: Iterable[str]) -> HBaseTable:
        """
        Create a table in HBase and register it in the schema.

        If the schema already declares a table with this name, the
        requested families must all be part of it.

        Returns:
            The registered HBaseTable
        """
        # A family set: repeated names collapse, first occurrence keeps its place
        families = list(dict.fromkeys(f for f in (column_families or []) if f != self.row_key_name))
        schema = self.get_schema()
        existing = schema.get_table(table_name) if table_name in schema else None
        if existing is not None:
            existing.check_column_families_match(families)

        self.client.create_table(table_name, families)

        if existing is not None:
            return existing
        table_def = SimpleTableDef(
            table_name,
            [self.row_key_name] + families,
            [self.default_row_key_type] + [DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES] * len(families)
        )
        table = self._new_table(table_def, schema)
        schema.add_table(table)
        return table

    def drop_table(self, table_name: str) -> None:
        self.client.drop_table(table_name)
        self.get_schema().remove_table(table_name)

    def insert(self, table_name: str, row: Dict[str, Any]) -> None:
        """
        Insert one row given as {column name: value}.

        Args:
            table_name: Name of the table
            row: Values keyed by column name; must contain the row key

        Raises:
            InvalidArgumentError: if the row key is missing
            SchemaMismatchError: if a column doesn't exist in the table
        """
        if row is None:
            raise InvalidArgumentError(f"Can't insert an empty row into table {table_name}")
        table = self.get_table(table_name)
        if row.get(self.row_key_name) is None:
            raise InvalidArgumentError(
                f"Can't insert a row into table {table_name} without a value for {self.row_key_name}"
            )

        columns = []
        values = []
        for name, value in row.items():
            column = table.get_column(name) or _cell_column(table, name)
            if column is None:
                raise SchemaMismatchError(name.partition(":")[0], table_name)
            if column.column_type is ColumnType.MAP and isinstance(value, dict):
                # One cell per qualifier of a family-level column
                for qualifier, cell_value in value.items():
                    columns.append(_cell_column(table, f"{column.column_family}:{qualifier}"))
                    values.append(cell_value)
                continue
            columns.append(column)
            values.append(value)

        table.check_column_families_match(
            {column_family_of(c, self.row_key_name) for c in columns if not c.is_row_key}
        )
        row_key_index = next(i for i, c in enumerate(columns) if c.is_row_key)
        self.client.insert_row(table_name, columns, values, row_key_index)

    def delete(self, table_name: str, row_key: Any) -> None:
        self.client.delete_row(table_name, row_key)

    def get_row(self, table_name: str, row_key: Any) -> Optional[Dict[str, Any]]:
        # Point lookup by row key; None when the row doesn't exist
        table = self.get_table(table_name)
        cells = self.client.get_row(table_name, row_key)
        if not cells:
            return None
        return _row_to_dict(table, row_key, cells)

    def scan(self, table_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        table = self.get_table(table_name)
        max_rows = self.config.schema.max_rows
        if max_rows >= 0 and (limit is None or limit > max_rows):
            limit = max_rows
        if limit == 0:
            return []
        rows = self.client.scan(table_name, limit=limit)
        row_key_type = table.row_key_column.column_type
        return [_row_to_dict(table, decode_value(key, row_key_type), cells) for key, cells in rows]


def _cell_column(table: HBaseTable, name: str) -> Optional[HBaseColumn]:
    # "family:qualifier" written into a table that only knows the family
    family, separator, qualifier = name.partition(":")
    if not separator:
        return None
    family_column = table.find_column(family, "")
    if family_column is None:
        return None
    return HBaseColumn(name=name, column_family=family, qualifier=qualifier,
                       position=family_column.position, column_type=ColumnType.STRING)


def _row_to_dict(table: HBaseTable, row_key: Any, cells: Dict[bytes, bytes]) -> Dict[str, Any]:
    """
    Map the raw cells of one row onto the table's columns.

    Cells of a family-level MAP column are collected into a
    {qualifier: value} dict; cells that match no column are dropped.
    """
    result: Dict[str, Any] = {table.row_key_column.name: row_key}
    for raw_name, raw_value in cells.items():
        family, _, qualifier = raw_name.decode(ENCODING).partition(":")
        column = table.find_column(family, qualifier)
        if column is not None and column.column_type is not ColumnType.MAP:
            result[column.name] = decode_value(raw_value, column.column_type)
            continue
        family_column = table.find_column(family, "")
        if family_column is None:
            continue
        if family_column.column_type is ColumnType.MAP:
            result.setdefault(family_column.name, {})[qualifier] = decode_value(raw_value)
        elif qualifier == "":
            result[family_column.name] = decode_value(raw_value, family_column.column_type)
    return result
