# ==============================================
# HBaseTable
# ==============================================
#
# PURPOSE:
#   Relational view of one HBase table. Holds the resolved
#   columns and checks requested column families against them.
#
# RESOLUTION STATES:
# ------------------
#   UNRESOLVED → RESOLVING → RESOLVED
#        ↑            │
#        └── failure ─┘
#
#   A table built from a definition with declared columns is
#   RESOLVED immediately. Otherwise the columns are discovered
#   from HBase on first access, exactly once, under a per-table
#   lock so concurrent first readers all see the same list.
#   A failed discovery caches nothing.
#
# CLASS: HBaseTable
# -----------------
#   - columns                        → resolved columns (row key first)
#   - row_key_column / row_key_index
#   - get_column(name) / find_column(family, qualifier)
#   - get_column_families()
#   - check_column_families_match(names)
#
# ==============================================

import logging
import threading
import weakref
from enum import Enum
from typing import Iterable, List, Optional

from hbase_mapper.errors import SchemaMismatchError, SchemaResolutionError
from hbase_mapper.schema.column import DEFAULT_ROW_KEY_NAME, HBaseColumn, get_column_families
from hbase_mapper.schema.column_type import ColumnType
from hbase_mapper.schema.resolver import discover_columns, resolve_declared_columns
from hbase_mapper.schema.table_def import SimpleTableDef

logger = logging.getLogger(__name__)


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class HBaseTable:
    """
    Table implementation for HBase.

    If the definition declares columns but not the row-key column
    (see DEFAULT_ROW_KEY_NAME), the row-key column is added first.
    """

    def __init__(
        self,
        table_def: SimpleTableDef,
        schema=None,
        client=None,
        row_key_name: str = DEFAULT_ROW_KEY_NAME,
        default_row_key_type: ColumnType = ColumnType.STRING
    ):
        """
        Args:
            table_def: Definition of the table; without columns they are discovered
            schema: HBaseSchema the table belongs to (held weakly)
            client: HBaseClient used for discovery
            row_key_name: Reserved name of the row-key column
            default_row_key_type: Row-key type when it is not declared
        """
        self.name = table_def.name
        self.row_key_name = row_key_name
        self.default_row_key_type = default_row_key_type
        self._schema_ref = weakref.ref(schema) if schema is not None else None
        self._client = client
        self._lock = threading.Lock()
        self._columns: List[HBaseColumn] = []
        self._state = ResolutionState.UNRESOLVED

        if table_def.has_columns:
            self._columns = resolve_declared_columns(table_def, row_key_name, default_row_key_type)
            self._state = ResolutionState.RESOLVED
        else:
            logger.info("No user-defined columns specified for table %s. Columns will be auto-detected.", self.name)

    def __repr__(self):
        return f"HBaseTable(name={self.name!r}, state={self._state.value})"

    @property
    def schema(self):
        return self._schema_ref() if self._schema_ref is not None else None

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def columns(self) -> List[HBaseColumn]:
        return list(self._resolve())

    def _resolve(self) -> List[HBaseColumn]:
        # Check-and-populate runs under the lock so discovery happens once
        with self._lock:
            if self._state is ResolutionState.RESOLVED:
                return self._columns
            if self._client is None:
                raise SchemaResolutionError(
                    f"Table {self.name} has no declared columns and no client to discover them"
                )
            self._state = ResolutionState.RESOLVING
            try:
                columns = discover_columns(
                    self._client, self.name, self.row_key_name, self.default_row_key_type
                )
            except Exception:
                self._state = ResolutionState.UNRESOLVED
                raise
            self._columns = columns
            self._state = ResolutionState.RESOLVED
            return self._columns

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self._resolve()]

    @property
    def row_key_column(self) -> HBaseColumn:
        for column in self._resolve():
            if column.is_row_key:
                return column
        raise SchemaResolutionError(f"Table {self.name} has no row-key column")

    @property
    def row_key_index(self) -> int:
        """Index of the row-key column within ``columns`` (always 0)."""
        return self._resolve().index(self.row_key_column)

    def get_column(self, name: str) -> Optional[HBaseColumn]:
        for column in self._resolve():
            if column.name == name:
                return column
        return None

    def find_column(self, column_family: str, qualifier: str) -> Optional[HBaseColumn]:
        for column in self._resolve():
            if column.column_family == column_family and column.qualifier == qualifier:
                return column
        return None

    def get_column_families(self) -> List[str]:
        return get_column_families(self._resolve())

    def check_column_families_match(self, column_families: Iterable[str]) -> None:
        """
        Check that every given column family exists in this table.

        Args:
            column_families: Names of the column families to check

        Raises:
            SchemaMismatchError: for the first family that doesn't exist
        """
        existing = set(self.get_column_families())
        for column_family in column_families:
            if column_family not in existing:
                raise SchemaMismatchError(column_family, self.name)
