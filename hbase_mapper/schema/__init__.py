# ==============================================
# SCHEMA: relational view of HBase tables
# ==============================================
#
# This package decides which columns a table exposes and how
# they map onto HBase column families and qualifiers.
#
# Modules:
# --------
# - column_type.py  → ColumnType enum
# - column.py       → HBaseColumn and column-list helpers
# - table_def.py    → SimpleTableDef (user-declared definition)
# - resolver.py     → declared / discovered column resolution
# - table.py        → HBaseTable (memoized, locked resolution)
# - schema.py       → HBaseSchema (collection of tables)
#
# ==============================================

from .column_type import ColumnType, DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES
from .column import (
    DEFAULT_ROW_KEY_NAME,
    HBaseColumn,
    column_family_of,
    find_row_key_index,
    get_column_families,
    without_row_key,
)
from .table_def import SimpleTableDef
from .resolver import discover_columns, resolve_declared_columns
from .table import HBaseTable, ResolutionState
from .schema import HBaseSchema

__all__ = [
    "ColumnType",
    "DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES",
    "DEFAULT_ROW_KEY_NAME",
    "HBaseColumn",
    "column_family_of",
    "find_row_key_index",
    "get_column_families",
    "without_row_key",
    "SimpleTableDef",
    "discover_columns",
    "resolve_declared_columns",
    "HBaseTable",
    "ResolutionState",
    "HBaseSchema",
]
