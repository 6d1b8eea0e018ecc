# ==============================================
# HBase Table Mapper
# ==============================================
#
# Package Structure:
#
# hbase_mapper/
# ├── schema/           # Columns, table definitions, resolution
# ├── storage/          # HBaseClient + value codec
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── data_context.py   # HBaseDataContext entry point
# └── cli.py            # Command line entry point
#
# ==============================================

from hbase_mapper.data_context import HBaseDataContext
from hbase_mapper.schema import ColumnType, HBaseColumn, HBaseTable, SimpleTableDef

__version__ = "0.1.0"

__all__ = [
    "HBaseDataContext",
    "ColumnType",
    "HBaseColumn",
    "HBaseTable",
    "SimpleTableDef",
]
