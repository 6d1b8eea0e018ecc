# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception hierarchy for the whole mapper so callers can
#   catch HBaseMapperError and still tell the failure kinds apart.
#
# CLASSES:
# --------
# - HBaseMapperError        → base class
# - InvalidArgumentError    → bad inputs to a CRUD call (raised before any I/O)
# - TableDefinitionError    → a SimpleTableDef that cannot be resolved
# - SchemaMismatchError     → a column family that is not part of a table
# - DataAccessError         → wrapped failure talking to HBase
# - SchemaResolutionError   → column discovery against HBase failed
# - TableNotFoundError      → a table name unknown to the schema
#
# ==============================================


class HBaseMapperError(Exception):
    """Base class for every error raised by hbase_mapper."""


class InvalidArgumentError(HBaseMapperError, ValueError):
    """Missing or malformed argument passed to a CRUD operation."""


class TableDefinitionError(HBaseMapperError, ValueError):
    """
    Raised when a table definition is ambiguous.

    Examples:
        - the row-key column name is declared twice
        - column_names and column_types have different lengths
    """


class SchemaMismatchError(HBaseMapperError):
    """A requested column family does not exist in the resolved table."""

    def __init__(self, column_family: str, table_name: str):
        self.column_family = column_family
        self.table_name = table_name
        super().__init__(
            f"ColumnFamily: {column_family} doesn't exist in the schema of the table {table_name}"
        )


class DataAccessError(HBaseMapperError):
    """
    Wraps a failure of the underlying HBase client.

    Notes:
        The original exception is always chained (``raise ... from e``)
        and never retried.
    """


class SchemaResolutionError(DataAccessError):
    """The columns of a table could not be discovered from HBase."""


class TableNotFoundError(HBaseMapperError, LookupError):
    """No table with the given name exists in the schema."""
