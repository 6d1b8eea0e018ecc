# ==============================================
# HBaseClient
# ==============================================
#
# PURPOSE:
#   Performs the row and table operations against HBase:
#   single-row insert and delete, point lookups, scans, and
#   table create / drop.
#
# WHY THIS CLASS EXISTS:
#   The schema layer decides WHICH family/qualifier a column
#   maps to; this class does the actual writes. It also owns the
#   error policy at the store boundary:
#     - bad arguments  → InvalidArgumentError, before any I/O
#     - store failures → DataAccessError, never retried
#     - deleting a missing row → warning, no error
#
# CLASS: HBaseClient
# ------------------
#   Stateless apart from the connection pool.
#
#   Constructor:
#   ------------
#   - __init__(pool, row_key_name="_id")
#       pool is a happybase.ConnectionPool (or anything with a
#       `connection()` context manager yielding a happybase.Connection)
#
#   Methods:
#   --------
#   - insert_row(table_name, columns, values, row_key_index) -> None
#   - delete_row(table_name, row_key) -> None
#   - row_exists(table_name, row_key) -> bool
#   - get_row(table_name, row_key) -> dict[bytes, bytes]
#   - scan(table_name, limit=None) -> list[tuple[bytes, dict]]
#   - create_table(table_name, column_families) -> None
#   - drop_table(table_name) -> None
#   - column_families(table_name) -> list[str]
#   - list_tables() -> list[str]
#   - table_exists(table_name) -> bool
#
#   Every operation checks a connection out of the pool for the
#   duration of that one call only.
#
# ==============================================

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from happybase.pool import NoConnectionsAvailable
from thriftpy2.thrift import TException

from hbase_mapper.errors import DataAccessError, InvalidArgumentError
from hbase_mapper.schema.column import DEFAULT_ROW_KEY_NAME, HBaseColumn
from hbase_mapper.storage.codec import ENCODING, encode_value

logger = logging.getLogger(__name__)

# Failures raised by happybase / thrift / the socket layer
STORE_ERRORS = (TException, OSError, NoConnectionsAvailable)


class HBaseClient:
    def __init__(self, pool, row_key_name: str = DEFAULT_ROW_KEY_NAME):
        self._pool = pool
        self.row_key_name = row_key_name

    @contextmanager
    def _connection(self, action: str):
        # Check out one connection and wrap any store failure
        try:
            with self._pool.connection() as connection:
                yield connection
        except STORE_ERRORS as e:
            raise DataAccessError(f"Could not {action}: {e}") from e

    def insert_row(
        self,
        table_name: str,
        columns: Sequence[HBaseColumn],
        values: Sequence[Any],
        row_key_index: int
    ) -> None:
        """
        Insert a single row of values into an HBase table.

        Args:
            table_name: Name of the HBase table
            columns: Columns the values belong to, aligned by position
            values: Values to write; values[row_key_index] is the row key
            row_key_index: Position of the row-key value in values

        Raises:
            InvalidArgumentError: when any parameter is None or row_key_index is impossible
            DataAccessError: when HBase fails
        """
        if (
            table_name is None or columns is None or values is None
            or row_key_index is None or not 0 <= row_key_index < len(values)
            or values[row_key_index] is None
        ):
            raise InvalidArgumentError(
                "Can't insert a row without having (correct) table_name, columns, values or row_key_index"
            )
        if len(columns) != len(values):
            raise InvalidArgumentError(
                f"Got {len(columns)} columns but {len(values)} values for table {table_name}"
            )

        # Build the whole mutation before touching the store
        row_key = encode_value(values[row_key_index])
        data: Dict[bytes, bytes] = {}
        for i, column in enumerate(columns):
            if i == row_key_index or values[i] is None:
                continue
            if column.is_row_key:
                raise InvalidArgumentError(
                    f"Column {column.name} is the row key but row_key_index is {row_key_index}"
                )
            data[column.cell_name.encode(ENCODING)] = encode_value(values[i])

        with self._connection(f"insert a row into table {table_name}") as connection:
            connection.table(table_name).put(row_key, data)
        logger.debug("Inserted row %r into %s (%d cells)", row_key, table_name, len(data))

    def delete_row(self, table_name: str, row_key: Any) -> None:
        """
        Delete one row based on its key. A missing row is not an error.

        Raises:
            InvalidArgumentError: when any parameter is None
            DataAccessError: when HBase fails
        """
        if table_name is None or row_key is None:
            raise InvalidArgumentError("Can't delete a row without having table_name or row_key")
        key = encode_value(row_key)
        with self._connection(f"delete a row from table {table_name}") as connection:
            table = connection.table(table_name)
            if table.row(key):
                table.delete(key)
                logger.debug("Deleted row %r from %s", key, table_name)
            else:
                logger.warning("Row key with value %s doesn't exist in table %s", row_key, table_name)

    def row_exists(self, table_name: str, row_key: Any) -> bool:
        return bool(self.get_row(table_name, row_key))

    def get_row(self, table_name: str, row_key: Any) -> Dict[bytes, bytes]:
        # Point lookup; an empty dict means the row doesn't exist
        if table_name is None or row_key is None:
            raise InvalidArgumentError("Can't look up a row without having table_name or row_key")
        with self._connection(f"read a row from table {table_name}") as connection:
            return connection.table(table_name).row(encode_value(row_key))

    def scan(self, table_name: str, limit: Optional[int] = None) -> List[Tuple[bytes, Dict[bytes, bytes]]]:
        """
        Read rows in row-key order.

        The rows are read completely before the connection goes back
        to the pool, so keep `limit` small for big tables.
        """
        if table_name is None:
            raise InvalidArgumentError("Can't scan without having table_name")
        if limit is not None and limit < 1:
            raise InvalidArgumentError(f"Scan limit must be positive, got {limit}")
        with self._connection(f"scan table {table_name}") as connection:
            return list(connection.table(table_name).scan(limit=limit))

    def create_table(self, table_name: str, column_families: Iterable[str]) -> None:
        """
        Create an HBase table with the given column families.

        The row-key name is skipped: the row key is implicit row
        addressing, not a stored family.

        Raises:
            InvalidArgumentError: when any parameter is None or there are no families
            DataAccessError: when HBase fails
        """
        families = list(column_families) if column_families is not None else []
        descriptors = {family: dict() for family in families if family != self.row_key_name}
        if table_name is None or not descriptors:
            raise InvalidArgumentError("Can't create a table without having the table_name or column_families")

        with self._connection(f"create table {table_name}") as connection:
            connection.create_table(table_name, descriptors)
        logger.info("Created table %s with column families %s", table_name, list(descriptors))

    def drop_table(self, table_name: str) -> None:
        """
        Disable and drop a table.

        Raises:
            InvalidArgumentError: when table_name is None
            DataAccessError: when HBase fails
        """
        if table_name is None:
            raise InvalidArgumentError("Can't drop a table without having the table_name")
        with self._connection(f"drop table {table_name}") as connection:
            # A table must be disabled before it can be deleted
            connection.disable_table(table_name)
            connection.delete_table(table_name)
        logger.info("Dropped table %s", table_name)

    def column_families(self, table_name: str) -> List[str]:
        with self._connection(f"read the descriptor of table {table_name}") as connection:
            families = connection.table(table_name).families()
        return [_to_str(name) for name in families]

    def list_tables(self) -> List[str]:
        with self._connection("list tables") as connection:
            return [_to_str(name) for name in connection.tables()]

    def table_exists(self, table_name: str) -> bool:
        return table_name in self.list_tables()


def _to_str(name) -> str:
    # happybase reports names as bytes; families may carry a trailing ':'
    if isinstance(name, bytes):
        name = name.decode(ENCODING)
    return name.rstrip(":")
