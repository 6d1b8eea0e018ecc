# ==============================================
# Schema Resolver
# ==============================================
#
# PURPOSE:
#   Produce the ordered list of HBaseColumns for a table.
#
# TWO PATHS:
# ----------
#   1. resolve_declared_columns(table_def, ...)
#        The user declared columns. The row-key column keeps the
#        position it was declared at; if it was not declared at all
#        it is synthesized at position 1 and every declared column
#        shifts one position to the right.
#
#   2. discover_columns(client, table_name, ...)
#        Nothing was declared. Ask HBase for the table's column
#        families: row key at position 1, one MAP column per family
#        from position 2 on. Qualifiers are not discovered (that
#        would need a full scan).
#
#   In both cases the returned list starts with the row-key column,
#   followed by the other columns in declaration / store order.
#
# ==============================================

import logging
from typing import List

from hbase_mapper.errors import SchemaResolutionError
from hbase_mapper.schema.column import DEFAULT_ROW_KEY_NAME, HBaseColumn, find_row_key_index
from hbase_mapper.schema.column_type import DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES, ColumnType
from hbase_mapper.schema.table_def import SimpleTableDef

logger = logging.getLogger(__name__)


def resolve_declared_columns(
    table_def: SimpleTableDef,
    row_key_name: str = DEFAULT_ROW_KEY_NAME,
    default_row_key_type: ColumnType = ColumnType.STRING
) -> List[HBaseColumn]:
    """
    Build the columns of a table from its declared definition.

    Args:
        table_def: Definition with at least one declared column
        row_key_name: Reserved name of the row-key column
        default_row_key_type: Type of the row key when it is not declared

    Returns:
        Row-key column first, then the declared columns in order
    """
    column_names = table_def.column_names
    column_types = table_def.column_types

    row_key_index = find_row_key_index(column_names, row_key_name)
    row_key_found = row_key_index is not None

    # Positions start from 1
    if row_key_found:
        columns = [HBaseColumn.row_key(row_key_name, row_key_index + 1, column_types[row_key_index])]
        offset = 1
    else:
        columns = [HBaseColumn.row_key(row_key_name, 1, default_row_key_type)]
        offset = 2

    for i, name in enumerate(column_names):
        if name != row_key_name:
            columns.append(HBaseColumn.from_name(name, i + offset, column_types[i], row_key_name))
    return columns


def discover_columns(
    client,
    table_name: str,
    row_key_name: str = DEFAULT_ROW_KEY_NAME,
    default_row_key_type: ColumnType = ColumnType.STRING
) -> List[HBaseColumn]:
    """
    Discover the columns of a table from its column families in HBase.

    Args:
        client: HBaseClient used to read the table descriptor
        table_name: Name of the HBase table
        row_key_name: Reserved name of the row-key column
        default_row_key_type: Type given to the row-key column

    Returns:
        Row-key column at position 1, one column per family after it

    Raises:
        SchemaResolutionError: if the table cannot be read
    """
    try:
        families = client.column_families(table_name)
    except Exception as e:
        raise SchemaResolutionError(f"Could not resolve table {table_name}") from e

    # The row key type is never inferred from stored data
    columns = [HBaseColumn.row_key(row_key_name, 1, default_row_key_type)]
    for i, family in enumerate(families):
        columns.append(
            HBaseColumn(name=family, column_family=family, qualifier="", position=i + 2,
                        column_type=DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES)
        )
    logger.info("Discovered %d column families for table %s", len(families), table_name)
    return columns
