# ==============================================
# ColumnType
# ==============================================
#
# PURPOSE:
#   Declared type of a mapped column, and the fixed type given
#   to columns derived from a whole column family.
#
# ENUM: ColumnType
# ----------------
#   STRING, VARCHAR, INTEGER, BIGINT, FLOAT, DOUBLE,
#   BOOLEAN, BINARY, MAP
#   - parse(value) -> ColumnType   (member name or value)
#
# CONSTANT:
# ---------
#   DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES = ColumnType.MAP
#
# ==============================================

from enum import Enum


class ColumnType(Enum):
    """
    Declared type of a mapped column.

    Values are only used to decide how stored text is read back;
    everything is written to HBase as its canonical string form.
    """
    STRING = "string"
    VARCHAR = "varchar"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BINARY = "binary"
    MAP = "map"

    @classmethod
    def parse(cls, value: "str | ColumnType") -> "ColumnType":
        # Accept either the member name ("BIGINT") or its value ("bigint")
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls[text.upper()]
        except KeyError:
            return cls(text.lower())

    @property
    def is_text(self) -> bool:
        return self in (ColumnType.STRING, ColumnType.VARCHAR)

    @property
    def is_number(self) -> bool:
        return self in (ColumnType.INTEGER, ColumnType.BIGINT, ColumnType.FLOAT, ColumnType.DOUBLE)


# Column families are schemaless, so a family-derived column holds
# a qualifier -> value map rather than one scalar.
DEFAULT_COLUMN_TYPE_FOR_COLUMN_FAMILIES = ColumnType.MAP
