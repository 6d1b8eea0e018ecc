# ==============================================
# HBaseColumn
# ==============================================
#
# PURPOSE:
#   Represents one relational column mapped onto HBase's
#   column-family / qualifier structure.
#
# WHY THIS CLASS EXISTS:
#   HBase has no columns in the relational sense, only families
#   (declared when the table is created) and qualifiers (chosen
#   freely at write time). The mapper exposes:
#     - the row key as a synthetic column (no family)
#     - "family"            → the whole family (qualifier "")
#     - "family:qualifier"  → one cell within a family
#
# DATA CLASS: HBaseColumn (frozen)
# --------------------------------
#   - name: str                 → column name as the user sees it
#   - column_family: str | None → None only for the row-key column
#   - qualifier: str            → "" for a family-level column
#   - position: int             → ordinal position, starts at 1
#   - column_type: ColumnType
#   - is_row_key: bool
#
# FUNCTIONS:
# ----------
#   - column_family_of(column, row_key_name) -> str
#   - get_column_families(columns) -> list[str]
#   - without_row_key(columns) -> list[HBaseColumn]
#   - find_row_key_index(column_names, row_key_name) -> int | None
#
# ==============================================

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from hbase_mapper.errors import TableDefinitionError
from hbase_mapper.schema.column_type import ColumnType

# Name of the virtual row-key column unless configured otherwise.
DEFAULT_ROW_KEY_NAME = "_id"

FAMILY_QUALIFIER_SEPARATOR = ":"


@dataclass(frozen=True)
class HBaseColumn:
    name: str
    column_family: Optional[str]
    qualifier: str
    position: int
    column_type: ColumnType
    is_row_key: bool = False

    def __post_init__(self):
        if self.position < 1:
            raise ValueError(f"Column position must be >= 1, got {self.position}")
        if self.is_row_key and self.column_family is not None:
            raise ValueError("The row-key column cannot belong to a column family")
        if not self.is_row_key and not self.column_family:
            raise ValueError(f"Column '{self.name}' needs a column family")

    @classmethod
    def row_key(cls, name: str, position: int, column_type: ColumnType) -> "HBaseColumn":
        return cls(name=name, column_family=None, qualifier="", position=position,
                   column_type=column_type, is_row_key=True)

    @classmethod
    def from_name(
        cls,
        name: str,
        position: int,
        column_type: ColumnType,
        row_key_name: str = DEFAULT_ROW_KEY_NAME
    ) -> "HBaseColumn":
        """
        Build a column from its declared name.

        Args:
            name: "family", "family:qualifier" or the row-key name
            position: Ordinal position (1-based)
            column_type: Declared type
            row_key_name: Reserved name of the row-key column

        Returns:
            HBaseColumn
        """
        if name == row_key_name:
            return cls.row_key(name, position, column_type)
        family, _, qualifier = name.partition(FAMILY_QUALIFIER_SEPARATOR)
        return cls(name=name, column_family=family, qualifier=qualifier,
                   position=position, column_type=column_type)

    @property
    def qualifier_name(self) -> str:
        # The row-key column is addressed by its own name
        return self.name if self.is_row_key else self.qualifier

    @property
    def cell_name(self) -> str:
        """The "family:qualifier" name HBase uses for this column's cells."""
        if self.is_row_key:
            raise ValueError("The row-key column is not stored as a cell")
        return f"{self.column_family}{FAMILY_QUALIFIER_SEPARATOR}{self.qualifier}"


def column_family_of(column: HBaseColumn, row_key_name: str = DEFAULT_ROW_KEY_NAME) -> str:
    # The row-key name doubles as the "family" of the row-key column
    if column.column_family is None:
        return row_key_name
    return column.column_family


def get_column_families(columns: Iterable[HBaseColumn]) -> List[str]:
    """Distinct families of the non-row-key columns, in first-seen order."""
    families: List[str] = []
    for column in without_row_key(columns):
        if column.column_family not in families:
            families.append(column.column_family)
    return families


def without_row_key(columns: Iterable[HBaseColumn]) -> List[HBaseColumn]:
    return [column for column in columns if not column.is_row_key]


def find_row_key_index(column_names: Sequence[str], row_key_name: str = DEFAULT_ROW_KEY_NAME) -> Optional[int]:
    """
    Find where the row-key column was declared.

    Args:
        column_names: Declared column names, in order
        row_key_name: Reserved name of the row-key column

    Returns:
        0-based index of the row-key name, or None when it is not declared

    Raises:
        TableDefinitionError: if the row-key name is declared more than once
    """
    matches = [i for i, name in enumerate(column_names) if name == row_key_name]
    if len(matches) > 1:
        raise TableDefinitionError(
            f"Row-key column '{row_key_name}' is declared {len(matches)} times at positions {matches}"
        )
    return matches[0] if matches else None
