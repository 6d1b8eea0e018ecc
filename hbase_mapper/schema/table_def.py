# ==============================================
# SimpleTableDef
# ==============================================
#
# PURPOSE:
#   The user-authored description of a table: its name and,
#   optionally, the columns it should expose. An empty column
#   list means "discover the columns from HBase".
#
# DATA CLASS: SimpleTableDef
# --------------------------
#   - name: str
#   - column_names: tuple[str, ...]
#   - column_types: tuple[ColumnType, ...]   (aligned with column_names)
#
#   Validation happens at construction:
#     - lengths of names and types must match
#     - no column name may appear twice (this covers the row key)
#
# ==============================================

from dataclasses import dataclass, field
from typing import Tuple

from hbase_mapper.errors import TableDefinitionError
from hbase_mapper.schema.column_type import ColumnType


@dataclass(frozen=True)
class SimpleTableDef:
    name: str
    column_names: Tuple[str, ...] = field(default_factory=tuple)
    column_types: Tuple[ColumnType, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise TableDefinitionError("A table definition needs a name")
        # Allow lists and type names to be passed in, store tuples of ColumnType
        object.__setattr__(self, "column_names", tuple(self.column_names or ()))
        object.__setattr__(
            self, "column_types", tuple(ColumnType.parse(t) for t in (self.column_types or ()))
        )

        if len(self.column_names) != len(self.column_types):
            raise TableDefinitionError(
                f"Table '{self.name}' declares {len(self.column_names)} column names "
                f"but {len(self.column_types)} column types"
            )

        seen = set()
        for name in self.column_names:
            if name in seen:
                raise TableDefinitionError(f"Column '{name}' is declared more than once in table '{self.name}'")
            seen.add(name)

    @property
    def has_columns(self) -> bool:
        return len(self.column_names) > 0
