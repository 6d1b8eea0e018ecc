# ==============================================
# HBaseSchema
# ==============================================
#
# PURPOSE:
#   Named collection of the HBaseTables a data context exposes.
#   Owns its tables; each table only points back at it weakly.
#
# CLASS: HBaseSchema
# ------------------
#   - add_table(table) / remove_table(name) / get_table(name)
#   - table_names, tables    → in registration order
#
# ==============================================

from collections import OrderedDict
from typing import List, Optional

from hbase_mapper.errors import TableNotFoundError


class HBaseSchema:
    """Named collection of HBaseTables, kept in registration order."""

    def __init__(self, name: str):
        self.name = name
        self._tables = OrderedDict()

    def __repr__(self):
        return f"HBaseSchema(name={self.name!r}, tables={self.table_names})"

    def __contains__(self, table_name: str) -> bool:
        return table_name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def table_names(self) -> List[str]:
        return list(self._tables)

    @property
    def tables(self) -> list:
        return list(self._tables.values())

    def add_table(self, table) -> None:
        self._tables[table.name] = table

    def remove_table(self, table_name: str) -> Optional[object]:
        return self._tables.pop(table_name, None)

    def get_table(self, table_name: str):
        try:
            return self._tables[table_name]
        except KeyError:
            raise TableNotFoundError(f"Table {table_name} doesn't exist in schema {self.name}") from None
