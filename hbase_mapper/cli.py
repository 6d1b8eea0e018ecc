# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line access to the mapper.
#
# COMMANDS:
# ---------
#   python -m hbase_mapper.cli tables
#   python -m hbase_mapper.cli describe users
#   python -m hbase_mapper.cli create-table users info address
#   python -m hbase_mapper.cli drop-table users
#   python -m hbase_mapper.cli put users 42 info:name=John address:city=Paris
#   python -m hbase_mapper.cli get users 42
#   python -m hbase_mapper.cli delete users 42
#
# Connection settings come from the environment / .env
# (see config.py).
#
# ==============================================

import argparse
import logging
import sys
from typing import List, Optional

from hbase_mapper.data_context import HBaseDataContext
from hbase_mapper.errors import HBaseMapperError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hbase-mapper", description="Relational view of HBase tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("tables", help="list tables")

    describe = commands.add_parser("describe", help="show the resolved columns of a table")
    describe.add_argument("table")

    create = commands.add_parser("create-table", help="create a table")
    create.add_argument("table")
    create.add_argument("families", nargs="+")

    drop = commands.add_parser("drop-table", help="disable and drop a table")
    drop.add_argument("table")

    put = commands.add_parser("put", help="insert one row")
    put.add_argument("table")
    put.add_argument("row_key")
    put.add_argument("cells", nargs="+", metavar="column=value")

    get = commands.add_parser("get", help="read one row")
    get.add_argument("table")
    get.add_argument("row_key")

    delete = commands.add_parser("delete", help="delete one row")
    delete.add_argument("table")
    delete.add_argument("row_key")
    return parser


def _parse_cells(cells: List[str]) -> dict:
    row = {}
    for cell in cells:
        name, separator, value = cell.partition("=")
        if not separator:
            raise argparse.ArgumentTypeError(f"Expected column=value, got '{cell}'")
        row[name] = value
    return row


def run(args: argparse.Namespace, context: HBaseDataContext) -> int:
    if args.command == "tables":
        for name in context.get_schema().table_names:
            print(name)
    elif args.command == "describe":
        for column in context.get_table(args.table).columns:
            family = column.column_family or "(row key)"
            print(f"{column.position:>3}  {column.name:<30} {family:<20} {column.column_type.name}")
    elif args.command == "create-table":
        context.create_table(args.table, args.families)
        print(f"✓ Created table {args.table}")
    elif args.command == "drop-table":
        context.drop_table(args.table)
        print(f"✓ Dropped table {args.table}")
    elif args.command == "put":
        row = _parse_cells(args.cells)
        row[context.row_key_name] = args.row_key
        context.insert(args.table, row)
        print(f"✓ Inserted row {args.row_key} into {args.table}")
    elif args.command == "get":
        row = context.get_row(args.table, args.row_key)
        if row is None:
            print(f"Row {args.row_key} not found in {args.table}")
            return 1
        for name, value in row.items():
            print(f"{name} = {value}")
    elif args.command == "delete":
        context.delete(args.table, args.row_key)
        print(f"✓ Deleted row {args.row_key} from {args.table}")
    return 0


def main(argv: Optional[List[str]] = None, context: Optional[HBaseDataContext] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        return run(args, context or HBaseDataContext())
    except (HBaseMapperError, argparse.ArgumentTypeError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
