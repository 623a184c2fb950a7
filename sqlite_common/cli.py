"""Command line inspection of SQLite files"""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from .accessor import DatabaseAccessor
from .display import render_tables
from .errors import AccessorError

console = Console()


class InspectionAccessor(DatabaseAccessor):
    """Accessor that defines no tables of its own"""

    table_creation_queries = {}

    def list_tables(self):
        """Return (name, row count) for every user table"""
        names = self.execute_query(
            """
            SELECT name FROM sqlite_master
            WHERE type = 'table' AND name NOT LIKE 'sqlite_%'
            ORDER BY name
            """,
            mapper=lambda cursor: [row[0] for row in cursor.fetchall()],
        )
        rows = []
        for name in names:
            quoted = name.replace('"', '""')
            count = self.execute_query(
                f'SELECT COUNT(*) FROM "{quoted}"',
                mapper=lambda cursor: cursor.fetchone()[0],
            )
            rows.append((name, count))
        return rows


def parse_args(argv=None):
    """Parse command line arguments"""
    import argparse

    parser = argparse.ArgumentParser(
        prog="sqlite-common",
        description="Inspect a SQLite database file",
    )
    parser.add_argument("database", help="Path or file: URI of the database")
    parser.add_argument("--compress", default=None, metavar="TEXT")
    parser.add_argument("--decompress", default=None, metavar="TEXT")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)

    # Opening a missing file would create an empty database
    target, uri = DatabaseAccessor._resolve_url(args.database)
    if not uri and not Path(target).exists():
        console.print(f"[red]Error: {args.database} does not exist[/red]")
        return 1

    try:
        with InspectionAccessor(args.database) as db:
            console.print(render_tables(db.list_tables()))

            if args.compress is not None:
                console.print(db.compress(args.compress), markup=False)
            if args.decompress is not None:
                console.print(db.decompress(args.decompress), markup=False)
    except (AccessorError, sqlite3.Error) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
