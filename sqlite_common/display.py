"""Terminal rendering for table listings"""

from rich.table import Table
from rich.text import Text


def render_tables(rows):
    """Render (table name, row count) pairs"""
    if not rows:
        return Text("No tables found", style="yellow")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", justify="right")
    for name, count in rows:
        table.add_row(name, str(count))
    return table
