"""Plain-text table rendering for error reports."""
import io
from typing import List, Sequence

from rich.box import ASCII
from rich.console import Console
from rich.table import Table


def to_table_string(header: Sequence[str], rows: List[Sequence[str]]) -> str:
    table = Table(box=ASCII, show_lines=False)
    for column in header:
        table.add_column(column, overflow="fold")
    for row in rows:
        table.add_row(*row)

    buffer = io.StringIO()
    console = Console(file=buffer, width=160, no_color=True, highlight=False)
    console.print(table)
    return buffer.getvalue()
