"""Table cell codec and grid formatting.

Callback-style parsers hand table rows and cells over as flat strings, so
rows are packed with sentinel delimiters that survive the text transforms
applied to prose, and unpacked again right before the grid is drawn.

Sentinels are chosen to be unlikely in prose, not impossible: a cell whose
content contains one of them is split wrongly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from io import StringIO
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

TABLE_CELL_SPLIT = '^*||*^'
TABLE_ROW_WRAP = '*|*|*|*'


def pack_cell(content: str) -> str:
    return content + TABLE_CELL_SPLIT


def pack_row(content: str) -> str:
    """Wrap already packed cells of one row."""
    return TABLE_ROW_WRAP + content + TABLE_ROW_WRAP + '\n'


def pack_rows(rows: Sequence[Sequence[str]]) -> str:
    """Encode a grid of cell strings into one flat string.

    Args:
        rows: Rows of cell strings (cells must not contain newlines)

    Returns:
        Packed grid, one wrapped row per line
    """
    return ''.join(pack_row(''.join(pack_cell(cell) for cell in row)) for row in rows)


def unpack_rows(
    text: str, transform: Callable[[str], str] | None = None
) -> list[list[str]]:
    """Decode a packed grid back into rows of cells.

    Args:
        text: Packed grid from ``pack_rows`` (or tablerow/tablecell callbacks)
        transform: Applied to the packed text before splitting

    Returns:
        Rows of cell strings; empty input gives no rows
    """
    if not text:
        return []
    if transform is not None:
        text = transform(text)

    rows = []
    for line in text.split('\n'):
        if not line:
            continue
        cells = line.replace(TABLE_ROW_WRAP, '').split(TABLE_CELL_SPLIT)
        # Trailing cell separator leaves an empty last segment
        rows.append(cells[:-1])
    return rows


def format_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    width: int,
    table_options: Mapping[str, Any] | None = None,
) -> str:
    """Draw a boxed grid with rich.

    Cells may already carry ANSI styling; it is parsed back into rich text so
    column widths are measured on printable characters only.

    Args:
        header: Header cells
        rows: Body rows
        width: Maximum table width in columns
        table_options: Extra keyword arguments for ``rich.table.Table``

    Returns:
        Table text without trailing newline
    """
    table = Table(**{'box': box.SQUARE, 'highlight': False, **(table_options or {})})
    for cell in header:
        table.add_column(Text.from_ansi(cell))
    for row in rows:
        table.add_row(*(Text.from_ansi(cell) for cell in row))

    console = Console(
        file=StringIO(),
        width=width,
        force_terminal=True,
        color_system='truecolor',
        highlight=False,
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(table, end='')
    return capture.get().rstrip('\n')
