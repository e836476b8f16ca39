#!/usr/bin/env python3
# roninshell/ui/static/table.py
from __future__ import annotations

"""
Plain-text layouts for builtin output.

format_table  - rows of cells, with optional headers and a '+---+' frame
format_columns - a list of names laid out column-major across the terminal,
                 the way ls prints a directory
"""

import math
from typing import Iterable, Optional, Sequence

from roninshell.ui.utils import get_terminal_columns, visible_width


def _pad(cell: str, width: int, align: str = "<") -> str:
    gap = " " * max(width - visible_width(cell), 0)
    return f"{gap}{cell}" if align == ">" else f"{cell}{gap}"


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    align: str = "",
    border: bool = True,
) -> str:
    """
    Render rows as a table; widths ignore ANSI escapes.

    `align` has one character per column, '<' (the default) or '>'.
    With border=False cells are only separated by two spaces, which is what
    `ls -l` wants.
    """
    body = [[str(cell) for cell in row] for row in rows]
    head = None if headers is None else [str(cell) for cell in headers]
    every_row = body if head is None else [head, *body]
    if not every_row:
        return ""

    column_count = max(len(row) for row in every_row)
    widths = [0] * column_count
    for row in every_row:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], visible_width(cell))
    alignment = align.ljust(column_count, "<")

    def render(row: Sequence[str]) -> str:
        cells = [_pad(cell, widths[i], alignment[i]) for i, cell in enumerate(row)]
        if not border:
            return "  ".join(cells).rstrip()
        return "| " + " | ".join(cells) + " |"

    if not border:
        return "\n".join(render(row) for row in every_row)

    rule = "+" + "+".join("-" * (width + 2) for width in widths) + "+"
    lines = [rule]
    if head is not None:
        lines += [render(head), rule]
    lines += [render(row) for row in body]
    lines.append(rule)
    return "\n".join(lines)


def format_columns(items: Iterable[object], width: Optional[int] = None, *, gap: int = 2) -> str:
    """Lay items out in as many columns as fit in `width` (the terminal by default)."""
    cells = [str(item) for item in items]
    if not cells:
        return ""

    width = width or get_terminal_columns()
    cell_width = max(visible_width(cell) for cell in cells)
    per_line = max(1, (width + gap) // (cell_width + gap))
    line_count = math.ceil(len(cells) / per_line)

    lines = []
    for line_index in range(line_count):
        column = cells[line_index::line_count]
        lines.append((" " * gap).join(_pad(cell, cell_width) for cell in column).rstrip())
    return "\n".join(lines)
