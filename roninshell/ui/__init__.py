#!/usr/bin/env python3
# roninshell/ui/__init__.py
from __future__ import annotations

"""Terminal output: colors, tables, console locking and logging setup."""

from .utils import (
    SGR_CODES,
    ansi_code,
    color_enabled,
    colorize,
    reset_color_cache,
    strip_ansi,
    visible_width,
    PRINT_MUTEX,
    get_terminal_columns,
    print_line,
)
from .static import (
    format_columns,
    format_table,
    ColorizingStreamHandler,
    PlainFormatter,
    init_logger,
)

__all__ = [
    "SGR_CODES",
    "ansi_code",
    "color_enabled",
    "colorize",
    "reset_color_cache",
    "strip_ansi",
    "visible_width",
    "PRINT_MUTEX",
    "get_terminal_columns",
    "print_line",
    "format_columns",
    "format_table",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "init_logger",
]
