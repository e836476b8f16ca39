#!/usr/bin/env python3
# roninshell/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    SGR_CODES,
    ansi_code,
    color_enabled,
    colorize,
    reset_color_cache,
    strip_ansi,
    visible_width,
)
from .console import PRINT_MUTEX, get_terminal_columns, print_line

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
]
