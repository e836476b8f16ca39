#!/usr/bin/env python3
# roninshell/ui/static/__init__.py
from __future__ import annotations
from .table import format_columns, format_table
from .logging import ColorizingStreamHandler, PlainFormatter, init_logger

__all__ = [
    "format_columns",
    "format_table",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "init_logger",
]
