#!/usr/bin/env python3
# roninshell/ui/utils/console.py
from __future__ import annotations

import shutil
import sys
import threading
from typing import TextIO

# Shell output and log records share one lock so lines never interleave
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Write one line; `file` defaults to whatever sys.stdout is right now."""
    stream = sys.stdout if file is None else file
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()


def get_terminal_columns(default: int = 80) -> int:
    """Width of the controlling terminal ($COLUMNS, then the tty), or `default`."""
    return shutil.get_terminal_size((default, 24)).columns
