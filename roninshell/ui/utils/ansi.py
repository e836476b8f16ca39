#!/usr/bin/env python3
# roninshell/ui/utils/ansi.py
from __future__ import annotations

"""
SGR escape helpers.

Attributes are named the way terminals document them ('bold', 'red',
'on_blue'); ansi_code() turns a list of names into one escape sequence and
colorize() wraps text in it. Nothing is emitted when the terminal (or the
user, through NO_COLOR) says no.
"""

import os
import re
from typing import Optional

SGR_CODES: dict[str, int] = {
    "reset": 0,
    "bold": 1,
    "dark": 2,
    "underline": 4,
    "blink": 5,
    "reverse": 7,
    "concealed": 8,
    **{name: 30 + offset for offset, name in enumerate(
        ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"))},
    **{f"on_{name}": 40 + offset for offset, name in enumerate(
        ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"))},
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# TERM values known to render SGR sequences
_COLOR_TERM_RE = re.compile(r"vt10[03]|xterm|linux|screen|tmux|rxvt|ansi", re.IGNORECASE)

_color_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def visible_width(text: str) -> int:
    """Length of text as the terminal shows it."""
    return len(strip_ansi(text))


def color_enabled() -> bool:
    """
    Decide once whether to emit escapes.

    NO_COLOR (https://no-color.org) wins, then FORCE_COLOR, then TERM.
    """
    global _color_enabled_cache
    if _color_enabled_cache is None:
        if os.environ.get("NO_COLOR"):
            _color_enabled_cache = False
        elif os.environ.get("FORCE_COLOR"):
            _color_enabled_cache = True
        else:
            _color_enabled_cache = bool(_COLOR_TERM_RE.search(os.environ.get("TERM", "")))
    return _color_enabled_cache


def reset_color_cache() -> None:
    """Forget the cached decision, e.g. after the environment changed."""
    global _color_enabled_cache
    _color_enabled_cache = None


def ansi_code(*attributes: str) -> str:
    """Escape sequence for the named attributes; unknown names are ignored."""
    if not color_enabled():
        return ""
    codes = [str(SGR_CODES[name]) for name in attributes if name in SGR_CODES]
    return f"\x1b[{';'.join(codes)}m" if codes else ""


def colorize(text: str, *attributes: str) -> str:
    """
    Wrap text in the given attributes and a reset.

    Trailing whitespace (a line ending, usually) stays outside the colored
    span.
    """
    start = ansi_code(*attributes)
    if not start:
        return text
    body = text.rstrip()
    return f"{start}{body}{ansi_code('reset')}{text[len(body):]}"
