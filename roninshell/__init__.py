#!/usr/bin/env python3
# roninshell/__init__.py
from __future__ import annotations
"""
roninshell: a masterless shell.

Avoid eager imports here; subpackages expose their APIs via their own
__init__.py files.
"""

__version__ = "1.0.0"

# The description output in the usage message
DESCRIPTION = "A masterless shell (浪人)."


def version_string() -> str:
    """Return the library's version string."""
    return f"roninshell {__version__}"
