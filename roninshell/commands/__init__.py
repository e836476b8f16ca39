#!/usr/bin/env python3
# roninshell/commands/__init__.py
from __future__ import annotations

"""
Builtin command model, registry and the @command decorator.
"""

from .command_types import Command, CommandResult, CommandCallback
from .commands import (
    CATALOG,
    CommandRegistry,
    CommandTable,
    abbreviations,
    command,
)

__all__ = [
    "Command",
    "CommandResult",
    "CommandCallback",
    "CATALOG",
    "CommandRegistry",
    "CommandTable",
    "abbreviations",
    "command",
]
