#!/usr/bin/env python3
# roninshell/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: startup pipeline (config, logger, commands, history) with [ OK ] / [FAILED] lines.
- ShellContext: session state passed to the dispatcher, process invoker and REPL.
"""


from .boot import ShellContext, boot_sequence

__all__ = ["boot_sequence", "ShellContext"]
