#!/usr/bin/env python3
# roninshell/interface/__init__.py
from __future__ import annotations

"""
Everything between the prompt and a running command.

Reading a line (cli, completion, history), resolving it (handler, parser)
and the loop that ties them together (repl). loader fills the registry
the handler resolves against.
"""


from .parser import tokenize, bind_args, build_usage

# cli imports completion, so completion goes first
from .completion import CompletionProvider, split_current_token
from .history import HistoryStore, dedupe_keep_latest
from .handler import Dispatcher, HELP_TEXT, list_categories, format_command_help
from .loader import load_commands
from .cli import BaseCLI, PlainCLI, PromptToolkitCLI, ReadlineCLI, make_cli
from .repl import Shell

__all__ = [
    "tokenize",
    "bind_args",
    "build_usage",
    "CompletionProvider",
    "split_current_token",
    "HistoryStore",
    "dedupe_keep_latest",
    "Dispatcher",
    "HELP_TEXT",
    "list_categories",
    "format_command_help",
    "load_commands",
    "BaseCLI",
    "PlainCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "Shell",
]
