#!/usr/bin/env python3
# roninshell/interface/completion.py
from __future__ import annotations

"""
Tab completion for the command word.

Candidates are the full names of builtins whose table keys begin with what
has been typed so far. Once a second word has started nothing is offered.
"""

import shlex

from roninshell.commands import CommandTable


def split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Split the text left of the cursor into words and the word being typed.

    A trailing blank opens a new, empty word. Text with an open quote is
    split on whitespace instead, so "ls 'a b" gives (["ls", "'a", "b"], "b").
    """
    if not raw_input:
        return [], ""

    try:
        words = shlex.split(raw_input)
    except ValueError:
        words = raw_input.split()

    if raw_input[-1].isspace():
        words.append("")
    return words, (words[-1] if words else "")


class CompletionProvider:
    """Called by the line editor with the text before the cursor."""

    def __init__(self, table: CommandTable) -> None:
        self._table = table

    def complete(self, partial_input: str) -> list[str]:
        words, typed = split_current_token(partial_input.lstrip())
        if len(words) > 1:
            return []
        # An abbreviation resolves to its command, so only full names come back
        matches = {
            command_obj.name
            for key, command_obj in self._table.items()
            if key.startswith(typed)
        }
        return sorted(matches)
