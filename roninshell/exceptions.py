#!/usr/bin/env python3
# roninshell/exceptions.py
from __future__ import annotations

"""
Exceptions raised by the shell core.

Only DuplicateCommand is fatal (it is raised while the command table is being
built at boot). Everything else is raised while handling a single line of
input and is caught, logged and reported by the dispatcher.
"""

from typing import Sequence


class ShellError(RuntimeError):
    """Base class for all shell errors."""

    @property
    def category(self) -> str:
        """Short name used when logging and reporting the error."""
        return type(self).__name__


class DuplicateCommand(ShellError):
    """A command name was registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Command '{name}' already registered.")
        self.name = name


class AliasCycle(ShellError):
    """Alias expansion revisited a trigger word (or ran too deep)."""

    def __init__(self, trigger: str, chain: Sequence[str]) -> None:
        path = " -> ".join([*chain, trigger])
        super().__init__(f"alias loop detected: {path}")
        self.trigger = trigger
        self.chain = list(chain)


class InputSyntaxError(ShellError):
    """The input line could not be split into words (e.g. unbalanced quotes)."""


class CommandNotFound(ShellError):
    """No alias, builtin or executable matched the command word."""

    def __init__(self, name: str, suggestions: Sequence[str] = ()) -> None:
        message = f"{name}: command not found"
        if suggestions:
            message += f". Did you mean: {', '.join(suggestions)}?"
        super().__init__(message)
        self.name = name
        self.suggestions = list(suggestions)


class PermissionDenied(ShellError):
    """The target exists but is not executable."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path}: permission denied")
        self.path = path


class CommandExecutionError(ShellError):
    """A builtin's run() or an external program failed; the cause is chained."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"{name}: {type(cause).__name__}: {cause}")
        self.name = name
        self.__cause__ = cause
