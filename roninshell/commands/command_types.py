#!/usr/bin/env python3
# roninshell/commands/command_types.py
from __future__ import annotations

"""
What a builtin is, and what dispatching a line produces.

- CommandCallback: any callable a builtin wraps.
- Command: a builtin's name, help metadata and callback, plus the
  parse/run pair the dispatcher drives.
- CommandResult: the outcome of one line, whichever way it resolved.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from roninshell.exceptions import ShellError


class CommandCallback(Protocol):
    def __call__(self, *args: Any, **kwargs: Any) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Outcome of one dispatched line.

    `data` is a builtin's return value or a program's exit status; `error`
    is set only when the line failed before or while running.
    """
    ok: bool = True
    message: str = ""
    data: Any = None
    error: ShellError | None = None

    def __str__(self) -> str:
        if self.message:
            return self.message
        return "ok" if self.ok else "error"


@dataclass(slots=True)
class Command:
    """
    A builtin command.

    `name` is unique within a registry. `category` groups commands in help
    output and is derived from the plugin subpackage when left at "general".
    `param_names` lists the callback's parameters so the dispatcher knows
    whether it asks for the shell context.
    """

    name: str
    description: str
    example: str
    callback: CommandCallback
    module: str = field(default="", repr=False)
    category: str = "general"
    param_names: list[str] = field(default_factory=list)

    def parse(self, tokens: Sequence[str]) -> tuple[dict[str, Any], tuple[Any, ...]]:
        """Turn argument words into (options, args); raises TypeError if they do not fit."""
        # interface imports this package, so bind lazily
        from roninshell.interface.parser import bind_args

        args, options = bind_args(self.callback, list(tokens))
        return options, args

    def run(self, options: Mapping[str, Any], args: Sequence[Any]) -> Any:
        return self.callback(*args, **options)
