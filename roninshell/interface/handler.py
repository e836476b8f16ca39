#!/usr/bin/env python3
# roninshell/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

Resolution order for the first word of a line:
  1) alias      - replaced by its expansion, then resolved again
  2) builtin    - exact name or unambiguous abbreviation in the command table
  3) external   - first executable of that name on $PATH (or a path word)
  4) otherwise  - "command not found"

Every per-line failure is caught here, logged with its category and reported
on the shell's stderr. Only SystemExit (raised by the exit builtin) leaves
resolve().
"""

import difflib
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Sequence

from roninshell.commands import Command, CommandRegistry, CommandResult
from roninshell.exceptions import (
    AliasCycle,
    CommandExecutionError,
    CommandNotFound,
    PermissionDenied,
    ShellError,
)
from roninshell.helpers.process import ProcessInvoker
from roninshell.interface.parser import build_usage, tokenize
from roninshell.ui import colorize, format_table, print_line

if TYPE_CHECKING:
    from roninshell.boot import ShellContext

# Short hint appended to usage errors
HELP_TEXT = "Type 'help <command>' for more information on a specific command."

# POSIX shell exit statuses for failures that never reach a program
STATUS_FAILURE = 1
STATUS_NOT_EXECUTABLE = 126
STATUS_NOT_FOUND = 127

# Name of the callback parameter that receives the ShellContext
SHELL_PARAM = "shell"

# ---------------------------------------------------------------------------
# Help formatting
# ---------------------------------------------------------------------------


def list_categories(registry: CommandRegistry) -> str:
    """Render the categories overview table."""
    categories = registry.categories()
    if not categories:
        return "No commands loaded."

    rows = []
    for category_name in sorted(categories):
        names = sorted(cmd.name for cmd in categories[category_name])
        rows.append([category_name, ", ".join(names),
                     registry.get_category_description(category_name)])
    return format_table(rows, headers=["Category", "Commands", "Description"])


def format_command_help(registry: CommandRegistry, name: str) -> str:
    """Render help for a command, or a category if the name matches one."""
    command_obj = registry.get(name)
    if not command_obj:
        commands_in_category = registry.categories().get(name)
        if not commands_in_category:
            return f"No such command or category: {name}"
        rows = [
            [cmd.name, cmd.description]
            for cmd in sorted(commands_in_category, key=lambda x: x.name)
        ]
        return format_table(rows, headers=["Command", "Description"])

    lines = [
        f"Name:        {command_obj.name}",
        f"Category:    {command_obj.category}",
        f"Description: {command_obj.description or '(none)'}",
        f"Example:     {command_obj.example or '(none)'}",
        f"Usage:       {build_usage(command_obj.name, command_obj.callback)}",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class Dispatcher:
    """Resolves one line of input to an alias, builtin or program and runs it."""

    def __init__(self, context: "ShellContext", invoker: Optional[ProcessInvoker] = None) -> None:
        self.context = context
        self.invoker = invoker or ProcessInvoker(context)
        self.log = context.logger.getChild("dispatch")

    # ---------------- Entry point ----------------

    def resolve(self, input_line: str) -> CommandResult:
        """Dispatch `input_line`; always returns a result instead of raising."""
        self.log.debug("Dispatching input: %r", input_line)
        try:
            tokens = self.expand_aliases(tokenize(input_line))
        except ShellError as exc:
            return self._report(exc, STATUS_FAILURE)

        if not tokens:
            return CommandResult(ok=True)

        name, *arg_tokens = tokens
        command_obj = self.context.table.get(name)
        if command_obj is not None:
            return self._run_builtin(command_obj, arg_tokens)

        target = self._find_executable(name)
        if target is not None:
            return self._run_external(name, target, arg_tokens)

        return self._report(
            CommandNotFound(name, self._suggest_similar_names(name)),
            STATUS_NOT_FOUND,
        )

    # ---------------- Aliases ----------------

    def expand_aliases(self, tokens: list[str]) -> list[str]:
        """
        Replace a leading alias with its expansion until the first word is
        no longer an alias.

        An expansion that starts with its own trigger ("ls" -> "ls -la") is
        not expanded again; the word then names the builtin or program.
        Raises AliasCycle when a trigger comes back around or the chain gets
        longer than the configured depth.
        """
        aliases = self.context.aliases
        max_depth = self.context.config.max_alias_depth
        chain: list[str] = []

        while tokens and tokens[0] in aliases:
            trigger = tokens[0]
            if trigger in chain or len(chain) >= max_depth:
                raise AliasCycle(trigger, chain)
            chain.append(trigger)

            expansion = tokenize(aliases[trigger])
            self.log.debug("Alias %r -> %r", trigger, expansion)
            tokens = [*expansion, *tokens[1:]]
            if expansion and expansion[0] == trigger:
                break
        return tokens

    # ---------------- Builtins ----------------

    def _run_builtin(self, command_obj: Command, arg_tokens: Sequence[str]) -> CommandResult:
        try:
            options, args = command_obj.parse(arg_tokens)
        except TypeError as exc:
            usage = build_usage(command_obj.name, command_obj.callback)
            return self._report(
                CommandExecutionError(command_obj.name, exc),
                STATUS_FAILURE,
                hint=f"Usage: {usage}\n{HELP_TEXT}",
            )

        if SHELL_PARAM in command_obj.param_names:
            options[SHELL_PARAM] = self.context

        self.log.debug("Running builtin %s args=%r options=%r",
                       command_obj.name, args, sorted(options))
        try:
            outcome = command_obj.run(options, args)
        except ShellError as exc:
            return self._report(exc, STATUS_FAILURE)
        except Exception as exc:
            return self._report(CommandExecutionError(command_obj.name, exc), STATUS_FAILURE)

        return self._emit(outcome)

    def _emit(self, outcome: Any) -> CommandResult:
        """Normalize a builtin's return value and print any output."""
        if isinstance(outcome, CommandResult):
            result = outcome
        elif outcome is None:
            result = CommandResult(ok=True)
        else:
            result = CommandResult(ok=True, message=str(outcome), data=outcome)

        if result.message:
            stream = self.context.out if result.ok else self.context.err
            print_line(result.message, file=stream)
        self.context.last_status = 0 if result.ok else STATUS_FAILURE
        return result

    # ---------------- External programs ----------------

    def _find_executable(self, name: str) -> Optional[Path]:
        """A word with a slash names a file directly; anything else is searched on $PATH."""
        if os.sep in name:
            path = Path(name)
            try:
                path = path.expanduser()
            except RuntimeError:
                # ~user with no such user stays literal, as in sh
                pass
            try:
                return path if path.exists() else None
            except (OSError, ValueError):
                return None
        return self.invoker.which(name)

    def _run_external(self, name: str, target: Path, arg_tokens: Sequence[str]) -> CommandResult:
        try:
            status = self.invoker.invoke(target, arg_tokens)
        except PermissionDenied as exc:
            return self._report(exc, STATUS_NOT_EXECUTABLE)
        except Exception as exc:
            return self._report(CommandExecutionError(name, exc), STATUS_FAILURE)

        # Exit status is recorded, not reported as an error
        self.context.last_status = status
        return CommandResult(ok=status == 0, data=status)

    # ---------------- Reporting ----------------

    def _report(self, error: ShellError, status: int, *, hint: str = "") -> CommandResult:
        """Log the error with its category and show it to the user."""
        self.log.info(
            "%s: %s", error.category, error,
            exc_info=self.log.isEnabledFor(logging.DEBUG) and error.__cause__ is not None,
        )
        message = str(error)
        print_line(colorize(f"roninshell: {message}", "red"), file=self.context.err)
        if hint:
            print_line(hint, file=self.context.err)
        self.context.last_status = status
        return CommandResult(ok=False, message=message, error=error)

    def _suggest_similar_names(self, name: str) -> list[str]:
        """Return close matches for a misspelled command word."""
        universe = [*self.context.registry.names(), *self.context.aliases]
        return difflib.get_close_matches(name, universe, n=3, cutoff=0.6)
