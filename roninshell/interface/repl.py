#!/usr/bin/env python3
# roninshell/interface/repl.py
from __future__ import annotations

"""
The read/dispatch loop.

Shell.run() reads lines until end of input (or the exit builtin), appends
each non-blank line to the session history, and hands it to the dispatcher.
History is written back exactly once, when the loop ends.
"""

from typing import TYPE_CHECKING, Optional

from roninshell.interface.cli import BaseCLI, make_cli
from roninshell.interface.completion import CompletionProvider
from roninshell.interface.handler import Dispatcher
from roninshell.ui import print_line

if TYPE_CHECKING:
    from roninshell.boot import ShellContext


class Shell:
    """Interactive command interpreter for one session."""

    def __init__(
        self,
        context: "ShellContext",
        editor: Optional[BaseCLI] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.context = context
        self.dispatcher = dispatcher or Dispatcher(context)
        self.log = context.logger.getChild("repl")
        if editor is None:
            completion = (CompletionProvider(context.table)
                          if context.config.enable_completion else None)
            editor = make_cli(context.config.prompt, completion, context.history)
        self.editor = editor

    @property
    def quitting(self) -> bool:
        return self.context.quitting

    def run(self) -> int:
        """Run until something sets the quit flag; return the last exit status."""
        context = self.context
        context.quitting = False
        try:
            with self.editor:
                while not context.quitting:
                    self._iterate()
        finally:
            context.history_store().save(context.config.history_file, context.history)
        return context.last_status or 0

    def _iterate(self) -> None:
        context = self.context
        try:
            line = self.editor.get_line()
        except EOFError:
            # End of input makes the shell quit
            self.log.debug("EOF: setting quit flag")
            print_line(file=context.out)
            context.quitting = True
            return
        except KeyboardInterrupt:
            # Ctrl-C at the prompt discards the line
            print_line(file=context.out)
            return

        self.log.debug("Input is: %r", line)
        if not line.strip():
            self.log.debug("No command. Re-displaying the prompt.")
            return

        context.history.append(line)
        try:
            self.dispatcher.resolve(line)
        except SystemExit as exc:
            self.log.debug("exit requested: setting quit flag")
            if isinstance(exc.code, int):
                context.last_status = exc.code
            context.quitting = True
        except KeyboardInterrupt:
            print_line(file=context.out)
