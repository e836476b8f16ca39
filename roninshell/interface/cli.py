#!/usr/bin/env python3
# roninshell/interface/cli.py
from __future__ import annotations

"""
Line editors.

make_cli() picks the richest editor the terminal supports: prompt_toolkit
first, then readline. PlainCLI reads piped input and is the last resort.
Editors are seeded with the history loaded at boot; saving it is the
Shell's job.
"""

import sys
from typing import Iterable, Optional

from roninshell.interface.completion import CompletionProvider, split_current_token


class BaseCLI:
    """
    Reads one line per get_line() call and raises EOFError at end of input.

    Use it as a context manager so setup() and teardown() bracket the loop.
    """

    def __init__(self, prompt: str = "$> ") -> None:
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        pass

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class PlainCLI(BaseCLI):
    """input() with no editing; stays silent when stdin is a pipe."""

    def get_line(self) -> str:
        return input(self.prompt if sys.stdin.isatty() else "")


class PromptToolkitCLI(BaseCLI):
    """prompt_toolkit session with a completion menu on Tab."""

    def __init__(
        self,
        prompt: str,
        completion: Optional[CompletionProvider] = None,
        history: Iterable[str] = (),
    ) -> None:
        super().__init__(prompt)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import InMemoryHistory

        past = InMemoryHistory()
        for line in history:
            past.append_string(line)

        class CommandWordCompleter(Completer):
            def get_completions(self, document, complete_event):
                before = document.text_before_cursor
                typed = split_current_token(before)[1]
                for name in completion.complete(before):
                    yield Completion(name, start_position=-len(typed))

        self._session = PromptSession(
            history=past,
            completer=CommandWordCompleter() if completion is not None else None,
            complete_while_typing=False,
        )

    def get_line(self) -> str:
        return self._session.prompt(self.prompt)


class ReadlineCLI(BaseCLI):
    """GNU readline (or libedit) with Tab completion of command names."""

    def __init__(
        self,
        prompt: str,
        completion: Optional[CompletionProvider] = None,
        history: Iterable[str] = (),
    ) -> None:
        super().__init__(prompt)
        import readline

        self.readline = readline
        self._completion = completion
        self._seed = list(history)

    def setup(self) -> None:
        rl = self.readline
        rl.clear_history()
        for line in self._seed:
            rl.add_history(line)
        if self._completion is not None:
            rl.set_completer_delims(" \t\n")
            rl.set_completer(self._complete)
            rl.parse_and_bind("tab: complete")

    def _complete(self, text: str, state: int) -> Optional[str]:
        # readline asks for match 0, 1, 2, ... until it gets None
        before = self.readline.get_line_buffer()[:self.readline.get_endidx()]
        names = [
            name for name in self._completion.complete(before)
            if name.startswith(text)
        ]
        return names[state] if state < len(names) else None

    def teardown(self) -> None:
        self.readline.set_completer(None)


def make_cli(
    prompt: str,
    completion: Optional[CompletionProvider] = None,
    history: Iterable[str] = (),
) -> BaseCLI:
    """Return the best editor available for the current stdin/stdout."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return PlainCLI(prompt)

    for editor in (PromptToolkitCLI, ReadlineCLI):
        try:
            return editor(prompt, completion, history)
        except Exception:
            continue
    return PlainCLI(prompt)
