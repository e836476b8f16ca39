#!/usr/bin/env python3
# roninshell/helpers/process.py
"""
External program execution.

This module provides:
- `which`: locate an executable on the search path.
- `ProcessInvoker`: run one external program in the foreground, sharing the
  shell's terminal, and wait for it to finish.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from roninshell.exceptions import PermissionDenied

if TYPE_CHECKING:
    from roninshell.boot import ShellContext


def is_executable(path: Path | str) -> bool:
    """Return True for an existing regular file the current user may execute."""
    candidate = Path(path)
    try:
        return candidate.is_file() and os.access(candidate, os.X_OK)
    except (OSError, ValueError):
        # ENAMETOOLONG, EACCES on a parent, embedded NUL
        return False


def which(program: str, path: Optional[str] = None) -> Optional[Path]:
    """
    Return the first executable named `program` in the search path.

    Args:
        program: Bare command word (no directory part).
        path: Colon-separated directory list; defaults to $PATH.

    Directories are tried in listed order; empty entries mean the current
    directory, as in POSIX shells.
    """
    search_path = path if path is not None else os.environ.get("PATH", os.defpath)
    for directory in search_path.split(os.pathsep):
        candidate = Path(directory or ".") / program
        if is_executable(candidate):
            return candidate
    return None


# ---- Public result type -----------------------------------------------------


@dataclass(slots=True)
class ProcessResult:
    """Outcome of one foreground program run."""
    path: str
    args: tuple[str, ...]
    returncode: int
    duration_sec: float

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---- Invoker ----------------------------------------------------------------


class ProcessInvoker:
    """
    Runs external programs synchronously in the foreground.

    Notes:
        - The child inherits stdin/stdout/stderr, so interactive programs
          work as they would from any shell.
        - Only one child runs at a time; invoke() blocks until it exits.
        - Arguments are passed as a list, never through /bin/sh.
    """

    def __init__(self, context: "ShellContext | None" = None) -> None:
        self._context = context
        parent = context.logger if context is not None else logging.getLogger("roninshell")
        self.log = parent.getChild("process")
        self.last_result: Optional[ProcessResult] = None

    @property
    def last_status(self) -> Optional[int]:
        """Exit status of the most recent child, or None before the first run."""
        return self.last_result.returncode if self.last_result else None

    def which(self, program: str) -> Optional[Path]:
        return which(program)

    def invoke(self, path: Path | str, args: Sequence[str] = ()) -> int:
        """
        Run `path` with `args` and return its exit status.

        Raises:
            PermissionDenied: `path` is missing the execute permission.
            OSError: the program could not be started.

        A negative status means the child was killed by that signal number.
        """
        program = str(path)
        if not is_executable(program):
            raise PermissionDenied(program)

        argv = [program, *args]
        self.log.debug("Spawning %s", argv)
        started = time.monotonic()
        child = subprocess.Popen(argv)
        returncode = self._wait(child)
        result = ProcessResult(
            path=program,
            args=tuple(args),
            returncode=returncode,
            duration_sec=time.monotonic() - started,
        )

        self.last_result = result
        if self._context is not None:
            self._context.last_status = returncode
        self.log.debug(
            "%s exited with status %d after %.3fs",
            program, returncode, result.duration_sec)
        return returncode

    def _wait(self, child: subprocess.Popen) -> int:
        """Wait for the child; Ctrl-C goes to the child, not to the shell."""
        while True:
            try:
                return child.wait()
            except KeyboardInterrupt:
                # The terminal delivered SIGINT to the child as well
                self.log.debug("Interrupt while waiting for pid %d", child.pid)
