#!/usr/bin/env python3
# roninshell/boot/boot.py
from __future__ import annotations
"""
Startup sequence for roninshell.

Builds the ShellContext, the single value that carries session state to the
dispatcher, the process invoker and the REPL loop:
- configuration and logger
- command registry and its (read-only) command table
- alias table
- the in-memory history list
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, TextIO

from roninshell.commands import CommandRegistry, CommandTable
from roninshell.config import AppConfig, load_config
from roninshell.interface.history import HistoryStore
from roninshell.interface.loader import load_commands
from roninshell.ui import colorize, init_logger, print_line

# Discovery hook: fills a registry, returns the number of commands added
DiscoveryHook = Callable[[CommandRegistry, str], int]


@dataclass(slots=True)
class ShellContext:
    config: AppConfig
    logger: logging.Logger
    registry: CommandRegistry
    table: CommandTable
    aliases: Mapping[str, str] = field(default_factory=dict)
    history: list[str] = field(default_factory=list)
    stdout: Optional[TextIO] = None
    stderr: Optional[TextIO] = None
    quitting: bool = False
    last_status: Optional[int] = None

    @property
    def out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr

    def history_store(self) -> HistoryStore:
        return HistoryStore(self.config.max_history, self.logger.getChild("history"))


def _step(label: str, fn: Callable[[], Any], *, verbose: bool) -> Any:
    """Run a boot step; failures are always shown, successes only when verbose."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"),
            file=sys.stderr,
        )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green"), file=sys.stderr)
    return out


def boot_sequence(
    config: AppConfig | None = None,
    *,
    debug: bool = False,
    discover: DiscoveryHook = load_commands,
    load_history: bool = True,
) -> ShellContext:
    """
    Build the session context.

    Args:
        config: Pre-loaded configuration; loaded from files/env when None.
        debug: Force DEBUG logging and print each boot step.
        discover: Hook that registers the builtin commands.
        load_history: Read the history file (skipped for one-shot commands).

    Raises whatever a step raised (DuplicateCommand, ValueError from config,
    ImportError from the plugin package) after printing a [FAILED] line.
    """
    verbose = debug

    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, verbose=verbose)

    # ---------- logging ----------
    level = logging.DEBUG if debug else getattr(logging, config.log_level)
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "roninshell",
            level=level,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        verbose=verbose,
    )
    for source in config.sources:
        logger.debug("Configuration read from %s", source)

    # ---------- commands ----------
    registry = CommandRegistry()
    loaded_count = _step(
        f"Load command definitions from '{config.plugin_package}'",
        lambda: discover(registry, config.plugin_package),
        verbose=verbose,
    )
    table = _step("Build command table", registry.build_table, verbose=verbose)
    logger.debug("%d commands, %d table keys", loaded_count, len(table))

    # ---------- history ----------
    context = ShellContext(
        config=config,
        logger=logger,
        registry=registry,
        table=table,
        aliases=dict(config.aliases),
    )
    if load_history:
        context.history = _step(
            "Load history",
            lambda: context.history_store().load(config.history_file),
            verbose=verbose,
        )

    if verbose:
        _step("Boot complete", lambda: None, verbose=verbose)
    return context
