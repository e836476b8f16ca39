"""
Shared fixtures for roninshell tests.
"""

import inspect
import io
import logging
import os
from pathlib import Path

import pytest

from roninshell.boot import ShellContext
from roninshell.commands import Command, CommandRegistry
from roninshell.config import AppConfig
from roninshell.ui import reset_color_cache


class Recorder:
    """Callable command body that records every call."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, *args, **options):
        self.calls.append((args, options))
        return self.result


def make_command(name, callback=None, **fields):
    """Build a Command around `callback` (a Recorder by default)."""
    callback = callback if callback is not None else Recorder()
    param_names = [p.name for p in inspect.signature(callback).parameters.values()]
    return Command(
        name=name,
        description=fields.pop("description", f"{name} command"),
        example=fields.pop("example", ""),
        callback=callback,
        param_names=param_names,
        **fields,
    )


def write_script(path: Path, body: str, executable: bool = True) -> Path:
    """Write a /bin/sh script, optionally marking it executable."""
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    mode = 0o755 if executable else 0o644
    os.chmod(path, mode)
    return path


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Keep ANSI colors out of captured output."""
    monkeypatch.setenv("NO_COLOR", "1")
    reset_color_cache()
    yield
    reset_color_cache()


@pytest.fixture(autouse=True)
def reset_shell_logger():
    """Drop handlers a boot attached, so later tests start clean."""
    yield
    logger = logging.getLogger("roninshell")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_context(tmp_path):
    """Factory for a ShellContext over the given commands and aliases."""

    def _make(commands=(), aliases=None, **config_fields):
        registry = CommandRegistry()
        for command_obj in commands:
            registry.register(command_obj)
        config_fields.setdefault("history_file", tmp_path / "history")
        config = AppConfig(**config_fields)
        return ShellContext(
            config=config,
            logger=logging.getLogger("roninshell.tests"),
            registry=registry,
            table=registry.build_table(),
            aliases=dict(aliases or {}),
            stdout=io.StringIO(),
            stderr=io.StringIO(),
        )

    return _make


@pytest.fixture
def bin_dir(tmp_path, monkeypatch):
    """An empty directory that is the whole $PATH."""
    directory = tmp_path / "bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory

