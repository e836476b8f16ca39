"""
Tests for command discovery and the boot sequence.
"""

import pytest

from roninshell.boot import boot_sequence
from roninshell.commands import CommandRegistry
from roninshell.config import AppConfig
from roninshell.exceptions import DuplicateCommand
from roninshell.interface import load_commands

from conftest import make_command

BUILTIN_NAMES = {"cd", "ls", "pwd", "process", "help", "alias", "history", "exit", "quit"}


# =============================================================================
# Discovery
# =============================================================================


class TestLoadCommands:
    """Tests for load_commands()."""

    def test_builtins_registered(self):
        registry = CommandRegistry()
        count = load_commands(registry)

        assert BUILTIN_NAMES <= set(registry.names())
        assert count == len(registry)

    def test_categories_from_subpackages(self):
        registry = CommandRegistry()
        load_commands(registry)

        assert registry.get("cd").category == "fs"
        assert registry.get("process").category == "system"
        assert registry.get_category_description("fs")
        assert registry.get_category_description("system")

    def test_repeatable(self):
        """The catalog is static; every registry gets the same commands."""
        first, second = CommandRegistry(), CommandRegistry()
        load_commands(first)
        load_commands(second)
        assert first.names() == second.names()

    def test_duplicate_name(self):
        registry = CommandRegistry()
        registry.register(make_command("cd"))
        with pytest.raises(DuplicateCommand):
            load_commands(registry)

    def test_not_a_package(self):
        with pytest.raises(RuntimeError, match="must be a package"):
            load_commands(CommandRegistry(), "roninshell.config")

    def test_missing_package(self):
        with pytest.raises(ImportError):
            load_commands(CommandRegistry(), "roninshell.no_such_plugins")


# =============================================================================
# Boot sequence
# =============================================================================


class TestBootSequence:
    """Tests for boot_sequence()."""

    def test_context_built(self, tmp_path):
        history_file = tmp_path / "history"
        history_file.write_text("ls\npwd\n")
        config = AppConfig(history_file=history_file, aliases={"ll": "ls -l"})

        context = boot_sequence(config)

        assert context.config is config
        assert context.registry.sealed
        assert context.table["ls"].name == "ls"
        assert context.table["pr"].name == "process"
        assert context.aliases == {"ll": "ls -l"}
        assert context.aliases is not config.aliases
        assert context.history == ["ls", "pwd"]
        assert context.last_status is None
        assert context.logger.name == "roninshell"

    def test_history_not_loaded(self, tmp_path):
        history_file = tmp_path / "history"
        history_file.write_text("ls\n")
        context = boot_sequence(AppConfig(history_file=history_file), load_history=False)
        assert context.history == []

    def test_custom_discovery(self, tmp_path):
        def discover(registry, package):
            registry.register(make_command("only"))
            return 1

        context = boot_sequence(AppConfig(history_file=tmp_path / "h"), discover=discover)
        assert sorted(context.table) == ["o", "on", "onl", "only"]

    def test_failed_step_reported(self, tmp_path, capsys):
        def discover(registry, package):
            raise ImportError("no plugins here")

        with pytest.raises(ImportError):
            boot_sequence(AppConfig(history_file=tmp_path / "h"), discover=discover)
        err = capsys.readouterr().err
        assert "[FAILED] Load command definitions from 'roninshell.plugins'" in err
        assert "no plugins here" in err

    def test_debug_shows_steps(self, tmp_path, capsys):
        boot_sequence(AppConfig(history_file=tmp_path / "h"), debug=True)
        err = capsys.readouterr().err
        assert "[  OK  ] Build command table" in err
        assert "[  OK  ] Boot complete" in err
