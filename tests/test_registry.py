"""
Tests for the command registry and its abbreviation table.
"""

import pytest

from roninshell.commands import CommandRegistry, abbreviations, command
from roninshell.commands import commands as commands_module
from roninshell.exceptions import DuplicateCommand

from conftest import make_command


# =============================================================================
# Abbreviations
# =============================================================================


class TestAbbreviations:
    """Tests for the abbreviations() helper."""

    def test_single_name_maps_every_prefix(self):
        """A lone name owns all of its prefixes."""
        assert abbreviations(["ls"]) == {"l": "ls", "ls": "ls"}

    def test_shared_prefix_is_dropped(self):
        """Prefixes shared by two names map to neither."""
        table = abbreviations(["cd", "cat"])
        assert "c" not in table
        assert table["ca"] == "cat"
        assert table["cd"] == "cd"

    def test_exact_name_wins_over_longer_name(self):
        """'check' is exact even though it is also a prefix of 'checkout'."""
        table = abbreviations(["check", "checkout"])
        assert table["check"] == "check"
        assert table["checko"] == "checkout"
        assert "chec" not in table

    def test_empty(self):
        assert abbreviations([]) == {}


# =============================================================================
# Registry and table
# =============================================================================


@pytest.fixture
def git_like_registry():
    registry = CommandRegistry()
    for name in ("checkout", "check", "commit"):
        registry.register(make_command(name))
    return registry


class TestCommandTable:
    """Tests for CommandRegistry.build_table()."""

    def test_every_name_maps_to_itself(self, git_like_registry):
        """Every registered name is a key for its own command."""
        table = git_like_registry.build_table()
        for name in git_like_registry.names():
            assert table[name] is git_like_registry.get(name)

    def test_ambiguous_and_unique_prefixes(self, git_like_registry):
        """Ambiguous prefixes are absent; unique ones resolve."""
        table = git_like_registry.build_table()
        assert table["check"].name == "check"
        assert "chec" not in table
        assert "che" not in table
        assert "c" not in table
        assert table["com"].name == "commit"
        assert table["checkou"].name == "checkout"

    def test_table_is_read_only(self, git_like_registry):
        table = git_like_registry.build_table()
        with pytest.raises(TypeError):
            table["x"] = git_like_registry.get("check")

    def test_registry_sealed_after_build(self, git_like_registry):
        """No registration once the table exists."""
        git_like_registry.build_table()
        assert git_like_registry.sealed
        with pytest.raises(RuntimeError):
            git_like_registry.register(make_command("push"))


class TestRegistration:
    """Tests for registration and lookup."""

    def test_duplicate_name_rejected(self):
        registry = CommandRegistry()
        registry.register(make_command("ls"))
        with pytest.raises(DuplicateCommand) as exc_info:
            registry.register(make_command("ls"))
        assert exc_info.value.name == "ls"
        assert "already registered" in str(exc_info.value)

    def test_lookup_helpers(self):
        registry = CommandRegistry()
        registry.register(make_command("pwd"))
        registry.register(make_command("cd"))
        assert registry.names() == ["cd", "pwd"]
        assert "cd" in registry
        assert "c" not in registry
        assert len(registry) == 2
        assert registry.get("nope") is None

    def test_categories(self):
        registry = CommandRegistry()
        registry.register(make_command("cd", category="fs"))
        registry.register(make_command("ls", category="fs"))
        registry.register(make_command("exit", category="system"))
        registry.set_category_description("fs", "  Files.  ")

        grouped = registry.categories()
        assert sorted(c.name for c in grouped["fs"]) == ["cd", "ls"]
        assert registry.get_category_description("fs") == "Files."
        assert registry.get_category_description("system") == ""


# =============================================================================
# Decorator
# =============================================================================


class TestCommandDecorator:
    """Tests for the @command decorator."""

    def test_declares_catalog_entry(self, monkeypatch):
        """The decorator appends a Command and leaves the function usable."""
        catalog = []
        monkeypatch.setattr(commands_module, "CATALOG", catalog)

        @command(description="Say hello.", example="say-hello bob")
        def say_hello(who, *, shell=None):
            return f"hello {who}"

        assert say_hello("bob") == "hello bob"
        assert len(catalog) == 1
        declared = catalog[0]
        assert declared.name == "say-hello"
        assert declared.description == "Say hello."
        assert declared.category == "general"
        assert declared.param_names == ["who", "shell"]
        assert declared.module == __name__

    def test_docstring_is_default_description(self, monkeypatch):
        catalog = []
        monkeypatch.setattr(commands_module, "CATALOG", catalog)

        @command(name="greet")
        def anything():
            """  Greets.  """

        assert catalog[0].name == "greet"
        assert catalog[0].description == "Greets."
