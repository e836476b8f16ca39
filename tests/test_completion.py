"""
Tests for command-word completion.
"""

import pytest

from roninshell.commands import CommandRegistry
from roninshell.interface import CompletionProvider, split_current_token

from conftest import make_command


@pytest.fixture
def provider():
    registry = CommandRegistry()
    for name in ("checkout", "check", "commit", "ls"):
        registry.register(make_command(name))
    return CompletionProvider(registry.build_table())


class TestSplitCurrentToken:
    """Tests for split_current_token()."""

    def test_cases(self):
        assert split_current_token("") == ([], "")
        assert split_current_token("ch") == (["ch"], "ch")
        assert split_current_token("ls ") == (["ls", ""], "")
        assert split_current_token("ls 'a b") == (["ls", "'a", "b"], "b")


class TestCompletionProvider:
    """Tests for CompletionProvider.complete()."""

    def test_prefix(self, provider):
        assert provider.complete("ch") == ["check", "checkout"]

    def test_unique_prefix(self, provider):
        assert provider.complete("com") == ["commit"]

    def test_exact_name_still_offers_longer_names(self, provider):
        assert provider.complete("check") == ["check", "checkout"]

    def test_empty_input_lists_everything(self, provider):
        assert provider.complete("") == ["check", "checkout", "commit", "ls"]

    def test_leading_whitespace(self, provider):
        assert provider.complete("  l") == ["ls"]

    def test_no_match(self, provider):
        assert provider.complete("zz") == []

    def test_arguments_not_completed(self, provider):
        assert provider.complete("checkout ma") == []
        assert provider.complete("ls ") == []
