"""
Tests for the builtin commands shipped in roninshell.plugins.
"""

import io
import os
import re
from pathlib import Path

import pytest

from roninshell.boot import boot_sequence
from roninshell.config import AppConfig
from roninshell.exceptions import CommandExecutionError
from roninshell.interface import Dispatcher


@pytest.fixture
def context(tmp_path, bin_dir):
    config = AppConfig(history_file=tmp_path / "history", aliases={"ll": "ls -l"})
    booted = boot_sequence(config, load_history=False)
    booted.stdout = io.StringIO()
    booted.stderr = io.StringIO()
    return booted


@pytest.fixture
def run(context):
    """Dispatch a line and return what it printed on stdout."""
    dispatcher = Dispatcher(context)

    def _run(line):
        context.stdout.seek(0)
        context.stdout.truncate()
        dispatcher.resolve(line)
        return context.stdout.getvalue()

    return _run


@pytest.fixture
def listing_dir(tmp_path):
    directory = tmp_path / "listing"
    directory.mkdir()
    (directory / "a.txt").write_text("aaaa")
    (directory / "b.txt").write_text("b")
    (directory / ".hidden").write_text("")
    (directory / "sub").mkdir()
    return directory


# =============================================================================
# fs
# =============================================================================


class TestDirectoryCommands:
    """cd and pwd."""

    @pytest.fixture(autouse=True)
    def restore_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PWD", str(tmp_path))
        monkeypatch.setenv("OLDPWD", str(tmp_path))

    def test_pwd(self, run):
        assert run("pwd") == f"{os.getcwd()}\n"

    def test_cd_and_back(self, run, tmp_path):
        (tmp_path / "sub").mkdir()

        assert run("cd sub") == f"{(tmp_path / 'sub').resolve()}\n"
        assert Path.cwd() == (tmp_path / "sub").resolve()
        assert os.environ["PWD"] == str((tmp_path / "sub").resolve())

        run("cd -")
        assert Path.cwd() == tmp_path.resolve()

    def test_cd_home(self, run, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        monkeypatch.setenv("HOME", str(home))
        run("cd")
        assert Path.cwd() == home.resolve()

    def test_cd_missing(self, context):
        result = Dispatcher(context).resolve("cd nowhere")
        assert isinstance(result.error, CommandExecutionError)
        assert isinstance(result.error.__cause__, FileNotFoundError)


class TestLs:
    """ls and its flags."""

    def test_plain(self, run, listing_dir):
        output = run(f"ls {listing_dir}")
        assert output.split() == ["a.txt", "b.txt", "sub/"]

    def test_all(self, run, listing_dir):
        assert ".hidden" in run(f"ls -a {listing_dir}").split()

    def test_long(self, run, listing_dir):
        lines = run(f"ls -l {listing_dir}").splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("-rw")
        assert "4.0 B" in lines[0]
        assert "sub/" in lines[2]

    def test_alias_for_long(self, run, listing_dir):
        assert run(f"ll {listing_dir}") == run(f"ls -l {listing_dir}")

    def test_several_targets(self, run, listing_dir):
        output = run(f"ls {listing_dir} {listing_dir / 'sub'}")
        assert f"{listing_dir}:" in output
        assert f"{listing_dir / 'sub'}:" in output

    def test_unknown_flag(self, context):
        result = Dispatcher(context).resolve("ls -z")
        assert isinstance(result.error.__cause__, ValueError)
        assert "unknown option(s): z" in context.stderr.getvalue()

    def test_missing_target(self, context, tmp_path):
        result = Dispatcher(context).resolve(f"ls {tmp_path / 'absent'}")
        assert isinstance(result.error.__cause__, FileNotFoundError)


# =============================================================================
# system
# =============================================================================


class TestHelp:
    """help over categories and commands."""

    def test_overview(self, run):
        output = run("help")
        assert "Category" in output
        assert "fs" in output
        assert "system" in output

    def test_command(self, run):
        output = run("help ls")
        assert "Name:        ls" in output
        assert "Usage:       ls [args...]" in output

    def test_abbreviated_command(self, run):
        assert "Name:        ls" in run("help l")

    def test_category(self, run):
        output = run("help fs")
        assert "cd" in output
        assert "pwd" in output

    def test_unknown(self, run):
        assert run("help bogus") == "No such command or category: bogus\n"


class TestAliasAndHistory:
    """alias and history."""

    def test_alias_list(self, run):
        assert run("alias") == "ll='ls -l'\n"

    def test_alias_missing(self, context):
        result = Dispatcher(context).resolve("alias nope")
        assert isinstance(result.error.__cause__, KeyError)

    def test_history(self, run, context):
        context.history.extend(["ls", "pwd", "cd /"])
        assert run("history") == "    1  ls\n    2  pwd\n    3  cd /\n"
        assert run("history 2") == "    2  pwd\n    3  cd /\n"


class TestProcess:
    """process (psutil)."""

    def test_lists_this_process(self, run):
        output = run("process")
        assert "PID" in output
        assert re.search(rf"^\| +{os.getpid()} \|", output, re.MULTILINE)

    def test_top(self, run):
        lines = run("process top=1").splitlines()
        # rule, header, rule, one row, rule
        assert len(lines) == 5


class TestExit:
    """exit and quit."""

    def test_exit_status(self, context):
        with pytest.raises(SystemExit) as exc_info:
            Dispatcher(context).resolve("exit 2")
        assert exc_info.value.code == 2

    def test_abbreviated_exit(self, context):
        with pytest.raises(SystemExit) as exc_info:
            Dispatcher(context).resolve("ex")
        assert exc_info.value.code == 0

    def test_quit(self, context):
        with pytest.raises(SystemExit) as exc_info:
            Dispatcher(context).resolve("quit")
        assert exc_info.value.code == 0
