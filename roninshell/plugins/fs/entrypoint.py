#!/usr/bin/env python3
# roninshell/plugins/fs/entrypoint.py
from __future__ import annotations

import os
import stat
from datetime import datetime
from pathlib import Path

from roninshell.commands import command
from roninshell.ui import colorize, format_columns, format_table


# -------------------------- helpers --------------------------

def _fmt_size(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    f = float(n)
    while f >= 1024 and i < len(units) - 1:
        f /= 1024.0
        i += 1
    return f"{f:.1f} {units[i]}"


def _display_name(entry: Path) -> str:
    if entry.is_dir():
        return colorize(f"{entry.name}/", "blue", "bold")
    if os.access(entry, os.X_OK):
        return colorize(entry.name, "green")
    return entry.name


def _split_flags(targets: tuple[str, ...]) -> tuple[set[str], list[str]]:
    """Separate short flags ('-la') from path arguments."""
    flags: set[str] = set()
    paths: list[str] = []
    for target in targets:
        if target.startswith("-") and len(target) > 1:
            flags.update(target[1:])
        else:
            paths.append(target)
    return flags, paths


def _long_rows(entries: list[Path]) -> list[list[str]]:
    rows = []
    for entry in entries:
        info = entry.lstat()
        modified = datetime.fromtimestamp(info.st_mtime).strftime("%Y-%m-%d %H:%M")
        rows.append([stat.filemode(info.st_mode), _fmt_size(info.st_size),
                     modified, _display_name(entry)])
    return rows


# ----------------------- commands (decorator) -----------------------

@command(
    name="cd",
    description="Change the working directory.",
    example="cd ~/src",
)
def cd(target: str = "~") -> str:
    """Change directory; 'cd -' returns to the previous one."""
    if target == "-":
        target = os.environ.get("OLDPWD", os.getcwd())
    full_path = Path(os.path.expandvars(target)).expanduser()
    full_path = (Path.cwd() / full_path).resolve()
    previous = os.getcwd()
    os.chdir(full_path)
    os.environ["OLDPWD"] = previous
    os.environ["PWD"] = str(full_path)
    return str(full_path)


@command(
    name="pwd",
    description="Print the working directory.",
    example="pwd",
)
def pwd() -> str:
    return os.getcwd()


@command(
    name="ls",
    description="List directory contents (-l long format, -a include dotfiles).",
    example="ls -la /tmp",
)
def ls(*targets: str) -> str:
    flags, paths = _split_flags(targets)
    unknown = flags - {"l", "a"}
    if unknown:
        raise ValueError(f"unknown option(s): {''.join(sorted(unknown))}")

    blocks: list[str] = []
    for target in paths or ["."]:
        base = Path(target).expanduser()
        if not base.exists():
            raise FileNotFoundError(f"No such file or directory: {target}")

        if base.is_dir():
            entries = sorted(base.iterdir(), key=lambda p: p.name.lower())
            if "a" not in flags:
                entries = [e for e in entries if not e.name.startswith(".")]
        else:
            entries = [base]

        if "l" in flags:
            listing = format_table(_long_rows(entries), align="<>", border=False)
        else:
            listing = format_columns(_display_name(e) for e in entries)

        if len(paths) > 1:
            listing = f"{target}:\n{listing}"
        blocks.append(listing)

    return "\n\n".join(block for block in blocks if block)
