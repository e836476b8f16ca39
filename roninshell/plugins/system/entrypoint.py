#!/usr/bin/env python3
# roninshell/plugins/system/entrypoint.py
from __future__ import annotations

from typing import Optional

import psutil

from roninshell.boot import ShellContext
from roninshell.commands import command
from roninshell.interface.handler import format_command_help, list_categories
from roninshell.ui import format_table


def _fmt_rss(n: Optional[int]) -> str:
    if n is None:
        return "-"
    return f"{n / (1024 * 1024):.1f} MB"


# ---------- process ----------
@command(
    name="process",
    description="List running processes (PID, user, resident memory, name).",
    example="process top=10",
)
def process(*, top: int = 0, user: Optional[str] = None) -> str:
    rows = []
    for proc in psutil.process_iter(["pid", "name", "username", "memory_info"]):
        info = proc.info
        if user and info.get("username") != user:
            continue
        memory = info.get("memory_info")
        rows.append((
            info["pid"],
            info.get("username") or "?",
            memory.rss if memory else None,
            info.get("name") or "?",
        ))

    if top > 0:
        rows.sort(key=lambda r: r[2] or 0, reverse=True)
        rows = rows[:top]
    else:
        rows.sort(key=lambda r: r[0])

    return format_table(
        [[pid, username, _fmt_rss(rss), name] for pid, username, rss, name in rows],
        headers=["PID", "User", "RSS", "Name"],
        align="><>",
    )


# ---------- help ----------
@command(
    name="help",
    description="Show command categories, or help for one command or category.",
    example="help ls",
)
def help_(name: Optional[str] = None, *, shell: ShellContext) -> str:
    if name is None:
        return list_categories(shell.registry)
    command_obj = shell.table.get(name)
    return format_command_help(shell.registry, command_obj.name if command_obj else name)


# ---------- alias ----------
@command(
    name="alias",
    description="List the aliases defined in the configuration.",
    example="alias",
)
def alias(*names: str, shell: ShellContext) -> str:
    aliases = shell.aliases
    wanted = names or tuple(sorted(aliases))
    missing = [n for n in wanted if n not in aliases]
    if missing:
        raise KeyError(f"no such alias: {', '.join(missing)}")
    return "\n".join(f"{n}='{aliases[n]}'" for n in wanted)


# ---------- history ----------
@command(
    name="history",
    description="Show this session's input history (optionally only the last N entries).",
    example="history 20",
)
def history(count: int = 0, *, shell: ShellContext) -> str:
    entries = list(enumerate(shell.history, start=1))
    if count > 0:
        entries = entries[-count:]
    return "\n".join(f"{number:5d}  {line}" for number, line in entries)


# ---------- exit / quit ----------
@command(
    name="exit",
    description="Leave the shell with an optional status.",
    example="exit 0",
)
def exit_(status: int = 0) -> None:
    raise SystemExit(status)


@command(
    name="quit",
    description="Leave the shell.",
    example="quit",
)
def quit_() -> None:
    raise SystemExit(0)
