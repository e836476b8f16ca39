#!/usr/bin/env python3
# roninshell/commands/commands.py
from __future__ import annotations

"""
Builtin registration and the abbreviation table.

Builtins are declared with @command, which appends them to the static
CATALOG as their modules are imported. At boot the loader registers the
catalog into a CommandRegistry and build_table() freezes the result into
the CommandTable the dispatcher reads: every full name, plus every prefix
that only one name starts with.

    names: checkout, check, commit
    table: check -> check, checko/checkou/checkout -> checkout,
           co/com/comm/commi/commit -> commit
"""

import inspect
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from roninshell.commands.command_types import Command
from roninshell.exceptions import DuplicateCommand

CommandTable = Mapping[str, Command]


def abbreviations(names: Iterable[str]) -> dict[str, str]:
    """
    Map each name, and each prefix unique to one name, to that name.

    A full name always maps to itself even when it also begins a longer
    name ("check" in the presence of "checkout").
    """
    ordered = sorted(set(names))
    table = {name: name for name in ordered}
    for name in ordered:
        for end in range(1, len(name)):
            prefix = name[:end]
            if prefix in table:
                continue
            owners = [other for other in ordered if other.startswith(prefix)]
            if len(owners) == 1:
                table[prefix] = name
    return table


class CommandRegistry:
    """The session's builtins, keyed by full name, until the table is built."""

    def __init__(self) -> None:
        self._by_name: dict[str, Command] = {}
        self._category_text: dict[str, str] = {}
        self._sealed = False

    def register(self, command_obj: Command) -> None:
        """Add a builtin; names are unique and the registry must not be sealed."""
        if self._sealed:
            raise RuntimeError(
                f"Cannot register '{command_obj.name}': the command table is already built.")
        if command_obj.name in self._by_name:
            raise DuplicateCommand(command_obj.name)
        self._by_name[command_obj.name] = command_obj

    def build_table(self) -> CommandTable:
        """Seal the registry and return the read-only abbreviation table."""
        self._sealed = True
        return MappingProxyType({
            key: self._by_name[full_name]
            for key, full_name in abbreviations(self._by_name).items()
        })

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, name: str) -> Optional[Command]:
        """Exact-name lookup; abbreviations go through the table."""
        return self._by_name.get(name)

    def all(self) -> list[Command]:
        return list(self._by_name.values())

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def categories(self) -> dict[str, list[Command]]:
        by_category: dict[str, list[Command]] = {}
        for command_obj in self._by_name.values():
            by_category.setdefault(command_obj.category, []).append(command_obj)
        return by_category

    def set_category_description(self, category: str, description: str) -> None:
        self._category_text[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        return self._category_text.get(category, "")


# Filled by @command as plugin modules are imported
CATALOG: list[Command] = []


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Declare the decorated function as a builtin.

    The name defaults to the function name with underscores turned into
    dashes; the description defaults to its docstring. The function itself
    is returned unchanged.
    """

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        command_obj = Command(
            name=name or func.__name__.replace("_", "-"),
            description=(description or func.__doc__ or "").strip(),
            example=example or "",
            callback=func,
            module=func.__module__,
            category=category or "general",
            param_names=list(inspect.signature(func).parameters),
        )
        CATALOG.append(command_obj)
        return func

    return decorate
