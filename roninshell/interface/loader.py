#!/usr/bin/env python3
# roninshell/interface/loader.py
from __future__ import annotations

"""
Builtin discovery.

Builtins declare themselves with @command when their module is imported.
load_commands() imports a plugin package one level deep:

    roninshell/plugins/fs/entrypoint.py   -> commands in category "fs"
    roninshell/plugins/misc.py            -> commands in category "general"

and registers the CATALOG entries declared inside that package. A
subpackage's CATEGORY_DESCRIPTION (or, failing that, its docstring) is the
category's help text.
"""

import importlib
import importlib.util
import pkgutil
from types import ModuleType
from typing import Iterator

from roninshell.commands import CATALOG, CommandRegistry

DEFAULT_COMMANDS_PACKAGE = "roninshell.plugins"


def _plugin_modules(commands_package: str) -> Iterator[tuple[str, bool]]:
    """Yield (name, is_package) for the public modules of the package."""
    package = importlib.import_module(commands_package)
    search_path = list(getattr(package, "__path__", []))
    if not search_path:
        raise RuntimeError(f"'{commands_package}' must be a package (folder) with modules.")

    for info in pkgutil.iter_modules(search_path):
        if not info.name.startswith("_"):
            yield info.name, info.ispkg


def _category_of(module_name: str, prefix: str) -> str:
    segments = module_name[len(prefix):].split(".")
    return segments[0] if len(segments) > 1 else "general"


def _category_text(module: ModuleType) -> str:
    text = getattr(module, "CATEGORY_DESCRIPTION", None)
    if not isinstance(text, str):
        text = module.__doc__ or ""
    return text.strip()


def load_commands(
    registry: CommandRegistry,
    commands_package: str = DEFAULT_COMMANDS_PACKAGE,
) -> int:
    """
    Import `commands_package` and register the builtins it declares.

    Returns the number registered. Raises DuplicateCommand when two modules
    declare the same name, and ImportError/RuntimeError when the package
    cannot be loaded.
    """
    categories: list[str] = []
    for name, is_package in _plugin_modules(commands_package):
        module_name = f"{commands_package}.{name}"
        if is_package:
            categories.append(name)
            entrypoint = f"{module_name}.entrypoint"
            if importlib.util.find_spec(entrypoint) is not None:
                module_name = entrypoint
        importlib.import_module(module_name)

    prefix = f"{commands_package}."
    declared = [c for c in CATALOG if c.module.startswith(prefix)]
    for command_obj in declared:
        if command_obj.category == "general":
            command_obj.category = _category_of(command_obj.module, prefix)
        registry.register(command_obj)

    for category in categories:
        module = importlib.import_module(f"{commands_package}.{category}")
        registry.set_category_description(category, _category_text(module))
    return len(declared)
