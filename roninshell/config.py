#!/usr/bin/env python3
# roninshell/config.py
from __future__ import annotations

"""
Shell configuration.

Sources, lowest precedence first:
  1) DEFAULTS below
  2) ~/.roninshell/config.toml, then ~/.roninshell/config.json
  3) roninshell.toml in the current directory
  4) RONIN_-prefixed environment variables (RONIN_PROMPT, RONIN_LOG_LEVEL, ...)

Keys are case-insensitive and nested tables flatten with underscores, so
`[log] level = "debug"` sets LOG_LEVEL. Aliases have a table of their own,
which only files can provide:

    [aliases]
    ll = "ls -l"
    la = "ls -a"

Every value is converted and checked before the shell starts; a bad one
raises ValueError naming the key.
"""

import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

ENV_PREFIX = "RONIN_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "PROMPT": "$> ",
    "HISTORY_FILE": "~/.roninshell_history",
    "MAX_HISTORY": 1000,
    "MAX_ALIAS_DEPTH": 16,
    "LOG_LEVEL": "WARNING",
    "LOG_FILE_PATH": None,
    "PLUGIN_PACKAGE": "roninshell.plugins",
    "ENABLE_COMPLETION": True,
}

_MODULE_NAME_RE = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")
# An alias trigger is one plain word
_ALIAS_NAME_RE = re.compile(r"[^\s'\"\\=]+")


@dataclass(frozen=True)
class AppConfig:
    """Validated settings for one shell session."""

    prompt: str = DEFAULTS["PROMPT"]
    history_file: Path = Path.home() / ".roninshell_history"
    max_history: int = DEFAULTS["MAX_HISTORY"]
    max_alias_depth: int = DEFAULTS["MAX_ALIAS_DEPTH"]
    log_level: str = DEFAULTS["LOG_LEVEL"]
    log_file_path: Path | None = None
    plugin_package: str = DEFAULTS["PLUGIN_PACKAGE"]
    enable_completion: bool = DEFAULTS["ENABLE_COMPLETION"]
    aliases: Mapping[str, str] = field(default_factory=dict)

    # Files that contributed, lowest precedence first
    sources: tuple[Path, ...] = ()
    # Keys nothing reads, kept so typos show up under --debug
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- converters ----------

def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in {"1", "true", "yes", "y", "on"}:
        return True
    if word in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _to_int(value: Any, *, minimum: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValueError(f"expected an integer, got {value!r}") from None
    if number < minimum:
        raise ValueError(f"must be >= {minimum}, got {number}")
    return number


def _to_path(value: Any) -> Path:
    return Path(os.path.expandvars(str(value))).expanduser().resolve()


def _to_optional_path(value: Any) -> Path | None:
    if value is None or str(value).strip().lower() in {"", "none"}:
        return None
    return _to_path(value)


def _to_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"expected one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def _to_module_name(value: Any) -> str:
    name = str(value).strip()
    if not _MODULE_NAME_RE.fullmatch(name):
        raise ValueError(f"expected a dotted module name, got {value!r}")
    return name


def _to_aliases(table: Any) -> dict[str, str]:
    if table is None:
        return {}
    if not isinstance(table, Mapping):
        raise ValueError(f"aliases must be a table, got {table!r}")
    aliases: dict[str, str] = {}
    for trigger, expansion in table.items():
        if not _ALIAS_NAME_RE.fullmatch(str(trigger)):
            raise ValueError(f"invalid alias name {trigger!r}")
        if not isinstance(expansion, str) or not expansion.strip():
            raise ValueError(f"alias {trigger!r} must expand to a non-empty string")
        aliases[str(trigger)] = expansion
    return aliases


# Setting key -> converter; the AppConfig field is the lower-cased key
_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "PROMPT": str,
    "HISTORY_FILE": _to_path,
    "MAX_HISTORY": partial(_to_int, minimum=0),
    "MAX_ALIAS_DEPTH": partial(_to_int, minimum=1),
    "LOG_LEVEL": _to_log_level,
    "LOG_FILE_PATH": _to_optional_path,
    "PLUGIN_PACKAGE": _to_module_name,
    "ENABLE_COMPLETION": _to_bool,
}


# ---------- readers ----------

def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be an object")
    return data


_READERS: dict[str, Callable[[Path], dict[str, Any]]] = {
    ".toml": _read_toml,
    ".json": _read_json,
}


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """{'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}"""
    flat: dict[str, Any] = {}
    for key, value in table.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name.upper()] = value
    return flat


def default_config_files() -> list[Path]:
    user_dir = Path.home() / ".roninshell"
    return [user_dir / "config.toml", user_dir / "config.json", Path.cwd() / "roninshell.toml"]


# ---------- public API ----------

def load_config(
    files: Iterable[Path] | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Merge every source and return the validated AppConfig.

    Missing files are skipped; nothing is created on disk. Raises ValueError
    for a file that does not parse or a value that does not convert.
    """
    settings: dict[str, Any] = dict(DEFAULTS)
    aliases: dict[str, str] = {}
    sources: list[Path] = []

    for path in default_config_files() if files is None else files:
        reader = _READERS.get(path.suffix)
        data = dict(reader(path)) if reader else {}
        if not data:
            continue
        sources.append(path)
        aliases.update(_to_aliases(data.pop("aliases", None)))
        settings.update(_flatten(data))

    environ = os.environ if environ is None else environ
    settings.update({
        key[len(ENV_PREFIX):]: value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and key.isupper()
    })

    values: dict[str, Any] = {}
    for key, convert in _CONVERTERS.items():
        try:
            values[key.lower()] = convert(settings[key])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{key}: {exc}") from exc

    return AppConfig(
        **values,
        aliases=aliases,
        sources=tuple(sources),
        extra={key: value for key, value in settings.items() if key not in _CONVERTERS},
    )
