#!/usr/bin/env python3
# roninshell/interface/parser.py
from __future__ import annotations

"""
From an input line to a builtin's call arguments.

tokenize() splits a line into words the way a POSIX shell does (quotes and
backslashes, no expansion). bind_args() maps the words after the command
name onto the builtin's signature:

    ls -la /tmp          -> ls("-la", "/tmp")
    history 20           -> history(20)            (count: int)
    process top=5        -> process(top=5)         (keyword-only)

A `key=value` word only becomes a keyword argument when `key` names a
parameter; otherwise it is passed through as an ordinary word.
"""

import inspect
import shlex
from typing import Any, Collection, get_args, get_origin

from roninshell.exceptions import InputSyntaxError

# Parameters filled in by the dispatcher, never from user words
RESERVED_PARAMS: frozenset[str] = frozenset({"shell"})

_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_NAMED_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


def tokenize(command_line: str) -> list[str]:
    """Split a command line into words; raises InputSyntaxError on unbalanced quotes."""
    try:
        return shlex.split(command_line, posix=True)
    except ValueError as exc:
        raise InputSyntaxError(f"{exc}: {command_line!r}") from exc


def _signature(func: Any) -> inspect.Signature:
    try:
        return inspect.signature(func, eval_str=True)
    except NameError:
        # an annotation names something only imported under TYPE_CHECKING
        return inspect.signature(func)


def _coerce_value(word: str, annotation: Any) -> Any:
    """Convert a word for a bool, int or float parameter (or an Optional of one)."""
    members = get_args(annotation)
    if type(None) in members:
        present = [member for member in members if member is not type(None)]
        if len(present) == 1:
            annotation = present[0]

    if annotation is bool:
        return word.lower() in _TRUE_WORDS
    if annotation in (int, float):
        try:
            return annotation(word)
        except ValueError:
            raise TypeError(f"Expected {annotation.__name__}, got {word!r}") from None
    return word


def _element_type(annotation: Any) -> Any:
    """`*rest: int` and `*rest: Tuple[int, ...]` both mean int words."""
    if get_origin(annotation) is tuple and get_args(annotation):
        return get_args(annotation)[0]
    return annotation


def bind_args(
    func: Any,
    tokens: list[str],
    *,
    reserved: Collection[str] = RESERVED_PARAMS,
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """
    Bind argument words to the signature of `func`.

    Returns (args, kwargs) ready for `func(*args, **kwargs)`; parameters
    named in `reserved` are left out for the caller to supply. Raises
    TypeError when the words do not fit (a missing argument, one too many,
    a bad number).
    """
    signature = _signature(func)
    parameters = [p for p in signature.parameters.values() if p.name not in reserved]
    by_name = {p.name: p for p in parameters if p.kind in _NAMED_KINDS}

    words: list[str] = []
    named: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if sep and key in by_name:
            named[key] = value
        else:
            words.append(token)

    slots = [p for p in parameters if p.kind in _POSITIONAL_KINDS]
    rest = next((p for p in parameters if p.kind is p.VAR_POSITIONAL), None)

    args: list[Any] = []
    for index, word in enumerate(words):
        if index < len(slots):
            annotation = slots[index].annotation
        elif rest is not None:
            annotation = _element_type(rest.annotation)
        else:
            # Left as text; bind() below reports the surplus
            annotation = inspect.Parameter.empty
        args.append(_coerce_value(word, annotation))

    kwargs = {name: _coerce_value(value, by_name[name].annotation) for name, value in named.items()}

    # Missing, surplus and doubly-given arguments all surface here
    signature.replace(parameters=parameters).bind(*args, **kwargs)
    return tuple(args), kwargs


def build_usage(
    command_name: str,
    func: Any,
    *,
    reserved: Collection[str] = RESERVED_PARAMS,
) -> str:
    """
    One-line usage for a builtin, e.g. 'history [count]' or
    'process [top=...] [user=...]'.
    """
    parts = [command_name]
    for parameter in _signature(func).parameters.values():
        if parameter.name in reserved or parameter.kind is parameter.VAR_KEYWORD:
            continue
        if parameter.kind is parameter.VAR_POSITIONAL:
            parts.append("[args...]")
        elif parameter.kind is parameter.KEYWORD_ONLY:
            parts.append(f"[{parameter.name}=...]")
        elif parameter.default is parameter.empty:
            parts.append(f"<{parameter.name}>")
        else:
            parts.append(f"[{parameter.name}]")
    return " ".join(parts)
