#!/usr/bin/env python3
# roninshell/interface/history.py
from __future__ import annotations

"""
Persistent input history.

The history file is plain text, one entry per line, oldest first. It is read
once at startup and rewritten in full once at shutdown.
"""

import logging
from pathlib import Path
from typing import Iterable

DEFAULT_MAX_HISTORY = 1000


def dedupe_keep_latest(entries: Iterable[str]) -> list[str]:
    """
    Drop earlier duplicates, keeping each line's most recent occurrence.

    ["a", "b", "a", "c"] -> ["b", "a", "c"]
    """
    seen: set[str] = set()
    newest_first: list[str] = []
    for entry in reversed(list(entries)):
        if entry in seen:
            continue
        seen.add(entry)
        newest_first.append(entry)
    newest_first.reverse()
    return newest_first


class HistoryStore:
    """Loads and saves the input history file."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_HISTORY,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self.max_entries = max_entries
        self.log = logger or logging.getLogger(__name__)

    def load(self, path: Path | str) -> list[str]:
        """Read history entries; a missing or unreadable file yields []."""
        history_path = Path(path)
        try:
            text = history_path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            self.log.debug("No history file at %s", history_path)
            return []
        except OSError as exc:
            self.log.warning("Cannot read history file %s: %s", history_path, exc)
            return []

        entries = [line for line in text.splitlines() if line]
        self.log.debug("Loaded %d history entries from %s", len(entries), history_path)
        return entries

    def prepare(self, entries: Iterable[str]) -> list[str]:
        """Deduplicate and cap entries, dropping the oldest beyond the limit."""
        unique = dedupe_keep_latest(entries)
        if len(unique) > self.max_entries:
            unique = unique[len(unique) - self.max_entries:]
        return unique

    def save(self, path: Path | str, entries: Iterable[str]) -> list[str]:
        """
        Overwrite the history file with the deduplicated, capped entries.

        Returns the entries written. Write failures are logged, not raised,
        so a read-only home directory never breaks shutdown.
        """
        history_path = Path(path)
        kept = self.prepare(entries)
        try:
            history_path.parent.mkdir(parents=True, exist_ok=True)
            history_path.write_text(
                "".join(f"{entry}\n" for entry in kept), encoding="utf-8")
        except OSError as exc:
            self.log.warning("Cannot write history file %s: %s", history_path, exc)
            return kept

        self.log.debug("Saved %d history entries to %s", len(kept), history_path)
        return kept
