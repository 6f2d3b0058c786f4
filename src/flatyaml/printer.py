"""Diagnostic rendering of parsed entries."""

from __future__ import annotations

import sys
from typing import IO, Iterable

from .entries import Entry, EntryKind


def format_entry(entry: Entry) -> str:
    """``key: 'text'`` for strings, ``key: 1.500000`` for numbers."""
    if entry.kind is EntryKind.Number:
        return f"{entry.key}: {entry.number:f}"
    return f"{entry.key}: '{entry.value}'"


def print_entries(entries: Iterable[Entry], dest: IO[str] | None = None) -> None:
    dest = dest if dest is not None else sys.stdout
    for entry in entries:
        print(format_entry(entry), file=dest)
