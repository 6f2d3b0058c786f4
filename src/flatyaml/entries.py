"""Parsed entries and the ordered list that owns them.

Entries do not copy text: keys and string values are ``Span`` views into the
Source they were parsed from, resolved on access. Releasing the Source makes
those accesses fail with ``SourceReleasedError`` instead of returning stale
data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from .errors import EntryReleasedError
from .source import Source
from .tracking import AllocationTracker

logger = logging.getLogger("flatyaml.entries")


@dataclass(frozen=True, slots=True)
class Span:
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class EntryKind(Enum):
    String = auto()
    Number = auto()


@dataclass(eq=False)
class Entry:
    """One ``key: value`` line."""

    kind: EntryKind
    key_span: Span
    value_span: Span | None = None   # String only
    number: float | None = None      # Number only
    source: Source | None = field(default=None, repr=False)

    @classmethod
    def string(cls, source: Source, key: Span, value: Span) -> "Entry":
        return cls(EntryKind.String, key, value_span=value, source=source)

    @classmethod
    def numeric(cls, source: Source, key: Span, value: float) -> "Entry":
        return cls(EntryKind.Number, key, number=value, source=source)

    @property
    def released(self) -> bool:
        return self.source is None

    @property
    def key(self) -> str:
        return self._require_source().slice(self.key_span)

    @property
    def value(self) -> str | float:
        source = self._require_source()
        if self.kind is EntryKind.Number:
            return self.number
        return source.slice(self.value_span)

    def _require_source(self) -> Source:
        if self.source is None:
            raise EntryReleasedError("entry has been released")
        return self.source


def release_entry(entry: Entry, tracker: AllocationTracker | None = None) -> None:
    """Free exactly one entry.

    Does not touch any EntryList holding it; call ``EntryList.unlink`` first
    when the entry came from a list.
    """
    if entry.source is None:
        return
    entry.source = None
    if tracker is not None:
        tracker.free("entry")


class EntryList:
    """Entries in source order.

    Nodes live in a flat arena; the successor of node ``i`` is stored as an
    index in ``_next`` rather than a reference.
    """

    def __init__(self, tracker: AllocationTracker | None = None) -> None:
        self._nodes: list[Entry] = []
        self._next: list[int | None] = []
        self._head: int | None = None
        self._tail: int | None = None
        self._count = 0
        self._tracker = tracker

    # -- Building -------------------------------------------------------

    def append(self, entry: Entry) -> int:
        index = len(self._nodes)
        self._nodes.append(entry)
        self._next.append(None)
        if self._tail is None:
            self._head = index
        else:
            self._next[self._tail] = index
        self._tail = index
        self._count += 1
        return index

    def unlink(self, index: int) -> Entry:
        """Take node *index* out of the chain and return its entry.

        The arena keeps the node, so ``release()`` still frees it. Raises
        ``IndexError`` when *index* is not currently linked.
        """
        prev: int | None = None
        current = self._head
        while current is not None and current != index:
            prev, current = current, self._next[current]
        if current is None:
            raise IndexError(f"node {index} is not linked")

        successor = self._next[index]
        if prev is None:
            self._head = successor
        else:
            self._next[prev] = successor
        if self._tail == index:
            self._tail = prev
        self._next[index] = None
        self._count -= 1
        return self._nodes[index]

    # -- Traversal ------------------------------------------------------

    @property
    def head(self) -> int | None:
        return self._head

    def next_index(self, index: int) -> int | None:
        return self._next[index]

    def node(self, index: int) -> Entry:
        return self._nodes[index]

    def __iter__(self) -> Iterator[Entry]:
        index = self._head
        while index is not None:
            yield self._nodes[index]
            index = self._next[index]

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, position: int) -> Entry:
        """Entry at *position* in source order (negative positions allowed)."""
        return list(self)[position]

    def __bool__(self) -> bool:
        return self._head is not None

    def pairs(self) -> list[tuple[str, str | float]]:
        return [(e.key, e.value) for e in self]

    # -- Lifecycle ------------------------------------------------------

    def release(self) -> None:
        """Release every entry; the list is empty afterwards."""
        count = len(self._nodes)
        for entry in self._nodes:
            release_entry(entry, self._tracker)
        self._nodes.clear()
        self._next.clear()
        self._head = None
        self._tail = None
        self._count = 0
        if count:
            logger.debug("released %d entries", count)


def release_entries(entries: EntryList | None) -> None:
    """Release a whole list; ``None`` is accepted and ignored."""
    if entries is not None:
        entries.release()
