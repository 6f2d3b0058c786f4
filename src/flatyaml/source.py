"""Source Buffer: owns the raw text and the read cursor over it."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import TYPE_CHECKING

from .errors import SourceError, SourceReleasedError
from .tracking import AllocationTracker

if TYPE_CHECKING:
    from .entries import Span

logger = logging.getLogger("flatyaml.source")

SENTINEL = "\0"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(eq=False)
class Source:
    """Text loaded from somewhere, terminated by ``SENTINEL``.

    ``text`` never changes once set; ``release()`` drops it. ``pos`` is the
    only mutable state and stays within ``[0, length]``.
    """

    name: str
    text: str | None
    pos: int = 0
    _tracker: AllocationTracker | None = field(default=None, repr=False)

    @classmethod
    def from_text(
        cls,
        text: str,
        name: str = "<string>",
        tracker: AllocationTracker | None = None,
    ) -> "Source":
        if SENTINEL in text:
            raise SourceError(name, "text contains a NUL character")
        if tracker is not None:
            tracker.allocate("source")
        return cls(name=name, text=text + SENTINEL, _tracker=tracker)

    # -- Cursor ---------------------------------------------------------

    @property
    def released(self) -> bool:
        return self.text is None

    @property
    def length(self) -> int:
        """Number of characters, not counting the sentinel."""
        return len(self.require_text()) - 1

    @property
    def current(self) -> str:
        return self.require_text()[self.pos]

    def reset(self) -> None:
        self.pos = 0

    # -- Views ----------------------------------------------------------

    def slice(self, span: "Span") -> str:
        text = self.require_text()
        return text[span.offset:span.offset + span.length]

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of *offset*.

        LF, CRLF and a lone CR each end a line.
        """
        text = self.require_text()
        line, line_start = 1, 0
        for m in _LINE_BREAK_RE.finditer(text, 0, offset):
            line += 1
            line_start = m.end()
        return line, offset - line_start + 1

    def require_text(self) -> str:
        if self.text is None:
            raise SourceReleasedError(f"source {self.name!r} has been released")
        return self.text

    # -- Lifecycle ------------------------------------------------------

    def release(self) -> None:
        """Drop the owned text. Entries still pointing here stop resolving."""
        if self.text is None:
            return
        self.text = None
        self.pos = 0
        if self._tracker is not None:
            self._tracker.free("source")
        logger.debug("released source %s", self.name)


def load(
    path: str | PathLike[str],
    *,
    encoding: str = "utf-8",
    tracker: AllocationTracker | None = None,
) -> Source:
    """Read the whole file at *path* into a new Source.

    Raises ``SourceError`` when the file cannot be opened, read or decoded.
    """
    name = str(path)
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError as exc:
        raise SourceError(name, f"cannot read source: {exc}") from exc

    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise SourceError(name, f"cannot decode source as {encoding}: {exc}") from exc

    source = Source.from_text(text, name=name, tracker=tracker)
    logger.debug("loaded %s (%d chars)", name, source.length)
    return source


def release(source: Source | None) -> None:
    """Release *source*; ``None`` is accepted and ignored."""
    if source is not None:
        source.release()
