"""Scalar Parser: turns a Source into an EntryList, one entry per line.

Line grammar::

    line   := key WS* ':' WS* value
    key    := [A-Za-z_$] [A-Za-z0-9_$.-]*
    value  := quoted | number | bare
    quoted := "'" [^']* "'" | '"' [^"]* '"'
    number := [0-9$.-]+
    bare   := [^\\r\\n]*

The parser keeps no state between lines except the Source cursor, and never
backtracks.
"""

from __future__ import annotations

import logging
from os import PathLike
from typing import NoReturn

from .chars import (
    is_identifier,
    is_identifier_begin,
    is_line_char,
    is_numeric,
    is_quote,
    is_whitespace,
    to_number,
)
from .config import OnError, ParserOptions
from .entries import Entry, EntryList, Span
from .errors import ParseError
from .source import SENTINEL, Source, load
from .tracking import AllocationTracker

logger = logging.getLogger("flatyaml.parser")

# Exit status of an OnError.ABORT parse, shared with the CLI.
ABORT_EXIT_STATUS = 2


def _violation(source: Source, offset: int, reason: str, options: ParserOptions) -> NoReturn:
    line, column = source.location(offset)
    err = ParseError(source.name, offset, line, column, reason)
    if options.on_error is OnError.ABORT:
        logger.critical("aborting parse: %s", err)
        raise SystemExit(ABORT_EXIT_STATUS) from err
    raise err


def _skip_whitespace(text: str, pos: int) -> int:
    while is_whitespace(text[pos]):
        pos += 1
    return pos


def parse_one(
    source: Source,
    options: ParserOptions | None = None,
    tracker: AllocationTracker | None = None,
) -> Entry:
    """Parse the line at the cursor and leave the cursor just past its value."""
    options = options or ParserOptions()
    text = source.require_text()
    pos = source.pos

    # Key
    if not is_identifier_begin(text[pos]):
        _violation(source, pos, f"expected a key, found {_describe(text[pos])}", options)
    key_start = pos
    pos += 1
    while is_identifier(text[pos]):
        pos += 1
    key = Span(key_start, pos - key_start)

    # Colon
    pos = _skip_whitespace(text, pos)
    if text[pos] != ":":
        _violation(source, pos, f"expected ':' after key, found {_describe(text[pos])}", options)
    pos = _skip_whitespace(text, pos + 1)

    # Value
    c = text[pos]
    if is_quote(c):
        pos += 1
        value_start = pos
        while text[pos] != c:
            if text[pos] == SENTINEL:
                _violation(source, value_start - 1, "unterminated quoted value", options)
            pos += 1
        entry = Entry.string(source, key, Span(value_start, pos - value_start))
        pos += 1  # closing quote
    elif is_numeric(c):
        value_start = pos
        while is_numeric(text[pos]):
            pos += 1
        entry = Entry.numeric(source, key, to_number(text[value_start:pos]))
    else:
        value_start = pos
        while is_line_char(text[pos]):
            pos += 1
        entry = Entry.string(source, key, Span(value_start, pos - value_start))

    source.pos = pos
    if tracker is not None:
        tracker.allocate("entry")
    return entry


def parse_all(
    source: Source,
    options: ParserOptions | None = None,
    tracker: AllocationTracker | None = None,
) -> EntryList:
    """Parse every line of *source* from the start.

    At least one entry is required; the first line is parsed without skipping
    leading whitespace. Entries parsed before a grammar violation are
    released before the error propagates.
    """
    options = options or ParserOptions()
    source.reset()
    text = source.require_text()

    entries = EntryList(tracker)
    try:
        entries.append(parse_one(source, options, tracker))
        source.pos = _skip_whitespace(text, source.pos)
        while text[source.pos] != SENTINEL:
            entries.append(parse_one(source, options, tracker))
            source.pos = _skip_whitespace(text, source.pos)
    except BaseException:
        entries.release()
        raise

    logger.debug("parsed %d entries from %s", len(entries), source.name)
    return entries


def parse_text(
    text: str,
    name: str = "<string>",
    options: ParserOptions | None = None,
) -> EntryList:
    """Parse in-memory text. The returned entries keep the Source alive."""
    return parse_all(Source.from_text(text, name=name), options)


def parse_file(
    path: str | PathLike[str],
    options: ParserOptions | None = None,
    tracker: AllocationTracker | None = None,
) -> tuple[Source, EntryList]:
    """Load and parse *path*.

    Returns the Source with the entries so the caller controls when both are
    released (entries first, then the Source).
    """
    options = options or ParserOptions()
    source = load(path, encoding=options.encoding, tracker=tracker)
    try:
        return source, parse_all(source, options, tracker)
    except BaseException:
        source.release()
        raise


def _describe(c: str) -> str:
    if c == SENTINEL:
        return "end of input"
    return repr(c)
