"""Character classes of the line grammar and numeric conversion."""

from __future__ import annotations

import re
import string

from .source import SENTINEL

WHITESPACE = frozenset(" \t\r\n")
IDENTIFIER_BEGIN = frozenset(string.ascii_letters + "_$")
NUMERIC = frozenset(string.digits + "$.-")
IDENTIFIER = IDENTIFIER_BEGIN | NUMERIC
QUOTES = frozenset("'\"")
LINE_END = frozenset("\n\r" + SENTINEL)

# Longest prefix a C-style decimal conversion would accept from a numeric span
# (the span never contains exponent markers, so none are matched here).
_DECIMAL_PREFIX_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def is_whitespace(c: str) -> bool:
    return c in WHITESPACE


def is_identifier_begin(c: str) -> bool:
    return c in IDENTIFIER_BEGIN


def is_identifier(c: str) -> bool:
    return c in IDENTIFIER


def is_numeric(c: str) -> bool:
    return c in NUMERIC


def is_quote(c: str) -> bool:
    return c in QUOTES


def is_line_char(c: str) -> bool:
    return c not in LINE_END


def to_number(span_text: str) -> float:
    """Convert a numeric span to a float.

    Only the leading convertible part counts: ``"1.5.2"`` gives 1.5,
    ``"$12"`` and ``"-"`` give 0.0. Never raises.
    """
    m = _DECIMAL_PREFIX_RE.match(span_text)
    if m is None:
        return 0.0
    return float(m.group(0))
