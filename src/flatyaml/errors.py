"""Exception hierarchy for flatyaml."""

from __future__ import annotations


class FlatYAMLError(Exception):
    """Base class for every error raised by flatyaml."""


class SourceError(FlatYAMLError):
    """The source text could not be produced (unreadable, undecodable, or
    containing the sentinel character)."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


class ParseError(FlatYAMLError):
    """A line violated the grammar.

    ``line`` and ``column`` are 1-based and point at the offending character.
    """

    def __init__(self, name: str, offset: int, line: int, column: int, reason: str) -> None:
        super().__init__(f"{name}:{line}:{column}: {reason}")
        self.name = name
        self.offset = offset
        self.line = line
        self.column = column
        self.reason = reason


class SourceReleasedError(FlatYAMLError):
    """A span was resolved after its Source was released."""


class EntryReleasedError(FlatYAMLError):
    """An entry was used after release_entry() freed it."""
