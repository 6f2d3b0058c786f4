"""flatyaml: parser for flat ``key: value`` scalar files."""

from .config import OnError, ParserOptions
from .entries import (
    Entry,
    EntryKind,
    EntryList,
    Span,
    release_entries,
    release_entry,
)
from .errors import (
    EntryReleasedError,
    FlatYAMLError,
    ParseError,
    SourceError,
    SourceReleasedError,
)
from .parser import parse_all, parse_file, parse_one, parse_text
from .printer import format_entry, print_entries
from .source import SENTINEL, Source, load, release
from .tracking import AllocationTracker

__all__ = [
    "parse_all",
    "parse_one",
    "parse_text",
    "parse_file",
    "load",
    "release",
    "release_entries",
    "release_entry",
    "Source",
    "SENTINEL",
    "Entry",
    "EntryKind",
    "EntryList",
    "Span",
    "format_entry",
    "print_entries",
    "OnError",
    "ParserOptions",
    "AllocationTracker",
    "FlatYAMLError",
    "SourceError",
    "ParseError",
    "SourceReleasedError",
    "EntryReleasedError",
]
