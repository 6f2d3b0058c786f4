"""Tests for the Scalar Parser."""

import pytest

from flatyaml import (
    AllocationTracker,
    EntryKind,
    OnError,
    ParseError,
    ParserOptions,
    Source,
    parse_all,
    parse_one,
    parse_text,
)


# ---------------------------------------------------------------------------
# Value kinds
# ---------------------------------------------------------------------------

def test_double_quoted_string():
    entries = parse_text('key: "value"')
    assert len(entries) == 1
    entry = entries[0]
    assert entry.kind is EntryKind.String
    assert entry.key == "key"
    assert entry.value == "value"

def test_single_quoted_string():
    assert parse_text("key: 'value'")[0].value == "value"

def test_quoted_string_is_not_trimmed_or_unescaped():
    assert parse_text(r'key: "  a\nb  "')[0].value == r"  a\nb  "

def test_other_quote_type_is_plain_content():
    assert parse_text("""k: "it's" """)[0].value == "it's"

def test_empty_quoted_string():
    entries = parse_text("a: ''\nb: \"\"")
    assert entries.pairs() == [("a", ""), ("b", "")]

def test_number():
    entry = parse_text("key: 123.45")[0]
    assert entry.kind is EntryKind.Number
    assert entry.value == 123.45

def test_negative_and_leading_dot_numbers():
    entries = parse_text("a: -2.5\nb: .5\nc: 0")
    assert entries.pairs() == [("a", -2.5), ("b", 0.5), ("c", 0.0)]

def test_bare_string_kept_verbatim():
    entry = parse_text("key: bare text here")[0]
    assert entry.kind is EntryKind.String
    assert entry.value == "bare text here"

def test_bare_string_keeps_trailing_spaces():
    assert parse_text("note: in stock  \nx: 1")[0].value == "in stock  "

def test_bare_string_stops_at_crlf():
    entries = parse_text("a: hello\r\nb: 2")
    assert entries.pairs() == [("a", "hello"), ("b", 2.0)]

def test_bare_string_with_quote_inside():
    assert parse_text("k: it's fine")[0].value == "it's fine"


# ---------------------------------------------------------------------------
# Permissive numbers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("$12", 0.0),
    ("-", 0.0),
    ("1.2.3", 1.2),
    ("5-3", 5.0),
    ("--1", 0.0),
])
def test_number_span_converts_leading_part(raw, expected):
    entry = parse_text(f"v: {raw}")[0]
    assert entry.kind is EntryKind.Number
    assert entry.value == expected

def test_number_stops_at_first_non_numeric_char():
    source = Source.from_text("v: 12abc")
    entry = parse_one(source)
    assert entry.value == 12.0
    assert source.pos == 5


# ---------------------------------------------------------------------------
# Keys and whitespace
# ---------------------------------------------------------------------------

def test_key_character_class():
    entry = parse_text("$a.b-c_1: x")[0]
    assert entry.key == "$a.b-c_1"

def test_whitespace_around_colon_is_ignored():
    spaced = parse_text('key  :   "v"')
    tight = parse_text('key:"v"')
    assert spaced.pairs() == tight.pairs() == [("key", "v")]

def test_blank_lines_between_entries_are_skipped():
    entries = parse_text("a: 1\n\n\r\n  \tb: x\n\n")
    assert entries.pairs() == [("a", 1.0), ("b", "x")]

def test_duplicate_keys_are_kept_in_order():
    entries = parse_text("a: 1\na: 2")
    assert entries.pairs() == [("a", 1.0), ("a", 2.0)]

def test_missing_value_at_end_of_input_is_empty_string():
    entry = parse_text("k:")[0]
    assert entry.kind is EntryKind.String
    assert entry.value == ""

def test_missing_value_consumes_next_line():
    # Whitespace after the colon includes newlines.
    entries = parse_text("k:\nnext: 1")
    assert entries.pairs() == [("k", "next: 1")]


# ---------------------------------------------------------------------------
# Same-quote truncation
# ---------------------------------------------------------------------------

def test_doubled_quote_truncates_at_first_quote():
    source = Source.from_text("k: 'it''s'")
    entry = parse_one(source)
    assert entry.value == "it"
    assert source.pos == 7

def test_doubled_quote_leftover_is_a_violation_in_full_parse():
    with pytest.raises(ParseError) as exc_info:
        parse_text("k: 'it''s'")
    assert exc_info.value.column == 8


# ---------------------------------------------------------------------------
# Ordering and re-parsing
# ---------------------------------------------------------------------------

def test_order_preserved():
    entries = parse_text("a: 1\nb: 2\nc: 3")
    assert entries.pairs() == [("a", 1.0), ("b", 2.0), ("c", 3.0)]

def test_reparse_same_source_is_identical():
    source = Source.from_text('name: "Widget"\nprice: 9.99\nnote: in stock')
    first = parse_all(source)
    second = parse_all(source)
    assert first.pairs() == second.pairs()
    assert [e.kind for e in first] == [e.kind for e in second]

def test_parse_one_advances_cursor_only():
    source = Source.from_text("a: 1\nb: 2")
    parse_one(source)
    assert source.pos == 4
    assert source.current == "\n"


# ---------------------------------------------------------------------------
# Grammar violations
# ---------------------------------------------------------------------------

def test_key_must_start_with_identifier_char():
    with pytest.raises(ParseError) as exc_info:
        parse_text("1a: x")
    err = exc_info.value
    assert (err.line, err.column, err.offset) == (1, 1, 0)
    assert "expected a key" in err.reason

def test_missing_colon():
    with pytest.raises(ParseError) as exc_info:
        parse_text("key value")
    assert exc_info.value.column == 5
    assert "':'" in exc_info.value.reason

def test_unterminated_quote():
    with pytest.raises(ParseError) as exc_info:
        parse_text("k: 'abc")
    assert exc_info.value.reason == "unterminated quoted value"
    assert exc_info.value.column == 4

def test_empty_input_is_rejected():
    with pytest.raises(ParseError) as exc_info:
        parse_text("")
    assert "end of input" in exc_info.value.reason

def test_leading_whitespace_before_first_key_is_rejected():
    with pytest.raises(ParseError):
        parse_text("\na: 1")

def test_error_location_on_later_line():
    with pytest.raises(ParseError) as exc_info:
        parse_text("a: 1\nb: 2\n?: 3", name="doc.yml")
    err = exc_info.value
    assert (err.line, err.column) == (3, 1)
    assert str(err).startswith("doc.yml:3:1: ")

def test_abort_policy_exits(caplog):
    options = ParserOptions(on_error=OnError.ABORT)
    with pytest.raises(SystemExit) as exc_info:
        parse_text("a: 1\n:x", options=options)
    assert exc_info.value.code == 2
    assert isinstance(exc_info.value.__cause__, ParseError)
    assert "<string>:2:1:" in caplog.text

def test_error_location_counts_lone_cr_as_line_end():
    with pytest.raises(ParseError) as exc_info:
        parse_text("a: 1\rb: 2\r  ?: 3")
    assert (exc_info.value.line, exc_info.value.column) == (3, 3)

def test_error_location_counts_crlf_once():
    with pytest.raises(ParseError) as exc_info:
        parse_text("a: 1\r\nb 2")
    assert (exc_info.value.line, exc_info.value.column) == (2, 3)


# ---------------------------------------------------------------------------
# Allocation tracking
# ---------------------------------------------------------------------------

def test_parse_all_counts_entries():
    tracker = AllocationTracker()
    source = Source.from_text("a: 1\nb: x\nc: 'y'", tracker=tracker)
    entries = parse_all(source, tracker=tracker)
    assert tracker.total_allocated == 4
    entries.release()
    source.release()
    assert tracker.leaks == 0
    assert tracker.total_freed == 4


def test_violation_mid_document_releases_parsed_entries():
    tracker = AllocationTracker()
    source = Source.from_text("a: 1\nb: 2\nc 3\n", tracker=tracker)
    with pytest.raises(ParseError) as exc_info:
        parse_all(source, tracker=tracker)
    assert exc_info.value.line == 3
    assert tracker.total_allocated == 3
    assert tracker.leaks == 1  # only the source
    source.release()
    assert tracker.leaks == 0
