"""Tests for flatyaml.chars."""

import pytest

from flatyaml.chars import (
    is_identifier,
    is_identifier_begin,
    is_line_char,
    is_numeric,
    is_quote,
    is_whitespace,
    to_number,
)
from flatyaml.source import SENTINEL


class TestClasses:
    def test_whitespace(self):
        assert all(is_whitespace(c) for c in " \t\r\n")
        assert not is_whitespace(SENTINEL)
        assert not is_whitespace("\f")

    def test_identifier_begin(self):
        assert all(is_identifier_begin(c) for c in "aZ_$")
        assert not any(is_identifier_begin(c) for c in "0.-:'")

    def test_identifier_includes_numeric_class(self):
        assert all(is_identifier(c) for c in "aZ_$09.-")
        assert not any(is_identifier(c) for c in ": \t'\"")

    def test_numeric(self):
        assert all(is_numeric(c) for c in "0123456789$.-")
        assert not is_numeric("+")
        assert not is_numeric("e")

    def test_quote(self):
        assert is_quote("'") and is_quote('"')
        assert not is_quote("`")

    def test_line_char(self):
        assert is_line_char(" ")
        assert not any(is_line_char(c) for c in ("\n", "\r", SENTINEL))


@pytest.mark.parametrize("text, expected", [
    ("42", 42.0),
    ("-7", -7.0),
    ("3.", 3.0),
    (".25", 0.25),
    ("-.5", -0.5),
    ("1.2.3", 1.2),
    ("12-4", 12.0),
    ("$5", 0.0),
    ("-", 0.0),
    (".", 0.0),
    ("", 0.0),
])
def test_to_number(text, expected):
    assert to_number(text) == expected
