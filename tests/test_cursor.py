"""Tests for the Cursor and the whitespace/comment skipper."""

import re

import pytest

from tomlscan._cursor import Cursor
from tomlscan._errors import Diagnostics, LexicalError
from tomlscan._scanners import WS, skip_ws_and_comments


def test_peek_take_skip():
    cur = Cursor("abcdef")
    assert cur.peek() == "a"
    assert cur.peek(3) == "abc"
    assert cur.pos == 0
    assert cur.take(2) == "ab"
    cur.skip()
    assert cur.pos == 3
    assert cur.take(10) == "def"
    assert cur.at_end()
    assert cur.peek() == ""


def test_skip_is_clamped_to_end():
    cur = Cursor("ab")
    cur.skip(5)
    assert cur.pos == 2
    assert cur.at_end()


def test_skip_while_counts():
    cur = Cursor("  \t x")
    assert cur.skip_while(WS) == 4
    assert cur.peek() == "x"
    assert cur.skip_while(WS) == 0


def test_skip_until_stops_before_substring():
    cur = Cursor("key # comment\nnext")
    assert cur.skip_until("\n") == 13
    assert cur.peek() == "\n"
    assert cur.skip_until("missing") == 5
    assert cur.at_end()


def test_take_until_and_take_match():
    cur = Cursor("abc123;rest")
    assert cur.take_match(re.compile(r"[a-z]+")) == "abc"
    assert cur.take_match(re.compile(r"[a-z]+")) == ""
    assert cur.pos == 3
    assert cur.take_until(";") == "123"
    assert cur.peek() == ";"


@pytest.mark.parametrize("text,pos", [("x = 1", 0), ("abc", 1), ("\n", 0), ("", 0)])
def test_skip_ws_and_comments_noop(text, pos):
    """Skipping where there is no whitespace or comment leaves the position unchanged."""
    cur = Cursor(text)
    cur.skip(pos)
    diags = Diagnostics()
    skip_ws_and_comments(cur, diags)
    assert cur.pos == pos
    assert not diags


def test_skip_ws_and_comments_stops_at_newline():
    cur = Cursor("  # one\n# two\n")
    skip_ws_and_comments(cur, Diagnostics())
    assert cur.peek() == "\n"
    assert cur.pos == 7


def test_skip_ws_and_comments_with_newlines():
    cur = Cursor("  # one\n\t# two\n  x")
    skip_ws_and_comments(cur, Diagnostics(), newlines=True)
    assert cur.peek() == "x"


def test_comment_control_characters_reported():
    text = "# a\x00b\x7f\tok\n"
    diags = Diagnostics()
    skip_ws_and_comments(Cursor(text), diags)
    assert [type(d) for d in diags] == [LexicalError, LexicalError]
    assert [d.position for d in diags] == [3, 5]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
