"""
Recursive-descent value parser: strings, scalars, arrays and inline tables.
"""
from __future__ import annotations

from typing import Any

from ._config import DecodeOptions
from ._cursor import Cursor
from ._errors import Diagnostics, ScanAbort
from ._scalars import SCALAR_START_CHARS, scan_scalar
from ._scanners import WS, scan_key, scan_string, skip_ws_and_comments
from ._tables import KeyConflict, TableTree


def parse_value(cur: Cursor, diags: Diagnostics, opts: DecodeOptions, depth: int = 0) -> Any:
    """
    Parse one value starting at the cursor.

    depth is the number of arrays and inline tables already open around the
    value.
    """
    char = cur.peek()
    if char == '"' or char == "'":
        return scan_string(cur, diags)
    if char == "[":
        return parse_array(cur, diags, opts, depth + 1)
    if char == "{":
        return parse_inline_table(cur, diags, opts, depth + 1)
    if char in SCALAR_START_CHARS:
        return scan_scalar(cur, diags, opts)
    if char == "":
        diags.structural(cur.pos, "expected a value, found end of input")
        raise ScanAbort(fatal=True)
    if char == "\n":
        diags.structural(cur.pos, "expected a value, found end of line")
    else:
        diags.structural(cur.pos, f"expected a value, found {char!r}")
    raise ScanAbort()


def _enter(cur: Cursor, diags: Diagnostics, opts: DecodeOptions, depth: int) -> int:
    start = cur.pos
    if opts.max_depth is not None and depth > opts.max_depth:
        diags.structural(start, f"maximum nesting depth of {opts.max_depth} exceeded")
        raise ScanAbort(fatal=True)
    cur.skip()
    return start


def parse_array(cur: Cursor, diags: Diagnostics, opts: DecodeOptions, depth: int) -> list:
    start = _enter(cur, diags, opts, depth)
    array: list = []
    while True:
        skip_ws_and_comments(cur, diags, newlines=True)
        char = cur.peek()
        if char == "]":
            cur.skip()
            return array
        if char == "":
            diags.structural(start, "unterminated array")
            raise ScanAbort(fatal=True)
        array.append(parse_value(cur, diags, opts, depth))

        skip_ws_and_comments(cur, diags, newlines=True)
        char = cur.peek()
        if char == ",":
            cur.skip()
        elif char == "]":
            cur.skip()
            return array
        elif char == "":
            diags.structural(start, "unterminated array")
            raise ScanAbort(fatal=True)
        else:
            diags.structural(cur.pos, f"expected ',' or ']' in array, found {char!r}")
            raise ScanAbort()


def parse_inline_table(cur: Cursor, diags: Diagnostics, opts: DecodeOptions, depth: int) -> dict:
    """Parse ``{ key = value, ... }``; it must fit on one line."""
    start = _enter(cur, diags, opts, depth)
    tree = TableTree()
    cur.skip_while(WS)
    if cur.peek() == "}":
        cur.skip()
        return tree.root
    while True:
        cur.skip_while(WS)
        _check_open(cur, diags, start)
        key_pos = cur.pos
        key = scan_key(cur, diags)
        if cur.peek() != "=":
            _check_open(cur, diags, start)
            diags.structural(cur.pos, "expected '=' after a key in an inline table")
            raise ScanAbort()
        cur.skip()
        cur.skip_while(WS)
        _check_open(cur, diags, start)
        value = parse_value(cur, diags, opts, depth)
        try:
            tree.bind((), key, value)
        except KeyConflict as exc:
            diags.semantic(key_pos, str(exc))

        cur.skip_while(WS)
        char = cur.peek()
        if char == "}":
            cur.skip()
            return tree.root
        if char == ",":
            cur.skip()
            cur.skip_while(WS)
            if cur.peek() == "}":
                diags.structural(cur.pos, "trailing comma not allowed in an inline table")
                raise ScanAbort()
            continue
        _check_open(cur, diags, start)
        diags.structural(cur.pos, f"expected ',' or '}}' in inline table, found {char!r}")
        raise ScanAbort()


def _check_open(cur: Cursor, diags: Diagnostics, start: int) -> None:
    # Inline tables end at the line: report a newline or end of input once.
    char = cur.peek()
    if char == "":
        diags.structural(start, "unterminated inline table")
        raise ScanAbort(fatal=True)
    if char == "\n":
        diags.structural(cur.pos, "newline not allowed in an inline table")
        raise ScanAbort()
