"""
Lexical scanners: whitespace and comments, keys, and the four string forms.

Scanners record problems in the shared Diagnostics. Problems that leave a
usable result (a bad escape, a stray control character) are recorded and the
scan continues; problems that leave nothing usable raise ScanAbort after
recording.
"""
from __future__ import annotations

import re
import string

from ._cursor import Cursor
from ._errors import Diagnostics, ScanAbort

ASCII_CTRL = frozenset(chr(i) for i in range(32)) | frozenset(chr(127))

ILLEGAL_COMMENT_CHARS = ASCII_CTRL - frozenset("\t")

WS = frozenset(" \t")
WS_AND_NEWLINE = WS | frozenset("\n")
BARE_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "-_")

BASIC_ESCAPES = {
    "b": "\u0008",
    "t": "\u0009",
    "n": "\u000A",
    "f": "\u000C",
    "r": "\u000D",
    '"': "\u0022",
    "\\": "\u005C",
}

# Runs of characters that need no attention inside each string form.
_BASIC_RUN = re.compile(r'[^"\\\x00-\x08\x0a-\x1f\x7f]+')
_ML_BASIC_RUN = re.compile(r'[^"\\\x00-\x08\x0b-\x1f\x7f]+')
_LITERAL_RUN = re.compile(r"[^'\x00-\x08\x0a-\x1f\x7f]+")
_ML_LITERAL_RUN = re.compile(r"[^'\x00-\x08\x0b-\x1f\x7f]+")
_BARE_KEY = re.compile(r"[A-Za-z0-9_-]+")


def skip_ws_and_comments(cur: Cursor, diags: Diagnostics, *, newlines: bool = False) -> None:
    """
    Skip spaces, tabs and comments (and newlines when newlines=True).

    A comment runs up to, but not including, the next newline. Each control
    character other than tab inside it is a lexical error.
    """
    chars = WS_AND_NEWLINE if newlines else WS
    while True:
        skipped = cur.skip_while(chars)
        if cur.peek() != "#":
            if not skipped:
                return
            continue
        start = cur.pos
        comment = cur.take_until("\n")
        for i, char in enumerate(comment):
            if char in ILLEGAL_COMMENT_CHARS:
                diags.lexical(start + i, f"illegal control character {char!r} in comment")


def scan_bare_key(cur: Cursor) -> str:
    return cur.take_match(_BARE_KEY)


def scan_key(cur: Cursor, diags: Diagnostics) -> tuple[str, ...]:
    """
    Scan a dotted key such as ``a."b c".'d'``.

    Leaves the cursor after the last segment and any trailing spaces.
    """
    parts = [_scan_key_part(cur, diags)]
    cur.skip_while(WS)
    while cur.peek() == ".":
        cur.skip()
        cur.skip_while(WS)
        parts.append(_scan_key_part(cur, diags))
        cur.skip_while(WS)
    return tuple(parts)


def _scan_key_part(cur: Cursor, diags: Diagnostics) -> str:
    char = cur.peek()
    if char in BARE_KEY_CHARS:
        return scan_bare_key(cur)
    if char == '"' or char == "'":
        if cur.peek(3) == char * 3:
            diags.structural(cur.pos, "multiline strings are not allowed as keys")
            raise ScanAbort()
        return scan_string(cur, diags)
    if char == "":
        diags.structural(cur.pos, "expected a key, found end of input")
    elif char == "\n":
        diags.structural(cur.pos, "expected a key, found end of line")
    else:
        diags.structural(cur.pos, f"expected a key, found {char!r}")
    raise ScanAbort()


def scan_string(cur: Cursor, diags: Diagnostics) -> str:
    """Scan any of the four string forms, chosen by the opening delimiter run."""
    delim = cur.peek()
    multiline = cur.peek(3) == delim * 3
    if delim == '"':
        return _scan_multiline_basic(cur, diags) if multiline else _scan_basic(cur, diags)
    return _scan_multiline_literal(cur, diags) if multiline else _scan_literal(cur, diags)


def _unterminated(cur: Cursor, diags: Diagnostics, start: int, what: str) -> ScanAbort:
    diags.structural(start, f"unterminated {what}")
    return ScanAbort(fatal=cur.at_end())


def _scan_basic(cur: Cursor, diags: Diagnostics) -> str:
    start = cur.pos
    cur.skip()
    parts = []
    while True:
        parts.append(cur.take_match(_BASIC_RUN))
        char = cur.peek()
        if char == '"':
            cur.skip()
            return "".join(parts)
        if char == "" or char == "\n":
            raise _unterminated(cur, diags, start, "string")
        if char == "\\":
            parts.append(_scan_escape(cur, diags, multiline=False))
            continue
        diags.lexical(cur.pos, f"illegal control character {char!r} in string")
        cur.skip()


def _scan_literal(cur: Cursor, diags: Diagnostics) -> str:
    start = cur.pos
    cur.skip()
    parts = []
    while True:
        parts.append(cur.take_match(_LITERAL_RUN))
        char = cur.peek()
        if char == "'":
            cur.skip()
            return "".join(parts)
        if char == "" or char == "\n":
            raise _unterminated(cur, diags, start, "literal string")
        diags.lexical(cur.pos, f"illegal control character {char!r} in literal string")
        cur.skip()


def _scan_multiline_basic(cur: Cursor, diags: Diagnostics) -> str:
    start = cur.pos
    cur.skip(3)
    if cur.peek() == "\n":
        cur.skip()
    parts = []
    while True:
        parts.append(cur.take_match(_ML_BASIC_RUN))
        char = cur.peek()
        if char == '"':
            quotes, closed = _scan_quote_run(cur, '"')
            parts.append(quotes)
            if closed:
                return "".join(parts)
            continue
        if char == "":
            diags.structural(start, "unterminated multiline string")
            raise ScanAbort(fatal=True)
        if char == "\\":
            parts.append(_scan_escape(cur, diags, multiline=True))
            continue
        diags.lexical(cur.pos, f"illegal control character {char!r} in multiline string")
        cur.skip()


def _scan_multiline_literal(cur: Cursor, diags: Diagnostics) -> str:
    start = cur.pos
    cur.skip(3)
    if cur.peek() == "\n":
        cur.skip()
    parts = []
    while True:
        parts.append(cur.take_match(_ML_LITERAL_RUN))
        char = cur.peek()
        if char == "'":
            quotes, closed = _scan_quote_run(cur, "'")
            parts.append(quotes)
            if closed:
                return "".join(parts)
            continue
        if char == "":
            diags.structural(start, "unterminated multiline literal string")
            raise ScanAbort(fatal=True)
        diags.lexical(cur.pos, f"illegal control character {char!r} in multiline literal string")
        cur.skip()


def _scan_quote_run(cur: Cursor, delim: str) -> tuple[str, bool]:
    """
    Consume a run of delimiter characters inside a multiline string.

    Returns the quotes that belong to the content and whether the run closed
    the string. A run of three or more closes it, and up to two extra quotes
    stay in the content; anything past the fifth is left for the caller.
    """
    window = cur.peek(5)
    run = len(window) - len(window.lstrip(delim))
    cur.skip(run)
    if run < 3:
        return delim * run, False
    return delim * (run - 3), True


def _scan_escape(cur: Cursor, diags: Diagnostics, *, multiline: bool) -> str:
    pos = cur.pos
    code = cur.peek(2)[1:]
    if code in BASIC_ESCAPES:
        cur.skip(2)
        return BASIC_ESCAPES[code]
    if code == "u" or code == "U":
        cur.skip(2)
        return _scan_unicode_escape(cur, diags, pos, 4 if code == "u" else 8)
    if multiline and code in ("\n", " ", "\t"):
        cur.skip(1)
        cur.skip_while(WS)
        if cur.peek() != "\n" and not cur.at_end():
            diags.lexical(pos, "line-ending backslash must be followed only by whitespace")
            return ""
        cur.skip_while(WS_AND_NEWLINE)
        return ""
    if code == "" or code == "\n":
        # Leave the newline (or end of input) for the caller to report.
        cur.skip(1)
        diags.lexical(pos, "incomplete escape sequence")
        return ""
    cur.skip(2)
    diags.lexical(pos, f"invalid escape sequence '\\{code}'")
    return ""


def _scan_unicode_escape(cur: Cursor, diags: Diagnostics, pos: int, width: int) -> str:
    digits = cur.peek(width)
    if len(digits) != width or any(c not in string.hexdigits for c in digits):
        diags.lexical(pos, f"invalid unicode escape: expected {width} hex digits")
        return ""
    cur.skip(width)
    codepoint = int(digits, 16)
    if not is_unicode_scalar_value(codepoint):
        diags.lexical(pos, f"escaped character U+{codepoint:X} is not a unicode scalar value")
        return ""
    return chr(codepoint)


def is_unicode_scalar_value(codepoint: int) -> bool:
    return (0 <= codepoint <= 0xD7FF) or (0xE000 <= codepoint <= 0x10FFFF)
