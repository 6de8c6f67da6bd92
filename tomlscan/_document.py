"""
Document assembler: the statement loop over a whole TOML document.

Each statement is a ``[table]`` header, an ``[[array-of-tables]]`` header or
a ``key = value`` line. A statement that fails is skipped up to the end of
its line so that later problems are still reported; a failure that swallowed
the rest of the input ends assembly.
"""
from __future__ import annotations

import logging
from typing import Any

from ._config import DecodeOptions
from ._cursor import Cursor
from ._errors import Diagnostics, ScanAbort
from ._scanners import BARE_KEY_CHARS, WS, scan_key, skip_ws_and_comments
from ._tables import Key, KeyConflict, TableTree
from ._values import parse_value

logger = logging.getLogger(__name__)

_KEY_START_CHARS = BARE_KEY_CHARS | frozenset("\"'")


class DocumentAssembler:
    """Builds the root table of one document from a Cursor."""

    def __init__(self, cur: Cursor, diags: Diagnostics, opts: DecodeOptions) -> None:
        self.cur = cur
        self.diags = diags
        self.opts = opts
        self.tree = TableTree()
        # Lines after a rejected header go to a detached tree.
        self._target = self.tree
        self._section: Key = ()

    def assemble(self) -> dict[str, Any]:
        cur = self.cur
        while True:
            skip_ws_and_comments(cur, self.diags)
            if cur.at_end():
                break
            if cur.peek() == "\n":
                cur.skip()
                continue
            try:
                self._statement()
                self._end_of_line()
            except ScanAbort as exc:
                if exc.fatal or cur.at_end():
                    logger.debug("assembly stopped at offset %d", cur.pos)
                    break
                logger.debug("resuming after the line at offset %d", cur.pos)
                cur.skip_until("\n")
            except RecursionError:
                # Only reachable with a large or disabled max_depth.
                self.diags.structural(cur.pos, "nesting too deep to decode")
                logger.debug("assembly stopped at offset %d: recursion limit", cur.pos)
                break
        return self.tree.root

    def _statement(self) -> None:
        cur = self.cur
        char = cur.peek()
        if cur.peek(2) == "[[":
            self._array_header()
        elif char == "[":
            self._table_header()
        elif char in _KEY_START_CHARS:
            self._key_value()
        else:
            self.diags.structural(cur.pos, f"expected a key or table header, found {char!r}")
            raise ScanAbort()

    def _end_of_line(self) -> None:
        cur = self.cur
        skip_ws_and_comments(cur, self.diags)
        char = cur.peek()
        if char == "\n":
            cur.skip()
        elif char:
            self.diags.structural(cur.pos, f"expected end of line, found {char!r}")
            raise ScanAbort()

    def _header_key(self, opening: str) -> Key:
        cur = self.cur
        cur.skip(len(opening))
        cur.skip_while(WS)
        key = scan_key(cur, self.diags)
        closing = "]" * len(opening)
        if cur.peek(len(closing)) != closing:
            self.diags.structural(cur.pos, f"expected '{closing}' to close the table header")
            raise ScanAbort()
        cur.skip(len(closing))
        return key

    def _table_header(self) -> None:
        start = self.cur.pos
        key = self._header_key("[")
        self._open_section(start, key, self.tree.declare_table)

    def _array_header(self) -> None:
        start = self.cur.pos
        key = self._header_key("[[")
        self._open_section(start, key, self.tree.append_table)

    def _open_section(self, start: int, key: Key, opener) -> None:
        try:
            opener(key)
        except KeyConflict as exc:
            self.diags.semantic(start, str(exc))
            self._target = TableTree()
            self._section = ()
            return
        self._target = self.tree
        self._section = key

    def _key_value(self) -> None:
        cur = self.cur
        key_pos = cur.pos
        key = scan_key(cur, self.diags)
        if cur.peek() != "=":
            found = cur.peek() or "end of input"
            self.diags.structural(cur.pos, f"expected '=' after key, found {found!r}")
            raise ScanAbort()
        cur.skip()
        cur.skip_while(WS)
        value = parse_value(cur, self.diags, self.opts)
        try:
            self._target.bind(self._section, key, value)
        except KeyConflict as exc:
            self.diags.semantic(key_pos, str(exc))
