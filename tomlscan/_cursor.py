"""
Positional view over TOML source text.

Every scanner reads through a Cursor. The position only ever moves forward.
"""
from __future__ import annotations

import re
from typing import Iterable


class Cursor:
    """Forward-only reader over already-normalized source text."""

    __slots__ = ("text", "pos", "length")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.length = len(text)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, length={self.length})"

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self, n: int = 1) -> str:
        """Return the next n characters without consuming them."""
        return self.text[self.pos : self.pos + n]

    def take(self, n: int = 1) -> str:
        """Consume and return the next n characters."""
        chunk = self.peek(n)
        self.skip(n)
        return chunk

    def skip(self, n: int = 1) -> None:
        self.pos = min(self.pos + n, self.length)

    def skip_while(self, chars: Iterable[str]) -> int:
        """
        Advance past a maximal run of characters from chars.

        Returns:
            Number of characters skipped.
        """
        text, pos, length = self.text, self.pos, self.length
        while pos < length and text[pos] in chars:
            pos += 1
        skipped = pos - self.pos
        self.pos = pos
        return skipped

    def skip_until(self, sub: str) -> int:
        """
        Advance to the first occurrence of sub, or to the end of input.

        The occurrence itself is not consumed.

        Returns:
            Number of characters skipped.
        """
        index = self.text.find(sub, self.pos)
        if index == -1:
            index = self.length
        skipped = index - self.pos
        self.pos = index
        return skipped

    def take_until(self, sub: str) -> str:
        start = self.pos
        self.skip_until(sub)
        return self.text[start : self.pos]

    def take_match(self, pattern: re.Pattern[str]) -> str:
        """Consume whatever pattern matches at the current position ("" if nothing)."""
        match = pattern.match(self.text, self.pos)
        if match is None:
            return ""
        self.pos = match.end()
        return match.group()
