"""
Diagnostics collected while decoding, and the exception raised by loads().

Decoding never stops at the first problem: every scanner appends a positioned
Diagnostic to a shared Diagnostics list and carries on where it can.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator


@dataclass(frozen=True)
class Diagnostic:
    """A problem found at a zero-based offset into the (newline-normalized) source."""

    position: int
    message: str

    kind: ClassVar[str] = "error"

    def __str__(self) -> str:
        return f"{self.kind} error at offset {self.position}: {self.message}"


class LexicalError(Diagnostic):
    """Bad character, escape, number or datetime."""

    kind = "lexical"


class StructuralError(Diagnostic):
    """Unterminated construct, unexpected token, or nesting too deep."""

    kind = "structural"


class SemanticError(Diagnostic):
    """Duplicate key, redefined table, or key path crossing a non-table."""

    kind = "semantic"


def line_and_column(text: str, position: int) -> tuple[int, int]:
    """Convert an offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, position) + 1
    if line == 1:
        return line, position + 1
    return line, position - text.rindex("\n", 0, position)


def format_diagnostics(text: str, diagnostics: Iterable[Diagnostic]) -> list[str]:
    """Render each diagnostic as "line L, column C: <kind> error: <message>" against text."""
    out = []
    for d in diagnostics:
        line, column = line_and_column(text, d.position)
        out.append(f"line {line}, column {column}: {d.kind} error: {d.message}")
    return out


class Diagnostics:
    """Ordered, append-only list of diagnostics shared by one decode call."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"

    def add(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def lexical(self, position: int, message: str) -> None:
        self.add(LexicalError(position, message))

    def structural(self, position: int, message: str) -> None:
        self.add(StructuralError(position, message))

    def semantic(self, position: int, message: str) -> None:
        self.add(SemanticError(position, message))

    def as_list(self) -> list[Diagnostic]:
        return list(self._items)


class ScanAbort(Exception):
    """
    Unwinds a scan to the statement loop after a diagnostic was recorded.

    fatal=True means no safe point to resume from exists (the rest of the
    input was consumed by an unterminated construct).
    """

    def __init__(self, fatal: bool = False) -> None:
        super().__init__("fatal" if fatal else "recoverable")
        self.fatal = fatal


class TOMLDecodeError(ValueError):
    """Raised by loads() when the document has at least one diagnostic."""

    def __init__(self, text: str, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        first = diagnostics[0]
        line, column = line_and_column(text, first.position)
        msg = f"TOML parse error: {first.message} (at line {line}, column {column})"
        if len(diagnostics) > 1:
            msg += f" [and {len(diagnostics) - 1} more error(s)]"
        super().__init__(msg)
        self.lineno = line
        self.colno = column
