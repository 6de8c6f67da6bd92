"""
TOML decoder that reports every problem it finds.

This module decodes TOML 1.0 text into plain Python values. Instead of
stopping at the first error it collects positioned diagnostics (lexical,
structural and semantic) and hands them back together with the document it
managed to build, so that callers can show all problems at once or fall back
to a default value.
"""
from __future__ import annotations

import logging
import re
from typing import Any, NamedTuple, Optional

from ._config import DecodeOptions, DEFAULT_OPTIONS
from ._cursor import Cursor
from ._document import DocumentAssembler
from ._errors import (
    Diagnostic,
    Diagnostics,
    LexicalError,
    SemanticError,
    StructuralError,
    TOMLDecodeError,
    format_diagnostics,
    line_and_column,
)
from ._tagged import to_tagged

logger = logging.getLogger(__name__)


def _get_version() -> str:
    try:
        from importlib.metadata import version
        return version("tomlscan")
    except Exception:
        pass
    try:
        from pathlib import Path
        path = Path(__file__).resolve().parents[1] / "pyproject.toml"
        if path.exists():
            m = re.search(r'version\s*=\s*"([^"]+)"', path.read_text(encoding="utf-8"))
            return m.group(1) if m else "0.0.0"
    except Exception:
        pass
    return "0.0.0"

__version__ = _get_version()

__all__ = [
    "decode",
    "decode_or_default",
    "loads",
    "DecodeResult",
    "DecodeOptions",
    "Diagnostic",
    "LexicalError",
    "StructuralError",
    "SemanticError",
    "TOMLDecodeError",
    "format_diagnostics",
    "line_and_column",
    "to_tagged",
    "__version__",
]


class DecodeResult(NamedTuple):
    """The document built so far and the diagnostics found on the way."""

    document: dict
    diagnostics: list

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def decode(text: str, options: Optional[DecodeOptions] = None) -> DecodeResult:
    """
    Decode a TOML document, collecting diagnostics instead of raising.

    Args:
        text: The TOML source. ``\\r\\n`` line endings are read as ``\\n``
            and diagnostic positions are offsets into that normalized text.
        options: Decode options; defaults to DecodeOptions().

    Returns:
        DecodeResult: ``(document, diagnostics)``. An empty diagnostics list
        means the document is complete. Otherwise the document holds
        whatever could be assembled.

    Example:
        >>> import tomlscan
        >>> doc, errors = tomlscan.decode('a = 1\\na = 2\\n')
        >>> doc, [e.position for e in errors]
        ({'a': 1}, [6])
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    text = text.replace("\r\n", "\n")
    diags = Diagnostics()
    document = DocumentAssembler(Cursor(text), diags, options or DEFAULT_OPTIONS).assemble()
    if diags:
        logger.debug("decoded with %d diagnostic(s)", len(diags))
    return DecodeResult(document, diags.as_list())


def decode_or_default(text: str, default: Any, options: Optional[DecodeOptions] = None) -> Any:
    """Return the decoded document, or default as-is if there was any diagnostic."""
    document, diagnostics = decode(text, options)
    if diagnostics:
        return default
    return document


def loads(s: str, options: Optional[DecodeOptions] = None) -> dict:
    """
    Parse a TOML string and return a dictionary.

    Args:
        s: The TOML string to parse
        options: Decode options; defaults to DecodeOptions()

    Returns:
        dict: Parsed TOML data as a Python dictionary

    Raises:
        TOMLDecodeError: If the document has any diagnostic. It is a
            ValueError and carries every diagnostic in ``.diagnostics``.

    Example:
        >>> import tomlscan
        >>> toml_str = 'key = "value"'
        >>> data = tomlscan.loads(toml_str)
        >>> print(data)
        {'key': 'value'}
    """
    document, diagnostics = decode(s, options)
    if diagnostics:
        raise TOMLDecodeError(s.replace("\r\n", "\n"), diagnostics)
    return document
