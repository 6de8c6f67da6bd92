"""
Decode options.

A frozen DecodeOptions is passed explicitly through one decode call; there is
no global or environment-driven configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

ParseFloat = Callable[[str], Any]
DatetimeFormatter = Callable[[Any], Any]

DEFAULT_MAX_DEPTH = 200


@dataclass(frozen=True)
class DecodeOptions:
    """
    Immutable decode configuration.

    Attributes:
        max_depth: Deepest allowed nesting of arrays and inline tables.
            None disables the bound; input deeper than Python's recursion
            limit then ends the decode with a StructuralError.
        parse_float: Builds a float value from its text with underscores
            removed, e.g. decimal.Decimal.
        datetime_formatter: Optional callable applied to every decoded
            date, time and datetime value.
    """

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    parse_float: ParseFloat = float
    datetime_formatter: Optional[DatetimeFormatter] = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer or None, got {self.max_depth!r}")

    @classmethod
    def from_dict(cls, config: dict) -> "DecodeOptions":
        """
        Build options from a mapping, ignoring keys that are not option names.

        Example:
            >>> DecodeOptions.from_dict({"max_depth": 8, "color": "blue"}).max_depth
            8
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config.items() if k in names})


DEFAULT_OPTIONS = DecodeOptions()
