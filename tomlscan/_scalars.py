"""
Scanner for bare scalar values: booleans, numbers and dates/times.

The scanner first takes the whole token (everything up to a delimiter such as
whitespace, a comma or a closing bracket) and then classifies it, so that a
malformed number or datetime is reported as one error for the whole token.
"""
from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional

from ._config import DecodeOptions
from ._cursor import Cursor
from ._errors import Diagnostics, ScanAbort

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

SCALAR_START_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789+-_."
)

_TOKEN = re.compile(r"[0-9A-Za-z_+\-.:]+")
_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")
_TEMPORAL_SHAPE = re.compile(r"\d{4}-|\d{2}:")

_DATETIME = re.compile(
    r"""
    (?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})
    (?:
        [Tt ]
        (?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})
        (?:\.(?P<fraction>\d+))?
        (?P<offset>[Zz]|(?P<offset_sign>[+-])(?P<offset_hour>\d{2}):(?P<offset_minute>\d{2}))?
    )?
    """,
    re.VERBOSE,
)
_LOCAL_TIME = re.compile(
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d+))?"
)

_DECIMAL = re.compile(
    r"(?P<int>[0-9_]+)(?:\.(?P<frac>[0-9_]+))?(?:[eE][+-]?(?P<exp>[0-9_]+))?"
)
_PREFIXED_DIGITS = {
    "0x": (16, re.compile(r"[0-9A-Fa-f_]+")),
    "0o": (8, re.compile(r"[0-7_]+")),
    "0b": (2, re.compile(r"[01_]+")),
}
_SPECIAL_FLOATS = frozenset({"inf", "nan"})


def scan_scalar(cur: Cursor, diags: Diagnostics, opts: DecodeOptions) -> Any:
    """Scan a boolean, number or date/time starting at the cursor."""
    start = cur.pos
    token = cur.take_match(_TOKEN)
    if _DATE_ONLY.fullmatch(token) and _time_follows_space(cur):
        cur.skip()
        token += " " + cur.take_match(_TOKEN)

    if token == "true":
        return True
    if token == "false":
        return False
    if _TEMPORAL_SHAPE.match(token):
        value = _to_temporal(token, start, diags)
        if opts.datetime_formatter is not None:
            return opts.datetime_formatter(value)
        return value

    body = token[1:] if token[:1] in ("+", "-") else token
    if body in _SPECIAL_FLOATS:
        return opts.parse_float(token)
    if body[:1].isdigit() or body[:1] in ("_", "."):
        return _to_number(token, start, diags, opts)

    diags.structural(start, f"invalid value {token!r}")
    raise ScanAbort()


def _time_follows_space(cur: Cursor) -> bool:
    # "1979-05-27 07:32:00" uses a space as the date/time separator.
    ahead = cur.peek(4)
    return len(ahead) == 4 and ahead[0] == " " and ahead[1:3].isdigit() and ahead[3] == ":"


def _check_underscores(digits: str, start: int, diags: Diagnostics) -> bool:
    if digits.startswith("_"):
        diags.lexical(start, "leading underscore in number")
    elif digits.endswith("_"):
        diags.lexical(start, "trailing underscore in number")
    elif "__" in digits:
        diags.lexical(start, "doubled underscore in number")
    else:
        return True
    return False


def _to_number(token: str, start: int, diags: Diagnostics, opts: DecodeOptions) -> Any:
    sign = token[0] if token[0] in "+-" else ""
    body = token[len(sign) :]

    prefix = body[:2]
    if prefix in _PREFIXED_DIGITS:
        base, digits_re = _PREFIXED_DIGITS[prefix]
        digits = body[2:]
        if sign:
            diags.lexical(start, f"sign not allowed on {prefix} integer {token!r}")
            raise ScanAbort()
        if not digits_re.fullmatch(digits):
            diags.lexical(start, f"malformed integer {token!r}")
            raise ScanAbort()
        if not _check_underscores(digits, start, diags):
            raise ScanAbort()
        return _checked_int(int(digits.replace("_", ""), base), token, start, diags)

    match = _DECIMAL.fullmatch(body)
    if match is None:
        diags.lexical(start, f"malformed number {token!r}")
        raise ScanAbort()
    int_part, frac, exp = match.group("int", "frac", "exp")
    for group in (int_part, frac, exp):
        if group is not None and not _check_underscores(group, start, diags):
            raise ScanAbort()
    if len(int_part) > 1 and int_part[0] == "0":
        diags.lexical(start, f"leading zero not allowed in number {token!r}")
        raise ScanAbort()

    clean = token.replace("_", "")
    if frac is not None or exp is not None:
        return opts.parse_float(clean)
    return _checked_int(int(clean), token, start, diags)


def _checked_int(value: int, token: str, start: int, diags: Diagnostics) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        diags.lexical(start, f"integer {token!r} does not fit in 64 bits")
        raise ScanAbort()
    return value


def _to_temporal(token: str, start: int, diags: Diagnostics) -> date | time | datetime:
    match = _DATETIME.match(token) or _LOCAL_TIME.match(token)
    if match is None:
        diags.lexical(start, f"malformed datetime {token!r}")
        raise ScanAbort()
    if match.end() != len(token):
        diags.lexical(start, f"unexpected trailing characters {token[match.end():]!r} after datetime")
        raise ScanAbort()

    groups = match.groupdict()
    problem = _range_problem(groups)
    if problem:
        diags.lexical(start, f"{problem} in {token!r}")
        raise ScanAbort()

    if "year" not in groups:
        return time(*_clock(groups))
    day = date(int(groups["year"]), int(groups["month"]), int(groups["day"]))
    if groups["hour"] is None:
        return day
    return datetime(day.year, day.month, day.day, *_clock(groups), tzinfo=_tz(groups))


def _clock(groups: dict) -> tuple[int, int, int, int]:
    fraction = groups["fraction"]
    micros = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    return int(groups["hour"]), int(groups["minute"]), int(groups["second"]), micros


def _tz(groups: dict) -> Optional[tzinfo]:
    offset = groups["offset"]
    if offset is None:
        return None
    if offset in ("Z", "z"):
        return timezone.utc
    direction = 1 if groups["offset_sign"] == "+" else -1
    return timezone(
        timedelta(
            hours=direction * int(groups["offset_hour"]),
            minutes=direction * int(groups["offset_minute"]),
        )
    )


def _range_problem(groups: dict) -> Optional[str]:
    """Return a description of the first out-of-range component, if any."""
    if groups.get("year") is not None:
        year, month, day = int(groups["year"]), int(groups["month"]), int(groups["day"])
        if not 1 <= month <= 12:
            return f"month {month:02d} out of range"
        # datetime.date cannot represent year 0.
        if year < 1:
            return f"year {year:04d} out of range"
        if not 1 <= day <= calendar.monthrange(year, month)[1]:
            return f"day {day:02d} out of range for month {month:02d}"
    if groups.get("hour") is not None:
        if int(groups["hour"]) > 23:
            return f"hour {groups['hour']} out of range"
        if int(groups["minute"]) > 59:
            return f"minute {groups['minute']} out of range"
        # Leap second 60 is valid RFC 3339 but datetime.time stops at 59.
        if int(groups["second"]) > 59:
            return f"second {groups['second']} out of range"
    if groups.get("offset_hour") is not None:
        if int(groups["offset_hour"]) > 23 or int(groups["offset_minute"]) > 59:
            return f"offset {groups['offset']} out of range"
    return None
