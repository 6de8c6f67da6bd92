"""
Annotated ("tagged") view of a decoded value, as used by the toml-test suite.

Every leaf becomes ``{"type": tag, "value": text}``. decode() never calls
this; it is a presentation helper over values it already returned.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any


def to_tagged(obj: Any, wrap_containers: bool = True) -> Any:
    """
    Convert a decoded value to its tagged form.

    With wrap_containers=True, lists and dicts are wrapped too, as
    ``{"type": "array", "value": [...]}`` and ``{"type": "table", "value": {...}}``.
    With wrap_containers=False they stay bare lists and dicts, which is the
    layout toml-test expects from a decoder.
    """
    if isinstance(obj, dict):
        table = {k: to_tagged(v, wrap_containers) for k, v in obj.items()}
        return {"type": "table", "value": table} if wrap_containers else table
    if isinstance(obj, list):
        array = [to_tagged(x, wrap_containers) for x in obj]
        return {"type": "array", "value": array} if wrap_containers else array
    if isinstance(obj, bool):
        return {"type": "bool", "value": "true" if obj else "false"}
    if isinstance(obj, int):
        return {"type": "integer", "value": str(obj)}
    if isinstance(obj, (float, Decimal)):
        return {"type": "float", "value": _float_str(obj)}
    # datetime is a subclass of date: test it first.
    if isinstance(obj, datetime):
        if obj.tzinfo is None:
            return {"type": "datetime-local", "value": obj.isoformat()}
        return {"type": "datetime", "value": _datetime_rfc3339(obj)}
    if isinstance(obj, date):
        return {"type": "date-local", "value": obj.isoformat()}
    if isinstance(obj, time):
        return {"type": "time-local", "value": obj.isoformat()}
    return {"type": "string", "value": str(obj)}


def _float_str(x) -> str:
    if isinstance(x, Decimal):
        return str(x)
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return repr(x)


def _datetime_rfc3339(dt: datetime) -> str:
    s = dt.isoformat()
    if dt.tzinfo == timezone.utc:
        s = s[: -len("+00:00")] + "Z"
    return s
