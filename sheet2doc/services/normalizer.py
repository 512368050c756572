from __future__ import annotations

import json
import math
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

"""Cell value -> document text normalization.

Rules:
- text is returned unchanged
- date/time values become ISO-8601 UTC timestamps with millisecond precision
  (``2024-01-15T00:00:00.000Z``); naive values are read in the configured zone
- everything else is encoded as compact JSON (numbers, booleans, lists, dicts)

``normalize_value`` never raises.
"""

__all__ = [
    "normalize_value",
    "to_iso_timestamp",
]

# Spreadsheet serial day zero; time-only cells are anchored to it
SPREADSHEET_EPOCH = date(1899, 12, 30)


def to_iso_timestamp(value: datetime | date | time, tz: tzinfo = timezone.utc) -> str:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    else:
        dt = datetime.combine(SPREADSHEET_EPOCH, value.replace(tzinfo=None))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    dt = dt.astimezone(timezone.utc)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}Z"
    )


def _plain(value: Any, tz: tzinfo) -> Any:
    """Convert a value into something ``json.dumps`` accepts, keeping its shape."""
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, np.datetime64):
        return None if np.isnat(value) else to_iso_timestamp(pd.Timestamp(value).to_pydatetime(), tz)
    if isinstance(value, np.generic):
        return _plain(value.item(), tz)
    if value is pd.NaT:
        return None
    if isinstance(value, (datetime, date, time)):
        return to_iso_timestamp(value, tz)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # spreadsheet numbers have no int/float split: 42.0 renders as 42
        return int(value) if value.is_integer() else value
    if isinstance(value, Decimal):
        return _plain(float(value), tz)
    if isinstance(value, dict):
        return {str(k): _plain(v, tz) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v, tz) for v in value]
    if isinstance(value, np.ndarray):
        return [_plain(v, tz) for v in value.tolist()]
    return str(value)


def normalize_value(value: Any, timezone_name: str = "UTC") -> str:
    """Render a raw cell value as document text."""
    if isinstance(value, str):
        return value
    try:
        tz: tzinfo = ZoneInfo(timezone_name)
    except (ValueError, KeyError, TypeError, OSError):
        tz = timezone.utc
    try:
        plain = _plain(value, tz)
        if isinstance(plain, str):
            return plain
        return json.dumps(plain, ensure_ascii=False, separators=(",", ":"))
    except Exception:
        return _fallback_text(value)


def _fallback_text(value: Any) -> str:
    for render in (str, repr):
        try:
            return render(value)
        except Exception:
            continue
    return f"<{type(value).__name__}>"
