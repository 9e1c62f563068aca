from __future__ import annotations

import datetime as _dt
from typing import Any, Optional


def utc_now() -> _dt.datetime:
    # The only sanctioned wall-clock read. Engine code takes `now` as an argument;
    # this is the default clock for collaborator-layer caches.
    return _dt.datetime.now(_dt.timezone.utc)


def safe_date_fromisoformat(date_str: Optional[str]) -> Optional[_dt.date]:
    if not date_str:
        return None
    try:
        return _dt.date.fromisoformat(str(date_str)[:10])
    except ValueError:
        return None


def parse_utc_timestamp(value: Any) -> Optional[_dt.datetime]:
    """Parse a feed timestamp into an aware UTC datetime.

    Accepts '2025-10-21T23:30:00Z', '2025-10-21T23:30:00+00:00', naive ISO strings
    (treated as UTC) and bare dates (midnight UTC). Returns None when unparseable.
    """
    if value is None:
        return None
    if isinstance(value, _dt.datetime):
        parsed = value
    elif isinstance(value, _dt.date):
        parsed = _dt.datetime(value.year, value.month, value.day)
    else:
        s = str(value).strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            parsed = _dt.datetime.fromisoformat(s)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=_dt.timezone.utc)
    return parsed.astimezone(_dt.timezone.utc)


def require_utc_timestamp(value: Any, *, field: str = "now") -> _dt.datetime:
    parsed = parse_utc_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid {field}: {value!r}")
    return parsed


def days_between(earlier: _dt.date, later: _dt.date) -> int:
    return (later - earlier).days
