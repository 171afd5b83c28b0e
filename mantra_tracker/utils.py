# mantra_tracker/utils.py
from datetime import datetime, timezone
from typing import Any, Optional


def safe_int_or_none(v: Any) -> Optional[int]:
    """int(v), or None when v is missing, a bool, or not integral."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def parse_iso_datetime(value: Any, to_utc: bool = True) -> Optional[datetime]:
    """
    Parse an ISO-8601 string ("2024-05-01", "2024-05-01T08:30:00Z", ...).

    With to_utc, aware values are converted to UTC and returned naive, which
    is how timestamps are stored. Returns None for anything unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        return None

    if to_utc and dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt
