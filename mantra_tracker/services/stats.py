# mantra_tracker/services/stats.py
"""
Practice statistics for a single user.

`build_summary` is a pure function: it never reads the clock or touches the
database. The caller fetches the user's mantras and sessions and passes in
the calendar day to evaluate against.

Records may be ORM objects (Mantra / MantraSession) or plain dicts, so the
same code serves the API and ad-hoc scripts.
"""
import logging
from collections import defaultdict
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Set

from ..utils import parse_iso_datetime

logger = logging.getLogger(__name__)

ACTIVITY_WINDOW_DAYS = 30


# ------------------------------
# Helpers
# ------------------------------
def _field(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _owned_by(record: Any, user_id: Any) -> bool:
    if user_id is None:
        return True
    owner = _field(record, "user_id", "userId")
    if owner is None:
        return True
    return str(owner) == str(user_id)


def day_key(value: Any) -> Optional[date]:
    """Calendar day of a session timestamp, ignoring time of day and zone."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    dt = parse_iso_datetime(value, to_utc=False)
    return dt.date() if dt else None


def _valid_count(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def current_streak(active_days: Set[date], today: date) -> int:
    """
    Consecutive active days ending today, or ending yesterday when nothing
    has been logged yet today (one grace day, never two).
    """
    if not active_days:
        return 0

    yesterday = today - timedelta(days=1)
    latest = max(active_days)
    if latest != today and latest != yesterday:
        return 0

    day = today if today in active_days else yesterday
    streak = 0
    while day in active_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def daily_activity(
    totals_by_day: Mapping, today: date, days: int = ACTIVITY_WINDOW_DAYS
) -> List[Dict[str, Any]]:
    series = []
    for offset in range(days - 1, -1, -1):
        d = today - timedelta(days=offset)
        series.append({"date": d.isoformat(), "count": totals_by_day.get(d, 0)})
    return series


# ------------------------------
# Summary
# ------------------------------
def build_summary(
    mantras: Iterable[Any],
    sessions: Iterable[Any],
    today: date,
    user_id: Any = None,
) -> Dict[str, Any]:
    """
    Returns:
    {
      "totalRepetitions": 130,
      "totalMantras": 2,
      "activeDays": 9,
      "currentStreak": 3,
      "dailyActivity": [{"date": "2024-05-01", "count": 13}, ...]   # 30 entries
    }

    Sessions with a missing/unparseable date or a bad count are skipped.
    When user_id is given, records owned by someone else are ignored.
    """
    if isinstance(today, datetime):
        today = today.date()

    total_mantras = sum(1 for m in mantras if _owned_by(m, user_id))

    total_repetitions = 0
    totals_by_day: Dict[date, int] = defaultdict(int)

    for s in sessions:
        if not _owned_by(s, user_id):
            logger.debug("stats: ignoring session %r owned by another user", _field(s, "id"))
            continue

        day = day_key(_field(s, "date"))
        count = _valid_count(_field(s, "count"))
        if day is None or count is None:
            logger.debug("stats: skipping malformed session %r", _field(s, "id"))
            continue

        total_repetitions += count
        totals_by_day[day] += count

    active_days = set(totals_by_day)

    return {
        "totalRepetitions": total_repetitions,
        "totalMantras": total_mantras,
        "activeDays": len(active_days),
        "currentStreak": current_streak(active_days, today),
        "dailyActivity": daily_activity(totals_by_day, today),
    }
