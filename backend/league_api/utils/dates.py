"""
Date helpers for fixture scheduling.

All datetimes are naive and expressed as wall-clock time in LEAGUE_TIMEZONE.
Weekdays use Python's convention: 0=Monday .. 6=Sunday.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional, TypeVar
from zoneinfo import ZoneInfo

from league_api.config import LEAGUE_TIMEZONE
from league_api.errors import ValidationError

MONDAY = 0
SATURDAY = 5
SUNDAY = 6

D = TypeVar("D", date, datetime)


def week_anchor(value: D, weekday: int) -> D:
    """Return the given weekday within the ISO week of ``value`` (time of day kept)."""
    if not 0 <= weekday <= 6:
        raise ValueError(f"weekday must be 0-6, got {weekday}")
    return value - timedelta(days=value.weekday()) + timedelta(days=weekday)


def add_weeks(value: D, weeks: int) -> D:
    return value + timedelta(weeks=weeks)


def add_hours(value: datetime, hours: int) -> datetime:
    return value + timedelta(hours=hours)


def start_of_day(value: date) -> datetime:
    return datetime(value.year, value.month, value.day)


def reference_now(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in the league's reference time zone (naive)."""
    return datetime.now(ZoneInfo(tz_name or LEAGUE_TIMEZONE)).replace(tzinfo=None)


def parse_start_date(raw: Any) -> datetime:
    """
    Coerce a request value to a naive datetime.

    Accepts date, datetime, or ISO-8601 strings ("2099-01-05", "2099-01-05T10:00:00",
    trailing "Z" allowed). Aware datetimes are converted to the reference zone.

    Raises:
        ValidationError(code="invalid-date") if missing or unparsable
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Invalid start date", code="invalid-date")

    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        return start_of_day(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid start date: '{raw}'", code="invalid-date")
    else:
        raise ValidationError("Invalid start date", code="invalid-date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(LEAGUE_TIMEZONE)).replace(tzinfo=None)
    return parsed
