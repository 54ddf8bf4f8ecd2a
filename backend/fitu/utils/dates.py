from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

import pytz

from fitu.config import APP_TIMEZONE
from fitu.exceptions import ValidationError


def server_timezone(tz_name: Optional[str] = None):
    """pytz timezone for tz_name or APP_TIMEZONE, UTC when unknown."""
    tz_name = tz_name or APP_TIMEZONE or "UTC"
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    Returns the current datetime in the server timezone (naive).
    Defaults to UTC if the timezone is invalid or not set.
    """
    now = datetime.now(pytz.UTC).astimezone(server_timezone(tz_name))
    # Stored timestamps are naive wall-clock values
    return now.replace(tzinfo=None)


def local_today(tz_name: Optional[str] = None) -> date:
    return local_now(tz_name).date()


def to_local_naive(value: Optional[datetime], tz_name: Optional[str] = None) -> Optional[datetime]:
    """
    Convert an offset-aware timestamp to naive server wall-clock time so it
    lands in the right local day. Naive values are already local.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(server_timezone(tz_name)).replace(tzinfo=None)


def parse_date(value: Optional[str], field: str = "date") -> Optional[date]:
    """Parse a YYYY-MM-DD query value. None/empty passes through as None."""
    if value is None or value == "":
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(field, f"Invalid {field} format. Use YYYY-MM-DD")


def day_window(day: date) -> Tuple[datetime, datetime]:
    """Inclusive [00:00:00.000000, 23:59:59.999999] bounds of a calendar day."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def start_of_week(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())
