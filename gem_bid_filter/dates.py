import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from .config import TIMEZONE

logger = logging.getLogger(__name__)

# GeM format: "DD-MM-YYYY H:MM AM/PM" or "DD-MM-YYYY"
DATE_TIME_RE = re.compile(r"(\d{2})-(\d{2})-(\d{4})\s+(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)
DATE_ONLY_RE = re.compile(r"(\d{2})-(\d{2})-(\d{4})")

# Value part of a date field, used to pull dates straight out of card text
DATE_VALUE_SOURCE = r"\d{2}-\d{2}-\d{4}(?:\s+\d{1,2}:\d{2}\s*(?:AM|PM))?"

DateLike = Union[date, datetime]


def local_zone() -> ZoneInfo:
    return ZoneInfo(TIMEZONE)


def current_date() -> date:
    return datetime.now(local_zone()).date()


def parse_gem_date(date_string: Optional[str]) -> Optional[datetime]:
    """
    Parse a GeM date string into an aware datetime.

    Args:
        date_string: Text containing "DD-MM-YYYY" optionally followed by "H:MM AM|PM"

    Returns:
        Aware datetime in the local zone, or None when the text holds no valid date
    """
    if not date_string:
        return None

    cleaned = date_string.strip()
    if not cleaned:
        return None

    match = DATE_TIME_RE.search(cleaned)
    if match:
        day, month, year, hours, minutes = (int(g) for g in match.groups()[:5])
        ampm = match.group(6).upper()
        if not 1 <= hours <= 12 or minutes > 59:
            logger.debug(f"Invalid time in date text: {cleaned!r}")
            return None

        hour = hours
        if ampm == "PM" and hour != 12:
            hour += 12
        elif ampm == "AM" and hour == 12:
            hour = 0
    else:
        # Try without time
        match = DATE_ONLY_RE.search(cleaned)
        if not match:
            return None
        day, month, year = (int(g) for g in match.groups())
        hour = minutes = 0

    try:
        return datetime(year, month, day, hour, minutes, tzinfo=local_zone())
    except ValueError:
        logger.debug(f"Invalid calendar date in date text: {cleaned!r}")
        return None


def strip_time(value: DateLike) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(local_zone())
        return value.date()
    return value


def is_today(value: Optional[DateLike], today: Optional[date] = None) -> bool:
    if value is None:
        return False
    today = today or current_date()
    return strip_time(value) == today


def is_yesterday(value: Optional[DateLike], today: Optional[date] = None) -> bool:
    if value is None:
        return False
    today = today or current_date()
    return strip_time(value) == today - timedelta(days=1)


def is_within_days(value: Optional[DateLike], days: int, today: Optional[date] = None) -> bool:
    """True when value falls in the closed window [today - (days - 1), today]."""
    if value is None or not days:
        return False
    today = today or current_date()
    start = today - timedelta(days=days - 1)
    return start <= strip_time(value) <= today


def format_relative(value: Optional[DateLike], today: Optional[date] = None) -> str:
    if value is None:
        return ""
    today = today or current_date()
    if is_today(value, today):
        return "Today"
    if is_yesterday(value, today):
        return "Yesterday"

    diff_days = (today - strip_time(value)).days
    if diff_days > 0:
        return f"{diff_days} days ago"
    return "Upcoming"


# Cached date attribute helpers

def to_timestamp(value: datetime) -> str:
    return str(int(value.timestamp()))


def from_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw), tz=local_zone())
    except (ValueError, OverflowError, OSError):
        logger.debug(f"Ignoring unreadable cached timestamp {raw!r}")
        return None
