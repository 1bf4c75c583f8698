"""
Timezone Utilities - Centralized timezone handling
"""
from datetime import date, datetime
from typing import Optional, Union
import pytz

from habitquest.core.config import settings


def get_tz(name: Optional[str] = None):
    """
    Get a timezone object

    Args:
        name: IANA zone name, or None for the application default

    Returns:
        pytz timezone

    Raises:
        pytz.UnknownTimeZoneError: If the name is not a known zone
    """
    return pytz.timezone(name or settings.APP_TIMEZONE)


def get_utc_now() -> datetime:
    """
    Get current datetime in UTC

    Returns:
        Timezone-aware datetime object in UTC
    """
    return datetime.now(pytz.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware datetime

    Naive values are taken to be UTC. The trailing 'Z' PostgREST may send is
    accepted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed


def local_date(value: Union[str, datetime, None], tz=None) -> Optional[date]:
    """Calendar date of a stored timestamp in the given timezone"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(tz or get_tz()).date()


def get_local_today(tz=None, now: Optional[datetime] = None) -> date:
    """
    Get today's date in a timezone

    Args:
        tz: Timezone, default is the application timezone
        now: Optional reference instant (defaults to the current time)

    Returns:
        date object for today in that timezone
    """
    return (now or get_utc_now()).astimezone(tz or get_tz()).date()
