"""
Business calendar helpers.

Day and week boundaries for dashboards and list filters are taken in the
company's own timezone (IANA name, Asia/Kolkata by default) and returned as
aware datetimes so they can be compared directly against stored UTC values.
Weeks start on Monday.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


def validate_timezone(tz: str) -> bool:
    """
    Validate that a timezone string is a valid IANA timezone.

    Example:
        >>> validate_timezone('Asia/Kolkata')
        True
        >>> validate_timezone('Invalid/Timezone')
        False
    """
    if not tz or not isinstance(tz, str):
        return False
    try:
        ZoneInfo(tz)
        return True
    except (ZoneInfoNotFoundError, KeyError, ValueError):
        return False


def get_safe_timezone(tz: str = None) -> ZoneInfo:
    """
    Get a ZoneInfo object, falling back to DEFAULT_BUSINESS_TIMEZONE if invalid.

    Raises:
        ValueError: If both tz and the configured default are invalid
    """
    default = settings.DEFAULT_BUSINESS_TIMEZONE
    if tz and validate_timezone(tz):
        return ZoneInfo(tz)

    if tz:
        logger.warning("Invalid timezone '%s', falling back to '%s'", tz, default)

    if validate_timezone(default):
        return ZoneInfo(default)

    raise ValueError(f"Both timezone '{tz}' and default '{default}' are invalid")


def company_timezone(company) -> ZoneInfo:
    return get_safe_timezone(getattr(company, 'timezone', None))


def combine_local(day: date, clock: time, tz: ZoneInfo) -> datetime:
    """Aware datetime for a wall-clock date/time in ``tz``."""
    return datetime.combine(day, clock, tzinfo=tz)


def parse_clock(value: str) -> time:
    """Parse an "HH:MM" string, raising ValueError on anything else."""
    hours, minutes = value.split(':')
    if len(hours) != 2 or len(minutes) != 2:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(hours), int(minutes))


@dataclass(frozen=True)
class CalendarWindow:
    """Half-open [start, end) interval in absolute time."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


class BusinessCalendar:
    """
    Day/week/month boundaries anchored in one timezone.

    Args:
        tz: ZoneInfo used for wall-clock boundaries
        now: Reference instant, defaults to timezone.now()
    """

    def __init__(self, tz: ZoneInfo, now: datetime = None):
        self.tz = tz
        self.now = now or timezone.now()
        self.local_now = self.now.astimezone(tz)

    @classmethod
    def for_company(cls, company, now: datetime = None) -> 'BusinessCalendar':
        return cls(company_timezone(company), now=now)

    @property
    def today(self) -> date:
        return self.local_now.date()

    def day(self, offset: int = 0) -> CalendarWindow:
        start_day = self.today + timedelta(days=offset)
        return self.days(start_day, start_day)

    def days(self, first: date, last: date) -> CalendarWindow:
        """Window covering local calendar days first..last inclusive."""
        return CalendarWindow(
            start=combine_local(first, time.min, self.tz),
            end=combine_local(last + timedelta(days=1), time.min, self.tz),
        )

    def week(self, offset: int = 0) -> CalendarWindow:
        monday = self.today - timedelta(days=self.today.weekday()) + timedelta(weeks=offset)
        return self.days(monday, monday + timedelta(days=6))

    def month(self) -> CalendarWindow:
        first = self.today.replace(day=1)
        next_first = (first + timedelta(days=32)).replace(day=1)
        return self.days(first, next_first - timedelta(days=1))
