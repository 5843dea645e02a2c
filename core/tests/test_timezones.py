"""
Tests for the business calendar helpers.

Boundaries are checked in Asia/Kolkata (UTC+05:30), where the local day
starts at 18:30 UTC of the previous calendar day.
"""

from datetime import date, datetime, time, timezone as dt_timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from core.timezones import (
    BusinessCalendar, CalendarWindow, combine_local, company_timezone,
    get_safe_timezone, parse_clock, validate_timezone
)

UTC = dt_timezone.utc
IST = ZoneInfo('Asia/Kolkata')


class TestTimezoneValidation:

    def test_valid_iana_names(self):
        assert validate_timezone('Asia/Kolkata') is True
        assert validate_timezone('UTC') is True

    @pytest.mark.parametrize('value', ['Invalid/Timezone', '', None, 42])
    def test_invalid_values(self, value):
        assert validate_timezone(value) is False

    def test_safe_timezone_falls_back_to_default(self, settings):
        settings.DEFAULT_BUSINESS_TIMEZONE = 'Asia/Kolkata'
        assert get_safe_timezone('Mars/Olympus') == IST
        assert get_safe_timezone(None) == IST

    def test_safe_timezone_raises_when_default_is_broken(self, settings):
        settings.DEFAULT_BUSINESS_TIMEZONE = 'Nowhere/Land'
        with pytest.raises(ValueError):
            get_safe_timezone('Also/Bad')

    def test_company_timezone_reads_attribute(self):
        company = SimpleNamespace(timezone='Europe/Berlin')
        assert company_timezone(company) == ZoneInfo('Europe/Berlin')

    def test_company_timezone_without_company(self, settings):
        settings.DEFAULT_BUSINESS_TIMEZONE = 'Asia/Kolkata'
        assert company_timezone(None) == IST


class TestClockParsing:

    def test_parse_clock(self):
        assert parse_clock('09:05') == time(9, 5)
        assert parse_clock('23:59') == time(23, 59)

    @pytest.mark.parametrize('value', ['9:05', '0905', '25:00', '10:5'])
    def test_parse_clock_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            parse_clock(value)

    def test_combine_local_is_aware(self):
        moment = combine_local(date(2025, 9, 20), time(10, 0), IST)
        assert moment.astimezone(UTC) == datetime(2025, 9, 20, 4, 30, tzinfo=UTC)


class TestBusinessCalendar:
    """Calendar anchored at 2026-03-09 20:00 UTC = Tuesday 2026-03-10 01:30 IST."""

    @pytest.fixture
    def calendar(self):
        return BusinessCalendar(IST, now=datetime(2026, 3, 9, 20, 0, tzinfo=UTC))

    def test_today_uses_local_date(self, calendar):
        assert calendar.today == date(2026, 3, 10)

    def test_day_window(self, calendar):
        window = calendar.day()
        assert window.start == datetime(2026, 3, 9, 18, 30, tzinfo=UTC)
        assert window.end == datetime(2026, 3, 10, 18, 30, tzinfo=UTC)

    def test_tomorrow_window(self, calendar):
        window = calendar.day(1)
        assert window.start == datetime(2026, 3, 10, 18, 30, tzinfo=UTC)

    def test_week_starts_monday(self, calendar):
        window = calendar.week()
        assert window.start == datetime(2026, 3, 8, 18, 30, tzinfo=UTC)
        assert window.end == datetime(2026, 3, 15, 18, 30, tzinfo=UTC)

    def test_last_week(self, calendar):
        window = calendar.week(-1)
        assert window.start == datetime(2026, 3, 1, 18, 30, tzinfo=UTC)
        assert window.end == datetime(2026, 3, 8, 18, 30, tzinfo=UTC)

    def test_month(self, calendar):
        window = calendar.month()
        assert window.start == datetime(2026, 2, 28, 18, 30, tzinfo=UTC)
        assert window.end == datetime(2026, 3, 31, 18, 30, tzinfo=UTC)

    def test_for_company(self):
        company = SimpleNamespace(timezone='Asia/Kolkata')
        calendar = BusinessCalendar.for_company(company, now=datetime(2026, 3, 9, 20, 0, tzinfo=UTC))
        assert calendar.tz == IST
        assert calendar.today == date(2026, 3, 10)


class TestCalendarWindow:

    def test_half_open(self):
        start = datetime(2026, 3, 9, 18, 30, tzinfo=UTC)
        end = datetime(2026, 3, 10, 18, 30, tzinfo=UTC)
        window = CalendarWindow(start, end)

        assert window.contains(start)
        assert not window.contains(end)
