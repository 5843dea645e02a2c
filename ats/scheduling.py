"""
ATS Interview Scheduling

This module provides interviewer availability functionality:
- TimeSlot: half-open time interval with overlap test
- lock_interviewer_calendar: serializes booking writes per interviewer
- booked_interviews / find_conflict: interval-overlap checks against an
  interviewer's booked interviews, optionally locking the rows
- AvailabilityService: free start times on a working day

Wall-clock values are interpreted in the interviewer company's timezone.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from core.timezones import combine_local, company_timezone, parse_clock

from .models import Interview

logger = logging.getLogger(__name__)

# Longest allowed interview; bounds how far back an overlapping start can lie
MAX_DURATION_MINUTES = 480


@dataclass
class TimeSlot:
    """Represents a time slot for scheduling."""
    start: datetime
    end: datetime

    @classmethod
    def starting(cls, start: datetime, duration_minutes: int) -> 'TimeSlot':
        return cls(start=start, end=start + timedelta(minutes=duration_minutes))

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: 'TimeSlot') -> bool:
        """Check if this slot overlaps with another."""
        return self.start < other.end and other.start < self.end


def lock_interviewer_calendar(interviewer_id) -> None:
    """
    Lock the interviewer's user row until the surrounding transaction ends.

    Every booking write for one interviewer takes this lock first, so two
    bookings for the same interviewer run one after the other even when
    there is no existing interview row to lock.
    """
    get_user_model().objects.select_for_update().only('pk').get(pk=interviewer_id)


def booked_interviews(interviewer, window: TimeSlot, exclude_pk=None, lock: bool = False):
    """
    Interviews holding the interviewer's time that could overlap ``window``.

    Candidates are narrowed in the database by start time and checked exactly
    by the caller. With ``lock`` the existing rows are selected FOR UPDATE;
    serializing bookings also needs lock_interviewer_calendar.
    """
    queryset = Interview.objects.filter(
        interviewer=interviewer,
        status__in=Interview.BOOKED_STATUSES,
        scheduled_at__gt=window.start - timedelta(minutes=MAX_DURATION_MINUTES),
        scheduled_at__lt=window.end,
    )
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    if lock:
        queryset = queryset.select_for_update()
    return queryset.order_by('scheduled_at')


def find_conflict(interviewer, slot: TimeSlot, exclude_pk=None, lock: bool = False) -> Optional[Interview]:
    """Return the first booked interview overlapping ``slot``, if any."""
    for interview in booked_interviews(interviewer, slot, exclude_pk=exclude_pk, lock=lock):
        if slot.overlaps(TimeSlot.starting(interview.scheduled_at, interview.duration)):
            return interview
    return None


class AvailabilityService:
    """Interviewer availability on a single working day."""

    @staticmethod
    def get_available_slots(interviewer, day: date, duration_minutes: int = 60) -> Dict[str, Any]:
        """
        List free start times for ``interviewer`` on ``day``.

        Start times step through the working day (INTERVIEW_WORKDAY_START to
        INTERVIEW_WORKDAY_END every INTERVIEW_SLOT_STEP_MINUTES). A start time
        is offered when the whole [start, start + duration) interval fits in
        the working day, does not overlap a booked interview and has not
        already passed.

        Args:
            interviewer: Interviewer user
            day: Calendar day in the company's timezone
            duration_minutes: Requested interview length

        Returns:
            dict with date, duration, interviewer_id, available_slots and
            existing_interviews (booked interviews that day)
        """
        tz = company_timezone(interviewer.company)
        work_start = combine_local(day, parse_clock(settings.INTERVIEW_WORKDAY_START), tz)
        work_end = combine_local(day, parse_clock(settings.INTERVIEW_WORKDAY_END), tz)
        step = timedelta(minutes=settings.INTERVIEW_SLOT_STEP_MINUTES)
        now = timezone.now()

        existing = list(booked_interviews(interviewer, TimeSlot(work_start, work_end)))
        busy = [TimeSlot.starting(iv.scheduled_at, iv.duration) for iv in existing]

        slots: List[Dict[str, Any]] = []
        cursor = work_start
        while cursor < work_end:
            candidate = TimeSlot.starting(cursor, duration_minutes)
            if (
                candidate.end <= work_end
                and candidate.start > now
                and not any(candidate.overlaps(b) for b in busy)
            ):
                slots.append({
                    'start_time': candidate.start.astimezone(tz).strftime('%H:%M'),
                    'end_time': candidate.end.astimezone(tz).strftime('%H:%M'),
                    'available': True,
                })
            cursor += step

        booked_that_day = [iv for iv in existing if iv.scheduled_date == day]

        logger.debug(
            "Availability for interviewer %s on %s: %s free slots, %s booked",
            interviewer.pk, day, len(slots), len(booked_that_day)
        )

        return {
            'date': day.isoformat(),
            'duration': duration_minutes,
            'interviewer_id': interviewer.pk,
            'available_slots': slots,
            'existing_interviews': len(booked_that_day),
        }
