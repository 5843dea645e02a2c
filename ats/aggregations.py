"""
ATS Aggregations - Database aggregations behind the interview dashboards.

This module provides:
- InterviewerDashboardAggregation: counters, pending-feedback segments and
  feedback turnaround buckets for one interviewer, computed by a single
  aggregate() query, plus today's agenda and the recent activity feed
- PendingFeedbackAggregation: the interviewer's feedback worklist
- HRInterviewSummary: today/upcoming counters for an HR interview list

Day and week boundaries come from core.timezones.BusinessCalendar in the
company's timezone.
"""

from datetime import timedelta
from typing import Any, Dict, List

from django.conf import settings
from django.db.models import (
    Avg, Count, DurationField, ExpressionWrapper, F, Q
)
from django.utils import timezone

from core.timezones import BusinessCalendar

from .models import Interview

ACTIVITY_SOURCE_SIZE = 120
ACTIVITY_FEED_SIZE = 10

# Later lifecycle stages sort first when timestamps tie
ACTIVITY_STAGE = {'scheduled': 0, 'rescheduled': 1, 'completed': 2, 'feedback_submitted': 3}


def _edit_window():
    return timedelta(hours=settings.FEEDBACK_EDIT_WINDOW_HOURS)


def _in_window(field: str, window) -> Q:
    return Q(**{f'{field}__gte': window.start, f'{field}__lt': window.end})


def candidate_name(interview: Interview) -> str:
    applicant = interview.application.applicant
    return applicant.get_full_name() if applicant else 'Unknown'


class InterviewerDashboardAggregation:
    """
    Aggregations for the interviewer dashboard.

    Every counter excludes cancelled and no-show interviews.
    """

    @staticmethod
    def counters(interviewer, calendar: BusinessCalendar) -> Dict[str, Any]:
        """
        Compute all dashboard counters in one query.

        Pending segments:
        - unsubmitted: started interviews with no feedback
        - editable_submitted: started interviews whose feedback is still
          inside the edit window
        - overdue_unsubmitted: unsubmitted interviews that started more than
          one edit window ago (a subset of unsubmitted)

        Turnaround is feedback.submitted_at - scheduled_at, bucketed into
        <6h, 6-24h, 24-48h and >=48h.

        Args:
            interviewer: Interviewer user
            calendar: BusinessCalendar anchored at the request time

        Returns:
            dict of integer counters plus avg_turnaround (timedelta or None)
        """
        now = calendar.now
        edit_cutoff = now - _edit_window()
        today = calendar.day()
        this_week = calendar.week()
        last_week = calendar.week(-1)

        no_feedback = Q(feedback__isnull=True)
        has_feedback = Q(feedback__isnull=False)
        started = Q(scheduled_at__lt=now)
        turnaround_under = lambda hours: Q(  # noqa: E731
            feedback__submitted_at__lt=F('scheduled_at') + timedelta(hours=hours)
        )
        turnaround_at_least = lambda hours: Q(  # noqa: E731
            feedback__submitted_at__gte=F('scheduled_at') + timedelta(hours=hours)
        )

        return Interview.objects.filter(
            interviewer=interviewer
        ).exclude(
            status__in=Interview.INACTIVE_STATUSES
        ).aggregate(
            total=Count('id'),
            today=Count('id', filter=_in_window('scheduled_at', today)),
            upcoming=Count('id', filter=Q(scheduled_at__gte=now)),
            completed_this_week=Count('id', filter=_in_window('completed_at', this_week)),
            this_week=Count('id', filter=_in_window('scheduled_at', this_week)),
            last_week=Count('id', filter=_in_window('scheduled_at', last_week)),
            unsubmitted=Count('id', filter=started & no_feedback),
            editable_submitted=Count(
                'id', filter=started & Q(feedback__submitted_at__gte=edit_cutoff)
            ),
            overdue_unsubmitted=Count(
                'id', filter=Q(scheduled_at__lt=edit_cutoff) & no_feedback
            ),
            turnaround_total=Count('id', filter=has_feedback),
            lt6h=Count('id', filter=has_feedback & turnaround_under(6)),
            h6_24=Count('id', filter=turnaround_at_least(6) & turnaround_under(24)),
            h24_48=Count('id', filter=turnaround_at_least(24) & turnaround_under(48)),
            gt48h=Count('id', filter=turnaround_at_least(48)),
            avg_turnaround=Avg(
                ExpressionWrapper(
                    F('feedback__submitted_at') - F('scheduled_at'),
                    output_field=DurationField()
                ),
                filter=has_feedback
            ),
        )

    @staticmethod
    def todays_interviews(interviewer, calendar: BusinessCalendar) -> List[Dict[str, Any]]:
        """Today's agenda, ordered by start time."""
        interviews = Interview.objects.filter(
            _in_window('scheduled_at', calendar.day()),
            interviewer=interviewer,
        ).exclude(
            status__in=Interview.INACTIVE_STATUSES
        ).select_related(
            'application__applicant', 'application__job'
        ).order_by('scheduled_at')

        return [
            {
                'id': str(interview.uuid),
                'candidate_name': candidate_name(interview),
                'job_title': interview.application.job.title,
                'time': interview.scheduled_time,
                'duration': interview.duration,
                'status': interview.status,
            }
            for interview in interviews
        ]

    @staticmethod
    def recent_activities(interviewer) -> List[Dict[str, Any]]:
        """
        Activity feed derived from timestamps on recently updated interviews.

        Reads the ACTIVITY_SOURCE_SIZE most recently updated interviews and
        returns the ACTIVITY_FEED_SIZE newest events, newest first.
        """
        source = Interview.objects.filter(
            interviewer=interviewer
        ).select_related(
            'application__applicant', 'application__job', 'feedback'
        ).prefetch_related(
            'reschedule_history'
        ).order_by('-updated_at')[:ACTIVITY_SOURCE_SIZE]

        events = []
        for interview in source:
            name = candidate_name(interview)
            job_title = interview.application.job.title
            key = str(interview.uuid)

            events.append({
                'id': f'{key}-scheduled',
                'type': 'scheduled',
                'message': f'Interview with {name} scheduled ({job_title})',
                'time': interview.created_at,
            })

            history = list(interview.reschedule_history.all())
            if history:
                events.append({
                    'id': f'{key}-rescheduled',
                    'type': 'rescheduled',
                    'message': f'Interview with {name} rescheduled ({job_title})',
                    'time': history[-1].rescheduled_at,
                })

            if interview.completed_at:
                events.append({
                    'id': f'{key}-completed',
                    'type': 'completed',
                    'message': f'Interview with {name} completed ({job_title})',
                    'time': interview.completed_at,
                })

            if interview.has_feedback:
                events.append({
                    'id': f'{key}-feedback',
                    'type': 'feedback_submitted',
                    'message': f'Feedback submitted for {name} ({job_title})',
                    'time': interview.feedback.submitted_at,
                })

        events.sort(key=lambda event: (event['time'], ACTIVITY_STAGE[event['type']]), reverse=True)
        return [
            {**event, 'time': event['time'].isoformat()}
            for event in events[:ACTIVITY_FEED_SIZE]
        ]

    @staticmethod
    def build(interviewer, now=None) -> Dict[str, Any]:
        """Assemble the full dashboard payload."""
        calendar = BusinessCalendar.for_company(interviewer.company, now=now)
        counts = InterviewerDashboardAggregation.counters(interviewer, calendar)

        avg = counts['avg_turnaround']
        avg_hours = round(avg.total_seconds() / 3600, 1) if avg is not None else 0

        return {
            'summary': {
                'total_interviews': counts['total'],
                'upcoming_interviews': counts['upcoming'],
                'todays_interviews': counts['today'],
                'pending_feedback': counts['unsubmitted'] + counts['editable_submitted'],
            },
            'todays_interviews': InterviewerDashboardAggregation.todays_interviews(interviewer, calendar),
            'metrics': {
                'completed_this_week': counts['completed_this_week'],
                'avg_feedback_turnaround_hours': avg_hours,
            },
            'week_comparison': {
                'this_week': counts['this_week'],
                'last_week': counts['last_week'],
            },
            'feedback_turnaround_buckets': {
                'lt6h': counts['lt6h'],
                'h6_24': counts['h6_24'],
                'h24_48': counts['h24_48'],
                'gt48h': counts['gt48h'],
                'total': counts['turnaround_total'],
            },
            'pending_segments': {
                'unsubmitted': counts['unsubmitted'],
                'editable_submitted': counts['editable_submitted'],
                'overdue_unsubmitted': counts['overdue_unsubmitted'],
            },
            'recent_activities': InterviewerDashboardAggregation.recent_activities(interviewer),
        }


class PendingFeedbackAggregation:
    """The interviewer's pending-feedback worklist."""

    HIGH_PRIORITY_DAYS = 4
    MEDIUM_PRIORITY_DAYS = 2

    @staticmethod
    def queryset(interviewer, now=None):
        """
        Started interviews with no feedback or with feedback still editable,
        oldest first.
        """
        now = now or timezone.now()
        return Interview.objects.filter(
            Q(feedback__isnull=True) | Q(feedback__submitted_at__gte=now - _edit_window()),
            interviewer=interviewer,
            scheduled_at__lt=now,
        ).exclude(
            status__in=Interview.INACTIVE_STATUSES
        ).select_related(
            'application__applicant', 'application__job', 'feedback'
        ).order_by('scheduled_at')

    @staticmethod
    def priority(days_pending: int) -> str:
        if days_pending >= PendingFeedbackAggregation.HIGH_PRIORITY_DAYS:
            return 'high'
        if days_pending >= PendingFeedbackAggregation.MEDIUM_PRIORITY_DAYS:
            return 'medium'
        return 'low'


class HRInterviewSummary:
    """Counters shown above the HR interview list."""

    @staticmethod
    def for_queryset(interview_queryset, company, now=None) -> Dict[str, int]:
        calendar = BusinessCalendar.for_company(company, now=now)
        return interview_queryset.aggregate(
            today_interviews=Count('id', filter=_in_window('scheduled_at', calendar.day())),
            upcoming_interviews=Count(
                'id',
                filter=Q(scheduled_at__gte=calendar.now, status__in=Interview.BOOKED_STATUSES)
            ),
        )
