"""
ATS Filters - Django Filter classes for REST API filtering

This module provides filtering for:
- HR interview lists (status, type, interviewer, job, date range, search)
- Interviewer interview lists (status, today/upcoming/past)

Date ranges are evaluated in the company's timezone through
core.timezones.BusinessCalendar. Search runs in the database before
pagination.
"""

import django_filters
from django.db.models import Q

from core.timezones import BusinessCalendar

from .models import Interview


SEARCH_FIELDS = (
    'application__applicant__first_name',
    'application__applicant__last_name',
    'application__applicant__email',
    'application__job__title',
    'interviewer__first_name',
    'interviewer__last_name',
)


def search_interviews(queryset, value):
    """
    Match every whitespace-separated term against candidate name, job title
    or interviewer name, so "Jane Backend" finds Jane Doe's backend interview.
    """
    for term in value.split():
        term_query = Q()
        for field in SEARCH_FIELDS:
            term_query |= Q(**{f'{field}__icontains': term})
        queryset = queryset.filter(term_query)
    return queryset


class DateRangeMixin:
    """Shared date_range handling for interview filter sets."""

    def get_calendar(self):
        user = getattr(self.request, 'user', None)
        return BusinessCalendar.for_company(getattr(user, 'company', None))

    def filter_date_range(self, queryset, name, value):
        calendar = self.get_calendar()
        now = calendar.now

        if value == 'today':
            window = calendar.day()
        elif value == 'tomorrow':
            window = calendar.day(1)
        elif value == 'this_week':
            window = calendar.week()
        elif value == 'next_week':
            window = calendar.week(1)
        elif value == 'this_month':
            window = calendar.month()
        elif value == 'past':
            return queryset.filter(scheduled_at__lt=now)
        elif value == 'upcoming':
            return queryset.filter(scheduled_at__gte=now)
        else:
            # custom: bounds come from start_date / end_date
            return queryset

        return queryset.filter(scheduled_at__gte=window.start, scheduled_at__lt=window.end)


# ==================== HR INTERVIEW FILTERS ====================

class InterviewFilter(DateRangeMixin, django_filters.FilterSet):
    """Filter for the HR interview list."""

    DATE_RANGES = (
        ('today', 'Today'),
        ('tomorrow', 'Tomorrow'),
        ('this_week', 'This week'),
        ('next_week', 'Next week'),
        ('this_month', 'This month'),
        ('past', 'Past'),
        ('upcoming', 'Upcoming'),
        ('custom', 'Custom'),
    )

    status = django_filters.ChoiceFilter(choices=Interview.InterviewStatus.choices)
    interview_type = django_filters.ChoiceFilter(choices=Interview.InterviewType.choices)
    interviewer = django_filters.NumberFilter(field_name='interviewer_id')
    job = django_filters.NumberFilter(field_name='application__job_id')
    application = django_filters.NumberFilter(field_name='application_id')

    # Date filters
    date_range = django_filters.ChoiceFilter(choices=DATE_RANGES, method='filter_date_range')
    start_date = django_filters.DateFilter(field_name='scheduled_date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='scheduled_date', lookup_expr='lte')

    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Interview
        fields = ['status', 'interview_type', 'interviewer', 'job', 'application']

    def filter_search(self, queryset, name, value):
        """Search by candidate name, job title, or interviewer name."""
        return search_interviews(queryset, value)


# ==================== INTERVIEWER FILTERS ====================

class InterviewerInterviewFilter(DateRangeMixin, django_filters.FilterSet):
    """Filter for an interviewer's own interviews."""

    DATE_RANGES = (
        ('today', 'Today'),
        ('upcoming', 'Upcoming'),
        ('past', 'Past'),
    )

    status = django_filters.ChoiceFilter(choices=Interview.InterviewStatus.choices)
    date_range = django_filters.ChoiceFilter(choices=DATE_RANGES, method='filter_date_range')
    needs_feedback = django_filters.BooleanFilter(method='filter_needs_feedback')

    class Meta:
        model = Interview
        fields = ['status']

    def filter_needs_feedback(self, queryset, name, value):
        """Started, still-active interviews missing feedback."""
        if value:
            return queryset.filter(
                scheduled_at__lt=self.get_calendar().now,
                feedback__isnull=True,
            ).exclude(status__in=Interview.INACTIVE_STATUSES)
        return queryset
