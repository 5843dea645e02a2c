"""
ATS ViewSets - REST API endpoints for interview management

This module provides:
- InterviewViewSet: HR list/detail, schedule (POST), reschedule (PUT),
  status changes and interviewer availability
- ApplicationDecisionView: HR hiring decision on an application
- InterviewerDashboardView / PendingFeedbackView: interviewer read models
- InterviewerInterviewViewSet: an interviewer's own interviews and the
  feedback submission endpoint

Security:
- HR querysets are scoped to the caller's company through
  application.job.company, so foreign interviews are 404
- Interviewer querysets are scoped to interviews they conduct
- Mutations are rate limited with the ``interview_mutation`` scope
"""

import logging

from django.db.models import Prefetch
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from accounts.models import User
from api.base import APIResponse, WorklistPagination
from api.exceptions import ResourceNotFound, raise_for_result
from core.permissions import IsCompanyMember, IsHR, IsInterviewer

from .aggregations import (
    HRInterviewSummary, InterviewerDashboardAggregation,
    PendingFeedbackAggregation, candidate_name
)
from .filters import InterviewFilter, InterviewerInterviewFilter
from .lifecycle import InterviewLifecycleService
from .models import Application, Interview, InterviewReschedule
from .scheduling import AvailabilityService
from .serializers import (
    AvailableSlotsQuerySerializer, DecisionResultSerializer,
    FeedbackSubmitSerializer, HiringDecisionSerializer,
    InterviewDetailSerializer, InterviewerInterviewSerializer,
    InterviewFeedbackSerializer, InterviewListSerializer,
    InterviewRescheduleSerializer, InterviewScheduleSerializer,
    InterviewStatusSerializer
)

logger = logging.getLogger(__name__)

UUID_REGEX = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'


# ==================== RATE LIMITING ====================

class InterviewMutationThrottle(UserRateThrottle):
    """Rate limit for scheduling, rescheduling, status and feedback writes."""
    scope = 'interview_mutation'


def detail_queryset():
    return Interview.objects.select_related(
        'application__applicant', 'application__job__company',
        'interviewer', 'scheduled_by', 'feedback__submitted_by',
    ).prefetch_related(
        Prefetch(
            'reschedule_history',
            queryset=InterviewReschedule.objects.select_related('rescheduled_by')
        ),
        'reminders',
        'preparation_materials',
    )


# ==================== HR INTERVIEWS ====================

class InterviewViewSet(viewsets.GenericViewSet):
    """
    ViewSet for HR interview management.

    list: Company interviews (filterable, searchable) with a summary
    retrieve: Interview with feedback, history, reminders and materials
    create: Schedule a new interview
    update: Reschedule the interview

    Actions:
    - status: cancel or change status (PATCH)
    - available_slots: free start times for an interviewer on a date

    Security:
    - Company isolation via application.job.company
    """
    permission_classes = [permissions.IsAuthenticated, IsHR, IsCompanyMember]
    pagination_class = WorklistPagination
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = InterviewFilter
    ordering_fields = ['scheduled_at', 'created_at', 'status', 'interview_type']
    ordering = ['scheduled_at']
    lookup_field = 'uuid'
    lookup_value_regex = UUID_REGEX
    company_field = 'application__job__company'

    MUTATING_ACTIONS = ('create', 'update', 'change_status')

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Interview.objects.none()
        return detail_queryset().filter(
            application__job__company_id=self.request.user.company_id
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return InterviewScheduleSerializer
        if self.action == 'update':
            return InterviewRescheduleSerializer
        if self.action == 'change_status':
            return InterviewStatusSerializer
        if self.action == 'list':
            return InterviewListSerializer
        return InterviewDetailSerializer

    def get_throttles(self):
        throttles = super().get_throttles()
        if self.action in self.MUTATING_ACTIONS:
            throttles.append(InterviewMutationThrottle())
        return throttles

    def _detail(self, interview):
        fresh = self.get_queryset().get(pk=interview.pk)
        return InterviewDetailSerializer(fresh, context=self.get_serializer_context()).data

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        summary = HRInterviewSummary.for_queryset(self.get_queryset(), request.user.company)

        page = self.paginate_queryset(queryset)
        serializer = InterviewListSerializer(page, many=True, context=self.get_serializer_context())
        response = self.get_paginated_response(serializer.data)
        response.data['meta']['summary'] = summary
        return response

    def retrieve(self, request, uuid=None):
        interview = self.get_object()
        return APIResponse.success(data=self._detail(interview))

    def create(self, request):
        """Schedule an interview."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = InterviewLifecycleService.schedule(scheduled_by=request.user, **serializer.validated_data)
        raise_for_result(result)

        return APIResponse.created(data=self._detail(result.data), message=result.message)

    def update(self, request, uuid=None):
        """Reschedule the interview."""
        interview = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule, details = serializer.split()

        result = InterviewLifecycleService.reschedule(interview, request.user, **schedule, **details)
        raise_for_result(result)

        return APIResponse.updated(data=self._detail(result.data), message=result.message)

    @action(detail=True, methods=['patch'], url_path='status')
    def change_status(self, request, uuid=None):
        """Cancel the interview or move it to another status."""
        interview = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = InterviewLifecycleService.change_status(
            interview,
            data['status'],
            reason=data.get('cancellation_reason', ''),
            notes=data.get('notes'),
            changed_by=request.user,
        )
        raise_for_result(result)

        updated = result.data
        return APIResponse.updated(
            data={
                'id': str(updated.uuid),
                'status': updated.status,
                'cancellation_reason': updated.cancellation_reason,
                'cancelled_at': updated.cancelled_at,
                'completed_at': updated.completed_at,
            },
            message=result.message
        )

    @action(detail=False, methods=['get'], url_path=r'available-slots/(?P<interviewer_id>\d+)')
    def available_slots(self, request, interviewer_id=None):
        """Free start times for an interviewer on ?date=YYYY-MM-DD&duration=N."""
        interviewer = User.objects.filter(
            pk=interviewer_id,
            role=User.Role.INTERVIEWER,
            company_id=request.user.company_id,
            is_active=True,
        ).select_related('company').first()
        if interviewer is None:
            raise ResourceNotFound('Interviewer', interviewer_id)

        query = AvailableSlotsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        data = AvailabilityService.get_available_slots(
            interviewer,
            query.validated_data['date'],
            query.validated_data['duration'],
        )
        return APIResponse.success(data=data)


class ApplicationDecisionView(APIView):
    """
    POST: record the hiring decision (offer_extended or rejected) for an
    application that has a completed, fed-back interview.
    """
    permission_classes = [permissions.IsAuthenticated, IsHR]
    throttle_classes = [InterviewMutationThrottle]

    def post(self, request, pk):
        application = Application.objects.filter(
            pk=pk, job__company_id=request.user.company_id
        ).first()
        if application is None:
            raise ResourceNotFound('Application', pk)

        serializer = HiringDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = InterviewLifecycleService.make_hiring_decision(
            application, serializer.validated_data['decision'], request.user
        )
        raise_for_result(result)

        return APIResponse.updated(data=DecisionResultSerializer(result.data).data, message=result.message)


# ==================== INTERVIEWER ====================

class InterviewerDashboardView(APIView):
    """
    GET: the interviewer's dashboard: counters, today's agenda, weekly
    comparison, feedback turnaround and recent activity.
    """
    permission_classes = [permissions.IsAuthenticated, IsInterviewer]

    def get(self, request):
        return APIResponse.success(data=InterviewerDashboardAggregation.build(request.user))


class PendingFeedbackView(generics.GenericAPIView):
    """
    GET: interviews awaiting feedback (none yet, or still editable), oldest
    first, with priority by days pending.
    """
    permission_classes = [permissions.IsAuthenticated, IsInterviewer]
    pagination_class = WorklistPagination

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Interview.objects.none()
        return PendingFeedbackAggregation.queryset(self.request.user)

    def get(self, request):
        now = timezone.now()
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response([self._item(interview, now) for interview in page])

    @staticmethod
    def _item(interview, now):
        days_pending = max(0, (now - interview.scheduled_at).days)
        feedback = interview.feedback if interview.has_feedback else None
        editable = feedback is not None and feedback.is_editable(now)

        return {
            'id': str(interview.uuid),
            'candidate_name': candidate_name(interview),
            'job_title': interview.application.job.title,
            'department': interview.application.job.department or None,
            'interview_date': interview.scheduled_date,
            'interview_time': interview.scheduled_time,
            'scheduled_at': interview.scheduled_at,
            'duration': interview.duration,
            'interview_type': interview.interview_type,
            'days_pending': days_pending,
            'priority': PendingFeedbackAggregation.priority(days_pending),
            'has_feedback': feedback is not None,
            'editable': editable,
            'hours_remaining': feedback.hours_remaining(now) if feedback is not None else None,
            'existing_feedback': InterviewFeedbackSerializer(feedback).data if editable else None,
        }


class InterviewerInterviewViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for an interviewer's own interviews.

    list: Own interviews, filterable by status and date_range
    retrieve: Interview detail

    Actions:
    - feedback: submit or edit feedback (POST)
    """
    permission_classes = [permissions.IsAuthenticated, IsInterviewer]
    pagination_class = WorklistPagination
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = InterviewerInterviewFilter
    ordering_fields = ['scheduled_at', 'status']
    ordering = ['scheduled_at']
    lookup_field = 'uuid'
    lookup_value_regex = UUID_REGEX

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Interview.objects.none()
        return detail_queryset().filter(interviewer=self.request.user)

    def get_serializer_class(self):
        if self.action == 'list':
            return InterviewerInterviewSerializer
        if self.action == 'feedback':
            return FeedbackSubmitSerializer
        return InterviewDetailSerializer

    def get_throttles(self):
        throttles = super().get_throttles()
        if self.action == 'feedback':
            throttles.append(InterviewMutationThrottle())
        return throttles

    def retrieve(self, request, uuid=None):
        interview = self.get_object()
        return APIResponse.success(data=InterviewDetailSerializer(interview).data)

    @action(detail=True, methods=['post'])
    def feedback(self, request, uuid=None):
        """Submit feedback, or edit it within the edit window."""
        interview = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = InterviewLifecycleService.submit_feedback(interview, request.user, serializer.validated_data)
        raise_for_result(result)

        updated = result.data
        return APIResponse.success(
            data={
                'id': str(updated.uuid),
                'status': updated.status,
                'feedback': InterviewFeedbackSerializer(updated.feedback).data,
            },
            message=result.message
        )
