"""
ATS Serializers - REST API serialization for interview management

This module provides DRF serializers for:
- Interviews (HR list/detail, interviewer list)
- Interview input payloads (schedule, reschedule, status change)
- Feedback (read and submit)
- Reschedule history, reminders and preparation materials
- Hiring decisions and availability queries

Input serializers only validate shape; workflow rules (future start,
free slot, feedback window) live in ats.lifecycle.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from accounts.serializers import BasicUserSerializer
from api.exceptions import ResourceNotFound

from .models import (
    CLOCK_VALIDATOR, Application, Interview, InterviewFeedback,
    InterviewReminder, InterviewReschedule, PreparationMaterial
)

User = get_user_model()
logger = logging.getLogger(__name__)

Status = Interview.InterviewStatus
AppStatus = Application.ApplicationStatus


# ==================== COMPANY-SCOPED RELATED FIELD ====================

class CompanyScopedPrimaryKeyRelatedField(serializers.PrimaryKeyRelatedField):
    """
    PrimaryKeyRelatedField restricted to the requesting user's company.

    Objects outside the company, or missing altogether, raise a 404
    ResourceNotFound rather than a field validation error, so the response
    never reveals that a foreign object exists.

    Usage:
        application_id = CompanyScopedPrimaryKeyRelatedField(
            queryset=Application.objects.all(),
            company_field='job__company',
            resource_type='Application',
            source='application'
        )
    """

    def __init__(self, company_field='company', resource_type=None, **kwargs):
        self.company_field = company_field
        self.resource_type = resource_type
        super().__init__(**kwargs)

    def get_queryset(self):
        queryset = super().get_queryset()
        request = self.context.get('request')
        company_id = getattr(getattr(request, 'user', None), 'company_id', None)
        return queryset.filter(**{f'{self.company_field}_id': company_id})

    def to_internal_value(self, data):
        try:
            return self.get_queryset().get(pk=data)
        except ObjectDoesNotExist:
            raise ResourceNotFound(self.resource_type or 'Resource', data)
        except (TypeError, ValueError):
            self.fail('incorrect_type', data_type=type(data).__name__)


# ==================== NESTED SERIALIZERS ====================

class CandidateSerializer(serializers.ModelSerializer):
    """Applicant as shown on an interview."""
    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'full_name', 'phone']
        read_only_fields = fields


class InterviewApplicationSerializer(serializers.ModelSerializer):
    """Application context for interview detail."""
    applicant = CandidateSerializer(read_only=True)
    job_id = serializers.IntegerField(source='job.id', read_only=True)
    job_title = serializers.CharField(source='job.title', read_only=True)
    job_department = serializers.CharField(source='job.department', read_only=True)

    class Meta:
        model = Application
        fields = ['id', 'uuid', 'status', 'applicant', 'job_id', 'job_title', 'job_department', 'applied_at']
        read_only_fields = fields


# ==================== FEEDBACK SERIALIZERS ====================

class InterviewFeedbackSerializer(serializers.ModelSerializer):
    """Interview feedback serializer."""
    submitted_by = BasicUserSerializer(read_only=True)
    recommendation_display = serializers.CharField(
        source='get_recommendation_display',
        read_only=True
    )
    editable = serializers.SerializerMethodField()
    hours_remaining = serializers.SerializerMethodField()

    class Meta:
        model = InterviewFeedback
        fields = [
            'id', 'submitted_by',
            'overall_rating', 'technical_skills', 'communication_skills',
            'problem_solving', 'cultural_fit',
            'strengths', 'weaknesses',
            'recommendation', 'recommendation_display', 'additional_notes',
            'submitted_at', 'updated_at', 'editable', 'hours_remaining',
        ]
        read_only_fields = fields

    def get_editable(self, obj):
        return obj.is_editable()

    def get_hours_remaining(self, obj):
        return obj.hours_remaining()


class FeedbackSubmitSerializer(serializers.Serializer):
    """
    Feedback payload.

    A submission replaces the whole assessment, so omitted optional fields
    are cleared on edit.
    """
    overall_rating = serializers.IntegerField(min_value=1, max_value=5)
    technical_skills = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True, default=None)
    communication_skills = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True, default=None)
    problem_solving = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True, default=None)
    cultural_fit = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True, default=None)
    strengths = serializers.ListField(
        child=serializers.CharField(max_length=500), required=False, default=list
    )
    weaknesses = serializers.ListField(
        child=serializers.CharField(max_length=500), required=False, default=list
    )
    recommendation = serializers.ChoiceField(choices=InterviewFeedback.Recommendation.choices)
    additional_notes = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')


# ==================== AUXILIARY RECORDS ====================

class InterviewRescheduleHistorySerializer(serializers.ModelSerializer):
    rescheduled_by = BasicUserSerializer(read_only=True)

    class Meta:
        model = InterviewReschedule
        fields = [
            'id', 'old_date', 'old_time', 'old_duration',
            'new_date', 'new_time', 'new_duration',
            'reason', 'rescheduled_by', 'rescheduled_at',
        ]
        read_only_fields = fields


class InterviewReminderSerializer(serializers.ModelSerializer):
    class Meta:
        model = InterviewReminder
        fields = ['id', 'reminder_type', 'recipient', 'remind_at', 'lead_minutes', 'sent', 'sent_at']
        read_only_fields = fields


class PreparationMaterialSerializer(serializers.ModelSerializer):
    class Meta:
        model = PreparationMaterial
        fields = ['id', 'title', 'description', 'file_url', 'is_visible_to_candidate', 'created_at']
        read_only_fields = ['id', 'created_at']


# ==================== INTERVIEW SERIALIZERS ====================

class InterviewListSerializer(serializers.ModelSerializer):
    """Lightweight interview serializer for HR lists."""
    id = serializers.UUIDField(source='uuid', read_only=True)
    candidate_name = serializers.CharField(
        source='application.applicant.get_full_name',
        read_only=True
    )
    candidate_email = serializers.EmailField(
        source='application.applicant.email',
        read_only=True
    )
    job_title = serializers.CharField(
        source='application.job.title',
        read_only=True
    )
    interviewer = BasicUserSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    feedback_submitted = serializers.BooleanField(source='has_feedback', read_only=True)

    class Meta:
        model = Interview
        fields = [
            'id', 'application', 'candidate_name', 'candidate_email', 'job_title',
            'interviewer', 'scheduled_date', 'scheduled_time', 'scheduled_at',
            'duration', 'interview_type', 'round', 'status', 'status_display',
            'location', 'meeting_link', 'feedback_submitted', 'created_at',
        ]
        read_only_fields = fields


class InterviewDetailSerializer(serializers.ModelSerializer):
    """Detailed interview serializer with feedback and history."""
    id = serializers.UUIDField(source='uuid', read_only=True)
    application = InterviewApplicationSerializer(read_only=True)
    interviewer = BasicUserSerializer(read_only=True)
    scheduled_by = BasicUserSerializer(read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    ends_at = serializers.DateTimeField(read_only=True)
    feedback = serializers.SerializerMethodField()
    reschedule_history = InterviewRescheduleHistorySerializer(many=True, read_only=True)
    reminders = InterviewReminderSerializer(many=True, read_only=True)
    preparation_materials = PreparationMaterialSerializer(many=True, read_only=True)

    class Meta:
        model = Interview
        fields = [
            'id', 'application', 'interviewer', 'scheduled_by',
            'scheduled_date', 'scheduled_time', 'scheduled_at', 'ends_at',
            'duration', 'interview_type', 'round',
            'location', 'meeting_link', 'notes', 'meeting_details', 'agenda', 'questions',
            'status', 'status_display', 'cancellation_reason', 'cancelled_at', 'completed_at',
            'feedback', 'reschedule_history', 'reminders', 'preparation_materials',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_feedback(self, obj):
        if not obj.has_feedback:
            return None
        return InterviewFeedbackSerializer(obj.feedback).data


class InterviewerInterviewSerializer(serializers.ModelSerializer):
    """An interviewer's own interview, as listed in their schedule."""
    id = serializers.UUIDField(source='uuid', read_only=True)
    candidate = serializers.CharField(source='application.applicant.get_full_name', read_only=True)
    job = serializers.CharField(source='application.job.title', read_only=True)
    job_department = serializers.CharField(source='application.job.department', read_only=True)
    feedback_submitted = serializers.BooleanField(source='has_feedback', read_only=True)

    class Meta:
        model = Interview
        fields = [
            'id', 'candidate', 'job', 'job_department',
            'scheduled_date', 'scheduled_time', 'scheduled_at', 'duration',
            'status', 'interview_type', 'round',
            'location', 'meeting_link', 'notes', 'feedback_submitted',
        ]
        read_only_fields = fields


# ==================== INPUT SERIALIZERS ====================

class InterviewScheduleSerializer(serializers.Serializer):
    """
    Payload for scheduling an interview.

    Application and interviewer are resolved within the caller's company;
    anything else is a 404.
    """
    application_id = CompanyScopedPrimaryKeyRelatedField(
        queryset=Application.objects.select_related('job__company', 'applicant'),
        company_field='job__company',
        resource_type='Application',
        source='application'
    )
    interviewer_id = CompanyScopedPrimaryKeyRelatedField(
        queryset=User.objects.filter(role=User.Role.INTERVIEWER, is_active=True),
        resource_type='Interviewer',
        source='interviewer'
    )
    scheduled_date = serializers.DateField()
    scheduled_time = serializers.CharField(max_length=5, validators=[CLOCK_VALIDATOR])
    duration = serializers.IntegerField(min_value=15, max_value=480, default=60)
    interview_type = serializers.ChoiceField(choices=Interview.InterviewType.choices)
    round = serializers.IntegerField(min_value=1, default=1)

    location = serializers.CharField(max_length=500, required=False, allow_blank=True)
    meeting_link = serializers.URLField(max_length=500, required=False, allow_blank=True)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    meeting_details = serializers.DictField(required=False)
    agenda = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    questions = serializers.ListField(child=serializers.CharField(max_length=1000), required=False)

    def validate_application_id(self, application):
        if application.status in (AppStatus.REJECTED, AppStatus.WITHDRAWN):
            raise serializers.ValidationError(
                _("Cannot schedule an interview for a %(status)s application.") % {
                    'status': application.get_status_display().lower()
                }
            )
        return application


class InterviewRescheduleSerializer(serializers.Serializer):
    """Payload for moving an interview (PUT)."""
    scheduled_date = serializers.DateField()
    scheduled_time = serializers.CharField(max_length=5, validators=[CLOCK_VALIDATOR])
    duration = serializers.IntegerField(min_value=15, max_value=480, required=False)
    reschedule_reason = serializers.CharField(max_length=500, required=False, allow_blank=True)

    interview_type = serializers.ChoiceField(choices=Interview.InterviewType.choices, required=False)
    location = serializers.CharField(max_length=500, required=False, allow_blank=True)
    meeting_link = serializers.URLField(max_length=500, required=False, allow_blank=True)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)

    DETAIL_FIELDS = ('interview_type', 'location', 'meeting_link', 'notes')

    def split(self):
        """Return (schedule kwargs, detail kwargs) for the lifecycle service."""
        data = self.validated_data
        schedule = {
            'scheduled_date': data['scheduled_date'],
            'scheduled_time': data['scheduled_time'],
            'duration': data.get('duration'),
            'reason': data.get('reschedule_reason', ''),
        }
        details = {field: data[field] for field in self.DETAIL_FIELDS if field in data}
        return schedule, details


class InterviewStatusSerializer(serializers.Serializer):
    """Payload for the HR status endpoint."""
    STATUS_CHOICES = (
        (Status.CONFIRMED, Status.CONFIRMED.label),
        (Status.COMPLETED, Status.COMPLETED.label),
        (Status.CANCELLED, Status.CANCELLED.label),
        (Status.NO_SHOW, Status.NO_SHOW.label),
    )

    status = serializers.ChoiceField(choices=STATUS_CHOICES)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    cancellation_reason = serializers.CharField(max_length=500, required=False, allow_blank=True)


class HiringDecisionSerializer(serializers.Serializer):
    DECISION_CHOICES = (
        (AppStatus.OFFER_EXTENDED, AppStatus.OFFER_EXTENDED.label),
        (AppStatus.REJECTED, AppStatus.REJECTED.label),
    )

    decision = serializers.ChoiceField(choices=DECISION_CHOICES)


class AvailableSlotsQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    duration = serializers.IntegerField(min_value=15, max_value=480, default=60)


class DecisionResultSerializer(serializers.ModelSerializer):
    class Meta:
        model = Application
        fields = ['id', 'uuid', 'status', 'updated_at']
        read_only_fields = fields
