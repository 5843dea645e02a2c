"""
ATS Models - Jobs, applications and the interview lifecycle

This module implements:
- Job: a company's job posting
- Application: a candidate's submission against a job; owns the hire/reject
  decision
- Interview: one scheduled conversation between an interviewer and an
  applicant, with its status lifecycle
- InterviewFeedback: the interviewer's assessment, one per interview,
  editable for a fixed window after first submission
- InterviewReschedule: append-only reschedule history
- InterviewReminder / PreparationMaterial: auxiliary interview records

Interviews keep the user-facing ``scheduled_date`` + ``scheduled_time``
("HH:MM", company wall clock) and derive the absolute ``scheduled_at`` from
them on every save. All ordering and "has it happened yet" checks use
``scheduled_at``.
"""

import uuid
from datetime import timedelta

from django.conf import settings
from django.core.validators import (
    MaxLengthValidator, MaxValueValidator, MinValueValidator, RegexValidator
)
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.timezones import combine_local, company_timezone, parse_clock

CLOCK_VALIDATOR = RegexValidator(
    regex=r'^([01]\d|2[0-3]):[0-5]\d$',
    message=_('Time must be in HH:MM format.')
)


# =============================================================================
# JOBS & APPLICATIONS
# =============================================================================

class Job(models.Model):
    """A job posting owned by a company."""

    class JobStatus(models.TextChoices):
        DRAFT = 'draft', _('Draft')
        PUBLISHED = 'published', _('Published')
        ON_HOLD = 'on_hold', _('On Hold')
        CLOSED = 'closed', _('Closed')

    class JobType(models.TextChoices):
        FULL_TIME = 'full_time', _('Full-time')
        PART_TIME = 'part_time', _('Part-time')
        CONTRACT = 'contract', _('Contract')
        INTERNSHIP = 'internship', _('Internship')

    class WorkType(models.TextChoices):
        REMOTE = 'remote', _('Remote')
        HYBRID = 'hybrid', _('Hybrid')
        ON_SITE = 'on_site', _('On-site')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    company = models.ForeignKey(
        'accounts.Company',
        on_delete=models.CASCADE,
        related_name='jobs'
    )
    posted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='posted_jobs'
    )
    title = models.CharField(max_length=200)
    description = models.TextField()
    department = models.CharField(max_length=100, blank=True)
    location = models.CharField(max_length=200, blank=True)
    job_type = models.CharField(max_length=20, choices=JobType.choices, default=JobType.FULL_TIME)
    work_type = models.CharField(max_length=20, choices=WorkType.choices, default=WorkType.ON_SITE)
    status = models.CharField(max_length=20, choices=JobStatus.choices, default=JobStatus.DRAFT)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Job')
        verbose_name_plural = _('Jobs')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.company})"


class Application(models.Model):
    """A candidate's application to a job."""

    class ApplicationStatus(models.TextChoices):
        SUBMITTED = 'submitted', _('Submitted')
        UNDER_REVIEW = 'under_review', _('Under Review')
        SHORTLISTED = 'shortlisted', _('Shortlisted')
        INTERVIEW_SCHEDULED = 'interview_scheduled', _('Interview Scheduled')
        INTERVIEWED = 'interviewed', _('Interviewed')
        OFFER_EXTENDED = 'offer_extended', _('Offer Extended')
        OFFER_ACCEPTED = 'offer_accepted', _('Offer Accepted')
        OFFER_DECLINED = 'offer_declined', _('Offer Declined')
        REJECTED = 'rejected', _('Rejected')
        WITHDRAWN = 'withdrawn', _('Withdrawn')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    applicant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='applications'
    )
    status = models.CharField(
        max_length=30,
        choices=ApplicationStatus.choices,
        default=ApplicationStatus.SUBMITTED,
        db_index=True
    )
    cover_letter = models.TextField(blank=True, validators=[MaxLengthValidator(2000)])

    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Application')
        verbose_name_plural = _('Applications')
        ordering = ['-applied_at']
        constraints = [
            models.UniqueConstraint(fields=['job', 'applicant'], name='unique_application_per_job'),
        ]

    def __str__(self):
        return f"{self.applicant} -> {self.job.title}"

    @property
    def company(self):
        return self.job.company

    def advance(self, to_status: str, from_statuses) -> bool:
        """Move to ``to_status`` only if currently in one of ``from_statuses``."""
        if self.status not in from_statuses:
            return False
        self.status = to_status
        self.save(update_fields=['status', 'updated_at'])
        return True


# =============================================================================
# INTERVIEWS
# =============================================================================

class Interview(models.Model):
    """
    Interview scheduling and lifecycle.

    Status moves scheduled -> confirmed -> in_progress -> completed, with
    cancelled and no_show as the other terminal states. ``rescheduled`` marks
    an interview whose time was moved and is otherwise treated like
    ``scheduled``. See ALLOWED_TRANSITIONS.
    """

    class InterviewStatus(models.TextChoices):
        SCHEDULED = 'scheduled', _('Scheduled')
        CONFIRMED = 'confirmed', _('Confirmed')
        IN_PROGRESS = 'in_progress', _('In Progress')
        COMPLETED = 'completed', _('Completed')
        CANCELLED = 'cancelled', _('Cancelled')
        RESCHEDULED = 'rescheduled', _('Rescheduled')
        NO_SHOW = 'no_show', _('No Show')

    class InterviewType(models.TextChoices):
        PHONE = 'phone', _('Phone')
        VIDEO = 'video', _('Video')
        IN_PERSON = 'in_person', _('In Person')
        TECHNICAL = 'technical', _('Technical')
        BEHAVIORAL = 'behavioral', _('Behavioral')
        PANEL = 'panel', _('Panel')

    # Statuses that hold the interviewer's time slot
    BOOKED_STATUSES = (
        InterviewStatus.SCHEDULED,
        InterviewStatus.CONFIRMED,
        InterviewStatus.RESCHEDULED,
    )
    # Statuses completed by the first feedback submission
    OPEN_STATUSES = BOOKED_STATUSES + (InterviewStatus.IN_PROGRESS,)
    # Excluded from every dashboard counter
    INACTIVE_STATUSES = (InterviewStatus.CANCELLED, InterviewStatus.NO_SHOW)

    ALLOWED_TRANSITIONS = {
        InterviewStatus.SCHEDULED: {
            InterviewStatus.CONFIRMED, InterviewStatus.IN_PROGRESS,
            InterviewStatus.COMPLETED, InterviewStatus.CANCELLED,
            InterviewStatus.RESCHEDULED, InterviewStatus.NO_SHOW,
        },
        InterviewStatus.CONFIRMED: {
            InterviewStatus.IN_PROGRESS, InterviewStatus.COMPLETED,
            InterviewStatus.CANCELLED, InterviewStatus.RESCHEDULED,
            InterviewStatus.NO_SHOW,
        },
        InterviewStatus.RESCHEDULED: {
            InterviewStatus.CONFIRMED, InterviewStatus.IN_PROGRESS,
            InterviewStatus.COMPLETED, InterviewStatus.CANCELLED,
            InterviewStatus.RESCHEDULED, InterviewStatus.NO_SHOW,
        },
        InterviewStatus.IN_PROGRESS: {
            InterviewStatus.COMPLETED, InterviewStatus.CANCELLED,
            InterviewStatus.NO_SHOW,
        },
        InterviewStatus.COMPLETED: set(),
        InterviewStatus.CANCELLED: set(),
        InterviewStatus.NO_SHOW: set(),
    }

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='interviews'
    )
    interviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='interviews_conducted'
    )
    scheduled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='interviews_scheduled'
    )

    # Scheduling
    scheduled_date = models.DateField()
    scheduled_time = models.CharField(max_length=5, validators=[CLOCK_VALIDATOR])
    scheduled_at = models.DateTimeField(
        editable=False,
        db_index=True,
        help_text=_('Absolute start time derived from date, time and company timezone')
    )
    duration = models.PositiveIntegerField(
        default=60,
        validators=[MinValueValidator(15), MaxValueValidator(480)],
        help_text=_('Duration in minutes')
    )
    interview_type = models.CharField(max_length=20, choices=InterviewType.choices)
    round = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])

    # Logistics
    location = models.CharField(max_length=500, blank=True)
    meeting_link = models.URLField(max_length=500, blank=True)
    notes = models.TextField(blank=True, validators=[MaxLengthValidator(1000)])
    meeting_details = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Platform, meeting id, passcode and dial-in details')
    )
    agenda = models.JSONField(default=list, blank=True)
    questions = models.JSONField(default=list, blank=True)

    # Lifecycle
    status = models.CharField(
        max_length=20,
        choices=InterviewStatus.choices,
        default=InterviewStatus.SCHEDULED,
        db_index=True
    )
    cancellation_reason = models.TextField(blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Interview')
        verbose_name_plural = _('Interviews')
        ordering = ['scheduled_at']
        indexes = [
            models.Index(fields=['interviewer', 'scheduled_at'], name='ats_iv_interviewer_at_idx'),
            models.Index(fields=['interviewer', 'status'], name='ats_iv_interviewer_st_idx'),
            models.Index(fields=['interviewer', '-updated_at'], name='ats_iv_interviewer_upd_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['interviewer', 'scheduled_date', 'scheduled_time'],
                condition=Q(status__in=['scheduled', 'confirmed', 'rescheduled']),
                name='unique_booked_interviewer_slot',
            ),
        ]

    def __str__(self):
        return f"Interview #{self.pk} ({self.get_status_display()}) {self.scheduled_date} {self.scheduled_time}"

    def save(self, *args, **kwargs):
        self.scheduled_at = self.compute_scheduled_at()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'scheduled_at'}
        super().save(*args, **kwargs)

    def compute_scheduled_at(self):
        tz = company_timezone(self.application.job.company)
        return combine_local(self.scheduled_date, parse_clock(self.scheduled_time), tz)

    @property
    def ends_at(self):
        return self.scheduled_at + timedelta(minutes=self.duration)

    @property
    def has_feedback(self):
        return hasattr(self, 'feedback')

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, set())


class InterviewFeedback(models.Model):
    """
    Interviewer assessment of one interview.

    Created once, then editable while within FEEDBACK_EDIT_WINDOW_HOURS of
    ``submitted_at``. ``submitted_at`` is never moved by edits.
    """

    class Recommendation(models.TextChoices):
        STRONGLY_RECOMMEND = 'strongly_recommend', _('Strongly Recommend')
        RECOMMEND = 'recommend', _('Recommend')
        NEUTRAL = 'neutral', _('Neutral')
        DO_NOT_RECOMMEND = 'do_not_recommend', _('Do Not Recommend')
        STRONGLY_DO_NOT_RECOMMEND = 'strongly_do_not_recommend', _('Strongly Do Not Recommend')

    interview = models.OneToOneField(
        Interview,
        on_delete=models.CASCADE,
        related_name='feedback'
    )
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='interview_feedback'
    )

    # Ratings (1-5)
    overall_rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    technical_skills = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    communication_skills = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    problem_solving = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    cultural_fit = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )

    strengths = models.JSONField(default=list, blank=True)
    weaknesses = models.JSONField(default=list, blank=True)
    recommendation = models.CharField(max_length=30, choices=Recommendation.choices)
    additional_notes = models.TextField(blank=True, validators=[MaxLengthValidator(2000)])

    submitted_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Interview Feedback')
        verbose_name_plural = _('Interview Feedback')
        ordering = ['-submitted_at']
        indexes = [
            models.Index(fields=['submitted_at'], name='ats_fb_submitted_idx'),
        ]

    def __str__(self):
        return f"Feedback for interview #{self.interview_id}: {self.get_recommendation_display()}"

    @property
    def edit_deadline(self):
        return self.submitted_at + timedelta(hours=settings.FEEDBACK_EDIT_WINDOW_HOURS)

    def is_editable(self, now=None) -> bool:
        return (now or timezone.now()) <= self.edit_deadline

    def hours_remaining(self, now=None) -> float:
        remaining = (self.edit_deadline - (now or timezone.now())).total_seconds() / 3600
        return round(max(remaining, 0), 1)


class InterviewReschedule(models.Model):
    """One entry of an interview's reschedule history. Rows are never removed."""

    interview = models.ForeignKey(
        Interview,
        on_delete=models.CASCADE,
        related_name='reschedule_history'
    )
    old_date = models.DateField()
    old_time = models.CharField(max_length=5)
    old_duration = models.PositiveIntegerField()
    new_date = models.DateField()
    new_time = models.CharField(max_length=5)
    new_duration = models.PositiveIntegerField()
    reason = models.CharField(max_length=500, blank=True)
    rescheduled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='+'
    )
    rescheduled_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _('Interview Reschedule')
        verbose_name_plural = _('Interview Reschedules')
        ordering = ['rescheduled_at', 'pk']

    def __str__(self):
        return f"#{self.interview_id}: {self.old_date} {self.old_time} -> {self.new_date} {self.new_time}"


class InterviewReminder(models.Model):
    """A reminder to send ahead of an interview."""

    class ReminderType(models.TextChoices):
        EMAIL = 'email', _('Email')
        SMS = 'sms', _('SMS')
        IN_APP = 'in_app', _('In-App')

    class Recipient(models.TextChoices):
        INTERVIEWER = 'interviewer', _('Interviewer')
        CANDIDATE = 'candidate', _('Candidate')
        BOTH = 'both', _('Both')

    interview = models.ForeignKey(
        Interview,
        on_delete=models.CASCADE,
        related_name='reminders'
    )
    reminder_type = models.CharField(max_length=10, choices=ReminderType.choices)
    recipient = models.CharField(max_length=15, choices=Recipient.choices, default=Recipient.BOTH)
    remind_at = models.DateTimeField(db_index=True)
    lead_minutes = models.PositiveIntegerField(help_text=_('Minutes before the interview'))
    sent = models.BooleanField(default=False)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _('Interview Reminder')
        verbose_name_plural = _('Interview Reminders')
        ordering = ['remind_at']

    def __str__(self):
        return f"{self.get_reminder_type_display()} reminder for #{self.interview_id} at {self.remind_at}"

    def mark_sent(self):
        self.sent = True
        self.sent_at = timezone.now()
        self.save(update_fields=['sent', 'sent_at'])


class PreparationMaterial(models.Model):
    """Material shared ahead of an interview."""

    interview = models.ForeignKey(
        Interview,
        on_delete=models.CASCADE,
        related_name='preparation_materials'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    file_url = models.URLField(max_length=500, blank=True)
    is_visible_to_candidate = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Preparation Material')
        verbose_name_plural = _('Preparation Materials')
        ordering = ['created_at']

    def __str__(self):
        return self.title
