"""
ATS Interview Lifecycle - Business Logic Layer

This module owns every write to an interview's status:

- schedule: create an interview in a free interviewer slot
- reschedule: move an interview, recording one history entry
- cancel / change_status: HR status changes validated against
  Interview.ALLOWED_TRANSITIONS
- submit_feedback: create or edit interviewer feedback, completing the
  interview on first submission
- make_hiring_decision: the Application-level outcome of a completed,
  fed-back interview

Every operation returns a ServiceResult; failures carry a human-readable
message and a machine-readable ``error_code`` and leave the database
untouched. Successful operations notify the interviewer and the applicant
in-app.

Bookings for one interviewer are serialized on the interviewer's user row:
schedule and reschedule lock it before any interview row.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.services import ServiceResult
from core.timezones import combine_local, company_timezone, parse_clock
from notifications.services import InterviewNotifications

from .models import (
    Application, Interview, InterviewFeedback, InterviewReminder, InterviewReschedule
)
from .scheduling import TimeSlot, find_conflict, lock_interviewer_calendar

logger = logging.getLogger(__name__)

Status = Interview.InterviewStatus
AppStatus = Application.ApplicationStatus

# (reminder type, recipient, minutes before the interview)
DEFAULT_REMINDERS = (
    (InterviewReminder.ReminderType.EMAIL, InterviewReminder.Recipient.BOTH, 24 * 60),
    (InterviewReminder.ReminderType.IN_APP, InterviewReminder.Recipient.BOTH, 60),
)

FEEDBACK_FIELDS = (
    'overall_rating', 'technical_skills', 'communication_skills',
    'problem_solving', 'cultural_fit', 'strengths', 'weaknesses',
    'recommendation', 'additional_notes',
)

HIRING_DECISIONS = (AppStatus.OFFER_EXTENDED, AppStatus.REJECTED)
DECIDED_STATUSES = (
    AppStatus.OFFER_EXTENDED, AppStatus.OFFER_ACCEPTED, AppStatus.OFFER_DECLINED,
    AppStatus.REJECTED, AppStatus.WITHDRAWN,
)


def _failure(message, error_code, **errors) -> ServiceResult:
    return ServiceResult(success=False, message=str(message), errors=errors, error_code=error_code)


def _start_moment(application: Application, scheduled_date: date, scheduled_time: str):
    tz = company_timezone(application.job.company)
    return combine_local(scheduled_date, parse_clock(scheduled_time), tz)


def _advance_application(application: Application, to_status: str, from_statuses, sender=None) -> bool:
    old_status = application.status
    advanced = application.advance(to_status, from_statuses)
    if advanced:
        InterviewNotifications.application_status_changed(application, old_status, sender=sender)
    return advanced


def _ensure_slot_still_free(interview: Interview, slot: TimeSlot) -> None:
    # Raised inside the savepoint so the write is rolled back
    clash = find_conflict(interview.interviewer, slot, exclude_pk=interview.pk)
    if clash is not None:
        raise IntegrityError(f"Interview {interview.pk} overlaps interview {clash.pk}")


class InterviewLifecycleService:
    """State transitions of an Interview and their side effects."""

    # ==================== SCHEDULING ====================

    @staticmethod
    @transaction.atomic
    def schedule(
        application: Application,
        interviewer,
        scheduled_by,
        scheduled_date: date,
        scheduled_time: str,
        interview_type: str,
        duration: int = 60,
        round: int = 1,
        **details: Any
    ) -> ServiceResult:
        """
        Schedule an interview.

        Args:
            application: Application being interviewed (caller's company)
            interviewer: Active interviewer of the same company
            scheduled_by: HR user performing the action
            scheduled_date: Company-local calendar date
            scheduled_time: Company-local "HH:MM"
            interview_type: One of Interview.InterviewType
            duration: Minutes (15-480)
            round: Interview round, 1-based
            **details: location, meeting_link, notes, meeting_details,
                agenda, questions

        Returns:
            ServiceResult whose data is the new Interview
        """
        start = _start_moment(application, scheduled_date, scheduled_time)
        if start <= timezone.now():
            return _failure(
                _('Interview date and time must be in the future'),
                'INVALID_SCHEDULE',
                scheduled_date=['Must be in the future']
            )

        lock_interviewer_calendar(interviewer.pk)
        slot = TimeSlot.starting(start, duration)
        conflict = find_conflict(interviewer, slot, lock=True)
        if conflict is not None:
            logger.warning(
                "Slot conflict for interviewer %s at %s (existing interview %s)",
                interviewer.pk, start.isoformat(), conflict.pk
            )
            return _failure(_('Interviewer is not available at the scheduled time'), 'SLOT_CONFLICT')

        try:
            with transaction.atomic():
                interview = Interview.objects.create(
                    application=application,
                    interviewer=interviewer,
                    scheduled_by=scheduled_by,
                    scheduled_date=scheduled_date,
                    scheduled_time=scheduled_time,
                    duration=duration,
                    interview_type=interview_type,
                    round=round,
                    status=Status.SCHEDULED,
                    **details
                )
                _ensure_slot_still_free(interview, slot)
        except IntegrityError:
            logger.warning(
                "Concurrent booking detected for interviewer %s at %s %s",
                interviewer.pk, scheduled_date, scheduled_time
            )
            return _failure(_('Interviewer is not available at the scheduled time'), 'SLOT_CONFLICT')

        InterviewLifecycleService._create_default_reminders(interview)
        InterviewNotifications.scheduled(interview, sender=scheduled_by)
        _advance_application(
            application, AppStatus.SHORTLISTED, (AppStatus.SUBMITTED, AppStatus.UNDER_REVIEW),
            sender=scheduled_by
        )

        logger.info(
            "Interview %s scheduled for application %s with interviewer %s at %s",
            interview.pk, application.pk, interviewer.pk, interview.scheduled_at.isoformat()
        )
        return ServiceResult(success=True, message=str(_('Interview scheduled successfully')), data=interview)

    @staticmethod
    def _create_default_reminders(interview: Interview) -> None:
        now = timezone.now()
        for reminder_type, recipient, lead in DEFAULT_REMINDERS:
            remind_at = interview.scheduled_at - timedelta(minutes=lead)
            if remind_at > now:
                InterviewReminder.objects.create(
                    interview=interview,
                    reminder_type=reminder_type,
                    recipient=recipient,
                    remind_at=remind_at,
                    lead_minutes=lead,
                )

    @staticmethod
    @transaction.atomic
    def reschedule(
        interview: Interview,
        user,
        scheduled_date: date,
        scheduled_time: str,
        duration: int = None,
        reason: str = '',
        **details: Any
    ) -> ServiceResult:
        """
        Move an interview to a new date/time.

        Appends exactly one InterviewReschedule row, overwrites date, time and
        duration, sets status to ``rescheduled`` and rebuilds unsent reminders.
        ``details`` (interview_type, location, meeting_link, notes) are saved
        with the move.
        """
        lock_interviewer_calendar(interview.interviewer_id)
        interview = Interview.objects.select_for_update().select_related(
            'application__job__company'
        ).get(pk=interview.pk)

        if not interview.can_transition_to(Status.RESCHEDULED):
            return _failure(
                _('Cannot reschedule a %(status)s interview') % {'status': interview.get_status_display().lower()},
                'INVALID_STATE',
                status=[interview.status]
            )

        duration = duration or interview.duration
        start = _start_moment(interview.application, scheduled_date, scheduled_time)
        if start <= timezone.now():
            return _failure(
                _('Interview date and time must be in the future'),
                'INVALID_SCHEDULE',
                scheduled_date=['Must be in the future']
            )

        slot = TimeSlot.starting(start, duration)
        conflict = find_conflict(interview.interviewer, slot, exclude_pk=interview.pk, lock=True)
        if conflict is not None:
            return _failure(_('Interviewer is not available at the scheduled time'), 'SLOT_CONFLICT')

        history = InterviewReschedule(
            interview=interview,
            old_date=interview.scheduled_date,
            old_time=interview.scheduled_time,
            old_duration=interview.duration,
            new_date=scheduled_date,
            new_time=scheduled_time,
            new_duration=duration,
            reason=reason or 'HR reschedule',
            rescheduled_by=user,
        )

        interview.scheduled_date = scheduled_date
        interview.scheduled_time = scheduled_time
        interview.duration = duration
        interview.status = Status.RESCHEDULED
        for field, value in details.items():
            setattr(interview, field, value)
        try:
            with transaction.atomic():
                interview.save(update_fields=[
                    'scheduled_date', 'scheduled_time', 'duration', 'status', 'updated_at',
                    *details.keys()
                ])
                _ensure_slot_still_free(interview, slot)
        except IntegrityError:
            return _failure(_('Interviewer is not available at the scheduled time'), 'SLOT_CONFLICT')
        history.save()

        interview.reminders.filter(sent=False).delete()
        InterviewLifecycleService._create_default_reminders(interview)
        InterviewNotifications.rescheduled(interview, sender=user)

        logger.info(
            "Interview %s rescheduled from %s %s to %s %s",
            interview.pk, history.old_date, history.old_time, scheduled_date, scheduled_time
        )
        return ServiceResult(success=True, message=str(_('Interview rescheduled successfully')), data=interview)

    # ==================== STATUS CHANGES ====================

    @staticmethod
    def cancel(interview: Interview, reason: str = '', changed_by=None) -> ServiceResult:
        """Cancel a non-terminal interview."""
        return InterviewLifecycleService.change_status(
            interview, Status.CANCELLED, reason=reason, changed_by=changed_by
        )

    @staticmethod
    @transaction.atomic
    def change_status(
        interview: Interview,
        new_status: str,
        reason: str = '',
        notes: str = None,
        changed_by=None
    ) -> ServiceResult:
        """
        Move an interview to ``new_status`` if the transition is allowed.

        cancelled stamps cancelled_at, stores the reason and notifies both
        participants; completed stamps completed_at and advances the
        application to ``interviewed``.
        """
        interview = Interview.objects.select_for_update().select_related(
            'application__job__company'
        ).get(pk=interview.pk)
        old_status = interview.status

        if not interview.can_transition_to(new_status):
            logger.warning(
                "Rejected status change for interview %s: %s -> %s",
                interview.pk, old_status, new_status
            )
            return _failure(
                _('Cannot change interview status from %(old)s to %(new)s') % {
                    'old': old_status, 'new': new_status
                },
                'INVALID_STATE',
                status=[old_status]
            )

        now = timezone.now()
        interview.status = new_status
        update_fields = ['status', 'updated_at']

        if notes:
            interview.notes = notes
            update_fields.append('notes')

        if new_status == Status.CANCELLED:
            interview.cancellation_reason = reason
            interview.cancelled_at = now
            update_fields += ['cancellation_reason', 'cancelled_at']
        elif new_status == Status.COMPLETED:
            interview.completed_at = now
            update_fields.append('completed_at')

        interview.save(update_fields=update_fields)

        if new_status == Status.CANCELLED:
            InterviewNotifications.cancelled(interview, sender=changed_by)
        elif new_status == Status.COMPLETED:
            InterviewLifecycleService._on_completed(interview, sender=changed_by)

        logger.info("Interview %s status changed %s -> %s", interview.pk, old_status, new_status)
        return ServiceResult(
            success=True,
            message=str(_('Interview status updated from %(old)s to %(new)s') % {
                'old': old_status, 'new': new_status
            }),
            data=interview
        )

    @staticmethod
    def _on_completed(interview: Interview, sender=None) -> None:
        _advance_application(
            interview.application,
            AppStatus.INTERVIEWED,
            (AppStatus.SHORTLISTED, AppStatus.INTERVIEW_SCHEDULED),
            sender=sender
        )

    # ==================== FEEDBACK ====================

    @staticmethod
    @transaction.atomic
    def submit_feedback(interview: Interview, interviewer, data: Dict[str, Any]) -> ServiceResult:
        """
        Create or edit the interviewer's feedback.

        Rules:
        - only by the interviewer assigned to the interview
        - not before the interview's start time
        - not for cancelled or no-show interviews
        - edits only within FEEDBACK_EDIT_WINDOW_HOURS of first submission;
          submitted_at is preserved
        - the first submission completes a scheduled, confirmed, rescheduled
          or in-progress interview

        The interview row is locked so concurrent submissions serialize.
        """
        interview = Interview.objects.select_for_update().select_related(
            'application__job__company'
        ).get(pk=interview.pk)
        now = timezone.now()

        if interview.interviewer_id != interviewer.pk:
            logger.warning(
                "User %s tried to submit feedback for interview %s assigned to %s",
                interviewer.pk, interview.pk, interview.interviewer_id
            )
            return _failure(_('Only the assigned interviewer can submit feedback'), 'PERMISSION_DENIED')

        if now < interview.scheduled_at:
            return _failure(_('Cannot submit feedback before interview takes place'), 'FEEDBACK_TOO_EARLY')

        if interview.status in Interview.INACTIVE_STATUSES:
            return _failure(
                _('Cannot submit feedback for a %(status)s interview') % {
                    'status': interview.get_status_display().lower()
                },
                'INVALID_STATE',
                status=[interview.status]
            )

        feedback = InterviewFeedback.objects.filter(interview=interview).first()
        if feedback is not None and not feedback.is_editable(now):
            return _failure(_('Feedback edit window (48h) has expired'), 'FEEDBACK_WINDOW_EXPIRED')

        values = {field: data[field] for field in FEEDBACK_FIELDS if field in data}
        created = feedback is None
        if created:
            feedback = InterviewFeedback.objects.create(
                interview=interview,
                submitted_by=interviewer,
                submitted_at=now,
                **values
            )
        else:
            for field, value in values.items():
                setattr(feedback, field, value)
            feedback.save()

        if interview.status in Interview.OPEN_STATUSES:
            interview.status = Status.COMPLETED
            interview.completed_at = now
            interview.save(update_fields=['status', 'completed_at', 'updated_at'])
            InterviewLifecycleService._on_completed(interview, sender=interviewer)
        else:
            # Keeps the interview at the top of the recent-activity feed
            interview.save(update_fields=['updated_at'])

        logger.info(
            "Feedback %s for interview %s by interviewer %s",
            'submitted' if created else 'updated', interview.pk, interviewer.pk
        )
        return ServiceResult(
            success=True,
            message=str(_('Feedback submitted successfully') if created else _('Feedback updated successfully')),
            data=interview
        )

    # ==================== HIRING DECISION ====================

    @staticmethod
    @transaction.atomic
    def make_hiring_decision(application: Application, decision: str, decided_by) -> ServiceResult:
        """
        Extend an offer to, or reject, an interviewed candidate.

        Requires at least one completed interview with feedback.
        """
        application = Application.objects.select_for_update().get(pk=application.pk)

        if decision not in HIRING_DECISIONS:
            return _failure(_('Decision must be offer_extended or rejected'), 'VALIDATION_ERROR',
                            decision=[decision])

        if application.status in DECIDED_STATUSES:
            return _failure(
                _('A decision has already been recorded for this application'),
                'INVALID_STATE',
                status=[application.status]
            )

        has_assessment = application.interviews.filter(
            status=Status.COMPLETED,
            feedback__isnull=False
        ).exists()
        if not has_assessment:
            return _failure(
                _('A completed interview with feedback is required before a hiring decision'),
                'INVALID_STATE'
            )

        old_status = application.status
        application.status = decision
        application.save(update_fields=['status', 'updated_at'])
        InterviewNotifications.application_status_changed(application, old_status, sender=decided_by)

        logger.info(
            "Hiring decision %s recorded for application %s by user %s",
            decision, application.pk, getattr(decided_by, 'pk', None)
        )
        return ServiceResult(success=True, message=str(_('Hiring decision recorded')), data=application)
