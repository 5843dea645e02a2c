"""
Celery Tasks for ATS (Applicant Tracking System) App

This module contains periodic tasks for interviews:
- Delivery of due interview reminders
"""

import logging
from smtplib import SMTPException

from celery import shared_task
from celery.exceptions import SoftTimeLimitExceeded
from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

logger = logging.getLogger(__name__)

REMINDER_BATCH_SIZE = 200


# ==================== INTERVIEW REMINDERS ====================

@shared_task(
    bind=True,
    name='ats.tasks.send_due_interview_reminders',
    max_retries=3,
    default_retry_delay=60,
    soft_time_limit=300,
)
def send_due_interview_reminders(self):
    """
    Deliver unsent reminders whose ``remind_at`` has passed.

    Only reminders of interviews that still hold a booked slot are
    processed. Email reminders go out through Django's mail backend, in-app
    reminders become notifications and SMS reminders are only recorded.
    A reminder whose email fails stays unsent and is retried on the next run.

    Returns:
        dict: Counts of sent and failed reminders.
    """
    from ats.models import Interview, InterviewReminder
    from notifications.services import InterviewNotifications

    now = timezone.now()

    reminders = InterviewReminder.objects.filter(
        sent=False,
        remind_at__lte=now,
        interview__status__in=Interview.BOOKED_STATUSES,
        interview__scheduled_at__gt=now,
    ).select_related(
        'interview__interviewer',
        'interview__application__applicant',
        'interview__application__job',
    ).order_by('remind_at')[:REMINDER_BATCH_SIZE]

    sent = 0
    failed = 0

    try:
        for reminder in reminders:
            if reminder.reminder_type == InterviewReminder.ReminderType.EMAIL:
                try:
                    _email_reminder(reminder)
                except (SMTPException, OSError):
                    logger.exception("Failed to email reminder %s", reminder.pk)
                    failed += 1
                    continue
            elif reminder.reminder_type == InterviewReminder.ReminderType.IN_APP:
                InterviewNotifications.reminder(reminder.interview, _reminder_users(reminder))
            else:
                # No SMS gateway; the reminder is only recorded
                logger.info(
                    "Recorded %s reminder %s for interview %s",
                    reminder.reminder_type, reminder.pk, reminder.interview_id
                )

            reminder.mark_sent()
            sent += 1

    except SoftTimeLimitExceeded:
        logger.warning("Interview reminder delivery exceeded soft time limit after %s reminders", sent)
        raise

    logger.info("Interview reminders: %s sent, %s failed", sent, failed)

    return {
        'status': 'success',
        'sent': sent,
        'failed': failed,
        'timestamp': now.isoformat(),
    }


def _reminder_users(reminder):
    from ats.models import InterviewReminder

    interview = reminder.interview
    users = []
    if reminder.recipient in (InterviewReminder.Recipient.INTERVIEWER, InterviewReminder.Recipient.BOTH):
        users.append(interview.interviewer)
    if reminder.recipient in (InterviewReminder.Recipient.CANDIDATE, InterviewReminder.Recipient.BOTH):
        users.append(interview.application.applicant)
    return users


def _email_reminder(reminder):
    interview = reminder.interview
    job_title = interview.application.job.title
    recipients = [user.email for user in _reminder_users(reminder) if user.email]
    if not recipients:
        return

    send_mail(
        subject=f"Interview reminder: {job_title}",
        message=(
            f"Your {interview.get_interview_type_display().lower()} interview for {job_title} "
            f"is scheduled on {interview.scheduled_date:%Y-%m-%d} at {interview.scheduled_time} "
            f"({interview.duration} minutes)."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=recipients,
        fail_silently=False,
    )
