"""
Notification Services - creation and bookkeeping of in-app notifications

This module provides:
- NotificationService: create notifications, unread counts, mark all read
- InterviewNotifications: the notifications raised by interview and
  application lifecycle events

Notifications are created inside the caller's transaction, so a rolled back
schedule or status change leaves no notification behind.
"""

import logging
from typing import Any, Dict, List

from django.contrib.contenttypes.models import ContentType
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .models import Notification

logger = logging.getLogger(__name__)

NotificationType = Notification.NotificationType
Priority = Notification.Priority

INTERVIEWER_INTERVIEWS_URL = '/interviewer/interviews'
APPLICANT_APPLICATIONS_URL = '/applicant/applications'

APPLICATION_STATUS_MESSAGES = {
    'under_review': _('Your application is now under review'),
    'shortlisted': _('Congratulations! You have been shortlisted'),
    'interview_scheduled': _('Your interview has been scheduled'),
    'interviewed': _('Your interview has been completed'),
    'offer_extended': _('Congratulations! You have received a job offer'),
    'offer_accepted': _('Your offer acceptance has been confirmed'),
    'offer_declined': _('Your offer declination has been recorded'),
    'rejected': _('Your application status has been updated'),
}
HIGH_PRIORITY_APPLICATION_STATUSES = ('shortlisted', 'offer_extended')


class NotificationService:
    """Creation and read-state management of in-app notifications."""

    @staticmethod
    def notify(
        recipient,
        notification_type: str,
        title: str,
        message: str,
        sender=None,
        action_url: str = '',
        priority: str = Priority.LOW,
        related_object=None,
        context: Dict[str, Any] = None,
    ) -> Notification:
        """
        Create a notification for ``recipient``.

        Args:
            recipient: User receiving the notification
            notification_type: One of Notification.NotificationType
            title: Short heading
            message: Full text shown to the user
            sender: User whose action triggered it, if any
            action_url: Client route the notification links to
            priority: One of Notification.Priority
            related_object: Interview or Application the notification is about
            context: JSON-serializable values used in the message

        Returns:
            The saved Notification
        """
        notification = Notification(
            recipient=recipient,
            sender=sender,
            notification_type=notification_type,
            title=str(title),
            message=str(message),
            action_url=action_url,
            priority=priority,
            context_data=context or {},
        )
        if related_object is not None:
            notification.content_type = ContentType.objects.get_for_model(related_object)
            notification.object_id = related_object.pk
        notification.save()

        logger.info(
            "Notification %s (%s) created for user %s",
            notification.pk, notification_type, recipient.pk
        )
        return notification

    @staticmethod
    def get_unread_count(user) -> int:
        """Get the count of unread notifications for a user."""
        return Notification.objects.filter(recipient=user, is_read=False).count()

    @staticmethod
    def mark_all_as_read(user) -> int:
        """Mark all notifications as read for a user."""
        now = timezone.now()
        return Notification.objects.filter(recipient=user, is_read=False).update(
            is_read=True,
            read_at=now,
            updated_at=now,
        )


def _slot_context(interview) -> Dict[str, Any]:
    return {
        'scheduled_date': str(interview.scheduled_date),
        'scheduled_time': interview.scheduled_time,
        'duration': interview.duration,
        'job_title': interview.application.job.title,
        'candidate_name': interview.application.applicant.get_full_name(),
    }


class InterviewNotifications:
    """
    Notifications raised by interview lifecycle events.

    Interview events notify both the interviewer and the applicant;
    application status changes notify the applicant.
    """

    @staticmethod
    def scheduled(interview, sender=None) -> List[Notification]:
        context = _slot_context(interview)
        return [
            NotificationService.notify(
                interview.interviewer,
                NotificationType.INTERVIEW_SCHEDULED,
                _('Interview Scheduled'),
                _('Interview scheduled on %(scheduled_date)s at %(scheduled_time)s for %(job_title)s') % context,
                sender=sender,
                action_url=INTERVIEWER_INTERVIEWS_URL,
                priority=Priority.MEDIUM,
                related_object=interview,
                context=context,
            ),
            NotificationService.notify(
                interview.application.applicant,
                NotificationType.INTERVIEW_SCHEDULED,
                _('Interview Scheduled'),
                _('Your interview for %(job_title)s is scheduled on %(scheduled_date)s at %(scheduled_time)s') % context,
                sender=sender,
                action_url=APPLICANT_APPLICATIONS_URL,
                priority=Priority.MEDIUM,
                related_object=interview,
                context=context,
            ),
        ]

    @staticmethod
    def rescheduled(interview, sender=None) -> List[Notification]:
        context = _slot_context(interview)
        return [
            NotificationService.notify(
                interview.interviewer,
                NotificationType.INTERVIEW_RESCHEDULED,
                _('Interview Rescheduled'),
                _('Interview rescheduled to %(scheduled_date)s at %(scheduled_time)s') % context,
                sender=sender,
                action_url=INTERVIEWER_INTERVIEWS_URL,
                priority=Priority.LOW,
                related_object=interview,
                context=context,
            ),
            NotificationService.notify(
                interview.application.applicant,
                NotificationType.INTERVIEW_RESCHEDULED,
                _('Interview Rescheduled'),
                _('Your interview for %(job_title)s has moved to %(scheduled_date)s at %(scheduled_time)s') % context,
                sender=sender,
                action_url=APPLICANT_APPLICATIONS_URL,
                priority=Priority.MEDIUM,
                related_object=interview,
                context=context,
            ),
        ]

    @staticmethod
    def cancelled(interview, sender=None) -> List[Notification]:
        context = {**_slot_context(interview), 'reason': interview.cancellation_reason}
        return [
            NotificationService.notify(
                interview.interviewer,
                NotificationType.INTERVIEW_CANCELLED,
                _('Interview Cancelled'),
                _('Interview with %(candidate_name)s on %(scheduled_date)s at %(scheduled_time)s '
                  'has been cancelled') % context,
                sender=sender,
                action_url=INTERVIEWER_INTERVIEWS_URL,
                priority=Priority.MEDIUM,
                related_object=interview,
                context=context,
            ),
            NotificationService.notify(
                interview.application.applicant,
                NotificationType.INTERVIEW_CANCELLED,
                _('Interview Cancelled'),
                _('Your interview for %(job_title)s on %(scheduled_date)s at %(scheduled_time)s '
                  'has been cancelled') % context,
                sender=sender,
                action_url=APPLICANT_APPLICATIONS_URL,
                priority=Priority.MEDIUM,
                related_object=interview,
                context=context,
            ),
        ]

    @staticmethod
    def reminder(interview, recipients) -> List[Notification]:
        """In-app reminder of an upcoming interview for each of ``recipients``."""
        context = _slot_context(interview)
        notifications = []
        for user in recipients:
            is_interviewer = user.pk == interview.interviewer_id
            notifications.append(NotificationService.notify(
                user,
                NotificationType.INTERVIEW_REMINDER,
                _('Interview Reminder'),
                _('Reminder: interview for %(job_title)s on %(scheduled_date)s at %(scheduled_time)s') % context,
                action_url=INTERVIEWER_INTERVIEWS_URL if is_interviewer else APPLICANT_APPLICATIONS_URL,
                priority=Priority.HIGH,
                related_object=interview,
                context=context,
            ))
        return notifications

    @staticmethod
    def application_status_changed(application, old_status: str, sender=None) -> Notification:
        new_status = application.status
        return NotificationService.notify(
            application.applicant,
            NotificationType.APPLICATION_STATUS_CHANGED,
            _('Application Status Updated'),
            APPLICATION_STATUS_MESSAGES.get(
                new_status,
                _('Your application status has been updated to %(status)s') % {'status': new_status}
            ),
            sender=sender,
            action_url=f'{APPLICANT_APPLICATIONS_URL}/{application.pk}',
            priority=Priority.HIGH if new_status in HIGH_PRIORITY_APPLICATION_STATUSES else Priority.MEDIUM,
            related_object=application,
            context={
                'job_title': application.job.title,
                'old_status': old_status,
                'new_status': new_status,
            },
        )
