"""
Notification Models - in-app notifications for HR users, interviewers and
applicants.

Notifications are written alongside the interview or application change
that triggers them and read over the REST API. Read notifications are purged
after NOTIFICATION_READ_RETENTION_DAYS by notifications.tasks.
"""

import uuid

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    A single in-app notification for one recipient.
    """

    class NotificationType(models.TextChoices):
        INTERVIEW_SCHEDULED = 'interview_scheduled', _('Interview Scheduled')
        INTERVIEW_RESCHEDULED = 'interview_rescheduled', _('Interview Rescheduled')
        INTERVIEW_CANCELLED = 'interview_cancelled', _('Interview Cancelled')
        INTERVIEW_REMINDER = 'interview_reminder', _('Interview Reminder')
        APPLICATION_STATUS_CHANGED = 'application_status_changed', _('Application Status Changed')
        SYSTEM = 'system', _('System')

    class Priority(models.TextChoices):
        LOW = 'low', _('Low')
        MEDIUM = 'medium', _('Medium')
        HIGH = 'high', _('High')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        help_text=_("User who receives this notification")
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_notifications',
        help_text=_("User whose action triggered this notification")
    )

    notification_type = models.CharField(
        max_length=50,
        choices=NotificationType.choices,
        default=NotificationType.SYSTEM,
        db_index=True
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    action_url = models.CharField(max_length=500, blank=True)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.LOW)

    # Values rendered into the message, kept for clients that format their own
    context_data = models.JSONField(default=dict, blank=True)

    # Generic relation to the interview or application concerned
    content_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        null=True,
        blank=True
    )
    object_id = models.PositiveBigIntegerField(null=True, blank=True)
    content_object = GenericForeignKey('content_type', 'object_id')

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', '-created_at'], name='notificatio_recipie_3b1f0d_idx'),
            models.Index(fields=['recipient', 'is_read'], name='notificatio_recipie_8c4a2e_idx'),
        ]
        verbose_name = _('Notification')
        verbose_name_plural = _('Notifications')

    def __str__(self):
        return f"{self.notification_type}: {self.title} -> {self.recipient}"

    def mark_as_read(self):
        """Mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=['is_read', 'read_at', 'updated_at'])
