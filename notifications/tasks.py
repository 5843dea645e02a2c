"""
Celery Tasks for Notifications

- Purging of read notifications past the retention period
"""

import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name='notifications.tasks.purge_read_notifications',
    max_retries=3,
    default_retry_delay=300,
    autoretry_for=(Exception,),
    retry_backoff=True,
)
def purge_read_notifications(self):
    """
    Delete notifications read more than NOTIFICATION_READ_RETENTION_DAYS ago.

    Unread notifications are kept regardless of age.

    Returns:
        dict: Number of notifications deleted.
    """
    from notifications.models import Notification

    now = timezone.now()
    cutoff = now - timedelta(days=settings.NOTIFICATION_READ_RETENTION_DAYS)

    deleted, _ = Notification.objects.filter(is_read=True, read_at__lt=cutoff).delete()

    logger.info("Purged %s notifications read before %s", deleted, cutoff.isoformat())

    return {
        'status': 'success',
        'deleted': deleted,
        'timestamp': now.isoformat(),
    }
