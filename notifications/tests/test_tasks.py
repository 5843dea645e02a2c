"""
Tests for notifications Celery tasks.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from notifications.models import Notification
from notifications.tasks import purge_read_notifications


@pytest.mark.django_db
class TestPurgeReadNotifications:

    def test_deletes_only_old_read_notifications(self, settings, notification_factory):
        settings.NOTIFICATION_READ_RETENTION_DAYS = 30
        now = timezone.now()
        old_read = notification_factory(is_read=True, read_at=now - timedelta(days=31))
        recent_read = notification_factory(is_read=True, read_at=now - timedelta(days=29))
        old_unread = notification_factory()
        Notification.objects.filter(pk=old_unread.pk).update(created_at=now - timedelta(days=90))

        result = purge_read_notifications()

        assert result['status'] == 'success'
        assert result['deleted'] == 1
        remaining = set(Notification.objects.values_list('pk', flat=True))
        assert remaining == {recent_read.pk, old_unread.pk}
        assert old_read.pk not in remaining

    def test_nothing_to_purge(self, notification_factory):
        notification_factory()

        assert purge_read_notifications()['deleted'] == 0
