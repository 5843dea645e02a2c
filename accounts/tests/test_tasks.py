"""
Tests for accounts Celery tasks.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from accounts.models import PendingRegistration, VerificationToken
from accounts.tasks import purge_expired_registrations


@pytest.mark.django_db
class TestPurgeExpiredRegistrations:

    def test_deletes_only_expired_rows(self):
        now = timezone.now()
        PendingRegistration.objects.create(
            email='old@example.com',
            registration_type=PendingRegistration.RegistrationType.APPLICANT,
            expires_at=now - timedelta(minutes=1),
        )
        PendingRegistration.objects.create(
            email='fresh@example.com',
            registration_type=PendingRegistration.RegistrationType.APPLICANT,
        )
        VerificationToken.objects.create(
            email='old@example.com', code_hash='x', expires_at=now - timedelta(hours=1)
        )
        VerificationToken.objects.create(
            email='fresh@example.com', code_hash='y', expires_at=now + timedelta(hours=1)
        )

        result = purge_expired_registrations()

        assert result['status'] == 'success'
        assert result['pending_registrations'] == 1
        assert result['verification_tokens'] == 1
        assert list(PendingRegistration.objects.values_list('email', flat=True)) == ['fresh@example.com']
        assert list(VerificationToken.objects.values_list('email', flat=True)) == ['fresh@example.com']

    def test_nothing_to_purge(self):
        result = purge_expired_registrations()

        assert result['pending_registrations'] == 0
        assert result['verification_tokens'] == 0
