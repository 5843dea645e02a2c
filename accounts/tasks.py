"""
Celery Tasks for Accounts

- Purging of expired pending registrations and verification tokens
"""

import logging

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name='accounts.tasks.purge_expired_registrations',
    max_retries=3,
    default_retry_delay=300,
    autoretry_for=(Exception,),
    retry_backoff=True,
)
def purge_expired_registrations(self):
    """
    Delete pending registrations and verification tokens past ``expires_at``.

    Returns:
        dict: Number of rows deleted per model.
    """
    from accounts.models import PendingRegistration, VerificationToken

    now = timezone.now()

    registrations, _ = PendingRegistration.objects.filter(expires_at__lte=now).delete()
    tokens, _ = VerificationToken.objects.filter(expires_at__lte=now).delete()

    logger.info(
        "Purged %s expired pending registrations and %s verification tokens",
        registrations, tokens
    )

    return {
        'status': 'success',
        'pending_registrations': registrations,
        'verification_tokens': tokens,
        'timestamp': now.isoformat(),
    }
