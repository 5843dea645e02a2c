"""
Management command that blocks until the database accepts connections.

Container entry points run it before `migrate` so that the web process does
not crash while PostgreSQL is still starting. Every attempt is logged; the
retry policy comes from DB_MAX_RETRIES / DB_RETRY_DELAY_MS.
"""

import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import connections
from django.db.utils import OperationalError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Wait for the database to become available, retrying with a fixed delay'

    def add_arguments(self, parser):
        parser.add_argument(
            '--database',
            default='default',
            help='Database alias to check (default: default)'
        )
        parser.add_argument(
            '--max-retries',
            type=int,
            default=None,
            help='Maximum attempts, 0 retries forever (default: DB_MAX_RETRIES)'
        )
        parser.add_argument(
            '--delay-ms',
            type=int,
            default=None,
            help='Delay between attempts in milliseconds (default: DB_RETRY_DELAY_MS)'
        )

    def handle(self, *args, **options):
        alias = options['database']
        max_retries = options['max_retries']
        if max_retries is None:
            max_retries = getattr(settings, 'DB_MAX_RETRIES', 0)
        delay_ms = options['delay_ms']
        if delay_ms is None:
            delay_ms = getattr(settings, 'DB_RETRY_DELAY_MS', 5000)

        attempt = 0
        while True:
            attempt += 1
            limit = max_retries if max_retries > 0 else 'inf'
            logger.info("Database connection attempt %s/%s", attempt, limit)
            try:
                self._check_database(alias)
            except OperationalError as e:
                logger.warning("Database connection attempt %s failed: %s", attempt, e)
                if max_retries and attempt >= max_retries:
                    raise CommandError(
                        f"Database '{alias}' unavailable after {attempt} attempts"
                    ) from e
                self.stdout.write(self.style.WARNING(
                    f"Database unavailable, retrying in {delay_ms} ms..."
                ))
                time.sleep(delay_ms / 1000)
                continue

            logger.info("Database connection established after %s attempt(s)", attempt)
            self.stdout.write(self.style.SUCCESS('Database available'))
            return

    def _check_database(self, alias):
        connection = connections[alias]
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
