"""
Tests for the wait_for_db management command.
"""

from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db.utils import OperationalError

from hirewise.management.commands.wait_for_db import Command


@pytest.mark.django_db
class TestWaitForDb:

    def test_returns_when_database_is_up(self):
        out = StringIO()
        call_command('wait_for_db', max_retries=1, stdout=out)
        assert 'Database available' in out.getvalue()

    @patch('hirewise.management.commands.wait_for_db.time.sleep')
    def test_retries_then_succeeds(self, mock_sleep):
        out = StringIO()
        with patch.object(Command, '_check_database', side_effect=[OperationalError('down'), None]) as check:
            call_command('wait_for_db', max_retries=3, delay_ms=250, stdout=out)

        assert check.call_count == 2
        mock_sleep.assert_called_once_with(0.25)
        assert 'Database available' in out.getvalue()

    @patch('hirewise.management.commands.wait_for_db.time.sleep')
    def test_gives_up_after_max_retries(self, mock_sleep):
        with patch.object(Command, '_check_database', side_effect=OperationalError('down')):
            with pytest.raises(CommandError, match='unavailable after 2 attempts'):
                call_command('wait_for_db', max_retries=2, delay_ms=0, stdout=StringIO())

        assert mock_sleep.call_count == 1
