"""
Celery configuration for the HireWise project.

- Auto-discovery of tasks from all installed Django apps
- Task routing to a dedicated queue for interview housekeeping
- Periodic schedule for reminder dispatch, registration cleanup and
  notification cleanup
"""

import os

from celery import Celery
from celery.schedules import crontab
from kombu import Exchange, Queue

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hirewise.settings')

app = Celery('hirewise')

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

app.autodiscover_tasks()


# ==================== QUEUE CONFIGURATION ====================

default_exchange = Exchange('default', type='direct')
ats_exchange = Exchange('ats', type='direct')

app.conf.task_queues = (
    Queue('default', default_exchange, routing_key='default'),
    Queue('ats', ats_exchange, routing_key='ats'),
)

app.conf.task_default_queue = 'default'
app.conf.task_default_exchange = 'default'
app.conf.task_default_routing_key = 'default'

app.conf.task_routes = {
    'ats.tasks.*': {'queue': 'ats', 'routing_key': 'ats'},
    'accounts.tasks.*': {'queue': 'default', 'routing_key': 'default'},
    'notifications.tasks.*': {'queue': 'default', 'routing_key': 'default'},
}


# ==================== BEAT SCHEDULE ====================

app.conf.beat_schedule = {
    'send-due-interview-reminders': {
        'task': 'ats.tasks.send_due_interview_reminders',
        'schedule': crontab(minute='*/5'),
    },
    'purge-expired-registrations': {
        'task': 'accounts.tasks.purge_expired_registrations',
        'schedule': crontab(minute=0),
    },
    'purge-read-notifications': {
        'task': 'notifications.tasks.purge_read_notifications',
        'schedule': crontab(hour=3, minute=30),
    },
}
