"""
Django Test Settings for HireWise

Overrides the main settings for fast, isolated test runs.

Usage:
    pytest --ds=hirewise.settings_test
    python manage.py test --settings=hirewise.settings_test
"""

from .settings import *  # noqa: F401, F403

# =============================================================================
# TEST ENVIRONMENT CONFIGURATION
# =============================================================================

DEBUG = False
TESTING = True

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

# SQLite unless TEST_DATABASE_URL points at a real server
DATABASES = {
    'default': env.db('TEST_DATABASE_URL', default='sqlite:///:memory:'),
}

# =============================================================================
# CACHING CONFIGURATION
# =============================================================================

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'unique-snowflake',
    },
}

# =============================================================================
# CELERY CONFIGURATION
# =============================================================================

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# =============================================================================
# REST FRAMEWORK
# =============================================================================

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    scope: '100000/hour' for scope in REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']
}

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
}

# =============================================================================
# PYTEST CONFIGURATION NOTES
# =============================================================================

# DJANGO_SETTINGS_MODULE is set to hirewise.settings_test in pyproject.toml
