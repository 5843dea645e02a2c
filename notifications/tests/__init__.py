"""
Notifications Tests Package - in-app notifications

Test Modules:
- test_services.py: notification creation, unread counts and lifecycle messages
- test_api.py: the caller's notification endpoints
- test_tasks.py: purging of read notifications

Running Tests:
    pytest notifications/tests/ -v
"""
