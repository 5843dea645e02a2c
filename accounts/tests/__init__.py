"""
Accounts App Tests

This package contains tests for:
- test_registration.py: company registration over the API and the service layer
- test_tasks.py: purging of unverified self-registered accounts
"""
