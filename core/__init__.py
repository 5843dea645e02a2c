"""
Core - shared infrastructure for HireWise apps

- Role permissions for DRF views
- Business calendar (timezone-aware day/week boundaries)
"""
