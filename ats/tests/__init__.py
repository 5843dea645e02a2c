"""
ATS Tests Package - interview scheduling, feedback and dashboards

Test Modules:
- test_models.py: Interview, InterviewFeedback and reminder model behaviour
- test_scheduling.py: slot validation, availability and overlap detection
- test_lifecycle.py: status transitions and the feedback window
- test_aggregations.py: interviewer dashboard metrics and the activity feed
- test_hr_api.py: HR interview endpoints and hiring decisions
- test_interviewer_api.py: interviewer dashboard, worklist and feedback endpoints
- test_workflows.py: end-to-end flows with a moving clock
- test_tasks.py: reminder delivery task

Test Markers:
- @pytest.mark.integration: API integration tests requiring database
- @pytest.mark.workflow: End-to-end workflow tests

Running Tests:
    # Run all ATS tests
    pytest ats/tests/ -v

    # Run only workflow tests
    pytest ats/tests/ -v -m workflow
"""
