"""
Interviewer API Tests

Tests for /api/interviewer/:
- dashboard
- pending-feedback worklist
- own interview list and detail
- feedback submission and editing

The clock is frozen at Monday 2030-01-07 02:30 UTC (08:00 Asia/Kolkata).
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from freezegun import freeze_time

from ats.models import InterviewFeedback

UTC = dt_timezone.utc
NOW = datetime(2030, 1, 7, 2, 30, tzinfo=UTC)

DASHBOARD_URL = '/api/interviewer/dashboard/'
PENDING_URL = '/api/interviewer/feedback/pending/'
INTERVIEWS_URL = '/api/interviewer/interviews/'


def feedback_url(interview):
    return f'{INTERVIEWS_URL}{interview.uuid}/feedback/'


@pytest.fixture
def frozen():
    with freeze_time(NOW) as frozen_time:
        yield frozen_time


@pytest.fixture
def past_interview(frozen, interview_factory, application, interviewer):
    return interview_factory(application=application, interviewer=interviewer, start=NOW - timedelta(hours=2))


@pytest.fixture
def colleague_interview(frozen, interview_factory, application, interviewer_factory, company):
    return interview_factory(
        application=application,
        interviewer=interviewer_factory(company=company),
        start=NOW - timedelta(hours=3),
    )


# ============================================================================
# DASHBOARD
# ============================================================================

@pytest.mark.integration
@pytest.mark.django_db
class TestDashboardAPI:

    def test_dashboard(self, interviewer_client, past_interview):
        response = interviewer_client.get(DASHBOARD_URL)

        assert response.status_code == 200
        data = response.data['data']
        assert set(data) == {
            'summary', 'todays_interviews', 'metrics', 'week_comparison',
            'feedback_turnaround_buckets', 'pending_segments', 'recent_activities',
        }
        assert data['summary']['pending_feedback'] == 1
        assert data['todays_interviews'][0]['id'] == str(past_interview.uuid)

    def test_hr_cannot_open_dashboard(self, hr_client):
        response = hr_client.get(DASHBOARD_URL)

        assert response.status_code == 403


# ============================================================================
# PENDING FEEDBACK
# ============================================================================

@pytest.mark.integration
@pytest.mark.django_db
class TestPendingFeedbackAPI:

    def test_worklist_items(self, frozen, interviewer_client, interview_factory, feedback_factory,
                            application, interviewer):
        stale = interview_factory(application=application, interviewer=interviewer, start=NOW - timedelta(days=5))
        recent = interview_factory(application=application, interviewer=interviewer,
                                   start=NOW - timedelta(days=1), status='completed')
        feedback_factory(interview=recent, submitted_at=NOW - timedelta(hours=1), overall_rating=3)
        # not started yet
        interview_factory(application=application, interviewer=interviewer, start=NOW + timedelta(hours=1))

        response = interviewer_client.get(PENDING_URL)

        assert response.status_code == 200
        items = response.data['data']
        assert [item['id'] for item in items] == [str(stale.uuid), str(recent.uuid)]

        first, second = items
        assert first['days_pending'] == 5
        assert first['priority'] == 'high'
        assert first['has_feedback'] is False
        assert first['editable'] is False
        assert first['existing_feedback'] is None
        assert first['candidate_name'] == 'Jane Doe'
        assert first['department'] == 'Engineering'

        assert second['days_pending'] == 1
        assert second['priority'] == 'low'
        assert second['has_feedback'] is True
        assert second['editable'] is True
        assert second['hours_remaining'] == 47.0
        assert second['existing_feedback']['overall_rating'] == 3

    def test_locked_feedback_drops_off(self, frozen, interviewer_client, interview_factory, feedback_factory,
                                       application, interviewer):
        interview = interview_factory(application=application, interviewer=interviewer,
                                      start=NOW - timedelta(days=4), status='completed')
        feedback_factory(interview=interview, submitted_at=NOW - timedelta(hours=49))

        response = interviewer_client.get(PENDING_URL)

        assert response.data['data'] == []

    def test_cancelled_interviews_are_not_pending(self, frozen, interviewer_client, interview_factory,
                                                  application, interviewer):
        interview_factory(application=application, interviewer=interviewer,
                          start=NOW - timedelta(days=1), status='cancelled')

        response = interviewer_client.get(PENDING_URL)

        assert response.data['meta']['pagination']['count'] == 0


# ============================================================================
# OWN INTERVIEWS
# ============================================================================

@pytest.mark.integration
@pytest.mark.django_db
class TestInterviewerInterviewsAPI:

    def test_lists_only_own_interviews(self, interviewer_client, past_interview, colleague_interview):
        response = interviewer_client.get(INTERVIEWS_URL)

        assert response.status_code == 200
        assert [item['id'] for item in response.data['data']] == [str(past_interview.uuid)]
        item = response.data['data'][0]
        assert item['candidate'] == 'Jane Doe'
        assert item['job'] == 'Backend Engineer'
        assert item['feedback_submitted'] is False

    def test_date_range(self, frozen, interviewer_client, past_interview, interview_factory,
                        application, interviewer):
        upcoming = interview_factory(application=application, interviewer=interviewer,
                                     start=NOW + timedelta(days=3))

        past = interviewer_client.get(INTERVIEWS_URL, {'date_range': 'past'})
        future = interviewer_client.get(INTERVIEWS_URL, {'date_range': 'upcoming'})

        assert [item['id'] for item in past.data['data']] == [str(past_interview.uuid)]
        assert [item['id'] for item in future.data['data']] == [str(upcoming.uuid)]

    def test_needs_feedback(self, frozen, interviewer_client, past_interview, interview_factory,
                            feedback_factory, application, interviewer):
        assessed = interview_factory(application=application, interviewer=interviewer,
                                     start=NOW - timedelta(days=2), status='completed')
        feedback_factory(interview=assessed)

        response = interviewer_client.get(INTERVIEWS_URL, {'needs_feedback': 'true'})

        assert [item['id'] for item in response.data['data']] == [str(past_interview.uuid)]

    def test_retrieve(self, interviewer_client, past_interview):
        response = interviewer_client.get(f'{INTERVIEWS_URL}{past_interview.uuid}/')

        assert response.status_code == 200
        assert response.data['data']['id'] == str(past_interview.uuid)

    def test_colleague_interview_is_not_found(self, interviewer_client, colleague_interview):
        response = interviewer_client.get(f'{INTERVIEWS_URL}{colleague_interview.uuid}/')

        assert response.status_code == 404


# ============================================================================
# FEEDBACK
# ============================================================================

@pytest.mark.integration
@pytest.mark.django_db
class TestFeedbackAPI:
    """Tests for POST /api/interviewer/interviews/{id}/feedback/."""

    payload = {
        'overall_rating': 4,
        'technical_skills': 5,
        'communication_skills': 4,
        'strengths': ['Clear API design'],
        'weaknesses': ['Light on testing'],
        'recommendation': 'strongly_recommend',
        'additional_notes': 'Would hire.',
    }

    def test_submit(self, interviewer_client, past_interview, interviewer):
        response = interviewer_client.post(feedback_url(past_interview), self.payload, format='json')

        assert response.status_code == 200
        assert response.data['message'] == 'Feedback submitted successfully'
        data = response.data['data']
        assert data['id'] == str(past_interview.uuid)
        assert data['status'] == 'completed'
        assert data['feedback']['overall_rating'] == 4
        assert data['feedback']['submitted_by']['id'] == interviewer.pk
        assert data['feedback']['editable'] is True

    @pytest.mark.parametrize('field, value', [
        ('overall_rating', None),
        ('overall_rating', 6),
        ('technical_skills', 0),
        ('recommendation', 'maybe'),
        ('additional_notes', 'x' * 2001),
    ])
    def test_validation(self, interviewer_client, past_interview, field, value):
        payload = {**self.payload, field: value}

        response = interviewer_client.post(feedback_url(past_interview), payload, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert field in [error['field'] for error in response.data['errors']]
        assert not InterviewFeedback.objects.exists()

    def test_required_fields(self, interviewer_client, past_interview):
        response = interviewer_client.post(feedback_url(past_interview), {}, format='json')

        fields = [error['field'] for error in response.data['errors']]
        assert set(fields) == {'overall_rating', 'recommendation'}

    def test_edit_replaces_assessment(self, interviewer_client, past_interview):
        interviewer_client.post(feedback_url(past_interview), self.payload, format='json')

        response = interviewer_client.post(feedback_url(past_interview), {
            'overall_rating': 3, 'recommendation': 'neutral',
        }, format='json')

        assert response.status_code == 200
        assert response.data['message'] == 'Feedback updated successfully'
        feedback = InterviewFeedback.objects.get(interview=past_interview)
        assert feedback.overall_rating == 3
        assert feedback.technical_skills is None
        assert feedback.strengths == []
        assert feedback.additional_notes == ''

    def test_too_early(self, frozen, interviewer_client, interview_factory, application, interviewer):
        upcoming = interview_factory(application=application, interviewer=interviewer,
                                     start=NOW + timedelta(hours=1))

        response = interviewer_client.post(feedback_url(upcoming), self.payload, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'FEEDBACK_TOO_EARLY'

    def test_window_expired(self, frozen, interviewer_client, past_interview):
        interviewer_client.post(feedback_url(past_interview), self.payload, format='json')
        frozen.tick(timedelta(hours=49))

        response = interviewer_client.post(feedback_url(past_interview), self.payload, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'FEEDBACK_WINDOW_EXPIRED'
        assert response.data['message'] == 'Feedback edit window (48h) has expired'

    def test_colleague_interview(self, interviewer_client, colleague_interview):
        response = interviewer_client.post(feedback_url(colleague_interview), self.payload, format='json')

        assert response.status_code == 404

    def test_hr_cannot_submit(self, hr_client, past_interview):
        response = hr_client.post(feedback_url(past_interview), self.payload, format='json')

        assert response.status_code == 403
