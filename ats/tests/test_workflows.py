"""
Interview Workflow Tests

End-to-end flows across the HR and interviewer APIs with a moving clock.
Times in comments are Asia/Kolkata (UTC+05:30).
"""

from datetime import datetime, timezone as dt_timezone

import pytest
from freezegun import freeze_time

from ats.models import Interview

UTC = dt_timezone.utc


@pytest.mark.workflow
@pytest.mark.django_db
class TestScheduleToFeedbackWorkflow:

    def test_same_day_interview_and_feedback(self, hr_client, interviewer_client, application, interviewer):
        """
        Schedule for 10:00 today, find it under today's interviews, get
        rejected when submitting feedback early, then complete it.
        """
        with freeze_time('2025-09-20 02:00:00') as frozen:  # 07:30
            response = hr_client.post('/api/hr/interviews/', {
                'application_id': application.pk,
                'interviewer_id': interviewer.pk,
                'scheduled_date': '2025-09-20',
                'scheduled_time': '10:00',
                'duration': 60,
                'interview_type': 'video',
            }, format='json')
            assert response.status_code == 201
            interview_id = response.data['data']['id']

            listing = hr_client.get('/api/hr/interviews/', {'date_range': 'today'})
            assert [item['id'] for item in listing.data['data']] == [interview_id]
            assert listing.data['meta']['summary'] == {'today_interviews': 1, 'upcoming_interviews': 1}

            feedback_url = f'/api/interviewer/interviews/{interview_id}/feedback/'
            payload = {'overall_rating': 5, 'recommendation': 'strongly_recommend'}

            frozen.move_to('2025-09-20 04:00:00')  # 09:30
            early = interviewer_client.post(feedback_url, payload, format='json')
            assert early.status_code == 400
            assert early.data['error_code'] == 'FEEDBACK_TOO_EARLY'

            frozen.move_to('2025-09-20 05:42:00')  # 11:12
            late = interviewer_client.post(feedback_url, payload, format='json')
            assert late.status_code == 200
            assert late.data['data']['status'] == 'completed'

            dashboard = interviewer_client.get('/api/interviewer/dashboard/').data['data']
            assert dashboard['summary']['pending_feedback'] == 1
            assert dashboard['pending_segments']['editable_submitted'] == 1
            assert dashboard['feedback_turnaround_buckets']['lt6h'] == 1
            assert dashboard['metrics']['avg_feedback_turnaround_hours'] == 1.2
            assert dashboard['recent_activities'][0]['type'] == 'feedback_submitted'

        application.refresh_from_db()
        assert application.status == 'interviewed'

    def test_reschedule_then_decide(self, hr_client, interviewer_client, application, interviewer):
        with freeze_time('2025-09-20 02:00:00') as frozen:
            created = hr_client.post('/api/hr/interviews/', {
                'application_id': application.pk,
                'interviewer_id': interviewer.pk,
                'scheduled_date': '2025-09-22',
                'scheduled_time': '11:00',
                'interview_type': 'technical',
            }, format='json')
            interview_id = created.data['data']['id']

            frozen.move_to('2025-09-20 03:00:00')

            moved = hr_client.put(f'/api/hr/interviews/{interview_id}/', {
                'scheduled_date': '2025-09-23',
                'scheduled_time': '15:00',
                'reschedule_reason': 'Interviewer travelling',
            }, format='json')
            assert moved.data['data']['status'] == 'rescheduled'

            frozen.move_to('2025-09-23 10:00:00')  # 15:30
            interviewer_client.post(f'/api/interviewer/interviews/{interview_id}/feedback/', {
                'overall_rating': 4, 'recommendation': 'recommend',
            }, format='json')

            decision = hr_client.post(
                f'/api/hr/applications/{application.pk}/decision/',
                {'decision': 'offer_extended'},
                format='json'
            )
            assert decision.status_code == 200

            feed = interviewer_client.get('/api/interviewer/dashboard/').data['data']['recent_activities']
            assert [event['type'] for event in feed] == [
                'feedback_submitted', 'completed', 'rescheduled', 'scheduled'
            ]


@pytest.mark.workflow
@pytest.mark.django_db
class TestCancellationWorkflow:

    def test_cancel_with_reason(self, hr_client, interview_factory, application):
        """A cancelled interview leaves the upcoming counter but stays listed."""
        with freeze_time('2025-09-18 06:30:00'):
            interview = interview_factory(
                application=application,
                start=datetime(2025, 9, 20, 4, 30, tzinfo=UTC),
            )
            before = hr_client.get('/api/hr/interviews/')
            assert before.data['meta']['summary']['upcoming_interviews'] == 1

            response = hr_client.patch(
                f'/api/hr/interviews/{interview.uuid}/status/',
                {'status': 'cancelled', 'cancellation_reason': 'HR conflict'},
                format='json'
            )

            assert response.status_code == 200
            assert response.data['data']['status'] == 'cancelled'
            assert response.data['data']['cancellation_reason'] == 'HR conflict'
            assert response.data['data']['cancelled_at'] is not None

            after = hr_client.get('/api/hr/interviews/')
            assert after.data['meta']['summary']['upcoming_interviews'] == 0
            assert [item['id'] for item in after.data['data']] == [str(interview.uuid)]
            assert after.data['data'][0]['status'] == 'cancelled'

        interview.refresh_from_db()
        assert interview.status == Interview.InterviewStatus.CANCELLED
        assert interview.cancelled_at == datetime(2025, 9, 18, 6, 30, tzinfo=UTC)
