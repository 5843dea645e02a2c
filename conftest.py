"""
HireWise Test Configuration - pytest fixtures and factories

This module provides:
- factory_boy factories for companies, users, jobs, applications,
  interviews, feedback and notifications
- Shared fixtures for company-scoped API testing

RUNNING TESTS:
# Run all tests
pytest -v

# Run by app
pytest ats/tests -v
pytest accounts/tests -v
pytest notifications/tests -v

# Run by marker
pytest -m integration -v
pytest -m workflow -v
"""

from datetime import timedelta
from zoneinfo import ZoneInfo

import factory
import pytest
from django.utils import timezone
from factory.django import DjangoModelFactory


def local_slot(moment, tz_name='Asia/Kolkata'):
    """Split an aware datetime into (scheduled_date, "HH:MM") in ``tz_name``."""
    local = moment.astimezone(ZoneInfo(tz_name))
    return local.date(), local.strftime('%H:%M')


# ============================================================================
# ACCOUNT FACTORIES
# ============================================================================

class CompanyFactory(DjangoModelFactory):
    """Factory for companies."""

    class Meta:
        model = 'accounts.Company'
        django_get_or_create = ('name',)

    name = factory.Sequence(lambda n: f"Company {n}")
    industry = 'Technology'
    size = '51-200'
    headquarters = factory.Faker('city')
    country = 'India'
    timezone = 'Asia/Kolkata'
    is_active = True


class UserFactory(DjangoModelFactory):
    """Factory for users; applicants by default."""

    class Meta:
        model = 'accounts.User'
        django_get_or_create = ('email',)

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    password = factory.django.Password('testpass123')
    role = 'applicant'
    company = None
    is_active = True


class HRUserFactory(UserFactory):
    role = 'hr'
    company = factory.SubFactory(CompanyFactory)


class InterviewerFactory(UserFactory):
    role = 'interviewer'
    company = factory.SubFactory(CompanyFactory)


class CompanyAdminFactory(UserFactory):
    role = 'admin'
    company = factory.SubFactory(CompanyFactory)


# ============================================================================
# ATS FACTORIES
# ============================================================================

class JobFactory(DjangoModelFactory):
    """Factory for published jobs."""

    class Meta:
        model = 'ats.Job'

    company = factory.SubFactory(CompanyFactory)
    posted_by = factory.SubFactory(HRUserFactory, company=factory.SelfAttribute('..company'))
    title = factory.Faker('job')
    description = factory.Faker('paragraph')
    department = 'Engineering'
    location = 'Bengaluru'
    job_type = 'full_time'
    work_type = 'hybrid'
    status = 'published'


class ApplicationFactory(DjangoModelFactory):
    """Factory for job applications."""

    class Meta:
        model = 'ats.Application'

    job = factory.SubFactory(JobFactory)
    applicant = factory.SubFactory(UserFactory)
    status = 'under_review'
    cover_letter = factory.Faker('text', max_nb_chars=300)


class InterviewFactory(DjangoModelFactory):
    """
    Factory for interviews.

    Pass ``start`` (aware datetime) to place the interview; date and time
    are derived in the company's timezone.
    """

    class Meta:
        model = 'ats.Interview'

    class Params:
        start = factory.LazyFunction(lambda: timezone.now() + timedelta(days=2))

    application = factory.SubFactory(ApplicationFactory)
    interviewer = factory.SubFactory(
        InterviewerFactory,
        company=factory.SelfAttribute('..application.job.company')
    )
    scheduled_by = factory.LazyAttribute(lambda o: o.application.job.posted_by)
    scheduled_date = factory.LazyAttribute(
        lambda o: local_slot(o.start, o.application.job.company.timezone)[0]
    )
    scheduled_time = factory.LazyAttribute(
        lambda o: local_slot(o.start, o.application.job.company.timezone)[1]
    )
    duration = 60
    interview_type = 'video'
    round = 1
    location = ''
    meeting_link = 'https://meet.example.com/abc-defg-hij'
    status = 'scheduled'


class InterviewFeedbackFactory(DjangoModelFactory):
    """Factory for interview feedback."""

    class Meta:
        model = 'ats.InterviewFeedback'

    interview = factory.SubFactory(InterviewFactory)
    submitted_by = factory.LazyAttribute(lambda o: o.interview.interviewer)

    overall_rating = 4
    technical_skills = 4
    communication_skills = 5
    problem_solving = 4
    cultural_fit = 4

    strengths = factory.LazyFunction(lambda: ['System design', 'Clear communication'])
    weaknesses = factory.LazyFunction(lambda: ['Testing depth'])
    recommendation = 'recommend'
    additional_notes = factory.Faker('sentence')
    submitted_at = factory.LazyFunction(timezone.now)


# ============================================================================
# NOTIFICATION FACTORIES
# ============================================================================

class NotificationFactory(DjangoModelFactory):
    """Factory for unread system notifications."""

    class Meta:
        model = 'notifications.Notification'

    recipient = factory.SubFactory(UserFactory)
    notification_type = 'system'
    title = factory.Faker('sentence', nb_words=4)
    message = factory.Faker('sentence')
    priority = 'low'
    is_read = False


# ============================================================================
# FACTORY FIXTURES
# ============================================================================

@pytest.fixture
def company_factory(db):
    return CompanyFactory


@pytest.fixture
def user_factory(db):
    return UserFactory


@pytest.fixture
def hr_user_factory(db):
    return HRUserFactory


@pytest.fixture
def interviewer_factory(db):
    return InterviewerFactory


@pytest.fixture
def job_factory(db):
    return JobFactory


@pytest.fixture
def application_factory(db):
    return ApplicationFactory


@pytest.fixture
def interview_factory(db):
    return InterviewFactory


@pytest.fixture
def feedback_factory(db):
    return InterviewFeedbackFactory


@pytest.fixture
def notification_factory(db):
    return NotificationFactory


# ============================================================================
# SHARED FIXTURES
# ============================================================================

@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def company(db):
    return CompanyFactory(name='Acme Labs', timezone='Asia/Kolkata')


@pytest.fixture
def other_company(db):
    return CompanyFactory(name='Globex', timezone='Asia/Kolkata')


@pytest.fixture
def hr_user(db, company):
    return HRUserFactory(company=company, email='hr@acme.test')


@pytest.fixture
def interviewer(db, company):
    return InterviewerFactory(
        company=company, email='iv@acme.test', first_name='Ravi', last_name='Kumar'
    )


@pytest.fixture
def job(db, company, hr_user):
    return JobFactory(company=company, posted_by=hr_user, title='Backend Engineer')


@pytest.fixture
def candidate(db):
    return UserFactory(email='jane@candidates.test', first_name='Jane', last_name='Doe')


@pytest.fixture
def application(db, job, candidate):
    return ApplicationFactory(job=job, applicant=candidate, status='under_review')


@pytest.fixture
def hr_client(api_client, hr_user):
    """API client authenticated as the company's HR user."""
    api_client.force_authenticate(user=hr_user)
    return api_client


@pytest.fixture
def interviewer_client(db, interviewer):
    """API client authenticated as the company's interviewer."""
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=interviewer)
    return client
