"""
Company Registration Tests

Covers the public onboarding endpoint and the service behind it:
- company and admin created together
- duplicate and invalid input
- atomic rollback when the admin cannot be created
"""

import pytest

from accounts.models import Company, PendingRegistration, User
from accounts.services import CompanyRegistrationService

REGISTER_URL = '/api/auth/register-company/'


@pytest.fixture
def registration_payload():
    return {
        'company_name': 'Initech',
        'industry': 'Software',
        'company_size': '11-50',
        'headquarters': 'Pune',
        'timezone': 'Asia/Kolkata',
        'admin_email': 'Founder@Initech.test',
        'admin_password': 'Tr1cky-Passphrase!',
        'admin_first_name': 'Bill',
        'admin_last_name': 'Lumbergh',
    }


@pytest.mark.integration
@pytest.mark.django_db
class TestCompanyRegistrationAPI:
    """Tests for POST /api/auth/register-company/."""

    def test_creates_company_and_admin(self, api_client, registration_payload):
        """A valid payload creates both rows and returns their ids."""
        response = api_client.post(REGISTER_URL, registration_payload, format='json')

        assert response.status_code == 201
        assert response.data['success'] is True

        company = Company.objects.get(name='Initech')
        admin = User.objects.get(email='founder@initech.test')
        assert admin.company == company
        assert admin.role == User.Role.ADMIN
        assert admin.email_verified_at is not None
        assert admin.check_password('Tr1cky-Passphrase!')
        assert response.data['data']['company_id'] == company.pk
        assert response.data['data']['user_id'] == admin.pk

    def test_consumes_pending_registration(self, api_client, registration_payload):
        PendingRegistration.objects.create(
            email='founder@initech.test',
            registration_type=PendingRegistration.RegistrationType.COMPANY,
        )

        response = api_client.post(REGISTER_URL, registration_payload, format='json')

        assert response.status_code == 201
        assert not PendingRegistration.objects.filter(email='founder@initech.test').exists()

    def test_duplicate_company_name(self, api_client, registration_payload, company_factory):
        company_factory(name='INITECH')

        response = api_client.post(REGISTER_URL, registration_payload, format='json')

        assert response.status_code == 400
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        fields = [error['field'] for error in response.data['errors']]
        assert 'company_name' in fields

    def test_unknown_timezone(self, api_client, registration_payload):
        registration_payload['timezone'] = 'Atlantis/Capital'

        response = api_client.post(REGISTER_URL, registration_payload, format='json')

        assert response.status_code == 400
        assert not Company.objects.filter(name='Initech').exists()

    def test_missing_admin_fields(self, api_client, registration_payload):
        del registration_payload['admin_email']

        response = api_client.post(REGISTER_URL, registration_payload, format='json')

        assert response.status_code == 400
        fields = [error['field'] for error in response.data['errors']]
        assert 'admin_email' in fields


@pytest.mark.django_db
class TestCompanyRegistrationService:

    def test_rolls_back_company_when_admin_exists(self, user_factory):
        """An email collision leaves no orphaned company behind."""
        user_factory(email='taken@initech.test')

        result = CompanyRegistrationService.register(
            {'name': 'Initech', 'industry': 'Software', 'size': '11-50'},
            {
                'email': 'taken@initech.test',
                'password': 'Tr1cky-Passphrase!',
                'first_name': 'Bill',
                'last_name': 'Lumbergh',
            },
        )

        assert result.success is False
        assert result.error_code == 'ALREADY_EXISTS'
        assert not Company.objects.filter(name='Initech').exists()

    def test_lowercases_admin_email(self):
        result = CompanyRegistrationService.register(
            {'name': 'Hooli', 'industry': 'Software', 'size': '1000+'},
            {
                'email': 'Gavin@Hooli.TEST',
                'password': 'Tr1cky-Passphrase!',
                'first_name': 'Gavin',
                'last_name': 'Belson',
            },
        )

        assert result.success is True
        assert result.data['email'] == 'gavin@hooli.test'
        assert result.data['role'] == 'admin'
