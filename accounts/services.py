"""
Accounts Services - Business Logic Layer

- CompanyRegistrationService: creates a company together with its first
  administrator in a single database transaction

Exception details are logged but not exposed to clients.
"""

import logging
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.services import ServiceResult

from .models import Company, PendingRegistration, User

logger = logging.getLogger(__name__)


class CompanyRegistrationService:
    """Company onboarding."""

    @staticmethod
    def register(company_data: Dict[str, Any], admin_data: Dict[str, Any]) -> ServiceResult:
        """
        Create a Company and its admin User atomically.

        Either both rows are committed or neither is; a pending registration
        for the admin email is consumed in the same transaction.

        Args:
            company_data: Company model fields (name, industry, size, ...)
            admin_data: email, password, first_name, last_name, phone

        Returns:
            ServiceResult with company and admin ids on success
        """
        admin_data = dict(admin_data)
        email = admin_data.pop('email').lower()
        password = admin_data.pop('password')

        try:
            with transaction.atomic():
                company = Company.objects.create(**company_data)
                admin = User.objects.create_user(
                    email=email,
                    password=password,
                    role=User.Role.ADMIN,
                    company=company,
                    email_verified_at=timezone.now(),
                    **admin_data
                )
                PendingRegistration.objects.filter(email=email).delete()
        except IntegrityError:
            logger.warning("Company registration conflict for %s / %s", company_data.get('name'), email)
            return ServiceResult(
                success=False,
                message=str(_('A company or user with these details already exists.')),
                errors={'registration': 'duplicate'},
                error_code='ALREADY_EXISTS'
            )

        logger.info("Registered company %s with admin user %s", company.pk, admin.pk)
        return ServiceResult(
            success=True,
            message=str(_('Company account created.')),
            data={
                'company_id': company.pk,
                'company_name': company.name,
                'user_id': admin.pk,
                'email': admin.email,
                'role': admin.role,
            }
        )
