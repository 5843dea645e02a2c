"""
Accounts Models - Companies, users and short-lived registration records

This module implements:
- Company: the data isolation boundary; carries the business timezone
- User: email-based login with a role and a company membership
- PendingRegistration: signup payload awaiting email verification
- VerificationToken: hashed one-time codes for verification/password reset

Pending registrations and tokens carry ``expires_at``; expired rows are
purged periodically by ``accounts.tasks.purge_expired_registrations``.
"""

import uuid
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Company(models.Model):
    """An employer organization. All HR data is scoped to one company."""

    class CompanySize(models.TextChoices):
        MICRO = '1-10', _('1-10 employees')
        SMALL = '11-50', _('11-50 employees')
        MEDIUM = '51-200', _('51-200 employees')
        LARGE = '201-500', _('201-500 employees')
        XLARGE = '501-1000', _('501-1000 employees')
        ENTERPRISE = '1000+', _('1000+ employees')

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    name = models.CharField(max_length=100, unique=True)
    industry = models.CharField(max_length=100)
    size = models.CharField(max_length=20, choices=CompanySize.choices)
    headquarters = models.CharField(max_length=200, blank=True)
    country = models.CharField(max_length=100, default='India')
    website = models.URLField(blank=True)
    registration_number = models.CharField(max_length=100, blank=True)
    description = models.TextField(max_length=1000, blank=True)
    timezone = models.CharField(
        max_length=64,
        default='Asia/Kolkata',
        help_text=_('IANA timezone used for day and week boundaries')
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Company')
        verbose_name_plural = _('Companies')
        ordering = ['name']

    def __str__(self):
        return self.name


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address must be set')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Platform user.

    Applicants have no company; HR, interviewer and company admin users
    must belong to exactly one company.
    """

    class Role(models.TextChoices):
        APPLICANT = 'applicant', _('Applicant')
        HR = 'hr', _('HR')
        INTERVIEWER = 'interviewer', _('Interviewer')
        ADMIN = 'admin', _('Company Administrator')

    COMPANY_ROLES = (Role.HR, Role.INTERVIEWER, Role.ADMIN)

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    phone = models.CharField(max_length=20, blank=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.APPLICANT,
        db_index=True
    )
    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='members'
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    email_verified_at = models.DateTimeField(null=True, blank=True)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    EMAIL_FIELD = 'email'
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        ordering = ['last_name', 'first_name']
        indexes = [
            models.Index(fields=['company', 'role'], name='accounts_us_company_8a3f1d_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name()} <{self.email}>"

    def clean(self):
        super().clean()
        if self.role in self.COMPANY_ROLES and not self.company_id:
            raise ValidationError({'company': _('A company is required for this role.')})

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_short_name(self):
        return self.first_name


def default_registration_expiry():
    return timezone.now() + timedelta(hours=settings.PENDING_REGISTRATION_TTL_HOURS)


class PendingRegistration(models.Model):
    """Signup data held until the email address is verified."""

    class RegistrationType(models.TextChoices):
        APPLICANT = 'applicant', _('Applicant')
        COMPANY = 'company', _('Company')

    email = models.EmailField(unique=True)
    registration_type = models.CharField(max_length=20, choices=RegistrationType.choices)
    payload = models.JSONField(default=dict)
    expires_at = models.DateTimeField(default=default_registration_expiry, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Pending Registration')
        verbose_name_plural = _('Pending Registrations')

    def __str__(self):
        return f"{self.registration_type}: {self.email}"


class VerificationToken(models.Model):
    """Hashed one-time code for email verification or password reset."""

    class Purpose(models.TextChoices):
        EMAIL_OTP = 'email_otp', _('Email verification')
        PASSWORD_RESET = 'password_reset', _('Password reset')

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='verification_tokens'
    )
    email = models.EmailField(db_index=True)
    purpose = models.CharField(max_length=20, choices=Purpose.choices, default=Purpose.EMAIL_OTP)
    code_hash = models.CharField(max_length=128)
    attempts_remaining = models.PositiveSmallIntegerField(default=5)
    expires_at = models.DateTimeField(db_index=True)
    used_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Verification Token')
        verbose_name_plural = _('Verification Tokens')
        indexes = [
            models.Index(fields=['email', 'purpose', '-created_at'], name='accounts_ve_email_5c2e7b_idx'),
        ]

    def __str__(self):
        return f"{self.purpose} for {self.email}"
