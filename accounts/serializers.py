"""
Accounts Serializers - DRF serializers for users and company onboarding.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from core.timezones import validate_timezone

from .models import Company

User = get_user_model()


# ==================== USER SERIALIZERS ====================

class BasicUserSerializer(serializers.ModelSerializer):
    """Minimal user information for nested serialization."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'full_name', 'role']
        read_only_fields = fields


# ==================== COMPANY REGISTRATION ====================

class CompanyRegistrationSerializer(serializers.Serializer):
    """
    Company onboarding payload.

    Validates the company profile and the first administrator's credentials.
    """
    company_name = serializers.CharField(max_length=100)
    industry = serializers.CharField(max_length=100)
    company_size = serializers.ChoiceField(choices=Company.CompanySize.choices)
    headquarters = serializers.CharField(max_length=200, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, default='India')
    website = serializers.URLField(required=False, allow_blank=True)
    registration_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    timezone = serializers.CharField(max_length=64, required=False, default='Asia/Kolkata')

    admin_email = serializers.EmailField()
    admin_password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    admin_first_name = serializers.CharField(max_length=50)
    admin_last_name = serializers.CharField(max_length=50)
    admin_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate_company_name(self, value):
        if Company.objects.filter(name__iexact=value).exists():
            raise serializers.ValidationError(_("A company with this name already exists."))
        return value

    def validate_admin_email(self, value):
        if User.objects.filter(email=value.lower()).exists():
            raise serializers.ValidationError(_("A user with this email already exists."))
        return value.lower()

    def validate_timezone(self, value):
        if not validate_timezone(value):
            raise serializers.ValidationError(_("Unknown timezone."))
        return value

    def split(self):
        """Return (company_data, admin_data) for CompanyRegistrationService."""
        data = self.validated_data
        company_data = {
            'name': data['company_name'],
            'industry': data['industry'],
            'size': data['company_size'],
            'headquarters': data.get('headquarters', ''),
            'country': data.get('country', 'India'),
            'website': data.get('website', ''),
            'registration_number': data.get('registration_number', ''),
            'description': data.get('description', ''),
            'timezone': data.get('timezone', 'Asia/Kolkata'),
        }
        admin_data = {
            'email': data['admin_email'],
            'password': data['admin_password'],
            'first_name': data['admin_first_name'],
            'last_name': data['admin_last_name'],
            'phone': data.get('admin_phone', ''),
        }
        return company_data, admin_data
