"""
Accounts Admin - Admin configuration for companies and users.
"""

from django.contrib import admin

from .models import Company, PendingRegistration, User, VerificationToken


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'industry', 'size', 'timezone', 'is_active', 'created_at']
    list_filter = ['is_active', 'size', 'industry']
    search_fields = ['name', 'registration_number']
    readonly_fields = ['uuid', 'created_at', 'updated_at']


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'role', 'company', 'is_active']
    list_filter = ['role', 'is_active', 'is_staff', 'company']
    search_fields = ['email', 'first_name', 'last_name']
    ordering = ['email']
    raw_id_fields = ['company']
    readonly_fields = ['uuid', 'date_joined', 'last_login']
    fieldsets = (
        (None, {'fields': ('email',)}),
        ('Profile', {'fields': ('first_name', 'last_name', 'phone', 'role', 'company')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('uuid', 'email_verified_at', 'date_joined', 'last_login')}),
    )


@admin.register(PendingRegistration)
class PendingRegistrationAdmin(admin.ModelAdmin):
    list_display = ['email', 'registration_type', 'expires_at', 'created_at']
    list_filter = ['registration_type']
    search_fields = ['email']


@admin.register(VerificationToken)
class VerificationTokenAdmin(admin.ModelAdmin):
    list_display = ['email', 'purpose', 'attempts_remaining', 'expires_at', 'used_at']
    list_filter = ['purpose']
    search_fields = ['email']
    exclude = ['code_hash']
