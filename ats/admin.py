"""
ATS Admin - Admin configuration for jobs, applications and interviews.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Application, Interview, InterviewFeedback, InterviewReminder,
    InterviewReschedule, Job, PreparationMaterial
)


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ['title', 'company', 'department', 'job_type', 'work_type', 'status', 'created_at']
    list_filter = ['status', 'job_type', 'work_type', 'company']
    search_fields = ['title', 'department', 'description']
    readonly_fields = ['uuid', 'created_at', 'updated_at']
    raw_id_fields = ['company', 'posted_by']
    date_hierarchy = 'created_at'


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ['applicant', 'job', 'status', 'applied_at']
    list_filter = ['status', 'applied_at']
    search_fields = ['applicant__email', 'applicant__first_name', 'applicant__last_name', 'job__title']
    readonly_fields = ['uuid', 'applied_at', 'updated_at']
    raw_id_fields = ['job', 'applicant']


class InterviewRescheduleInline(admin.TabularInline):
    model = InterviewReschedule
    extra = 0
    can_delete = False
    readonly_fields = [
        'old_date', 'old_time', 'old_duration', 'new_date', 'new_time',
        'new_duration', 'reason', 'rescheduled_by', 'rescheduled_at',
    ]

    def has_add_permission(self, request, obj=None):
        return False


class InterviewReminderInline(admin.TabularInline):
    model = InterviewReminder
    extra = 0
    readonly_fields = ['sent', 'sent_at']


class PreparationMaterialInline(admin.TabularInline):
    model = PreparationMaterial
    extra = 0


@admin.register(Interview)
class InterviewAdmin(admin.ModelAdmin):
    list_display = [
        'uuid', 'application', 'interviewer', 'interview_type', 'status_badge',
        'scheduled_date', 'scheduled_time', 'duration'
    ]
    list_filter = ['status', 'interview_type', 'scheduled_date']
    search_fields = ['application__applicant__email', 'interviewer__email', 'application__job__title']
    readonly_fields = ['uuid', 'scheduled_at', 'cancelled_at', 'completed_at', 'created_at', 'updated_at']
    raw_id_fields = ['application', 'interviewer', 'scheduled_by']
    date_hierarchy = 'scheduled_at'
    inlines = [InterviewRescheduleInline, InterviewReminderInline, PreparationMaterialInline]

    def status_badge(self, obj):
        colors = {
            'scheduled': 'blue',
            'confirmed': 'teal',
            'rescheduled': 'orange',
            'in_progress': 'purple',
            'completed': 'green',
            'cancelled': 'red',
            'no_show': 'gray',
        }
        color = colors.get(obj.status, 'gray')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px;">{}</span>',
            color, obj.get_status_display()
        )
    status_badge.short_description = 'Status'


@admin.register(InterviewFeedback)
class InterviewFeedbackAdmin(admin.ModelAdmin):
    list_display = [
        'interview', 'submitted_by', 'overall_rating',
        'recommendation', 'submitted_at'
    ]
    list_filter = ['recommendation', 'overall_rating', 'submitted_at']
    search_fields = ['interview__application__applicant__email']
    readonly_fields = ['submitted_at', 'updated_at']
    raw_id_fields = ['interview', 'submitted_by']
