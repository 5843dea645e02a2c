"""
Notifications Admin - Admin configuration for in-app notifications.
"""

from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'recipient', 'notification_type', 'priority', 'is_read', 'created_at']
    list_filter = ['notification_type', 'priority', 'is_read', 'created_at']
    search_fields = ['title', 'message', 'recipient__email']
    readonly_fields = ['uuid', 'content_type', 'object_id', 'read_at', 'created_at', 'updated_at']
    raw_id_fields = ['recipient', 'sender']
    date_hierarchy = 'created_at'
