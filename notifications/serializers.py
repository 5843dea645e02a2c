"""
Notification Serializers - REST API serialization for in-app notifications.
"""

from django.utils import timezone
from django.utils.timesince import timesince
from rest_framework import serializers

from accounts.serializers import BasicUserSerializer

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Notification as shown in the recipient's notification list."""
    id = serializers.UUIDField(source='uuid', read_only=True)
    sender = BasicUserSerializer(read_only=True)
    related_type = serializers.SerializerMethodField()
    related_id = serializers.IntegerField(source='object_id', read_only=True)
    time_ago = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = [
            'id', 'notification_type', 'title', 'message', 'action_url',
            'priority', 'context_data', 'related_type', 'related_id',
            'sender', 'is_read', 'read_at', 'created_at', 'time_ago',
        ]
        read_only_fields = fields

    def get_related_type(self, obj):
        return obj.content_type.model if obj.content_type_id else None

    def get_time_ago(self, obj):
        """Get human-readable time since notification was created."""
        if obj.created_at:
            return timesince(obj.created_at, timezone.now())
        return None


class NotificationBulkDeleteSerializer(serializers.Serializer):
    """Ids of the caller's notifications to delete."""
    ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False,
        max_length=100
    )
