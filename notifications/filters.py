"""
Notification Filters - read state and type filtering for notification lists.
"""

import django_filters

from .models import Notification


class NotificationFilter(django_filters.FilterSet):
    """
    Query params:
    - status: all (default), unread or read
    - notification_type: one of Notification.NotificationType
    """

    status = django_filters.ChoiceFilter(
        choices=[('all', 'All'), ('unread', 'Unread'), ('read', 'Read')],
        method='filter_status'
    )
    notification_type = django_filters.ChoiceFilter(choices=Notification.NotificationType.choices)

    class Meta:
        model = Notification
        fields = ['status', 'notification_type']

    def filter_status(self, queryset, name, value):
        if value == 'unread':
            return queryset.filter(is_read=False)
        if value == 'read':
            return queryset.filter(is_read=True)
        return queryset
