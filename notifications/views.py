"""
Notification ViewSets - the caller's in-app notifications

Endpoints (mounted at /api/notifications/):
- GET / - list, newest first, filterable by status and type
- GET /{uuid}/ - detail
- DELETE /{uuid}/ - delete one notification
- PATCH /{uuid}/read/ - mark one notification read
- PATCH /read-all/ - mark every unread notification read
- GET /unread-count/ - number of unread notifications
- POST /bulk-delete/ - delete several notifications by id

Every queryset is scoped to the requesting user, so other users'
notifications are 404.
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, viewsets
from rest_framework.decorators import action

from api.base import APIResponse, StandardPagination

from .filters import NotificationFilter
from .models import Notification
from .serializers import NotificationBulkDeleteSerializer, NotificationSerializer
from .services import NotificationService

logger = logging.getLogger(__name__)

UUID_REGEX = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'


class NotificationPagination(StandardPagination):
    """
    Query params:
    - page: Page number (1-indexed)
    - limit: Items per page (default: 20, max: 100)
    """
    page_size_query_param = 'limit'


class NotificationViewSet(mixins.DestroyModelMixin, viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for the authenticated user's notifications.

    list: Notifications with unread_count in meta
    retrieve: A single notification
    destroy: Delete a notification

    Actions:
    - read: mark one notification read (PATCH)
    - read_all: mark all notifications read (PATCH)
    - unread_count: unread notification count (GET)
    - bulk_delete: delete notifications by id (POST)
    """
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = NotificationPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = NotificationFilter
    lookup_field = 'uuid'
    lookup_value_regex = UUID_REGEX

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Notification.objects.none()
        return Notification.objects.filter(
            recipient=self.request.user
        ).select_related('sender', 'content_type')

    def get_serializer_class(self):
        if self.action == 'bulk_delete':
            return NotificationBulkDeleteSerializer
        return NotificationSerializer

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data['meta']['unread_count'] = NotificationService.get_unread_count(request.user)
        return response

    def retrieve(self, request, *args, **kwargs):
        return APIResponse.success(data=self.get_serializer(self.get_object()).data)

    def destroy(self, request, *args, **kwargs):
        notification = self.get_object()
        notification_id = str(notification.uuid)
        notification.delete()
        return APIResponse.success(data={'id': notification_id}, message='Notification deleted')

    @action(detail=True, methods=['patch'])
    def read(self, request, uuid=None):
        """Mark the notification read."""
        notification = self.get_object()
        notification.mark_as_read()
        return APIResponse.updated(data=self.get_serializer(notification).data, message='Notification marked as read')

    @action(detail=False, methods=['patch'], url_path='read-all')
    def read_all(self, request):
        """Mark every unread notification read."""
        modified = NotificationService.mark_all_as_read(request.user)
        logger.info("User %s marked %s notifications read", request.user.pk, modified)
        return APIResponse.updated(data={'modified': modified}, message='All notifications marked as read')

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return APIResponse.success(data={'count': NotificationService.get_unread_count(request.user)})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        """Delete the caller's notifications listed in ``ids``."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deleted, _ = self.get_queryset().filter(uuid__in=serializer.validated_data['ids']).delete()
        return APIResponse.success(data={'deleted': deleted}, message='Notifications deleted')
