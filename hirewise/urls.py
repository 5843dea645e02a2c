"""
URL configuration for the HireWise project.

Routes the admin site, the JSON API under /api/, the OpenAPI schema and a
health endpoint for load balancers.
"""
import logging

from django.contrib import admin
from django.db import connection
from django.db.utils import DatabaseError
from django.http import JsonResponse
from django.urls import path, include
from django.utils import timezone
from drf_spectacular.views import SpectacularAPIView

logger = logging.getLogger(__name__)


# ==================== Health Check Endpoint ====================

def health_check(request):
    """Report database connectivity; 503 when the database is unreachable."""
    health_status = {
        'status': 'healthy',
        'timestamp': timezone.now().isoformat(),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except DatabaseError:
        logger.exception("Health check database query failed")
        health_status['database'] = 'error'
        health_status['status'] = 'degraded'

    status_code = 200 if health_status['status'] == 'healthy' else 503
    return JsonResponse(health_status, status=status_code)


urlpatterns = [
    path('health/', health_check, name='health'),
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/', include('api.urls')),
]
