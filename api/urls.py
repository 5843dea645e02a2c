"""
API URLs - mounts each app's REST routes under /api/

- /api/auth/ - company registration and JWT tokens (accounts)
- /api/hr/ - HR interview management (ats)
- /api/interviewer/ - interviewer dashboard, worklist and feedback (ats)
- /api/notifications/ - the caller's in-app notifications (notifications)
"""
from django.urls import include, path

from ats.urls import hr_urlpatterns, interviewer_urlpatterns

app_name = 'api'

urlpatterns = [
    path('auth/', include('accounts.urls')),
    path('hr/', include((hr_urlpatterns, 'hr'))),
    path('interviewer/', include((interviewer_urlpatterns, 'interviewer'))),
    path('notifications/', include(('notifications.urls', 'notifications'))),
]
