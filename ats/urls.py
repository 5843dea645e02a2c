"""
ATS URLs - REST API routing for interview management

HR routes (mounted at /api/hr/):
- GET/POST /interviews/ - list / schedule
- GET/PUT /interviews/{uuid}/ - detail / reschedule
- PATCH /interviews/{uuid}/status/ - cancel or change status
- GET /interviews/available-slots/{interviewer_id}/ - availability
- POST /applications/{id}/decision/ - hiring decision

Interviewer routes (mounted at /api/interviewer/):
- GET /dashboard/ - dashboard aggregation
- GET /feedback/pending/ - pending-feedback worklist
- GET /interviews/, /interviews/{uuid}/ - own interviews
- POST /interviews/{uuid}/feedback/ - submit or edit feedback
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    ApplicationDecisionView, InterviewerDashboardView,
    InterviewerInterviewViewSet, InterviewViewSet, PendingFeedbackView
)

hr_router = DefaultRouter()
hr_router.register(r'interviews', InterviewViewSet, basename='interview')

interviewer_router = DefaultRouter()
interviewer_router.register(r'interviews', InterviewerInterviewViewSet, basename='interview')

hr_urlpatterns = [
    path('applications/<int:pk>/decision/', ApplicationDecisionView.as_view(), name='application-decision'),
    path('', include(hr_router.urls)),
]

interviewer_urlpatterns = [
    path('dashboard/', InterviewerDashboardView.as_view(), name='dashboard'),
    path('feedback/pending/', PendingFeedbackView.as_view(), name='pending-feedback'),
    path('', include(interviewer_router.urls)),
]
