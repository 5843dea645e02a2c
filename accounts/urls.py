"""
Accounts API URLs
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import CompanyRegistrationView

app_name = 'accounts'

urlpatterns = [
    path('register-company/', CompanyRegistrationView.as_view(), name='register-company'),
    path('token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
]
