"""
Accounts API Views

- CompanyRegistrationView: public endpoint creating a company and its admin
"""

import logging

from rest_framework import permissions, views
from rest_framework.throttling import AnonRateThrottle

from api.base import APIResponse
from api.exceptions import raise_for_result

from .serializers import CompanyRegistrationSerializer
from .services import CompanyRegistrationService

logger = logging.getLogger(__name__)


class RegistrationThrottle(AnonRateThrottle):
    scope = 'registration'


class CompanyRegistrationView(views.APIView):
    """
    POST: create a company together with its administrator account.
    """
    permission_classes = [permissions.AllowAny]
    throttle_classes = [RegistrationThrottle]

    def post(self, request):
        serializer = CompanyRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        company_data, admin_data = serializer.split()
        result = CompanyRegistrationService.register(company_data, admin_data)

        raise_for_result(result)

        return APIResponse.created(data=result.data, message=result.message)
