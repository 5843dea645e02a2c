"""
Core Permissions - Role-based access for the HireWise API

PERMISSION CLASSES:
   - HasRole: base class, grants access to users whose role is in allowed_roles
   - IsHR: HR users and company admins
   - IsInterviewer: interviewer users
   - IsCompanyMember: object belongs to the caller's company

Company scoping is primarily done in get_queryset() so that foreign objects
surface as 404; IsCompanyMember is the object-level backstop.
"""

import logging
from typing import Any

from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView

logger = logging.getLogger('security.permissions')


class HasRole(permissions.BasePermission):
    """
    Grant access to authenticated, company-bound users with an allowed role.

    Usage:
        class MyView(APIView):
            permission_classes = [IsHR]
    """

    allowed_roles = ()
    message = "Your role does not have permission for this action."

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if user.role in self.allowed_roles and user.company_id:
            return True

        logger.warning(
            "Role check failed: user=%s role=%s view=%s",
            user.pk, user.role, view.__class__.__name__
        )
        return False


class IsHR(HasRole):
    allowed_roles = ('hr', 'admin')
    message = "Only HR users can manage interviews."


class IsInterviewer(HasRole):
    allowed_roles = ('interviewer',)
    message = "Only interviewers can access this resource."


class IsCompanyMember(permissions.BasePermission):
    """
    Object-level permission comparing the object's company to the caller's.

    Views declare the attribute path to the company with ``company_field``
    (default ``company``), e.g. ``application__job__company``.
    """

    message = "This resource belongs to another company."

    def has_object_permission(self, request: Request, view: APIView, obj: Any) -> bool:
        path = getattr(view, 'company_field', 'company')
        current = obj
        for part in path.split('__'):
            current = getattr(current, part, None)
            if current is None:
                break

        allowed = current is not None and current.pk == request.user.company_id
        if not allowed:
            logger.warning(
                "Cross-company access denied: user=%s object=%s",
                request.user.pk, getattr(obj, 'pk', None)
            )
        return allowed
