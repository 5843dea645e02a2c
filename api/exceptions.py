"""
API Exceptions - Error taxonomy and handler for the HireWise API

This module provides:
- HireWiseAPIException and its subclasses for validation, business-rule,
  not-found, permission and scheduling-conflict errors
- raise_for_result, which turns a failed ServiceResult into one of them
- hirewise_exception_handler, the DRF EXCEPTION_HANDLER that renders every
  error into the standard envelope

All errors follow a consistent format:
{
    "success": false,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [{"field": ..., "messages": [...]}],
    "meta": {"timestamp": ...}
}
"""

import logging
from typing import Any, Dict, List

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from django.utils.translation import gettext_lazy as _

from rest_framework import exceptions, status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .base import build_meta

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class HireWiseAPIException(APIException):
    """
    Base exception for all HireWise API errors.

    Attributes:
        status_code: HTTP status code
        default_detail: Default error message
        default_code: Machine-readable error code
        error_code: Specific error code for this instance
        extra_data: Additional data merged into the response meta
        errors: Field errors rendered as the envelope's ``errors`` list
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(self, detail: str = None, code: str = None, extra_data: Dict = None,
                 errors: List[Dict] = None):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}
        self.errors = errors or []

        if detail is None:
            detail = str(self.default_detail)

        super().__init__(detail=detail, code=self.error_code)


# =============================================================================
# CLIENT ERRORS
# =============================================================================

class ValidationFailed(HireWiseAPIException):
    """Raised for malformed input detected outside a serializer."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Validation failed.")
    default_code = "VALIDATION_ERROR"


class BusinessRuleViolation(HireWiseAPIException):
    """Raised when a request is well-formed but breaks a workflow rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("This action violates business rules.")
    default_code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, detail: str = None, rule: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if rule:
            extra_data['rule'] = rule
        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class SlotConflict(BusinessRuleViolation):
    """Raised when an interviewer is already booked for the requested time."""

    default_detail = _("Interviewer is not available at the scheduled time")
    default_code = "SLOT_CONFLICT"


class ResourceNotFound(HireWiseAPIException):
    """Raised when a resource does not exist or is outside the caller's company."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = kwargs.pop('detail', None)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
            detail = detail or f"{resource_type} not found."

        if resource_id is not None:
            extra_data['resource_id'] = str(resource_id)

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class PermissionDenied(HireWiseAPIException):
    """Raised when the caller's role does not allow the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "PERMISSION_DENIED"


# =============================================================================
# SERVICE RESULTS
# =============================================================================

SERVICE_ERROR_CLASSES = {
    'VALIDATION_ERROR': ValidationFailed,
    'SLOT_CONFLICT': SlotConflict,
    'PERMISSION_DENIED': PermissionDenied,
}


def raise_for_result(result) -> None:
    """
    Raise the API exception matching a failed ServiceResult.

    Codes without a dedicated class become a BusinessRuleViolation that keeps
    the service's error_code, e.g. INVALID_STATE or FEEDBACK_TOO_EARLY.
    Successful results pass through.
    """
    if result.success:
        return

    errors = [
        {'field': field, 'messages': messages if isinstance(messages, list) else [messages]}
        for field, messages in (result.errors or {}).items()
    ]
    exception_class = SERVICE_ERROR_CLASSES.get(result.error_code)
    if exception_class is not None:
        raise exception_class(detail=result.message, errors=errors)

    raise BusinessRuleViolation(
        detail=result.message,
        rule=(result.error_code or '').lower() or None,
        code=result.error_code,
        errors=errors,
    )


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def _format_validation_errors(detail):
    if isinstance(detail, dict):
        return [
            {"field": field, "messages": msgs if isinstance(msgs, list) else [str(msgs)]}
            for field, msgs in detail.items()
        ]
    if isinstance(detail, list):
        return [{"field": "non_field_errors", "messages": [str(e) for e in detail]}]
    return [{"field": "non_field_errors", "messages": [str(detail)]}]


def hirewise_exception_handler(exc, context):
    """
    Render every exception raised inside a DRF view as an error envelope.

    Exceptions DRF does not know about become a generic 500; the exception
    text is only exposed when DEBUG is on.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled exception in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            exc,
        )
        error_data = {
            "success": False,
            "data": None,
            "message": "An unexpected error occurred.",
            "error_code": "INTERNAL_ERROR",
            "errors": [],
            "meta": build_meta(),
        }
        if settings.DEBUG:
            error_data["meta"]["exception"] = repr(exc)
        return Response(error_data, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    error_data = {
        "success": False,
        "data": None,
        "message": "",
        "error_code": "ERROR",
        "errors": [],
        "meta": build_meta(),
    }

    if isinstance(exc, HireWiseAPIException):
        error_data["message"] = str(exc.detail)
        error_data["error_code"] = exc.error_code
        error_data["errors"] = exc.errors
        if exc.extra_data:
            error_data["meta"].update(exc.extra_data)

    elif isinstance(exc, ValidationError):
        error_data["error_code"] = "VALIDATION_ERROR"
        error_data["errors"] = _format_validation_errors(exc.detail)
        if isinstance(exc.detail, list) and exc.detail:
            error_data["message"] = str(exc.detail[0])
        else:
            error_data["message"] = "Validation failed."

    else:
        error_data["message"] = str(exc.detail) if hasattr(exc, 'detail') else str(exc)
        error_data["error_code"] = getattr(exc, 'default_code', 'ERROR').upper()

    if response.status_code >= 500:
        logger.error("API error %s: %s", response.status_code, error_data["message"])

    response.data = error_data
    return response
