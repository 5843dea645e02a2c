"""
API Base Classes - Response envelope and pagination for the HireWise API

This module provides:
- APIResponse: helpers producing the standard response envelope
- StandardPagination: page-number pagination emitting the same envelope
- WorklistPagination: tighter page size limits for interview lists

Every JSON body returned by the API has the shape:
{
    "success": bool,
    "data": {...} | [...] | null,
    "message": str | null,
    "errors": [...] | null,
    "meta": {"timestamp": "ISO8601", "pagination": {...}?, ...}
}
"""

import logging
from typing import Any, Dict

from django.utils import timezone

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

logger = logging.getLogger(__name__)


# =============================================================================
# STANDARD RESPONSE HELPERS
# =============================================================================

def build_meta(extra: Dict = None) -> Dict:
    return {
        "timestamp": timezone.now().isoformat(),
        **(extra or {})
    }


class APIResponse:
    """Standardized API responses for consistent client handling."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = None,
        status_code: int = status.HTTP_200_OK,
        meta: Dict = None,
    ) -> Response:
        """Create a successful response."""
        response_data = {
            "success": True,
            "data": data,
            "message": message,
            "errors": None,
            "meta": build_meta(meta),
        }
        return Response(response_data, status=status_code)

    @staticmethod
    def created(
        data: Any = None,
        message: str = "Resource created successfully",
        meta: Dict = None
    ) -> Response:
        """Create a 201 Created response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
            meta=meta
        )

    @staticmethod
    def updated(
        data: Any = None,
        message: str = "Resource updated successfully",
        meta: Dict = None
    ) -> Response:
        """Create a successful update response."""
        return APIResponse.success(data=data, message=message, meta=meta)


# =============================================================================
# PAGINATION CLASSES
# =============================================================================

class StandardPagination(PageNumberPagination):
    """
    Standard page-number based pagination with configurable page size.

    Query params:
    - page: Page number (1-indexed)
    - page_size: Items per page (default: 20, max: 100)
    """
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_pagination_meta(self) -> Dict:
        return {
            "count": self.page.paginator.count,
            "page": self.page.number,
            "page_size": self.get_page_size(self.request),
            "total_pages": self.page.paginator.num_pages,
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
        }

    def get_paginated_response(self, data):
        return Response({
            "success": True,
            "data": data,
            "message": None,
            "errors": None,
            "meta": build_meta({"pagination": self.get_pagination_meta()}),
        })


class WorklistPagination(StandardPagination):
    """
    Pagination for interview lists and the pending-feedback worklist.

    Query params:
    - page: Page number (1-indexed)
    - limit: Items per page (default: 20, max: 50)
    """
    page_size_query_param = 'limit'
    max_page_size = 50

    def get_pagination_meta(self) -> Dict:
        meta = super().get_pagination_meta()
        meta["has_next_page"] = self.page.has_next()
        meta["has_prev_page"] = self.page.has_previous()
        return meta
