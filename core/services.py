"""
Shared service-layer types.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ServiceResult:
    """Base result class for service operations."""
    success: bool
    message: str = ''
    data: Any = None
    errors: Dict[str, Any] = None
    error_code: str = ''

    def __post_init__(self):
        if self.errors is None:
            self.errors = {}
