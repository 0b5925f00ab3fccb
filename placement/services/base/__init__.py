"""
Base services module.

Provides the ServiceResult/ServiceError outcome types and the BaseService
every engine service derives from.
"""

from placement.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)
from placement.services.base.base_service import BaseService

__all__ = [
    "BaseService",
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
