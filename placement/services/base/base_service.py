"""
Base service class providing common functionality for all services.
"""

from typing import Any, Dict, Optional

from placement.core.exceptions import BaseAppException, ErrorCode
from placement.core.logging import get_logger
from placement.repositories.record_store import RecordStore
from placement.services.base.service_result import (
    ErrorSeverity,
    ServiceResult,
)

# Errors that reflect a caller decision rather than a system fault.
_EXPECTED_ERRORS = {
    ErrorCode.VALIDATION_ERROR: ErrorSeverity.INFO,
    ErrorCode.ALLOCATION_CONFLICT: ErrorSeverity.WARNING,
    ErrorCode.NOT_ONBOARDED: ErrorSeverity.WARNING,
    ErrorCode.STALE_WRITE: ErrorSeverity.WARNING,
    ErrorCode.RESOURCE_NOT_FOUND: ErrorSeverity.WARNING,
    ErrorCode.INVALID_STATE: ErrorSeverity.WARNING,
}


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and record store
    - Consistent error handling via ServiceResult
    """

    def __init__(self, store: RecordStore):
        """
        Initialize base service.

        Args:
            store: Record store sharing the request's database session
        """
        self.store = store
        self._logger = get_logger(f"placement.services.{self.__class__.__name__}").add_context(
            service=self.__class__.__name__
        )

    def _handle_exception(
        self,
        exception: BaseAppException,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert a typed application exception to a ServiceResult failure.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (identity, bed id)
            additional_context: Extra context for logging

        Returns:
            ServiceResult with failure status and the typed error
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "error_code": exception.error_code.value,
        }
        if additional_context:
            context.update(additional_context)

        severity = _EXPECTED_ERRORS.get(exception.error_code)
        if severity is None:
            severity = ErrorSeverity.CRITICAL
            self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)
        else:
            self._logger.info(f"{operation} rejected: {exception}", extra=context)

        return ServiceResult.from_exception(exception, severity)
