"""
Custom Exceptions for the Placement Intake Engine

This module defines the typed error outcomes raised by the identity
resolver, the record store, the onboarding state machine and the
interest allocator.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Identity errors
    IDENTITY_UNAVAILABLE = "IDENTITY_UNAVAILABLE"

    # Storage errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    STALE_WRITE = "STALE_WRITE"

    # Allocation errors
    ALLOCATION_CONFLICT = "ALLOCATION_CONFLICT"
    NOT_ONBOARDED = "NOT_ONBOARDED"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when stage fields fail their format rules"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        self.field_errors = field_errors or {}
        details = {"field_errors": self.field_errors} if self.field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class InvalidStateError(BaseAppException):
    """Exception raised when an operation does not apply to the current state"""

    def __init__(
        self,
        message: str = "Operation not allowed in the current state",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.INVALID_STATE, details, 409)


# ========================================
# Identity Exceptions
# ========================================

class IdentityUnavailable(BaseAppException):
    """Exception raised when the local identity store cannot be read or written"""

    def __init__(
        self,
        message: str = "Client identity unavailable",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.IDENTITY_UNAVAILABLE, details, 500)


# ========================================
# Storage Exceptions
# ========================================

class StoreUnavailable(BaseAppException):
    """Exception raised when a read or write against the record store fails"""

    def __init__(
        self,
        message: str = "Record store unavailable",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.STORE_UNAVAILABLE, details, 503)


class StaleWrite(BaseAppException):
    """Exception raised when a write was superseded by a newer committed write"""

    def __init__(
        self,
        client_uuid: str,
        expected_version: int,
        current_version: Optional[int] = None
    ):
        details = {
            "client_uuid": client_uuid,
            "expected_version": expected_version,
            "current_version": current_version,
        }
        super().__init__(
            "Patient record was modified by a newer write",
            ErrorCode.STALE_WRITE,
            details,
            409,
        )


# ========================================
# Allocation Exceptions
# ========================================

class AllocationConflict(BaseAppException):
    """Exception raised when an identity already holds an active interest"""

    def __init__(
        self,
        client_uuid: str,
        bed_id: Optional[str] = None,
        active_interest_id: Optional[str] = None
    ):
        details = {
            "client_uuid": client_uuid,
            "bed_id": bed_id,
            "active_interest_id": active_interest_id,
        }
        super().__init__(
            "An active interest already exists; withdraw it before expressing a new one",
            ErrorCode.ALLOCATION_CONFLICT,
            details,
            409,
        )


class NotOnboarded(BaseAppException):
    """Exception raised when allocation is attempted before onboarding is complete"""

    def __init__(
        self,
        client_uuid: str,
        message: str = "Onboarding must be completed before expressing interest",
        missing_fields: Optional[List[str]] = None
    ):
        details: Dict[str, Any] = {"client_uuid": client_uuid}
        if missing_fields:
            details["missing_fields"] = missing_fields
        super().__init__(message, ErrorCode.NOT_ONBOARDED, details, 409)


# ========================================
# Configuration Exceptions
# ========================================

class ConfigurationError(BaseAppException):
    """Exception raised for configuration-related errors"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details, 500)


def handle_database_exception(exc: Exception, operation: str) -> BaseAppException:
    """Convert a storage-layer exception into a StoreUnavailable error"""
    return StoreUnavailable(
        f"Record store failure during {operation}",
        details={"operation": operation, "exception_type": type(exc).__name__},
    )


def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """Create a validation error from field errors"""
    failing = ", ".join(sorted(field_errors))
    return ValidationError(
        message=f"Invalid or missing fields: {failing}",
        field_errors=field_errors,
    )
