"""
Core utilities: exceptions, logging, validators and HTTP middleware.
"""

from placement.core.exceptions import (
    AllocationConflict,
    BaseAppException,
    ErrorCode,
    IdentityUnavailable,
    InvalidStateError,
    NotOnboarded,
    ResourceNotFoundError,
    StaleWrite,
    StoreUnavailable,
    ValidationError,
)

__all__ = [
    "AllocationConflict",
    "BaseAppException",
    "ErrorCode",
    "IdentityUnavailable",
    "InvalidStateError",
    "NotOnboarded",
    "ResourceNotFoundError",
    "StaleWrite",
    "StoreUnavailable",
    "ValidationError",
]
