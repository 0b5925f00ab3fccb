"""
Pydantic schemas for the HTTP surface.
"""

from placement.schemas.bed import BedListResponse, BedResponse
from placement.schemas.common import BaseSchema, ErrorResponse
from placement.schemas.identity import IdentityResponse
from placement.schemas.interest import ActiveInterestResponse, InterestCreate, InterestResponse
from placement.schemas.patient import (
    OnboardingFieldsUpdate,
    OnboardingView,
    PatientResponse,
    StageFieldView,
)

__all__ = [
    "ActiveInterestResponse",
    "BaseSchema",
    "BedListResponse",
    "BedResponse",
    "ErrorResponse",
    "IdentityResponse",
    "InterestCreate",
    "InterestResponse",
    "OnboardingFieldsUpdate",
    "OnboardingView",
    "PatientResponse",
    "StageFieldView",
]
