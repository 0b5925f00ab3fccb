"""
ORM models for the placement record store.
"""

from placement.models.base import (
    ACTIVE_INTEREST_STATUSES,
    Base,
    BaseModel,
    BedStatus,
    InterestStatus,
    PatientStatus,
)
from placement.models.bed import Bed
from placement.models.interest import ACTIVE_INTEREST_INDEX, Interest
from placement.models.patient import PATIENT_STAGE_FIELDS, Patient

__all__ = [
    "Base",
    "BaseModel",
    "Bed",
    "Interest",
    "Patient",
    "BedStatus",
    "InterestStatus",
    "PatientStatus",
    "ACTIVE_INTEREST_STATUSES",
    "ACTIVE_INTEREST_INDEX",
    "PATIENT_STAGE_FIELDS",
]
