from placement.models.base.base_model import Base, BaseModel
from placement.models.base.enums import (
    ACTIVE_INTEREST_STATUSES,
    BedStatus,
    InterestStatus,
    PatientStatus,
)
from placement.models.base.mixins import TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "PatientStatus",
    "BedStatus",
    "InterestStatus",
    "ACTIVE_INTEREST_STATUSES",
]
