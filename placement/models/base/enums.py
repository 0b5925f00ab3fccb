"""
Enumerations shared by the ORM models and API schemas.
"""

import enum


class PatientStatus(str, enum.Enum):
    """Onboarding lifecycle of a patient record."""
    DRAFT = "draft"
    ONBOARDED = "onboarded"


class BedStatus(str, enum.Enum):
    """Bed availability status, owned by the inventory process."""
    OPEN = "open"
    CLOSED = "closed"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


class InterestStatus(str, enum.Enum):
    """Interest lifecycle status."""
    WAITING = "waiting"
    OFFERED = "offered"
    ACCEPTED = "accepted"
    WITHDRAWN = "withdrawn"
    DECLINED = "declined"

    @property
    def is_active(self) -> bool:
        return self in ACTIVE_INTEREST_STATUSES


ACTIVE_INTEREST_STATUSES = frozenset({InterestStatus.WAITING, InterestStatus.OFFERED})
