"""
Interest model.

An interest binds one patient identity to one bed. The partial unique
index below is what guarantees at most one waiting/offered interest per
identity, whichever process inserts it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from placement.models.base import BaseModel, InterestStatus, TimestampMixin

if TYPE_CHECKING:
    from placement.models.bed import Bed
    from placement.models.patient import Patient

__all__ = ["Interest", "ACTIVE_INTEREST_INDEX"]

ACTIVE_INTEREST_INDEX = "uq_interests_one_active_per_client"

_ACTIVE_PREDICATE = "status IN ('waiting', 'offered')"


class Interest(BaseModel, TimestampMixin):
    """
    Claim of intent by a patient on a bed.

    Attributes:
        client_uuid: Identity of the claiming patient
        bed_id: Claimed bed
        status: waiting, offered, accepted, withdrawn or declined
    """

    __tablename__ = "interests"
    __table_args__ = (
        Index("ix_interests_client_bed", "client_uuid", "bed_id"),
        # One active interest per identity
        Index(
            ACTIVE_INTEREST_INDEX,
            "client_uuid",
            unique=True,
            postgresql_where=text(_ACTIVE_PREDICATE),
            sqlite_where=text(_ACTIVE_PREDICATE),
        ),
        {"comment": "Patient interests in beds"},
    )

    client_uuid: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("patients.client_uuid", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    bed_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("beds.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=InterestStatus.WAITING.value,
    )

    patient: Mapped["Patient"] = relationship("Patient", back_populates="interests")
    bed: Mapped["Bed"] = relationship("Bed", lazy="joined")

    @property
    def is_active(self) -> bool:
        return InterestStatus(self.status).is_active

    def __repr__(self) -> str:
        return f"<Interest(client_uuid={self.client_uuid}, bed_id={self.bed_id}, status={self.status})>"
