"""
Patient record model.

One row per client identity, carrying every onboarding stage field and
the draft/onboarded checkpoint used to resume a session.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from placement.core.validators import AMOUNT_PRECISION, AMOUNT_SCALE
from placement.models.base import BaseModel, PatientStatus, TimestampMixin

if TYPE_CHECKING:
    from placement.models.interest import Interest

__all__ = ["Patient", "PATIENT_STAGE_FIELDS"]

# Columns that onboarding stages are allowed to write.
PATIENT_STAGE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "mobile",
    "hospital",
    "approval_code",
    "room_type",
    "rad_amount",
    "dap_amount",
    "means_tested_fee",
)


class Patient(BaseModel, TimestampMixin):
    """
    Onboarding subject keyed by its client identity.

    Attributes:
        client_uuid: Durable client identity (unique)
        first_name / last_name / email / mobile: Identity stage
        hospital / approval_code: Eligibility stage
        room_type / rad_amount / dap_amount / means_tested_fee: Constraints stage
        status: draft until the final stage is accepted, then onboarded
        version: Incremented on every committed write
    """

    __tablename__ = "patients"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'onboarded')",
            name="check_patient_status",
        ),
        {"comment": "Patients awaiting placement"},
    )

    client_uuid: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        index=True,
        comment="Client identity token",
    )

    # Identity
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    mobile: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Eligibility
    hospital: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    approval_code: Mapped[Optional[str]] = mapped_column(String(14), nullable=True)

    # Constraints
    room_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    rad_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)
    dap_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)
    means_tested_fee: Mapped[Optional[Decimal]] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PatientStatus.DRAFT.value,
        index=True,
    )
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Write counter used to order and reject superseded writes",
    )

    interests: Mapped[List["Interest"]] = relationship(
        "Interest",
        back_populates="patient",
        lazy="select",
    )

    @property
    def is_onboarded(self) -> bool:
        return self.status == PatientStatus.ONBOARDED.value

    def __repr__(self) -> str:
        return f"<Patient(client_uuid={self.client_uuid}, status={self.status})>"
