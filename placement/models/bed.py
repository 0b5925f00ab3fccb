"""
Bed (allocatable unit) model.

Rows are owned by the external inventory process; the engine only reads
beds that are open for allocation.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from placement.core.validators import AMOUNT_PRECISION, AMOUNT_SCALE
from placement.models.base import BaseModel, BedStatus, TimestampMixin

__all__ = ["Bed"]


class Bed(BaseModel, TimestampMixin):
    """
    Individual bed offered by a facility.

    Attributes:
        facility_name: Facility operating the bed
        suburb: Facility location
        room_type: Room category (single, shared, ...)
        available_from: Date the bed becomes available
        rad_amount / dap_amount: Published figures, may be null
        status: open, closed, reserved or maintenance
    """

    __tablename__ = "beds"
    __table_args__ = (
        Index("ix_beds_status_available_from", "status", "available_from", "id"),
        {"comment": "Allocatable beds"},
    )

    facility_name: Mapped[str] = mapped_column(String(255), nullable=False)
    suburb: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    room_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    available_from: Mapped[date] = mapped_column(Date, nullable=False)

    rad_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)
    dap_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BedStatus.OPEN.value,
    )

    @property
    def is_open(self) -> bool:
        return self.status == BedStatus.OPEN.value

    def __repr__(self) -> str:
        return f"<Bed(id={self.id}, facility={self.facility_name}, status={self.status})>"
