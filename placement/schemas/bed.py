"""
Bed schemas.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from placement.models.base.enums import BedStatus
from placement.schemas.common.base import BaseSchema

__all__ = ["BedResponse", "BedListResponse"]


class BedResponse(BaseSchema):
    """Open bed as shown in the catalog."""

    id: str
    facility_name: str
    suburb: str
    room_type: str
    available_from: date
    rad_amount: Optional[Decimal] = None
    dap_amount: Optional[Decimal] = None
    status: BedStatus


class BedListResponse(BaseSchema):
    items: List[BedResponse] = Field(default_factory=list)
    count: int = 0
