"""
Interest schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from placement.models.base.enums import InterestStatus
from placement.schemas.bed import BedResponse
from placement.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = ["InterestCreate", "InterestResponse", "ActiveInterestResponse"]


class InterestCreate(BaseSchema):
    bed_id: str = Field(..., min_length=1, max_length=36, description="Bed being claimed")

    @field_validator("bed_id")
    @classmethod
    def validate_bed_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Bed ID cannot be empty")
        return v


class InterestResponse(BaseResponseSchema):
    client_uuid: str
    bed_id: str
    status: InterestStatus
    bed: Optional[BedResponse] = None


class ActiveInterestResponse(BaseSchema):
    interest: Optional[InterestResponse] = None
