"""
Identity schemas.
"""

from __future__ import annotations

from pydantic import Field

from placement.schemas.common.base import BaseSchema

__all__ = ["IdentityResponse"]


class IdentityResponse(BaseSchema):
    client_uuid: str = Field(..., description="Durable client identity token")
    issued: bool = Field(
        default=False,
        description="True when the token was generated by this request",
    )
