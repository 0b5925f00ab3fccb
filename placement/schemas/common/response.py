"""
Error envelope returned by the HTTP surface.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field

from placement.schemas.common.base import BaseSchema

__all__ = ["ErrorDetail", "ErrorResponse"]


class ErrorDetail(BaseSchema):
    message: str
    code: str
    type: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseSchema):
    error: ErrorDetail
    request_id: Optional[str] = None
