"""
Patient and onboarding schemas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from placement.models.base.enums import PatientStatus
from placement.schemas.common.base import BaseResponseSchema, BaseSchema
from placement.services.onboarding.session import OnboardingSession

__all__ = [
    "PatientResponse",
    "OnboardingFieldsUpdate",
    "StageFieldView",
    "OnboardingView",
]


class PatientResponse(BaseResponseSchema):
    client_uuid: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    hospital: Optional[str] = None
    approval_code: Optional[str] = None
    room_type: Optional[str] = None
    rad_amount: Optional[Decimal] = None
    dap_amount: Optional[Decimal] = None
    means_tested_fee: Optional[Decimal] = None
    status: PatientStatus
    version: int


class OnboardingFieldsUpdate(BaseSchema):
    """Edits to fields of the current stage."""

    fields: Dict[str, Any] = Field(
        ...,
        description="Field name -> value, restricted to the current stage",
        examples=[{"hospital": "Royal North Shore", "approval_code": "2-163295213558"}],
    )


class StageFieldView(BaseSchema):
    name: str
    label: str
    value: Optional[Any] = None
    error: Optional[str] = None


class OnboardingView(BaseSchema):
    """Where an identity stands in onboarding."""

    client_uuid: str
    status: PatientStatus
    stage: str
    stage_title: Optional[str] = None
    stage_number: int
    stage_count: int
    is_complete: bool
    fields: List[StageFieldView] = Field(default_factory=list)
    unsaved_fields: List[str] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: OnboardingSession) -> "OnboardingView":
        stage = session.current_stage
        fields: List[StageFieldView] = []
        if stage is not None:
            errors = stage.validate(session.values)
            for spec in stage.fields:
                value = session.values.get(spec.name)
                fields.append(
                    StageFieldView(
                        name=spec.name,
                        label=spec.label,
                        value=str(value) if isinstance(value, Decimal) else value,
                        error=errors.get(spec.name, [None])[0],
                    )
                )
        return cls(
            client_uuid=session.client_uuid,
            status=PatientStatus(session.status),
            stage=session.stage_name,
            stage_title=stage.title if stage else None,
            stage_number=min(session.stage_index + 1, len(session.stages)),
            stage_count=len(session.stages),
            is_complete=session.is_complete,
            fields=fields,
            unsaved_fields=sorted(session.dirty),
        )
