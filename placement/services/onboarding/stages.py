"""
Onboarding stage descriptors.

A deployment's onboarding flow is an ordered tuple of stages, each a named
group of fields with a validator and a normalizer per field. Stage count
and grouping are configuration: pick a profile by name, or pass a custom
tuple to the onboarding service.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from placement.core.exceptions import ConfigurationError
from placement.core.validators import (
    FieldValidator,
    normalize_amount,
    normalize_text,
    validate_approval_code,
    validate_email,
    validate_optional_amount,
    validate_phone,
    validate_required_text,
)
from placement.models import PATIENT_STAGE_FIELDS

# Name reported once every stage has been accepted.
CATALOG_STAGE = "catalog"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    validator: FieldValidator
    normalizer: Callable[[Any], Any] = normalize_text

    def __post_init__(self):
        if self.name not in PATIENT_STAGE_FIELDS:
            raise ConfigurationError(f"Field {self.name} is not a patient stage field", self.name)


@dataclass(frozen=True)
class StageDescriptor:
    """
    One onboarding stage.

    Attributes:
        name: Stable stage identifier
        title: Human-readable title for presentation layers
        fields: Fields captured, validated and persisted by this stage
    """

    name: str
    title: str
    fields: Tuple[FieldSpec, ...]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def validate(self, values: Mapping[str, Any]) -> Dict[str, List[str]]:
        """Return {field: [messages]} for every failing field of the stage."""
        errors: Dict[str, List[str]] = {}
        for spec in self.fields:
            message = spec.validator(values.get(spec.name))
            if message:
                errors[spec.name] = [message]
        return errors

    def normalize(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {spec.name: spec.normalizer(values.get(spec.name)) for spec in self.fields}


FIELD_SPECS: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("first_name", "First name", validate_required_text),
        FieldSpec("last_name", "Last name", validate_required_text),
        FieldSpec("email", "Email", validate_email),
        FieldSpec("mobile", "Mobile phone", validate_phone),
        FieldSpec("hospital", "Hospital", validate_required_text),
        FieldSpec("approval_code", "Approval code", validate_approval_code),
        FieldSpec("room_type", "Room type", validate_required_text),
        FieldSpec("rad_amount", "RAD amount", validate_optional_amount, normalize_amount),
        FieldSpec("dap_amount", "DAP amount", validate_optional_amount, normalize_amount),
        FieldSpec("means_tested_fee", "Means-tested fee", validate_optional_amount, normalize_amount),
    )
}


def build_stage(name: str, title: str, field_names: Tuple[str, ...]) -> StageDescriptor:
    return StageDescriptor(name, title, tuple(FIELD_SPECS[field] for field in field_names))


STANDARD_STAGES: Tuple[StageDescriptor, ...] = (
    build_stage("eligibility", "Eligibility", ("hospital", "approval_code")),
    build_stage("identity", "Patient details", ("first_name", "last_name", "mobile", "email")),
    build_stage("constraints", "Room and fees", ("room_type", "rad_amount", "dap_amount", "means_tested_fee")),
)

# Single screen collecting patient details and eligibility together.
SINGLE_STAGES: Tuple[StageDescriptor, ...] = (
    build_stage(
        "details",
        "Patient details",
        ("first_name", "last_name", "email", "mobile", "hospital", "approval_code"),
    ),
)

STAGE_PROFILES: Dict[str, Tuple[StageDescriptor, ...]] = {
    "standard": STANDARD_STAGES,
    "single": SINGLE_STAGES,
}


def get_stage_profile(name: str) -> Tuple[StageDescriptor, ...]:
    try:
        return STAGE_PROFILES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown onboarding profile: {name}", "ONBOARDING_PROFILE") from None


def validate_stage_sequence(stages: Tuple[StageDescriptor, ...]) -> Tuple[StageDescriptor, ...]:
    """Reject empty flows, duplicate stage names and fields owned by two stages."""
    if not stages:
        raise ConfigurationError("Onboarding needs at least one stage", "ONBOARDING_PROFILE")

    seen_stages = set()
    seen_fields = set()
    for stage in stages:
        if stage.name in seen_stages or stage.name == CATALOG_STAGE:
            raise ConfigurationError(f"Duplicate or reserved stage name: {stage.name}")
        seen_stages.add(stage.name)
        overlap = seen_fields.intersection(stage.field_names)
        if overlap:
            raise ConfigurationError(f"Fields assigned to more than one stage: {', '.join(sorted(overlap))}")
        seen_fields.update(stage.field_names)
    return tuple(stages)


__all__ = [
    "CATALOG_STAGE",
    "FIELD_SPECS",
    "FieldSpec",
    "SINGLE_STAGES",
    "STAGE_PROFILES",
    "STANDARD_STAGES",
    "StageDescriptor",
    "build_stage",
    "get_stage_profile",
    "validate_stage_sequence",
]
