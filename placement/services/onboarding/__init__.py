from placement.services.onboarding.onboarding_service import OnboardingService
from placement.services.onboarding.registry import OnboardingSessionRegistry, session_registry
from placement.services.onboarding.session import OnboardingSession, PersistenceMode
from placement.services.onboarding.stages import (
    CATALOG_STAGE,
    FIELD_SPECS,
    SINGLE_STAGES,
    STAGE_PROFILES,
    STANDARD_STAGES,
    FieldSpec,
    StageDescriptor,
    build_stage,
    get_stage_profile,
)

__all__ = [
    "CATALOG_STAGE",
    "FIELD_SPECS",
    "FieldSpec",
    "OnboardingService",
    "OnboardingSession",
    "OnboardingSessionRegistry",
    "PersistenceMode",
    "SINGLE_STAGES",
    "STAGE_PROFILES",
    "STANDARD_STAGES",
    "StageDescriptor",
    "build_stage",
    "get_stage_profile",
    "session_registry",
]
