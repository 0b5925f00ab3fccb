"""
Onboarding endpoints.

The buffered edits of each identity live in the session registry between
requests; every transition goes through the onboarding service.
"""

from fastapi import APIRouter, Depends

from placement.api import deps
from placement.core.exceptions import ErrorCode
from placement.repositories.record_store import RecordStore
from placement.schemas.patient import OnboardingFieldsUpdate, OnboardingView, PatientResponse
from placement.services.base import ServiceResult
from placement.services.onboarding import (
    OnboardingService,
    OnboardingSession,
    OnboardingSessionRegistry,
)

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


def _open_session(
    client_uuid: str,
    service: OnboardingService,
    registry: OnboardingSessionRegistry,
) -> OnboardingSession:
    return registry.get_or_start(client_uuid, service.start, service.is_stale).unwrap()


def _finish(
    result: ServiceResult[OnboardingSession],
    client_uuid: str,
    registry: OnboardingSessionRegistry,
) -> OnboardingView:
    if result.error_code == ErrorCode.STALE_WRITE:
        # Another tab or device saved first; reload from the store next time.
        registry.discard(client_uuid)
    session = result.unwrap()
    registry.release(session)
    return OnboardingView.from_session(session)


@router.get("", response_model=OnboardingView)
def get_onboarding(
    client_uuid: str = Depends(deps.get_client_uuid),
    service: OnboardingService = Depends(deps.get_onboarding_service),
    registry: OnboardingSessionRegistry = Depends(deps.get_session_registry),
) -> OnboardingView:
    """Load or create the caller's record and return the current stage."""
    return OnboardingView.from_session(_open_session(client_uuid, service, registry))


@router.get("/record", response_model=PatientResponse)
def get_record(
    client_uuid: str = Depends(deps.get_client_uuid),
    store: RecordStore = Depends(deps.get_store),
) -> PatientResponse:
    """Persisted patient record of the caller."""
    return PatientResponse.model_validate(store.patients.get_by_client_uuid(client_uuid))


@router.put("/fields", response_model=OnboardingView)
def set_fields(
    payload: OnboardingFieldsUpdate,
    client_uuid: str = Depends(deps.get_client_uuid),
    service: OnboardingService = Depends(deps.get_onboarding_service),
    registry: OnboardingSessionRegistry = Depends(deps.get_session_registry),
) -> OnboardingView:
    """Edit fields of the current stage."""
    session = _open_session(client_uuid, service, registry)
    return _finish(service.set_fields(session, payload.fields), client_uuid, registry)


@router.post("/advance", response_model=OnboardingView)
def advance(
    client_uuid: str = Depends(deps.get_client_uuid),
    service: OnboardingService = Depends(deps.get_onboarding_service),
    registry: OnboardingSessionRegistry = Depends(deps.get_session_registry),
) -> OnboardingView:
    """Validate and save the current stage, then move to the next one."""
    session = _open_session(client_uuid, service, registry)
    return _finish(service.advance(session), client_uuid, registry)


@router.post("/back", response_model=OnboardingView)
def back(
    client_uuid: str = Depends(deps.get_client_uuid),
    service: OnboardingService = Depends(deps.get_onboarding_service),
    registry: OnboardingSessionRegistry = Depends(deps.get_session_registry),
) -> OnboardingView:
    """Return to the previous stage."""
    session = _open_session(client_uuid, service, registry)
    return _finish(service.back(session), client_uuid, registry)
