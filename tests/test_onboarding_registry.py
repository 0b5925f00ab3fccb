from placement.models import PatientStatus
from placement.services.onboarding import (
    CATALOG_STAGE,
    STANDARD_STAGES,
    OnboardingService,
    OnboardingSessionRegistry,
)

from tests.conftest import ONBOARDED_FIELDS

CLIENT = "5d8e2f1a-6b7c-4d9e-8f0a-1b2c3d4e5f60"


def open_session(registry, service):
    return registry.get_or_start(CLIENT, service.start, service.is_stale).unwrap()


def test_cached_session_keeps_buffered_edits(store):
    registry = OnboardingSessionRegistry()
    service = OnboardingService(store, stages=STANDARD_STAGES)
    session = open_session(registry, service)
    service.set_fields(session, {"hospital": "Westmead"})

    again = open_session(registry, service)

    assert again is session
    assert again.dirty == {"hospital"}


def test_session_reloads_when_record_changed_elsewhere(store):
    registry = OnboardingSessionRegistry()
    service = OnboardingService(store, stages=STANDARD_STAGES)
    cached = open_session(registry, service)
    assert cached.stage_name == "eligibility"

    store.update_patient(CLIENT, dict(ONBOARDED_FIELDS, status=PatientStatus.ONBOARDED.value))

    reopened = open_session(registry, service)
    assert reopened is not cached
    assert reopened.stage_name == CATALOG_STAGE
    assert len(registry) == 0


def test_draft_write_elsewhere_replaces_cached_session(store):
    registry = OnboardingSessionRegistry()
    service = OnboardingService(store, stages=STANDARD_STAGES)
    cached = open_session(registry, service)

    store.update_patient(CLIENT, {"hospital": "Concord"})

    reopened = open_session(registry, service)
    assert reopened is not cached
    assert reopened.stage_values()["hospital"] == "Concord"
    assert registry.get(CLIENT) is reopened


def test_completed_session_is_released(store):
    registry = OnboardingSessionRegistry()
    service = OnboardingService(store, stages=STANDARD_STAGES)
    session = open_session(registry, service)
    for stage in STANDARD_STAGES:
        service.set_fields(session, {name: ONBOARDED_FIELDS[name] for name in stage.field_names})
        assert service.advance(session).is_success
        registry.release(session)

    assert session.is_complete
    assert len(registry) == 0
    assert open_session(registry, service).stage_name == CATALOG_STAGE
    assert len(registry) == 0
