import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from placement.core.exceptions import (
    AllocationConflict,
    ResourceNotFoundError,
    StaleWrite,
    ValidationError,
)
from placement.models import BedStatus, InterestStatus, Patient, PatientStatus
from placement.repositories import RecordStore

from tests.conftest import active_interest_count, interests_of

CLIENT = "0b5c8f1e-3d7a-4f2b-9e61-1c2d3e4f5a6b"


def test_get_patient_missing(store):
    assert store.get_patient(CLIENT) is None


def test_create_draft_patient_is_idempotent(store):
    first = store.create_draft_patient(CLIENT)
    second = store.create_draft_patient(CLIENT)

    assert first.id == second.id
    assert first.status == PatientStatus.DRAFT.value
    assert first.version == 1
    assert store.patients.count() == 1


def test_concurrent_first_visits_create_one_record(session_factory):
    workers = 6
    barrier = threading.Barrier(workers)

    def visit():
        session = session_factory()
        try:
            barrier.wait()
            return RecordStore(session).create_draft_patient(CLIENT).id
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        ids = list(pool.map(lambda _: visit(), range(workers)))

    assert len(set(ids)) == 1
    session = session_factory()
    try:
        assert RecordStore(session).patients.count() == 1
    finally:
        session.close()


def test_update_patient_writes_all_fields_and_bumps_version(store):
    store.create_draft_patient(CLIENT)

    patient = store.update_patient(
        CLIENT, {"hospital": "Royal North Shore", "approval_code": "2-163295213558"}
    )

    assert patient.hospital == "Royal North Shore"
    assert patient.approval_code == "2-163295213558"
    assert patient.version == 2


def test_update_patient_rejects_superseded_write(store):
    store.create_draft_patient(CLIENT)
    store.update_patient(CLIENT, {"hospital": "Westmead"}, expected_version=1)

    with pytest.raises(StaleWrite) as exc_info:
        store.update_patient(CLIENT, {"hospital": "Concord", "first_name": "Ada"}, expected_version=1)

    assert exc_info.value.details["current_version"] == 2
    patient = store.get_patient(CLIENT)
    assert patient.hospital == "Westmead"
    assert patient.first_name is None
    assert patient.version == 2


def test_update_patient_rejects_unknown_fields(store):
    store.create_draft_patient(CLIENT)

    with pytest.raises(ValidationError) as exc_info:
        store.update_patient(CLIENT, {"hospital": "Westmead", "client_uuid": "other"})

    assert "client_uuid" in exc_info.value.field_errors
    assert store.get_patient(CLIENT).hospital is None


def test_update_patient_missing_record(store):
    with pytest.raises(ResourceNotFoundError):
        store.update_patient(CLIENT, {"hospital": "Westmead"})


def test_list_open_units_order_and_filter(store, make_bed):
    make_bed(id="bed-b", available_from=date(2026, 11, 5))
    make_bed(id="bed-a", available_from=date(2026, 11, 5))
    make_bed(id="bed-c", available_from=date(2026, 11, 1), room_type="shared")
    make_bed(id="bed-d", available_from=date(2026, 10, 1), status=BedStatus.CLOSED.value)
    make_bed(id="bed-e", available_from=date(2026, 10, 1), status=BedStatus.RESERVED.value)

    assert [bed.id for bed in store.list_open_units()] == ["bed-c", "bed-a", "bed-b"]
    assert [bed.id for bed in store.list_open_units("single")] == ["bed-a", "bed-b"]


def test_create_interest_and_conflict(store, make_bed):
    store.create_draft_patient(CLIENT)
    first_bed = make_bed()
    second_bed = make_bed()

    interest = store.create_interest(CLIENT, first_bed.id)
    assert interest.status == InterestStatus.WAITING.value
    assert store.get_active_interest(CLIENT).id == interest.id

    with pytest.raises(AllocationConflict) as exc_info:
        store.create_interest(CLIENT, second_bed.id)

    assert exc_info.value.details["active_interest_id"] == interest.id
    assert active_interest_count(store.session, CLIENT) == 1


def test_active_interest_index_rejects_insert_without_precheck(store, make_bed):
    store.create_draft_patient(CLIENT)
    store.create_interest(CLIENT, make_bed().id)

    with pytest.raises(IntegrityError):
        store.interests.create(
            {"client_uuid": CLIENT, "bed_id": make_bed().id, "status": InterestStatus.OFFERED.value}
        )

    assert active_interest_count(store.session, CLIENT) == 1


def test_inactive_interests_do_not_block(store, make_bed):
    store.create_draft_patient(CLIENT)
    first = store.create_interest(CLIENT, make_bed().id)

    store.set_interest_status(first.id, InterestStatus.WITHDRAWN)
    assert store.get_active_interest(CLIENT) is None

    second = store.create_interest(CLIENT, make_bed().id)
    assert store.get_active_interest(CLIENT).id == second.id
    assert len(interests_of(store.session, CLIENT)) == 2


def test_reactivating_interest_conflicts_with_active_one(store, make_bed):
    store.create_draft_patient(CLIENT)
    first = store.create_interest(CLIENT, make_bed().id)
    store.set_interest_status(first.id, InterestStatus.DECLINED)
    second = store.create_interest(CLIENT, make_bed().id)

    with pytest.raises(AllocationConflict) as exc_info:
        store.set_interest_status(first.id, InterestStatus.OFFERED)

    assert exc_info.value.details["active_interest_id"] == second.id
    assert active_interest_count(store.session, CLIENT) == 1


def test_set_interest_status_missing(store):
    with pytest.raises(ResourceNotFoundError):
        store.set_interest_status("missing", InterestStatus.WITHDRAWN)


def test_patient_status_check_constraint(db_session):
    db_session.add(Patient(client_uuid=CLIENT, status="archived", version=1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_reset_db_recreates_empty_tables(engine, session_factory, store):
    from placement.db.init_db import reset_db

    store.create_draft_patient(CLIENT)
    store.session.close()

    reset_db(engine)

    session = session_factory()
    try:
        assert RecordStore(session).get_patient(CLIENT) is None
    finally:
        session.close()
