from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from placement.db.init_db import init_db
from placement.db.session import build_engine, build_session_factory, get_db
from placement.models import ACTIVE_INTEREST_STATUSES, Bed, BedStatus, Interest, PatientStatus
from placement.repositories import RecordStore
from placement.services.onboarding import session_registry

APPROVAL_CODE = "2-163295213558"

ONBOARDED_FIELDS = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "mobile": "0412345678",
    "hospital": "Royal North Shore",
    "approval_code": APPROVAL_CODE,
    "room_type": "single",
    "rad_amount": Decimal("350000"),
    "dap_amount": None,
    "means_tested_fee": Decimal("12.50"),
}


@pytest.fixture
def engine(tmp_path):
    # File-backed so threads get separate connections to the same database
    engine = build_engine(f"sqlite:///{tmp_path / 'placement-test.db'}", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session):
    return RecordStore(db_session)


@pytest.fixture
def make_bed(db_session) -> Callable[..., Bed]:
    def _make_bed(
        available_from: date = date(2026, 11, 1),
        status: str = BedStatus.OPEN.value,
        facility_name: str = "Harbourview Care",
        suburb: str = "Mosman",
        room_type: str = "single",
        rad_amount: Optional[Decimal] = Decimal("450000"),
        dap_amount: Optional[Decimal] = None,
        id: Optional[str] = None,
    ) -> Bed:
        bed = Bed(
            facility_name=facility_name,
            suburb=suburb,
            room_type=room_type,
            available_from=available_from,
            rad_amount=rad_amount,
            dap_amount=dap_amount,
            status=status,
        )
        if id is not None:
            bed.id = id
        db_session.add(bed)
        db_session.commit()
        return bed

    return _make_bed


@pytest.fixture
def make_onboarded_patient(store):
    def _make(client_uuid: str):
        store.create_draft_patient(client_uuid)
        fields = dict(ONBOARDED_FIELDS, status=PatientStatus.ONBOARDED.value)
        return store.update_patient(client_uuid, fields)

    return _make


@pytest.fixture
def client(session_factory):
    from placement.main import create_app

    app = create_app(initialize_database=False)

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    session_registry.clear()
    with TestClient(app) as test_client:
        yield test_client
    session_registry.clear()


def interests_of(session, client_uuid: str):
    """Every interest of an identity, oldest first."""
    stmt = (
        select(Interest)
        .where(Interest.client_uuid == client_uuid)
        .order_by(Interest.created_at.asc(), Interest.id.asc())
    )
    return list(session.scalars(stmt))


def active_interest_count(session, client_uuid: str) -> int:
    stmt = (
        select(func.count())
        .select_from(Interest)
        .where(
            Interest.client_uuid == client_uuid,
            Interest.status.in_([status.value for status in ACTIVE_INTEREST_STATUSES]),
        )
    )
    return session.scalar(stmt)
