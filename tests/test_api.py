from datetime import date

from placement.config.settings import settings

API = settings.API_V1_STR
STANDARD_FLOW = (
    {"hospital": "Royal North Shore", "approval_code": "2-163295213558"},
    {"first_name": "Ada", "last_name": "Lovelace", "mobile": "0412345678", "email": "ada@example.com"},
    {"room_type": "single", "rad_amount": "350000", "dap_amount": "", "means_tested_fee": ""},
)


def onboard(client):
    for values in STANDARD_FLOW:
        assert client.put(f"{API}/onboarding/fields", json={"fields": values}).status_code == 200
        response = client.post(f"{API}/onboarding/advance")
        assert response.status_code == 200, response.json()
    return response.json()


def test_health(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_identity_is_issued_once_and_reused(client):
    first = client.post(f"{API}/identity")
    assert first.status_code == 200
    body = first.json()
    assert body["issued"] is True
    assert client.cookies.get(settings.IDENTITY_COOKIE_NAME) == body["client_uuid"]

    second = client.post(f"{API}/identity").json()
    assert second == {"client_uuid": body["client_uuid"], "issued": False}


def test_identity_header_is_honoured(client):
    token = "6f1c1a2e-8a4b-4c55-9d7e-0b8f3f2a9c11"

    response = client.post(f"{API}/identity", headers={settings.IDENTITY_HEADER_NAME: token})

    assert response.json() == {"client_uuid": token, "issued": False}


def test_onboarding_starts_at_first_stage(client):
    body = client.get(f"{API}/onboarding").json()

    assert body["status"] == "draft"
    assert body["stage"] == "eligibility"
    assert body["stage_count"] == 3
    assert [field["name"] for field in body["fields"]] == ["hospital", "approval_code"]


def test_invalid_stage_returns_422_and_saves_nothing(client):
    client.get(f"{API}/onboarding")
    client.put(
        f"{API}/onboarding/fields",
        json={"fields": {"hospital": "Royal North Shore", "approval_code": "0-123456789012"}},
    )

    response = client.post(f"{API}/onboarding/advance")

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert list(error["details"]["field_errors"]) == ["approval_code"]

    record = client.get(f"{API}/onboarding/record").json()
    assert record["approval_code"] is None
    assert record["hospital"] is None
    assert record["version"] == 1


def test_back_endpoint(client):
    client.put(f"{API}/onboarding/fields", json={"fields": STANDARD_FLOW[0]})
    client.post(f"{API}/onboarding/advance")

    body = client.post(f"{API}/onboarding/back").json()
    assert body["stage"] == "eligibility"

    response = client.post(f"{API}/onboarding/back")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVALID_STATE"


def test_interest_requires_onboarding(client, make_bed):
    bed = make_bed()

    response = client.post(f"{API}/interests", json={"bed_id": bed.id})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NOT_ONBOARDED"


def test_full_flow_allocates_one_interest(client, make_bed):
    later = make_bed(id="bed-later", available_from=date(2026, 12, 1))
    sooner = make_bed(id="bed-sooner", available_from=date(2026, 11, 1))

    final = onboard(client)
    assert final["stage"] == "catalog"
    assert final["is_complete"] is True
    assert final["status"] == "onboarded"

    beds = client.get(f"{API}/beds").json()
    assert [item["id"] for item in beds["items"]] == [sooner.id, later.id]
    assert beds["count"] == 2

    assert client.get(f"{API}/interests/active").json() == {"interest": None}

    created = client.post(f"{API}/interests", json={"bed_id": sooner.id})
    assert created.status_code == 201
    assert created.json()["status"] == "waiting"
    assert created.json()["bed"]["id"] == sooner.id

    conflict = client.post(f"{API}/interests", json={"bed_id": later.id})
    assert conflict.status_code == 409
    assert conflict.json()["error"]["code"] == "ALLOCATION_CONFLICT"

    active = client.get(f"{API}/interests/active").json()["interest"]
    assert active["bed_id"] == sooner.id


def test_unknown_bed_returns_404(client):
    onboard(client)

    response = client.post(f"{API}/interests", json={"bed_id": "no-such-bed"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


def test_finished_onboarding_leaves_no_cached_session(client):
    from placement.services.onboarding import session_registry

    onboard(client)

    assert len(session_registry) == 0
    assert client.get(f"{API}/onboarding").json()["stage"] == "catalog"
    assert len(session_registry) == 0


def test_onboarding_view_follows_the_stored_status(client, store):
    from placement.models import PatientStatus
    from tests.conftest import ONBOARDED_FIELDS

    client_uuid = client.get(f"{API}/onboarding").json()["client_uuid"]
    store.update_patient(client_uuid, dict(ONBOARDED_FIELDS, status=PatientStatus.ONBOARDED.value))

    body = client.get(f"{API}/onboarding").json()

    assert body["stage"] == "catalog"
    assert body["status"] == "onboarded"
