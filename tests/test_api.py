"""
Tests for the HTTP surface.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from fixtures import SECRET, make_appointment
from tuturno.application.use_cases.request_reschedule import RequestRescheduleUseCase
from tuturno.application.use_cases.respond_to_appointment import RespondToAppointmentUseCase
from tuturno.application.use_cases.service_employee_selection import ServiceEmployeeSelection
from tuturno.domain.entities.booking import Employee
from tuturno.infrastructure.memory.appointment_store import MemoryAppointmentStore
from tuturno.infrastructure.memory.employee_directory import MemoryEmployeeDirectory
from tuturno.infrastructure.memory.mock_notifier import MockNotifier
from tuturno.infrastructure.security.action_token import AppointmentTokenSigner
from tuturno.infrastructure.supabase.appointment_store import SupabaseAppointmentStore
from tuturno.main import ContextFormatter, app
from tuturno.wiring.dependencies import (
    get_request_reschedule_use_case,
    get_respond_use_case,
    get_service_employee_selection,
)


@pytest.fixture
def store():
    return MemoryAppointmentStore([make_appointment("appt-1"), make_appointment("appt-2", status="confirmed")])


@pytest.fixture
def notifier():
    return MockNotifier()


@pytest.fixture
def client(store, notifier):
    signer = AppointmentTokenSigner(SECRET)
    directory = MemoryEmployeeDirectory(
        {
            "svc-1": [Employee("e1", "Luis", "Mora"), Employee("e2", "Eva", "Ruiz")],
            "svc-2": [Employee("e2", "Eva", "Ruiz"), Employee("e3", "Tomás", "Vera")],
            "svc-3": [Employee("e4", "Sara", "León")],
        },
        failing_services={"svc-broken"},
    )
    app.dependency_overrides[get_respond_use_case] = lambda: RespondToAppointmentUseCase(
        store=store, notifier=notifier, signer=signer
    )
    app.dependency_overrides[get_request_reschedule_use_case] = lambda: RequestRescheduleUseCase(
        store=store, notifier=notifier, signer=signer
    )
    app.dependency_overrides[get_service_employee_selection] = lambda: ServiceEmployeeSelection(directory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _token(appointment_id: str) -> str:
    return AppointmentTokenSigner(SECRET).generate(appointment_id)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_respond_accept(client, store):
    resp = client.post("/api/appointments/appt-1/respond", json={"action": "accept", "token": _token("appt-1")})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["redirect_url"] == "/dashboard/client/appointments"
    assert store.get_appointment("appt-1").status == "confirmed"


def test_respond_cancel_notifies(client, store, notifier):
    resp = client.post("/api/appointments/appt-1/respond", json={"action": "cancel", "token": _token("appt-1")})

    assert resp.status_code == 200
    assert store.get_appointment("appt-1").status == "cancelled"
    assert notifier.cancellations[0][0] == "appt-1"


def test_respond_missing_fields(client):
    resp = client.post("/api/appointments/appt-1/respond", json={"action": "accept"})
    assert resp.status_code == 400


def test_respond_invalid_action(client):
    resp = client.post("/api/appointments/appt-1/respond", json={"action": "delete", "token": _token("appt-1")})
    assert resp.status_code == 400


def test_respond_rejections_are_indistinguishable(client):
    tampered = _token("appt-1")[:-1] + ("0" if _token("appt-1")[-1] != "0" else "1")
    bad_signature = client.post("/api/appointments/appt-1/respond", json={"action": "accept", "token": tampered})
    wrong_id = client.post("/api/appointments/appt-404/respond", json={"action": "accept", "token": _token("appt-1")})

    assert bad_signature.status_code == 403
    assert wrong_id.status_code == 403
    assert bad_signature.json() == wrong_id.json() == {"detail": "Invalid or expired link"}


def test_respond_unknown_appointment(client):
    resp = client.post("/api/appointments/appt-404/respond", json={"action": "accept", "token": _token("appt-404")})
    assert resp.status_code == 404


def test_respond_not_pending(client):
    resp = client.post("/api/appointments/appt-2/respond", json={"action": "accept", "token": _token("appt-2")})

    assert resp.status_code == 400
    assert resp.json()["detail"]["current_status"] == "confirmed"


def test_send_reschedule_request(client, notifier):
    resp = client.post("/api/send-reschedule-request", json={"appointment_id": "appt-1", "closed_date": "2026-11-03"})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert notifier.reschedule_emails[0]["token"] == _token("appt-1")


def test_send_reschedule_request_without_secret(client, store, notifier):
    app.dependency_overrides[get_request_reschedule_use_case] = lambda: RequestRescheduleUseCase(
        store=store, notifier=notifier, signer=AppointmentTokenSigner(None)
    )

    resp = client.post("/api/send-reschedule-request", json={"appointment_id": "appt-1", "closed_date": "2026-11-03"})

    assert resp.status_code == 500
    assert notifier.reschedule_emails == []


def test_send_reschedule_request_unknown_appointment(client):
    resp = client.post("/api/send-reschedule-request", json={"appointment_id": "nope", "closed_date": "2026-11-03"})
    assert resp.status_code == 404


def _services(*ids):
    return [{"id": sid, "name": sid.upper(), "price": 10, "duration_minutes": 30} for sid in ids]


def test_compatibility_replays_selections(client):
    resp = client.post(
        "/api/booking/compatibility",
        json={"services": _services("svc-1", "svc-2", "svc-3"), "selections": [{"service_id": "svc-1", "employee_id": "e1"}]},
    )

    assert resp.status_code == 200
    body = resp.json()
    pairs = {p["service"]["id"]: p for p in body["pairs"]}
    assert pairs["svc-1"]["employee"]["id"] == "e1"
    assert pairs["svc-2"]["is_compatible"] is False
    assert "SVC-1" in pairs["svc-2"]["reason"]
    assert pairs["svc-3"]["is_compatible"] is False
    assert body["can_proceed"] is True
    assert [e["id"] for e in body["common_employees"]] == ["e1", "e2"]


def test_compatibility_auto_assigns_and_degrades_failed_lookup(client):
    resp = client.post(
        "/api/booking/compatibility",
        json={"services": _services("svc-3", "svc-broken"), "selections": [{"service_id": "svc-3"}]},
    )

    body = resp.json()
    pairs = {p["service"]["id"]: p for p in body["pairs"]}
    assert pairs["svc-3"]["employee"]["id"] == "e4"
    assert pairs["svc-broken"]["candidate_employees"] == []
    assert pairs["svc-broken"]["is_compatible"] is False
    assert body["can_proceed"] is True


def test_compatibility_rejects_unknown_employee(client):
    resp = client.post(
        "/api/booking/compatibility",
        json={"services": _services("svc-1"), "selections": [{"service_id": "svc-1", "employee_id": "e9"}]},
    )
    assert resp.status_code == 400


def test_compatibility_rejects_unknown_service(client):
    resp = client.post(
        "/api/booking/compatibility",
        json={"services": _services("svc-1"), "selections": [{"service_id": "svc-9"}]},
    )
    assert resp.status_code == 400


def test_respond_unparseable_backend_body_is_bad_gateway(client, notifier):
    supabase = MagicMock()
    query = supabase.table.return_value.select.return_value.eq.return_value.limit.return_value
    query.execute.side_effect = json.JSONDecodeError("Expecting value", "<html>gateway</html>", 0)
    app.dependency_overrides[get_respond_use_case] = lambda: RespondToAppointmentUseCase(
        store=SupabaseAppointmentStore(supabase), notifier=notifier, signer=AppointmentTokenSigner(SECRET)
    )

    resp = client.post("/api/appointments/appt-1/respond", json={"action": "accept", "token": _token("appt-1")})

    assert resp.status_code == 502


def test_lifespan_shuts_down_backend_clients():
    with patch("tuturno.main.shutdown_backend_clients") as shutdown:
        with TestClient(app) as test_client:
            assert test_client.get("/health").status_code == 200
            shutdown.assert_not_called()
        shutdown.assert_called_once()


def test_context_formatter_appends_booking_keys():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")
    record = logging.LogRecord("tuturno.test", logging.INFO, __file__, 1, "Appointment status updated", None, None)
    record.appointment_id = "appt-1"
    record.status = "confirmed"
    record.service_id = ""

    line = formatter.format(record)

    assert line == "INFO:tuturno.test:Appointment status updated | appointment_id=appt-1 status=confirmed"
