from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.application.use_cases.manage_settings import SystemPromptSettingsUseCase
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.infrastructure.llm.prompts import DEFAULT_SYSTEM_PROMPT
from app.main import app
from app.wiring.dependencies import (
    get_catalog,
    get_manage_bookings_use_case,
    get_system_prompt_settings_use_case,
)


@pytest.fixture
def client(catalog, booking_repository, settings_store):
    uc = ManageBookingsUseCase(
        repository=booking_repository,
        catalog=catalog,
        create_booking=CreateBookingUseCase(repository=booking_repository, catalog=catalog),
    )
    app.dependency_overrides[get_manage_bookings_use_case] = lambda: uc
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_system_prompt_settings_use_case] = lambda: SystemPromptSettingsUseCase(
        settings_store=settings_store, setting_key="GEMINI_SYSTEM_PROMPT"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _form(**overrides):
    body = {
        "customer_name": " 王小明 ",
        "phone": "0912345678",
        "service_type": "基本洗車",
        "start_time": "2026-10-20T15:00:00+08:00",
        "store_id": "s-north",
    }
    body.update(overrides)
    return body


def test_booking_form_creates_pending_booking(client, booking_repository):
    resp = client.post("/api/v1/bookings", json=_form())
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "PENDING"
    assert data["customer_name"] == "王小明"
    assert data["store_id"] == "s-north"
    assert len(booking_repository.list_bookings()) == 1


def test_booking_form_rejects_unknown_or_inactive_store(client):
    assert client.post("/api/v1/bookings", json=_form(store_id="nope")).status_code == 400
    assert client.post("/api/v1/bookings", json=_form(store_id="s-closed")).status_code == 400


def test_booking_form_rejects_blank_contact(client):
    assert client.post("/api/v1/bookings", json=_form(phone="   ")).status_code == 400
    assert client.post("/api/v1/bookings", json=_form(customer_name="")).status_code == 422


def test_booking_form_requires_offset(client):
    assert client.post("/api/v1/bookings", json=_form(start_time="2026-10-20T15:00:00")).status_code == 422


def _seed(booking_repository) -> str:
    booking = booking_repository.create(
        BookingRecord(
            customer_name="A",
            phone="1",
            service_type="S",
            start_time=datetime(2026, 10, 20, 7, tzinfo=timezone.utc),
        )
    )
    return booking.id


def test_list_and_filter_bookings(client, booking_repository):
    booking_id = _seed(booking_repository)
    assert [b["id"] for b in client.get("/api/v1/bookings").json()] == [booking_id]
    assert client.get("/api/v1/bookings", params={"status": "COMPLETED"}).json() == []


def test_status_update_transitions(client, booking_repository):
    booking_id = _seed(booking_repository)

    resp = client.patch(f"/api/v1/bookings/{booking_id}/status", json={"status": "COMPLETED"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "COMPLETED"
    assert booking_repository.get(booking_id).status == BookingStatus.COMPLETED

    resp = client.patch(f"/api/v1/bookings/{booking_id}/status", json={"status": "CANCELLED"})
    assert resp.status_code == 409


def test_status_update_unknown_booking(client):
    resp = client.patch("/api/v1/bookings/missing/status", json={"status": "CANCELLED"})
    assert resp.status_code == 404


def test_catalog_endpoints_list_active_rows(client):
    stores = client.get("/api/v1/catalog/stores").json()
    assert [s["id"] for s in stores] == ["s-north", "s-central", "s-south"]
    services = client.get("/api/v1/catalog/services").json()
    assert [s["name"] for s in services] == ["基本洗車", "頂級鍍膜"]


def test_system_prompt_get_and_put(client, settings_store):
    resp = client.get("/api/v1/settings/system-prompt")
    assert resp.json() == {"value": DEFAULT_SYSTEM_PROMPT, "is_default": True}

    resp = client.put("/api/v1/settings/system-prompt", json={"value": "你是洗車助理。"})
    assert resp.status_code == 200
    assert resp.json() == {"value": "你是洗車助理。", "is_default": False}
    assert settings_store.get_setting("GEMINI_SYSTEM_PROMPT") == "你是洗車助理。"

    assert client.put("/api/v1/settings/system-prompt", json={"value": "   "}).status_code == 400
