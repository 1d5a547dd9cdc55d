from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx
from supabase import Client, PostgrestAPIError, create_client

from app.application.exceptions import (
    BookingPersistenceError,
    CatalogUnavailableError,
    ConversationStoreError,
    SettingsPersistenceError,
)
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.catalog import CatalogPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.settings_store import SettingsStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.chat_turn import ChatTurn
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord

CHAT_HISTORY_TABLE = "chat_history"
SETTINGS_TABLE = "system_settings"
SERVICES_TABLE = "services"
STORES_TABLE = "stores"
BOOKINGS_TABLE = "bookings"

_DATA_ERRORS = (PostgrestAPIError, httpx.HTTPError)

logger = logging.getLogger(__name__)


def create_supabase_client(url: str, service_role_key: str) -> Client:
    client = create_client(url, service_role_key)
    logger.info("Supabase client initialized")
    return client


class SupabaseConversationStore(ConversationStorePort):
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_recent_messages(self, user_id: str, limit: int = 6) -> list[ChatTurn]:
        if limit <= 0:
            return []
        try:
            resp = (
                self._client.table(CHAT_HISTORY_TABLE)
                .select("user_id, role, content, created_at")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except _DATA_ERRORS as e:
            raise ConversationStoreError(f"history read failed: {e}") from e

        rows = resp.data or []
        turns = [
            ChatTurn(
                user_id=row.get("user_id") or user_id,
                role="user" if row.get("role") == "user" else "assistant",
                content=row.get("content") or "",
                created_at=_parse_ts(row.get("created_at")),
            )
            for row in rows
        ]
        turns.reverse()
        return turns

    def append_message(self, user_id: str, role: str, text: str) -> None:
        try:
            self._client.table(CHAT_HISTORY_TABLE).insert(
                {"user_id": user_id, "role": role, "content": text}
            ).execute()
        except _DATA_ERRORS as e:
            raise ConversationStoreError(f"history append failed: {e}") from e


class SupabaseSettingsStore(SettingsStorePort):
    def __init__(self, client: Client) -> None:
        self._client = client

    def get_setting(self, key: str) -> str | None:
        try:
            resp = self._client.table(SETTINGS_TABLE).select("value").eq("key", key).limit(1).execute()
        except _DATA_ERRORS as e:
            # a missing base prompt falls back to the default persona
            logger.warning("Setting read failed", extra={"setting_key": key, "reason": str(e)})
            return None
        rows = resp.data or []
        if not rows:
            return None
        return rows[0].get("value") or None

    def set_setting(self, key: str, value: str, description: str | None = None) -> None:
        row: dict[str, Any] = {"key": key, "value": value}
        if description is not None:
            row["description"] = description
        try:
            self._client.table(SETTINGS_TABLE).upsert(row).execute()
        except _DATA_ERRORS as e:
            raise SettingsPersistenceError(f"setting write failed: {e}") from e


class SupabaseCatalog(CatalogPort):
    def __init__(self, client: Client) -> None:
        self._client = client

    def list_active_services(self) -> list[ServiceCatalogEntry]:
        rows = self._select_active(SERVICES_TABLE, "*")
        return [_service_from_row(row) for row in rows]

    def list_active_stores(self) -> list[StoreRecord]:
        rows = self._select_active(STORES_TABLE, "id, name, address, lat, lng, is_active")
        return [_store_from_row(row) for row in rows]

    def find_active_store_by_name(self, name: str) -> StoreRecord | None:
        try:
            resp = (
                self._client.table(STORES_TABLE)
                .select("id, name, address, lat, lng, is_active")
                .eq("name", name)
                .eq("is_active", True)
                .order("id")
                .limit(1)
                .execute()
            )
        except _DATA_ERRORS as e:
            raise CatalogUnavailableError(f"store lookup failed: {e}") from e
        rows = resp.data or []
        return _store_from_row(rows[0]) if rows else None

    def get_store(self, store_id: str) -> StoreRecord | None:
        try:
            resp = (
                self._client.table(STORES_TABLE)
                .select("id, name, address, lat, lng, is_active")
                .eq("id", store_id)
                .limit(1)
                .execute()
            )
        except _DATA_ERRORS as e:
            raise CatalogUnavailableError(f"store lookup failed: {e}") from e
        rows = resp.data or []
        return _store_from_row(rows[0]) if rows else None

    def _select_active(self, table: str, columns: str) -> list[dict[str, Any]]:
        try:
            resp = self._client.table(table).select(columns).eq("is_active", True).order("id").execute()
        except _DATA_ERRORS as e:
            raise CatalogUnavailableError(f"{table} read failed: {e}") from e
        return resp.data or []


class SupabaseBookingRepository(BookingRepositoryPort):
    def __init__(self, client: Client) -> None:
        self._client = client

    def create(self, record: BookingRecord) -> BookingRecord:
        row = {
            "customer_name": record.customer_name,
            "phone": record.phone,
            "service_type": record.service_type,
            "start_time": record.start_time.isoformat(),
            "store_id": record.store_id,
            "status": record.status.value,
        }
        try:
            resp = self._client.table(BOOKINGS_TABLE).insert(row).execute()
        except _DATA_ERRORS as e:
            raise BookingPersistenceError(f"booking insert failed: {e}") from e

        rows = resp.data or []
        if not rows:
            raise BookingPersistenceError("booking insert returned no row")
        return _booking_from_row(rows[0])

    def get(self, booking_id: str) -> BookingRecord | None:
        try:
            resp = self._client.table(BOOKINGS_TABLE).select("*").eq("id", booking_id).limit(1).execute()
        except _DATA_ERRORS as e:
            raise BookingPersistenceError(f"booking read failed: {e}") from e
        rows = resp.data or []
        return _booking_from_row(rows[0]) if rows else None

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        query = self._client.table(BOOKINGS_TABLE).select("*")
        if status is not None:
            query = query.eq("status", status.value)
        try:
            resp = query.order("start_time", desc=True).execute()
        except _DATA_ERRORS as e:
            raise BookingPersistenceError(f"booking list failed: {e}") from e
        return [_booking_from_row(row) for row in resp.data or []]

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        try:
            resp = (
                self._client.table(BOOKINGS_TABLE)
                .update({"status": status.value})
                .eq("id", booking_id)
                .execute()
            )
        except _DATA_ERRORS as e:
            raise BookingPersistenceError(f"booking update failed: {e}") from e
        rows = resp.data or []
        if not rows:
            raise BookingPersistenceError(f"booking {booking_id} not updated")
        return _booking_from_row(rows[0])


def _parse_ts(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _service_from_row(row: dict[str, Any]) -> ServiceCatalogEntry:
    return ServiceCatalogEntry(
        id=row.get("id"),
        name=str(row.get("name") or ""),
        pricing_mode=str(row.get("category") or "FLAT"),
        price_small=_optional_str(row.get("price_small")),
        price_medium=_optional_str(row.get("price_medium")),
        price_large=_optional_str(row.get("price_large")),
        price_flat=_optional_str(row.get("price_flat")),
        description=row.get("description"),
        is_active=bool(row.get("is_active", True)),
    )


def _store_from_row(row: dict[str, Any]) -> StoreRecord:
    return StoreRecord(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        address=str(row.get("address") or ""),
        lat=_optional_float(row.get("lat")),
        lng=_optional_float(row.get("lng")),
        is_active=bool(row.get("is_active", True)),
    )


def _booking_from_row(row: dict[str, Any]) -> BookingRecord:
    start_time = _parse_ts(row.get("start_time"))
    if start_time is None:
        raise BookingPersistenceError(f"booking {row.get('id')} has no start_time")
    return BookingRecord(
        id=str(row["id"]) if row.get("id") is not None else None,
        customer_name=str(row.get("customer_name") or ""),
        phone=str(row.get("phone") or ""),
        service_type=str(row.get("service_type") or ""),
        start_time=start_time,
        store_id=_optional_str(row.get("store_id")),
        status=BookingStatus(str(row.get("status") or "PENDING").upper()),
        created_at=_parse_ts(row.get("created_at")),
    )
