from __future__ import annotations

import itertools
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.settings_store import SettingsStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.chat_turn import ChatTurn


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, history_limit: int = 50) -> None:
        self._threads: dict[str, list[ChatTurn]] = {}
        self._history_limit = history_limit
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def get_history(self, user_id: str) -> list[ChatTurn]:
        with self._lock:
            return list(self._threads.get(user_id, []))

    def append_message(self, user_id: str, role: str, text: str) -> None:
        with self._lock:
            turns = self._threads.setdefault(user_id, [])
            turns.append(
                ChatTurn(
                    user_id=user_id,
                    role=role,
                    content=text,
                    created_at=datetime.now(timezone.utc),
                    sequence=next(self._sequence),
                )
            )
            if len(turns) > self._history_limit:
                self._threads[user_id] = turns[-self._history_limit :]

    def get_recent_messages(self, user_id: str, limit: int = 6) -> list[ChatTurn]:
        """Get recent messages for context."""
        if limit <= 0:
            return []
        messages = self.get_history(user_id)
        return messages[-limit:] if messages else []


class MemorySettingsStore(SettingsStorePort):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get_setting(self, key: str) -> str | None:
        return self._values.get(key)

    def set_setting(self, key: str, value: str, description: str | None = None) -> None:
        self._values[key] = value


class MemoryBookingRepository(BookingRepositoryPort):
    def __init__(self) -> None:
        self._bookings: dict[str, BookingRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: BookingRecord) -> BookingRecord:
        stored = replace(record, id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc))
        with self._lock:
            self._bookings[stored.id] = stored
        return stored

    def get(self, booking_id: str) -> BookingRecord | None:
        return self._bookings.get(booking_id)

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        with self._lock:
            rows = [b for b in self._bookings.values() if status is None or b.status == status]
        return sorted(rows, key=lambda b: b.start_time, reverse=True)

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        with self._lock:
            current = self._bookings[booking_id]
            updated = replace(current, status=status)
            self._bookings[booking_id] = updated
        return updated
