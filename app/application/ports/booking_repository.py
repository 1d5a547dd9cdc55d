from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.booking import BookingRecord, BookingStatus


class BookingRepositoryPort(ABC):
    @abstractmethod
    def create(self, record: BookingRecord) -> BookingRecord:
        """Insert one booking. Returns the stored row (with id). Raises BookingPersistenceError."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> BookingRecord | None:
        raise NotImplementedError

    @abstractmethod
    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        """Bookings ordered by start time, newest first."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        raise NotImplementedError
