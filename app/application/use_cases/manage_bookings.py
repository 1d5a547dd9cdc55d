from __future__ import annotations

import logging
from datetime import datetime

from app.application.exceptions import (
    BookingNotFoundError,
    BookingPersistenceError,
    InvalidStatusTransitionError,
)
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.catalog import CatalogPort
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.domain.entities.booking import BookingRecord, BookingStatus

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class ManageBookingsUseCase:
    """Booking operations behind the admin console and the web booking form."""

    def __init__(
        self,
        repository: BookingRepositoryPort,
        catalog: CatalogPort,
        create_booking: CreateBookingUseCase,
    ) -> None:
        self._repository = repository
        self._catalog = catalog
        self._create_booking = create_booking
        self._logger = logging.getLogger(__name__)

    def submit(
        self,
        customer_name: str,
        phone: str,
        service_type: str,
        start_time: datetime,
        store_id: str | None = None,
    ) -> BookingRecord:
        name = (customer_name or "").strip()
        phone = (phone or "").strip()
        service_type = (service_type or "").strip()
        if not name or not phone:
            raise ValueError("customer_name and phone are required")
        if not service_type:
            raise ValueError("service_type is required")
        if start_time.tzinfo is None:
            raise ValueError("start_time must carry a UTC offset")
        if store_id is not None:
            store = self._catalog.get_store(store_id)
            if store is None or not store.is_active:
                raise ValueError(f"unknown store: {store_id}")

        outcome = self._create_booking.persist(
            BookingRecord(
                customer_name=name,
                phone=phone,
                service_type=service_type,
                start_time=start_time,
                store_id=store_id,
                status=BookingStatus.PENDING,
            )
        )
        if not outcome.success or outcome.booking is None:
            raise BookingPersistenceError(outcome.error or "booking insert failed")
        return outcome.booking

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        return self._repository.list_bookings(status=status)

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRecord:
        current = self._repository.get(booking_id)
        if current is None:
            raise BookingNotFoundError(booking_id)
        if status not in ALLOWED_TRANSITIONS[current.status]:
            raise InvalidStatusTransitionError(f"{current.status.value} -> {status.value}")

        updated = self._repository.update_status(booking_id, status)
        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "status": status.value})
        return updated
