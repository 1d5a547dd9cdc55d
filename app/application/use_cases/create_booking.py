from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.exceptions import BookingPersistenceError, CatalogUnavailableError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.catalog import CatalogPort
from app.domain.entities.booking import BookingDraft, BookingRecord, BookingStatus


@dataclass(frozen=True)
class BookingOutcome:
    success: bool
    booking: BookingRecord | None = None
    error: str | None = None


class CreateBookingUseCase:
    def __init__(self, repository: BookingRepositoryPort, catalog: CatalogPort) -> None:
        self._repository = repository
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def execute(self, draft: BookingDraft, store_id: str | None) -> BookingOutcome:
        """Insert a PENDING booking. Never raises; failures come back as success=False."""
        record = BookingRecord(
            customer_name=draft.customer_name,
            phone=draft.phone,
            service_type=draft.service_type,
            start_time=draft.start_time,
            store_id=store_id,
            status=BookingStatus.PENDING,
        )
        return self.persist(record)

    def persist(self, record: BookingRecord) -> BookingOutcome:
        try:
            if record.store_id is not None:
                # store may have been deactivated since it was resolved
                store = self._catalog.get_store(record.store_id)
                if store is None or not store.is_active:
                    raise BookingPersistenceError(f"store {record.store_id} is not active")
            stored = self._repository.create(record)
        except (BookingPersistenceError, CatalogUnavailableError) as e:
            self._logger.error(
                "Booking insert failed; booking dropped",
                extra={
                    "reason": str(e),
                    "store_id": record.store_id,
                    "service": record.service_type,
                    "start_time": record.start_time.isoformat(),
                },
            )
            return BookingOutcome(success=False, error=str(e))

        self._logger.info("Booking created", extra={"booking_id": stored.id, "store_id": stored.store_id})
        return BookingOutcome(success=True, booking=stored)
