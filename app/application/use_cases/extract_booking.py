from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.ports.catalog import CatalogPort
from app.application.utils.booking_block import split_booking_block
from app.domain.entities.booking import BookingDraft
from app.domain.entities.store import StoreRecord


@dataclass(frozen=True)
class ExtractionResult:
    cleaned_reply: str
    draft: BookingDraft | None = None
    store: StoreRecord | None = None
    unresolved_store_name: str | None = None
    block_found: bool = False
    parse_error: str | None = None


class ExtractBookingUseCase:
    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def execute(self, completion_text: str) -> ExtractionResult:
        parsed = split_booking_block(completion_text)
        if parsed.draft is None:
            return ExtractionResult(
                cleaned_reply=parsed.cleaned_reply,
                block_found=parsed.block_found,
                parse_error=parsed.parse_error,
            )

        draft = parsed.draft
        if draft.store_name is None:
            return ExtractionResult(cleaned_reply=parsed.cleaned_reply, draft=draft, block_found=True)

        store = self._catalog.find_active_store_by_name(draft.store_name)
        if store is None:
            self._logger.info("Store name not resolved", extra={"store_name": draft.store_name})
            return ExtractionResult(
                cleaned_reply=parsed.cleaned_reply,
                draft=draft,
                unresolved_store_name=draft.store_name,
                block_found=True,
            )

        return ExtractionResult(cleaned_reply=parsed.cleaned_reply, draft=draft, store=store, block_found=True)
