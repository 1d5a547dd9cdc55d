from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.ports.catalog import CatalogPort
from app.application.ports.settings_store import SettingsStorePort
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord
from app.infrastructure.llm.prompts import (
    DEFAULT_SYSTEM_PROMPT,
    build_booking_instruction,
    build_services_section,
    build_stores_section,
)


class BuildSystemPromptUseCase:
    """
    Assembles the per-turn system instruction from the stored base prompt,
    the active catalog and the current business-local time.
    Nothing here depends on conversation history.
    """

    def __init__(
        self,
        catalog: CatalogPort,
        settings_store: SettingsStorePort,
        timezone: ZoneInfo,
        setting_key: str,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog = catalog
        self._settings_store = settings_store
        self._timezone = timezone
        self._setting_key = setting_key
        self._now = now or (lambda: datetime.now(self._timezone))
        self._logger = logging.getLogger(__name__)

    def execute(self) -> str:
        base_prompt = self._settings_store.get_setting(self._setting_key) or DEFAULT_SYSTEM_PROMPT

        services = self._catalog.list_active_services()
        stores = self._catalog.list_active_stores()

        now_text = self._now().astimezone(self._timezone).strftime("%Y/%m/%d %H:%M:%S")

        self._logger.debug(
            "System prompt built",
            extra={"service_count": len(services), "store_count": len(stores)},
        )
        return base_prompt + build_booking_instruction(
            services_section=build_services_section([format_service_line(s) for s in services]),
            stores_section=build_stores_section([format_store_line(s) for s in stores]),
            now_text=now_text,
            timezone_label=str(self._timezone),
        )


def format_service_line(service: ServiceCatalogEntry) -> str:
    if service.is_tiered:
        return (
            f"- {service.name}: 小型車 ${service.price_small or '-'}"
            f" / 中型車 ${service.price_medium or '-'}"
            f" / 大型車 ${service.price_large or '-'}"
        )
    return f"- {service.name}: ${service.price_flat or '-'}"


def format_store_line(store: StoreRecord) -> str:
    return f"- {store.name} (ID: {store.id}, Addr: {store.address})"
