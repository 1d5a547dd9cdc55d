from __future__ import annotations

from app.application.ports.catalog import CatalogPort
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord
from app.infrastructure.knowledge.catalog_data import SERVICES, STORES


class InMemoryCatalog(CatalogPort):
    def __init__(
        self,
        services: list[ServiceCatalogEntry] | None = None,
        stores: list[StoreRecord] | None = None,
    ) -> None:
        self._services = list(SERVICES if services is None else services)
        self._stores = list(STORES if stores is None else stores)

    def list_active_services(self) -> list[ServiceCatalogEntry]:
        return [s for s in self._services if s.is_active]

    def list_active_stores(self) -> list[StoreRecord]:
        return [s for s in self._stores if s.is_active]

    def find_active_store_by_name(self, name: str) -> StoreRecord | None:
        for store in self._stores:
            if store.is_active and store.name == name:
                return store
        return None

    def get_store(self, store_id: str) -> StoreRecord | None:
        for store in self._stores:
            if store.id == store_id:
                return store
        return None
