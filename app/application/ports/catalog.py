from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord


class CatalogPort(ABC):
    @abstractmethod
    def list_active_services(self) -> list[ServiceCatalogEntry]:
        """Active services in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def list_active_stores(self) -> list[StoreRecord]:
        """Active stores in a stable order."""
        raise NotImplementedError

    @abstractmethod
    def find_active_store_by_name(self, name: str) -> StoreRecord | None:
        """Active store whose name equals `name` exactly, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_store(self, store_id: str) -> StoreRecord | None:
        raise NotImplementedError
