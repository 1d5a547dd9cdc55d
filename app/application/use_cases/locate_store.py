from __future__ import annotations

from app.application.ports.catalog import CatalogPort
from app.application.utils.geo import NearestStore, nearest_store


class LocateStoreUseCase:
    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog

    def execute(self, latitude: float, longitude: float) -> NearestStore | None:
        """Nearest active store, or None when there is no active store with coordinates."""
        return nearest_store(latitude, longitude, self._catalog.list_active_stores())


def format_nearest_store_message(result: NearestStore) -> str:
    return (
        f"📍 離您最近的是：\n{result.store.name}\n{result.store.address}\n"
        f"(距離 {result.distance_km:.1f} km)\n\n要幫您預約這家嗎？"
    )
