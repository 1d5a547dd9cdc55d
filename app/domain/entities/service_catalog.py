from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceCatalogEntry:
    name: str
    pricing_mode: str = "FLAT"  # "TIERED" | "FLAT"
    price_small: str | None = None
    price_medium: str | None = None
    price_large: str | None = None
    price_flat: str | None = None
    description: str | None = None
    is_active: bool = True
    id: int | None = None

    @property
    def is_tiered(self) -> bool:
        return self.pricing_mode.upper() == "TIERED"
