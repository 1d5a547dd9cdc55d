from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreRecord:
    id: str
    name: str
    address: str
    lat: float | None
    lng: float | None
    is_active: bool = True
