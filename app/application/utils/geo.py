from __future__ import annotations

import math
from dataclasses import dataclass

from app.domain.entities.store import StoreRecord

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class NearestStore:
    store: StoreRecord
    distance_km: float


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearest_store(lat: float, lng: float, stores: list[StoreRecord]) -> NearestStore | None:
    """
    Closest store to (lat, lng). Stores without coordinates are skipped.
    Ties keep the first store in the given order. Returns None when no store qualifies.
    """
    best: NearestStore | None = None
    for store in stores:
        if store.lat is None or store.lng is None:
            continue
        distance = haversine_km(lat, lng, store.lat, store.lng)
        if best is None or distance < best.distance_km:
            best = NearestStore(store=store, distance_km=distance)
    return best
