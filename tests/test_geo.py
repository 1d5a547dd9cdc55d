import math

import pytest

from app.application.utils.geo import EARTH_RADIUS_KM, haversine_km, nearest_store
from app.domain.entities.store import StoreRecord


def test_one_degree_of_latitude():
    expected = 2 * math.pi * EARTH_RADIUS_KM / 360
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected, rel=1e-9)


def test_same_point_is_zero():
    assert haversine_km(25.03, 121.56, 25.03, 121.56) == 0.0


@pytest.mark.parametrize(
    "a, b",
    [
        ((25.0330, 121.5654), (22.6273, 120.3014)),
        ((-33.86, 151.21), (51.50, -0.12)),
        ((0.0, 179.9), (0.0, -179.9)),
    ],
)
def test_distance_is_symmetric(a, b):
    assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a), abs=1e-9)


def test_nearest_store_picks_minimum(stores):
    result = nearest_store(22.70, 120.31, [s for s in stores if s.is_active])
    assert result is not None
    assert result.store.id == "s-south"
    assert result.distance_km > 0


def test_nearest_store_empty_returns_none():
    assert nearest_store(25.0, 121.5, []) is None


def test_stores_without_coordinates_are_skipped():
    stores = [
        StoreRecord(id="a", name="A", address="", lat=None, lng=None),
        StoreRecord(id="b", name="B", address="", lat=24.0, lng=121.0),
    ]
    result = nearest_store(25.0, 121.5, stores)
    assert result is not None and result.store.id == "b"
    assert nearest_store(25.0, 121.5, stores[:1]) is None


def test_tie_keeps_first_in_catalog_order():
    stores = [
        StoreRecord(id="first", name="First", address="", lat=25.0, lng=121.0),
        StoreRecord(id="second", name="Second", address="", lat=25.0, lng=121.0),
    ]
    result = nearest_store(24.0, 121.0, stores)
    assert result is not None and result.store.id == "first"
