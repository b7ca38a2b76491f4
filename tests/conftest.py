import itertools
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

import pytest

from delivery_fee.exceptions import RepositoryError
from delivery_fee.models.domain import Coordinates, DeliveryZone, RestaurantLocation

SAO_PAULO = Coordinates(-23.5505, -46.6333)
NEARBY_CUSTOMER = Coordinates(-23.5489, -46.6388)


class FakeRepository:
    """In-memory stand-in for the Supabase delivery repository."""

    def __init__(self) -> None:
        self.locations: dict[str, RestaurantLocation] = {}
        self.zones: dict[str, DeliveryZone] = {}
        self.fail = False
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail or name in self.fail_on:
            raise RepositoryError("database offline")

    def add_location(self, restaurant_id: str, **fields) -> RestaurantLocation:
        location = RestaurantLocation(id=f"settings-{restaurant_id}", restaurant_id=restaurant_id, **fields)
        self.locations[restaurant_id] = location
        return location

    def add_zone(self, restaurant_id: str, low: float, high: float, fee: str, active: bool = True) -> DeliveryZone:
        zone = DeliveryZone(
            id=f"z{next(self._ids)}",
            restaurant_id=restaurant_id,
            min_distance=low,
            max_distance=high,
            fee=Decimal(fee),
            active=active,
        )
        self.zones[zone.id] = zone
        return replace(zone)

    def get_location(self, restaurant_id: str) -> Optional[RestaurantLocation]:
        self._check("get_location")
        location = self.locations.get(restaurant_id)
        return replace(location) if location else None

    def update_coordinates(self, settings_id: str, coordinates: Coordinates) -> None:
        self._check("update_coordinates")
        for rid, location in self.locations.items():
            if location.id == settings_id:
                self.locations[rid] = replace(
                    location, latitude=coordinates.latitude, longitude=coordinates.longitude
                )

    def update_max_radius(self, settings_id: str, radius_km: float) -> None:
        self._check("update_max_radius")
        for rid, location in self.locations.items():
            if location.id == settings_id:
                self.locations[rid] = replace(location, max_delivery_radius=radius_km)

    def list_zones(self, restaurant_id: str, *, active_only: bool = True) -> list[DeliveryZone]:
        self._check("list_zones")
        zones = [
            replace(z)
            for z in self.zones.values()
            if z.restaurant_id == restaurant_id and (z.active or not active_only)
        ]
        return sorted(zones, key=lambda z: z.min_distance)

    def insert_zones(self, restaurant_id: str, zones: Iterable[DeliveryZone]) -> list[DeliveryZone]:
        self._check("insert_zones")
        inserted = []
        for zone in zones:
            stored = replace(zone, id=f"z{next(self._ids)}", restaurant_id=restaurant_id)
            self.zones[stored.id] = stored
            inserted.append(replace(stored))
        return inserted

    def update_zone(self, restaurant_id: str, zone: DeliveryZone) -> Optional[DeliveryZone]:
        self._check("update_zone")
        current = self.zones.get(zone.id)
        if current is None or current.restaurant_id != restaurant_id:
            return None
        self.zones[zone.id] = replace(zone, restaurant_id=restaurant_id)
        return replace(self.zones[zone.id])

    def delete_zone(self, restaurant_id: str, zone_id: str) -> bool:
        self._check("delete_zone")
        current = self.zones.get(zone_id)
        if current is None or current.restaurant_id != restaurant_id:
            return False
        del self.zones[zone_id]
        return True


class FakeGeocoder:
    def __init__(self, results: Optional[dict[str, Coordinates]] = None, default: Optional[Coordinates] = None) -> None:
        self.results = results or {}
        self.default = default
        self.queries: list[str] = []

    def geocode(self, address: str) -> Optional[Coordinates]:
        self.queries.append(address)
        return self.results.get(address, self.default)


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()
