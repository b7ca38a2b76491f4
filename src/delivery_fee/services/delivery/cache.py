"""Restaurant-scoped cache of settings rows and active delivery zones."""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, Optional, TypeVar

from ...models.domain import DeliveryZone, RestaurantLocation

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0


class _TimedStore(Generic[T]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float]) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at > self._ttl:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def discard(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class RestaurantCache:
    """Caches what every quote for a restaurant needs.

    Entries expire after ``ttl_seconds`` and are dropped explicitly whenever the
    zones or settings of a restaurant are written through this service.
    Loaders run outside the lock; concurrent misses may both load, and the last
    write wins.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self._locations: _TimedStore[RestaurantLocation] = _TimedStore(ttl_seconds, clock)
        self._zones: _TimedStore[tuple[DeliveryZone, ...]] = _TimedStore(ttl_seconds, clock)

    def location(
        self, restaurant_id: str, loader: Callable[[str], Optional[RestaurantLocation]]
    ) -> Optional[RestaurantLocation]:
        cached = self._locations.get(restaurant_id)
        if cached is not None:
            return cached
        location = loader(restaurant_id)
        # a missing settings row is not cached so it is picked up once created
        if location is not None:
            self._locations.put(restaurant_id, location)
        return location

    def store_location(self, restaurant_id: str, location: RestaurantLocation) -> None:
        self._locations.put(restaurant_id, location)

    def zones(
        self, restaurant_id: str, loader: Callable[[str], list[DeliveryZone]]
    ) -> tuple[DeliveryZone, ...]:
        cached = self._zones.get(restaurant_id)
        if cached is not None:
            return cached
        zones = tuple(loader(restaurant_id))
        self._zones.put(restaurant_id, zones)
        return zones

    def invalidate(self, restaurant_id: str) -> None:
        self._locations.discard(restaurant_id)
        self._zones.discard(restaurant_id)
