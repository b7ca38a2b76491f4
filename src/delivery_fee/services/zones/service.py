"""Administration of a restaurant's delivery zones and delivery radius."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ...data.delivery_repository import DeliveryRepository
from ...exceptions import LocationNotConfiguredError, ZoneNotFoundError, ZoneValidationError
from ...models.domain import DeliveryZone
from ..delivery.cache import RestaurantCache
from .defaults import default_zones, suggest_next_zone
from .matcher import find_overlaps

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SavedZone:
    zone: DeliveryZone
    warnings: list[str] = field(default_factory=list)


def validate_zone(zone: DeliveryZone) -> None:
    if not (math.isfinite(zone.min_distance) and math.isfinite(zone.max_distance)):
        raise ZoneValidationError("min_distance and max_distance must be finite numbers.")
    if not zone.fee.is_finite():
        raise ZoneValidationError("fee must be a finite number.")
    if zone.min_distance < 0:
        raise ZoneValidationError("min_distance must not be negative.")
    if zone.max_distance <= zone.min_distance:
        raise ZoneValidationError("max_distance must be greater than min_distance.")
    if zone.fee < 0:
        raise ZoneValidationError("fee must not be negative.")


def _describe(zone: DeliveryZone) -> str:
    return f"[{zone.min_distance:g}, {zone.max_distance:g}) km"


class ZoneService:
    def __init__(self, repository: DeliveryRepository, cache: RestaurantCache) -> None:
        self.repository = repository
        self.cache = cache

    def list_zones(self, restaurant_id: str, *, seed_defaults: bool = True) -> list[DeliveryZone]:
        """All zones of the restaurant, active or not, by ascending ``min_distance``."""
        zones = self.repository.list_zones(restaurant_id, active_only=False)
        if not zones and seed_defaults:
            logger.info(f"Restaurant {restaurant_id} has no delivery zones; creating defaults")
            zones = self.restore_defaults(restaurant_id)
        return sorted(zones, key=lambda zone: zone.min_distance)

    def save_zone(self, restaurant_id: str, zone: DeliveryZone) -> SavedZone:
        """Insert a zone without an id, update one with an id.

        Overlapping active bands are allowed but reported back as warnings.
        """
        validate_zone(zone)
        if zone.id is None:
            inserted = self.repository.insert_zones(restaurant_id, [zone])
            if not inserted:
                raise ZoneValidationError("The delivery zone could not be created.")
            saved = inserted[0]
        else:
            updated = self.repository.update_zone(restaurant_id, zone)
            if updated is None:
                raise ZoneNotFoundError(zone.id)
            saved = updated
        self.cache.invalidate(restaurant_id)

        all_zones = self.repository.list_zones(restaurant_id, active_only=False)
        warnings = [
            f"Zone {_describe(first)} overlaps zone {_describe(second)}; the lower band wins."
            for first, second in find_overlaps(all_zones)
            if saved.id in (first.id, second.id)
        ]
        return SavedZone(zone=saved, warnings=warnings)

    def delete_zone(self, restaurant_id: str, zone_id: str) -> None:
        if not self.repository.delete_zone(restaurant_id, zone_id):
            raise ZoneNotFoundError(zone_id)
        self.cache.invalidate(restaurant_id)

    def restore_defaults(self, restaurant_id: str) -> list[DeliveryZone]:
        """Replace the restaurant's zones with the default table.

        The defaults are inserted before the old zones are deleted, so a failed
        insert leaves the existing table untouched.
        """
        previous = self.repository.list_zones(restaurant_id, active_only=False)
        zones = self.repository.insert_zones(restaurant_id, default_zones(restaurant_id))
        try:
            for zone in previous:
                if zone.id is not None:
                    self.repository.delete_zone(restaurant_id, zone.id)
        finally:
            self.cache.invalidate(restaurant_id)
        return sorted(zones, key=lambda zone: zone.min_distance)

    def suggest_next_zone(self, restaurant_id: str) -> DeliveryZone:
        zones = self.repository.list_zones(restaurant_id, active_only=False)
        return suggest_next_zone(zones, restaurant_id)

    def update_max_radius(self, restaurant_id: str, radius_km: float) -> float:
        if not math.isfinite(radius_km) or radius_km <= 0:
            raise ZoneValidationError("max_delivery_radius must be a positive finite number.")
        location = self.repository.get_location(restaurant_id)
        if location is None:
            raise LocationNotConfiguredError(f"Restaurant {restaurant_id} has no settings configured.")
        self.repository.update_max_radius(location.id, radius_km)
        self.cache.invalidate(restaurant_id)
        return radius_km
