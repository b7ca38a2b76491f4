"""Distance band lookup and delivery radius check."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ...config import settings
from ...models.domain import CENTS, DeliveryZone

NO_FEE = Decimal("0.00")


def find_zone(distance: float, zones: Iterable[DeliveryZone]) -> Optional[DeliveryZone]:
    """Return the first active zone containing ``distance``.

    Zones are expected in ascending ``min_distance`` order. Overlaps are not
    rejected here, so with overlapping bands the earlier one wins.
    """
    for zone in zones:
        if zone.active and zone.contains(distance):
            return zone
    return None


def zone_fee(zone: Optional[DeliveryZone]) -> Decimal:
    """Fee charged for ``zone``; no zone means no fee."""
    return zone.fee.quantize(CENTS) if zone else NO_FEE


def resolve_fee(distance: float, zones: Iterable[DeliveryZone]) -> Decimal:
    return zone_fee(find_zone(distance, zones))


def effective_radius(max_delivery_radius: Optional[float]) -> float:
    # null, 0 and non-finite values all mean "not configured"
    if max_delivery_radius and math.isfinite(max_delivery_radius):
        return max_delivery_radius
    return settings.default_max_delivery_radius_km


def is_within_range(distance: float, max_delivery_radius: Optional[float]) -> bool:
    return distance <= effective_radius(max_delivery_radius)


def find_overlaps(zones: Sequence[DeliveryZone]) -> list[tuple[DeliveryZone, DeliveryZone]]:
    """Pairs of active zones whose intervals intersect."""
    active = sorted((z for z in zones if z.active), key=lambda z: (z.min_distance, z.max_distance))
    overlaps: list[tuple[DeliveryZone, DeliveryZone]] = []
    for index, zone in enumerate(active):
        for other in active[index + 1:]:
            if other.min_distance >= zone.max_distance:
                break
            overlaps.append((zone, other))
    return overlaps
