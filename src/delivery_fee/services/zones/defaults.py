"""Default distance bands offered to a restaurant with no zones configured."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...models.domain import DeliveryZone, to_money

# (min_km, max_km, fee in R$)
DEFAULT_BANDS: tuple[tuple[float, float, int], ...] = (
    (0, 2, 5),
    (2, 5, 10),
    (5, 10, 15),
    (10, 15, 20),
    (15, 20, 25),
    (20, 30, 30),
    (30, 40, 35),
    (40, 50, 40),
)

NEXT_BAND_WIDTH_KM = 10.0
NEXT_BAND_FEE_STEP = Decimal("5")


def default_zones(restaurant_id: str | None = None) -> list[DeliveryZone]:
    return [
        DeliveryZone(
            min_distance=float(low),
            max_distance=float(high),
            fee=to_money(fee),
            active=True,
            restaurant_id=restaurant_id,
        )
        for low, high, fee in DEFAULT_BANDS
    ]


def suggest_next_zone(zones: Sequence[DeliveryZone], restaurant_id: str | None = None) -> DeliveryZone:
    """Propose a band continuing from the last configured one."""
    if not zones:
        return DeliveryZone(
            min_distance=0.0,
            max_distance=NEXT_BAND_WIDTH_KM,
            fee=to_money(NEXT_BAND_FEE_STEP),
            restaurant_id=restaurant_id,
        )
    last = sorted(zones, key=lambda zone: zone.min_distance)[-1]
    return DeliveryZone(
        min_distance=last.max_distance,
        max_distance=last.max_distance + NEXT_BAND_WIDTH_KM,
        fee=to_money(last.fee + NEXT_BAND_FEE_STEP),
        restaurant_id=restaurant_id,
    )
