"""Data access for restaurant settings and delivery zones stored in Supabase."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Protocol

from ..db.supabase import get_supabase_client
from ..exceptions import RepositoryError
from ..models.domain import Coordinates, DeliveryZone, RestaurantLocation, to_money

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "restaurant_settings"
ZONES_TABLE = "delivery_zones"

LOCATION_COLUMNS = (
    "id, restaurant_id, latitude, longitude, max_delivery_radius, "
    "street, number, neighborhood, city, state, zipcode"
)


class DeliveryRepository(Protocol):
    def get_location(self, restaurant_id: str) -> Optional[RestaurantLocation]: ...

    def update_coordinates(self, settings_id: str, coordinates: Coordinates) -> None: ...

    def update_max_radius(self, settings_id: str, radius_km: float) -> None: ...

    def list_zones(self, restaurant_id: str, *, active_only: bool = True) -> list[DeliveryZone]: ...

    def insert_zones(self, restaurant_id: str, zones: Iterable[DeliveryZone]) -> list[DeliveryZone]: ...

    def update_zone(self, restaurant_id: str, zone: DeliveryZone) -> Optional[DeliveryZone]: ...

    def delete_zone(self, restaurant_id: str, zone_id: str) -> bool: ...


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _row_to_zone(row: dict) -> DeliveryZone:
    return DeliveryZone(
        id=str(row["id"]) if row.get("id") is not None else None,
        restaurant_id=row.get("restaurant_id"),
        min_distance=float(row.get("min_distance") or 0),
        max_distance=float(row["max_distance"]),
        fee=to_money(row.get("fee") or 0),
        active=bool(row.get("is_active", True)),
    )


def _zone_to_row(zone: DeliveryZone) -> dict:
    return {
        "min_distance": zone.min_distance,
        "max_distance": zone.max_distance,
        "fee": float(zone.fee),
        "is_active": zone.active,
    }


def _row_to_location(row: dict) -> RestaurantLocation:
    return RestaurantLocation(
        id=str(row["id"]),
        restaurant_id=str(row.get("restaurant_id") or ""),
        latitude=_optional_float(row.get("latitude")),
        longitude=_optional_float(row.get("longitude")),
        max_delivery_radius=_optional_float(row.get("max_delivery_radius")),
        street=row.get("street"),
        number=row.get("number"),
        neighborhood=row.get("neighborhood"),
        city=row.get("city"),
        state=row.get("state"),
        zipcode=row.get("zipcode"),
    )


class SupabaseDeliveryRepository:
    """Reads and writes the ``restaurant_settings`` and ``delivery_zones`` tables.

    Every backend failure is re-raised as :class:`RepositoryError`.
    """

    def __init__(self, client=None) -> None:
        self._client = client

    def _table(self, name: str):
        client = self._client or get_supabase_client()
        if client is None:
            raise RepositoryError("Supabase is not configured (missing URL or key).")
        return client.table(name)

    def get_location(self, restaurant_id: str) -> Optional[RestaurantLocation]:
        try:
            response = (
                self._table(SETTINGS_TABLE)
                .select(LOCATION_COLUMNS)
                .eq("restaurant_id", restaurant_id)
                .limit(1)
                .execute()
            )
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to load settings for restaurant {restaurant_id}: {e}") from e

        if not response.data:
            return None
        try:
            return _row_to_location(response.data[0])
        except (KeyError, TypeError, ValueError) as e:
            raise RepositoryError(f"Invalid settings row for restaurant {restaurant_id}: {e}") from e

    def update_coordinates(self, settings_id: str, coordinates: Coordinates) -> None:
        self._update_settings(
            settings_id,
            {"latitude": coordinates.latitude, "longitude": coordinates.longitude},
        )

    def update_max_radius(self, settings_id: str, radius_km: float) -> None:
        self._update_settings(settings_id, {"max_delivery_radius": radius_km})

    def _update_settings(self, settings_id: str, values: dict) -> None:
        try:
            self._table(SETTINGS_TABLE).update(values).eq("id", settings_id).execute()
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to update settings {settings_id}: {e}") from e

    def list_zones(self, restaurant_id: str, *, active_only: bool = True) -> list[DeliveryZone]:
        try:
            query = self._table(ZONES_TABLE).select("*").eq("restaurant_id", restaurant_id)
            if active_only:
                query = query.eq("is_active", True)
            response = query.order("min_distance").execute()
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to load delivery zones for restaurant {restaurant_id}: {e}") from e

        zones: list[DeliveryZone] = []
        for row in response.data or []:
            try:
                zones.append(_row_to_zone(row))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                # Skip invalid rows but continue processing
                logger.warning(f"Skipping invalid delivery zone row {row.get('id')}: {e}")
        return zones

    def insert_zones(self, restaurant_id: str, zones: Iterable[DeliveryZone]) -> list[DeliveryZone]:
        rows = [{**_zone_to_row(zone), "restaurant_id": restaurant_id} for zone in zones]
        if not rows:
            return []
        try:
            response = self._table(ZONES_TABLE).insert(rows).execute()
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to insert delivery zones for restaurant {restaurant_id}: {e}") from e
        return [_row_to_zone(row) for row in response.data or []]

    def update_zone(self, restaurant_id: str, zone: DeliveryZone) -> Optional[DeliveryZone]:
        try:
            response = (
                self._table(ZONES_TABLE)
                .update(_zone_to_row(zone))
                .eq("id", zone.id)
                .eq("restaurant_id", restaurant_id)
                .execute()
            )
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to update delivery zone {zone.id}: {e}") from e
        if not response.data:
            return None
        return _row_to_zone(response.data[0])

    def delete_zone(self, restaurant_id: str, zone_id: str) -> bool:
        try:
            response = (
                self._table(ZONES_TABLE)
                .delete()
                .eq("id", zone_id)
                .eq("restaurant_id", restaurant_id)
                .execute()
            )
        except RepositoryError:
            raise
        except Exception as e:
            raise RepositoryError(f"Failed to delete delivery zone {zone_id}: {e}") from e
        return bool(response.data)
