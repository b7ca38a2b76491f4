"""Delivery fee calculation for a customer address."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from ...data.delivery_repository import DeliveryRepository
from ...exceptions import LocationNotConfiguredError, RepositoryError
from ...models.domain import AddressInput, Coordinates, DeliveryQuote, RestaurantLocation
from ..geocoding.nominatim_client import NominatimClient, format_address
from ..geospatial import distance_km
from ..zones.matcher import find_zone, is_within_range, zone_fee
from .cache import RestaurantCache
from .sequencer import QuoteSequencer

logger = logging.getLogger(__name__)

WARNING_RESTAURANT_LOCATION = "Restaurant coordinates are not configured."
WARNING_GEOCODING = "Could not locate the delivery address. Default fee applied."
WARNING_BACKEND = "Delivery settings are unavailable. Default fee applied."
WARNING_OUT_OF_RANGE = "Address is outside the delivery radius."
WARNING_NO_ZONE = "No delivery zone covers this distance."


class DeliveryFeeService:
    """Computes fee and serviceability for customer addresses.

    A quote never fails: missing configuration, geocoding misses and backend
    errors all degrade to "no fee, assume serviceable" with a warning attached.
    """

    def __init__(
        self,
        repository: DeliveryRepository,
        geocoder: NominatimClient,
        cache: RestaurantCache | None = None,
        sequencer: QuoteSequencer | None = None,
    ) -> None:
        self.repository = repository
        self.geocoder = geocoder
        self.cache = cache or RestaurantCache()
        self.sequencer = sequencer or QuoteSequencer()

    def calculate_from_address(
        self,
        restaurant_id: str,
        address: AddressInput,
        session_id: Optional[str] = None,
    ) -> DeliveryQuote:
        if session_id is None:
            return self._calculate(restaurant_id, address)

        key = (restaurant_id, session_id)
        token = self.sequencer.begin(key)
        quote = self._calculate(restaurant_id, address)
        if not self.sequencer.is_current(key, token):
            logger.debug(f"Discarding superseded quote for session {session_id}")
            quote.stale = True
        return quote

    def _calculate(self, restaurant_id: str, address: AddressInput) -> DeliveryQuote:
        if address.coordinates is None and not address.is_complete():
            return DeliveryQuote.permissive()

        try:
            location = self.cache.location(restaurant_id, self.repository.get_location)
            origin = self._resolve_restaurant_coordinates(restaurant_id, location)
        except RepositoryError as e:
            logger.warning(f"Could not load delivery settings for restaurant {restaurant_id}: {e}")
            return DeliveryQuote.permissive(WARNING_BACKEND)

        if origin is None:
            logger.warning(f"Restaurant {restaurant_id} has no coordinates; delivery fee not calculated")
            return DeliveryQuote.permissive(WARNING_RESTAURANT_LOCATION)

        destination = address.coordinates or self.geocoder.geocode(
            format_address(address.street, address.number, address.neighborhood, address.city, address.state)
        )
        if destination is None:
            return DeliveryQuote.permissive(WARNING_GEOCODING)

        try:
            zones = self.cache.zones(restaurant_id, self.repository.list_zones)
        except RepositoryError as e:
            logger.warning(f"Could not load delivery zones for restaurant {restaurant_id}: {e}")
            return DeliveryQuote.permissive(WARNING_BACKEND)

        distance = distance_km(origin, destination)
        zone = find_zone(distance, zones)
        within_range = is_within_range(distance, location.max_delivery_radius)

        warnings: list[str] = []
        if not within_range:
            warnings.append(WARNING_OUT_OF_RANGE)
        if zone is None:
            warnings.append(WARNING_NO_ZONE)

        return DeliveryQuote(
            distance=distance,
            fee=zone_fee(zone),
            coordinates=destination,
            is_within_range=within_range,
            zone_matched=zone is not None,
            warnings=warnings,
        )

    def _resolve_restaurant_coordinates(
        self, restaurant_id: str, location: Optional[RestaurantLocation]
    ) -> Optional[Coordinates]:
        """Stored coordinates, or geocode the stored address once and persist the result."""
        if location is None:
            return None
        if location.coordinates is not None:
            return location.coordinates
        if not location.has_address():
            return None

        coordinates = self._geocode_location(location)
        if coordinates is None:
            return None
        try:
            self._store_coordinates(restaurant_id, location, coordinates)
        except RepositoryError as e:
            # the quote can still use the coordinates; the next miss retries the write
            logger.warning(f"Could not persist coordinates for restaurant {restaurant_id}: {e}")
        return coordinates

    def refresh_restaurant_coordinates(self, restaurant_id: str) -> Coordinates:
        """Geocode the restaurant's stored address and save the coordinates.

        Raises:
            LocationNotConfiguredError: no settings row, no street/city, or the
                address could not be geocoded.
            RepositoryError: the settings row could not be read or written.
        """
        location = self.repository.get_location(restaurant_id)
        if location is None:
            raise LocationNotConfiguredError(f"Restaurant {restaurant_id} has no settings configured.")
        if not location.has_address():
            raise LocationNotConfiguredError("Configure the restaurant address (street and city) first.")

        coordinates = self._geocode_location(location)
        if coordinates is None:
            raise LocationNotConfiguredError("Could not obtain coordinates for the restaurant address.")

        self._store_coordinates(restaurant_id, location, coordinates)
        logger.info(f"Updated coordinates for restaurant {restaurant_id}: {coordinates}")
        return coordinates

    def _geocode_location(self, location: RestaurantLocation) -> Optional[Coordinates]:
        return self.geocoder.geocode(
            format_address(location.street, location.number, location.neighborhood, location.city, location.state)
        )

    def _store_coordinates(
        self, restaurant_id: str, location: RestaurantLocation, coordinates: Coordinates
    ) -> None:
        self.repository.update_coordinates(location.id, coordinates)
        self.cache.store_location(
            restaurant_id,
            dataclasses.replace(location, latitude=coordinates.latitude, longitude=coordinates.longitude),
        )
