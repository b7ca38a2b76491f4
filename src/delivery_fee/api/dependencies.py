"""Service wiring shared by the API routes."""

from __future__ import annotations

from functools import lru_cache

from ..config import settings
from ..data.delivery_repository import SupabaseDeliveryRepository
from ..services.delivery import DeliveryFeeService, QuoteSequencer, RestaurantCache
from ..services.geocoding import NominatimClient, ViaCepClient
from ..services.zones import ZoneService


@lru_cache()
def get_restaurant_cache() -> RestaurantCache:
    return RestaurantCache(ttl_seconds=settings.cache_ttl_seconds)


@lru_cache()
def get_repository() -> SupabaseDeliveryRepository:
    return SupabaseDeliveryRepository()


@lru_cache()
def get_delivery_service() -> DeliveryFeeService:
    return DeliveryFeeService(
        repository=get_repository(),
        geocoder=NominatimClient(),
        cache=get_restaurant_cache(),
        sequencer=QuoteSequencer(capacity=settings.quote_session_capacity),
    )


@lru_cache()
def get_zone_service() -> ZoneService:
    return ZoneService(repository=get_repository(), cache=get_restaurant_cache())


@lru_cache()
def get_cep_client() -> ViaCepClient:
    return ViaCepClient()
