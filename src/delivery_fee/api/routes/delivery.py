"""Delivery fee quote, zone and radius endpoints, scoped per restaurant."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...exceptions import LocationNotConfiguredError, RepositoryError, ZoneNotFoundError
from ...schemas.delivery import (
    CoordinatesModel,
    MaxRadiusRequest,
    MaxRadiusResponse,
    QuoteRequest,
    QuoteResponse,
    ZoneModel,
    ZoneSaveResponse,
)
from ...services.delivery import DeliveryFeeService
from ...services.zones import ZoneService
from ..dependencies import get_delivery_service, get_zone_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurants/{restaurant_id}/delivery", tags=["delivery"])


def _unavailable(exc: RepositoryError) -> HTTPException:
    logger.error(f"Delivery backend error: {exc}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Delivery settings storage is unavailable.",
    )


@router.post("/quote", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def quote_delivery(
    restaurant_id: str,
    payload: QuoteRequest,
    service: DeliveryFeeService = Depends(get_delivery_service),
) -> QuoteResponse:
    """Fee, distance and serviceability for a customer address.

    Never fails on missing configuration or geocoding misses; those come back as
    a zero fee with ``is_within_range`` true and a warning.
    """
    quote = service.calculate_from_address(
        restaurant_id, payload.address.to_domain(), session_id=payload.session_id
    )
    return QuoteResponse.from_domain(quote)


@router.get("/zones", response_model=List[ZoneModel], status_code=status.HTTP_200_OK)
def list_zones(
    restaurant_id: str,
    service: ZoneService = Depends(get_zone_service),
) -> List[ZoneModel]:
    try:
        zones = service.list_zones(restaurant_id)
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return [ZoneModel.from_domain(zone) for zone in zones]


@router.get("/zones/next", response_model=ZoneModel, status_code=status.HTTP_200_OK)
def next_zone(
    restaurant_id: str,
    service: ZoneService = Depends(get_zone_service),
) -> ZoneModel:
    """Suggested band continuing from the last configured one (not saved)."""
    try:
        return ZoneModel.from_domain(service.suggest_next_zone(restaurant_id))
    except RepositoryError as exc:
        raise _unavailable(exc) from exc


@router.post("/zones", response_model=ZoneSaveResponse, status_code=status.HTTP_200_OK)
def save_zone(
    restaurant_id: str,
    payload: ZoneModel,
    service: ZoneService = Depends(get_zone_service),
) -> ZoneSaveResponse:
    try:
        result = service.save_zone(restaurant_id, payload.to_domain(restaurant_id))
    except ZoneNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return ZoneSaveResponse(zone=ZoneModel.from_domain(result.zone), warnings=result.warnings)


@router.delete("/zones/{zone_id}", status_code=status.HTTP_200_OK)
def delete_zone(
    restaurant_id: str,
    zone_id: str,
    service: ZoneService = Depends(get_zone_service),
) -> dict:
    try:
        service.delete_zone(restaurant_id, zone_id)
    except ZoneNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return {"success": True, "zone_id": zone_id}


@router.post("/zones/restore-defaults", response_model=List[ZoneModel], status_code=status.HTTP_200_OK)
def restore_default_zones(
    restaurant_id: str,
    service: ZoneService = Depends(get_zone_service),
) -> List[ZoneModel]:
    try:
        zones = service.restore_defaults(restaurant_id)
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return [ZoneModel.from_domain(zone) for zone in zones]


@router.put("/max-radius", response_model=MaxRadiusResponse, status_code=status.HTTP_200_OK)
def update_max_radius(
    restaurant_id: str,
    payload: MaxRadiusRequest,
    service: ZoneService = Depends(get_zone_service),
) -> MaxRadiusResponse:
    """Set the delivery radius. A restaurant without settings is a 400, as on location refresh."""
    try:
        radius = service.update_max_radius(restaurant_id, payload.max_delivery_radius)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return MaxRadiusResponse(max_delivery_radius=radius)


@router.post("/location/refresh", response_model=CoordinatesModel, status_code=status.HTTP_200_OK)
def refresh_location(
    restaurant_id: str,
    service: DeliveryFeeService = Depends(get_delivery_service),
) -> CoordinatesModel:
    """Geocode the restaurant address and store the coordinates on its settings."""
    try:
        coordinates = service.refresh_restaurant_coordinates(restaurant_id)
    except LocationNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryError as exc:
        raise _unavailable(exc) from exc
    return CoordinatesModel(latitude=coordinates.latitude, longitude=coordinates.longitude)
