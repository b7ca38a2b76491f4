"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def round_km(distance: float) -> float:
    """Round to one decimal place, halves away from zero."""

    return math.floor(distance * 10 + 0.5) / 10


def distance_km(origin: Coordinates, destination: Coordinates) -> float:
    """Great-circle distance in kilometres, rounded to one decimal place."""

    return round_km(
        haversine_km(origin.latitude, origin.longitude, destination.latitude, destination.longitude)
    )
