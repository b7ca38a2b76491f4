"""HTTP client for resolving addresses through Nominatim (OpenStreetMap)."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ...config import settings
from ...models.domain import Coordinates

logger = logging.getLogger(__name__)


def format_address(
    street: Optional[str],
    number: Optional[str],
    neighborhood: Optional[str],
    city: Optional[str],
    state: Optional[str],
) -> str:
    """Build the free-text query Nominatim is given, e.g. ``"Rua A, 10, Centro, São Paulo, SP"``."""
    parts = (street, number, neighborhood, city, state)
    return ", ".join((part or "").strip() for part in parts)


class NominatimClient:
    """Resolves a formatted address to coordinates.

    ``geocode`` never raises: any failure is logged and reported as ``None``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self._http_client = http_client

    def _get_client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0))

    def geocode(self, address: str) -> Coordinates | None:
        if not address.strip(" ,"):
            return None

        params = {"q": address, "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent}
        client = self._get_client()
        try:
            response = client.get(f"{self.base_url}/search", params=params, headers=headers)
            response.raise_for_status()
            results = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Geocoding failed for '{address}': HTTP {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Geocoding request failed for '{address}': {e}")
            return None
        except ValueError as e:
            logger.warning(f"Geocoding returned an unreadable body for '{address}': {e}")
            return None
        finally:
            if client is not self._http_client:
                client.close()

        if not isinstance(results, list) or not results:
            logger.info(f"No geocoding result for '{address}'")
            return None

        first = results[0]
        try:
            return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Geocoding result for '{address}' has no usable lat/lon: {e}")
            return None
