"""ViaCEP lookup used to prefill the address form from a postal code."""

from __future__ import annotations

import logging
import re

import httpx

from ...config import settings
from ...models.domain import PostalAddress

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def normalize_cep(cep: str) -> str | None:
    digits = _NON_DIGITS.sub("", cep or "")
    return digits if len(digits) == 8 else None


class ViaCepClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.viacep_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self._http_client = http_client

    def _get_client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0))

    def lookup(self, cep: str) -> PostalAddress | None:
        """Return the address for ``cep``, or None if it is malformed or unknown."""
        digits = normalize_cep(cep)
        if digits is None:
            return None

        client = self._get_client()
        try:
            response = client.get(f"{self.base_url}/ws/{digits}/json/")
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"CEP lookup failed for {digits}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"CEP lookup returned an unreadable body for {digits}: {e}")
            return None
        finally:
            if client is not self._http_client:
                client.close()

        # ViaCEP answers unknown codes with 200 and {"erro": true}
        if not isinstance(payload, dict) or payload.get("erro"):
            return None

        return PostalAddress(
            zipcode=payload.get("cep") or digits,
            street=payload.get("logradouro") or "",
            neighborhood=payload.get("bairro") or "",
            city=payload.get("localidade") or "",
            state=payload.get("uf") or "",
        )
