import httpx
import pytest

from delivery_fee.models.domain import Coordinates
from delivery_fee.services.geocoding import NominatimClient, ViaCepClient, format_address, normalize_cep


def _nominatim(handler) -> NominatimClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return NominatimClient(base_url="https://geo.test", user_agent="TestAgent/1.0", http_client=http_client)


def _viacep(handler) -> ViaCepClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return ViaCepClient(base_url="https://cep.test", http_client=http_client)


def test_format_address_keeps_empty_number_segment() -> None:
    assert format_address("Rua A", None, "Centro", "Campinas", "SP") == "Rua A, , Centro, Campinas, SP"


def test_geocode_sends_query_and_user_agent() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"lat": "-23.5489", "lon": "-46.6388"}, {"lat": "0", "lon": "0"}])

    coords = _nominatim(handler).geocode("Rua A, 10, Centro, São Paulo, SP")

    assert coords == Coordinates(-23.5489, -46.6388)
    request = seen[0]
    assert request.url.path == "/search"
    assert request.url.params["q"] == "Rua A, 10, Centro, São Paulo, SP"
    assert request.url.params["format"] == "json"
    assert request.url.params["limit"] == "1"
    assert request.headers["User-Agent"] == "TestAgent/1.0"


def test_geocode_empty_result_returns_none() -> None:
    client = _nominatim(lambda request: httpx.Response(200, json=[]))
    assert client.geocode("Nowhere, 0, , , ") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(429, text="slow down"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=[{"display_name": "no coordinates"}]),
        httpx.Response(200, json={"error": "unexpected"}),
    ],
)
def test_geocode_failures_return_none(response: httpx.Response) -> None:
    client = _nominatim(lambda request: response)
    assert client.geocode("Rua A, 10, Centro, São Paulo, SP") is None


def test_geocode_network_error_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert _nominatim(handler).geocode("Rua A, 10, Centro, São Paulo, SP") is None


def test_geocode_blank_address_skips_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert _nominatim(handler).geocode(" , , , , ") is None


@pytest.mark.parametrize(("raw", "expected"), [("01310-100", "01310100"), ("01310100", "01310100"), ("0131", None), ("", None)])
def test_normalize_cep(raw: str, expected: str | None) -> None:
    assert normalize_cep(raw) == expected


def test_cep_lookup_maps_viacep_fields() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/ws/01310100/json/"
        return httpx.Response(
            200,
            json={
                "cep": "01310-100",
                "logradouro": "Avenida Paulista",
                "bairro": "Bela Vista",
                "localidade": "São Paulo",
                "uf": "SP",
            },
        )

    address = _viacep(handler).lookup("01310-100")

    assert address is not None
    assert address.street == "Avenida Paulista"
    assert address.neighborhood == "Bela Vista"
    assert address.city == "São Paulo"
    assert address.state == "SP"
    assert address.zipcode == "01310-100"


def test_cep_lookup_unknown_code_returns_none() -> None:
    client = _viacep(lambda request: httpx.Response(200, json={"erro": True}))
    assert client.lookup("99999999") is None


def test_cep_lookup_malformed_code_skips_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert _viacep(handler).lookup("123") is None


def test_cep_lookup_http_error_returns_none() -> None:
    client = _viacep(lambda request: httpx.Response(400))
    assert client.lookup("01310100") is None
