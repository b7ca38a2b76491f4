from decimal import Decimal

import pytest

from delivery_fee.exceptions import (
    LocationNotConfiguredError,
    RepositoryError,
    ZoneNotFoundError,
    ZoneValidationError,
)
from delivery_fee.models.domain import DeliveryZone
from delivery_fee.services.delivery import RestaurantCache
from delivery_fee.services.zones import DEFAULT_BANDS, ZoneService

RESTAURANT = "rest-1"


@pytest.fixture
def cache() -> RestaurantCache:
    return RestaurantCache()


@pytest.fixture
def zone_service(repository, cache) -> ZoneService:
    return ZoneService(repository, cache)


def _new_zone(low: float, high: float, fee: str, active: bool = True) -> DeliveryZone:
    return DeliveryZone(min_distance=low, max_distance=high, fee=Decimal(fee), active=active)


def test_list_zones_seeds_defaults_when_empty(zone_service, repository) -> None:
    zones = zone_service.list_zones(RESTAURANT)

    assert [(z.min_distance, z.max_distance, int(z.fee)) for z in zones] == [
        (float(low), float(high), fee) for low, high, fee in DEFAULT_BANDS
    ]
    assert len(repository.zones) == len(DEFAULT_BANDS)


def test_list_zones_without_seeding(zone_service, repository) -> None:
    assert zone_service.list_zones(RESTAURANT, seed_defaults=False) == []
    assert repository.zones == {}


def test_list_zones_includes_inactive(zone_service, repository) -> None:
    repository.add_zone(RESTAURANT, 2, 5, "8", active=False)
    repository.add_zone(RESTAURANT, 0, 2, "5")

    zones = zone_service.list_zones(RESTAURANT)

    assert [z.min_distance for z in zones] == [0, 2]
    assert [z.active for z in zones] == [True, False]


def test_save_new_zone_inserts_and_invalidates_cache(zone_service, repository, cache) -> None:
    cache.zones(RESTAURANT, lambda rid: [])

    result = zone_service.save_zone(RESTAURANT, _new_zone(0, 5, "6.50"))

    assert result.zone.id is not None
    assert result.zone.fee == Decimal("6.50")
    assert result.warnings == []
    assert cache.zones(RESTAURANT, repository.list_zones)[0].fee == Decimal("6.50")


def test_save_existing_zone_updates(zone_service, repository) -> None:
    zone = repository.add_zone(RESTAURANT, 0, 5, "5")
    zone.fee = Decimal("7")

    result = zone_service.save_zone(RESTAURANT, zone)

    assert result.zone.id == zone.id
    assert repository.zones[zone.id].fee == Decimal("7")


def test_save_unknown_zone_raises_not_found(zone_service) -> None:
    zone = _new_zone(0, 5, "5")
    zone.id = "missing"

    with pytest.raises(ZoneNotFoundError):
        zone_service.save_zone(RESTAURANT, zone)


def test_zone_of_other_restaurant_cannot_be_updated(zone_service, repository) -> None:
    zone = repository.add_zone("someone-else", 0, 5, "5")

    with pytest.raises(ZoneNotFoundError):
        zone_service.save_zone(RESTAURANT, zone)


@pytest.mark.parametrize(
    "zone",
    [
        _new_zone(-1, 5, "5"),
        _new_zone(5, 5, "5"),
        _new_zone(6, 5, "5"),
        _new_zone(0, 5, "-1"),
        _new_zone(0, float("nan"), "5"),
        _new_zone(0, float("inf"), "5"),
        _new_zone(float("nan"), 5, "5"),
        _new_zone(0, 5, "NaN"),
        _new_zone(0, 5, "Infinity"),
    ],
)
def test_save_rejects_invalid_zone(zone_service, repository, zone) -> None:
    with pytest.raises(ZoneValidationError):
        zone_service.save_zone(RESTAURANT, zone)
    assert repository.zones == {}


def test_save_overlapping_zone_warns_but_saves(zone_service, repository) -> None:
    repository.add_zone(RESTAURANT, 0, 5, "5")

    result = zone_service.save_zone(RESTAURANT, _new_zone(4, 8, "8"))

    assert len(repository.zones) == 2
    assert len(result.warnings) == 1
    assert "[0, 5) km" in result.warnings[0]


def test_delete_zone(zone_service, repository) -> None:
    zone = repository.add_zone(RESTAURANT, 0, 5, "5")

    zone_service.delete_zone(RESTAURANT, zone.id)

    assert repository.zones == {}
    with pytest.raises(ZoneNotFoundError):
        zone_service.delete_zone(RESTAURANT, zone.id)


def test_restore_defaults_replaces_only_this_restaurant(zone_service, repository) -> None:
    repository.add_zone(RESTAURANT, 0, 100, "1")
    other = repository.add_zone("other", 0, 3, "4")

    zones = zone_service.restore_defaults(RESTAURANT)

    assert len(zones) == len(DEFAULT_BANDS)
    assert all(z.restaurant_id == RESTAURANT for z in zones)
    assert other.id in repository.zones
    assert not any(z.max_distance == 100 for z in repository.zones.values())
    assert repository.calls.index("insert_zones") < repository.calls.index("delete_zone")


def test_failed_restore_keeps_existing_zones(zone_service, repository) -> None:
    kept = repository.add_zone(RESTAURANT, 0, 100, "1")
    repository.fail_on = {"insert_zones"}

    with pytest.raises(RepositoryError):
        zone_service.restore_defaults(RESTAURANT)

    assert list(repository.zones) == [kept.id]


def test_suggest_next_zone_uses_stored_zones(zone_service, repository) -> None:
    repository.add_zone(RESTAURANT, 0, 2, "5")
    repository.add_zone(RESTAURANT, 2, 5, "10")

    suggestion = zone_service.suggest_next_zone(RESTAURANT)

    assert (suggestion.min_distance, suggestion.max_distance, suggestion.fee) == (5, 15, Decimal("15.00"))
    assert suggestion.id is None


def test_update_max_radius(zone_service, repository) -> None:
    repository.add_location(RESTAURANT)

    assert zone_service.update_max_radius(RESTAURANT, 12.5) == 12.5
    assert repository.locations[RESTAURANT].max_delivery_radius == 12.5


def test_update_max_radius_validation(zone_service, repository) -> None:
    with pytest.raises(ZoneValidationError):
        zone_service.update_max_radius(RESTAURANT, 0)
    with pytest.raises(ZoneValidationError):
        zone_service.update_max_radius(RESTAURANT, float("nan"))
    with pytest.raises(ZoneValidationError):
        zone_service.update_max_radius(RESTAURANT, float("inf"))
    with pytest.raises(LocationNotConfiguredError):
        zone_service.update_max_radius(RESTAURANT, 10)


def test_repository_errors_propagate(zone_service, repository) -> None:
    repository.fail = True
    with pytest.raises(RepositoryError):
        zone_service.list_zones(RESTAURANT)
