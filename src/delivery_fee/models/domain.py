"""Domain models for delivery zones, addresses and fee quotes."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

CENTS = Decimal("0.01")


def to_money(value: object) -> Decimal:
    """Coerce a numeric column value to a two-place Decimal."""
    return Decimal(str(value)).quantize(CENTS)


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(slots=True)
class DeliveryZone:
    """A distance band, in kilometres, charging a flat fee.

    Membership is the right-open interval ``min_distance <= d < max_distance``.
    """

    min_distance: float
    max_distance: float
    fee: Decimal
    active: bool = True
    id: Optional[str] = None
    restaurant_id: Optional[str] = None

    def contains(self, distance: float) -> bool:
        return self.min_distance <= distance < self.max_distance


@dataclass(slots=True)
class AddressInput:
    """Customer address as typed into the order form."""

    street: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    complement: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        # 0.0 is treated as "not set", as the order form sends it for blank fields
        if self.latitude and self.longitude:
            return Coordinates(self.latitude, self.longitude)
        return None

    def is_complete(self) -> bool:
        return all(
            value.strip()
            for value in (self.street, self.number, self.neighborhood, self.city)
        )


@dataclass(slots=True)
class RestaurantLocation:
    """Location-related columns of a restaurant's settings row."""

    id: str
    restaurant_id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    max_delivery_radius: Optional[float] = None
    street: Optional[str] = None
    number: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude and self.longitude:
            return Coordinates(self.latitude, self.longitude)
        return None

    def has_address(self) -> bool:
        return bool(self.street and self.city)


@dataclass(slots=True)
class DeliveryQuote:
    """Fee and serviceability computed for one customer address."""

    distance: Optional[float]
    fee: Decimal
    coordinates: Optional[Coordinates]
    is_within_range: bool
    zone_matched: bool = False
    warnings: list[str] = field(default_factory=list)
    stale: bool = False

    @classmethod
    def permissive(cls, *warnings: str) -> "DeliveryQuote":
        """Unknown distance: no fee and treated as serviceable."""
        return cls(
            distance=None,
            fee=Decimal("0.00"),
            coordinates=None,
            is_within_range=True,
            warnings=list(warnings),
        )


@dataclass(frozen=True, slots=True)
class PostalAddress:
    """Address fields resolved from a CEP."""

    zipcode: str
    street: str
    neighborhood: str
    city: str
    state: str
