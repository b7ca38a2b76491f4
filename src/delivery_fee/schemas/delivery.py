"""Pydantic request/response models for delivery endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer

from ..models.domain import AddressInput, Coordinates, DeliveryQuote, DeliveryZone, PostalAddress


class CoordinatesModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @classmethod
    def from_domain(cls, coordinates: Coordinates | None) -> Optional["CoordinatesModel"]:
        if coordinates is None:
            return None
        return cls(latitude=coordinates.latitude, longitude=coordinates.longitude)


class AddressModel(BaseModel):
    street: str = ""
    number: str = ""
    complement: Optional[str] = None
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    def to_domain(self) -> AddressInput:
        return AddressInput(**self.model_dump())


class QuoteRequest(BaseModel):
    address: AddressModel
    session_id: Optional[str] = Field(
        default=None,
        description="Identifies the form session; a quote superseded by a newer request is flagged stale.",
    )


class QuoteResponse(BaseModel):
    distance: Optional[float] = Field(None, description="Distance in km, one decimal place.")
    fee: Decimal
    coordinates: Optional[CoordinatesModel] = None
    is_within_range: bool
    zone_matched: bool
    warnings: List[str] = Field(default_factory=list)
    stale: bool = False

    @field_serializer("fee")
    def _fee_as_number(self, fee: Decimal) -> float:
        return float(fee)

    @classmethod
    def from_domain(cls, quote: DeliveryQuote) -> "QuoteResponse":
        return cls(
            distance=quote.distance,
            fee=quote.fee,
            coordinates=CoordinatesModel.from_domain(quote.coordinates),
            is_within_range=quote.is_within_range,
            zone_matched=quote.zone_matched,
            warnings=list(quote.warnings),
            stale=quote.stale,
        )


class ZoneModel(BaseModel):
    id: Optional[str] = None
    min_distance: float = Field(0.0, allow_inf_nan=False)
    max_distance: float = Field(..., allow_inf_nan=False)
    fee: Decimal = Field(..., allow_inf_nan=False)
    is_active: bool = True

    @field_serializer("fee")
    def _fee_as_number(self, fee: Decimal) -> float:
        return float(fee)

    @classmethod
    def from_domain(cls, zone: DeliveryZone) -> "ZoneModel":
        return cls(
            id=zone.id,
            min_distance=zone.min_distance,
            max_distance=zone.max_distance,
            fee=zone.fee,
            is_active=zone.active,
        )

    def to_domain(self, restaurant_id: str) -> DeliveryZone:
        return DeliveryZone(
            id=self.id,
            restaurant_id=restaurant_id,
            min_distance=self.min_distance,
            max_distance=self.max_distance,
            fee=self.fee,
            active=self.is_active,
        )


class ZoneSaveResponse(BaseModel):
    zone: ZoneModel
    warnings: List[str] = Field(default_factory=list)


class MaxRadiusRequest(BaseModel):
    max_delivery_radius: float = Field(
        ..., allow_inf_nan=False, description="Maximum delivery distance in km."
    )


class MaxRadiusResponse(BaseModel):
    max_delivery_radius: float


class PostalAddressModel(BaseModel):
    zipcode: str
    street: str
    neighborhood: str
    city: str
    state: str

    @classmethod
    def from_domain(cls, address: PostalAddress) -> "PostalAddressModel":
        return cls(
            zipcode=address.zipcode,
            street=address.street,
            neighborhood=address.neighborhood,
            city=address.city,
            state=address.state,
        )
