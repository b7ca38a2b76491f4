"""Exception hierarchy for the delivery fee service."""


class DeliveryFeeError(Exception):
    """Base class for errors raised by this package."""


class RepositoryError(DeliveryFeeError):
    """The backing database could not be read or written."""


class ZoneValidationError(DeliveryFeeError, ValueError):
    """A delivery zone payload is invalid."""


class ZoneNotFoundError(DeliveryFeeError, LookupError):
    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Delivery zone '{zone_id}' not found.")
        self.zone_id = zone_id


class LocationNotConfiguredError(DeliveryFeeError, ValueError):
    """The restaurant has no settings row or no address to geocode."""
