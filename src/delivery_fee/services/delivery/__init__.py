from .cache import RestaurantCache
from .sequencer import QuoteSequencer
from .service import DeliveryFeeService

__all__ = ["DeliveryFeeService", "QuoteSequencer", "RestaurantCache"]
