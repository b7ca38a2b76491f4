from .defaults import DEFAULT_BANDS, default_zones, suggest_next_zone
from .matcher import find_overlaps, find_zone, is_within_range, resolve_fee, zone_fee
from .service import SavedZone, ZoneService

__all__ = [
    "DEFAULT_BANDS",
    "SavedZone",
    "ZoneService",
    "default_zones",
    "find_overlaps",
    "find_zone",
    "is_within_range",
    "resolve_fee",
    "suggest_next_zone",
    "zone_fee",
]
