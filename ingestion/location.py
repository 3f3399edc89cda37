"""Location resolution: device coordinates when usable, server fallback otherwise."""

import math
from typing import Any, NamedTuple

from ingestion.schemas import LocationSource


class ResolvedLocation(NamedTuple):
    latitude: float
    longitude: float
    source: LocationSource


def parse_coordinate(value: Any) -> float | None:
    """Parse a device coordinate; falsy, non-numeric and non-finite values yield None.

    A literal 0 is falsy and therefore reads as "not supplied".
    """
    if not value or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def resolve_location(payload: dict[str, Any], fallback_lat: float, fallback_lng: float) -> ResolvedLocation:
    lat = parse_coordinate(payload.get("latitude"))
    lng = parse_coordinate(payload.get("longitude"))
    if lat is None or lng is None:
        return ResolvedLocation(fallback_lat, fallback_lng, LocationSource.SERVER_DEFAULT)
    return ResolvedLocation(lat, lng, LocationSource.DEVICE)
