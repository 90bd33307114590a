#Purpose: Driver route preparation for downstream matching.
#Turns whatever a caller stored or received (waypoint lists, dicts from a DB
#column, encoded polylines) into a clean ordered list of Coordinates:
#range validation of coordinates
#dropping consecutive duplicate points
#making sure the trip start/end are the first/last waypoints
#It's the "give me a usable route" module, the insertion engine only consumes its output.

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import polyline

from rides.models import Coordinate

# two waypoints closer than this (degrees) are the same point
DUPLICATE_TOLERANCE_DEG = 1e-6
# start/end of the trip are considered already present within this tolerance
ENDPOINT_TOLERANCE_DEG = 1e-5


class InvalidRouteError(ValueError):
    """Raised when a driver route cannot be evaluated (fewer than two points)."""
    pass


class InvalidCoordinateError(ValueError):
    """Raised when a coordinate is not finite or outside lat/lon ranges."""
    pass


def validate_coordinate(coordinate: Coordinate, label: str = "coordinate") -> Coordinate:
    """
    Range check for caller supplied coordinates. Returns the coordinate unchanged.
    """
    latitude = coordinate.latitude
    longitude = coordinate.longitude

    if not math.isfinite(latitude) or abs(latitude) > 90:
        raise InvalidCoordinateError(f"{label}: latitude {latitude!r} is invalid")
    if not math.isfinite(longitude) or abs(longitude) > 180:
        raise InvalidCoordinateError(f"{label}: longitude {longitude!r} is invalid")
    return coordinate


def _is_close(a: Coordinate, b: Coordinate, tolerance: float) -> bool:
    return abs(a.latitude - b.latitude) <= tolerance and abs(a.longitude - b.longitude) <= tolerance


def _drop_consecutive_duplicates(waypoints: Iterable[Coordinate]) -> List[Coordinate]:
    normalized: List[Coordinate] = []
    for waypoint in waypoints:
        if normalized and _is_close(normalized[-1], waypoint, DUPLICATE_TOLERANCE_DEG):
            continue
        normalized.append(waypoint)
    return normalized


def sanitize_route_waypoints(waypoints: Optional[Sequence[Coordinate]]) -> Optional[List[Coordinate]]:
    """
    Validate every waypoint and collapse consecutive duplicates.

    Returns:
        the cleaned list, or None when fewer than 2 distinct points remain
        (caller falls back to start/end).
    Raises:
        InvalidCoordinateError for out-of-range waypoints.
    """
    if not waypoints:
        return None

    for index, waypoint in enumerate(waypoints):
        validate_coordinate(waypoint, label=f"route waypoint {index}")

    normalized = _drop_consecutive_duplicates(waypoints)
    return normalized if len(normalized) >= 2 else None


def build_driver_route(
    start: Coordinate,
    end: Coordinate,
    waypoints: Optional[Sequence[Coordinate]] = None,
) -> List[Coordinate]:
    """
    Route the insertion engine should evaluate for a trip.

    - uses the given waypoints when there are at least 2, else [start, end]
    - guarantees the trip start is first and the trip end is last
    - collapses consecutive duplicates

    Raises:
        InvalidCoordinateError when start, end or a waypoint is out of range
        InvalidRouteError when fewer than 2 distinct points remain
    """
    validate_coordinate(start, label="trip start")
    validate_coordinate(end, label="trip end")
    for index, waypoint in enumerate(waypoints or ()):
        validate_coordinate(waypoint, label=f"route waypoint {index}")

    if waypoints and len(waypoints) >= 2:
        route = list(waypoints)
    else:
        route = [start, end]

    if not _is_close(route[0], start, ENDPOINT_TOLERANCE_DEG):
        route.insert(0, start)
    if not _is_close(route[-1], end, ENDPOINT_TOLERANCE_DEG):
        route.append(end)

    route = _drop_consecutive_duplicates(route)
    if len(route) < 2:
        raise InvalidRouteError("a driver route must include at least an origin and a destination")
    return route


def decode_route_polyline(encoded: Optional[str]) -> List[Coordinate]:
    """
    Decode a Google encoded polyline (precision 5) into Coordinates.
    """
    if not encoded:
        return []
    return [Coordinate(latitude=lat, longitude=lon) for lat, lon in polyline.decode(encoded)]


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first_present(raw: Mapping, *keys: str) -> Any:
    """First value among keys that is present and not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def parse_stored_route_waypoints(stored: Any) -> Optional[List[Coordinate]]:
    """
    Parse a route as it is usually persisted next to a trip record.

    Accepts:
      - an encoded polyline string
      - a list of mappings with latitude/lat and longitude/lng/lon keys
        (entries that are not mappings or lack numeric values are skipped)

    Returns the sanitized route or None when nothing usable is stored.
    """
    if not stored:
        return None

    if isinstance(stored, str):
        return sanitize_route_waypoints(decode_route_polyline(stored))

    if not isinstance(stored, (list, tuple)):
        return None

    candidates: List[Coordinate] = []
    for raw in stored:
        if isinstance(raw, Coordinate):
            candidates.append(raw)
            continue
        if not isinstance(raw, Mapping):
            continue

        latitude = _coerce_float(_first_present(raw, "latitude", "lat"))
        longitude = _coerce_float(_first_present(raw, "longitude", "lng", "lon"))
        if latitude is None or longitude is None:
            continue

        candidates.append(Coordinate(latitude=latitude, longitude=longitude))

    return sanitize_route_waypoints(candidates)
