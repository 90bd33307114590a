"""
Purpose: Corridor pre-check run before the insertion search.

Rejects a passenger whose pickup or dropoff is farther than the allowed
deviation from EVERY segment of the original route.

This is necessary, not sufficient: passing only proves each stop is near
some segment of the corridor, not near the segment it ends up inserted
next to. Real feasibility is still decided by the time recomputation in
feasibility.py. The gate exists because it is O(n) while the search is O(n^3).
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rides.models import Coordinate, PassengerStops
from routing.geo import minimal_distance_to_route_meters

logger = logging.getLogger(__name__)


def stops_within_corridor(
    route: Sequence[Coordinate],
    stops: PassengerStops,
    max_deviation_meters: Optional[float],
) -> bool:
    """
    True when both stops lie within max_deviation_meters of the route.
    max_deviation_meters=None disables the check.
    """
    if max_deviation_meters is None:
        return True

    pickup_deviation = minimal_distance_to_route_meters(route, stops.pickup)
    if pickup_deviation > max_deviation_meters:
        logger.debug(f"pickup is {pickup_deviation:.0f} m off route (max {max_deviation_meters:.0f} m)")
        return False

    dropoff_deviation = minimal_distance_to_route_meters(route, stops.dropoff)
    if dropoff_deviation > max_deviation_meters:
        logger.debug(f"dropoff is {dropoff_deviation:.0f} m off route (max {max_deviation_meters:.0f} m)")
        return False

    return True
