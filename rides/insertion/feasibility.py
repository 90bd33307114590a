# rides/insertion/feasibility.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rides.models import AssignmentCandidate, Coordinate, PassengerStops
from routing.metrics import estimate_route_metrics
from routing.route_service import InvalidRouteError
from .deviation import stops_within_corridor
from .policy import RouteEvaluationOptions

logger = logging.getLogger(__name__)

# additional_minutes closer than this are a tie -> decided by additional distance
MINUTES_TIE_TOLERANCE = 1e-3


def evaluate_passenger_insertion(
    route_waypoints: Sequence[Coordinate],
    passenger_stops: PassengerStops,
    options: RouteEvaluationOptions,
) -> Optional[AssignmentCandidate]:
    """
    Find the cheapest way to insert a passenger (pickup then dropoff) into a driver route.

    route_waypoints:
        ordered route, first = trip start, last = trip end, anything between
        is an already committed stop. Neither end is ever displaced.

    Feasibility constraints:
      - pickup and dropoff within options.max_deviation_meters of the original route
      - added duration <= options.max_additional_minutes
      - PICKUP before DROPOFF (enforced by the loop bounds, not checked afterwards)

    Selection: least additional minutes, ties (< 1e-3 min) broken by least additional km.

    Returns None when no placement is feasible. That is the normal "no match"
    outcome, not an error.

    Notes:
    - O(n^2) placements, each with an O(n) metrics recomputation. Fine for
      single digit stop counts, not meant for long multi-stop routes.
    """
    n = len(route_waypoints)
    if n < 2:
        raise InvalidRouteError("at least two points are required to evaluate a driver's route")

    speed = options.average_speed_kmh
    base_metrics = estimate_route_metrics(route_waypoints, speed)

    if not stops_within_corridor(route_waypoints, passenger_stops, options.max_deviation_meters):
        return None

    best: Optional[AssignmentCandidate] = None
    explored = 0

    for pickup_index in range(n - 1):
        with_pickup: List[Coordinate] = list(route_waypoints)
        with_pickup.insert(pickup_index + 1, passenger_stops.pickup)

        # drop_index + 1 <= n keeps the trip end as the last waypoint
        for drop_index in range(pickup_index + 1, n):
            explored += 1
            updated_route = list(with_pickup)
            updated_route.insert(drop_index + 1, passenger_stops.dropoff)

            updated_metrics = estimate_route_metrics(updated_route, speed)
            additional_minutes = updated_metrics.total_duration_minutes - base_metrics.total_duration_minutes
            if additional_minutes > options.max_additional_minutes:
                continue

            candidate = AssignmentCandidate(
                pickup_insert_index=pickup_index + 1,
                dropoff_insert_index=drop_index + 1,
                additional_minutes=additional_minutes,
                additional_distance_km=updated_metrics.total_distance_km - base_metrics.total_distance_km,
                updated_route=tuple(updated_route),
                updated_metrics=updated_metrics,
                base_metrics=base_metrics,
            )

            if best is None or is_better_candidate(candidate, best):
                best = candidate

    if best is None:
        logger.debug(f"no placement within {options.max_additional_minutes} extra minutes ({explored} explored)")
    else:
        logger.debug(
            f"best placement pickup@{best.pickup_insert_index} dropoff@{best.dropoff_insert_index} "
            f"+{best.additional_minutes:.2f} min ({explored} explored)"
        )
    return best


def is_better_candidate(candidate: AssignmentCandidate, current_best: AssignmentCandidate) -> bool:
    """
    Two-level comparator. Existing passengers' time matters more than extra km:
    minutes decide unless they differ by less than MINUTES_TIE_TOLERANCE,
    then the smaller additional distance wins. Full ties keep current_best.
    """
    minutes_delta = candidate.additional_minutes - current_best.additional_minutes
    if abs(minutes_delta) < MINUTES_TIE_TOLERANCE:
        return candidate.additional_distance_km < current_best.additional_distance_km
    return minutes_delta < 0
