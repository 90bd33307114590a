"""
Purpose: Route metrics estimator.
Converts an ordered waypoint sequence into total distance and duration,
assuming straight great-circle legs driven at a constant average speed.
"""

from __future__ import annotations

from typing import Sequence

from rides.models import Coordinate, RouteMetrics
from .geo import haversine_distance_km

# speeds below this are floored so duration never divides by zero
MIN_SPEED_KMH = 1.0


def estimate_route_metrics(waypoints: Sequence[Coordinate], average_speed_kmh: float) -> RouteMetrics:
    if len(waypoints) < 2:
        return RouteMetrics(total_distance_km=0.0, total_duration_minutes=0.0)

    total_distance_km = 0.0
    for current, nxt in zip(waypoints[:-1], waypoints[1:]):
        total_distance_km += haversine_distance_km(current, nxt)

    speed = max(average_speed_kmh, MIN_SPEED_KMH)
    return RouteMetrics(
        total_distance_km=total_distance_km,
        total_duration_minutes=(total_distance_km / speed) * 60,
    )
