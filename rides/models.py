"""
Purpose: Domain models for the Rides capability.
What it does:
- Defines the value objects passed through the matching engine:
- Coordinate (latitude/longitude in degrees)
- PassengerStops (pickup + dropoff of one passenger)
- RouteMetrics (distance/duration of a waypoint sequence)
- AssignmentCandidate (one feasible way of inserting a passenger into a route)

Rule: No geometry, no search logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class Coordinate:
    """
    A point in degrees (WGS84-like). Ranges are not enforced here;
    see routing.route_service.validate_coordinate for caller-side checks.
    """
    latitude: float
    longitude: float

    @classmethod
    def from_latlon(cls, latlon: LatLon) -> Coordinate:
        lat, lon = latlon
        return cls(latitude=float(lat), longitude=float(lon))


@dataclass(frozen=True)
class PassengerStops:
    """
    Pickup and dropoff of a single passenger.
    The dropoff must be visited after the pickup along the augmented route.
    """
    pickup: Coordinate
    dropoff: Coordinate


@dataclass(frozen=True)
class RouteMetrics:
    total_distance_km: float
    total_duration_minutes: float


@dataclass(frozen=True)
class AssignmentCandidate:
    """
    Output of the insertion search for one (pickup, dropoff) placement.

    Indexes refer to positions in updated_route:
      updated_route[pickup_insert_index] == pickup
      updated_route[dropoff_insert_index] == dropoff
    pickup_insert_index < dropoff_insert_index always holds and
    updated_route has exactly two more waypoints than the original route.
    """
    pickup_insert_index: int
    dropoff_insert_index: int
    additional_minutes: float
    additional_distance_km: float
    updated_route: Tuple[Coordinate, ...]
    updated_metrics: RouteMetrics
    base_metrics: RouteMetrics
