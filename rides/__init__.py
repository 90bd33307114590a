"""
Rides domain package.

Public API:
- Domain models: Coordinate, PassengerStops, RouteMetrics, AssignmentCandidate
- Insertion engine lives in rides.insertion (import it from there)
"""
from .models import AssignmentCandidate, Coordinate, PassengerStops, RouteMetrics

__all__ = [
    "Coordinate",
    "PassengerStops",
    "RouteMetrics",
    "AssignmentCandidate",
]
