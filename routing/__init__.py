#Marks routing as a package.
#Re-exports the geometry / metrics / route preparation helpers so other modules
#import from routing without knowing internal file names.
#No business logic.

from .geo import (
    haversine_distance_km,
    minimal_distance_to_route_meters,
    point_to_segment_distance_meters,
    project_to_meters,
)
from .metrics import estimate_route_metrics
from .route_service import (
    InvalidCoordinateError,
    InvalidRouteError,
    build_driver_route,
    decode_route_polyline,
    parse_stored_route_waypoints,
    sanitize_route_waypoints,
    validate_coordinate,
)

__all__ = [
    "haversine_distance_km",
    "project_to_meters",
    "point_to_segment_distance_meters",
    "minimal_distance_to_route_meters",
    "estimate_route_metrics",
    "InvalidRouteError",
    "InvalidCoordinateError",
    "validate_coordinate",
    "sanitize_route_waypoints",
    "build_driver_route",
    "decode_route_polyline",
    "parse_stored_route_waypoints",
]
