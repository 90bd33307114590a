"""
Purpose: Straight-line geometry on a spherical earth.
What it does:

- great-circle distance between two coordinates (haversine)
- local equirectangular projection to meters (short segments only)
- point -> segment distance, clamped to the segment
- point -> polyline (route) minimal distance

Rule: No routing rules or thresholds here. Pure math over Coordinates.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from rides.models import Coordinate

EARTH_RADIUS_KM = 6371.0

METERS_PER_DEGREE_LAT = 111132.0
METERS_PER_DEGREE_LON_AT_EQUATOR = 111320.0


def haversine_distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance in kilometers using the mean earth radius.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = lat2 - lat1
    delta_lon = math.radians(b.longitude - a.longitude)

    sin_lat = math.sin(delta_lat / 2)
    sin_lon = math.sin(delta_lon / 2)

    c = sin_lat * sin_lat + math.cos(lat1) * math.cos(lat2) * sin_lon * sin_lon

    # rounding can push sqrt(c) just above 1 for antipodal points -> asin would fail
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(c)))


def project_to_meters(point: Coordinate, reference_latitude: float) -> Tuple[float, float]:
    """
    Equirectangular projection around reference_latitude.
    Returns (x, y) in meters. Only valid for short segments near the reference.
    """
    meters_per_degree_lon = METERS_PER_DEGREE_LON_AT_EQUATOR * math.cos(math.radians(reference_latitude))
    return (
        point.longitude * meters_per_degree_lon,
        point.latitude * METERS_PER_DEGREE_LAT,
    )


def point_to_segment_distance_meters(
    point: Coordinate,
    segment_start: Coordinate,
    segment_end: Coordinate,
) -> float:
    """
    Distance in meters from point to the closest point of the segment
    (not of the infinite line through it).
    """
    if segment_start == segment_end:
        return haversine_distance_km(point, segment_start) * 1000

    reference_latitude = (segment_start.latitude + segment_end.latitude) / 2

    px, py = project_to_meters(point, reference_latitude)
    sx, sy = project_to_meters(segment_start, reference_latitude)
    ex, ey = project_to_meters(segment_end, reference_latitude)

    seg_x, seg_y = ex - sx, ey - sy
    vec_x, vec_y = px - sx, py - sy

    segment_length_squared = seg_x * seg_x + seg_y * seg_y
    if segment_length_squared == 0:
        factor = 0.0
    else:
        factor = max(0.0, min(1.0, (vec_x * seg_x + vec_y * seg_y) / segment_length_squared))

    closest_x = sx + factor * seg_x
    closest_y = sy + factor * seg_y

    return math.hypot(px - closest_x, py - closest_y)


def minimal_distance_to_route_meters(route: Sequence[Coordinate], point: Coordinate) -> float:
    """
    Minimal point -> segment distance over every consecutive pair of the route.
    A route with fewer than 2 waypoints has no segments -> +inf.
    """
    if len(route) < 2:
        return math.inf

    best = math.inf
    for start, end in zip(route[:-1], route[1:]):
        distance = point_to_segment_distance_meters(point, start, end)
        if distance < best:
            best = distance
    return best
