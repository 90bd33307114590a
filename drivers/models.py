"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a published driver trip (TravelOffer) and its status
without relying on any ORM. Persistence maps its rows onto these objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from rides.models import Coordinate
from routing.route_service import parse_stored_route_waypoints


class TravelStatus(str, Enum):
    """
    Lifecycle of a trip a driver publishes.
    Only CONFIRMED trips are offered to passengers.
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TravelOffer:
    """
    A purely stateless snapshot of a driver's trip at matching time.
    route_waypoints is the planned route (start ... committed stops ... end),
    None when only start/end are known.
    """
    id: str
    driver_id: str
    start: Coordinate
    end: Coordinate
    start_time: datetime
    price: float = 0.0
    spaces_available: int = 1
    status: TravelStatus = TravelStatus.PENDING
    route_waypoints: Optional[Tuple[Coordinate, ...]] = None

    @classmethod
    def new(
        cls,
        travel_id: str,
        driver_id: str,
        start: Tuple[float, float],
        end: Tuple[float, float],
        start_time: datetime,
        price: float = 0.0,
        spaces_available: int = 1,
        status: str | TravelStatus = TravelStatus.PENDING,
        stored_route: Any = None,
    ) -> TravelOffer:
        """
        Build from plain values. stored_route is whatever the trip record keeps
        (list of {lat, lng} dicts or an encoded polyline).
        """
        if isinstance(status, str):
            status = TravelStatus(status)

        waypoints = parse_stored_route_waypoints(stored_route)

        return cls(
            id=travel_id,
            driver_id=driver_id,
            start=Coordinate.from_latlon(start),
            end=Coordinate.from_latlon(end),
            start_time=start_time,
            price=float(price),
            spaces_available=int(spaces_available),
            status=status,
            route_waypoints=tuple(waypoints) if waypoints else None,
        )
