#Purpose: Non-routing hard eligibility filtering (rule gates).
#Builds the base set of trips a passenger may be matched with before any
#insertion search runs (the search is the expensive part).
#Rules:
#trip is confirmed
#trip has at least one free seat
#passenger is not the driver of the trip
#trip starts inside the passenger's time window (or in the future when no pickup time is given)

#Output: "rule-qualified trips", ordered by start time (still not ranked).

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from drivers.models import TravelOffer, TravelStatus

DEFAULT_TIME_WINDOW_MINUTES = 90


def filter_eligible_travels(
    travels: Iterable[TravelOffer],
    *,
    passenger_id: Optional[str] = None,
    pickup_time: Optional[datetime] = None,
    time_window_minutes: float = DEFAULT_TIME_WINDOW_MINUTES,
    now: Optional[datetime] = None,
) -> List[TravelOffer]:
    """
    Keep only trips a passenger could be offered.

    Args:
        travels: published trips (any status)
        passenger_id: excluded as driver (a driver cannot ride their own trip)
        pickup_time: desired pickup, trips must start within +/- time_window_minutes of it
        time_window_minutes: half width of the window around pickup_time
        now: reference for "upcoming" when pickup_time is None. Defaults to the
            current time in each trip's own tzinfo, so naive and aware start
            times both compare (a given now/pickup_time must match the trips' awareness)
    """
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None
    if pickup_time is not None:
        window = timedelta(minutes=time_window_minutes)
        window_start, window_end = pickup_time - window, pickup_time + window
    elif now is not None:
        window_start = now

    eligible = []
    for travel in travels:
        if travel.status != TravelStatus.CONFIRMED:
            continue

        if travel.spaces_available <= 0:
            continue

        if passenger_id is not None and travel.driver_id == passenger_id:
            continue

        earliest = window_start if window_start is not None else datetime.now(travel.start_time.tzinfo)
        if travel.start_time < earliest:
            continue
        if window_end is not None and travel.start_time > window_end:
            continue

        eligible.append(travel)

    eligible.sort(key=lambda travel: travel.start_time)
    return eligible
