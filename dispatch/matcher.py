"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Takes a passenger's pickup/dropoff and a pool of published trips, keeps the
eligible ones, runs the insertion engine on each trip's route and ranks the
trips the passenger fits into.

Rule: Matcher is the only file request handlers should call directly for matching.
Persisting candidate.updated_route once a match is accepted is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from drivers.models import TravelOffer
from rides.insertion.feasibility import evaluate_passenger_insertion
from rides.insertion.policy import RouteEvaluationOptions
from rides.insertion.summary import AssignmentSummary, summarize_assignment_candidate
from rides.models import AssignmentCandidate, Coordinate, PassengerStops, RouteMetrics
from routing.metrics import estimate_route_metrics
from routing.route_service import (
    InvalidCoordinateError,
    InvalidRouteError,
    build_driver_route,
    validate_coordinate,
)
from .candidate_filter import DEFAULT_TIME_WINDOW_MINUTES, filter_eligible_travels

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = (
    "passenger cannot be inserted without exceeding the extra-minutes limit "
    "or the maximum deviation"
)

# trips evaluated per requested result (infeasible ones are dropped afterwards)
CANDIDATE_OVERFETCH = 3


@dataclass(frozen=True)
class AssignmentEvaluation:
    """
    Outcome of evaluating one passenger against one trip.
    success=False is a normal outcome (no compatible placement), not an error.
    """
    success: bool
    base_metrics: RouteMetrics
    original_route: Tuple[Coordinate, ...]
    candidate: Optional[AssignmentCandidate] = None
    summary: Optional[AssignmentSummary] = None
    message: Optional[str] = None

    @property
    def updated_route(self) -> Optional[Tuple[Coordinate, ...]]:
        return self.candidate.updated_route if self.candidate else None


@dataclass(frozen=True)
class TravelMatch:
    travel: TravelOffer
    evaluation: AssignmentEvaluation

    @property
    def summary(self) -> AssignmentSummary:
        return self.evaluation.summary


@dataclass(frozen=True)
class MatchingResult:
    """
    matches: best trips first, at most max_results
    total_candidates: how many evaluated trips were feasible before truncation
    applied_config: thresholds actually used (handy for API responses / logs)
    """
    matches: List[TravelMatch]
    total_candidates: int
    applied_config: Dict[str, Any]

    @property
    def count(self) -> int:
        return len(self.matches)


def evaluate_passenger_assignment(
    travel: TravelOffer,
    passenger_stops: PassengerStops,
    options: RouteEvaluationOptions,
) -> AssignmentEvaluation:
    """
    Evaluate one passenger against one trip.

    Raises:
        InvalidCoordinateError: passenger or trip coordinates out of range
        InvalidRouteError: the trip route collapses to fewer than two points
    """
    validate_coordinate(passenger_stops.pickup, label="pickup")
    validate_coordinate(passenger_stops.dropoff, label="dropoff")

    original_route = build_driver_route(travel.start, travel.end, travel.route_waypoints)
    candidate = evaluate_passenger_insertion(original_route, passenger_stops, options)

    if candidate is None:
        return AssignmentEvaluation(
            success=False,
            base_metrics=estimate_route_metrics(original_route, options.average_speed_kmh),
            original_route=tuple(original_route),
            message=NO_MATCH_MESSAGE,
        )

    return AssignmentEvaluation(
        success=True,
        base_metrics=candidate.base_metrics,
        original_route=tuple(original_route),
        candidate=candidate,
        summary=summarize_assignment_candidate(candidate),
    )


def find_matching_travels(
    travels: Sequence[TravelOffer],
    passenger_stops: PassengerStops,
    options: RouteEvaluationOptions,
    *,
    passenger_id: Optional[str] = None,
    pickup_time: Optional[datetime] = None,
    time_window_minutes: float = DEFAULT_TIME_WINDOW_MINUTES,
    max_results: int = 10,
    now: Optional[datetime] = None,
) -> MatchingResult:
    """
    Rank the trips a passenger can join.

    Pipeline:
      1) hard rules (candidate_filter) -> upcoming confirmed trips with seats
      2) cap at max_results * CANDIDATE_OVERFETCH trips, earliest first
      3) insertion search per trip, infeasible trips dropped
      4) sort by (additional minutes, additional km, price)

    A trip whose route is unusable (out-of-range coordinates, or fewer than
    two distinct points) is logged and skipped so one bad record does not
    fail the whole search.
    """
    validate_coordinate(passenger_stops.pickup, label="pickup")
    validate_coordinate(passenger_stops.dropoff, label="dropoff")

    max_results = max(max_results, 1)

    eligible = filter_eligible_travels(
        travels,
        passenger_id=passenger_id,
        pickup_time=pickup_time,
        time_window_minutes=time_window_minutes,
        now=now,
    )
    eligible = eligible[: max_results * CANDIDATE_OVERFETCH]

    matches: List[TravelMatch] = []
    for travel in eligible:
        try:
            evaluation = evaluate_passenger_assignment(travel, passenger_stops, options)
        except (InvalidRouteError, InvalidCoordinateError) as e:
            logger.warning(f"Skipping travel {travel.id}: {e}")
            continue

        if not evaluation.success:
            continue
        matches.append(TravelMatch(travel=travel, evaluation=evaluation))

    matches.sort(
        key=lambda match: (
            match.summary.additional_minutes,
            match.summary.additional_distance_km,
            match.travel.price,
        )
    )

    logger.info(f"{len(matches)} of {len(eligible)} eligible travels can take the passenger")

    return MatchingResult(
        matches=matches[:max_results],
        total_candidates=len(matches),
        applied_config={
            "average_speed_kmh": options.average_speed_kmh,
            "max_additional_minutes": options.max_additional_minutes,
            "max_deviation_meters": options.max_deviation_meters,
            "time_window_minutes": time_window_minutes,
            "max_results": max_results,
            "pickup_time": pickup_time.isoformat() if pickup_time else None,
        },
    )
