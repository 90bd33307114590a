"""
Purpose: Display-ready projection of a chosen AssignmentCandidate.
Percentages are relative to the route before the insertion; a zero base
metric reports 0 % rather than NaN/inf.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from rides.models import AssignmentCandidate


@dataclass(frozen=True)
class AssignmentSummary:
    pickup_insert_index: int
    dropoff_insert_index: int
    additional_minutes: float
    additional_distance_km: float
    new_total_minutes: float
    new_total_distance_km: float
    time_increase_percent: float
    distance_increase_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _increase_percent(delta: float, base: float) -> float:
    if base == 0:
        return 0.0
    return delta / base * 100


def summarize_assignment_candidate(candidate: AssignmentCandidate) -> AssignmentSummary:
    base = candidate.base_metrics
    return AssignmentSummary(
        pickup_insert_index=candidate.pickup_insert_index,
        dropoff_insert_index=candidate.dropoff_insert_index,
        additional_minutes=candidate.additional_minutes,
        additional_distance_km=candidate.additional_distance_km,
        new_total_minutes=candidate.updated_metrics.total_duration_minutes,
        new_total_distance_km=candidate.updated_metrics.total_distance_km,
        time_increase_percent=_increase_percent(candidate.additional_minutes, base.total_duration_minutes),
        distance_increase_percent=_increase_percent(candidate.additional_distance_km, base.total_distance_km),
    )
