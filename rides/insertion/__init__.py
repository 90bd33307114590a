"""
Insertion subpackage for the Rides domain.

Public API:
- evaluate_passenger_insertion
- summarize_assignment_candidate / AssignmentSummary
- RouteEvaluationOptions (+ factories)
"""

from .feasibility import evaluate_passenger_insertion, is_better_candidate
from .policy import (
    RouteEvaluationOptions,
    default_options,
    options_from_env,
    relaxed_options,
    strict_options,
)
from .summary import AssignmentSummary, summarize_assignment_candidate

__all__ = [
    "evaluate_passenger_insertion",
    "is_better_candidate",
    "summarize_assignment_candidate",
    "AssignmentSummary",
    "RouteEvaluationOptions",
    "default_options",
    "strict_options",
    "relaxed_options",
    "options_from_env",
]
