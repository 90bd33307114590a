#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Matcher orchestrator (the "one call" entry point)

from .candidate_filter import filter_eligible_travels
from .matcher import (
    AssignmentEvaluation,
    MatchingResult,
    TravelMatch,
    evaluate_passenger_assignment,
    find_matching_travels, #the main function to call to match a passenger with trips
)

__all__ = [
    "filter_eligible_travels",
    "evaluate_passenger_assignment",
    "find_matching_travels",
    "AssignmentEvaluation",
    "MatchingResult",
    "TravelMatch",
]
