"""
Purpose: Central configuration for passenger insertion (single source of truth).
What it does:

Stores the business thresholds a caller evaluates a passenger with:

AVERAGE_SPEED_KMH = 30

MAX_ADDITIONAL_MINUTES = 5

MAX_DEVIATION_METERS = None (no corridor check)

Optionally loads them from the environment / a .env file.

Rule: No logic here—just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Example in .env:
# MATCHING_AVERAGE_SPEED_KMH=30
# MATCHING_MAX_ADDITIONAL_MINUTES=5
# MATCHING_MAX_DEVIATION_METERS=1500

DEFAULT_AVERAGE_SPEED_KMH = 30.0
DEFAULT_MAX_ADDITIONAL_MINUTES = 5.0


@dataclass(frozen=True)
class RouteEvaluationOptions:
    """
    Thresholds for evaluating one passenger against one driver route.

    Notes:
    - Both limits are caller supplied business constraints, nothing derives them.
    - max_deviation_meters=None skips the corridor pre-check entirely;
      only the time budget then decides feasibility.
    - average_speed_kmh <= 0 is tolerated by the estimator (floored at 1 km/h),
      validate() is stricter for configs you load at startup.
    """

    # Extra minutes existing passengers accept after the insertion.
    max_additional_minutes: float

    # Max distance (meters) from pickup/dropoff to the nearest route segment.
    max_deviation_meters: Optional[float]

    # Straight-line legs are converted to minutes with this speed.
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be > 0")

        if self.max_additional_minutes < 0:
            raise ValueError("max_additional_minutes must be >= 0")

        if self.max_deviation_meters is not None and self.max_deviation_meters < 0:
            raise ValueError("max_deviation_meters must be >= 0 (or None to disable)")


def default_options() -> RouteEvaluationOptions:
    """
    Convenience factory: 30 km/h, 5 extra minutes, no corridor check.
    """
    o = RouteEvaluationOptions(
        max_additional_minutes=DEFAULT_MAX_ADDITIONAL_MINUTES,
        max_deviation_meters=None,
    )
    o.validate()
    return o


def strict_options() -> RouteEvaluationOptions:
    """
    Example: protect existing passengers, e.g. for morning commutes.
    """
    o = RouteEvaluationOptions(
        max_additional_minutes=3,
        max_deviation_meters=800,
    )
    o.validate()
    return o


def relaxed_options() -> RouteEvaluationOptions:
    """
    Example: longer intercity trips where a bigger detour is acceptable.
    """
    o = RouteEvaluationOptions(
        max_additional_minutes=20,
        max_deviation_meters=5000,
        average_speed_kmh=60,
    )
    o.validate()
    return o


def _float_from_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def options_from_env() -> RouteEvaluationOptions:
    """
    Build options from MATCHING_* environment variables, loading a .env file first
    (existing variables win over the file).
    Unset MATCHING_MAX_DEVIATION_METERS disables the corridor check.
    """
    load_dotenv()

    o = RouteEvaluationOptions(
        max_additional_minutes=_float_from_env("MATCHING_MAX_ADDITIONAL_MINUTES", DEFAULT_MAX_ADDITIONAL_MINUTES),
        max_deviation_meters=_float_from_env("MATCHING_MAX_DEVIATION_METERS", None),
        average_speed_kmh=_float_from_env("MATCHING_AVERAGE_SPEED_KMH", DEFAULT_AVERAGE_SPEED_KMH),
    )
    o.validate()
    return o
