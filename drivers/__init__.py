"""
Drivers domain package.

Public API:
- TravelOffer, TravelStatus
"""
from .models import TravelOffer, TravelStatus

__all__ = ["TravelOffer", "TravelStatus"]
