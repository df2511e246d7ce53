"""
Trip Recording Module

Boarding and alighting events recorded against issued tickets. Each leg is
an independent trip record; a pass may cover many legs inside its validity
window.

Key Components:
- recorder_service.py: TripRecorder (boarding, alighting, lookups)
- fare_policy.py: per-ticket-type leg fare table
- router.py: FastAPI endpoints for trip events
- schemas.py: Pydantic models for trip requests and records
"""

from .router import router
from .recorder_service import TripRecorder
from .fare_policy import FARE_POLICY_TABLE, LegFarePolicy, leg_fare, policy_for
from .schemas import BoardingRequest, AlightingRequest, TripRecordView

__all__ = [
    "router",
    "TripRecorder",
    "FARE_POLICY_TABLE",
    "LegFarePolicy",
    "leg_fare",
    "policy_for",
    "BoardingRequest",
    "AlightingRequest",
    "TripRecordView",
]
