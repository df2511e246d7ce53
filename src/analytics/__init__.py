"""
Analytics Module

Daily per-route and per-vehicle summaries computed from trip records and
vehicle positions. Rows are keyed by (route or vehicle, date) and every
recomputation overwrites the existing row.

Key Components:
- aggregator_service.py: AnalyticsAggregator and the trip summary helpers
- router.py: FastAPI endpoints to recompute and read analytics
- schemas.py: Pydantic models for analytics rows
"""

from .router import router
from .aggregator_service import AnalyticsAggregator, TripSummary, summarize_trips, haversine_km
from .schemas import RouteAnalyticsView, VehicleUtilizationView

__all__ = [
    "router",
    "AnalyticsAggregator",
    "TripSummary",
    "summarize_trips",
    "haversine_km",
    "RouteAnalyticsView",
    "VehicleUtilizationView",
]
