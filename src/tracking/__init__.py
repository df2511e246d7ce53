"""
Vehicle Tracking Module

Transactional write path for real-time vehicle positions, plus the vehicle
operating status and its append-only status log.

Key Components:
- position_service.py: PositionIngest (positions, latest position, status)
- router.py: FastAPI endpoints for vehicles reporting in
- schemas.py: Pydantic models for position samples and status changes
"""

from .router import router
from .position_service import PositionIngest
from .schemas import PositionReport, VehiclePositionView, VehicleStatus, VehicleStatusView

__all__ = [
    "router",
    "PositionIngest",
    "PositionReport",
    "VehiclePositionView",
    "VehicleStatus",
    "VehicleStatusView",
]
