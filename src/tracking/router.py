from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.schemas import Caller, Capability
from src.tracking.schemas import (
    PositionReport, VehiclePositionView, VehicleStatusUpdate, VehicleStatusView,
    VehicleStatusEvent, VehicleStatusLogView
)
from src.tracking.position_service import PositionIngest

router = APIRouter()

@router.post("/vehicles/{vehicle_id}/positions", response_model=VehiclePositionView, status_code=status.HTTP_201_CREATED)
def record_position(
    vehicle_id: int,
    report: PositionReport,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.POSITIONS_RECORD))
):
    """Append a position sample for a vehicle"""
    return PositionIngest(db).record_position(
        vehicle_id=vehicle_id,
        latitude=report.latitude,
        longitude=report.longitude,
        speed=report.speed,
        bearing=report.bearing,
        now=report.timestamp
    )

@router.get("/vehicles/{vehicle_id}/positions/latest", response_model=VehiclePositionView)
def latest_position(
    vehicle_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.POSITIONS_READ))
):
    """Most recent position of a vehicle"""
    return PositionIngest(db).latest_position(vehicle_id)

@router.put("/vehicles/{vehicle_id}/status", response_model=VehicleStatusView)
def set_vehicle_status(
    vehicle_id: int,
    update: VehicleStatusUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.VEHICLES_STATUS))
):
    """Change a vehicle's operating status"""
    return PositionIngest(db).set_vehicle_status(vehicle_id, update.status)

@router.post("/vehicles/{vehicle_id}/status-log", response_model=VehicleStatusLogView, status_code=status.HTTP_201_CREATED)
def record_status_event(
    vehicle_id: int,
    event: VehicleStatusEvent,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.VEHICLES_STATUS))
):
    """Log an operational event for a vehicle"""
    return PositionIngest(db).record_status(vehicle_id, event.status)

@router.get("/vehicles/{vehicle_id}/status-log", response_model=List[VehicleStatusLogView])
def status_history(
    vehicle_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.POSITIONS_READ))
):
    """Status log of a vehicle, oldest first"""
    return PositionIngest(db).status_history(vehicle_id)
