from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

class VehicleStatus(str, Enum):
    """Vehicle operating status"""
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    RETIRED = "Retired"

class PositionReport(BaseModel):
    """One position sample reported by a vehicle"""
    latitude: Decimal = Field(..., ge=-90, le=90)
    longitude: Decimal = Field(..., ge=-180, le=180)
    speed: Optional[Decimal] = Field(None, ge=0)
    bearing: Optional[Decimal] = Field(None, ge=0, lt=360)
    timestamp: Optional[datetime] = None

class VehiclePositionView(BaseModel):
    id: int
    vehicle_id: int
    timestamp: datetime
    latitude: Decimal
    longitude: Decimal
    speed: Optional[Decimal] = None
    bearing: Optional[Decimal] = None

    class Config:
        from_attributes = True

class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus

class VehicleStatusEvent(BaseModel):
    """Free-form operational event, e.g. "Departed Terminal" """
    status: str = Field(..., min_length=1, max_length=50)

class VehicleStatusView(BaseModel):
    id: int
    registration_number: str
    status: VehicleStatus
    last_maintenance_date: Optional[date] = None

    class Config:
        from_attributes = True

class VehicleStatusLogView(BaseModel):
    id: int
    vehicle_id: int
    status: str
    timestamp: datetime

    class Config:
        from_attributes = True
