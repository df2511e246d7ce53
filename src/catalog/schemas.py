from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, time
from decimal import Decimal

class TicketTypeInfo(BaseModel):
    id: int
    type_name: str
    description: Optional[str] = None
    base_price: Decimal
    validity_hours: int
    is_transferable: bool

    class Config:
        from_attributes = True

class PricingRuleInfo(BaseModel):
    id: int
    start_time: time
    end_time: time
    day_type: str
    multiplier: Decimal
    description: Optional[str] = None

    class Config:
        from_attributes = True

class ActiveVehicle(BaseModel):
    """Active fleet entry"""
    vehicle_id: int
    registration_number: str
    type_name: str
    capacity: int

class VehicleInfo(BaseModel):
    id: int
    vehicle_type_id: int
    registration_number: str
    manufacture_year: Optional[int] = None
    last_maintenance_date: Optional[date] = None
    status: str

    class Config:
        from_attributes = True

class RouteInfo(BaseModel):
    id: int
    route_name: str
    start_stop_id: int
    end_stop_id: int
    average_duration_minutes: Optional[int] = None
    status: Optional[str] = None

    class Config:
        from_attributes = True

class RouteStopInfo(BaseModel):
    """One stop of a route in travel order"""
    route_name: str
    stop_id: int
    stop_name: str
    sequence_number: int
    estimated_time_to_next_stop: Optional[int] = None

class ZoneFareUpdate(BaseModel):
    base_fare: Decimal = Field(..., ge=0, description="New base fare for the zone")

class ZoneInfo(BaseModel):
    id: int
    zone_name: str
    base_fare: Decimal

    class Config:
        from_attributes = True

class RouteStopList(BaseModel):
    route_id: int
    stops: List[RouteStopInfo]
