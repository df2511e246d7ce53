from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

class BoardingRequest(BaseModel):
    """Boarding event observed on a vehicle"""
    ticket_id: int
    vehicle_id: int
    boarding_stop_id: int
    boarding_time: Optional[datetime] = None

class AlightingRequest(BaseModel):
    """Alighting event closing a trip leg"""
    alighting_stop_id: int
    alighting_time: Optional[datetime] = None

class TripRecordView(BaseModel):
    id: int
    ticket_id: int
    vehicle_id: int
    boarding_stop_id: int
    alighting_stop_id: Optional[int] = None
    boarding_time: datetime
    alighting_time: Optional[datetime] = None
    fare_charged: Optional[Decimal] = None

    class Config:
        from_attributes = True

class TicketTrips(BaseModel):
    ticket_id: int
    trips: List[TripRecordView]
