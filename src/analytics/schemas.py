from pydantic import BaseModel, computed_field
from typing import Optional
from datetime import date
from decimal import Decimal

class RouteAnalyticsView(BaseModel):
    """Daily route analytics row"""
    route_id: int
    analysis_date: date
    total_passengers: int
    average_travel_time: Optional[Decimal] = None  # minutes
    peak_hour: Optional[int] = None
    revenue: Decimal

    @computed_field
    @property
    def peak_hour_window(self) -> Optional[str]:
        if self.peak_hour is None:
            return None
        return f"{self.peak_hour:02d}:00-{self.peak_hour + 1:02d}:00"

    class Config:
        from_attributes = True

class VehicleUtilizationView(BaseModel):
    """Daily vehicle utilization row"""
    vehicle_id: int
    analysis_date: date
    passenger_count: int
    total_distance: Optional[Decimal] = None  # km
    total_hours_operated: Optional[Decimal] = None
    revenue: Decimal

    class Config:
        from_attributes = True
