from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import date

from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.schemas import Caller, Capability
from src.analytics.schemas import RouteAnalyticsView, VehicleUtilizationView
from src.analytics.aggregator_service import AnalyticsAggregator

router = APIRouter()

@router.post("/routes/{route_id}/{analysis_date}", response_model=RouteAnalyticsView)
def compute_route_statistics(
    route_id: int,
    analysis_date: date,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.ANALYTICS_COMPUTE))
):
    """Recompute daily analytics for a route"""
    return AnalyticsAggregator(db).compute_route_statistics(route_id, analysis_date)

@router.get("/routes/{route_id}/{analysis_date}", response_model=RouteAnalyticsView)
def get_route_statistics(
    route_id: int,
    analysis_date: date,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.ANALYTICS_READ))
):
    """Get previously computed daily analytics for a route"""
    return AnalyticsAggregator(db).get_route_statistics(route_id, analysis_date)

@router.post("/vehicles/{vehicle_id}/{analysis_date}", response_model=VehicleUtilizationView)
def compute_vehicle_utilization(
    vehicle_id: int,
    analysis_date: date,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.ANALYTICS_COMPUTE))
):
    """Recompute daily utilization for a vehicle"""
    return AnalyticsAggregator(db).compute_vehicle_utilization(vehicle_id, analysis_date)

@router.get("/vehicles/{vehicle_id}/{analysis_date}", response_model=VehicleUtilizationView)
def get_vehicle_utilization(
    vehicle_id: int,
    analysis_date: date,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.ANALYTICS_READ))
):
    """Get previously computed daily utilization for a vehicle"""
    return AnalyticsAggregator(db).get_vehicle_utilization(vehicle_id, analysis_date)
