from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.schemas import Caller, Capability
from src.catalog.schemas import (
    TicketTypeInfo, PricingRuleInfo, ActiveVehicle, RouteInfo, RouteStopInfo,
    RouteStopList, ZoneFareUpdate, ZoneInfo
)
from src.catalog.service import ReferenceCatalog
from src.catalog.fare_audit import ZoneFareService

router = APIRouter()

@router.get("/ticket-types", response_model=List[TicketTypeInfo])
def list_ticket_types(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """List ticket types with base prices"""
    return ReferenceCatalog(db).list_ticket_types()

@router.get("/pricing-rules", response_model=List[PricingRuleInfo])
def list_pricing_rules(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """List dynamic pricing rules, highest multiplier first"""
    return ReferenceCatalog(db).get_dynamic_pricing_rules()

@router.get("/routes", response_model=List[RouteInfo])
def list_routes(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """List routes"""
    return ReferenceCatalog(db).list_routes()

@router.get("/routes/{route_id}/stops", response_model=RouteStopList)
def get_route_stops(
    route_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """Stops of a route ordered by sequence number"""
    catalog = ReferenceCatalog(db)
    route_stops = catalog.get_route_stops(route_id)

    return RouteStopList(
        route_id=route_id,
        stops=[
            RouteStopInfo(
                route_name=route_stop.route.route_name,
                stop_id=route_stop.stop_id,
                stop_name=route_stop.stop.stop_name,
                sequence_number=route_stop.sequence_number,
                estimated_time_to_next_stop=route_stop.estimated_time_to_next_stop
            )
            for route_stop in route_stops
        ]
    )

@router.get("/vehicles/active", response_model=List[ActiveVehicle])
def list_active_vehicles(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """Active vehicles with their type and capacity"""
    vehicles = ReferenceCatalog(db).list_active_vehicles()
    return [
        ActiveVehicle(
            vehicle_id=vehicle.id,
            registration_number=vehicle.registration_number,
            type_name=vehicle.vehicle_type.type_name,
            capacity=vehicle.vehicle_type.capacity
        )
        for vehicle in vehicles
    ]

@router.put("/zones/{zone_id}/fare", response_model=ZoneInfo)
def update_zone_fare(
    zone_id: int,
    update: ZoneFareUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.FARES_WRITE))
):
    """Change a zone's base fare; the change is written to the fare audit log"""
    service = ZoneFareService(db)
    return service.update_base_fare(zone_id, update.base_fare, actor=caller.subject)
