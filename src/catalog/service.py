from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from src import exceptions
from src.models import (
    TicketType, DynamicPricingRule, Vehicle, Route, RouteStop, Stop,
    Passenger, Schedule, Zone
)

class ReferenceCatalog:
    """Read-only lookups over reference data shared by every engine component"""

    def __init__(self, db: Session):
        self.db = db

    # Ticketing
    def get_ticket_type(self, ticket_type_id: int) -> Optional[TicketType]:
        return self.db.query(TicketType).filter(TicketType.id == ticket_type_id).first()

    def require_ticket_type(self, ticket_type_id: int) -> TicketType:
        ticket_type = self.get_ticket_type(ticket_type_id)
        if ticket_type is None:
            raise exceptions.UnknownTicketType(ticket_type_id)
        return ticket_type

    def list_ticket_types(self) -> List[TicketType]:
        return self.db.query(TicketType).order_by(TicketType.id).all()

    def get_dynamic_pricing_rules(self) -> List[DynamicPricingRule]:
        """All pricing rules, highest multiplier first"""
        return self.db.query(DynamicPricingRule).order_by(
            DynamicPricingRule.multiplier.desc(),
            DynamicPricingRule.id
        ).all()

    def get_passenger(self, passenger_id: int) -> Optional[Passenger]:
        return self.db.query(Passenger).filter(Passenger.id == passenger_id).first()

    def require_passenger(self, passenger_id: int) -> Passenger:
        passenger = self.get_passenger(passenger_id)
        if passenger is None:
            raise exceptions.PassengerNotFound(passenger_id)
        return passenger

    # Fleet
    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()

    def require_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = self.get_vehicle(vehicle_id)
        if vehicle is None:
            raise exceptions.VehicleNotFound(vehicle_id)
        return vehicle

    def list_active_vehicles(self) -> List[Vehicle]:
        """Active fleet with vehicle type and capacity"""
        return self.db.query(Vehicle).options(
            joinedload(Vehicle.vehicle_type)
        ).filter(Vehicle.status == "Active").order_by(Vehicle.id).all()

    # Network
    def get_route(self, route_id: int) -> Optional[Route]:
        return self.db.query(Route).filter(Route.id == route_id).first()

    def require_route(self, route_id: int) -> Route:
        route = self.get_route(route_id)
        if route is None:
            raise exceptions.RouteNotFound(route_id)
        return route

    def list_routes(self) -> List[Route]:
        return self.db.query(Route).order_by(Route.route_name).all()

    def get_route_stops(self, route_id: int) -> List[RouteStop]:
        """Stops of a route in travel order"""
        self.require_route(route_id)
        return self.db.query(RouteStop).options(
            joinedload(RouteStop.stop)
        ).filter(RouteStop.route_id == route_id).order_by(RouteStop.sequence_number).all()

    def get_stop(self, stop_id: int) -> Optional[Stop]:
        return self.db.query(Stop).filter(Stop.id == stop_id).first()

    def require_stop(self, stop_id: int) -> Stop:
        stop = self.get_stop(stop_id)
        if stop is None:
            raise exceptions.StopNotFound(stop_id)
        return stop

    def get_zone(self, zone_id: int) -> Optional[Zone]:
        return self.db.query(Zone).filter(Zone.id == zone_id).first()

    def get_scheduled_vehicles(self, route_id: int) -> List[int]:
        """Ids of every vehicle assigned to any schedule of the route"""
        rows = self.db.query(Schedule.vehicle_id).filter(
            Schedule.route_id == route_id
        ).distinct().all()
        return sorted(row[0] for row in rows)
