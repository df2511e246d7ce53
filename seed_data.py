#!/usr/bin/env python3

from datetime import date, datetime, time
from decimal import Decimal
from logging import getLogger
import logging

from sqlalchemy.orm import Session
from src.database import SessionLocal, init_db, transaction
from src.models import (
    VehicleType, Vehicle, Passenger, Zone, Stop, Route, RouteStop, Schedule,
    TicketType, DynamicPricingRule
)

logger = getLogger("seed_data")

def load_reference_data(db: Session):
    """Insert the reference catalog; callers own the transaction"""

    # 1. Vehicle types and fleet
    vehicle_types = [
        VehicleType(id=1, type_name="Standard Bus", capacity=50, description="Regular city bus with seating for 30 and standing room for 20"),
        VehicleType(id=2, type_name="Articulated Bus", capacity=80, description="Extra-long bus with flexible middle section for high-capacity routes"),
        VehicleType(id=3, type_name="Electric Minibus", capacity=20, description="Small eco-friendly vehicle for low-demand routes"),
        VehicleType(id=4, type_name="Express Coach", capacity=45, description="Comfortable long-distance bus with luggage storage"),
        VehicleType(id=5, type_name="Tram", capacity=120, description="Light rail vehicle for urban transit"),
    ]
    db.add_all(vehicle_types)

    vehicles = [
        Vehicle(id=1, vehicle_type_id=1, registration_number="BUS001", manufacture_year=2020, last_maintenance_date=date(2023, 6, 15), status="Active"),
        Vehicle(id=2, vehicle_type_id=1, registration_number="BUS002", manufacture_year=2019, last_maintenance_date=date(2023, 5, 20), status="Active"),
        Vehicle(id=3, vehicle_type_id=2, registration_number="BUS101", manufacture_year=2021, last_maintenance_date=date(2023, 6, 1), status="Active"),
        Vehicle(id=4, vehicle_type_id=3, registration_number="MINI01", manufacture_year=2022, last_maintenance_date=date(2023, 6, 10), status="Maintenance"),
        Vehicle(id=5, vehicle_type_id=4, registration_number="EXP201", manufacture_year=2020, last_maintenance_date=date(2023, 5, 30), status="Active"),
        Vehicle(id=6, vehicle_type_id=5, registration_number="TRAM01", manufacture_year=2018, last_maintenance_date=date(2023, 4, 15), status="Active"),
    ]
    db.add_all(vehicles)

    # 2. Zones and stops
    zones = [
        Zone(id=1, zone_name="Central Business District", base_fare=Decimal("2.50")),
        Zone(id=2, zone_name="Inner City", base_fare=Decimal("2.00")),
        Zone(id=3, zone_name="Suburban", base_fare=Decimal("1.50")),
        Zone(id=4, zone_name="Outer Suburban", base_fare=Decimal("1.00")),
        Zone(id=5, zone_name="Airport Zone", base_fare=Decimal("3.50")),
    ]
    db.add_all(zones)

    stops = [
        Stop(id=1, stop_name="Main Station", zone_id=1, latitude=Decimal("34.052235"), longitude=Decimal("-118.243683")),
        Stop(id=2, stop_name="City Hall", zone_id=1, latitude=Decimal("34.053490"), longitude=Decimal("-118.245320")),
        Stop(id=3, stop_name="University", zone_id=2, latitude=Decimal("34.028556"), longitude=Decimal("-118.287000")),
        Stop(id=4, stop_name="Westfield Mall", zone_id=2, latitude=Decimal("34.041345"), longitude=Decimal("-118.256789")),
        Stop(id=5, stop_name="Green Park", zone_id=3, latitude=Decimal("34.062345"), longitude=Decimal("-118.308765")),
        Stop(id=6, stop_name="Riverside", zone_id=4, latitude=Decimal("34.098765"), longitude=Decimal("-118.345678")),
        Stop(id=7, stop_name="Airport Terminal 1", zone_id=5, latitude=Decimal("34.156789"), longitude=Decimal("-118.456789")),
        Stop(id=8, stop_name="Tech Park", zone_id=3, latitude=Decimal("34.067890"), longitude=Decimal("-118.298765")),
    ]
    db.add_all(stops)

    # 3. Routes, stop sequences and schedules
    routes = [
        Route(id=1, route_name="Downtown Express", start_stop_id=1, end_stop_id=2, average_duration_minutes=15, status="Active"),
        Route(id=2, route_name="University Loop", start_stop_id=3, end_stop_id=3, average_duration_minutes=45, status="Active"),
        Route(id=3, route_name="Cross-City", start_stop_id=1, end_stop_id=6, average_duration_minutes=60, status="Active"),
        Route(id=4, route_name="Airport Shuttle", start_stop_id=1, end_stop_id=7, average_duration_minutes=35, status="Active"),
        Route(id=5, route_name="Tech Corridor", start_stop_id=8, end_stop_id=5, average_duration_minutes=25, status="Active"),
    ]
    db.add_all(routes)

    route_stops = [
        (1, 1, 1, 5), (1, 2, 2, 10), (1, 4, 3, None),
        (2, 3, 1, 8), (2, 5, 2, 12), (2, 8, 3, 10), (2, 3, 4, None),
        (3, 1, 1, 10), (3, 2, 2, 15), (3, 5, 3, 20), (3, 6, 4, None),
    ]
    db.add_all([
        RouteStop(route_id=route_id, stop_id=stop_id, sequence_number=sequence, estimated_time_to_next_stop=minutes)
        for route_id, stop_id, sequence, minutes in route_stops
    ])

    schedules = [
        Schedule(route_id=1, vehicle_id=1, start_time=time(7, 0), end_time=time(19, 0), recurrence_pattern="Weekdays", status="Active"),
        Schedule(route_id=1, vehicle_id=2, start_time=time(8, 0), end_time=time(20, 0), recurrence_pattern="Weekend", status="Active"),
        Schedule(route_id=2, vehicle_id=3, start_time=time(6, 30), end_time=time(22, 0), recurrence_pattern="Daily", status="Active"),
        Schedule(route_id=3, vehicle_id=5, start_time=time(5, 0), end_time=time(23, 0), recurrence_pattern="Weekdays", status="Active"),
        Schedule(route_id=4, vehicle_id=6, start_time=time(4, 0), end_time=time(1, 0), recurrence_pattern="Daily", status="Active"),
    ]
    db.add_all(schedules)

    # 4. Passengers
    passengers = [
        Passenger(id=1, first_name="John", last_name="Smith", email="john.smith@email.com", phone="555-0101", registration_date=datetime(2023, 1, 15, 8, 30)),
        Passenger(id=2, first_name="Maria", last_name="Garcia", email="maria.g@email.com", phone="555-0102", registration_date=datetime(2023, 2, 20, 12, 15)),
        Passenger(id=3, first_name="David", last_name="Lee", email="david.lee@email.com", phone="555-0103", registration_date=datetime(2023, 3, 5, 9, 45)),
        Passenger(id=4, first_name="Sarah", last_name="Johnson", email="sarah.j@email.com", phone="555-0104", registration_date=datetime(2023, 1, 30, 14, 20)),
        Passenger(id=5, first_name="James", last_name="Wilson", email="james.w@email.com", phone="555-0105", registration_date=datetime(2023, 4, 10, 16, 50)),
    ]
    db.add_all(passengers)

    # 5. Ticket types and pricing rules
    ticket_types = [
        TicketType(id=1, type_name="Single Ride", description="One-way trip within zone", base_price=Decimal("2.50"), validity_hours=2, is_transferable=False),
        TicketType(id=2, type_name="Day Pass", description="Unlimited rides for 24 hours", base_price=Decimal("6.00"), validity_hours=24, is_transferable=True),
        TicketType(id=3, type_name="Weekly Pass", description="Unlimited rides for 7 days", base_price=Decimal("30.00"), validity_hours=168, is_transferable=True),
        TicketType(id=4, type_name="Airport Express", description="Special fare to/from airport", base_price=Decimal("5.00"), validity_hours=4, is_transferable=False),
        TicketType(id=5, type_name="Student Monthly", description="Discounted monthly pass for students", base_price=Decimal("45.00"), validity_hours=720, is_transferable=True),
    ]
    db.add_all(ticket_types)

    pricing_rules = [
        DynamicPricingRule(id=1, start_time=time(7, 0), end_time=time(9, 0), day_type="Weekday", multiplier=Decimal("1.25"), description="Morning rush hour"),
        DynamicPricingRule(id=2, start_time=time(16, 0), end_time=time(18, 0), day_type="Weekday", multiplier=Decimal("1.25"), description="Evening rush hour"),
        DynamicPricingRule(id=3, start_time=time(0, 0), end_time=time(23, 59, 59), day_type="Holiday", multiplier=Decimal("1.10"), description="Holiday surcharge"),
        DynamicPricingRule(id=4, start_time=time(22, 0), end_time=time(5, 0), day_type="All", multiplier=Decimal("0.75"), description="Night discount"),
    ]
    db.add_all(pricing_rules)
    db.flush()

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        logger.info("Loading reference data...")
        with transaction(db):
            load_reference_data(db)
        logger.info("Reference data loaded")
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_seed_data()
