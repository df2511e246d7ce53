from sqlalchemy import (
    Column, Integer, BigInteger, String, Boolean, DateTime, Date, Time,
    ForeignKey, Numeric, UniqueConstraint, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from src.database import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer, "sqlite")

# ================================
# Fleet
# ================================
class VehicleType(Base):
    __tablename__ = "vehicle_types"

    id = Column(IdType, primary_key=True, index=True)
    type_name = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)
    description = Column(String(200))

    # Relationships
    vehicles = relationship("Vehicle", back_populates="vehicle_type")

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(IdType, primary_key=True, index=True)
    vehicle_type_id = Column(IdType, ForeignKey("vehicle_types.id"), nullable=False)
    registration_number = Column(String(20), unique=True, nullable=False)
    manufacture_year = Column(Integer)
    last_maintenance_date = Column(Date)
    status = Column(String(20), nullable=False, default="Active", index=True)

    # Relationships
    vehicle_type = relationship("VehicleType", back_populates="vehicles")
    schedules = relationship("Schedule", back_populates="vehicle")
    positions = relationship("VehiclePosition", back_populates="vehicle")
    status_logs = relationship("VehicleStatusLog", back_populates="vehicle")

# ================================
# Passengers
# ================================
class Passenger(Base):
    __tablename__ = "passengers"

    id = Column(IdType, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    phone = Column(String(20))
    registration_date = Column(DateTime)
    last_login = Column(DateTime)

    # Relationships
    tickets = relationship("Ticket", back_populates="passenger")

# ================================
# Zones / Stops / Routes
# ================================
class Zone(Base):
    __tablename__ = "zones"

    id = Column(IdType, primary_key=True, index=True)
    zone_name = Column(String(50), nullable=False)
    base_fare = Column(Numeric(10, 2), nullable=False)

    # Relationships
    stops = relationship("Stop", back_populates="zone")

class Stop(Base):
    __tablename__ = "stops"

    id = Column(IdType, primary_key=True, index=True)
    stop_name = Column(String(100), nullable=False)
    zone_id = Column(IdType, ForeignKey("zones.id"), nullable=False)
    latitude = Column(Numeric(9, 6), nullable=False)
    longitude = Column(Numeric(9, 6), nullable=False)

    # Relationships
    zone = relationship("Zone", back_populates="stops")

class Route(Base):
    __tablename__ = "routes"

    id = Column(IdType, primary_key=True, index=True)
    route_name = Column(String(100), nullable=False)
    start_stop_id = Column(IdType, ForeignKey("stops.id"), nullable=False)
    end_stop_id = Column(IdType, ForeignKey("stops.id"), nullable=False)
    average_duration_minutes = Column(Integer)
    status = Column(String(20), default="Active")

    # Relationships
    start_stop = relationship("Stop", foreign_keys=[start_stop_id])
    end_stop = relationship("Stop", foreign_keys=[end_stop_id])
    route_stops = relationship("RouteStop", back_populates="route", order_by="RouteStop.sequence_number")
    schedules = relationship("Schedule", back_populates="route")

class RouteStop(Base):
    __tablename__ = "route_stops"
    __table_args__ = (
        UniqueConstraint("route_id", "sequence_number"),
    )

    id = Column(IdType, primary_key=True, index=True)
    route_id = Column(IdType, ForeignKey("routes.id"), nullable=False, index=True)
    stop_id = Column(IdType, ForeignKey("stops.id"), nullable=False)
    sequence_number = Column(Integer, nullable=False)
    estimated_time_to_next_stop = Column(Integer)  # minutes

    # Relationships
    route = relationship("Route", back_populates="route_stops")
    stop = relationship("Stop")

class Schedule(Base):
    __tablename__ = "schedules"
    __table_args__ = (
        Index("idx_schedules_route_start", "route_id", "start_time"),
    )

    id = Column(IdType, primary_key=True, index=True)
    route_id = Column(IdType, ForeignKey("routes.id"), nullable=False)
    vehicle_id = Column(IdType, ForeignKey("vehicles.id"), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    recurrence_pattern = Column(String(50))  # "Weekdays", "Weekend", "Daily"
    status = Column(String(20), default="Active")

    # Relationships
    route = relationship("Route", back_populates="schedules")
    vehicle = relationship("Vehicle", back_populates="schedules")

# ================================
# Real-time Tracking
# ================================
class VehiclePosition(Base):
    __tablename__ = "vehicle_positions"
    __table_args__ = (
        Index("idx_vehicle_positions_vehicle_timestamp", "vehicle_id", "timestamp"),
    )

    id = Column(IdType, primary_key=True, index=True)
    vehicle_id = Column(IdType, ForeignKey("vehicles.id"), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    latitude = Column(Numeric(9, 6), nullable=False)
    longitude = Column(Numeric(9, 6), nullable=False)
    speed = Column(Numeric(6, 2))
    bearing = Column(Numeric(5, 2))

    # Relationships
    vehicle = relationship("Vehicle", back_populates="positions")

class VehicleStatusLog(Base):
    __tablename__ = "vehicle_status_log"

    id = Column(IdType, primary_key=True, index=True)
    vehicle_id = Column(IdType, ForeignKey("vehicles.id"), nullable=False, index=True)
    status = Column(String(50), nullable=False)
    timestamp = Column(DateTime, nullable=False)

    # Relationships
    vehicle = relationship("Vehicle", back_populates="status_logs")

# ================================
# Ticketing & Pricing
# ================================
class TicketType(Base):
    __tablename__ = "ticket_types"

    id = Column(IdType, primary_key=True, index=True)
    type_name = Column(String(50), nullable=False, unique=True)
    description = Column(String(200))
    base_price = Column(Numeric(10, 2), nullable=False)
    validity_hours = Column(Integer, nullable=False)
    is_transferable = Column(Boolean, default=False)

    # Relationships
    tickets = relationship("Ticket", back_populates="ticket_type")

class DynamicPricingRule(Base):
    __tablename__ = "dynamic_pricing_rules"
    __table_args__ = (
        CheckConstraint("multiplier > 0", name="ck_dynamic_pricing_rules_multiplier_positive"),
    )

    id = Column(IdType, primary_key=True, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    day_type = Column(String(20), nullable=False)  # Weekday, Weekend, Holiday, All
    multiplier = Column(Numeric(3, 2), nullable=False)
    description = Column(String(200))

class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        Index("idx_tickets_passenger_valid_to", "passenger_id", "valid_to"),
    )

    id = Column(IdType, primary_key=True, index=True)
    passenger_id = Column(IdType, ForeignKey("passengers.id"), nullable=False)
    ticket_type_id = Column(IdType, ForeignKey("ticket_types.id"), nullable=False)
    purchase_datetime = Column(DateTime, nullable=False)
    valid_from = Column(DateTime, nullable=False)
    valid_to = Column(DateTime, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50))
    payment_status = Column(String(20), nullable=False, default="Completed")

    # Relationships
    passenger = relationship("Passenger", back_populates="tickets")
    ticket_type = relationship("TicketType", back_populates="tickets")
    trips = relationship("TripRecord", back_populates="ticket", order_by="TripRecord.boarding_time")

class TripRecord(Base):
    __tablename__ = "trip_records"
    __table_args__ = (
        Index("idx_trip_records_vehicle_boarding", "vehicle_id", "boarding_time"),
    )

    id = Column(IdType, primary_key=True, index=True)
    ticket_id = Column(IdType, ForeignKey("tickets.id"), nullable=False, index=True)
    vehicle_id = Column(IdType, ForeignKey("vehicles.id"), nullable=False)
    boarding_stop_id = Column(IdType, ForeignKey("stops.id"), nullable=False)
    alighting_stop_id = Column(IdType, ForeignKey("stops.id"))
    boarding_time = Column(DateTime, nullable=False)
    alighting_time = Column(DateTime)
    fare_charged = Column(Numeric(10, 2))

    # Relationships
    ticket = relationship("Ticket", back_populates="trips")
    vehicle = relationship("Vehicle")

# ================================
# Analytics
# ================================
class DailyRouteAnalytics(Base):
    __tablename__ = "daily_route_analytics"
    __table_args__ = (
        UniqueConstraint("route_id", "analysis_date"),
    )

    id = Column(IdType, primary_key=True, index=True)
    route_id = Column(IdType, ForeignKey("routes.id"), nullable=False)
    analysis_date = Column(Date, nullable=False)
    total_passengers = Column(Integer, nullable=False)
    average_travel_time = Column(Numeric(10, 2))  # minutes
    peak_hour = Column(Integer)  # hour of day, reference timezone
    revenue = Column(Numeric(15, 2), nullable=False)

class VehicleUtilization(Base):
    __tablename__ = "vehicle_utilization"
    __table_args__ = (
        UniqueConstraint("vehicle_id", "analysis_date"),
    )

    id = Column(IdType, primary_key=True, index=True)
    vehicle_id = Column(IdType, ForeignKey("vehicles.id"), nullable=False)
    analysis_date = Column(Date, nullable=False)
    passenger_count = Column(Integer, nullable=False)
    total_distance = Column(Numeric(10, 2))  # km
    total_hours_operated = Column(Numeric(10, 2))
    revenue = Column(Numeric(15, 2), nullable=False)

# ================================
# Audit
# ================================
class SystemLog(Base):
    __tablename__ = "system_logs"

    id = Column(IdType, primary_key=True, index=True)
    log_type = Column(String(50), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    changed_by = Column(String(100))
    changed_value = Column(String(255))
    timestamp = Column(DateTime, nullable=False, index=True)
