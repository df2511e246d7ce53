from typing import List, Optional, Sequence
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from collections import Counter
from dataclasses import dataclass
from logging import getLogger
from zoneinfo import ZoneInfo
import math

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src import exceptions
from src.database import transaction
from src.catalog.service import ReferenceCatalog
from src.models import (
    DailyRouteAnalytics, VehicleUtilization, TripRecord, VehiclePosition
)
from src.analytics.schemas import RouteAnalyticsView, VehicleUtilizationView
from src.timeutils import local_day_bounds, reference_zone, to_local

logger = getLogger(__name__)

TWO_PLACES = Decimal("0.01")
EARTH_RADIUS_KM = 6371

@dataclass(frozen=True)
class TripSummary:
    total_passengers: int
    average_travel_time: Optional[Decimal]
    peak_hour: Optional[int]
    revenue: Decimal

def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

def summarize_trips(trips: Sequence[TripRecord], zone: ZoneInfo) -> TripSummary:
    """
    Aggregate trip legs.

    Legs still missing an alighting time count as passengers and revenue
    but are left out of the average travel time. The peak hour is the local
    boarding hour with the most legs, the earliest hour winning ties.
    """
    durations = [
        Decimal(str((trip.alighting_time - trip.boarding_time).total_seconds())) / 60
        for trip in trips
        if trip.alighting_time is not None
    ]
    average = _round(sum(durations) / len(durations)) if durations else None

    hours = Counter(to_local(trip.boarding_time, zone).hour for trip in trips)
    peak_hour = min(hours, key=lambda hour: (-hours[hour], hour)) if hours else None

    revenue = _round(sum((Decimal(trip.fare_charged or 0) for trip in trips), Decimal("0")))

    return TripSummary(
        total_passengers=len(trips),
        average_travel_time=average,
        peak_hour=peak_hour,
        revenue=revenue
    )

def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometers"""
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat/2) * math.sin(dlat/2) +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(dlon/2) * math.sin(dlon/2))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))
    return EARTH_RADIUS_KM * c

class AnalyticsAggregator:
    """Recomputes daily route and vehicle analytics from trip records"""

    def __init__(self, db: Session, zone: Optional[ZoneInfo] = None):
        self.db = db
        self.catalog = ReferenceCatalog(db)
        self.zone = zone or reference_zone()

    def compute_route_statistics(self, route_id: int, analysis_date: date) -> RouteAnalyticsView:
        """
        Recompute and upsert the (route, date) analytics row.

        Trips are those made on any vehicle scheduled on the route and
        boarded during `analysis_date` in the reference timezone. Running it
        again over unchanged trips rewrites identical values.
        """
        try:
            with transaction(self.db):
                self.catalog.require_route(route_id)
                vehicle_ids = self.catalog.get_scheduled_vehicles(route_id)
                trips = self._day_trips(vehicle_ids, analysis_date)
                summary = summarize_trips(trips, self.zone)

                row = self.db.query(DailyRouteAnalytics).filter(
                    DailyRouteAnalytics.route_id == route_id,
                    DailyRouteAnalytics.analysis_date == analysis_date
                ).first()
                if row is None:
                    row = DailyRouteAnalytics(route_id=route_id, analysis_date=analysis_date)
                    self.db.add(row)

                row.total_passengers = summary.total_passengers
                row.average_travel_time = summary.average_travel_time
                row.peak_hour = summary.peak_hour
                row.revenue = summary.revenue
                self.db.flush()
                view = RouteAnalyticsView.model_validate(row)
        except IntegrityError as e:
            exceptions.handle(e)

        logger.info(
            "Route %s analytics for %s: %s passengers, revenue %s",
            route_id, analysis_date, view.total_passengers, view.revenue
        )
        return view

    def compute_vehicle_utilization(self, vehicle_id: int, analysis_date: date) -> VehicleUtilizationView:
        """
        Recompute and upsert the (vehicle, date) utilization row.

        Passenger count and revenue come from the vehicle's trips; distance
        and operating hours come from its recorded positions that day.
        """
        try:
            with transaction(self.db):
                self.catalog.require_vehicle(vehicle_id)
                trips = self._day_trips([vehicle_id], analysis_date)
                summary = summarize_trips(trips, self.zone)
                positions = self._day_positions(vehicle_id, analysis_date)

                total_distance = None
                total_hours = None
                if len(positions) >= 2:
                    distance = sum(
                        haversine_km(
                            float(previous.latitude), float(previous.longitude),
                            float(current.latitude), float(current.longitude)
                        )
                        for previous, current in zip(positions, positions[1:])
                    )
                    total_distance = _round(Decimal(str(distance)))
                    elapsed = positions[-1].timestamp - positions[0].timestamp
                    total_hours = _round(Decimal(str(elapsed.total_seconds())) / 3600)

                row = self.db.query(VehicleUtilization).filter(
                    VehicleUtilization.vehicle_id == vehicle_id,
                    VehicleUtilization.analysis_date == analysis_date
                ).first()
                if row is None:
                    row = VehicleUtilization(vehicle_id=vehicle_id, analysis_date=analysis_date)
                    self.db.add(row)

                row.passenger_count = summary.total_passengers
                row.total_distance = total_distance
                row.total_hours_operated = total_hours
                row.revenue = summary.revenue
                self.db.flush()
                view = VehicleUtilizationView.model_validate(row)
        except IntegrityError as e:
            exceptions.handle(e)

        logger.info(
            "Vehicle %s utilization for %s: %s passengers, %s km",
            vehicle_id, analysis_date, view.passenger_count, view.total_distance
        )
        return view

    def get_route_statistics(self, route_id: int, analysis_date: date) -> RouteAnalyticsView:
        self.catalog.require_route(route_id)
        row = self.db.query(DailyRouteAnalytics).filter(
            DailyRouteAnalytics.route_id == route_id,
            DailyRouteAnalytics.analysis_date == analysis_date
        ).first()
        if row is None:
            raise exceptions.AnalyticsNotComputed(f"route {route_id} on {analysis_date}")
        return RouteAnalyticsView.model_validate(row)

    def get_vehicle_utilization(self, vehicle_id: int, analysis_date: date) -> VehicleUtilizationView:
        self.catalog.require_vehicle(vehicle_id)
        row = self.db.query(VehicleUtilization).filter(
            VehicleUtilization.vehicle_id == vehicle_id,
            VehicleUtilization.analysis_date == analysis_date
        ).first()
        if row is None:
            raise exceptions.AnalyticsNotComputed(f"vehicle {vehicle_id} on {analysis_date}")
        return VehicleUtilizationView.model_validate(row)

    def _day_trips(self, vehicle_ids: List[int], analysis_date: date) -> List[TripRecord]:
        if not vehicle_ids:
            return []
        start, end = local_day_bounds(analysis_date, self.zone)
        return self.db.query(TripRecord).filter(
            TripRecord.vehicle_id.in_(vehicle_ids),
            TripRecord.boarding_time >= start,
            TripRecord.boarding_time < end
        ).order_by(TripRecord.boarding_time, TripRecord.id).all()

    def _day_positions(self, vehicle_id: int, analysis_date: date) -> List[VehiclePosition]:
        start, end = local_day_bounds(analysis_date, self.zone)
        return self.db.query(VehiclePosition).filter(
            VehiclePosition.vehicle_id == vehicle_id,
            VehiclePosition.timestamp >= start,
            VehiclePosition.timestamp < end
        ).order_by(VehiclePosition.timestamp, VehiclePosition.id).all()
