"""
Tests for reference catalog lookups and zone fare maintenance
"""

from datetime import datetime
from decimal import Decimal

import pytest

from src import exceptions
from src.catalog.fare_audit import FARE_CHANGE, FareChangeLog, ZoneFareService
from src.catalog.service import ReferenceCatalog
from src.models import SystemLog


class TestReferenceCatalog:
    """Reference data lookups"""

    def test_ticket_types(self, db):
        names = [ticket_type.type_name for ticket_type in ReferenceCatalog(db).list_ticket_types()]
        assert names == ["Single Ride", "Day Pass", "Weekly Pass", "Airport Express", "Student Monthly"]

    def test_pricing_rules_highest_multiplier_first(self, db):
        rules = ReferenceCatalog(db).get_dynamic_pricing_rules()
        assert [rule.id for rule in rules] == [1, 2, 3, 4]
        assert rules[0].multiplier == Decimal("1.25")

    def test_active_vehicles(self, db):
        vehicles = ReferenceCatalog(db).list_active_vehicles()
        assert [vehicle.registration_number for vehicle in vehicles] == [
            "BUS001", "BUS002", "BUS101", "EXP201", "TRAM01"
        ]
        assert vehicles[-1].vehicle_type.capacity == 120

    def test_route_stops_in_order(self, db):
        stops = ReferenceCatalog(db).get_route_stops(3)
        assert [route_stop.stop.stop_name for route_stop in stops] == [
            "Main Station", "City Hall", "Green Park", "Riverside"
        ]

    def test_route_stops_unknown_route(self, db):
        with pytest.raises(exceptions.RouteNotFound):
            ReferenceCatalog(db).get_route_stops(999)

    def test_scheduled_vehicles(self, db):
        catalog = ReferenceCatalog(db)
        assert catalog.get_scheduled_vehicles(1) == [1, 2]
        assert catalog.get_scheduled_vehicles(5) == []

    def test_missing_lookups(self, db):
        catalog = ReferenceCatalog(db)
        assert catalog.get_ticket_type(999) is None
        with pytest.raises(exceptions.UnknownTicketType):
            catalog.require_ticket_type(999)
        with pytest.raises(exceptions.PassengerNotFound):
            catalog.require_passenger(999)
        with pytest.raises(exceptions.StopNotFound):
            catalog.require_stop(999)


class TestZoneFareService:
    """Zone base fares and the fare audit trail"""

    def test_change_is_audited(self, db):
        changed_at = datetime(2024, 1, 15, 9, 0)
        zone = ZoneFareService(db).update_base_fare(1, Decimal("2.75"), actor="admin", now=changed_at)

        assert zone.base_fare == Decimal("2.75")
        entries = FareChangeLog(db).entries(zone_id=1)
        assert len(entries) == 1
        assert entries[0].log_type == FARE_CHANGE
        assert entries[0].changed_by == "admin"
        assert entries[0].changed_value == "Old:2.50|New:2.75"
        assert entries[0].timestamp == changed_at

    def test_unchanged_fare_is_not_audited(self, db):
        ZoneFareService(db).update_base_fare(2, "2.00", actor="admin")
        assert db.query(SystemLog).count() == 0

    def test_entries_filtered_by_zone(self, db):
        service = ZoneFareService(db)
        service.update_base_fare(1, Decimal("3.00"), actor="admin")
        service.update_base_fare(3, Decimal("1.75"), actor="admin")

        log = FareChangeLog(db)
        assert len(log.entries()) == 2
        assert [entry.changed_value for entry in log.entries(zone_id=3)] == ["Old:1.50|New:1.75"]

    def test_negative_fare(self, db):
        with pytest.raises(exceptions.InvalidValue):
            ZoneFareService(db).update_base_fare(1, Decimal("-0.50"), actor="admin")

    def test_unknown_zone(self, db):
        with pytest.raises(exceptions.ZoneNotFound):
            ZoneFareService(db).update_base_fare(999, Decimal("1.00"), actor="admin")
        assert db.query(SystemLog).count() == 0
