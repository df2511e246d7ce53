"""
Tests for boarding and alighting
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src import exceptions
from src.models import TicketType, TripRecord
from src.tickets.issuer_service import TicketIssuer
from src.tickets.schemas import PaymentStatus
from src.trips.fare_policy import LegFarePolicy, policy_for, policy_table
from src.trips.recorder_service import TripRecorder

ISSUED_AT = datetime(2024, 1, 15, 12, 0)


@pytest.fixture
def single_ride(db):
    return TicketIssuer(db).issue_ticket(1, 1, "Cash", now=ISSUED_AT)


@pytest.fixture
def day_pass(db):
    return TicketIssuer(db).issue_ticket(2, 2, "Credit Card", now=ISSUED_AT)


class TestFarePolicy:
    def test_known_types(self):
        assert policy_for("Single Ride") == LegFarePolicy.PER_RIDE
        assert policy_for("Airport Express") == LegFarePolicy.PER_RIDE
        assert policy_for("Day Pass") == LegFarePolicy.PREPAID
        assert policy_for("Student Monthly") == LegFarePolicy.PREPAID

    def test_unknown_type(self):
        with pytest.raises(exceptions.FarePolicyUndefined):
            policy_for("Family Pass")

    def test_overrides(self):
        table = policy_table({"Family Pass": "prepaid", "Day Pass": "per_ride"})
        assert table["Family Pass"] == LegFarePolicy.PREPAID
        assert table["Day Pass"] == LegFarePolicy.PER_RIDE
        assert table["Single Ride"] == LegFarePolicy.PER_RIDE


class TestBoarding:
    """Boarding against the ticket validity window"""

    def test_single_ride_charges_ticket_price(self, db, single_ride):
        trip = TripRecorder(db).record_boarding(single_ride.ticket_id, 1, 1, ISSUED_AT + timedelta(minutes=5))

        assert trip.fare_charged == Decimal("2.50")
        assert trip.alighting_time is None
        assert trip.alighting_stop_id is None

    def test_day_pass_legs_are_free(self, db, day_pass):
        recorder = TripRecorder(db)
        first = recorder.record_boarding(day_pass.ticket_id, 1, 1, ISSUED_AT + timedelta(hours=1))
        second = recorder.record_boarding(day_pass.ticket_id, 3, 3, ISSUED_AT + timedelta(hours=5))

        assert first.fare_charged == Decimal("0")
        assert second.fare_charged == Decimal("0")
        assert [trip.id for trip in recorder.list_ticket_trips(day_pass.ticket_id)] == [first.id, second.id]

    def test_boarding_at_valid_from(self, db, single_ride):
        trip = TripRecorder(db).record_boarding(single_ride.ticket_id, 1, 1, single_ride.valid_from)
        assert trip.boarding_time == single_ride.valid_from

    def test_boarding_at_valid_to(self, db, single_ride):
        trip = TripRecorder(db).record_boarding(single_ride.ticket_id, 1, 1, single_ride.valid_to)
        assert trip.boarding_time == single_ride.valid_to

    def test_boarding_after_valid_to(self, db, single_ride):
        with pytest.raises(exceptions.TicketExpired):
            TripRecorder(db).record_boarding(
                single_ride.ticket_id, 1, 1, single_ride.valid_to + timedelta(seconds=1)
            )
        assert db.query(TripRecord).count() == 0

    def test_boarding_before_valid_from(self, db, single_ride):
        with pytest.raises(exceptions.TicketExpired):
            TripRecorder(db).record_boarding(
                single_ride.ticket_id, 1, 1, single_ride.valid_from - timedelta(seconds=1)
            )

    def test_unpaid_ticket(self, db, single_ride):
        TicketIssuer(db).update_payment_status(single_ride.ticket_id, PaymentStatus.FAILED)

        with pytest.raises(exceptions.TicketNotPaid):
            TripRecorder(db).record_boarding(single_ride.ticket_id, 1, 1, ISSUED_AT + timedelta(minutes=5))

    def test_unknown_references(self, db, single_ride):
        recorder = TripRecorder(db)
        at = ISSUED_AT + timedelta(minutes=5)

        with pytest.raises(exceptions.TicketNotFound):
            recorder.record_boarding(999, 1, 1, at)
        with pytest.raises(exceptions.VehicleNotFound):
            recorder.record_boarding(single_ride.ticket_id, 999, 1, at)
        with pytest.raises(exceptions.StopNotFound):
            recorder.record_boarding(single_ride.ticket_id, 1, 999, at)
        assert db.query(TripRecord).count() == 0

    def test_ticket_type_without_policy(self, db):
        db.add(TicketType(id=6, type_name="Family Pass", base_price=Decimal("12.00"), validity_hours=24))
        db.commit()
        ticket = TicketIssuer(db).issue_ticket(1, 6, "Cash", now=ISSUED_AT)

        with pytest.raises(exceptions.FarePolicyUndefined):
            TripRecorder(db).record_boarding(ticket.ticket_id, 1, 1, ISSUED_AT)

        recorder = TripRecorder(db, fare_policies=policy_table({"Family Pass": "prepaid"}))
        trip = recorder.record_boarding(ticket.ticket_id, 1, 1, ISSUED_AT)
        assert trip.fare_charged == Decimal("0")


class TestAlighting:
    """Closing trip legs"""

    def test_alighting(self, db, single_ride):
        recorder = TripRecorder(db)
        trip = recorder.record_boarding(single_ride.ticket_id, 1, 1, ISSUED_AT + timedelta(minutes=5))
        closed = recorder.record_alighting(trip.id, 2, ISSUED_AT + timedelta(minutes=20))

        assert closed.alighting_stop_id == 2
        assert closed.alighting_time == ISSUED_AT + timedelta(minutes=20)
        assert recorder.get_trip(trip.id).alighting_stop_id == 2

    def test_alighting_after_ticket_expiry_is_allowed(self, db, single_ride):
        recorder = TripRecorder(db)
        trip = recorder.record_boarding(single_ride.ticket_id, 1, 1, single_ride.valid_to)
        closed = recorder.record_alighting(trip.id, 4, single_ride.valid_to + timedelta(minutes=10))
        assert closed.alighting_stop_id == 4

    def test_alighting_twice(self, db, single_ride):
        recorder = TripRecorder(db)
        trip = recorder.record_boarding(single_ride.ticket_id, 1, 1, ISSUED_AT + timedelta(minutes=5))
        recorder.record_alighting(trip.id, 2, ISSUED_AT + timedelta(minutes=20))

        with pytest.raises(exceptions.TripAlreadyCompleted):
            recorder.record_alighting(trip.id, 4, ISSUED_AT + timedelta(minutes=30))

    def test_alighting_before_boarding(self, db, single_ride):
        recorder = TripRecorder(db)
        trip = recorder.record_boarding(single_ride.ticket_id, 1, 1, ISSUED_AT + timedelta(minutes=5))

        with pytest.raises(exceptions.InvalidTimestampOrder):
            recorder.record_alighting(trip.id, 2, ISSUED_AT)
        assert recorder.get_trip(trip.id).alighting_time is None

    def test_unknown_trip(self, db):
        with pytest.raises(exceptions.TripNotFound):
            TripRecorder(db).record_alighting(999, 1, ISSUED_AT)
