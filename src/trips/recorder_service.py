from typing import List, Mapping, Optional
from datetime import datetime
from logging import getLogger
from sqlalchemy.orm import Session

from src import exceptions
from src.database import transaction
from src.catalog.service import ReferenceCatalog
from src.models import Ticket, TripRecord
from src.tickets.schemas import PaymentStatus
from src.trips.fare_policy import LegFarePolicy, leg_fare
from src.trips.schemas import TripRecordView
from src.timeutils import to_storage, utcnow

logger = getLogger(__name__)

class TripRecorder:
    """Records boarding and alighting events against issued tickets"""

    def __init__(self, db: Session, fare_policies: Optional[Mapping[str, LegFarePolicy]] = None):
        self.db = db
        self.catalog = ReferenceCatalog(db)
        self.fare_policies = fare_policies

    def record_boarding(
        self,
        ticket_id: int,
        vehicle_id: int,
        boarding_stop_id: int,
        boarding_time: Optional[datetime] = None
    ) -> TripRecordView:
        """
        Open a trip leg on a ticket.

        The boarding time must fall inside the ticket's validity window,
        both ends included. The leg's fare comes from the ticket type's
        fare policy.
        """
        boarding_time = to_storage(boarding_time) if boarding_time is not None else utcnow()

        with transaction(self.db):
            ticket = self._require_ticket(ticket_id)
            self.catalog.require_vehicle(vehicle_id)
            self.catalog.require_stop(boarding_stop_id)

            if ticket.payment_status != PaymentStatus.COMPLETED.value:
                raise exceptions.TicketNotPaid(ticket.id, ticket.payment_status)

            if not (ticket.valid_from <= boarding_time <= ticket.valid_to):
                raise exceptions.TicketExpired(ticket.id, boarding_time, ticket.valid_from, ticket.valid_to)

            trip = TripRecord(
                ticket_id=ticket.id,
                vehicle_id=vehicle_id,
                boarding_stop_id=boarding_stop_id,
                boarding_time=boarding_time,
                fare_charged=leg_fare(ticket, self.fare_policies)
            )
            self.db.add(trip)
            self.db.flush()
            view = TripRecordView.model_validate(trip)

        logger.info(
            "Trip %s boarded on vehicle %s with ticket %s, fare %s",
            view.id, vehicle_id, ticket_id, view.fare_charged
        )
        return view

    def record_alighting(
        self,
        trip_id: int,
        alighting_stop_id: int,
        alighting_time: Optional[datetime] = None
    ) -> TripRecordView:
        """Close an open trip leg; completed legs cannot be alighted again"""
        alighting_time = to_storage(alighting_time) if alighting_time is not None else utcnow()

        with transaction(self.db):
            trip = self._require_trip(trip_id)
            self.catalog.require_stop(alighting_stop_id)

            if trip.alighting_time is not None:
                raise exceptions.TripAlreadyCompleted(trip.id)
            if alighting_time < trip.boarding_time:
                raise exceptions.InvalidTimestampOrder("boarding_time", "alighting_time")

            trip.alighting_stop_id = alighting_stop_id
            trip.alighting_time = alighting_time
            self.db.flush()
            view = TripRecordView.model_validate(trip)

        logger.info("Trip %s alighted at stop %s", trip_id, alighting_stop_id)
        return view

    def get_trip(self, trip_id: int) -> TripRecordView:
        return TripRecordView.model_validate(self._require_trip(trip_id))

    def list_ticket_trips(self, ticket_id: int) -> List[TripRecordView]:
        """All legs travelled on a ticket, in boarding order"""
        ticket = self._require_ticket(ticket_id)
        return [TripRecordView.model_validate(trip) for trip in ticket.trips]

    def _require_ticket(self, ticket_id: int) -> Ticket:
        ticket = self.db.query(Ticket).filter(Ticket.id == ticket_id).first()
        if ticket is None:
            raise exceptions.TicketNotFound(ticket_id)
        return ticket

    def _require_trip(self, trip_id: int) -> TripRecord:
        trip = self.db.query(TripRecord).filter(TripRecord.id == trip_id).first()
        if trip is None:
            raise exceptions.TripNotFound(trip_id)
        return trip
