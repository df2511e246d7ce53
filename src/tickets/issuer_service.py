from typing import Dict, FrozenSet, Optional
from datetime import datetime, timedelta
from logging import getLogger
from sqlalchemy.orm import Session

from src import exceptions
from src.database import transaction
from src.catalog.service import ReferenceCatalog
from src.fares.holidays import HolidayCalendar
from src.fares.pricing_service import PricingResolver
from src.models import Ticket, TicketType
from src.tickets.schemas import PaymentStatus, TicketView
from src.timeutils import to_storage, utcnow

logger = getLogger(__name__)

# Refunded is terminal
PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.FAILED, PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.COMPLETED}),
    PaymentStatus.REFUNDED: frozenset(),
}

class TicketIssuer:
    """Single entry point for ticket creation"""

    def __init__(self, db: Session, holiday_calendar: Optional[HolidayCalendar] = None):
        self.db = db
        self.catalog = ReferenceCatalog(db)
        self.pricing = PricingResolver(db, holiday_calendar=holiday_calendar)

    def issue_ticket(
        self,
        passenger_id: int,
        ticket_type_id: int,
        payment_method: str,
        now: Optional[datetime] = None
    ) -> TicketView:
        """
        Price and persist a new ticket.

        The price is resolved at `now` and the validity window runs from
        `now` for the ticket type's validity hours. Both are fixed here and
        never recomputed. Lookup, pricing and insert share one transaction.
        """
        if not payment_method or not payment_method.strip():
            raise exceptions.InvalidValue("payment_method", "must not be empty")

        issued_at = to_storage(now) if now is not None else utcnow()

        with transaction(self.db):
            ticket_type = self.catalog.require_ticket_type(ticket_type_id)
            self.catalog.require_passenger(passenger_id)

            price = self.pricing.resolve_price(ticket_type, issued_at)

            ticket = Ticket(
                passenger_id=passenger_id,
                ticket_type_id=ticket_type.id,
                purchase_datetime=issued_at,
                valid_from=issued_at,
                valid_to=issued_at + timedelta(hours=ticket_type.validity_hours),
                price=price,
                payment_method=payment_method.strip(),
                payment_status=PaymentStatus.COMPLETED.value
            )
            self.db.add(ticket)
            self.db.flush()
            view = self._to_view(ticket, ticket_type)

        logger.info(
            "Issued ticket %s (%s) to passenger %s for %s",
            view.ticket_id, view.type_name, passenger_id, view.price
        )
        return view

    def get_ticket(self, ticket_id: int) -> TicketView:
        ticket = self._require_ticket(ticket_id)
        return self._to_view(ticket, ticket.ticket_type)

    def update_payment_status(self, ticket_id: int, status: PaymentStatus) -> TicketView:
        """Move a ticket's payment status; the only mutation an issued ticket allows"""
        status = PaymentStatus(status)

        with transaction(self.db):
            ticket = self._require_ticket(ticket_id)
            current = PaymentStatus(ticket.payment_status)
            if status not in PAYMENT_TRANSITIONS[current]:
                raise exceptions.InvalidPaymentTransition(current.value, status.value)
            ticket.payment_status = status.value
            self.db.flush()
            view = self._to_view(ticket, ticket.ticket_type)

        logger.info("Ticket %s payment status %s -> %s", ticket_id, current.value, status.value)
        return view

    def _require_ticket(self, ticket_id: int) -> Ticket:
        ticket = self.db.query(Ticket).filter(Ticket.id == ticket_id).first()
        if ticket is None:
            raise exceptions.TicketNotFound(ticket_id)
        return ticket

    @staticmethod
    def _to_view(ticket: Ticket, ticket_type: TicketType) -> TicketView:
        return TicketView(
            ticket_id=ticket.id,
            passenger_id=ticket.passenger_id,
            type_name=ticket_type.type_name,
            purchase_datetime=ticket.purchase_datetime,
            valid_from=ticket.valid_from,
            valid_to=ticket.valid_to,
            price=ticket.price,
            payment_method=ticket.payment_method,
            payment_status=PaymentStatus(ticket.payment_status)
        )
