from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.permissions import authorize_passenger
from src.auth.schemas import Caller, Capability
from src.tickets.schemas import TicketIssueRequest, TicketView, PaymentStatusUpdate
from src.tickets.issuer_service import TicketIssuer

router = APIRouter()

@router.post("/", response_model=TicketView, status_code=status.HTTP_201_CREATED)
def issue_ticket(
    request: TicketIssueRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TICKETS_ISSUE))
):
    """Purchase a ticket priced at the current dynamic fare"""
    authorize_passenger(caller, request.passenger_id)

    issuer = TicketIssuer(db)
    return issuer.issue_ticket(
        passenger_id=request.passenger_id,
        ticket_type_id=request.ticket_type_id,
        payment_method=request.payment_method
    )

@router.get("/{ticket_id}", response_model=TicketView)
def get_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TICKETS_READ))
):
    """Get ticket details by ID"""
    ticket = TicketIssuer(db).get_ticket(ticket_id)
    authorize_passenger(caller, ticket.passenger_id)
    return ticket

@router.patch("/{ticket_id}/payment-status", response_model=TicketView)
def update_payment_status(
    ticket_id: int,
    update: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TICKETS_PAYMENT))
):
    """Record a payment status transition for a ticket"""
    return TicketIssuer(db).update_payment_status(ticket_id, update.payment_status)
