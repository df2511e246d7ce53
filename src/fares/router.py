from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime

from src import exceptions
from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.schemas import Caller, Capability
from src.fares.schemas import PriceQuote
from src.fares.pricing_service import PricingResolver
from src.timeutils import utcnow

router = APIRouter()

@router.get("/quote", response_model=PriceQuote)
def quote_fare(
    ticket_type_id: int = Query(..., description="Ticket type to price"),
    at: Optional[datetime] = Query(None, description="Moment to price at, defaults to now"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.CATALOG_READ))
):
    """Quote the current effective price of a ticket type"""
    resolver = PricingResolver(db)
    ticket_type = resolver.catalog.get_ticket_type(ticket_type_id)
    if ticket_type is None:
        raise exceptions.InvalidTicketType(ticket_type_id)

    return resolver.quote(ticket_type, at or utcnow())
