"""
Ticketing Module

Ticket issuance for the transit fare engine. A ticket is priced once, at
purchase, by the dynamic pricing resolver and carries a validity window
derived from its ticket type. After issuance only its payment status may
change.

Key Components:
- issuer_service.py: TicketIssuer, the single entry point for ticket creation
- router.py: FastAPI endpoints for purchasing and reading tickets
- schemas.py: Pydantic models for ticket requests and views
"""

from .router import router
from .issuer_service import TicketIssuer, PAYMENT_TRANSITIONS
from .schemas import TicketIssueRequest, TicketView, PaymentStatus, PaymentStatusUpdate

__all__ = [
    "router",
    "TicketIssuer",
    "PAYMENT_TRANSITIONS",
    "TicketIssueRequest",
    "TicketView",
    "PaymentStatus",
    "PaymentStatusUpdate",
]
