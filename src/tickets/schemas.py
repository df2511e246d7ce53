from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"

class TicketIssueRequest(BaseModel):
    """Request to purchase a ticket"""
    passenger_id: int
    ticket_type_id: int
    payment_method: str = Field(..., min_length=1, max_length=50)

class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus

class TicketView(BaseModel):
    """Issued ticket joined with its ticket type name"""
    ticket_id: int
    passenger_id: int
    type_name: str
    purchase_datetime: datetime
    valid_from: datetime
    valid_to: datetime
    price: Decimal
    payment_method: Optional[str] = None
    payment_status: PaymentStatus
