from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

class PriceQuote(BaseModel):
    """Resolved price of a ticket type at a point in time"""
    ticket_type_id: int
    type_name: str
    at_time: datetime
    day_types: List[str]
    base_price: Decimal
    multiplier: Decimal
    price: Decimal
    applied_rule_id: Optional[int] = None
    applied_rule_description: Optional[str] = None
    currency: str = "USD"
