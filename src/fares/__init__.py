"""
Fares Module

Dynamic pricing for ticket issuance: time-of-day and day-type conditioned
multipliers applied to a ticket type's base price.

Key Components:
- pricing_service.py: PricingResolver (rule matching, tie-break, rounding)
- holidays.py: pluggable holiday calendars
- router.py: FastAPI fare quote endpoint
- schemas.py: Pydantic price quote model
"""

from .router import router
from .pricing_service import PricingResolver, interval_contains, round_currency
from .holidays import HolidayCalendar, StaticHolidayCalendar, default_holiday_calendar
from .schemas import PriceQuote

__all__ = [
    "router",
    "PricingResolver",
    "interval_contains",
    "round_currency",
    "HolidayCalendar",
    "StaticHolidayCalendar",
    "default_holiday_calendar",
    "PriceQuote",
]
