from typing import FrozenSet, Iterable, List, Optional
from datetime import datetime, time
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session

from src import exceptions
from src.catalog.service import ReferenceCatalog
from src.fares.holidays import HolidayCalendar, default_holiday_calendar
from src.fares.schemas import PriceQuote
from src.models import DynamicPricingRule, TicketType
from src.timeutils import reference_zone, to_local

WEEKDAY = "Weekday"
WEEKEND = "Weekend"
HOLIDAY = "Holiday"
ALL_DAYS = "All"

CURRENCY_PRECISION = Decimal("0.01")
NO_ADJUSTMENT = Decimal("1.00")

def round_currency(amount: Decimal) -> Decimal:
    """Half-up rounding to two decimal places"""
    return Decimal(amount).quantize(CURRENCY_PRECISION, rounding=ROUND_HALF_UP)

def interval_contains(start: time, end: time, moment: time) -> bool:
    """
    Whether `moment` lies in [start, end).

    Intervals with end < start wrap past midnight and start == end covers
    the whole day. An all-day rule stored as 00:00-23:59:59 therefore
    leaves out only the final second before midnight.
    """
    if start == end:
        return True
    if start < end:
        return start <= moment < end
    return moment >= start or moment < end

class PricingResolver:
    """
    Resolves the effective price of a ticket type at a point in time.

    Candidate rules are those whose time-of-day interval contains the local
    time and whose day type is one of the day's tags or "All". Among the
    candidates the HIGHEST multiplier wins; this is a deliberate policy
    carried over from the fare tables' historical behaviour, not a
    most-specific-interval match. Equal multipliers fall back to the lowest
    rule id. With no candidate the base price applies unchanged.
    """

    def __init__(
        self,
        db: Session,
        holiday_calendar: Optional[HolidayCalendar] = None,
        zone: Optional[ZoneInfo] = None
    ):
        self.db = db
        self.catalog = ReferenceCatalog(db)
        self.holiday_calendar = holiday_calendar if holiday_calendar is not None else default_holiday_calendar()
        self.zone = zone or reference_zone()

    def day_types(self, at_time: datetime) -> FrozenSet[str]:
        """Day-type tags for the local calendar day of `at_time`"""
        local = to_local(at_time, self.zone)
        tags = {WEEKEND if local.weekday() >= 5 else WEEKDAY}
        if self.holiday_calendar is not None and self.holiday_calendar.is_holiday(local.date()):
            tags.add(HOLIDAY)
        return frozenset(tags)

    def matching_rules(
        self,
        at_time: datetime,
        rules: Optional[Iterable[DynamicPricingRule]] = None
    ) -> List[DynamicPricingRule]:
        """Candidate rules for `at_time`, best first"""
        if rules is None:
            rules = self.catalog.get_dynamic_pricing_rules()

        local_time = to_local(at_time, self.zone).time().replace(tzinfo=None)
        tags = self.day_types(at_time)

        candidates = [
            rule for rule in rules
            if (rule.day_type == ALL_DAYS or rule.day_type in tags)
            and interval_contains(rule.start_time, rule.end_time, local_time)
        ]
        candidates.sort(key=lambda rule: (-Decimal(rule.multiplier), rule.id))
        return candidates

    def select_rule(
        self,
        at_time: datetime,
        rules: Optional[Iterable[DynamicPricingRule]] = None
    ) -> Optional[DynamicPricingRule]:
        candidates = self.matching_rules(at_time, rules)
        return candidates[0] if candidates else None

    def resolve_price(
        self,
        ticket_type: TicketType,
        at_time: datetime,
        rules: Optional[Iterable[DynamicPricingRule]] = None
    ) -> Decimal:
        """Effective price of `ticket_type` at `at_time`"""
        return self.quote(ticket_type, at_time, rules).price

    def resolve_price_for_type_id(self, ticket_type_id: int, at_time: datetime) -> Decimal:
        ticket_type = self.catalog.get_ticket_type(ticket_type_id)
        if ticket_type is None:
            raise exceptions.InvalidTicketType(ticket_type_id)
        return self.resolve_price(ticket_type, at_time)

    def quote(
        self,
        ticket_type: TicketType,
        at_time: datetime,
        rules: Optional[Iterable[DynamicPricingRule]] = None
    ) -> PriceQuote:
        """Price together with the rule that produced it"""
        if ticket_type is None:
            raise exceptions.InvalidTicketType()

        base_price = Decimal(ticket_type.base_price)
        if base_price < 0:
            raise exceptions.InvalidValue("base_price", "must not be negative")

        rule = self.select_rule(at_time, rules)
        multiplier = Decimal(rule.multiplier) if rule is not None else NO_ADJUSTMENT
        if multiplier <= 0:
            raise exceptions.InvalidValue("multiplier", "must be positive")

        return PriceQuote(
            ticket_type_id=ticket_type.id,
            type_name=ticket_type.type_name,
            at_time=at_time,
            day_types=sorted(self.day_types(at_time)),
            base_price=round_currency(base_price),
            multiplier=multiplier,
            price=round_currency(base_price * multiplier),
            applied_rule_id=rule.id if rule is not None else None,
            applied_rule_description=rule.description if rule is not None else None
        )
