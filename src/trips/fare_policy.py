"""
Per-leg fare policy by ticket type.

PER_RIDE tickets charge the ticket's price on every leg. PREPAID passes
were paid in full at issuance, so each leg is charged 0. Ticket types not
listed here (or in the FARE_POLICY_OVERRIDES setting) cannot be used for
boarding until a policy is assigned.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, Mapping, Optional

from src import exceptions
from src.config import settings
from src.models import Ticket


class LegFarePolicy(str, Enum):
    PER_RIDE = "per_ride"
    PREPAID = "prepaid"


FARE_POLICY_TABLE: Dict[str, LegFarePolicy] = {
    "Single Ride": LegFarePolicy.PER_RIDE,
    "Airport Express": LegFarePolicy.PER_RIDE,
    "Day Pass": LegFarePolicy.PREPAID,
    "Weekly Pass": LegFarePolicy.PREPAID,
    "Monthly Pass": LegFarePolicy.PREPAID,
    "Student Monthly": LegFarePolicy.PREPAID,
}


def policy_table(overrides: Optional[Mapping[str, str]] = None) -> Dict[str, LegFarePolicy]:
    table = dict(FARE_POLICY_TABLE)
    overrides = settings.FARE_POLICY_OVERRIDES if overrides is None else overrides
    for type_name, policy in overrides.items():
        table[type_name] = LegFarePolicy(policy)
    return table


def policy_for(type_name: str, table: Optional[Mapping[str, LegFarePolicy]] = None) -> LegFarePolicy:
    table = policy_table() if table is None else table
    try:
        return table[type_name]
    except KeyError:
        raise exceptions.FarePolicyUndefined(type_name)


def leg_fare(ticket: Ticket, table: Optional[Mapping[str, LegFarePolicy]] = None) -> Decimal:
    """Fare charged for one leg travelled on `ticket`"""
    policy = policy_for(ticket.ticket_type.type_name, table)
    if policy == LegFarePolicy.PER_RIDE:
        return Decimal(ticket.price)
    return Decimal("0.00")
