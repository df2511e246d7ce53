"""
Role-based authorization.

Capability sets per caller role, checked by the application at each exposed
operation instead of being delegated to database accounts.
"""

from typing import Dict, FrozenSet

from src import exceptions
from src.auth.schemas import Caller, CallerRole, Capability

ROLE_CAPABILITIES: Dict[CallerRole, FrozenSet[Capability]] = {
    CallerRole.ADMIN: frozenset(Capability),
    CallerRole.OPERATOR: frozenset({
        Capability.CATALOG_READ,
        Capability.TRIPS_RECORD,
        Capability.POSITIONS_RECORD,
        Capability.POSITIONS_READ,
        Capability.VEHICLES_STATUS,
    }),
    CallerRole.ANALYST: frozenset({
        Capability.CATALOG_READ,
        Capability.TICKETS_READ,
        Capability.POSITIONS_READ,
        Capability.ANALYTICS_READ,
        Capability.ANALYTICS_COMPUTE,
    }),
    CallerRole.CUSTOMER: frozenset({
        Capability.CATALOG_READ,
        Capability.TICKETS_ISSUE,
        Capability.TICKETS_READ,
    }),
}


def has_capability(role: CallerRole, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def authorize(caller: Caller, capability: Capability) -> Caller:
    """Raise PermissionDenied unless the caller's role grants the capability"""
    if not has_capability(caller.role, capability):
        raise exceptions.PermissionDenied(
            f"Role '{caller.role.value}' lacks capability '{capability.value}'"
        )
    return caller


def authorize_passenger(caller: Caller, passenger_id: int) -> None:
    """Customers may only act on their own passenger record"""
    if caller.role != CallerRole.CUSTOMER:
        return
    if str(passenger_id) != caller.subject:
        raise exceptions.PermissionDenied("Customers may only access their own tickets")
