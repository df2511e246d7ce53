"""
Authorization Module

Application-level access control for the fare & ticketing engine: callers
present a bearer token naming their role (admin, operator, analyst,
customer) and each exposed operation checks the capability it needs.

Key Components:
- schemas.py: caller, role and capability types
- permissions.py: capability sets per role and the authorize checks
- utils.py: access token encoding and verification
- dependencies.py: FastAPI dependencies enforcing capabilities
"""

from .schemas import Caller, CallerRole, Capability
from .permissions import ROLE_CAPABILITIES, authorize, authorize_passenger, has_capability
from .utils import create_access_token, verify_token

__all__ = [
    "Caller",
    "CallerRole",
    "Capability",
    "ROLE_CAPABILITIES",
    "authorize",
    "authorize_passenger",
    "has_capability",
    "create_access_token",
    "verify_token",
]
