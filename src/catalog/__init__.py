"""
Reference Catalog Module

Read-only access to the reference data every engine component relies on:
vehicle types and vehicles, zones, stops, routes and their stop sequences,
schedules, passengers, ticket types and dynamic pricing rules.

Key Components:
- service.py: ReferenceCatalog lookups (get_* returns None, require_* raises)
- fare_audit.py: zone base-fare maintenance and the fare-change audit sink
- router.py: FastAPI endpoints for catalog reads
- schemas.py: Pydantic models for catalog responses
"""

from .router import router
from .service import ReferenceCatalog
from .fare_audit import FareChangeLog, ZoneFareService

__all__ = [
    "router",
    "ReferenceCatalog",
    "FareChangeLog",
    "ZoneFareService",
]
