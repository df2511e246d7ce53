from pydantic import BaseModel
from enum import Enum

class CallerRole(str, Enum):
    """Caller roles recognised by the engine"""
    ADMIN = "admin"
    OPERATOR = "operator"
    ANALYST = "analyst"
    CUSTOMER = "customer"

class Capability(str, Enum):
    """Capabilities checked at each exposed operation, as resource:action"""
    CATALOG_READ = "catalog:read"
    FARES_WRITE = "fares:write"
    TICKETS_ISSUE = "tickets:issue"
    TICKETS_READ = "tickets:read"
    TICKETS_PAYMENT = "tickets:payment"
    TRIPS_RECORD = "trips:record"
    ANALYTICS_READ = "analytics:read"
    ANALYTICS_COMPUTE = "analytics:compute"
    POSITIONS_RECORD = "positions:record"
    POSITIONS_READ = "positions:read"
    VEHICLES_STATUS = "vehicles:status"

class Caller(BaseModel):
    """Authenticated caller decoded from the bearer token"""
    subject: str
    role: CallerRole

    @property
    def passenger_id(self) -> int:
        return int(self.subject)

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
