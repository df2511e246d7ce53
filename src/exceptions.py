"""
Centralized exception handling for the fare & ticketing engine.

This module provides:
- Base APIException class extending FastAPI's HTTPException, tagged with an
  error kind (NotFound, InvalidState, ValidationError, Conflict,
  Unauthorized, Forbidden).
- Domain-specific exceptions with their status codes and X-Error headers.
- Utility functions for formatting DB errors, logging, and normalizing raw
  exceptions.

Usage:
    - Raise specific exceptions in services; FastAPI renders them directly.
    - Use `handle()` to normalize raw exceptions (DB integrity errors) into
      API-friendly ones.
"""

from traceback import format_exception
from logging import getLogger
from fastapi import status, HTTPException
from sqlalchemy.exc import IntegrityError


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------
NOT_FOUND = "NotFound"
INVALID_STATE = "InvalidState"
VALIDATION_ERROR = "ValidationError"
CONFLICT = "Conflict"
UNAUTHORIZED = "Unauthorized"
FORBIDDEN = "Forbidden"


# ---------------------------------------------------------------------------
# Utility functions
# ---------------------------------------------------------------------------
def formatIntegrityError(e: IntegrityError) -> str:
    """Format a database integrity error into a user-friendly message."""
    errorMessage = str(e.orig).splitlines()[0] if e.orig is not None else str(e)
    errorMessage = errorMessage.translate({ord(i): None for i in '\\"()'})
    return errorMessage.replace("Key ", "For ").replace("=", " value ")


def logException(e: Exception) -> None:
    """Log an exception with traceback using Uvicorn's error logger."""
    detail = "".join(format_exception(type(e), e, e.__traceback__))
    logger = getLogger("uvicorn.error")
    logger.error(detail)


# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------
class APIException(HTTPException):
    """
    Base class for all application-specific exceptions.

    Provides default handling of status_code, detail, headers and kind.
    Extra keyword context passed by the raiser is kept on `context`.
    """

    kind = VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST
    detail = None
    headers = None

    def __init__(self, *args, context: dict = None, **kwargs):
        kwargs.setdefault("status_code", self.status_code)
        kwargs.setdefault("detail", self.detail)
        kwargs.setdefault("headers", self.headers)
        super().__init__(*args, **kwargs)
        self.context = context or {}


# ---------------------------------------------------------------------------
# Exception handling entrypoint
# ---------------------------------------------------------------------------
def handle(e: Exception):
    """
    Normalize and re-raise exceptions as API-friendly errors.

    Integrity errors become UniqueViolation / ForeignKeyViolation, domain
    errors pass through, and anything else is logged before re-raising.
    """
    if isinstance(e, IntegrityError):
        message = formatIntegrityError(e)
        if "unique" in message.lower() or "duplicate" in message.lower():
            raise UniqueViolation(message) from e
        if "foreign key" in message.lower():
            raise ForeignKeyViolation(message) from e
    if isinstance(e, APIException):
        raise e

    logException(e)
    raise e


# ---------------------------------------------------------------------------
# Kind bases
# ---------------------------------------------------------------------------
class NotFound(APIException):
    kind = NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, identifier=None):
        detail = self.detail
        if identifier is not None:
            detail = f"{self.detail}: {identifier}"
        super().__init__(detail=detail, context={"id": identifier})


class InvalidState(APIException):
    kind = INVALID_STATE
    status_code = status.HTTP_409_CONFLICT


class ValidationError(APIException):
    kind = VALIDATION_ERROR
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class UnknownTicketType(NotFound):
    detail = "Unknown ticket type"
    headers = {"X-Error": "UnknownTicketType"}


class InvalidTicketType(UnknownTicketType):
    detail = "Invalid ticket type"
    headers = {"X-Error": "InvalidTicketType"}


class PassengerNotFound(NotFound):
    detail = "Passenger not found"
    headers = {"X-Error": "PassengerNotFound"}


class TicketNotFound(NotFound):
    detail = "Ticket not found"
    headers = {"X-Error": "TicketNotFound"}


class TripNotFound(NotFound):
    detail = "Trip not found"
    headers = {"X-Error": "TripNotFound"}


class VehicleNotFound(NotFound):
    detail = "Vehicle not found"
    headers = {"X-Error": "VehicleNotFound"}


class RouteNotFound(NotFound):
    detail = "Route not found"
    headers = {"X-Error": "RouteNotFound"}


class StopNotFound(NotFound):
    detail = "Stop not found"
    headers = {"X-Error": "StopNotFound"}


class ZoneNotFound(NotFound):
    detail = "Zone not found"
    headers = {"X-Error": "ZoneNotFound"}


class PositionNotFound(NotFound):
    detail = "No position recorded for vehicle"
    headers = {"X-Error": "PositionNotFound"}


class AnalyticsNotComputed(NotFound):
    detail = "No analytics computed"
    headers = {"X-Error": "AnalyticsNotComputed"}


# ---------------------------------------------------------------------------
# Invalid state
# ---------------------------------------------------------------------------
class TicketExpired(InvalidState):
    headers = {"X-Error": "TicketExpired"}

    def __init__(self, ticket_id, boarding_time, valid_from, valid_to):
        detail = (
            f"Ticket {ticket_id} is valid from {valid_from.isoformat()} "
            f"to {valid_to.isoformat()}, boarding at {boarding_time.isoformat()} rejected"
        )
        super().__init__(
            detail=detail,
            context={"ticket_id": ticket_id, "boarding_time": boarding_time},
        )


class TicketNotPaid(InvalidState):
    headers = {"X-Error": "TicketNotPaid"}

    def __init__(self, ticket_id, payment_status: str):
        detail = f"Ticket {ticket_id} has payment status {payment_status}"
        super().__init__(detail=detail, context={"ticket_id": ticket_id})


class TripAlreadyCompleted(InvalidState):
    headers = {"X-Error": "TripAlreadyCompleted"}

    def __init__(self, trip_id):
        super().__init__(
            detail=f"Trip {trip_id} already has an alighting record",
            context={"trip_id": trip_id},
        )


class InvalidPaymentTransition(InvalidState):
    headers = {"X-Error": "InvalidPaymentTransition"}

    def __init__(self, current: str, requested: str):
        super().__init__(
            detail=f"Payment status cannot change from {current} to {requested}",
            context={"current": current, "requested": requested},
        )


class FarePolicyUndefined(InvalidState):
    headers = {"X-Error": "FarePolicyUndefined"}

    def __init__(self, type_name: str):
        super().__init__(
            detail=f"No fare policy is defined for ticket type '{type_name}'",
            context={"type_name": type_name},
        )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
class InvalidTimestampOrder(ValidationError):
    headers = {"X-Error": "InvalidTimestampOrder"}

    def __init__(self, earlier_name: str, later_name: str):
        super().__init__(detail=f"{later_name} must not be before {earlier_name}")


class InvalidValue(ValidationError):
    headers = {"X-Error": "InvalidValue"}

    def __init__(self, field: str, reason: str):
        super().__init__(
            detail=f"Invalid {field}: {reason}", context={"field": field}
        )


# ---------------------------------------------------------------------------
# Storage conflicts
# ---------------------------------------------------------------------------
class UniqueViolation(APIException):
    kind = CONFLICT
    status_code = status.HTTP_409_CONFLICT
    headers = {"X-Error": "UniqueViolation"}

    def __init__(self, detail: str):
        super().__init__(detail=detail)


class ForeignKeyViolation(APIException):
    kind = CONFLICT
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    headers = {"X-Error": "ForeignKeyViolation"}

    def __init__(self, detail: str):
        super().__init__(detail=detail)


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------
class InvalidCredentials(APIException):
    kind = UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate credentials"
    headers = {"X-Error": "InvalidCredentials", "WWW-Authenticate": "Bearer"}


class PermissionDenied(APIException):
    kind = FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    headers = {"X-Error": "PermissionDenied"}

    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(detail=detail)
