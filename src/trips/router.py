from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth.dependencies import require_capability
from src.auth.permissions import authorize_passenger
from src.auth.schemas import Caller, Capability
from src.trips.schemas import BoardingRequest, AlightingRequest, TripRecordView, TicketTrips
from src.tickets.issuer_service import TicketIssuer
from src.trips.recorder_service import TripRecorder

router = APIRouter()

@router.post("/boarding", response_model=TripRecordView, status_code=status.HTTP_201_CREATED)
def record_boarding(
    request: BoardingRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TRIPS_RECORD))
):
    """Record a passenger boarding a vehicle on a ticket"""
    recorder = TripRecorder(db)
    return recorder.record_boarding(
        ticket_id=request.ticket_id,
        vehicle_id=request.vehicle_id,
        boarding_stop_id=request.boarding_stop_id,
        boarding_time=request.boarding_time
    )

@router.post("/{trip_id}/alighting", response_model=TripRecordView)
def record_alighting(
    trip_id: int,
    request: AlightingRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TRIPS_RECORD))
):
    """Record the alighting that completes a trip leg"""
    recorder = TripRecorder(db)
    return recorder.record_alighting(
        trip_id=trip_id,
        alighting_stop_id=request.alighting_stop_id,
        alighting_time=request.alighting_time
    )

@router.get("/{trip_id}", response_model=TripRecordView)
def get_trip(
    trip_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TICKETS_READ))
):
    """Get a trip leg by ID"""
    trip = TripRecorder(db).get_trip(trip_id)
    ticket = TicketIssuer(db).get_ticket(trip.ticket_id)
    authorize_passenger(caller, ticket.passenger_id)
    return trip

@router.get("/ticket/{ticket_id}", response_model=TicketTrips)
def list_ticket_trips(
    ticket_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_capability(Capability.TICKETS_READ))
):
    """All trip legs travelled on a ticket"""
    ticket = TicketIssuer(db).get_ticket(ticket_id)
    authorize_passenger(caller, ticket.passenger_id)
    trips = TripRecorder(db).list_ticket_trips(ticket_id)
    return TicketTrips(ticket_id=ticket_id, trips=trips)
