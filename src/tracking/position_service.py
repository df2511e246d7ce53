from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from logging import getLogger
from sqlalchemy.orm import Session

from src import exceptions
from src.database import transaction
from src.catalog.service import ReferenceCatalog
from src.models import VehiclePosition, VehicleStatusLog
from src.tracking.schemas import (
    VehicleStatus, VehiclePositionView, VehicleStatusView, VehicleStatusLogView
)
from src.timeutils import to_local, to_storage, utcnow

logger = getLogger(__name__)

COORDINATE_PRECISION = Decimal("0.000001")
MOTION_PRECISION = Decimal("0.01")

def _validate_sample(latitude, longitude, speed, bearing):
    if not -90 <= latitude <= 90:
        raise exceptions.InvalidValue("latitude", "must be between -90 and 90")
    if not -180 <= longitude <= 180:
        raise exceptions.InvalidValue("longitude", "must be between -180 and 180")
    if speed is not None and speed < 0:
        raise exceptions.InvalidValue("speed", "must not be negative")
    if bearing is not None and not 0 <= bearing < 360:
        raise exceptions.InvalidValue("bearing", "must be in [0, 360)")

def _quantize(value, precision: Decimal) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value)).quantize(precision)

class PositionIngest:
    """Append-only vehicle position stream and vehicle status changes"""

    def __init__(self, db: Session):
        self.db = db
        self.catalog = ReferenceCatalog(db)

    def record_position(
        self,
        vehicle_id: int,
        latitude,
        longitude,
        speed=None,
        bearing=None,
        now: Optional[datetime] = None
    ) -> VehiclePositionView:
        """
        Append one position sample for a vehicle.

        Positions are never updated or deleted afterwards. Vehicle status is
        not inferred from the stream.
        """
        _validate_sample(latitude, longitude, speed, bearing)
        timestamp = to_storage(now) if now is not None else utcnow()

        with transaction(self.db):
            self.catalog.require_vehicle(vehicle_id)
            position = VehiclePosition(
                vehicle_id=vehicle_id,
                timestamp=timestamp,
                latitude=_quantize(latitude, COORDINATE_PRECISION),
                longitude=_quantize(longitude, COORDINATE_PRECISION),
                speed=_quantize(speed, MOTION_PRECISION),
                bearing=_quantize(bearing, MOTION_PRECISION)
            )
            self.db.add(position)
            self.db.flush()
            view = VehiclePositionView.model_validate(position)

        logger.debug("Vehicle %s at %s,%s", vehicle_id, view.latitude, view.longitude)
        return view

    def latest_position(self, vehicle_id: int) -> VehiclePositionView:
        self.catalog.require_vehicle(vehicle_id)
        position = self.db.query(VehiclePosition).filter(
            VehiclePosition.vehicle_id == vehicle_id
        ).order_by(VehiclePosition.timestamp.desc(), VehiclePosition.id.desc()).first()
        if position is None:
            raise exceptions.PositionNotFound(vehicle_id)
        return VehiclePositionView.model_validate(position)

    def record_status(self, vehicle_id: int, status: str, now: Optional[datetime] = None) -> VehicleStatusLogView:
        """Append an operational event to the vehicle's status log"""
        if not status or not status.strip():
            raise exceptions.InvalidValue("status", "must not be empty")
        timestamp = to_storage(now) if now is not None else utcnow()

        with transaction(self.db):
            self.catalog.require_vehicle(vehicle_id)
            entry = VehicleStatusLog(vehicle_id=vehicle_id, status=status.strip(), timestamp=timestamp)
            self.db.add(entry)
            self.db.flush()
            view = VehicleStatusLogView.model_validate(entry)

        logger.info("Vehicle %s status event: %s", vehicle_id, view.status)
        return view

    def set_vehicle_status(
        self,
        vehicle_id: int,
        status: VehicleStatus,
        now: Optional[datetime] = None
    ) -> VehicleStatusView:
        """
        Change a vehicle's operating status.

        Returning from Maintenance to Active stamps the maintenance date with
        the current local date. Every change is appended to the status log;
        setting the current status again changes nothing.
        """
        status = VehicleStatus(status)
        timestamp = to_storage(now) if now is not None else utcnow()

        with transaction(self.db):
            vehicle = self.catalog.require_vehicle(vehicle_id)
            previous = VehicleStatus(vehicle.status)

            if previous != status:
                vehicle.status = status.value
                if previous == VehicleStatus.MAINTENANCE and status == VehicleStatus.ACTIVE:
                    vehicle.last_maintenance_date = to_local(timestamp).date()
                self.db.add(VehicleStatusLog(vehicle_id=vehicle.id, status=status.value, timestamp=timestamp))
                self.db.flush()
                logger.info("Vehicle %s status %s -> %s", vehicle_id, previous.value, status.value)

            view = VehicleStatusView.model_validate(vehicle)

        return view

    def status_history(self, vehicle_id: int) -> List[VehicleStatusLogView]:
        self.catalog.require_vehicle(vehicle_id)
        entries = self.db.query(VehicleStatusLog).filter(
            VehicleStatusLog.vehicle_id == vehicle_id
        ).order_by(VehicleStatusLog.timestamp, VehicleStatusLog.id).all()
        return [VehicleStatusLogView.model_validate(entry) for entry in entries]
