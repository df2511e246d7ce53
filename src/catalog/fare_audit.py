"""
Zone base-fare maintenance and its audit trail.

Base fares live in reference data; whenever one actually changes, one
"Fare Change" entry (old value, new value, actor, timestamp) is written to
the system log inside the same transaction.
"""

from datetime import datetime
from decimal import Decimal
from logging import getLogger
from typing import List, Optional

from sqlalchemy.orm import Session

from src import exceptions
from src.database import transaction
from src.models import SystemLog, Zone
from src.timeutils import utcnow

logger = getLogger(__name__)

FARE_CHANGE = "Fare Change"


class FareChangeLog:
    """Audit sink receiving fare-change entries"""

    def __init__(self, db: Session):
        self.db = db

    def emit(self, zone_id: int, old_fare: Decimal, new_fare: Decimal, actor: str, at: datetime) -> SystemLog:
        entry = SystemLog(
            log_type=FARE_CHANGE,
            description=f"Zone {zone_id} fare changed from {old_fare} to {new_fare}",
            changed_by=actor,
            changed_value=f"Old:{old_fare}|New:{new_fare}",
            timestamp=at,
        )
        self.db.add(entry)
        return entry

    def entries(self, zone_id: Optional[int] = None) -> List[SystemLog]:
        query = self.db.query(SystemLog).filter(SystemLog.log_type == FARE_CHANGE)
        if zone_id is not None:
            query = query.filter(SystemLog.description.like(f"Zone {zone_id} %"))
        return query.order_by(SystemLog.timestamp, SystemLog.id).all()


class ZoneFareService:
    """Admin maintenance of zone base fares"""

    def __init__(self, db: Session, audit_log: Optional[FareChangeLog] = None):
        self.db = db
        self.audit_log = audit_log or FareChangeLog(db)

    def update_base_fare(self, zone_id: int, new_fare: Decimal, actor: str, now: Optional[datetime] = None) -> Zone:
        new_fare = Decimal(str(new_fare)).quantize(Decimal("0.01"))
        if new_fare < 0:
            raise exceptions.InvalidValue("base_fare", "must not be negative")

        with transaction(self.db):
            zone = self.db.query(Zone).filter(Zone.id == zone_id).first()
            if zone is None:
                raise exceptions.ZoneNotFound(zone_id)

            old_fare = Decimal(zone.base_fare).quantize(Decimal("0.01"))
            if old_fare != new_fare:
                zone.base_fare = new_fare
                self.audit_log.emit(zone.id, old_fare, new_fare, actor, now or utcnow())
                logger.info("Zone %s base fare changed from %s to %s by %s", zone.id, old_fare, new_fare, actor)

        self.db.refresh(zone)
        return zone
