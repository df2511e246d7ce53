"""
Timestamp conventions shared by the engine.

Timestamps are persisted as naive UTC. Calendar questions (which day, which
hour, weekday or weekend) are answered in the configured reference
timezone.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from src.config import settings


def reference_zone(name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(name or settings.REFERENCE_TIMEZONE)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC; naive values are taken as UTC already"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime, zone: Optional[ZoneInfo] = None) -> datetime:
    """Convert a stored (naive UTC) or aware datetime into the reference timezone"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(zone or reference_zone())


def local_day_bounds(day: date, zone: Optional[ZoneInfo] = None) -> Tuple[datetime, datetime]:
    """Half-open naive UTC range [start, end) covering one calendar day in the reference timezone"""
    zone = zone or reference_zone()
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return to_storage(start), to_storage(end)
