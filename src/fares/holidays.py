"""
Holiday calendars consulted by the pricing resolver.

The engine owns no calendar of its own: a deployment either configures one
(a fixed list of dates through the HOLIDAYS setting, or any object with an
`is_holiday(date)` method) or runs without one, in which case holiday
pricing rules never match.
"""

from datetime import date
from typing import Iterable, Optional, Protocol

from src.config import settings


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        ...


class StaticHolidayCalendar:
    """Calendar backed by a fixed set of dates"""

    def __init__(self, holidays: Iterable[date]):
        self._holidays = frozenset(holidays)

    def is_holiday(self, day: date) -> bool:
        return day in self._holidays

    def __len__(self) -> int:
        return len(self._holidays)


def default_holiday_calendar() -> Optional[HolidayCalendar]:
    """Calendar built from settings, or None when no holidays are configured"""
    if not settings.HOLIDAYS:
        return None
    return StaticHolidayCalendar(settings.HOLIDAYS)
