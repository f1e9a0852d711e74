"""
Business calendar: business-day classification and arithmetic.

Basic usage::

    from business_calendar import Calendar

    cal = Calendar(holidays=["2013-01-01"])
    cal.is_business_day("2013-01-01")                  # False
    cal.roll_forward(date(2013, 1, 5))                 # date(2013, 1, 7)
    cal.add_business_days(date(2013, 1, 1), 2)         # date(2013, 1, 4)
    cal.business_days_between("2014-06-02", "2014-06-05")  # 3

Named calendars are loaded through a loader::

    from business_calendar import load_calendar

    bacs = load_calendar("bacs")
"""

from business_calendar.core.calendar import Calendar
from business_calendar.core.loader import CalendarLoader, default_loader
from business_calendar.core.sources import (
    CalendarSource,
    DirectorySource,
    HolidaysLibrarySource,
    MappingSource,
)
from business_calendar.data.schemas import CalendarDefinition, Weekday
from business_calendar.exceptions import (
    CalendarDefinitionError,
    CalendarError,
    CalendarNotFoundError,
    ConfigurationConflictError,
    DateParseError,
    InvalidDayError,
)

__version__ = "0.1.0"

_default_loader = None


def load_calendar(name: str) -> Calendar:
    """Load a calendar by name through a shared default loader, with caching."""
    global _default_loader
    if _default_loader is None:
        _default_loader = default_loader()
    return _default_loader.load_cached(name)


__all__ = [
    "Calendar",
    "CalendarDefinition",
    "CalendarDefinitionError",
    "CalendarError",
    "CalendarLoader",
    "CalendarNotFoundError",
    "CalendarSource",
    "ConfigurationConflictError",
    "DateParseError",
    "DirectorySource",
    "HolidaysLibrarySource",
    "InvalidDayError",
    "MappingSource",
    "Weekday",
    "default_loader",
    "load_calendar",
]
