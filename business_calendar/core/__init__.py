"""
Core business logic: the calendar engine and calendar loading.
"""

from business_calendar.core.calendar import Calendar
from business_calendar.core.loader import CalendarLoader, default_loader
from business_calendar.core.sources import (
    CalendarSource,
    DirectorySource,
    HolidaysLibrarySource,
    MappingSource,
)

__all__ = [
    "Calendar",
    "CalendarLoader",
    "CalendarSource",
    "DirectorySource",
    "HolidaysLibrarySource",
    "MappingSource",
    "default_loader",
]
