"""
Data models and schemas for the business calendar.
"""

from business_calendar.data.schemas import (
    CalendarDefinition,
    CalendarInfo,
    Config,
    DateShiftResult,
    DayStatus,
    RangeCountResult,
    Weekday,
)

__all__ = [
    "CalendarDefinition",
    "CalendarInfo",
    "Config",
    "DateShiftResult",
    "DayStatus",
    "RangeCountResult",
    "Weekday",
]
