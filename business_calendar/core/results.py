"""
Builders for the result models shared by the CLI and the API.
"""

from business_calendar.core.calendar import Calendar, DateInput
from business_calendar.core.normalize import coerce_date_like, normalize_date
from business_calendar.data.schemas import (
    CalendarInfo,
    DateShiftResult,
    DayStatus,
    RangeCountResult,
    Weekday,
)

SHIFT_OPERATIONS = (
    "roll_forward",
    "roll_backward",
    "next_business_day",
    "previous_business_day",
)

DELTA_OPERATIONS = ("add_business_days", "subtract_business_days")


def day_status(calendar: Calendar, day: DateInput) -> DayStatus:
    """Classify a single date."""
    day = normalize_date(day)
    return DayStatus(
        calendar=calendar.name,
        day=day,
        weekday=Weekday.of(day),
        is_business_day=calendar.is_business_day(day),
        is_working_day=calendar.is_working_day(day),
        is_holiday=calendar.is_holiday(day),
        is_extra_working_date=day in calendar.extra_working_dates,
    )


def shift(calendar: Calendar, operation: str, day: DateInput, days: int = None) -> DateShiftResult:
    """
    Run a rolling or arithmetic operation and wrap its result.

    Args:
        calendar: Calendar to use.
        operation: One of SHIFT_OPERATIONS or DELTA_OPERATIONS.
        day: Input date.
        days: Business-day delta, required for DELTA_OPERATIONS.

    Raises:
        ValueError: If the operation is unknown or the delta is missing.
    """
    start = coerce_date_like(day)
    if operation in SHIFT_OPERATIONS:
        result = getattr(calendar, operation)(start)
        days = None
    elif operation in DELTA_OPERATIONS:
        if days is None:
            raise ValueError(f"{operation} requires a number of days")
        result = getattr(calendar, operation)(start, days)
    else:
        raise ValueError(f"Unknown operation: {operation}")

    return DateShiftResult(
        calendar=calendar.name,
        operation=operation,
        start=start,
        days=days,
        result=result,
    )


def range_count(calendar: Calendar, start: DateInput, end: DateInput) -> RangeCountResult:
    """Count business days in (start, end]."""
    return RangeCountResult(
        calendar=calendar.name,
        start=normalize_date(start),
        end=normalize_date(end),
        business_days=calendar.business_days_between(start, end),
    )


def calendar_info(calendar: Calendar) -> CalendarInfo:
    """Read-only snapshot of a calendar with sorted date lists."""
    return CalendarInfo(
        name=calendar.name,
        working_days=list(calendar.working_days),
        holidays=sorted(calendar.holidays),
        extra_working_dates=sorted(calendar.extra_working_dates),
    )
