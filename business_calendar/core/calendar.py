"""
Business calendar: day classification and business-day arithmetic.
"""

import operator
from bisect import bisect_right
from datetime import date, timedelta
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from business_calendar.core.normalize import (
    DateLike,
    coerce_date_like,
    normalize_date,
    normalize_dates,
    normalize_working_days,
)
from business_calendar.data.schemas import WEEKDAYS, CalendarDefinition, Weekday
from business_calendar.exceptions import ConfigurationConflictError

ONE_DAY = timedelta(days=1)

DateInput = Union[DateLike, str]


class Calendar:
    """
    Immutable business calendar for one jurisdiction.

    A date is a business day when its weekday is a working day and it is not
    a holiday, or when it is listed as an extra working date. Every operation
    accepts a ``date``, a ``datetime`` or a date string. Classification looks
    at the calendar date only; arithmetic on a ``datetime`` keeps its time of
    day.
    """

    __slots__ = (
        "_name",
        "_working_days",
        "_working_weekdays",
        "_holidays",
        "_extra_working_dates",
        "_sorted_holidays",
        "_sorted_extra_dates",
    )

    def __init__(
        self,
        name: Optional[str] = None,
        working_days: Optional[Iterable[Union[Weekday, str]]] = None,
        holidays: Optional[Iterable[DateInput]] = None,
        extra_working_dates: Optional[Iterable[DateInput]] = None,
    ):
        """
        Create a calendar, normalizing and cross-checking all inputs at once.

        Args:
            name: Optional calendar name.
            working_days: Weekday names or abbreviations; Monday to Friday
                when omitted.
            holidays: Holiday dates.
            extra_working_dates: Dates that are business days although they
                fall outside the working week.

        Raises:
            InvalidDayError: If a weekday token is invalid.
            DateParseError: If a date token cannot be parsed.
            ConfigurationConflictError: If a holiday is also an extra working
                date, or an extra working date falls on a working day.
        """
        working = normalize_working_days(working_days)
        holiday_dates = normalize_dates(holidays)
        extra_dates = normalize_dates(extra_working_dates)

        working_weekdays = frozenset(weekday_index(day) for day in working)
        if holiday_dates & extra_dates:
            raise ConfigurationConflictError("Holidays cannot be extra working dates")
        if any(day.weekday() in working_weekdays for day in extra_dates):
            raise ConfigurationConflictError("Extra working dates cannot be on working days")

        self._name = name
        self._working_days = working
        self._working_weekdays = working_weekdays
        self._holidays = holiday_dates
        self._extra_working_dates = extra_dates
        # Holidays off the working week never change a count.
        self._sorted_holidays = sorted(
            day for day in holiday_dates if day.weekday() in working_weekdays
        )
        self._sorted_extra_dates = sorted(extra_dates)

    @classmethod
    def from_definition(cls, definition: CalendarDefinition) -> "Calendar":
        """Build a calendar from a resolved calendar definition."""
        return cls(
            name=definition.name,
            working_days=definition.working_days,
            holidays=definition.holidays,
            extra_working_dates=definition.extra_working_dates,
        )

    # ── accessors ────────────────────────────────────────────────────────

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def working_days(self) -> Tuple[Weekday, ...]:
        return self._working_days

    @property
    def holidays(self) -> FrozenSet[date]:
        return self._holidays

    @property
    def extra_working_dates(self) -> FrozenSet[date]:
        return self._extra_working_dates

    # ── classification ───────────────────────────────────────────────────

    def is_working_day(self, day: DateInput) -> bool:
        """True if the weekday of ``day`` is in the working week."""
        return normalize_date(day).weekday() in self._working_weekdays

    def is_holiday(self, day: DateInput) -> bool:
        """True if ``day`` is a holiday."""
        return normalize_date(day) in self._holidays

    def is_business_day(self, day: DateInput) -> bool:
        """True if ``day`` is a working day and not a holiday, or an extra working date."""
        day = normalize_date(day)
        if day in self._extra_working_dates:
            return True
        return day.weekday() in self._working_weekdays and day not in self._holidays

    # ── rolling ──────────────────────────────────────────────────────────

    def roll_forward(self, day: DateInput) -> DateLike:
        """Return ``day`` if it is a business day, else the next business day."""
        day = coerce_date_like(day)
        while not self.is_business_day(day):
            day += ONE_DAY
        return day

    def roll_backward(self, day: DateInput) -> DateLike:
        """Return ``day`` if it is a business day, else the previous business day."""
        day = coerce_date_like(day)
        while not self.is_business_day(day):
            day -= ONE_DAY
        return day

    def next_business_day(self, day: DateInput) -> DateLike:
        """Return the first business day strictly after ``day``."""
        return self.roll_forward(coerce_date_like(day) + ONE_DAY)

    def previous_business_day(self, day: DateInput) -> DateLike:
        """Return the last business day strictly before ``day``."""
        return self.roll_backward(coerce_date_like(day) - ONE_DAY)

    # ── business-day arithmetic ──────────────────────────────────────────

    def add_business_days(self, day: DateInput, delta: int) -> DateLike:
        """
        Move ``delta`` business days forward.

        ``day`` is first rolled forward to a business day, which is not
        counted; each of the ``delta`` steps then lands on the next business
        day. A negative ``delta`` subtracts instead.

        Raises:
            TypeError: If ``delta`` is not an integer.
        """
        delta = _as_delta(delta)
        if delta < 0:
            return self.subtract_business_days(day, -delta)

        day = self.roll_forward(day)
        for _ in range(delta):
            day = self.next_business_day(day)
        return day

    def subtract_business_days(self, day: DateInput, delta: int) -> DateLike:
        """
        Move ``delta`` business days backward.

        Mirror image of :meth:`add_business_days`: ``day`` is rolled backward
        first, and a negative ``delta`` adds instead.
        """
        delta = _as_delta(delta)
        if delta < 0:
            return self.add_business_days(day, -delta)

        day = self.roll_backward(day)
        for _ in range(delta):
            day = self.previous_business_day(day)
        return day

    # ── range counting ───────────────────────────────────────────────────

    def business_days_between(self, date_from: DateInput, date_to: DateInput) -> int:
        """
        Count the business days in the interval (date_from, date_to].

        The start date is never counted and the end date is counted when it
        is a business day. Reversed arguments give the negated count.
        """
        start = normalize_date(date_from)
        end = normalize_date(date_to)
        if end < start:
            return -self._count_after(end, start)
        return self._count_after(start, end)

    def _count_after(self, start: date, end: date) -> int:
        span = (end - start).days
        full_weeks, remainder = divmod(span, 7)

        count = full_weeks * len(self._working_weekdays)
        first_weekday = start.weekday()
        for offset in range(1, remainder + 1):
            if (first_weekday + offset) % 7 in self._working_weekdays:
                count += 1

        # Extra working dates never fall on working days, so the two
        # corrections cannot overlap.
        count -= _count_in(self._sorted_holidays, start, end)
        count += _count_in(self._sorted_extra_dates, start, end)
        return count

    # ── dunder ───────────────────────────────────────────────────────────

    def _key(self):
        return (self._name, self._working_days, self._holidays, self._extra_working_dates)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"Calendar(name={self._name!r}, "
            f"working_days={[day.value for day in self._working_days]}, "
            f"holidays={len(self._holidays)}, "
            f"extra_working_dates={len(self._extra_working_dates)})"
        )


def weekday_index(weekday: Weekday) -> int:
    """Map a Weekday to ``date.weekday()`` numbering (Monday is 0)."""
    return WEEKDAYS.index(weekday)


def _count_in(sorted_days, start: date, end: date) -> int:
    """Number of dates d in ``sorted_days`` with start < d <= end."""
    return bisect_right(sorted_days, end) - bisect_right(sorted_days, start)


def _as_delta(delta) -> int:
    if isinstance(delta, bool):
        raise TypeError("Business-day delta must be an integer, not bool")
    return operator.index(delta)
