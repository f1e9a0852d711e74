"""
Normalization of weekday and date tokens.

Weekday tokens are case-insensitive and may be full names ("Monday") or
three-letter abbreviations ("mon"). Date tokens may be ``date`` or
``datetime`` values or human-readable strings such as "2013-01-01",
"9am, Tuesday 1st Jan, 2013" or "Wed 27/5/2014" (numeric forms are read
day-first).
"""

from datetime import date, datetime
from typing import Iterable, Optional, Tuple, Union

from dateutil import parser as date_parser

from business_calendar.data.schemas import (
    DEFAULT_WORKING_DAYS,
    WEEKDAY_NAMES,
    WEEKDAYS,
    Weekday,
)
from business_calendar.exceptions import DateParseError, InvalidDayError

DateLike = Union[date, datetime]

# Two defaults that differ in year, month and day.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

_WEEKDAY_TOKENS = {}
for _weekday in WEEKDAYS:
    _WEEKDAY_TOKENS[_weekday.value] = _weekday
    _WEEKDAY_TOKENS[WEEKDAY_NAMES[_weekday].lower()] = _weekday


def normalize_weekday(token: Union[Weekday, str]) -> Weekday:
    """
    Normalize a weekday token to its Weekday value.

    Args:
        token: Weekday name or abbreviation in any case, or a Weekday.

    Returns:
        The matching Weekday.

    Raises:
        InvalidDayError: If the token matches no weekday.
    """
    if isinstance(token, Weekday):
        return token
    if isinstance(token, str):
        weekday = _WEEKDAY_TOKENS.get(token.strip().lower())
        if weekday is not None:
            return weekday
    raise InvalidDayError(f"Invalid day {token}")


def normalize_working_days(
    tokens: Optional[Iterable[Union[Weekday, str]]],
) -> Tuple[Weekday, ...]:
    """
    Normalize a collection of weekday tokens.

    Duplicates collapse and the result is in ISO week order. None yields the
    default Monday to Friday week.

    Raises:
        InvalidDayError: If a token is invalid or no working day remains.
    """
    if tokens is None:
        return DEFAULT_WORKING_DAYS
    if isinstance(tokens, str):
        tokens = [tokens]

    days = {normalize_weekday(token) for token in tokens}
    if not days:
        raise InvalidDayError("At least one working day is required")
    return tuple(weekday for weekday in WEEKDAYS if weekday in days)


def _parse_string(token: str) -> datetime:
    text = token.strip()
    if not text:
        raise DateParseError("Cannot parse an empty date")

    # ISO forms first: the day-first reading below would swap month and day.
    try:
        return date_parser.isoparse(text)
    except ValueError:
        pass

    try:
        parsed = date_parser.parse(text, dayfirst=True, default=_DEFAULTS[0])
        other = date_parser.parse(text, dayfirst=True, default=_DEFAULTS[1])
    except (ValueError, OverflowError) as e:
        raise DateParseError(f"Cannot parse date '{token}': {e}") from e

    # Year, month and day must all come from the token, never from a default.
    if parsed.date() != other.date():
        raise DateParseError(f"Cannot parse date '{token}': incomplete date")
    return parsed


def normalize_date(token: Union[DateLike, str]) -> date:
    """
    Normalize a date token to a plain date, discarding any time of day.

    Raises:
        DateParseError: If the token cannot be read as a date.
    """
    if isinstance(token, datetime):
        return token.date()
    if isinstance(token, date):
        return token
    if isinstance(token, str):
        return _parse_string(token).date()
    raise DateParseError(f"Cannot parse date from {type(token).__name__}: {token!r}")


def normalize_dates(tokens: Optional[Iterable[Union[DateLike, str]]]) -> frozenset:
    """Normalize a collection of date tokens; None yields an empty set."""
    if tokens is None:
        return frozenset()
    if isinstance(tokens, (str, date)):
        tokens = [tokens]
    return frozenset(normalize_date(token) for token in tokens)


def coerce_date_like(value: Union[DateLike, str]) -> DateLike:
    """
    Prepare an operation argument.

    Dates and timestamps pass through untouched so that arithmetic keeps the
    time of day; strings are parsed to a plain date.
    """
    if isinstance(value, date):
        return value
    return normalize_date(value)
