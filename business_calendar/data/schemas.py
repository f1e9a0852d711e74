"""
Data models for the business calendar using Pydantic.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from business_calendar.exceptions import CalendarDefinitionError


class Weekday(str, Enum):
    """The seven weekdays, in ISO order, keyed by their abbreviation."""

    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @property
    def full_name(self) -> str:
        return WEEKDAY_NAMES[self]

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the weekday a date falls on."""
        return WEEKDAYS[day.weekday()]


WEEKDAYS: List[Weekday] = list(Weekday)

WEEKDAY_NAMES = {
    Weekday.MON: "Monday",
    Weekday.TUE: "Tuesday",
    Weekday.WED: "Wednesday",
    Weekday.THU: "Thursday",
    Weekday.FRI: "Friday",
    Weekday.SAT: "Saturday",
    Weekday.SUN: "Sunday",
}

DEFAULT_WORKING_DAYS = (Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI)

DEFINITION_KEYS = ("holidays", "working_days", "extra_working_dates")


class CalendarDefinition(BaseModel):
    """Raw calendar data as resolved by a calendar source."""

    name: Optional[str] = Field(default=None, description="Name the calendar was resolved under")
    working_days: Optional[List[Any]] = Field(
        default=None, description="Working weekdays; Monday to Friday when omitted"
    )
    holidays: Optional[List[Any]] = Field(default=None, description="Holiday dates")
    extra_working_dates: Optional[List[Any]] = Field(
        default=None, description="Dates that are business days outside the weekly pattern"
    )

    @classmethod
    def from_raw(cls, name: str, data: Any) -> "CalendarDefinition":
        """
        Build a definition from a raw mapping (a parsed YAML file or a registry entry).

        Args:
            name: Name the data was resolved under.
            data: Mapping with any of the keys holidays, working_days,
                extra_working_dates. None is treated as an empty mapping.

        Returns:
            CalendarDefinition for the data.

        Raises:
            CalendarDefinitionError: If data is not a mapping or has unknown keys.
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise CalendarDefinitionError(
                f"Calendar '{name}' must be a mapping, got {type(data).__name__}"
            )
        invalid_keys = [key for key in data if key not in DEFINITION_KEYS]
        if invalid_keys:
            raise CalendarDefinitionError(
                "Only valid keys are: " + ", ".join(DEFINITION_KEYS)
            )
        return cls(name=name, **data)


class DayStatus(BaseModel):
    """Classification of a single date in a calendar."""

    calendar: Optional[str] = Field(default=None, description="Calendar name")
    day: date = Field(..., description="The classified date")
    weekday: Weekday = Field(..., description="Weekday of the date")
    is_business_day: bool
    is_working_day: bool
    is_holiday: bool
    is_extra_working_date: bool


class DateShiftResult(BaseModel):
    """Result of a rolling or business-day arithmetic operation."""

    calendar: Optional[str] = Field(default=None, description="Calendar name")
    operation: str = Field(..., description="Operation performed, e.g. roll_forward")
    start: Union[datetime, date] = Field(..., description="Input date")
    days: Optional[int] = Field(default=None, description="Business-day delta, if any")
    result: Union[datetime, date] = Field(..., description="Resulting date")


class RangeCountResult(BaseModel):
    """Number of business days in the interval (start, end]."""

    calendar: Optional[str] = Field(default=None, description="Calendar name")
    start: date
    end: date
    business_days: int


class CalendarInfo(BaseModel):
    """Read-only view of a loaded calendar."""

    name: Optional[str] = None
    working_days: List[Weekday] = Field(default_factory=list)
    holidays: List[date] = Field(default_factory=list)
    extra_working_dates: List[date] = Field(default_factory=list)


class Config(BaseModel):
    """Configuration for the business calendar tools."""

    load_paths: List[str] = Field(
        default_factory=list, description="Directories searched for <name>.yml before the bundled calendars"
    )
    default_calendar: str = Field(default="weekdays", description="Calendar used when none is given")
    holiday_year_from: int = Field(default=2000, ge=1, le=9999, description="First year for holidays: calendars")
    holiday_year_to: int = Field(default=2050, ge=1, le=9999, description="Last year for holidays: calendars")
    log_level: str = Field(default="WARNING", description="Root log level")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names in any case."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_year_range(self) -> "Config":
        """Ensure the holiday year range is not reversed."""
        if self.holiday_year_from > self.holiday_year_to:
            raise ValueError("holiday_year_from must not be after holiday_year_to")
        return self
