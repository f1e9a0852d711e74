"""
Exceptions raised by the business calendar.
"""


class CalendarError(ValueError):
    """Base class for all calendar errors."""


class InvalidDayError(CalendarError):
    """A weekday token matches no known weekday."""


class DateParseError(CalendarError):
    """A date or timestamp token could not be parsed."""


class ConfigurationConflictError(CalendarError):
    """Holidays, extra working dates and working days contradict each other."""


class CalendarDefinitionError(CalendarError):
    """Raw calendar data is malformed (wrong shape or unknown keys)."""


class CalendarNotFoundError(CalendarError, LookupError):
    """No calendar source knows the requested calendar name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such calendar '{name}'")
