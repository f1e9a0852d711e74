"""
FastAPI REST API for the business calendar.
"""

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Query

from business_calendar import __version__
from business_calendar.config.manager import ConfigManager
from business_calendar.core import results
from business_calendar.core.calendar import Calendar
from business_calendar.core.loader import loader_from_config
from business_calendar.core.sources import HolidaysLibrarySource
from business_calendar.data.schemas import (
    CalendarInfo,
    DateShiftResult,
    DayStatus,
    RangeCountResult,
)
from business_calendar.exceptions import CalendarNotFoundError

logger = logging.getLogger(__name__)

# Largest business-day delta accepted by /add (about 400 years).
MAX_BUSINESS_DAYS = 100_000

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
loader = loader_from_config(config)


app = FastAPI(
    title="Business Calendar API",
    description="Business-day checks and date arithmetic over named calendars",
    version=__version__,
)


def _calendar(name: str) -> Calendar:
    """Load a cached calendar, mapping lookup and data errors to HTTP errors."""
    try:
        return loader.load_cached(name)
    except CalendarNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        logger.warning(f"Calendar '{name}' failed to load: {e}")
        raise HTTPException(status_code=500, detail=f"Calendar '{name}' is invalid: {e}")


def _shift(name: str, operation: str, day: str, days: int = None) -> DateShiftResult:
    cal = _calendar(name)
    try:
        return results.shift(cal, operation, day, days)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Business Calendar API",
        "version": __version__,
        "endpoints": {
            "GET /calendars": "List calendar names",
            "GET /calendars/{name}": "Show a calendar definition",
            "GET /calendars/{name}/days/{day}": "Classify a date",
            "GET /calendars/{name}/roll": "Roll a date to a business day",
            "GET /calendars/{name}/next": "Next business day",
            "GET /calendars/{name}/previous": "Previous business day",
            "GET /calendars/{name}/add": "Add (or subtract) business days",
            "GET /calendars/{name}/between": "Count business days in (start, end]",
        },
    }


@app.get("/calendars", response_model=List[str])
async def list_calendars(
    include_holidays: bool = Query(False, description="Include holidays:<COUNTRY> calendars"),
):
    """List the available calendar names."""
    names = loader.available_calendars()
    if not include_holidays:
        names = [n for n in names if not n.startswith(HolidaysLibrarySource.PREFIX)]
    return names


@app.get("/calendars/{name}", response_model=CalendarInfo)
async def get_calendar(name: str):
    """Show the working days, holidays and extra working dates of a calendar."""
    return results.calendar_info(_calendar(name))


@app.get("/calendars/{name}/days/{day}", response_model=DayStatus)
async def get_day(name: str, day: str):
    """Classify a date in a calendar."""
    cal = _calendar(name)
    try:
        return results.day_status(cal, day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/calendars/{name}/roll", response_model=DateShiftResult)
async def roll(
    name: str,
    date: str = Query(..., description="Date to roll"),
    direction: str = Query("forward", pattern="^(forward|backward)$"),
):
    """Roll a date forward or backward to the nearest business day."""
    return _shift(name, f"roll_{direction}", date)


@app.get("/calendars/{name}/next", response_model=DateShiftResult)
async def next_business_day(name: str, date: str = Query(...)):
    """First business day after a date."""
    return _shift(name, "next_business_day", date)


@app.get("/calendars/{name}/previous", response_model=DateShiftResult)
async def previous_business_day(name: str, date: str = Query(...)):
    """Last business day before a date."""
    return _shift(name, "previous_business_day", date)


@app.get("/calendars/{name}/add", response_model=DateShiftResult)
async def add_business_days(
    name: str,
    date: str = Query(...),
    days: int = Query(
        ...,
        ge=-MAX_BUSINESS_DAYS,
        le=MAX_BUSINESS_DAYS,
        description="Business days to add; negative values subtract",
    ),
):
    """Add business days to a date."""
    return _shift(name, "add_business_days", date, days)


@app.get("/calendars/{name}/between", response_model=RangeCountResult)
async def business_days_between(
    name: str,
    start: str = Query(...),
    end: str = Query(...),
):
    """Count business days after start up to and including end."""
    cal = _calendar(name)
    try:
        return results.range_count(cal, start, end)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
