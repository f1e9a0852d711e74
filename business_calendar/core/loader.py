"""
Calendar loader: resolves calendar names through an ordered list of sources.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from business_calendar.core.calendar import Calendar
from business_calendar.core.sources import (
    CalendarSource,
    DirectorySource,
    HolidaysLibrarySource,
    MappingSource,
    bundled_source,
)
from business_calendar.data.schemas import Config
from business_calendar.exceptions import CalendarNotFoundError

logger = logging.getLogger(__name__)

LoadPath = Union[str, Path, Mapping[str, Any], CalendarSource]


class CalendarLoader:
    """Loads calendars by name, trying each source in order."""

    def __init__(self, sources: Sequence[CalendarSource]):
        """
        Initialize the calendar loader.

        Args:
            sources: Sources to try, highest priority first.
        """
        self.sources: List[CalendarSource] = list(sources)
        self._cache: Dict[str, Calendar] = {}
        self._lock = threading.Lock()

    def load(self, name: str) -> Calendar:
        """
        Load a calendar, always building a fresh instance.

        Args:
            name: Calendar name.

        Returns:
            Calendar built from the first source that knows the name.

        Raises:
            CalendarNotFoundError: If no source knows the name.
            CalendarDefinitionError: If the calendar data is malformed.
            CalendarError: If the calendar data fails validation.
        """
        for source in self.sources:
            definition = source.resolve(name)
            if definition is not None:
                logger.debug(f"Resolved calendar '{name}' via {source!r}")
                return Calendar.from_definition(definition)
        raise CalendarNotFoundError(name)

    def load_cached(self, name: str) -> Calendar:
        """Load a calendar once and return the same instance afterwards."""
        with self._lock:
            calendar = self._cache.get(name)
            if calendar is None:
                calendar = self.load(name)
                self._cache[name] = calendar
            else:
                logger.debug(f"Calendar '{name}' served from cache")
            return calendar

    def clear_cache(self) -> None:
        """Forget all cached calendars."""
        with self._lock:
            self._cache.clear()

    def available_calendars(self) -> List[str]:
        """List every calendar name known to any source."""
        names = set()
        for source in self.sources:
            names.update(source.names())
        return sorted(names)


def source_for(path: LoadPath) -> CalendarSource:
    """Turn a load path (directory, registry mapping or source) into a source."""
    if isinstance(path, CalendarSource):
        return path
    if isinstance(path, Mapping):
        return MappingSource(path)
    return DirectorySource(path)


def default_loader(
    load_paths: Optional[Iterable[LoadPath]] = None,
    year_from: int = 2000,
    year_to: int = 2050,
) -> CalendarLoader:
    """
    Build the standard loader.

    Sources are tried in this order: each load path, the bundled calendars,
    then public holidays from the ``holidays`` package.

    Args:
        load_paths: Directories or ``{name: data}`` mappings searched first.
        year_from: First year for ``holidays:`` calendars.
        year_to: Last year for ``holidays:`` calendars.

    Returns:
        Configured CalendarLoader.
    """
    sources = [source_for(path) for path in (load_paths or [])]
    sources.append(bundled_source())
    sources.append(HolidaysLibrarySource(year_from, year_to))
    return CalendarLoader(sources)


def loader_from_config(config: Config) -> CalendarLoader:
    """Build the standard loader from application configuration."""
    return default_loader(
        load_paths=config.load_paths,
        year_from=config.holiday_year_from,
        year_to=config.holiday_year_to,
    )
