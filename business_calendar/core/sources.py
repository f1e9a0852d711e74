"""
Calendar sources: places a calendar name can be resolved to raw calendar data.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import holidays
import yaml

from business_calendar.data.schemas import CalendarDefinition
from business_calendar.exceptions import CalendarDefinitionError

logger = logging.getLogger(__name__)

CALENDAR_SUFFIXES = (".yml", ".yaml")

BUNDLED_CALENDARS_DIR = Path(__file__).parent.parent / "data" / "calendars"


class CalendarSource:
    """Resolves calendar names to calendar definitions."""

    def resolve(self, name: str) -> Optional[CalendarDefinition]:
        """
        Resolve a calendar name.

        Args:
            name: Calendar name.

        Returns:
            CalendarDefinition if this source knows the name, None otherwise.

        Raises:
            CalendarDefinitionError: If the source knows the name but its data
                is malformed.
        """
        raise NotImplementedError

    def names(self) -> List[str]:
        """List the calendar names this source can resolve."""
        return []


class DirectorySource(CalendarSource):
    """Reads ``<name>.yml`` (or ``.yaml``) files from a directory."""

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize the directory source.

        Args:
            directory: Directory holding calendar YAML files.
        """
        self.directory = Path(directory)

    def _find(self, name: str) -> Optional[Path]:
        # Keep lookups inside the directory.
        if not name or Path(name).name != name:
            return None
        for suffix in CALENDAR_SUFFIXES:
            path = self.directory / f"{name}{suffix}"
            if path.is_file():
                return path
        return None

    def resolve(self, name: str) -> Optional[CalendarDefinition]:
        path = self._find(name)
        if path is None:
            return None

        logger.debug(f"Loading calendar '{name}' from {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CalendarDefinitionError(f"Error parsing calendar file {path}: {e}") from e
        return CalendarDefinition.from_raw(name, data)

    def names(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            path.stem
            for path in self.directory.iterdir()
            if path.is_file() and path.suffix in CALENDAR_SUFFIXES
        )

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.directory)!r})"


class MappingSource(CalendarSource):
    """Resolves names from an in-memory ``{name: {...}}`` registry."""

    def __init__(self, calendars: Mapping[str, Any]):
        self.calendars: Dict[str, Any] = dict(calendars)

    def resolve(self, name: str) -> Optional[CalendarDefinition]:
        if name not in self.calendars:
            return None
        return CalendarDefinition.from_raw(name, self.calendars[name])

    def names(self) -> List[str]:
        return sorted(self.calendars)

    def __repr__(self) -> str:
        return f"MappingSource({self.names()!r})"


class HolidaysLibrarySource(CalendarSource):
    """
    Public-holiday calendars from the ``holidays`` package.

    Names take the form ``holidays:<COUNTRY>`` or
    ``holidays:<COUNTRY>-<SUBDIV>``, e.g. ``holidays:DE`` or
    ``holidays:DE-HH``. The resulting calendar has a Monday to Friday week
    and every holiday the package lists for the configured year range.
    """

    PREFIX = "holidays:"

    def __init__(self, year_from: int = 2000, year_to: int = 2050):
        """
        Initialize the holidays source.

        Args:
            year_from: First year to list holidays for.
            year_to: Last year to list holidays for (inclusive).
        """
        if year_from > year_to:
            raise ValueError("year_from must not be after year_to")
        self.year_from = year_from
        self.year_to = year_to
        self._cache: Dict[Tuple[str, Optional[str]], CalendarDefinition] = {}

    def _split(self, name: str) -> Optional[Tuple[str, Optional[str]]]:
        if not name.lower().startswith(self.PREFIX):
            return None
        code = name[len(self.PREFIX):].strip()
        if not code:
            return None
        country, _, subdiv = code.partition("-")
        return country.upper(), (subdiv.upper() or None)

    def resolve(self, name: str) -> Optional[CalendarDefinition]:
        key = self._split(name)
        if key is None:
            return None
        if key in self._cache:
            return self._cache[key].model_copy(update={"name": name})

        country, subdiv = key
        try:
            country_holidays = holidays.country_holidays(
                country,
                subdiv=subdiv,
                years=range(self.year_from, self.year_to + 1),
            )
        except NotImplementedError:
            logger.debug(f"holidays package has no calendar for {country} / {subdiv}")
            return None

        definition = CalendarDefinition(name=name, holidays=sorted(country_holidays.keys()))
        self._cache[key] = definition
        logger.debug(
            f"Built calendar '{name}' with {len(definition.holidays)} holidays "
            f"for {self.year_from}-{self.year_to}"
        )
        return definition

    def names(self) -> List[str]:
        return sorted(
            f"{self.PREFIX}{country}" for country in holidays.list_supported_countries()
        )

    def __repr__(self) -> str:
        return f"HolidaysLibrarySource({self.year_from}, {self.year_to})"


def bundled_source() -> DirectorySource:
    """Source over the calendars shipped with the package."""
    return DirectorySource(BUNDLED_CALENDARS_DIR)
