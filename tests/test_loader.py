"""
Tests for calendar sources and the calendar loader.
"""

from datetime import date

import pytest

from business_calendar import load_calendar
from business_calendar.core.calendar import Calendar
from business_calendar.core.loader import CalendarLoader, default_loader, source_for
from business_calendar.core.sources import (
    DirectorySource,
    HolidaysLibrarySource,
    MappingSource,
    bundled_source,
)
from business_calendar.data.schemas import CalendarDefinition, Weekday
from business_calendar.exceptions import (
    CalendarDefinitionError,
    CalendarNotFoundError,
    ConfigurationConflictError,
    DateParseError,
)


@pytest.fixture
def calendar_dir(tmp_path):
    """Directory with a few calendar files."""
    (tmp_path / "ecb.yml").write_text(
        "working_days:\n  - monday\n  - tuesday\n  - wednesday\n  - thursday\n  - friday\n"
        "holidays:\n  - 2014-12-25\n  - 2014-12-26\n",
        encoding="utf-8",
    )
    # Same name as a bundled calendar, without any holidays.
    (tmp_path / "bacs.yml").write_text("working_days: [mon, tue, wed, thu, fri]\n", encoding="utf-8")
    (tmp_path / "invalid-keys.yml").write_text("holidays: []\nfoo: bar\n", encoding="utf-8")
    (tmp_path / "empty.yaml").write_text("", encoding="utf-8")
    (tmp_path / "list.yml").write_text("- 2014-12-25\n", encoding="utf-8")
    (tmp_path / "conflict.yml").write_text(
        "holidays: [2018-01-06]\nextra_working_dates: [2018-01-06]\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def loader(calendar_dir):
    """Default loader with the test directory and an in-memory registry first."""
    return default_loader(
        load_paths=[calendar_dir, {"foobar": {"working_days": ["monday"]}}],
        year_from=2025,
        year_to=2027,
    )


class TestDirectorySource:
    """Tests for YAML directory sources."""

    def test_resolve(self, calendar_dir):
        definition = DirectorySource(calendar_dir).resolve("ecb")
        assert definition.name == "ecb"
        assert definition.holidays == [date(2014, 12, 25), date(2014, 12, 26)]

    def test_unknown_name(self, calendar_dir):
        assert DirectorySource(calendar_dir).resolve("nope") is None

    def test_names_outside_directory_are_ignored(self, calendar_dir):
        assert DirectorySource(calendar_dir / "sub").resolve("../ecb") is None

    def test_invalid_keys(self, calendar_dir):
        with pytest.raises(CalendarDefinitionError) as exc_info:
            DirectorySource(calendar_dir).resolve("invalid-keys")
        assert str(exc_info.value) == (
            "Only valid keys are: holidays, working_days, extra_working_dates"
        )

    def test_non_mapping_document(self, calendar_dir):
        with pytest.raises(CalendarDefinitionError, match="must be a mapping"):
            DirectorySource(calendar_dir).resolve("list")

    def test_empty_file(self, calendar_dir):
        definition = DirectorySource(calendar_dir).resolve("empty")
        assert definition == CalendarDefinition(name="empty")

    def test_names(self, calendar_dir):
        assert DirectorySource(calendar_dir).names() == [
            "bacs", "conflict", "ecb", "empty", "invalid-keys", "list",
        ]

    def test_names_of_missing_directory(self, tmp_path):
        assert DirectorySource(tmp_path / "missing").names() == []


class TestMappingSource:
    """Tests for in-memory sources."""

    def test_resolve(self):
        source = MappingSource({"foobar": {"working_days": ["monday"]}})
        assert source.resolve("foobar").working_days == ["monday"]
        assert source.resolve("other") is None

    def test_invalid_keys(self):
        with pytest.raises(CalendarDefinitionError):
            MappingSource({"bad": {"holiday": []}}).resolve("bad")

    def test_source_for(self, tmp_path):
        assert isinstance(source_for({"a": {}}), MappingSource)
        assert isinstance(source_for(tmp_path), DirectorySource)
        assert isinstance(source_for(str(tmp_path)), DirectorySource)
        source = MappingSource({})
        assert source_for(source) is source


class TestHolidaysLibrarySource:
    """Tests for calendars built from the holidays package."""

    @pytest.fixture
    def source(self):
        return HolidaysLibrarySource(year_from=2026, year_to=2026)

    def test_country(self, source):
        definition = source.resolve("holidays:DE")
        calendar = Calendar.from_definition(definition)
        assert calendar.name == "holidays:DE"
        assert calendar.is_holiday(date(2026, 1, 1))
        assert calendar.is_holiday(date(2026, 12, 25))
        assert not calendar.is_holiday(date(2026, 7, 7))

    def test_subdivision(self, source):
        bavaria = Calendar.from_definition(source.resolve("holidays:DE-BY"))
        hamburg = Calendar.from_definition(source.resolve("holidays:de-hh"))
        # Epiphany is a holiday in Bavaria but not in Hamburg.
        assert bavaria.is_holiday(date(2026, 1, 6))
        assert not hamburg.is_holiday(date(2026, 1, 6))

    def test_year_range(self, source):
        calendar = Calendar.from_definition(source.resolve("holidays:DE"))
        assert not calendar.is_holiday(date(2025, 1, 1))

    def test_unknown_country(self, source):
        assert source.resolve("holidays:XX") is None

    def test_other_names(self, source):
        assert source.resolve("weekdays") is None
        assert source.resolve("holidays:") is None

    def test_names(self, source):
        assert "holidays:DE" in source.names()

    def test_reversed_years(self):
        with pytest.raises(ValueError):
            HolidaysLibrarySource(year_from=2030, year_to=2020)


class TestCalendarLoader:
    """Tests for CalendarLoader."""

    def test_load_from_directory(self, loader):
        calendar = loader.load("ecb")
        assert isinstance(calendar, Calendar)
        assert calendar.name == "ecb"
        assert not calendar.is_business_day(date(2014, 12, 25))

    def test_load_from_mapping(self, loader):
        calendar = loader.load("foobar")
        assert calendar.working_days == (Weekday.MON,)

    def test_load_paths_override_bundled_calendars(self, loader):
        assert loader.load("bacs").is_business_day(date(2025, 12, 25)) is True
        bundled = CalendarLoader([bundled_source()]).load("bacs")
        assert bundled.is_business_day(date(2025, 12, 25)) is False

    def test_load_holidays_calendar(self, loader):
        calendar = loader.load("holidays:GB")
        assert not calendar.is_business_day(date(2026, 12, 25))

    def test_missing_calendar(self, loader):
        with pytest.raises(CalendarNotFoundError, match="No such calendar") as exc_info:
            loader.load("invalid-calendar")
        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.name == "invalid-calendar"

    def test_invalid_calendar_data(self, loader):
        with pytest.raises(ConfigurationConflictError):
            loader.load("conflict")

    def test_integer_holiday_is_rejected(self):
        loader = CalendarLoader([MappingSource({"numeric": {"holidays": [20130101]}})])
        with pytest.raises(DateParseError):
            loader.load("numeric")

    def test_integer_extra_working_date_is_rejected(self):
        loader = CalendarLoader(
            [MappingSource({"numeric": {"extra_working_dates": [1356998400]}})]
        )
        with pytest.raises(DateParseError):
            loader.load("numeric")

    def test_load_returns_new_instances(self, loader):
        first = loader.load("ecb")
        second = loader.load("ecb")
        assert first == second
        assert first is not second

    def test_load_cached(self, loader):
        assert loader.load_cached("ecb") is loader.load_cached("ecb")

    def test_clear_cache(self, loader):
        first = loader.load_cached("ecb")
        loader.clear_cache()
        assert loader.load_cached("ecb") is not first

    def test_available_calendars(self, loader):
        names = loader.available_calendars()
        for name in ("bacs", "ecb", "foobar", "target", "weekdays", "holidays:DE"):
            assert name in names

    def test_bundled_calendars_are_loadable(self):
        loader = CalendarLoader([bundled_source()])
        names = loader.available_calendars()
        assert {"bacs", "ecb", "target", "weekdays"} <= set(names)
        for name in names:
            assert len(loader.load(name).working_days) >= 1

    def test_bundled_ecb_calendar(self):
        loader = CalendarLoader([bundled_source()])
        ecb = loader.load("ecb")
        # Christmas Eve closes the ECB but not the TARGET system.
        assert not ecb.is_business_day(date(2025, 12, 24))
        assert loader.load("target").is_business_day(date(2025, 12, 24))
        assert not ecb.is_business_day(date(2025, 10, 3))

    def test_load_calendar_shortcut(self):
        calendar = load_calendar("target")
        assert calendar is load_calendar("target")
        assert not calendar.is_business_day(date(2025, 5, 1))
