"""
Tests for configuration loading.
"""

import os

import pytest
import yaml

from business_calendar.config.manager import ConfigManager
from business_calendar.core.loader import loader_from_config
from business_calendar.data.schemas import Config


@pytest.fixture
def config_file(tmp_path):
    """Write a nested YAML config file and return its path."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "calendars": {"default": "target", "load_paths": [str(tmp_path / "cals")]},
                "holidays": {"year_from": 2020, "year_to": 2030},
                "logging": {"level": "debug"},
                "api": {"host": "127.0.0.1", "port": 9000},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_packaged_defaults(self):
        """The bundled settings file loads and matches the model defaults."""
        config = ConfigManager().load_config()
        assert config.default_calendar == "weekdays"
        assert config.load_paths == []
        assert config.holiday_year_from == 2000
        assert config.holiday_year_to == 2050
        assert config.log_level == "WARNING"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "missing.yaml")).load_config()
        assert config == Config()

    def test_nested_file(self, config_file, tmp_path):
        config = ConfigManager(str(config_file)).load_config()
        assert config.default_calendar == "target"
        assert config.load_paths == [str(tmp_path / "cals")]
        assert config.holiday_year_from == 2020
        assert config.holiday_year_to == 2030
        assert config.log_level == "DEBUG"
        assert config.api_host == "127.0.0.1"
        assert config.api_port == 9000

    def test_env_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("BUSINESS_CALENDAR_DEFAULT_CALENDAR", "bacs")
        monkeypatch.setenv("BUSINESS_CALENDAR_LOAD_PATHS", os.pathsep.join(["/a", "/b"]))
        monkeypatch.setenv("BUSINESS_CALENDAR_API_PORT", "8080")

        config = ConfigManager(str(config_file)).load_config()
        assert config.default_calendar == "bacs"
        assert config.load_paths == ["/a", "/b"]
        assert config.api_port == 8080

    def test_invalid_env_number_is_ignored(self, config_file, monkeypatch):
        monkeypatch.setenv("BUSINESS_CALENDAR_API_PORT", "not-a-port")
        assert ConfigManager(str(config_file)).load_config().api_port == 9000

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api:\n  port: 70000\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigManager(str(path)).load_config()

    def test_reversed_year_range(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("holidays:\n  year_from: 2030\n  year_to: 2020\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigManager(str(path)).load_config()

    def test_unknown_log_level(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BUSINESS_CALENDAR_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigManager(str(tmp_path / "missing.yaml")).load_config()

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("calendars: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Error parsing YAML"):
            ConfigManager(str(path)).load_config()

    def test_save_and_reload(self, config_file, tmp_path):
        manager = ConfigManager(str(config_file))
        config = manager.load_config()

        output = tmp_path / "out" / "saved.yaml"
        manager.save_config(config, str(output))

        assert ConfigManager(str(output)).load_config() == config

    def test_loader_from_config(self, tmp_path):
        cals = tmp_path / "cals"
        cals.mkdir()
        (cals / "custom.yml").write_text("working_days: [sat]\n", encoding="utf-8")

        loader = loader_from_config(Config(load_paths=[str(cals)]))
        assert "custom" in loader.available_calendars()
        assert loader.load("custom").is_working_day("2024-06-01")
