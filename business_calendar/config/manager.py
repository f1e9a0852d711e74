"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from business_calendar.data.schemas import Config

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    ENV_MAPPINGS = {
        "BUSINESS_CALENDAR_LOAD_PATHS": "load_paths",
        "BUSINESS_CALENDAR_DEFAULT_CALENDAR": "default_calendar",
        "BUSINESS_CALENDAR_HOLIDAY_YEAR_FROM": ("holiday_year_from", int),
        "BUSINESS_CALENDAR_HOLIDAY_YEAR_TO": ("holiday_year_to", int),
        "BUSINESS_CALENDAR_LOG_LEVEL": "log_level",
        "BUSINESS_CALENDAR_API_HOST": "api_host",
        "BUSINESS_CALENDAR_API_PORT": ("api_port", int),
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        return str(Path(__file__).parent / "settings.yaml")

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        config_dict = self._load_yaml()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            return Config(**config_dict)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        if not config:
            return {}
        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        return self._flatten_config(config)

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        result = {}

        cal = config.get("calendars") or {}
        if "load_paths" in cal:
            result["load_paths"] = cal["load_paths"] or []
        if "default" in cal:
            result["default_calendar"] = cal["default"]

        hol = config.get("holidays") or {}
        if "year_from" in hol:
            result["holiday_year_from"] = hol["year_from"]
        if "year_to" in hol:
            result["holiday_year_to"] = hol["year_to"]

        log = config.get("logging") or {}
        if "level" in log:
            result["log_level"] = log["level"]

        api = config.get("api") or {}
        if "host" in api:
            result["api_host"] = api["host"]
        if "port" in api:
            result["api_port"] = api["port"]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        ``BUSINESS_CALENDAR_LOAD_PATHS`` holds directories separated by
        ``os.pathsep``; the other variables map one-to-one onto Config fields.

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        for env_var, mapping in self.ENV_MAPPINGS.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue

            if env_var == "BUSINESS_CALENDAR_LOAD_PATHS":
                config_dict["load_paths"] = [p for p in env_value.split(os.pathsep) if p]
            elif isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
            else:
                config_dict[mapping] = env_value

        return config_dict

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save.
            output_path: Optional output path. If not provided, uses default.
        """
        output_path = output_path or self.config_path

        config_dict = {
            "calendars": {
                "default": config.default_calendar,
                "load_paths": list(config.load_paths),
            },
            "holidays": {
                "year_from": config.holiday_year_from,
                "year_to": config.holiday_year_to,
            },
            "logging": {
                "level": config.log_level,
            },
            "api": {
                "host": config.api_host,
                "port": config.api_port,
            },
        }

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
