"""
Configuration loading.
"""

from business_calendar.config.manager import ConfigManager

__all__ = ["ConfigManager"]
