"""
Console output formatting.
"""

from business_calendar.output.formatter import ConsoleFormatter

__all__ = ["ConsoleFormatter"]
