"""
Console output formatting using Rich.
"""

from datetime import date, datetime
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from business_calendar.data.schemas import (
    CalendarInfo,
    DateShiftResult,
    DayStatus,
    RangeCountResult,
    Weekday,
)


def format_day(value) -> str:
    """Render a date (or timestamp) with its weekday, e.g. 'Mon 07.01.2013'."""
    day = value.date() if isinstance(value, datetime) else value
    text = f"{Weekday.of(day).full_name[:3]} {day.strftime('%d.%m.%Y')}"
    if isinstance(value, datetime):
        text += value.strftime(" %H:%M:%S")
    return text


def _yes_no(flag: bool) -> Text:
    return Text("yes", style="green") if flag else Text("no", style="red")


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the console formatter.

        Args:
            console: Console to print to; a new one is created if omitted.
        """
        self.console = console or Console()

    def print_day_status(self, status: DayStatus) -> None:
        """
        Print the classification of a date.

        Args:
            status: DayStatus to display.
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=22)
        table.add_column("Value", style="white")

        table.add_row("Date:", format_day(status.day))
        table.add_row("Business day:", _yes_no(status.is_business_day))
        table.add_row("Working day:", _yes_no(status.is_working_day))
        table.add_row("Holiday:", _yes_no(status.is_holiday))
        table.add_row("Extra working date:", _yes_no(status.is_extra_working_date))

        title = f"[bold]{status.calendar or 'Calendar'}[/bold]"
        self.console.print(Panel(table, title=title))

    def print_shift(self, result: DateShiftResult) -> None:
        """
        Print the result of a rolling or arithmetic operation.

        Args:
            result: DateShiftResult to display.
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=12)
        table.add_column("Value", style="white")

        table.add_row("Operation:", result.operation.replace("_", " "))
        table.add_row("From:", format_day(result.start))
        if result.days is not None:
            table.add_row("Days:", str(result.days))
        table.add_row(
            Text("Result:", style="bold green"),
            Text(format_day(result.result), style="bold green"),
        )

        title = f"[bold]{result.calendar or 'Calendar'}[/bold]"
        self.console.print(Panel(table, title=title))

    def print_range_count(self, result: RangeCountResult) -> None:
        """
        Print a business-day count.

        Args:
            result: RangeCountResult to display.
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=16)
        table.add_column("Value", style="white")

        table.add_row("Period:", f"{format_day(result.start)} - {format_day(result.end)}")
        table.add_row(
            Text("Business Days:", style="bold green"),
            Text(str(result.business_days), style="bold green"),
        )

        title = f"[bold]{result.calendar or 'Calendar'}[/bold]"
        self.console.print(Panel(table, title=title))

    def print_calendar(self, info: CalendarInfo, year: Optional[int] = None) -> None:
        """
        Print a calendar definition.

        Args:
            info: CalendarInfo to display.
            year: Only list holidays and extra working dates of this year.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Calendar {info.name or ''}[/bold blue]")
        self.console.print()

        working = ", ".join(day.full_name for day in info.working_days)
        self.console.print(f"[cyan]Working days:[/cyan] {working}")
        self.console.print()

        self._print_dates("Holidays", info.holidays, year)
        self._print_dates("Extra Working Dates", info.extra_working_dates, year)

    def _print_dates(self, title: str, days: List[date], year: Optional[int]) -> None:
        if year is not None:
            days = [day for day in days if day.year == year]
        if not days:
            self.console.print(f"[dim]No {title.lower()}.[/dim]")
            self.console.print()
            return

        table = Table(title=f"[bold]{title}[/bold]")
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day", style="dim", width=12)
        for day in days:
            table.add_row(day.strftime("%d.%m.%Y"), Weekday.of(day).full_name)

        self.console.print(table)
        self.console.print()

    def print_calendar_names(self, names: List[str]) -> None:
        """Print a table of calendar names."""
        table = Table()
        table.add_column("Calendar", style="cyan")
        for name in names:
            table.add_row(name)
        self.console.print(table)

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_success(self, message: str) -> None:
        """
        Print a success message.

        Args:
            message: Success message to display.
        """
        self.console.print(f"[bold green]Success:[/bold green] {message}")
