"""
CLI interface for the business calendar.
"""

import logging
import sys
from typing import Optional

import click

from business_calendar import __version__
from business_calendar.config.manager import ConfigManager
from business_calendar.core import results
from business_calendar.core.calendar import Calendar
from business_calendar.core.loader import CalendarLoader, loader_from_config
from business_calendar.core.sources import HolidaysLibrarySource
from business_calendar.data.schemas import Config
from business_calendar.output.formatter import ConsoleFormatter

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

calendar_option = click.option(
    "--calendar", "-n",
    default=None,
    help="Calendar name (default: from config, usually 'weekdays')",
)


def _loader(ctx: click.Context) -> CalendarLoader:
    if "loader" not in ctx.obj:
        ctx.obj["loader"] = loader_from_config(ctx.obj["config"])
    return ctx.obj["loader"]


def _load_calendar(ctx: click.Context, name: Optional[str]) -> Calendar:
    cfg: Config = ctx.obj["config"]
    return _loader(ctx).load(name or cfg.default_calendar)


@click.group()
@click.version_option(version=__version__, prog_name="business-calendar")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool):
    """Business Calendar - business-day checks and date arithmetic."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config

    try:
        cfg = ConfigManager(config).load_config()
    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)

    ctx.obj["config"] = cfg
    logging.getLogger().setLevel(logging.DEBUG if verbose else cfg.log_level)
    logger.debug(f"Using config: {cfg}")


@main.command()
@click.argument("day")
@calendar_option
@click.pass_context
def check(ctx: click.Context, day: str, calendar: Optional[str]):
    """Show whether DAY is a business day, working day or holiday."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_day_status(results.day_status(cal, day))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("day")
@calendar_option
@click.option(
    "--backward", "-b",
    is_flag=True,
    default=False,
    help="Roll to the previous business day instead of the next one",
)
@click.pass_context
def roll(ctx: click.Context, day: str, calendar: Optional[str], backward: bool):
    """Roll DAY to the nearest business day (DAY itself if it is one)."""
    formatter = ConsoleFormatter()
    operation = "roll_backward" if backward else "roll_forward"
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_shift(results.shift(cal, operation, day))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command("next")
@click.argument("day")
@calendar_option
@click.pass_context
def next_(ctx: click.Context, day: str, calendar: Optional[str]):
    """Show the first business day after DAY."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_shift(results.shift(cal, "next_business_day", day))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("day")
@calendar_option
@click.pass_context
def previous(ctx: click.Context, day: str, calendar: Optional[str]):
    """Show the last business day before DAY."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_shift(results.shift(cal, "previous_business_day", day))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("day")
@click.argument("days", type=int)
@calendar_option
@click.pass_context
def add(ctx: click.Context, day: str, days: int, calendar: Optional[str]):
    """Add DAYS business days to DAY (use '--' before a negative DAYS)."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_shift(results.shift(cal, "add_business_days", day, days))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("day")
@click.argument("days", type=int)
@calendar_option
@click.pass_context
def subtract(ctx: click.Context, day: str, days: int, calendar: Optional[str]):
    """Subtract DAYS business days from DAY."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_shift(results.shift(cal, "subtract_business_days", day, days))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("start")
@click.argument("end")
@calendar_option
@click.pass_context
def between(ctx: click.Context, start: str, end: str, calendar: Optional[str]):
    """Count business days after START up to and including END."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, calendar)
        formatter.print_range_count(results.range_count(cal, start, end))
    except (ValueError, OverflowError) as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option(
    "--include-holidays/--no-include-holidays",
    default=False,
    help="Also list holidays:<COUNTRY> calendars from the holidays package",
)
@click.pass_context
def calendars(ctx: click.Context, include_holidays: bool):
    """List the available calendar names."""
    formatter = ConsoleFormatter()
    names = _loader(ctx).available_calendars()
    if not include_holidays:
        names = [n for n in names if not n.startswith(HolidaysLibrarySource.PREFIX)]
    formatter.print_calendar_names(names)


@main.command()
@click.argument("name", required=False)
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Only list dates of this year",
)
@click.pass_context
def show(ctx: click.Context, name: Optional[str], year: Optional[int]):
    """Show the definition of calendar NAME."""
    formatter = ConsoleFormatter()
    try:
        cal = _load_calendar(ctx, name)
        formatter.print_calendar(results.calendar_info(cal), year=year)
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command("init-config")
@click.argument("output", type=click.Path(dir_okay=False))
@click.pass_context
def init_config(ctx: click.Context, output: str):
    """Write the effective configuration to OUTPUT as YAML."""
    formatter = ConsoleFormatter()
    ConfigManager(ctx.obj["config_path"]).save_config(ctx.obj["config"], output)
    formatter.print_success(f"Configuration saved to {output}")


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 8000)",
)
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()
    cfg: Config = ctx.obj["config"]

    try:
        import uvicorn
    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)

    api_host = host or cfg.api_host
    api_port = port or cfg.api_port

    formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
    formatter.console.print("Press Ctrl+C to stop")
    formatter.console.print()

    uvicorn.run(
        "business_calendar.api:app",
        host=api_host,
        port=api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
