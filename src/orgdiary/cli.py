"""orgdiary CLI - monthly org-mode journal."""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Callable

import click

from .calendar import CalendarView, run_calendar, setup_calendar_bindings
from .config import ConfigError, JournalConfig, load_config
from .core.outline import Location
from .core.paths import resolve_monthly_path
from .commands import (
    current_time,
    days_with_headings,
    get_editor,
    goto_date,
    goto_current_day,
    goto_last_entry,
    goto_next_day,
    goto_previous_day,
    new_entry,
    open_calendar_day,
)

DATE = click.DateTime(formats=["%Y-%m-%d"])
DATETIME = click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S"])
MONTH = click.DateTime(formats=["%Y-%m"])

no_edit_option = click.option("--no-edit", is_flag=True, help="Print path:line:column instead of opening the editor")


@click.group()
@click.version_option(package_name="orgdiary")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $ORGDIARY_HOME/config/orgdiary.conf)",
)
@click.pass_context
def main(ctx, debug: bool, config_path: Path | None):
    """orgdiary - a journal kept as one org file per month."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.obj = {"config_path": config_path}


def _load(ctx: click.Context) -> JournalConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _navigate(config: JournalConfig, no_edit: bool, command: Callable[[], Location]) -> None:
    """Run a journal command, then show where it landed."""
    try:
        location = command()
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _show(config, location, no_edit)


def _show(config: JournalConfig, location: Location, no_edit: bool) -> None:
    if no_edit:
        click.echo(location.format())
        return
    try:
        get_editor(config).open(location)
    except RuntimeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--at", "at", type=DATETIME, default=None, help="Entry time (YYYY-MM-DD HH:MM), defaults to now")
@click.option("--message", "-m", default=None, help="Entry text; implies --no-edit")
@no_edit_option
@click.pass_context
def new(ctx, at: datetime | None, message: str | None, no_edit: bool):
    """Start a new time-stamped entry."""
    config = _load(ctx)
    _navigate(config, no_edit or bool(message), lambda: new_entry(config, when=at, text=message))


@main.command()
@no_edit_option
@click.pass_context
def last(ctx, no_edit: bool):
    """Go to the most recent entry (or start one)."""
    config = _load(ctx)
    _navigate(config, no_edit, lambda: goto_last_entry(config))


@main.command()
@no_edit_option
@click.pass_context
def today(ctx, no_edit: bool):
    """Go to today's heading."""
    config = _load(ctx)
    _navigate(config, no_edit, lambda: goto_current_day(config))


@main.command()
@click.option("--from", "anchor", type=DATE, default=None, help="Day to step back from (YYYY-MM-DD), defaults to today")
@no_edit_option
@click.pass_context
def prev(ctx, anchor: datetime | None, no_edit: bool):
    """Go to the previous day's heading."""
    config = _load(ctx)
    _navigate(config, no_edit, lambda: goto_previous_day(config, anchor.date() if anchor else None))


@main.command("next")
@click.option("--from", "anchor", type=DATE, default=None, help="Day to step forward from (YYYY-MM-DD), defaults to today")
@no_edit_option
@click.pass_context
def next_(ctx, anchor: datetime | None, no_edit: bool):
    """Go to the next day's heading."""
    config = _load(ctx)
    _navigate(config, no_edit, lambda: goto_next_day(config, anchor.date() if anchor else None))


@main.command()
@click.argument("day", type=DATE)
@no_edit_option
@click.pass_context
def goto(ctx, day: datetime, no_edit: bool):
    """Go to the heading for DAY (YYYY-MM-DD)."""
    config = _load(ctx)
    _navigate(config, no_edit, lambda: goto_date(config, day.date()))


@main.command()
@click.option("--month", "month", type=MONTH, default=None, help="Month to show first (YYYY-MM)")
@no_edit_option
@click.pass_context
def calendar(ctx, month: datetime | None, no_edit: bool):
    """Pick a day from a month calendar."""
    config = _load(ctx)
    start = month.date() if month else current_time(config).date()

    view = CalendarView(
        selected=start,
        first_weekday=config.calendar_first_weekday,
        marked_days=lambda year, m: days_with_headings(config, year, m),
    )
    setup_calendar_bindings(view, lambda day: open_calendar_day(config, day), key=config.calendar_key)

    def show(text: str) -> None:
        click.clear()
        click.echo(text)
        click.echo(f"\nh/l day  p/n week  </> month  {config.calendar_key} open  q quit")

    try:
        location = run_calendar(view, click.getchar, show)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if location is not None:
        _show(config, location, no_edit)


@main.command()
@click.argument("day", type=DATE, required=False)
@click.pass_context
def path(ctx, day: datetime | None):
    """Print the monthly file for DAY (defaults to today)."""
    config = _load(ctx)
    target: date = day.date() if day else current_time(config).date()
    click.echo(resolve_monthly_path(target, config))
