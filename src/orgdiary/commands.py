"""Journal commands shared by the CLI and the calendar view.

Each command resolves the monthly file, resolves the heading, and returns
the Location the cursor should land on. Opening an editor there is left
to the caller.
"""

import calendar
import logging
from datetime import date, datetime, timedelta

from .adapters.editor import ExternalEditor
from .adapters.file_document import FileDocument
from .config import JournalConfig
from .core.headings import (
    append_entry,
    day_title,
    ensure_day_heading,
    find_last_entry,
)
from .core.outline import Location, iter_headings, location_at
from .core.paths import ensure_monthly_file, resolve_monthly_path
from .ports.editor import Editor

logger = logging.getLogger(__name__)


def current_time(config: JournalConfig) -> datetime:
    """Now, in the configured timezone."""
    return datetime.now(config.tzinfo())


def get_editor(config: JournalConfig) -> Editor:
    """Resolve the editor command from config."""
    return ExternalEditor(config.editor)


def open_month(when: date | datetime, config: JournalConfig) -> FileDocument:
    """Open the monthly file for ``when``, creating it if needed."""
    return FileDocument(ensure_monthly_file(when, config))


def new_entry(
    config: JournalConfig,
    when: datetime | None = None,
    text: str | None = None,
    now: datetime | None = None,
) -> Location:
    """
    Add a new entry and return the position just after its heading.

    Args:
        config: Journal configuration
        when: Time the entry is for (defaults to now)
        text: Optional entry text written right after the heading
        now: Creation time for a new day heading (defaults to now)
    """
    now = now or current_time(config)
    when = when or now

    document = open_month(when, config)
    offset = append_entry(document, when, config, now=now)
    if text:
        document.insert(offset, text)
        offset += len(text)
    document.save()

    return location_at(document.path, document.text, offset)


def goto_last_entry(config: JournalConfig, now: datetime | None = None) -> Location:
    """
    Locate the most recent entry in this month's file.

    Falls back to writing a new entry when the file has none yet.
    """
    now = now or current_time(config)
    document = open_month(now, config)

    found = find_last_entry(document)
    if found is None:
        logger.info(f"No entries in {document.path}, starting a new one")
        return new_entry(config, when=now, now=now)

    if found.day:
        logger.debug(f"Last entry {found.entry.line!r} is under {found.day.line!r}")
    offset = found.entry.start + len(found.entry.line)
    return location_at(document.path, document.text, offset)


def goto_date(config: JournalConfig, day: date, now: datetime | None = None) -> Location:
    """Make sure ``day`` has a heading and return the start of its line."""
    document = open_month(day, config)
    offset = ensure_day_heading(document, day, config, now=now)
    document.save()
    return location_at(document.path, document.text, offset)


def goto_current_day(config: JournalConfig, now: datetime | None = None) -> Location:
    now = now or current_time(config)
    return goto_date(config, now.date(), now=now)


def goto_previous_day(
    config: JournalConfig,
    anchor: date | None = None,
    now: datetime | None = None,
) -> Location:
    """Go to the day before ``anchor`` (today by default)."""
    now = now or current_time(config)
    anchor = anchor or now.date()
    return goto_date(config, anchor - timedelta(days=1), now=now)


def goto_next_day(
    config: JournalConfig,
    anchor: date | None = None,
    now: datetime | None = None,
) -> Location:
    """Go to the day after ``anchor`` (today by default)."""
    now = now or current_time(config)
    anchor = anchor or now.date()
    return goto_date(config, anchor + timedelta(days=1), now=now)


def open_calendar_day(config: JournalConfig, selected: date, now: datetime | None = None) -> Location:
    """Open the day currently selected in the calendar."""
    logger.debug(f"Opening {selected.isoformat()} from the calendar")
    return goto_date(config, selected, now=now)


def days_with_headings(config: JournalConfig, year: int, month: int) -> set[date]:
    """
    Days of a month that already have a heading.

    Read-only: a missing monthly file means no days, and is not created.
    """
    path = resolve_monthly_path(date(year, month, 1), config)
    if not path.exists():
        return set()

    titles = {h.plain_title for h in iter_headings(path.read_text(encoding="utf-8")) if h.level == 1}
    _, days_in_month = calendar.monthrange(year, month)
    days = (date(year, month, d) for d in range(1, days_in_month + 1))
    return {d for d in days if day_title(d, config) in titles}
