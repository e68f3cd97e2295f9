"""Day headings and entry sub-headings within a monthly document."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from ..config import JournalConfig
from ..ports.document import Document
from .outline import Heading, iter_headings, plain_title

logger = logging.getLogger(__name__)


@dataclass
class EntryLocation:
    """The last entry in a document and the day it belongs to."""

    entry: Heading
    day: Heading | None


def day_key(day: date, config: JournalConfig) -> str:
    """The heading line that marks ``day``."""
    return day.strftime(config.date_heading_format)


def day_title(day: date, config: JournalConfig) -> str:
    """The title part of ``day_key``, compared against parsed heading titles."""
    return plain_title(day_key(day, config).lstrip("*"))


def find_day_heading(text: str, day: date, config: JournalConfig) -> Heading | None:
    """
    Find the top-level heading for a day.

    Titles are compared without tags, priority or TODO keyword, so
    ``* Sunday, 15 June   :travel:`` still counts as the heading for that day.
    """
    title = day_title(day, config)
    for heading in iter_headings(text):
        if heading.level == 1 and heading.plain_title == title:
            return heading
    return None


def _separator(text: str) -> str:
    """Newlines needed so that exactly one blank line ends the text."""
    if not text or text.endswith("\n\n"):
        return ""
    if text.endswith("\n"):
        return "\n"
    return "\n\n"


def ensure_day_heading(
    document: Document,
    day: date,
    config: JournalConfig,
    now: datetime | None = None,
) -> int:
    """
    Make sure ``day`` has a heading and return the offset of its line.

    An existing heading is returned as-is. Otherwise the heading and a
    property drawer with its CREATED time are appended to the document.

    Args:
        document: The open monthly document
        day: Calendar day the heading is for
        config: Journal configuration
        now: Creation time recorded in the drawer (defaults to now)

    Returns:
        Offset of the start of the heading line
    """
    existing = find_day_heading(document.text, day, config)
    if existing:
        return existing.start

    now = now or datetime.now(config.tzinfo())
    key = day_key(day, config)
    separator = _separator(document.text)
    offset = len(document.text) + len(separator)

    document.append(
        f"{separator}{key}\n"
        ":PROPERTIES:\n"
        f":CREATED:  {now.strftime(config.created_format)}\n"
        ":END:\n"
    )
    logger.info(f"Added heading {key!r} to {document.path}")
    return offset


def append_entry(
    document: Document,
    when: datetime,
    config: JournalConfig,
    now: datetime | None = None,
) -> int:
    """
    Add a time-stamped sub-heading under the day heading for ``when``.

    The sub-heading goes at the end of the day's subtree, which is the end
    of the document when entries are written in order. Existing text is
    never changed.

    Returns:
        Offset just after the sub-heading and its trailing space
    """
    ensure_day_heading(document, when.date(), config, now=now)
    day = find_day_heading(document.text, when.date(), config)

    insert_at = day.end
    text = document.text
    separator = _separator(text[:insert_at])
    entry_line = f"{when.strftime(config.time_heading_format).rstrip()} "
    # Keep a blank line before any heading that follows
    trailer = "\n" if insert_at == len(text) else "\n\n"

    document.insert(insert_at, f"{separator}{entry_line}{trailer}")
    logger.debug(f"Added entry {entry_line.strip()!r} under {day.line!r}")
    return insert_at + len(separator) + len(entry_line)


def find_last_entry(document: Document) -> EntryLocation | None:
    """
    Find the entry sub-heading nearest the end of the document.

    Returns None when the document has no entries at all.
    """
    headings = iter_headings(document.text)
    for index in range(len(headings) - 1, -1, -1):
        if headings[index].level != 2:
            continue
        day = next((h for h in reversed(headings[:index]) if h.level == 1), None)
        return EntryLocation(entry=headings[index], day=day)
    return None
