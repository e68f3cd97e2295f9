"""Monthly file resolution - which file holds a given point in time."""

import logging
from datetime import date, datetime
from pathlib import Path

from ..config import JournalConfig

logger = logging.getLogger(__name__)


def resolve_monthly_path(when: date | datetime, config: JournalConfig) -> Path:
    """
    Path of the monthly file that holds entries for ``when``.

    Pure function - no I/O. The file may not exist yet.
    """
    return Path(config.directory).expanduser() / when.strftime(config.file_name_format)


def ensure_monthly_file(when: date | datetime, config: JournalConfig) -> Path:
    """
    Make sure the monthly file for ``when`` exists and return its path.

    Creates missing directories. A new or empty file gets the title line
    followed by a blank line; existing content is never touched.
    """
    path = resolve_monthly_path(when, config)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)

    if path.stat().st_size == 0:
        title = when.strftime(config.title_format)
        path.write_text(f"{title}\n\n", encoding="utf-8")
        logger.info(f"Created journal file {path}")

    return path
