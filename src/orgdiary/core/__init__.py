"""Functional core - locating days and entries in monthly files."""

from .paths import resolve_monthly_path, ensure_monthly_file
from .outline import Heading, Location, iter_headings, parse_outline, plain_title, location_at
from .headings import (
    EntryLocation,
    append_entry,
    day_key,
    day_title,
    ensure_day_heading,
    find_day_heading,
    find_last_entry,
)

__all__ = [
    # Paths
    "resolve_monthly_path",
    "ensure_monthly_file",
    # Outline
    "Heading",
    "Location",
    "iter_headings",
    "parse_outline",
    "plain_title",
    "location_at",
    # Headings
    "EntryLocation",
    "append_entry",
    "day_key",
    "day_title",
    "ensure_day_heading",
    "find_day_heading",
    "find_last_entry",
]
