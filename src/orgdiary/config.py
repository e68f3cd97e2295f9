"""Configuration management for orgdiary."""

import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

ORGDIARY_HOME = Path(os.environ.get("ORGDIARY_HOME", Path.home() / "orgdiary"))
CONFIG_FILE = ORGDIARY_HOME / "config" / "orgdiary.conf"

# Formats must tell days apart, otherwise two days share one heading.
_DAY_DIRECTIVE = re.compile(r"%-?[dej]|%[cxDF]")
_MONTH_DIRECTIVE = re.compile(r"%-?[mbBh]|%[cxDF]")
_YEAR_DIRECTIVE = re.compile(r"%-?[yYG]|%[cxDF]")


def _has_directive(pattern: re.Pattern, fmt: str) -> bool:
    """Whether fmt uses one of the directives, ignoring escaped '%%'."""
    return bool(pattern.search(fmt.replace("%%", "")))


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


def _default_editor() -> str:
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"


@dataclass(frozen=True)
class JournalConfig:
    """orgdiary configuration.

    The four format strings are strftime patterns. ``file_name_format`` is
    relative to ``directory`` and should only vary by year and month.
    """

    directory: Path = field(default_factory=lambda: ORGDIARY_HOME / "journal")
    date_heading_format: str = "* %A, %d %B"
    time_heading_format: str = "** %H%M"
    file_name_format: str = "%Y-%m.org"
    title_format: str = "#+TITLE: Journal %Y-%m"
    created_format: str = "[%Y-%m-%d %a %H:%M]"
    editor: str = field(default_factory=_default_editor)
    timezone: str = ""
    calendar_key: str = "j"
    calendar_first_weekday: int = 0

    def tzinfo(self) -> ZoneInfo | None:
        """The configured timezone, or None for the local one."""
        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)

    def validate(self) -> "JournalConfig":
        """Check the configuration, raising ConfigError on the first problem."""
        if not self.date_heading_format.startswith("* "):
            raise ConfigError(
                f"date_heading_format must start with '* ' (a top-level heading): {self.date_heading_format!r}"
            )
        if not _has_directive(_DAY_DIRECTIVE, self.date_heading_format):
            raise ConfigError(
                f"date_heading_format must include the day of the month: {self.date_heading_format!r}"
            )
        if not self.time_heading_format.startswith("** "):
            raise ConfigError(
                f"time_heading_format must start with '** ' (a second-level heading): {self.time_heading_format!r}"
            )
        if not _has_directive(_MONTH_DIRECTIVE, self.file_name_format):
            raise ConfigError(f"file_name_format must include the month: {self.file_name_format!r}")
        if not (
            _has_directive(_YEAR_DIRECTIVE, self.file_name_format)
            or _has_directive(_YEAR_DIRECTIVE, self.date_heading_format)
        ):
            # Otherwise June of every year shares one file and one set of headings
            raise ConfigError(
                f"file_name_format or date_heading_format must include the year: {self.file_name_format!r}"
            )
        if len(self.calendar_key) != 1:
            raise ConfigError(f"calendar_key must be a single character: {self.calendar_key!r}")
        if not 0 <= self.calendar_first_weekday <= 6:
            raise ConfigError(f"calendar_first_weekday must be 0-6: {self.calendar_first_weekday}")
        try:
            self.tzinfo()
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone!r}") from e
        return self


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments. A leading "#" is kept for "#+TITLE:" formats.
    if " #" in value:
        value = value.split(" #")[0].strip()
    return value


def load_config(path: Path | None = None) -> JournalConfig:
    """Load configuration from orgdiary.conf, falling back to defaults."""
    path = path or CONFIG_FILE
    config = JournalConfig()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return config.validate()

    changes: dict = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "journal_dir":
                changes["directory"] = Path(value).expanduser()
            case "date_heading_format" | "time_heading_format" | "file_name_format" | "title_format":
                changes[key] = value
            case "created_format" | "editor" | "timezone" | "calendar_key":
                changes[key] = value
            case "calendar_first_weekday":
                try:
                    changes[key] = int(value)
                except ValueError as e:
                    raise ConfigError(f"calendar_first_weekday must be a number: {value!r}") from e
            case _:
                logger.warning(f"Ignoring unknown config key: {key}")

    return replace(config, **changes).validate()
