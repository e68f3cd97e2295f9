"""Typed outline view of an org document.

Headings are parsed from the raw text on demand, so lookups compare
heading titles instead of searching for a substring anywhere in the file.
Only ``\n`` ends a line, matching how Locations count lines.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

_LINE = re.compile(r"[^\n]*\n|[^\n]+$")
_HEADING = re.compile(r"^(\*+) (.*)$")
_PROPERTY = re.compile(r"^:([^:\s]+):\s*(.*)$")
_KEYWORD = re.compile(r"^(?:TODO|DONE)\s+")
_PRIORITY = re.compile(r"^\[#[A-Za-z0-9]\]\s*")
_TAGS = re.compile(r"\s+:[\w@#%:]+:\s*$")


def plain_title(title: str) -> str:
    """A heading title without TODO keyword, priority cookie or tags."""
    title = _KEYWORD.sub("", title.strip())
    title = _PRIORITY.sub("", title)
    return _TAGS.sub("", title).strip()


@dataclass
class Heading:
    """A heading and the extent of its subtree within the document text."""

    level: int
    title: str
    start: int
    end: int
    properties: dict[str, str] = field(default_factory=dict)
    children: list["Heading"] = field(default_factory=list)

    @property
    def line(self) -> str:
        """The heading line as written, without the trailing newline."""
        return f"{'*' * self.level} {self.title}"

    @property
    def plain_title(self) -> str:
        return plain_title(self.title)


@dataclass(frozen=True)
class Location:
    """A position within a journal file.

    Line and column are 1-based and count characters. ``byte_column`` is
    the same column in UTF-8 bytes, for editors that address bytes.
    """

    path: Path
    offset: int
    line: int
    column: int
    byte_column: int | None = None

    def format(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


def location_at(path: Path, text: str, offset: int) -> Location:
    """Translate a character offset into a Location."""
    line_start = text.rfind("\n", 0, offset) + 1
    return Location(
        path=path,
        offset=offset,
        line=text.count("\n", 0, offset) + 1,
        column=offset - line_start + 1,
        byte_column=len(text[line_start:offset].encode("utf-8")) + 1,
    )


def _parse_properties(lines: list[tuple[int, str]], index: int) -> dict[str, str]:
    """Read a :PROPERTIES: drawer starting at lines[index], if there is one."""
    if index >= len(lines) or lines[index][1].strip() != ":PROPERTIES:":
        return {}

    properties = {}
    for _, raw in lines[index + 1 :]:
        stripped = raw.strip()
        if stripped == ":END:":
            return properties
        match = _PROPERTY.match(stripped)
        if match:
            properties[match.group(1).upper()] = match.group(2).strip()
    # Unterminated drawer - not a drawer at all
    return {}


def iter_headings(text: str) -> list[Heading]:
    """
    All headings in document order, with subtree extents filled in.

    A heading's subtree ends where the next heading of the same or a
    higher level starts, or at the end of the text.
    """
    lines = []
    offset = 0
    for match in _LINE.finditer(text):
        raw = match.group()
        lines.append((offset, raw.rstrip("\r\n")))
        offset += len(raw)

    headings = []
    for index, (start, raw) in enumerate(lines):
        match = _HEADING.match(raw)
        if not match:
            continue
        headings.append(
            Heading(
                level=len(match.group(1)),
                title=match.group(2),
                start=start,
                end=len(text),
                properties=_parse_properties(lines, index + 1),
            )
        )

    for i, heading in enumerate(headings):
        for later in headings[i + 1 :]:
            if later.level <= heading.level:
                heading.end = later.start
                break

    return headings


def parse_outline(text: str) -> list[Heading]:
    """Parse the text into a tree of headings. Returns the top-level ones."""
    roots: list[Heading] = []
    stack: list[Heading] = []

    for heading in iter_headings(text):
        while stack and stack[-1].level >= heading.level:
            stack.pop()
        if stack:
            stack[-1].children.append(heading)
        else:
            roots.append(heading)
        stack.append(heading)

    return roots
