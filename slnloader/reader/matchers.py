"""Line classifiers for the solution grammar.

Each matcher inspects a single line and returns a small record on success or
None when the line is something else, so callers can try one shape and fall
through to the next.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from slnloader.config import SectionScope

# Microsoft Visual Studio Solution File, Format Version 12.00
_HEADER_RE = re.compile(
    r"^Microsoft Visual Studio Solution File, Format Version\s+(?P<version>[\d.]+)\s*$"
)

# GlobalSection(SolutionConfigurationPlatforms) = preSolution
_SECTION_RE = re.compile(
    r"^\s*(?P<scope>Global|Project)Section\((?P<name>.*)\)\s*=\s*(?P<type>.*?)\s*$"
)

# Project("{TYPE-GUID}") = "Name", "Path\To\Project.csproj", "{PROJECT-GUID}"
_PROJECT_RE = re.compile(
    r'^\s*Project\("(?P<type>.*)"\)\s+=\s+"(?P<title>.*)",\s*"(?P<location>.*)",\s*"(?P<id>.*)"\s*$'
)


@dataclass(frozen=True)
class FormatHeader:
    version: str


@dataclass(frozen=True)
class SectionOpen:
    scope: SectionScope
    name: str
    section_type: str


@dataclass(frozen=True)
class ProjectOpen:
    type_guid: str
    title: str
    location: str
    id_guid: str


@dataclass(frozen=True)
class Entry:
    key: str
    value: str


def match_header(line: str | None) -> FormatHeader | None:
    if line is None:
        return None
    m = _HEADER_RE.match(line)
    return FormatHeader(m.group("version")) if m else None


def match_section_open(line: str | None) -> SectionOpen | None:
    if line is None:
        return None
    m = _SECTION_RE.match(line)
    if not m:
        return None
    return SectionOpen(
        scope=SectionScope(m.group("scope")),
        name=m.group("name"),
        section_type=m.group("type"),
    )


def match_project_open(line: str | None) -> ProjectOpen | None:
    if line is None:
        return None
    m = _PROJECT_RE.match(line)
    if not m:
        return None
    return ProjectOpen(
        type_guid=m.group("type"),
        title=m.group("title"),
        location=m.group("location"),
        id_guid=m.group("id"),
    )


def match_entry(line: str | None) -> Entry | None:
    """Split 'key = value' on the first '='."""
    if line is None:
        return None
    pos = line.find("=")
    if pos < 0:
        return None
    return Entry(line[:pos].strip(), line[pos + 1:].strip())


def match_keyword(line: str | None, keyword: str, *, trim: bool = False) -> bool:
    """True if the line is exactly the keyword (optionally ignoring surrounding whitespace)."""
    if line is None:
        return False
    return (line.strip() if trim else line) == keyword
