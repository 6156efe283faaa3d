"""Readers for the structural blocks of a solution document."""

from __future__ import annotations

import logging
import os
import uuid
from typing import TYPE_CHECKING

from slnloader.config import (
    ProjectLoadInformation,
    SolutionFormatVersion,
    SolutionSection,
    parse_guid_text,
)
from slnloader.errors import SolutionFormatTooOldError, UnknownSolutionVersionError
from slnloader.reader.cursor import LineCursor
from slnloader.reader.matchers import (
    match_entry,
    match_header,
    match_keyword,
    match_project_open,
    match_section_open,
)

if TYPE_CHECKING:
    from slnloader.items.solution import Solution

logger = logging.getLogger(__name__)

_TOO_OLD_VERSIONS = {"7.00", "8.00"}


def read_format_header(cursor: LineCursor) -> SolutionFormatVersion:
    """Validate the format header line and advance past it."""
    header = match_header(cursor.current)
    if header is None:
        raise cursor.error()
    if header.version in _TOO_OLD_VERSIONS:
        raise cursor.error(
            "Cannot load solutions created by old versions of Visual Studio "
            "(format version {0}); upgrade the solution first",
            header.version,
            kind=SolutionFormatTooOldError,
        )
    try:
        version = SolutionFormatVersion(header.version)
    except ValueError:
        raise cursor.error(
            "Unknown solution file version: {0}", header.version,
            kind=UnknownSolutionVersionError,
        ) from None
    cursor.advance()
    return version


def read_section(cursor: LineCursor) -> SolutionSection | None:
    """Read one Global/ProjectSection block, or return None if none starts here."""
    opened = match_section_open(cursor.current)
    if opened is None:
        return None
    cursor.advance()

    section = SolutionSection(opened.name, opened.scope, opened.section_type)
    while True:
        entry = match_entry(cursor.current)
        if entry is None:
            break
        section.add(entry.key, entry.value)
        cursor.advance()

    expected = opened.scope.end_keyword
    if not match_keyword(cursor.current, expected, trim=True):
        raise cursor.error("Expected {0}", expected)
    cursor.advance()
    return section


def parse_guid(cursor: LineCursor, text: str) -> uuid.UUID:
    try:
        return parse_guid_text(text)
    except ValueError:
        raise cursor.error("Invalid GUID: '{0}'", text) from None


def resolve_location(directory: str, location: str) -> str:
    """Combine a solution-relative path with the solution directory."""
    return os.path.normpath(os.path.join(directory, location.replace("\\", "/")))


def read_project_entry(cursor: LineCursor, solution: Solution) -> ProjectLoadInformation | None:
    """Read one Project(...) ... EndProject block, or return None if none starts here."""
    opened = match_project_open(cursor.current)
    if opened is None:
        return None
    line = cursor.line_number
    type_guid = parse_guid(cursor, opened.type_guid)
    id_guid = parse_guid(cursor, opened.id_guid)
    cursor.advance()

    information = ProjectLoadInformation(
        solution=solution,
        type_guid=type_guid,
        id_guid=id_guid,
        title=opened.title,
        location=opened.location,
        file_name=resolve_location(solution.directory, opened.location),
        line=line,
    )
    while True:
        section = read_section(cursor)
        if section is None:
            break
        information.project_sections.append(section)

    if not match_keyword(cursor.current, "EndProject"):
        raise cursor.error("Expected EndProject")
    cursor.advance()
    logger.debug(f"Read project entry '{information.title}' ({information.location})")
    return information


def read_header_properties(cursor: LineCursor) -> list[tuple[str, str]]:
    """Read 'VisualStudioVersion = ...' style lines that may follow the format header."""
    properties = []
    while True:
        entry = match_entry(cursor.current)
        if entry is None or cursor.current.lstrip().startswith("Project("):
            break
        properties.append((entry.key, entry.value))
        cursor.advance()
    return properties
