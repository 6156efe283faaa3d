"""Phase 1: Structural pass over project entries and the Global block."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from slnloader.config import ProjectLoadInformation, distinct_names, format_guid
from slnloader.items.solution import Solution, SolutionFileItem, SolutionFolder
from slnloader.phases.configurations import (
    configuration_and_platform_names,
    load_project_configurations,
    load_solution_configurations,
)
from slnloader.phases.nesting import load_nesting
from slnloader.reader.cursor import LineCursor
from slnloader.reader.matchers import match_keyword
from slnloader.reader.sections import (
    read_format_header,
    read_header_properties,
    read_project_entry,
    read_section,
    resolve_location,
)

logger = logging.getLogger(__name__)

SOLUTION_ITEMS_SECTION = "SolutionItems"


@dataclass
class StructureResult:
    """Everything phase 1 learns about the document, indexed by GUID."""
    entries: list[ProjectLoadInformation] = field(default_factory=list)
    project_info: dict[uuid.UUID, ProjectLoadInformation] = field(default_factory=dict)
    folders: dict[uuid.UUID, SolutionFolder] = field(default_factory=dict)
    nesting: dict[uuid.UUID, SolutionFolder] = field(default_factory=dict)
    project_count: int = 0
    repaired_ids: bool = False


def create_solution_folder(information: ProjectLoadInformation) -> SolutionFolder:
    """Create a folder and its file items from a solution-folder project entry."""
    folder = SolutionFolder(id_guid=information.id_guid, name=information.title)
    section = information.find_section(SOLUTION_ITEMS_SECTION)
    if section is not None:
        for location in section.values():
            folder.items.append(SolutionFileItem(
                file_name=resolve_location(information.solution.directory, location),
            ))
    return folder


def _read_entries(cursor: LineCursor, solution: Solution, result: StructureResult) -> None:
    while True:
        information = read_project_entry(cursor, solution)
        if information is None:
            break
        result.entries.append(information)

        if information.id_guid in result.project_info:
            original = information.id_guid
            information.id_guid = uuid.uuid4()
            result.repaired_ids = True
            logger.warning(
                f"Duplicate project GUID {format_guid(original)} for '{information.title}' "
                f"(line {information.line}); reassigned {format_guid(information.id_guid)}"
            )
        result.project_info[information.id_guid] = information

        if information.is_solution_folder:
            result.folders[information.id_guid] = create_solution_folder(information)
        else:
            result.project_count += 1


def _read_global(cursor: LineCursor, solution: Solution, result: StructureResult) -> None:
    if not match_keyword(cursor.current, "Global"):
        raise cursor.error("Expected Global")
    cursor.advance()

    while True:
        section = read_section(cursor)
        if section is None:
            break
        if section.name == "SolutionConfigurationPlatforms":
            configurations = load_solution_configurations(section)
            names, platforms = configuration_and_platform_names(configurations)
            solution.configuration_names = distinct_names(solution.configuration_names + names)
            solution.platform_names = distinct_names(solution.platform_names + platforms)
        elif section.name == "ProjectConfigurationPlatforms":
            load_project_configurations(section, result.project_info)
        elif section.name == "NestedProjects":
            result.nesting.update(load_nesting(section, result.folders))
        else:
            solution.global_sections.append(section)

    if not match_keyword(cursor.current, "EndGlobal"):
        raise cursor.error("Expected EndGlobal")
    cursor.advance()
    if not cursor.at_end:
        raise cursor.error("Unexpected content after EndGlobal")


def run_structure_phase(cursor: LineCursor, solution: Solution) -> StructureResult:
    """Read the whole document, leaving cross references resolved but no project loaded."""
    result = StructureResult()
    solution.format_version = read_format_header(cursor)
    solution.header_properties = read_header_properties(cursor)
    _read_entries(cursor, solution, result)
    _read_global(cursor, solution, result)
    logger.debug(
        f"Read {len(result.entries)} entries ({result.project_count} projects, "
        f"{len(result.folders)} folders)"
    )
    return result
