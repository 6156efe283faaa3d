"""Phase 2: Load projects and assemble the solution item tree."""

from __future__ import annotations

import logging
from typing import Iterable

from slnloader.dotnet.bindings import ProjectBinding, load_project
from slnloader.items.solution import Solution, SolutionItem
from slnloader.phases.structure import StructureResult
from slnloader.progress import ProgressMonitor

logger = logging.getLogger(__name__)


def run_materialise_phase(
    structure: StructureResult,
    solution: Solution,
    progress: ProgressMonitor,
    bindings: Iterable[ProjectBinding] = (),
) -> None:
    """Load every project in document order and attach items to their parents.

    Each project gets an equal share of the progress range regardless of
    how long its binding takes.
    """
    bindings = list(bindings)
    projects_loaded = 0

    for information in structure.entries:
        item: SolutionItem
        if information.is_solution_folder:
            item = structure.folders[information.id_guid]
        else:
            information.project_configuration = (
                information.configuration_mapping.get_project_configuration(
                    solution.active_configuration
                )
            )
            progress.task_name = f"Loading {information.title}"
            with progress.create_sub_task(1.0 / structure.project_count) as sub_task:
                information.progress_monitor = sub_task
                item = load_project(information, bindings)
            projects_loaded += 1
            progress.progress = projects_loaded / structure.project_count

        parent = structure.nesting.get(information.id_guid)
        if parent is not None:
            parent.items.append(item)
        else:
            solution.items.append(item)

    _warn_nesting_cycles(structure)
    solution.is_dirty = structure.repaired_ids


def _warn_nesting_cycles(structure: StructureResult) -> None:
    """Log folders that end up as their own ancestor and so never reach the root."""
    for folder_id, folder in structure.folders.items():
        seen = {folder_id}
        current = structure.nesting.get(folder_id)
        while current is not None:
            if current.id_guid == folder_id:
                logger.warning(
                    f"Solution folder '{folder.name}' is nested inside itself; "
                    f"it and its items are unreachable from the solution root"
                )
                break
            if current.id_guid in seen:
                break
            seen.add(current.id_guid)
            current = structure.nesting.get(current.id_guid)
