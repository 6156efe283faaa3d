"""Folder nesting: NestedProjects section -> child GUID to parent folder."""

from __future__ import annotations

import logging
import uuid

from slnloader.config import SolutionSection, parse_guid_text
from slnloader.items.solution import SolutionFolder

logger = logging.getLogger(__name__)


def load_nesting(
    section: SolutionSection, folders: dict[uuid.UUID, SolutionFolder]
) -> dict[uuid.UUID, SolutionFolder]:
    """Map each nested item's GUID to its parent folder.

    Entries whose parent is not a known solution folder are dropped; those
    items end up at the top level of the solution.
    """
    result: dict[uuid.UUID, SolutionFolder] = {}
    for key, value in section:
        try:
            child = parse_guid_text(key)
            parent = parse_guid_text(value)
        except ValueError:
            logger.debug(f"Skipping malformed nesting entry '{key} = {value}'")
            continue
        folder = folders.get(parent)
        if folder is None:
            logger.debug(f"Nesting parent {parent} of {child} is not a solution folder")
            continue
        result[child] = folder
    return result
