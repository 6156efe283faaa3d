"""Explicit build dependencies declared in ProjectDependencies sections."""

from __future__ import annotations

import logging
import uuid

import networkx as nx

from slnloader.config import ProjectLoadInformation, parse_guid_text
from slnloader.errors import DependencyCycleError
from slnloader.items.solution import LoadedProject, Solution

logger = logging.getLogger(__name__)

DEPENDENCIES_SECTION = "ProjectDependencies"


def _parse_guid(text: str) -> uuid.UUID | None:
    try:
        return parse_guid_text(text)
    except ValueError:
        return None


def dependency_graph(entries: list[ProjectLoadInformation]) -> nx.DiGraph:
    """Build a DiGraph with an edge dependency -> dependent for every declared dependency.

    Solution folders are not nodes; references to unknown projects are dropped.
    """
    graph = nx.DiGraph()
    known = {e.id_guid for e in entries if not e.is_solution_folder}
    for entry in entries:
        if entry.is_solution_folder:
            continue
        graph.add_node(entry.id_guid, name=entry.title)

    for entry in entries:
        if entry.is_solution_folder:
            continue
        section = entry.find_section(DEPENDENCIES_SECTION)
        if section is None:
            continue
        for key, _ in section:
            dep = _parse_guid(key)
            if dep is None or dep not in known:
                logger.debug(f"Ignoring dependency '{key}' of {entry.title}")
                continue
            graph.add_edge(dep, entry.id_guid)
    return graph


def build_order(entries: list[ProjectLoadInformation], solution: Solution) -> list[LoadedProject]:
    """Return the solution's projects ordered dependencies-first.

    Ties keep the order in which projects appear in the document.
    """
    graph = dependency_graph(entries)
    position = {e.id_guid: i for i, e in enumerate(entries)}
    try:
        ordered = list(nx.lexicographical_topological_sort(graph, key=position.__getitem__))
    except nx.NetworkXUnfeasible:
        cycle = nx.find_cycle(graph)
        names = " -> ".join(graph.nodes[u]["name"] for u, _ in cycle)
        raise DependencyCycleError(
            f"Project dependencies form a cycle: {names}", file_name=solution.file_name
        ) from None

    projects = {p.id_guid: p for p in solution.projects()}
    return [projects[guid] for guid in ordered if guid in projects]
