"""Project bindings - turn a ProjectLoadInformation into a solution item."""

from __future__ import annotations

import logging
import os
import uuid
from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

from slnloader.config import ProjectLoadInformation, ProjectTypeGuids
from slnloader.dotnet.project import parse_project
from slnloader.items.solution import LoadedProject

if TYPE_CHECKING:
    from slnloader.items.solution import SolutionItem

logger = logging.getLogger(__name__)


@runtime_checkable
class ProjectBinding(Protocol):
    """Protocol that all project bindings must implement."""

    type_guids: list[uuid.UUID]

    def load_project(self, information: ProjectLoadInformation) -> SolutionItem:
        """Load the project described by `information`."""
        ...


def _project_record(information: ProjectLoadInformation, status: str) -> LoadedProject:
    return LoadedProject(
        id_guid=information.id_guid,
        type_guid=information.type_guid,
        name=information.title,
        file_name=information.file_name,
        configuration=information.project_configuration,
        status=status,
    )


class MSBuildProjectBinding:
    """Loads MSBuild-based projects by reading their project file."""

    type_guids = [
        ProjectTypeGuids.CSHARP,
        ProjectTypeGuids.CSHARP_SDK,
        ProjectTypeGuids.VBNET,
        ProjectTypeGuids.VBNET_SDK,
        ProjectTypeGuids.FSHARP,
        ProjectTypeGuids.FSHARP_SDK,
        ProjectTypeGuids.CPP,
    ]

    def load_project(self, information: ProjectLoadInformation) -> LoadedProject:
        if not os.path.isfile(information.file_name):
            logger.warning(f"Project file not found: {information.file_name}")
            return _project_record(information, "missing")

        info = parse_project(information.file_name)
        project = _project_record(information, "loaded")
        project.root_namespace = info.root_namespace
        project.assembly_name = info.assembly_name
        project.target_framework = info.target_framework
        project.project_references = list(info.project_references)
        project.package_references = list(info.package_references)
        return project


class UnknownProjectBinding:
    """Fallback for project types no binding claims."""

    type_guids: list[uuid.UUID] = []

    def load_project(self, information: ProjectLoadInformation) -> LoadedProject:
        logger.warning(
            f"No binding for project type {information.type_guid} ({information.title})"
        )
        return _project_record(information, "unknown")


_REGISTRY: dict[uuid.UUID, ProjectBinding] = {}
_FALLBACK = UnknownProjectBinding()
_INITIALISED = False


def _init_registry() -> None:
    global _INITIALISED
    if _INITIALISED:
        return

    for binding in [MSBuildProjectBinding()]:
        for type_guid in binding.type_guids:
            _REGISTRY[type_guid] = binding

    _INITIALISED = True


def register_binding(binding: ProjectBinding) -> None:
    """Register (or replace) the binding for each of its project type GUIDs."""
    _init_registry()
    for type_guid in binding.type_guids:
        _REGISTRY[type_guid] = binding


def get_binding(
    type_guid: uuid.UUID, overrides: Iterable[ProjectBinding] = ()
) -> ProjectBinding:
    """Find the binding for a project type; overrides win over the registry."""
    for binding in overrides:
        if type_guid in binding.type_guids:
            return binding
    _init_registry()
    return _REGISTRY.get(type_guid, _FALLBACK)


def load_project(
    information: ProjectLoadInformation, overrides: Iterable[ProjectBinding] = ()
) -> SolutionItem:
    """Load a project through its binding. Binding errors propagate unchanged."""
    return get_binding(information.type_guid, overrides).load_project(information)
