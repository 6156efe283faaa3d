"""The in-memory solution item tree."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from typing import Iterator, Union

from slnloader.config import ConfigurationAndPlatform, SolutionFormatVersion, SolutionSection


@dataclass(eq=False)
class SolutionFileItem:
    """A non-project file listed in a folder's SolutionItems section."""
    file_name: str

    @property
    def name(self) -> str:
        return os.path.basename(self.file_name)


@dataclass(eq=False)
class LoadedProject:
    """A project item produced by a project binding."""
    id_guid: uuid.UUID
    type_guid: uuid.UUID
    name: str
    file_name: str
    configuration: ConfigurationAndPlatform | None = None
    status: str = "loaded"  # loaded | missing | unknown
    root_namespace: str = ""
    assembly_name: str = ""
    target_framework: str = ""
    project_references: list[str] = field(default_factory=list)
    package_references: list[tuple[str, str]] = field(default_factory=list)  # (name, version)


@dataclass(eq=False)
class SolutionFolder:
    id_guid: uuid.UUID
    name: str
    items: list[SolutionItem] = field(default_factory=list)


SolutionItem = Union[SolutionFolder, LoadedProject, SolutionFileItem]


class Solution:
    """Root of a loaded solution."""

    def __init__(self, file_name: str = "", directory: str | None = None) -> None:
        self.file_name = os.path.abspath(file_name) if file_name else ""
        if directory is None:
            directory = os.path.dirname(self.file_name) if self.file_name else os.getcwd()
        self.directory = os.path.abspath(directory)
        self.format_version: SolutionFormatVersion | None = None
        self.header_properties: list[tuple[str, str]] = []  # VisualStudioVersion etc.
        self.items: list[SolutionItem] = []
        self.configuration_names: list[str] = []
        self.platform_names: list[str] = []
        self.global_sections: list[SolutionSection] = []
        self.active_configuration: ConfigurationAndPlatform | None = None
        self.is_dirty = False

    @property
    def name(self) -> str:
        return os.path.splitext(os.path.basename(self.file_name))[0] if self.file_name else ""

    def all_items(self) -> Iterator[SolutionItem]:
        """Depth-first walk over every item in the tree."""
        stack = list(reversed(self.items))
        while stack:
            item = stack.pop()
            yield item
            if isinstance(item, SolutionFolder):
                stack.extend(reversed(item.items))

    def projects(self) -> list[LoadedProject]:
        return [i for i in self.all_items() if isinstance(i, LoadedProject)]

    def folders(self) -> list[SolutionFolder]:
        return [i for i in self.all_items() if isinstance(i, SolutionFolder)]

    def find_item(self, id_guid: uuid.UUID) -> SolutionFolder | LoadedProject | None:
        for item in self.all_items():
            if isinstance(item, (SolutionFolder, LoadedProject)) and item.id_guid == id_guid:
                return item
        return None
