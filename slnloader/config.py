"""Core data types and configuration for solution loading."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from slnloader.items.mapping import ConfigurationMapping
    from slnloader.items.solution import Solution
    from slnloader.progress import ProgressMonitor


class SolutionFormatVersion(str, Enum):
    VS2005 = "9.00"
    VS2008 = "10.00"
    VS2010 = "11.00"
    VS2012 = "12.00"


class SectionScope(str, Enum):
    GLOBAL = "Global"
    PROJECT = "Project"

    @property
    def end_keyword(self) -> str:
        return f"End{self.value}Section"


class ProjectTypeGuids:
    """Well-known project type GUIDs."""
    SOLUTION_FOLDER = uuid.UUID("2150E333-8FDC-42A3-9474-1A3956D46DE8")
    CSHARP = uuid.UUID("FAE04EC0-301F-11D3-BF4B-00C04F79EFBC")
    CSHARP_SDK = uuid.UUID("9A19103F-16F7-4668-BE54-9A1E7A4F7556")
    VBNET = uuid.UUID("F184B08F-C81C-45F6-A57F-5ABD9991F28F")
    VBNET_SDK = uuid.UUID("778DAE3C-4631-46EA-AA77-85C1314464D9")
    CPP = uuid.UUID("8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942")
    FSHARP = uuid.UUID("F2A71F9B-5D33-465A-A702-920D77279786")
    FSHARP_SDK = uuid.UUID("6EC3EE1D-3C4E-46DD-8F32-0CC8E7565705")


def format_guid(value: uuid.UUID) -> str:
    """Render a GUID the way solution files write it: braced, upper case."""
    return "{" + str(value).upper() + "}"


_HEX = "[0-9a-fA-F]"
_DASHED = f"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
_GUID_RE = re.compile(rf"^(?:{_HEX}{{32}}|{_DASHED}|\{{{_DASHED}\}}|\({_DASHED}\))$")


def parse_guid_text(text: str) -> uuid.UUID:
    """Parse GUID text in one of the forms solution files use.

    Accepts 32 hex digits, or the dashed 8-4-4-4-12 form either bare or
    wrapped in a single pair of braces or parentheses. Anything else raises
    ValueError.
    """
    if not _GUID_RE.fullmatch(text):
        raise ValueError(f"Malformed GUID: {text!r}")
    return uuid.UUID(text.strip("{}()"))


@dataclass(frozen=True, eq=False)
class ConfigurationAndPlatform:
    """A (configuration, platform) pair such as ("Debug", "Any CPU").

    Comparison ignores case.
    """
    configuration: str
    platform: str

    @classmethod
    def from_key(cls, key: str) -> ConfigurationAndPlatform | None:
        """Parse a 'Name|Platform' token. Returns None if there is no '|'."""
        pos = key.rfind("|")
        if pos < 0:
            return None
        return cls(key[:pos], key[pos + 1:])

    def _folded(self) -> tuple[str, str]:
        return (self.configuration.casefold(), self.platform.casefold())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationAndPlatform):
            return NotImplemented
        return self._folded() == other._folded()

    def __hash__(self) -> int:
        return hash(self._folded())

    def __str__(self) -> str:
        return f"{self.configuration}|{self.platform}"


def distinct_names(names: list[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for name in names:
        folded = name.casefold()
        if folded not in seen:
            seen.add(folded)
            result.append(name)
    return result


@dataclass
class SolutionSection:
    """A named, ordered key/value multimap. Duplicate keys are preserved."""
    name: str
    scope: SectionScope
    section_type: str
    entries: list[tuple[str, str]] = field(default_factory=list)

    def add(self, key: str, value: str) -> None:
        self.entries.append((key, value))

    def get(self, key: str, default: str | None = None) -> str | None:
        for k, v in self.entries:
            if k == key:
                return v
        return default

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries]

    def values(self) -> list[str]:
        return [v for _, v in self.entries]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _new_mapping() -> ConfigurationMapping:
    from slnloader.items.mapping import ConfigurationMapping

    return ConfigurationMapping()


@dataclass(eq=False)
class ProjectLoadInformation:
    """Everything read from one Project(...) block."""
    solution: Solution
    type_guid: uuid.UUID
    id_guid: uuid.UUID
    title: str
    location: str
    file_name: str
    line: int = 0
    project_sections: list[SolutionSection] = field(default_factory=list)
    configuration_mapping: ConfigurationMapping = field(default_factory=_new_mapping)
    project_configuration: ConfigurationAndPlatform | None = None
    progress_monitor: ProgressMonitor | None = None

    @property
    def is_solution_folder(self) -> bool:
        return self.type_guid == ProjectTypeGuids.SOLUTION_FOLDER

    def find_section(self, name: str) -> SolutionSection | None:
        return next((s for s in self.project_sections if s.name == name), None)


@dataclass
class LoaderConfig:
    encoding: str = "utf-8-sig"
    active_configuration: str | None = None  # 'Name|Platform'
    bindings: list[Any] = field(default_factory=list)
    preferences: Any = None
    verbose: bool = False
    quiet: bool = False
