"""Per-project mapping from solution configuration to project configuration."""

from __future__ import annotations

from dataclasses import dataclass

from slnloader.config import ConfigurationAndPlatform


@dataclass
class MappingEntry:
    configuration: ConfigurationAndPlatform
    build_enabled: bool = False


class ConfigurationMapping:
    """solution ConfigurationAndPlatform -> (project ConfigurationAndPlatform, build flag).

    A solution configuration without an entry means the project does not
    take part in it.
    """

    def __init__(self) -> None:
        self._entries: dict[ConfigurationAndPlatform, MappingEntry] = {}

    def set_project_configuration(
        self, solution_config: ConfigurationAndPlatform, project_config: ConfigurationAndPlatform
    ) -> None:
        entry = self._entries.get(solution_config)
        if entry is None:
            self._entries[solution_config] = MappingEntry(project_config)
        else:
            entry.configuration = project_config

    def set_build_enabled(self, solution_config: ConfigurationAndPlatform, enabled: bool) -> bool:
        """Set the build flag of an existing entry. Returns False if there is none."""
        entry = self._entries.get(solution_config)
        if entry is None:
            return False
        entry.build_enabled = enabled
        return True

    def get(self, solution_config: ConfigurationAndPlatform) -> MappingEntry | None:
        return self._entries.get(solution_config)

    def get_project_configuration(
        self, solution_config: ConfigurationAndPlatform | None
    ) -> ConfigurationAndPlatform | None:
        """Project configuration for a solution configuration.

        Unmapped configurations fall back to the solution configuration itself.
        """
        if solution_config is None:
            return None
        entry = self._entries.get(solution_config)
        return entry.configuration if entry else solution_config

    def is_build_enabled(self, solution_config: ConfigurationAndPlatform) -> bool:
        entry = self._entries.get(solution_config)
        return entry.build_enabled if entry else False

    def items(self) -> list[tuple[ConfigurationAndPlatform, MappingEntry]]:
        return list(self._entries.items())

    def __contains__(self, solution_config: object) -> bool:
        return solution_config in self._entries

    def __len__(self) -> int:
        return len(self._entries)
