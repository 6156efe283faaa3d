"""Configuration mapping: SolutionConfigurationPlatforms and ProjectConfigurationPlatforms."""

from __future__ import annotations

import logging
import uuid

from slnloader.config import (
    ConfigurationAndPlatform,
    ProjectLoadInformation,
    SolutionSection,
    distinct_names,
    parse_guid_text,
)

logger = logging.getLogger(__name__)

_ACTIVE_CFG = ".activecfg"
_BUILD_0 = ".build.0"


def load_solution_configurations(section: SolutionSection) -> list[ConfigurationAndPlatform]:
    """Entries look like 'Debug|Any CPU = Debug|Any CPU'; the key is what counts."""
    configurations = []
    for key, _ in section:
        config = ConfigurationAndPlatform.from_key(key)
        if config is None:
            logger.debug(f"Skipping solution configuration '{key}'")
            continue
        configurations.append(config)
    return configurations


def configuration_and_platform_names(
    configurations: list[ConfigurationAndPlatform],
) -> tuple[list[str], list[str]]:
    """Distinct configuration names and platform names, case-insensitively, first-seen order."""
    return (
        distinct_names([c.configuration for c in configurations]),
        distinct_names([c.platform for c in configurations]),
    )


def parse_project_configuration_key(key: str) -> tuple[uuid.UUID, ConfigurationAndPlatform] | None:
    """Split '{GUID}.Debug|Any CPU.ActiveCfg' into the project GUID and solution configuration."""
    first_dot = key.find(".")
    if first_dot < 0:
        return None
    second_dot = key.find(".", first_dot + 1)
    if second_dot < 0:
        return None
    try:
        guid = parse_guid_text(key[:first_dot])
    except ValueError:
        return None
    config = ConfigurationAndPlatform.from_key(key[first_dot + 1:second_dot])
    if config is None:
        return None
    return guid, config


def _resolve(
    key: str, project_info: dict[uuid.UUID, ProjectLoadInformation]
) -> tuple[ProjectLoadInformation, ConfigurationAndPlatform] | None:
    parsed = parse_project_configuration_key(key)
    if parsed is None:
        logger.debug(f"Skipping malformed project configuration key '{key}'")
        return None
    guid, solution_config = parsed
    information = project_info.get(guid)
    if information is None:
        logger.debug(f"Skipping project configuration for unknown project {guid}")
        return None
    return information, solution_config


def load_project_configurations(
    section: SolutionSection, project_info: dict[uuid.UUID, ProjectLoadInformation]
) -> None:
    """Fill each project's ConfigurationMapping from a ProjectConfigurationPlatforms section.

    '.ActiveCfg' entries create the mapping with build disabled; a later pass
    over '.Build.0' entries enables the build. The passes must stay in this
    order, since a '.Build.0' line may come before its '.ActiveCfg' line.
    """
    for key, value in section:
        if not key.lower().endswith(_ACTIVE_CFG):
            continue
        resolved = _resolve(key, project_info)
        if resolved is None:
            continue
        information, solution_config = resolved
        project_config = ConfigurationAndPlatform.from_key(value)
        if project_config is None:
            logger.debug(f"Skipping unparseable project configuration '{value}'")
            continue
        information.configuration_mapping.set_project_configuration(solution_config, project_config)
        information.configuration_mapping.set_build_enabled(solution_config, False)

    for key, _ in section:
        if not key.lower().endswith(_BUILD_0):
            continue
        resolved = _resolve(key, project_info)
        if resolved is None:
            continue
        information, solution_config = resolved
        information.configuration_mapping.set_build_enabled(solution_config, True)
