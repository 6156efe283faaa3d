"""Tests for configuration parsing and per-project configuration mapping."""

from __future__ import annotations

import uuid

from slnloader.config import (
    ConfigurationAndPlatform,
    ProjectLoadInformation,
    ProjectTypeGuids,
    SectionScope,
    SolutionSection,
)
from slnloader.items.mapping import ConfigurationMapping
from slnloader.items.solution import Solution
from slnloader.phases.configurations import (
    configuration_and_platform_names,
    load_project_configurations,
    load_solution_configurations,
    parse_project_configuration_key,
)

G = uuid.UUID("35CEF10F-2D4C-45F2-9DD1-161E0FEC583C")
KEY = "{35CEF10F-2D4C-45F2-9DD1-161E0FEC583C}"
DEBUG = ConfigurationAndPlatform("Debug", "Any CPU")
RELEASE = ConfigurationAndPlatform("Release", "Any CPU")


def _section(name: str, *entries: tuple[str, str]) -> SolutionSection:
    section = SolutionSection(name, SectionScope.GLOBAL, "postSolution")
    for key, value in entries:
        section.add(key, value)
    return section


def _project_info(guid: uuid.UUID = G) -> dict[uuid.UUID, ProjectLoadInformation]:
    info = ProjectLoadInformation(
        solution=Solution(directory="/"),
        type_guid=ProjectTypeGuids.CSHARP,
        id_guid=guid,
        title="App",
        location="App.csproj",
        file_name="/App.csproj",
    )
    return {guid: info}


class TestConfigurationAndPlatform:
    def test_from_key(self):
        config = ConfigurationAndPlatform.from_key("Debug|Any CPU")
        assert config.configuration == "Debug"
        assert config.platform == "Any CPU"
        assert str(config) == "Debug|Any CPU"

    def test_splits_on_last_pipe(self):
        config = ConfigurationAndPlatform.from_key("Odd|Name|x64")
        assert config.configuration == "Odd|Name"
        assert config.platform == "x64"

    def test_unparseable(self):
        assert ConfigurationAndPlatform.from_key("Debug") is None

    def test_case_insensitive_equality(self):
        a = ConfigurationAndPlatform("Debug", "Any CPU")
        b = ConfigurationAndPlatform("DEBUG", "any cpu")
        assert a == b
        assert hash(a) == hash(b)
        assert a != RELEASE

    def test_distinct_names(self):
        section = _section(
            "SolutionConfigurationPlatforms",
            ("Debug|Any CPU", "Debug|Any CPU"),
            ("debug|x64", "debug|x64"),
            ("Release|ANY CPU", "Release|ANY CPU"),
            ("broken", "broken"),
        )
        configurations = load_solution_configurations(section)
        assert len(configurations) == 3
        names, platforms = configuration_and_platform_names(configurations)
        assert names == ["Debug", "Release"]
        assert platforms == ["Any CPU", "x64"]


class TestConfigurationMapping:
    def test_set_and_get(self):
        mapping = ConfigurationMapping()
        mapping.set_project_configuration(DEBUG, RELEASE)
        assert DEBUG in mapping
        assert mapping.get(DEBUG).configuration == RELEASE
        assert mapping.get_project_configuration(DEBUG) == RELEASE

    def test_unmapped_falls_back_to_solution_configuration(self):
        mapping = ConfigurationMapping()
        assert mapping.get(DEBUG) is None
        assert mapping.get_project_configuration(DEBUG) == DEBUG
        assert mapping.get_project_configuration(None) is None
        assert not mapping.is_build_enabled(DEBUG)

    def test_build_flag_requires_entry(self):
        mapping = ConfigurationMapping()
        assert not mapping.set_build_enabled(DEBUG, True)
        assert len(mapping) == 0


class TestProjectConfigurationKey:
    def test_parse(self):
        guid, config = parse_project_configuration_key(f"{KEY}.Debug|Any CPU.ActiveCfg")
        assert guid == G
        assert config == DEBUG

    def test_bad_guid(self):
        assert parse_project_configuration_key("{nope}.Debug|Any CPU.ActiveCfg") is None
        assert parse_project_configuration_key(f"{{{KEY}}}.Debug|Any CPU.ActiveCfg") is None

    def test_missing_dots(self):
        assert parse_project_configuration_key(f"{KEY}.ActiveCfg") is None

    def test_unparseable_configuration(self):
        assert parse_project_configuration_key(f"{KEY}.Debug.ActiveCfg") is None


class TestLoadProjectConfigurations:
    def test_active_and_build_enables_build(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|Any CPU.ActiveCfg", "Debug|Any CPU"),
            (f"{KEY}.Debug|Any CPU.Build.0", "Debug|Any CPU"),
        ), info)
        entry = info[G].configuration_mapping.get(DEBUG)
        assert entry.configuration == DEBUG
        assert entry.build_enabled is True

    def test_active_only_disables_build(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|Any CPU.ActiveCfg", "Debug|Any CPU"),
        ), info)
        assert info[G].configuration_mapping.get(DEBUG).build_enabled is False

    def test_no_entries_means_no_mapping(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Release|Any CPU.ActiveCfg", "Release|Any CPU"),
        ), info)
        assert DEBUG not in info[G].configuration_mapping

    def test_build_without_active_cfg_is_ignored(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|Any CPU.Build.0", "Debug|Any CPU"),
        ), info)
        assert DEBUG not in info[G].configuration_mapping

    def test_build_before_active_cfg_still_enables(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|Any CPU.Build.0", "Debug|Any CPU"),
            (f"{KEY}.Debug|Any CPU.ActiveCfg", "Debug|Any CPU"),
        ), info)
        assert info[G].configuration_mapping.is_build_enabled(DEBUG)

    def test_suffixes_are_case_insensitive(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|Any CPU.activecfg", "Debug|Any CPU"),
            (f"{KEY}.Debug|Any CPU.BUILD.0", "Debug|Any CPU"),
        ), info)
        assert info[G].configuration_mapping.is_build_enabled(DEBUG)

    def test_maps_to_different_project_configuration(self):
        info = _project_info()
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{KEY}.Debug|x64.ActiveCfg", "Debug|Any CPU"),
        ), info)
        x64 = ConfigurationAndPlatform("Debug", "x64")
        assert info[G].configuration_mapping.get_project_configuration(x64) == DEBUG

    def test_unknown_project_and_bad_values_are_skipped(self):
        info = _project_info()
        other = "{99999999-9999-9999-9999-999999999999}"
        load_project_configurations(_section(
            "ProjectConfigurationPlatforms",
            (f"{other}.Debug|Any CPU.ActiveCfg", "Debug|Any CPU"),
            (f"{KEY}.Debug|Any CPU.ActiveCfg", "NoPipe"),
            (f"{KEY}.Release|Any CPU.Deploy.0", "Release|Any CPU"),
        ), info)
        assert len(info[G].configuration_mapping) == 0
