"""Read MSBuild metadata from .csproj/.vbproj/.fsproj/.vcxproj files."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class MSBuildProjectInfo:
    """Properties and references read from a project file."""
    path: str
    root_namespace: str = ""
    assembly_name: str = ""
    target_framework: str = ""
    project_references: list[str] = field(default_factory=list)
    package_references: list[tuple[str, str]] = field(default_factory=list)  # (name, version)


def _first_text(parent: ET.Element, tag: str) -> str:
    elem = parent.find(tag)
    if elem is not None and elem.text:
        return elem.text.strip()
    return ""


def parse_project(project_path: str) -> MSBuildProjectInfo:
    """Parse an MSBuild project file for MSBuildProjectBinding.

    This is the default reader behind the shipped binding; callers with a
    real project system register their own binding instead. Handles both
    SDK-style and legacy (namespaced) project formats. An unreadable or
    malformed file yields an info record holding only the defaults derived
    from the file name.
    """
    info = MSBuildProjectInfo(path=project_path)

    try:
        root = ET.parse(project_path).getroot()
    except (ET.ParseError, OSError) as e:
        logger.warning(f"Failed to read project file {project_path}: {e}")
        root = None

    if root is not None:
        # Legacy projects carry the MSBuild XML namespace on every tag
        ns = ""
        if root.tag.startswith("{"):
            ns = root.tag.split("}")[0] + "}"

        for pg in root.iter(f"{ns}PropertyGroup"):
            info.root_namespace = _first_text(pg, f"{ns}RootNamespace") or info.root_namespace
            info.assembly_name = _first_text(pg, f"{ns}AssemblyName") or info.assembly_name
            info.target_framework = _first_text(pg, f"{ns}TargetFramework") or info.target_framework
            frameworks = _first_text(pg, f"{ns}TargetFrameworks")
            if frameworks and not info.target_framework:
                info.target_framework = frameworks.split(";")[0]

        for pr in root.iter(f"{ns}ProjectReference"):
            include = pr.get("Include", "")
            if include:
                info.project_references.append(include.replace("\\", "/"))

        for pkg in root.iter(f"{ns}PackageReference"):
            name = pkg.get("Include", "")
            version = pkg.get("Version", "") or _first_text(pkg, f"{ns}Version")
            if name:
                info.package_references.append((name, version))

    project_name = os.path.splitext(os.path.basename(project_path))[0]
    if not info.root_namespace:
        info.root_namespace = project_name
    if not info.assembly_name:
        info.assembly_name = project_name

    return info
