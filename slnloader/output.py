"""JSON serialisation of a loaded solution."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from slnloader.config import format_guid
from slnloader.items.solution import LoadedProject, SolutionFileItem, SolutionFolder, SolutionItem
from slnloader.loader import LoadResult


def _item_to_dict(item: SolutionItem) -> dict[str, Any]:
    if isinstance(item, SolutionFolder):
        return {
            "kind": "folder",
            "id": format_guid(item.id_guid),
            "name": item.name,
            "items": [_item_to_dict(child) for child in item.items],
        }
    if isinstance(item, SolutionFileItem):
        return {"kind": "file", "path": item.file_name}
    if isinstance(item, LoadedProject):
        return {
            "kind": "project",
            "id": format_guid(item.id_guid),
            "type": format_guid(item.type_guid),
            "name": item.name,
            "path": item.file_name,
            "status": item.status,
            "configuration": str(item.configuration) if item.configuration else None,
            "assembly_name": item.assembly_name,
            "root_namespace": item.root_namespace,
            "target_framework": item.target_framework,
            "project_references": item.project_references,
            "package_references": [
                {"name": name, "version": version} for name, version in item.package_references
            ],
        }
    raise TypeError(f"Unsupported solution item: {item!r}")


def _configurations(result: LoadResult) -> list[dict[str, Any]]:
    rows = []
    for information in result.entries:
        if information.is_solution_folder:
            continue
        for solution_config, entry in information.configuration_mapping.items():
            rows.append({
                "project": format_guid(information.id_guid),
                "solution_configuration": str(solution_config),
                "project_configuration": str(entry.configuration),
                "build": entry.build_enabled,
            })
    return rows


def build_result(result: LoadResult) -> dict[str, Any]:
    """Build a JSON-ready dict from a LoadResult."""
    solution = result.solution
    return {
        "version": "1.0",
        "metadata": {
            "solution_name": solution.name,
            "solution_path": solution.file_name,
            "format_version": solution.format_version.value if solution.format_version else None,
            "header_properties": dict(solution.header_properties),
            "loaded_at": datetime.now(timezone.utc).isoformat(),
            "phase_timings": result.phase_timings,
        },
        "stats": {
            "projects": result.project_count,
            "folders": len(solution.folders()),
            "global_sections": len(solution.global_sections),
            "repaired_ids": result.repaired_ids,
        },
        "active_configuration": (
            str(solution.active_configuration) if solution.active_configuration else None
        ),
        "configurations": solution.configuration_names,
        "platforms": solution.platform_names,
        "configuration_mappings": _configurations(result),
        "items": [_item_to_dict(item) for item in solution.items],
        "global_sections": [
            {
                "name": section.name,
                "type": section.section_type,
                "entries": [[key, value] for key, value in section],
            }
            for section in solution.global_sections
        ],
    }


def write_output(data: dict[str, Any], output_path: str) -> None:
    """Write the result dict to a JSON file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)
