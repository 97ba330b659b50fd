"""Plan Loader - Reads planned resources from `terraform show -json` output."""
import json
from pathlib import Path
from typing import Any, Iterator

from incapsula_manager.domain.entities import PlannedResource
from incapsula_manager.domain.exceptions import DecodeError


def _walk_module(module: dict) -> Iterator[PlannedResource]:
    for resource in module.get("resources") or []:
        yield PlannedResource(
            address=resource.get("address") or f"{resource.get('type')}.{resource.get('name')}",
            resource_type=resource.get("type") or "",
            values=resource.get("values") or {},
        )
    for child in module.get("child_modules") or []:
        yield from _walk_module(child)


def parse_plan(plan: dict[str, Any]) -> list[PlannedResource] | None:
    """
    Extract the planned resource configurations of a JSON plan.

    Args:
        plan: Decoded plan document

    Returns:
        Planned resources from the root module and all child modules, or
        None when the document has no planned values
    """
    planned_values = plan.get("planned_values")
    if not planned_values:
        return None
    return list(_walk_module(planned_values.get("root_module") or {}))


def load_planned_resources(path: str | Path) -> list[PlannedResource] | None:
    """
    Load a JSON plan file.

    Raises:
        DecodeError: if the file is not a JSON object
    """
    text = Path(path).read_text()
    try:
        plan = json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Error parsing plan file {path}: {e}", body=text) from e
    if not isinstance(plan, dict):
        raise DecodeError(f"Plan file {path} does not contain a JSON object", body=text)
    return parse_plan(plan)
