"""
Writes generated resources to disk as declarative definitions.

Each resource kind gets its own directory under
<output_dir>/<provider>/<kind>/ holding:
    - resources: Terraform "resource" blocks keyed by type and name
    - import: manifest mapping each resource address to its import id
    - provider: optional provider block built from DatadogProvider.get_config()

Formats:
    - json: Terraform JSON syntax (resources.tf.json, provider.tf.json, import.json)
    - yaml: same structure as YAML (resources.yaml, provider.yaml, import.yaml)

The provider file contains the raw API and application keys, so it is
written with owner-only permissions.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ddexport.generators.base import Resource, ResourceGenerator

logger = logging.getLogger(__name__)

FILE_NAMES = {
    "json": {
        "resources": "resources.tf.json",
        "provider": "provider.tf.json",
        "import": "import.json",
    },
    "yaml": {
        "resources": "resources.yaml",
        "provider": "provider.yaml",
        "import": "import.yaml",
    },
}


class ExportError(Exception):
    """Raised when resources cannot be written."""

    pass


@dataclass
class ExportResult:
    """
    Outcome of writing one resource kind.

    Attributes:
        service: Resource kind that was written.
        directory: Directory the files were written to.
        files: Paths of the files written.
        resource_count: Number of resources written.
    """

    service: str
    directory: Path
    files: list[Path] = field(default_factory=list)
    resource_count: int = 0


def _to_serializable(data: Any) -> Any:
    # API models can carry datetimes and UUIDs
    return json.loads(json.dumps(data, default=str))


def _unique_names(resources: list[Resource]) -> list[str]:
    """Resolve name clashes within one resource type by numbering repeats."""
    seen: dict[tuple[str, str], int] = {}
    names = []
    for resource in resources:
        key = (resource.resource_type, resource.name)
        count = seen.get(key, 0) + 1
        seen[key] = count
        names.append(resource.name if count == 1 else f"{resource.name}_{count}")
    return names


def build_resource_document(resources: list[Resource]) -> dict[str, Any]:
    """
    Build the {"resource": {type: {name: attributes}}} document.
    """
    blocks: dict[str, dict[str, Any]] = {}
    for resource, name in zip(resources, _unique_names(resources)):
        blocks.setdefault(resource.resource_type, {})[name] = _to_serializable(
            resource.attributes
        )
    return {"resource": blocks}


def build_import_manifest(resources: list[Resource]) -> dict[str, str]:
    """Map each resource address to its import id."""
    return {
        f"{resource.resource_type}.{name}": resource.resource_id
        for resource, name in zip(resources, _unique_names(resources))
    }


def build_provider_document(
    provider_name: str,
    provider_config: dict[str, str],
) -> dict[str, Any]:
    """Build the provider block, dropping empty settings."""
    settings = {key: value for key, value in provider_config.items() if value}
    return {"provider": {provider_name: settings}}


def _write(path: Path, data: Any, fmt: str) -> None:
    try:
        with open(path, "w") as f:
            if fmt == "yaml":
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
                f.write("\n")
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e


def export_resources(
    generator: ResourceGenerator,
    output_dir: Path,
    fmt: str = "json",
    provider_config: dict[str, str] | None = None,
) -> ExportResult:
    """
    Write a generator's resources to disk.

    Args:
        generator: Generator whose init_resources() has already run.
        output_dir: Root output directory.
        fmt: "json" or "yaml".
        provider_config: Output of DatadogProvider.get_config(); when given a
            provider file is written as well.

    Returns:
        ExportResult describing what was written.

    Raises:
        ExportError: If the format is unknown or a file cannot be written.
    """
    if fmt not in FILE_NAMES:
        raise ExportError(
            f"Unknown format: {fmt}. Available: {', '.join(FILE_NAMES)}"
        )
    names = FILE_NAMES[fmt]
    provider_name = generator.provider_name or "datadog"
    directory = Path(output_dir) / provider_name / generator.name
    directory.mkdir(parents=True, exist_ok=True)

    result = ExportResult(
        service=generator.name,
        directory=directory,
        resource_count=len(generator.resources),
    )

    resources_path = directory / names["resources"]
    _write(resources_path, build_resource_document(generator.resources), fmt)
    result.files.append(resources_path)

    import_path = directory / names["import"]
    _write(import_path, build_import_manifest(generator.resources), fmt)
    result.files.append(import_path)

    if provider_config is not None:
        provider_path = directory / names["provider"]
        _write(provider_path, build_provider_document(provider_name, provider_config), fmt)
        os.chmod(provider_path, 0o600)
        result.files.append(provider_path)

    logger.info(
        f"Wrote {result.resource_count} {generator.name} resources to {directory}"
    )
    return result
