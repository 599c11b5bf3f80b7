"""
Export of generated resources to declarative definition files.
"""

from ddexport.export.resource_writer import (
    ExportError,
    ExportResult,
    build_import_manifest,
    build_provider_document,
    build_resource_document,
    export_resources,
)

__all__ = [
    "export_resources",
    "build_resource_document",
    "build_import_manifest",
    "build_provider_document",
    "ExportResult",
    "ExportError",
]
