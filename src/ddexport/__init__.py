"""
ddexport - Datadog resource exporter

Enumerates Datadog account objects (dashboards, monitors, logs pipelines,
integrations, users, roles, ...) and writes them as declarative resource
definitions for an infrastructure-as-code import.

Key Features:
    - Credentials from arguments or DATADOG_API_KEY / DATADOG_APP_KEY
    - Custom API endpoints through DATADOG_HOST
    - One generator per resource kind, 27 kinds supported
    - JSON (Terraform syntax) or YAML output

Design Principles:
    - Read-only: no write calls against the Datadog API
    - Explicit state: initialization returns an immutable session
"""

__version__ = "0.1.0"

from ddexport.provider.datadog_provider import DatadogProvider, ProviderSession

__all__ = [
    "__version__",
    "DatadogProvider",
    "ProviderSession",
]
