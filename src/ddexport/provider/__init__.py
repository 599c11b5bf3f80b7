"""
Datadog provider: credential resolution, API clients and service setup.
"""

from ddexport.provider.clients import (
    API_VERSIONS,
    UNSTABLE_OPERATIONS,
    AuthContext,
    build_client,
    parse_api_url,
)
from ddexport.provider.credentials import ProviderConfig, mask_secret, resolve_config
from ddexport.provider.datadog_provider import (
    PROVIDER_NAME,
    DatadogProvider,
    ProviderSession,
)
from ddexport.provider.errors import (
    IncompleteEndpointURLError,
    InvalidEndpointURLError,
    MissingCredentialError,
    ProviderError,
    ProviderNotInitializedError,
    UnsupportedResourceKindError,
)

__all__ = [
    # Provider
    "DatadogProvider",
    "ProviderSession",
    "PROVIDER_NAME",
    # Configuration and clients
    "ProviderConfig",
    "resolve_config",
    "mask_secret",
    "AuthContext",
    "build_client",
    "parse_api_url",
    "API_VERSIONS",
    "UNSTABLE_OPERATIONS",
    # Errors
    "ProviderError",
    "MissingCredentialError",
    "InvalidEndpointURLError",
    "IncompleteEndpointURLError",
    "UnsupportedResourceKindError",
    "ProviderNotInitializedError",
]
