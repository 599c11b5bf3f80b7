"""
Authenticated Datadog API client construction.

The provider talks to two API versions. Each version gets its own
AuthContext and its own datadog_api_client.ApiClient, built by the same
routine so both apply identical endpoint validation. Construction never
performs network I/O; the clients are lazy transport handles.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from datadog_api_client import ApiClient, Configuration

from ddexport.provider.credentials import ProviderConfig
from ddexport.provider.errors import (
    IncompleteEndpointURLError,
    InvalidEndpointURLError,
)

logger = logging.getLogger(__name__)

API_VERSIONS = ("v1", "v2")

API_KEY_AUTH = "apiKeyAuth"
APP_KEY_AUTH = "appKeyAuth"

# Server template "{protocol}://{name}" in the client's server list
CUSTOM_SERVER_INDEX = 1

# Operations gated as unstable in older clients, per API version
UNSTABLE_OPERATIONS: dict[str, tuple[str, ...]] = {
    "v1": ("v1.get_logs_index", "v1.list_log_indexes"),
    "v2": (),
}


@dataclass(frozen=True)
class AuthContext:
    """
    Authentication and server selection for one API version.

    Attributes:
        api_version: "v1" or "v2".
        api_keys: Key material under the "apiKeyAuth"/"appKeyAuth" markers.
        server_index: Alternate server template index, or None for the default.
        server_variables: Template substitutions ("name", "protocol").
    """

    api_version: str
    api_keys: Mapping[str, str]
    server_index: int | None = None
    server_variables: Mapping[str, str] = field(default_factory=dict)

    @property
    def uses_custom_host(self) -> bool:
        return self.server_index is not None

    def apply(self, configuration: Configuration) -> Configuration:
        """Copy keys and server selection onto a client configuration."""
        for marker, key in self.api_keys.items():
            configuration.api_key[marker] = key
        if self.server_index is not None:
            configuration.server_index = self.server_index
            configuration.server_variables.update(self.server_variables)
        return configuration


def parse_api_url(api_url: str) -> tuple[str, str]:
    """
    Split a custom endpoint into (scheme, host).

    The host keeps its port, if any.

    Raises:
        InvalidEndpointURLError: If the string is not a parseable URL.
        IncompleteEndpointURLError: If the URL lacks a scheme or a host.
    """
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in api_url):
        raise InvalidEndpointURLError(
            f"invalid API Url : {api_url!r} contains whitespace or control characters"
        )
    try:
        parsed = urlsplit(api_url)
        # Port is validated lazily by urlsplit
        parsed.port
    except ValueError as e:
        raise InvalidEndpointURLError(f"invalid API Url : {e}") from e

    host = parsed.netloc.rpartition("@")[2]
    if not host or not parsed.scheme:
        raise IncompleteEndpointURLError(f"missing protocol or host : {api_url}")
    return parsed.scheme, host


def build_auth_context(api_version: str, config: ProviderConfig) -> AuthContext:
    """Build the AuthContext for one API version from the provider config."""
    api_keys = {API_KEY_AUTH: config.api_key, APP_KEY_AUTH: config.app_key}
    if not config.api_url:
        return AuthContext(api_version=api_version, api_keys=api_keys)

    scheme, host = parse_api_url(config.api_url)
    return AuthContext(
        api_version=api_version,
        api_keys=api_keys,
        server_index=CUSTOM_SERVER_INDEX,
        server_variables={"name": host, "protocol": scheme},
    )


def build_client(
    api_version: str,
    config: ProviderConfig,
) -> tuple[AuthContext, ApiClient]:
    """
    Build the auth context and API client for one API version.

    Args:
        api_version: "v1" or "v2".
        config: Resolved provider configuration.

    Returns:
        Tuple of (AuthContext, ApiClient).

    Raises:
        ValueError: If api_version is not a known version.
        InvalidEndpointURLError: If config.api_url cannot be parsed.
        IncompleteEndpointURLError: If config.api_url lacks scheme or host.
    """
    if api_version not in API_VERSIONS:
        raise ValueError(
            f"Unknown API version: {api_version}. "
            f"Available: {', '.join(API_VERSIONS)}"
        )

    auth = build_auth_context(api_version, config)

    configuration = auth.apply(Configuration())
    for operation in UNSTABLE_OPERATIONS[api_version]:
        if operation in configuration.unstable_operations:
            configuration.unstable_operations[operation] = True
        else:
            logger.debug(f"{operation} is stable in this client")

    if auth.uses_custom_host:
        logger.debug(
            f"Datadog {api_version} client using custom host "
            f"{auth.server_variables['protocol']}://{auth.server_variables['name']}"
        )
    return auth, ApiClient(configuration)
