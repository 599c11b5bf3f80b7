"""
Datadog provider for the resource import tool.

The provider resolves credentials, builds one authenticated API client per
Datadog API version, and configures resource generators for the kinds the
caller selects.

Initialization produces an immutable ProviderSession. The provider keeps
the most recent session for convenience, but swaps it only after a fully
successful init(), and callers that want independent exports can pass a
session explicitly to init_service().

Usage:
    provider = DatadogProvider()
    provider.init(["", "", ""])  # keys from DATADOG_API_KEY / DATADOG_APP_KEY
    generator = provider.init_service("monitor", verbose=False)
    resources = generator.init_resources()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from datadog_api_client import ApiClient

from ddexport.generators import GeneratorRegistry, ResourceGenerator
from ddexport.generators.base import (
    ARG_API_KEY,
    ARG_API_URL,
    ARG_APP_KEY,
    ARG_AUTH_V1,
    ARG_AUTH_V2,
    ARG_CLIENT_V1,
    ARG_CLIENT_V2,
)
from ddexport.provider.clients import AuthContext, build_client
from ddexport.provider.credentials import ProviderConfig, resolve_config
from ddexport.provider.errors import (
    ProviderNotInitializedError,
    UnsupportedResourceKindError,
)

logger = logging.getLogger(__name__)

PROVIDER_NAME = "datadog"


@dataclass(frozen=True)
class ProviderSession:
    """
    Everything a generator needs, produced once by DatadogProvider.init().

    Attributes:
        config: Resolved credentials and endpoint.
        auth_v1: Auth context for the v1 API.
        auth_v2: Auth context for the v2 API.
        client_v1: Client for the v1 API.
        client_v2: Client for the v2 API.
    """

    config: ProviderConfig
    auth_v1: AuthContext
    auth_v2: AuthContext
    client_v1: ApiClient
    client_v2: ApiClient

    def generator_args(self) -> dict[str, Any]:
        """Build the argument bag handed to every generator."""
        return {
            ARG_API_KEY: self.config.api_key,
            ARG_APP_KEY: self.config.app_key,
            ARG_API_URL: self.config.api_url,
            ARG_AUTH_V1: self.auth_v1,
            ARG_AUTH_V2: self.auth_v2,
            ARG_CLIENT_V1: self.client_v1,
            ARG_CLIENT_V2: self.client_v2,
        }

    def close(self) -> None:
        """Release the connection pools of both clients."""
        self.client_v1.close()
        self.client_v2.close()


class DatadogProvider:
    """
    Provider adapter exposing Datadog to the import tool.

    Attributes:
        session: Session from the last successful init(), or None.
        service: Generator configured by the last successful init_service().
    """

    def __init__(self) -> None:
        self.session: ProviderSession | None = None
        self.service: ResourceGenerator | None = None

    def init(self, args: Sequence[str]) -> ProviderSession:
        """
        Resolve credentials and build both API clients.

        Args:
            args: Positional list [api_key, app_key, api_host]; empty strings
                fall back to DATADOG_API_KEY, DATADOG_APP_KEY and DATADOG_HOST.

        Returns:
            The new ProviderSession, also stored on self.session.

        Raises:
            MissingCredentialError: If a key is neither passed nor in the environment.
            InvalidEndpointURLError: If the custom host cannot be parsed.
            IncompleteEndpointURLError: If the custom host lacks scheme or host.
        """
        config = resolve_config(args)

        # Each version validates the endpoint on its own
        auth_v1, client_v1 = build_client("v1", config)
        try:
            auth_v2, client_v2 = build_client("v2", config)
        except Exception:
            client_v1.close()
            raise

        session = ProviderSession(
            config=config,
            auth_v1=auth_v1,
            auth_v2=auth_v2,
            client_v1=client_v1,
            client_v2=client_v2,
        )
        self.session = session
        logger.info(
            f"Initialized {PROVIDER_NAME} provider "
            f"(endpoint: {config.api_url or 'default'})"
        )
        return session

    def get_name(self) -> str:
        return PROVIDER_NAME

    def get_config(self) -> dict[str, str]:
        """
        Return the provider configuration as a flat record.

        The record holds the raw API and application keys. Treat it as
        sensitive wherever it is written.
        """
        config = self.session.config if self.session else ProviderConfig("", "", "")
        return {
            "api_key": config.api_key,
            "app_key": config.app_key,
            "api_url": config.api_url,
        }

    def get_supported_service(self) -> dict[str, ResourceGenerator]:
        """
        Return one fresh generator per supported resource kind.

        Every call builds new instances; generators are never shared
        between calls. Available before init() for introspection.
        """
        return GeneratorRegistry.create_all()

    def init_service(
        self,
        service_name: str,
        verbose: bool,
        session: ProviderSession | None = None,
    ) -> ResourceGenerator:
        """
        Configure the generator for one resource kind.

        Args:
            service_name: Resource kind, e.g. "monitor".
            verbose: Verbose flag propagated to the generator.
            session: Session to configure from (defaults to self.session).

        Returns:
            The configured generator, also stored on self.service. Its
            enumeration has not been run yet.

        Raises:
            UnsupportedResourceKindError: If the kind is not supported. The
                previously configured service is left in place.
            ProviderNotInitializedError: If no session is available.
        """
        supported = self.get_supported_service()
        if service_name not in supported:
            raise UnsupportedResourceKindError(service_name, provider=self.get_name())

        session = session or self.session
        if session is None:
            raise ProviderNotInitializedError(
                "provider not initialized; call init() before init_service()",
                provider=self.get_name(),
            )

        generator = supported[service_name]
        generator.set_name(service_name)
        generator.set_verbose(verbose)
        generator.set_provider_name(self.get_name())
        generator.set_args(session.generator_args())

        self.service = generator
        logger.debug(f"Configured {self.get_name()} service: {service_name}")
        return generator

    def get_resource_connections(self) -> dict[str, dict[str, list[str]]]:
        """No cross-kind references are declared."""
        return {}

    def get_provider_data(self, *args: str) -> dict[str, Any]:
        return {}
