"""
Error classes raised by the Datadog provider.

All provider errors are fatal for the operation that raised them. Errors
from initialization leave the provider without a session; an unsupported
resource kind only fails the export of that kind.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, provider: str | None = "datadog") -> None:
        self.message = message
        self.provider = provider
        super().__init__(f"{provider}: {message}" if provider else message)


class MissingCredentialError(ProviderError):
    """
    Raised when the API key or application key is absent.

    The key is missing from both the explicit argument and its
    environment variable.

    Attributes:
        credential: Name of the missing credential ("api-key" or "app-key").
    """

    def __init__(self, credential: str, provider: str | None = "datadog") -> None:
        self.credential = credential
        super().__init__(f"{credential} requirement", provider)


class InvalidEndpointURLError(ProviderError):
    """Raised when the custom API host cannot be parsed as a URL."""

    pass


class IncompleteEndpointURLError(ProviderError):
    """Raised when the custom API host parses but lacks a scheme or host."""

    pass


class UnsupportedResourceKindError(ProviderError):
    """
    Raised when a requested resource kind is not in the registry.

    Attributes:
        kind: The requested resource kind.
    """

    def __init__(self, kind: str, provider: str | None = "datadog") -> None:
        self.kind = kind
        super().__init__(f"{kind} not supported service", provider)


class ProviderNotInitializedError(ProviderError):
    """Raised when a service is configured before init() has succeeded."""

    pass
