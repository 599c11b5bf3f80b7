"""
Credential and endpoint resolution for the Datadog provider.

Explicit arguments always win over the environment. Arguments arrive as the
positional list [api_key, app_key, api_host] used by the import tool; an
empty string means "fall back to the environment".

Environment Variables:
    - DATADOG_API_KEY: Datadog API key (required unless passed explicitly)
    - DATADOG_APP_KEY: Datadog application key (required unless passed explicitly)
    - DATADOG_HOST: Custom API endpoint, e.g. https://api.datadoghq.eu (optional)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ddexport.provider.errors import MissingCredentialError

logger = logging.getLogger(__name__)

API_KEY_ENV = "DATADOG_API_KEY"
APP_KEY_ENV = "DATADOG_APP_KEY"
HOST_ENV = "DATADOG_HOST"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Resolved provider configuration.

    Attributes:
        api_key: Datadog API key.
        app_key: Datadog application key.
        api_url: Custom API endpoint, or "" for the default Datadog host.
    """

    api_key: str
    app_key: str
    api_url: str = ""

    def __repr__(self) -> str:
        return (
            f"ProviderConfig(api_key={mask_secret(self.api_key)!r}, "
            f"app_key={mask_secret(self.app_key)!r}, api_url={self.api_url!r})"
        )


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the last few characters of a secret."""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def _arg(args: Sequence[str], index: int) -> str:
    if index < len(args) and args[index]:
        return args[index]
    return ""


def resolve_config(
    args: Sequence[str],
    environ: Mapping[str, str] | None = None,
) -> ProviderConfig:
    """
    Resolve API key, application key and endpoint from arguments and environment.

    Args:
        args: Positional list [api_key, app_key, api_host]. Missing trailing
            entries are treated as empty strings.
        environ: Environment mapping to read from (defaults to os.environ).

    Returns:
        Resolved ProviderConfig.

    Raises:
        MissingCredentialError: If the API key or the application key is
            neither passed nor set in the environment. The API key is
            checked first.
    """
    env = os.environ if environ is None else environ

    api_key = _arg(args, 0) or env.get(API_KEY_ENV, "")
    if not api_key:
        raise MissingCredentialError("api-key")

    app_key = _arg(args, 1) or env.get(APP_KEY_ENV, "")
    if not app_key:
        raise MissingCredentialError("app-key")

    api_url = _arg(args, 2) or env.get(HOST_ENV, "")

    logger.debug(
        f"Resolved Datadog credentials (api_key={mask_secret(api_key)}, "
        f"api_url={api_url or 'default'})"
    )
    return ProviderConfig(api_key=api_key, app_key=app_key, api_url=api_url)
