"""
Base generator interface for Datadog resource export.

This module provides the abstract base class for all resource generators,
the Resource record they produce, and the registry the provider uses to
advertise supported resource kinds. Each generator enumerates one kind of
Datadog object through datadog_api_client and maps every object to a
Terraform resource definition.

Design Principles:
    - All API calls are read-only
    - Generators are independent and start with no state
    - Configuration is injected once through set_args()
    - Transport, retries and pagination internals belong to datadog_api_client
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datadog_api_client import ApiClient

    from ddexport.provider.clients import AuthContext


# Argument bag keys shared with every generator
ARG_API_KEY = "api-key"
ARG_APP_KEY = "app-key"
ARG_API_URL = "api-url"
ARG_AUTH_V1 = "authV1"
ARG_AUTH_V2 = "authV2"
ARG_CLIENT_V1 = "datadogClientV1"
ARG_CLIENT_V2 = "datadogClientV2"
ARG_FILTER = "filter"

GENERATOR_ARG_KEYS = (
    ARG_API_KEY,
    ARG_APP_KEY,
    ARG_API_URL,
    ARG_AUTH_V1,
    ARG_AUTH_V2,
    ARG_CLIENT_V1,
    ARG_CLIENT_V2,
)

DEFAULT_PAGE_SIZE = 100

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


# -----------------------------------------------------------------------------
# Error Classes
# -----------------------------------------------------------------------------


class GeneratorError(Exception):
    """Base exception for generator errors."""

    def __init__(self, message: str, service: str | None = None) -> None:
        self.message = message
        self.service = service
        super().__init__(f"[{service}] {message}" if service else message)


class GeneratorNotConfiguredError(GeneratorError):
    """
    Raised when a generator is used before its argument bag is set.
    """

    pass


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------


def tf_sanitize(name: str) -> str:
    """
    Turn an arbitrary Datadog object label into a Terraform resource name.

    Characters outside [a-zA-Z0-9_-] become underscores and the result is
    prefixed with "tfer--" so it never starts with a digit.
    """
    return "tfer--" + _UNSAFE_NAME_CHARS.sub("_", name)


def field_value(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an API model or a plain dict."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    value = getattr(obj, name, default)
    return default if value is None else value


def enum_value(value: Any) -> Any:
    """Unwrap a datadog_api_client enum model to its raw value."""
    return getattr(value, "value", value)


def to_plain(obj: Any) -> dict[str, Any]:
    """Convert an API model to a plain dict."""
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return dict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return {"value": obj}


@dataclass
class Resource:
    """
    One exported Datadog object.

    Attributes:
        resource_type: Terraform resource type (e.g., "datadog_monitor").
        resource_id: Import id understood by the Terraform provider.
        name: Terraform-safe resource name.
        provider: Provider name ("datadog").
        attributes: Attribute values read from the API.
    """

    resource_type: str
    resource_id: str
    name: str
    provider: str = "datadog"
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def address(self) -> str:
        """Terraform address ("type.name") of the resource."""
        return f"{self.resource_type}.{self.name}"


# -----------------------------------------------------------------------------
# Base Generator
# -----------------------------------------------------------------------------


class ResourceGenerator(ABC):
    """
    Abstract base class for resource generators.

    A generator is created empty, configured once by the provider
    (set_name/set_verbose/set_provider_name/set_args), and then driven by
    the caller through init_resources().

    Attributes:
        service_name: Resource kind handled by this generator.
        resource_type: Terraform resource type produced.
        resources: Resources produced by the last init_resources() call.

    Example:
        class MonitorGenerator(ResourceGenerator):
            service_name = "monitor"
            resource_type = "datadog_monitor"

            def list_resources(self) -> list[Resource]:
                api = MonitorsApi(self.client_v1)
                return [
                    self.new_resource(str(m.id), m.name, m)
                    for m in api.list_monitors()
                ]
    """

    # Subclasses must set these
    service_name: str = "base"
    resource_type: str = ""

    def __init__(self) -> None:
        self.name = ""
        self.verbose = False
        self.provider_name = ""
        self.args: dict[str, Any] = {}
        self.resources: list[Resource] = []
        self.logger = logging.getLogger(f"ddexport.generators.{self.service_name}")

    def set_name(self, name: str) -> None:
        self.name = name

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def set_provider_name(self, provider_name: str) -> None:
        self.provider_name = provider_name

    def set_args(self, args: dict[str, Any]) -> None:
        self.args = dict(args)

    def get_args(self) -> dict[str, Any]:
        return self.args

    def _arg(self, key: str) -> Any:
        if key not in self.args:
            raise GeneratorNotConfiguredError(
                f"Missing generator argument '{key}'. "
                "Configure the generator through DatadogProvider.init_service().",
                service=self.service_name,
            )
        return self.args[key]

    @property
    def client_v1(self) -> ApiClient:
        return self._arg(ARG_CLIENT_V1)

    @property
    def client_v2(self) -> ApiClient:
        return self._arg(ARG_CLIENT_V2)

    @property
    def auth_v1(self) -> AuthContext:
        return self._arg(ARG_AUTH_V1)

    @property
    def auth_v2(self) -> AuthContext:
        return self._arg(ARG_AUTH_V2)

    @property
    def page_size(self) -> int:
        return int(self.args.get("page-size", DEFAULT_PAGE_SIZE))

    @abstractmethod
    def list_resources(self) -> list[Resource]:
        """
        Enumerate the Datadog objects of this kind.

        Returns:
            One Resource per object found.
        """
        pass

    def init_resources(self) -> list[Resource]:
        """
        Enumerate, filter and post-process resources of this kind.

        The optional "filter" argument restricts the result to a list of
        resource ids.

        Returns:
            The resources, also stored on self.resources.
        """
        self.logger.info(f"Listing Datadog {self.service_name} resources")
        resources = self.list_resources()

        wanted = self.args.get(ARG_FILTER)
        if wanted:
            wanted_ids = {str(w) for w in wanted}
            resources = [r for r in resources if r.resource_id in wanted_ids]

        self.resources = resources
        self.post_convert_hook()
        self.logger.info(f"Found {len(self.resources)} {self.service_name} resources")
        return self.resources

    def post_convert_hook(self) -> None:
        """Adjust self.resources after enumeration. Override if needed."""
        pass

    def new_resource(
        self,
        resource_id: str,
        label: str,
        obj: Any = None,
    ) -> Resource:
        """
        Build a Resource of this generator's type.

        Args:
            resource_id: Import id for the Terraform provider.
            label: Human-readable label used to derive the resource name.
            obj: API model or dict whose fields become the attributes.
        """
        if self.verbose:
            self.logger.debug(f"{self.resource_type}: {resource_id} ({label})")
        return Resource(
            resource_type=self.resource_type,
            resource_id=str(resource_id),
            name=tf_sanitize(label or str(resource_id)),
            provider=self.provider_name or "datadog",
            attributes=to_plain(obj),
        )

    def paginate(
        self,
        fetch: Callable[[int, int], Iterable[Any]],
    ) -> Iterator[Any]:
        """
        Walk a page-number paginated listing until a short page is returned.

        Args:
            fetch: Callable taking (page_number, page_size) and returning the
                items of that page.
        """
        page_size = self.page_size
        page_number = 0
        while True:
            items = list(fetch(page_number, page_size))
            yield from items
            if len(items) < page_size:
                return
            page_number += 1


# -----------------------------------------------------------------------------
# Generator Registry
# -----------------------------------------------------------------------------


class GeneratorRegistry:
    """
    Registry mapping resource kinds to generator classes.

    Generator modules register their classes at import time. The registry
    hands out classes, never instances, so every lookup produces fresh
    generators with no shared state.

    Example:
        @GeneratorRegistry.register
        class MonitorGenerator(ResourceGenerator):
            service_name = "monitor"

        generators = GeneratorRegistry.create_all()
    """

    _generators: dict[str, type[ResourceGenerator]] = {}

    @classmethod
    def register(
        cls, generator_class: type[ResourceGenerator]
    ) -> type[ResourceGenerator]:
        """
        Register a generator class.

        Raises:
            ValueError: If the generator has no service_name defined.
        """
        service = generator_class.service_name
        if service == "base":
            raise ValueError(
                f"Generator class {generator_class.__name__} must define 'service_name'"
            )
        cls._generators[service] = generator_class
        logging.getLogger("ddexport.generators.registry").debug(
            f"Registered generator: {service} -> {generator_class.__name__}"
        )
        return generator_class

    @classmethod
    def create_all(cls) -> dict[str, ResourceGenerator]:
        """Create one fresh generator per registered resource kind."""
        return {service: gen_class() for service, gen_class in cls._generators.items()}
