"""
Access management generators: users and roles (v2 API).
"""

from __future__ import annotations

from datadog_api_client.v2.api.roles_api import RolesApi
from datadog_api_client.v2.api.users_api import UsersApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)


@GeneratorRegistry.register
class UserGenerator(ResourceGenerator):
    """Exports users, labelled by email."""

    service_name = "user"
    resource_type = "datadog_user"

    def list_resources(self) -> list[Resource]:
        api = UsersApi(self.client_v2)

        def fetch(page: int, size: int) -> list:
            response = api.list_users(page_size=size, page_number=page)
            return field_value(response, "data", [])

        resources = []
        for user in self.paginate(fetch):
            user_id = field_value(user, "id")
            email = field_value(field_value(user, "attributes"), "email", "")
            resources.append(self.new_resource(user_id, email or user_id, user))
        return resources


@GeneratorRegistry.register
class RoleGenerator(ResourceGenerator):
    """Exports roles."""

    service_name = "role"
    resource_type = "datadog_role"

    def list_resources(self) -> list[Resource]:
        api = RolesApi(self.client_v2)

        def fetch(page: int, size: int) -> list:
            response = api.list_roles(page_size=size, page_number=page)
            return field_value(response, "data", [])

        resources = []
        for role in self.paginate(fetch):
            role_id = field_value(role, "id")
            name = field_value(field_value(role, "attributes"), "name", "")
            resources.append(self.new_resource(role_id, f"{name}_{role_id}", role))
        return resources
