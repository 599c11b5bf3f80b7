"""
Synthetics generators: tests, global variables and private locations.
"""

from __future__ import annotations

from datadog_api_client.v1.api.synthetics_api import SyntheticsApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)

# Managed locations have plain ids, private ones are prefixed
PRIVATE_LOCATION_PREFIX = "pl:"


@GeneratorRegistry.register
class SyntheticsGenerator(ResourceGenerator):
    """Exports API and browser tests, identified by public id."""

    service_name = "synthetics"
    resource_type = "datadog_synthetics_test"

    def list_resources(self) -> list[Resource]:
        api = SyntheticsApi(self.client_v1)
        response = api.list_tests()
        return [
            self.new_resource(
                field_value(test, "public_id"), field_value(test, "public_id"), test
            )
            for test in field_value(response, "tests", [])
        ]


@GeneratorRegistry.register
class SyntheticsGlobalVariableGenerator(ResourceGenerator):
    """Exports synthetics global variables."""

    service_name = "synthetics_global_variable"
    resource_type = "datadog_synthetics_global_variable"

    def list_resources(self) -> list[Resource]:
        api = SyntheticsApi(self.client_v1)
        response = api.list_global_variables()
        return [
            self.new_resource(
                field_value(variable, "id"),
                f"{field_value(variable, 'name', '')}_{field_value(variable, 'id')}",
                variable,
            )
            for variable in field_value(response, "variables", [])
        ]


@GeneratorRegistry.register
class SyntheticsPrivateLocationGenerator(ResourceGenerator):
    """Exports private locations; managed locations are skipped."""

    service_name = "synthetics_private_location"
    resource_type = "datadog_synthetics_private_location"

    def list_resources(self) -> list[Resource]:
        api = SyntheticsApi(self.client_v1)
        response = api.list_locations()
        resources = []
        for location in field_value(response, "locations", []):
            location_id = str(field_value(location, "id", ""))
            if not location_id.startswith(PRIVATE_LOCATION_PREFIX):
                continue
            resources.append(
                self.new_resource(
                    location_id,
                    f"{field_value(location, 'name', '')}_{location_id}",
                    location,
                )
            )
        return resources
