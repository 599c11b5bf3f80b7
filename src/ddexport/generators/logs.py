"""
Log management generators.

Pipelines, indexes and their orderings come from the v1 API; archives and
the archive ordering come from v2. Ordering resources are singletons per
account and are exported under a fixed import id.

Index operations are still flagged unstable in the v1 client; the provider
enables them when building the v1 configuration.
"""

from __future__ import annotations

from datadog_api_client.v1.api.logs_indexes_api import LogsIndexesApi
from datadog_api_client.v1.api.logs_pipelines_api import LogsPipelinesApi
from datadog_api_client.v2.api.logs_archives_api import LogsArchivesApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)

ARCHIVE_ORDER_ID = "archiveOrderID"
PIPELINE_ORDER_ID = "pipelineOrderID"
INDEX_ORDER_ID = "logsIndexOrderID"


@GeneratorRegistry.register
class LogsArchiveGenerator(ResourceGenerator):
    """Exports logs archives."""

    service_name = "logs_archive"
    resource_type = "datadog_logs_archive"

    def list_resources(self) -> list[Resource]:
        api = LogsArchivesApi(self.client_v2)
        response = api.list_logs_archives()
        resources = []
        for archive in field_value(response, "data", []):
            archive_id = field_value(archive, "id")
            name = field_value(field_value(archive, "attributes"), "name", "")
            resources.append(self.new_resource(archive_id, f"{name}_{archive_id}", archive))
        return resources


@GeneratorRegistry.register
class LogsArchiveOrderGenerator(ResourceGenerator):
    """Exports the account's archive ordering."""

    service_name = "logs_archive_order"
    resource_type = "datadog_logs_archive_order"

    def list_resources(self) -> list[Resource]:
        api = LogsArchivesApi(self.client_v2)
        order = api.get_logs_archive_order()
        return [self.new_resource(ARCHIVE_ORDER_ID, ARCHIVE_ORDER_ID, order)]


class _LogsPipelineGenerator(ResourceGenerator):
    # Integration pipelines are the read-only ones
    read_only = False

    def list_resources(self) -> list[Resource]:
        api = LogsPipelinesApi(self.client_v1)
        resources = []
        for pipeline in api.list_logs_pipelines():
            if bool(field_value(pipeline, "is_read_only", False)) != self.read_only:
                continue
            pipeline_id = field_value(pipeline, "id")
            resources.append(
                self.new_resource(
                    pipeline_id,
                    f"{field_value(pipeline, 'name', '')}_{pipeline_id}",
                    pipeline,
                )
            )
        return resources


@GeneratorRegistry.register
class LogsCustomPipelineGenerator(_LogsPipelineGenerator):
    """Exports user-defined logs pipelines."""

    service_name = "logs_custom_pipeline"
    resource_type = "datadog_logs_custom_pipeline"


@GeneratorRegistry.register
class LogsIntegrationPipelineGenerator(_LogsPipelineGenerator):
    """Exports integration (read-only) logs pipelines."""

    service_name = "logs_integration_pipeline"
    resource_type = "datadog_logs_integration_pipeline"
    read_only = True


@GeneratorRegistry.register
class LogsPipelineOrderGenerator(ResourceGenerator):
    """Exports the account's pipeline ordering."""

    service_name = "logs_pipeline_order"
    resource_type = "datadog_logs_pipeline_order"

    def list_resources(self) -> list[Resource]:
        api = LogsPipelinesApi(self.client_v1)
        order = api.get_logs_pipeline_order()
        return [self.new_resource(PIPELINE_ORDER_ID, PIPELINE_ORDER_ID, order)]


@GeneratorRegistry.register
class LogsIndexGenerator(ResourceGenerator):
    """Exports logs indexes, identified by name."""

    service_name = "logs_index"
    resource_type = "datadog_logs_index"

    def list_resources(self) -> list[Resource]:
        api = LogsIndexesApi(self.client_v1)
        response = api.list_log_indexes()
        return [
            self.new_resource(field_value(index, "name"), field_value(index, "name"), index)
            for index in field_value(response, "indexes", [])
        ]


@GeneratorRegistry.register
class LogsIndexOrderGenerator(ResourceGenerator):
    """Exports the account's index ordering."""

    service_name = "logs_index_order"
    resource_type = "datadog_logs_index_order"

    def list_resources(self) -> list[Resource]:
        api = LogsIndexesApi(self.client_v1)
        order = api.get_logs_index_order()
        return [self.new_resource(INDEX_ORDER_ID, INDEX_ORDER_ID, order)]
