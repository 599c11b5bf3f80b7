"""
Monitoring generators: monitors, downtimes, SLOs and metric metadata.
"""

from __future__ import annotations

import time

from datadog_api_client.v1.api.downtimes_api import DowntimesApi
from datadog_api_client.v1.api.metrics_api import MetricsApi
from datadog_api_client.v1.api.monitors_api import MonitorsApi
from datadog_api_client.v1.api.service_level_objectives_api import (
    ServiceLevelObjectivesApi,
)

from ddexport.generators.base import (
    ARG_FILTER,
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)

# Window used to discover metrics when no explicit filter is given
ACTIVE_METRICS_LOOKBACK_SECONDS = 3600


@GeneratorRegistry.register
class MonitorGenerator(ResourceGenerator):
    """Exports monitors, page by page."""

    service_name = "monitor"
    resource_type = "datadog_monitor"

    def list_resources(self) -> list[Resource]:
        api = MonitorsApi(self.client_v1)
        return [
            self.new_resource(
                str(field_value(monitor, "id")),
                f"{field_value(monitor, 'name', '')}_{field_value(monitor, 'id')}",
                monitor,
            )
            for monitor in self.paginate(
                lambda page, size: api.list_monitors(page=page, page_size=size)
            )
        ]


@GeneratorRegistry.register
class DowntimeGenerator(ResourceGenerator):
    """Exports currently active or scheduled downtimes."""

    service_name = "downtime"
    resource_type = "datadog_downtime"

    def list_resources(self) -> list[Resource]:
        api = DowntimesApi(self.client_v1)
        return [
            self.new_resource(
                str(field_value(downtime, "id")),
                str(field_value(downtime, "id")),
                downtime,
            )
            for downtime in api.list_downtimes(current_only=True)
        ]


@GeneratorRegistry.register
class ServiceLevelObjectiveGenerator(ResourceGenerator):
    """Exports service level objectives using offset pagination."""

    service_name = "service_level_objective"
    resource_type = "datadog_service_level_objective"

    def list_resources(self) -> list[Resource]:
        api = ServiceLevelObjectivesApi(self.client_v1)

        def fetch(page: int, size: int) -> list:
            response = api.list_slos(limit=size, offset=page * size)
            return field_value(response, "data", [])

        return [
            self.new_resource(
                field_value(slo, "id"),
                f"{field_value(slo, 'name', '')}_{field_value(slo, 'id')}",
                slo,
            )
            for slo in self.paginate(fetch)
        ]


@GeneratorRegistry.register
class MetricMetadataGenerator(ResourceGenerator):
    """
    Exports metric metadata.

    Metric names come from the "filter" argument when set, otherwise from
    the metrics that reported during the last hour.
    """

    service_name = "metric_metadata"
    resource_type = "datadog_metric_metadata"

    def _metric_names(self, api: MetricsApi) -> list[str]:
        wanted = self.args.get(ARG_FILTER)
        if wanted:
            return [str(name) for name in wanted]
        since = int(time.time()) - ACTIVE_METRICS_LOOKBACK_SECONDS
        response = api.list_active_metrics(_from=since)
        return list(field_value(response, "metrics", []))

    def list_resources(self) -> list[Resource]:
        api = MetricsApi(self.client_v1)
        resources = []
        for metric_name in self._metric_names(api):
            metadata = api.get_metric_metadata(metric_name=metric_name)
            resources.append(self.new_resource(metric_name, metric_name, metadata))
            resources[-1].attributes.setdefault("metric", metric_name)
        return resources
