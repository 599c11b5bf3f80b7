"""
Dashboard generators.

Dashboards are listed as summaries through the v1 Dashboards API and
mapped by layout: "free" dashboards are screenboards, "ordered" dashboards
are timeboards. The dashboard generator exports every dashboard regardless
of layout.
"""

from __future__ import annotations

from datadog_api_client.v1.api.dashboard_lists_api import DashboardListsApi
from datadog_api_client.v1.api.dashboards_api import DashboardsApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    enum_value,
    field_value,
)


@GeneratorRegistry.register
class DashboardListGenerator(ResourceGenerator):
    """Exports dashboard lists."""

    service_name = "dashboard_list"
    resource_type = "datadog_dashboard_list"

    def list_resources(self) -> list[Resource]:
        api = DashboardListsApi(self.client_v1)
        response = api.list_dashboard_lists()
        return [
            self.new_resource(
                str(field_value(dl, "id")),
                field_value(dl, "name", ""),
                dl,
            )
            for dl in field_value(response, "dashboard_lists", [])
        ]


class _LayoutDashboardGenerator(ResourceGenerator):
    # None exports every layout
    layout_type: str | None = None

    def list_resources(self) -> list[Resource]:
        api = DashboardsApi(self.client_v1)
        response = api.list_dashboards()
        resources = []
        for dashboard in field_value(response, "dashboards", []):
            layout = enum_value(field_value(dashboard, "layout_type"))
            if self.layout_type is not None and layout != self.layout_type:
                continue
            dashboard_id = field_value(dashboard, "id")
            resources.append(
                self.new_resource(
                    dashboard_id,
                    f"{field_value(dashboard, 'title', '')}_{dashboard_id}",
                    dashboard,
                )
            )
        return resources


@GeneratorRegistry.register
class DashboardGenerator(_LayoutDashboardGenerator):
    """Exports all dashboards."""

    service_name = "dashboard"
    resource_type = "datadog_dashboard"


@GeneratorRegistry.register
class ScreenboardGenerator(_LayoutDashboardGenerator):
    """Exports free-layout dashboards as screenboards."""

    service_name = "screenboard"
    resource_type = "datadog_screenboard"
    layout_type = "free"


@GeneratorRegistry.register
class TimeboardGenerator(_LayoutDashboardGenerator):
    """Exports ordered-layout dashboards as timeboards."""

    service_name = "timeboard"
    resource_type = "datadog_timeboard"
    layout_type = "ordered"
