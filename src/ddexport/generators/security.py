"""
Security monitoring rule generators.

Both kinds come from the same v2 listing: default rules ship with Datadog
and can only be tuned, custom rules are owned by the account.
"""

from __future__ import annotations

from datadog_api_client.v2.api.security_monitoring_api import SecurityMonitoringApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)


class _SecurityMonitoringRuleGenerator(ResourceGenerator):
    is_default = False

    def list_resources(self) -> list[Resource]:
        api = SecurityMonitoringApi(self.client_v2)

        def fetch(page: int, size: int) -> list:
            response = api.list_security_monitoring_rules(
                page_size=size, page_number=page
            )
            return field_value(response, "data", [])

        resources = []
        for rule in self.paginate(fetch):
            if bool(field_value(rule, "is_default", False)) != self.is_default:
                continue
            rule_id = field_value(rule, "id")
            resources.append(
                self.new_resource(
                    rule_id, f"{field_value(rule, 'name', '')}_{rule_id}", rule
                )
            )
        return resources


@GeneratorRegistry.register
class SecurityMonitoringRuleGenerator(_SecurityMonitoringRuleGenerator):
    """Exports custom security monitoring rules."""

    service_name = "security_monitoring_rule"
    resource_type = "datadog_security_monitoring_rule"


@GeneratorRegistry.register
class SecurityMonitoringDefaultRuleGenerator(_SecurityMonitoringRuleGenerator):
    """Exports Datadog-managed default rules."""

    service_name = "security_monitoring_default_rule"
    resource_type = "datadog_security_monitoring_default_rule"
    is_default = True
