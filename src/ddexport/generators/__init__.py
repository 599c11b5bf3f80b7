"""
Resource generators for Datadog export.

Each generator enumerates one kind of Datadog object through
datadog_api_client and maps every object to a Terraform resource
definition.

Supported kinds:
    - Dashboards (dashboard, dashboard_list, screenboard, timeboard)
    - Monitoring (monitor, downtime, service_level_objective, metric_metadata)
    - Logs (archives, pipelines, indexes and their orderings)
    - Integrations (AWS, AWS Lambda ARNs, AWS log collection, Azure, GCP)
    - Security monitoring (custom and default rules)
    - Synthetics (tests, global variables, private locations)
    - Access (user, role)

All generators inherit from ResourceGenerator and register themselves
with the GeneratorRegistry for discovery.
"""

# Import generators to trigger registration
from ddexport.generators.access import RoleGenerator, UserGenerator
from ddexport.generators.base import (
    GENERATOR_ARG_KEYS,
    GeneratorError,
    GeneratorNotConfiguredError,
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    tf_sanitize,
)
from ddexport.generators.dashboards import (
    DashboardGenerator,
    DashboardListGenerator,
    ScreenboardGenerator,
    TimeboardGenerator,
)
from ddexport.generators.integrations import (
    IntegrationAWSGenerator,
    IntegrationAWSLambdaARNGenerator,
    IntegrationAWSLogCollectionGenerator,
    IntegrationAzureGenerator,
    IntegrationGCPGenerator,
)
from ddexport.generators.logs import (
    LogsArchiveGenerator,
    LogsArchiveOrderGenerator,
    LogsCustomPipelineGenerator,
    LogsIndexGenerator,
    LogsIndexOrderGenerator,
    LogsIntegrationPipelineGenerator,
    LogsPipelineOrderGenerator,
)
from ddexport.generators.monitors import (
    DowntimeGenerator,
    MetricMetadataGenerator,
    MonitorGenerator,
    ServiceLevelObjectiveGenerator,
)
from ddexport.generators.security import (
    SecurityMonitoringDefaultRuleGenerator,
    SecurityMonitoringRuleGenerator,
)
from ddexport.generators.synthetics import (
    SyntheticsGenerator,
    SyntheticsGlobalVariableGenerator,
    SyntheticsPrivateLocationGenerator,
)

__all__ = [
    # Base classes and types
    "ResourceGenerator",
    "Resource",
    "GeneratorRegistry",
    "GENERATOR_ARG_KEYS",
    "tf_sanitize",
    # Error classes
    "GeneratorError",
    "GeneratorNotConfiguredError",
    # Generators
    "DashboardListGenerator",
    "DashboardGenerator",
    "ScreenboardGenerator",
    "TimeboardGenerator",
    "DowntimeGenerator",
    "MetricMetadataGenerator",
    "MonitorGenerator",
    "ServiceLevelObjectiveGenerator",
    "LogsArchiveGenerator",
    "LogsArchiveOrderGenerator",
    "LogsCustomPipelineGenerator",
    "LogsIndexGenerator",
    "LogsIndexOrderGenerator",
    "LogsIntegrationPipelineGenerator",
    "LogsPipelineOrderGenerator",
    "IntegrationAWSGenerator",
    "IntegrationAWSLambdaARNGenerator",
    "IntegrationAWSLogCollectionGenerator",
    "IntegrationAzureGenerator",
    "IntegrationGCPGenerator",
    "SecurityMonitoringDefaultRuleGenerator",
    "SecurityMonitoringRuleGenerator",
    "SyntheticsGenerator",
    "SyntheticsGlobalVariableGenerator",
    "SyntheticsPrivateLocationGenerator",
    "UserGenerator",
    "RoleGenerator",
]
