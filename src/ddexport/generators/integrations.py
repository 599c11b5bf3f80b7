"""
Cloud integration generators (AWS, Azure, GCP).

Import ids follow the Terraform provider's formats:
    - integration_aws: "<account_id>:<role_name>"
    - integration_aws_lambda_arn: "<account_id> <lambda_arn>"
    - integration_aws_log_collection: "<account_id>"
    - integration_azure: "<tenant_name>:<client_id>"
    - integration_gcp: "<project_id>"
"""

from __future__ import annotations

from datadog_api_client.v1.api.aws_integration_api import AWSIntegrationApi
from datadog_api_client.v1.api.aws_logs_integration_api import AWSLogsIntegrationApi
from datadog_api_client.v1.api.azure_integration_api import AzureIntegrationApi
from datadog_api_client.v1.api.gcp_integration_api import GCPIntegrationApi

from ddexport.generators.base import (
    GeneratorRegistry,
    Resource,
    ResourceGenerator,
    field_value,
)


@GeneratorRegistry.register
class IntegrationAWSGenerator(ResourceGenerator):
    """Exports AWS account integrations."""

    service_name = "integration_aws"
    resource_type = "datadog_integration_aws"

    def list_resources(self) -> list[Resource]:
        api = AWSIntegrationApi(self.client_v1)
        response = api.list_aws_accounts()
        resources = []
        for account in field_value(response, "accounts", []):
            account_id = field_value(account, "account_id", "")
            role_name = field_value(account, "role_name", "")
            resources.append(
                self.new_resource(f"{account_id}:{role_name}", account_id, account)
            )
        return resources


@GeneratorRegistry.register
class IntegrationAWSLambdaARNGenerator(ResourceGenerator):
    """Exports Lambda forwarders attached to AWS log collection."""

    service_name = "integration_aws_lambda_arn"
    resource_type = "datadog_integration_aws_lambda_arn"

    def list_resources(self) -> list[Resource]:
        api = AWSLogsIntegrationApi(self.client_v1)
        resources = []
        for integration in api.list_aws_logs_integrations():
            account_id = field_value(integration, "account_id", "")
            for function in field_value(integration, "lambdas", []):
                arn = field_value(function, "arn", "")
                resources.append(
                    self.new_resource(
                        f"{account_id} {arn}",
                        f"{account_id}_{arn}",
                        {"account_id": account_id, "lambda_arn": arn},
                    )
                )
        return resources


@GeneratorRegistry.register
class IntegrationAWSLogCollectionGenerator(ResourceGenerator):
    """Exports enabled AWS log collection services per account."""

    service_name = "integration_aws_log_collection"
    resource_type = "datadog_integration_aws_log_collection"

    def list_resources(self) -> list[Resource]:
        api = AWSLogsIntegrationApi(self.client_v1)
        resources = []
        for integration in api.list_aws_logs_integrations():
            account_id = field_value(integration, "account_id", "")
            services = list(field_value(integration, "services", []))
            resources.append(
                self.new_resource(
                    account_id,
                    account_id,
                    {"account_id": account_id, "services": services},
                )
            )
        return resources


@GeneratorRegistry.register
class IntegrationAzureGenerator(ResourceGenerator):
    """Exports Azure tenant integrations."""

    service_name = "integration_azure"
    resource_type = "datadog_integration_azure"

    def list_resources(self) -> list[Resource]:
        api = AzureIntegrationApi(self.client_v1)
        resources = []
        for account in api.list_azure_integration():
            tenant_name = field_value(account, "tenant_name", "")
            client_id = field_value(account, "client_id", "")
            resources.append(
                self.new_resource(f"{tenant_name}:{client_id}", tenant_name, account)
            )
        return resources


@GeneratorRegistry.register
class IntegrationGCPGenerator(ResourceGenerator):
    """Exports GCP project integrations."""

    service_name = "integration_gcp"
    resource_type = "datadog_integration_gcp"

    def list_resources(self) -> list[Resource]:
        api = GCPIntegrationApi(self.client_v1)
        return [
            self.new_resource(
                field_value(account, "project_id", ""),
                field_value(account, "project_id", ""),
                account,
            )
            for account in api.list_gcp_integration()
        ]
