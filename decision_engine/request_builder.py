"""Assembly of the evaluation request sent to the decision service."""

from __future__ import annotations

import logging

from models.schemas import EvaluationRequest, ExecutionContext
from decision_engine.extractor import (
    FALLBACK_TO_DEFAULT_TENANT,
    SAME_DEPLOYMENT,
    get_configuration_entry,
)
from decision_engine.ports import ConfigurationSource, DeploymentResolver


logger = logging.getLogger(__name__)


def parse_boolean(value: str | None) -> bool:
    """Only "true" (any case) is true; everything else, None included, is false."""
    return value is not None and value.lower() == "true"


class RequestBuilder:
    """Builds an EvaluationRequest from the executing step."""

    def __init__(
        self,
        source: ConfigurationSource,
        deployment_resolver: DeploymentResolver,
    ) -> None:
        self.source = source
        self.deployment_resolver = deployment_resolver

    def build(self, decision_key: str, context: ExecutionContext) -> EvaluationRequest:
        request = EvaluationRequest(
            decision_key=decision_key,
            instance_id=context.process_instance_id,
            execution_id=context.execution_id,
            activity_id=context.activity_id,
            variables=dict(context.variables),
            tenant_id=context.tenant_id,
            fallback_to_default_tenant=self.fallback_to_default_tenant(context),
            parent_deployment_id=self.parent_deployment_id(context),
        )
        logger.debug(
            "Built request for %s (tenant=%s, fallback=%s, parent deployment=%s)",
            decision_key,
            request.tenant_id,
            request.fallback_to_default_tenant,
            request.parent_deployment_id,
        )
        return request

    def fallback_to_default_tenant(self, context: ExecutionContext) -> bool:
        entry = get_configuration_entry(self.source, context, FALLBACK_TO_DEFAULT_TENANT)
        if entry is None or not entry.has_literal():
            return False
        return parse_boolean(entry.literal_value)

    def parent_deployment_id(self, context: ExecutionContext) -> str | None:
        """
        Deployment scoping of the lookup.

        Rules:
        - IF sameDeployment is absent: scope to the process deployment (older definitions)
        - IF sameDeployment is "true": scope to the process deployment
        - ELSE: no parent deployment, the service looks the decision up globally
        """
        entry = get_configuration_entry(self.source, context, SAME_DEPLOYMENT)
        if entry is not None and not parse_boolean(entry.literal_value):
            return None
        return self.deployment_resolver.get_deployment_id(context.process_definition_id)
