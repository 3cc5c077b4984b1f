"""Interfaces of the collaborators a decision task talks to."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from models.schemas import AuditResult, ConfigurationEntry, EvaluationRequest, ExecutionContext, RuleHit


class ConfigurationSource(Protocol):
    """Looks up fields attached to a workflow step."""

    def get_entry(self, step_id: str, name: str) -> ConfigurationEntry | None: ...


class DynamicOverrideStore(Protocol):
    """Per-step properties that replace configured values without a redeploy."""

    def get_element_properties(
        self, step_id: str, process_definition_id: str
    ) -> dict[str, Any] | None: ...


class ExpressionEvaluator(Protocol):
    """Evaluates an expression string against an execution."""

    def evaluate(self, expression: str, context: ExecutionContext) -> Any: ...


class DeploymentResolver(Protocol):
    """Maps a process definition to the deployment that contains it."""

    def get_deployment_id(self, process_definition_id: str) -> str | None: ...


class DecisionEvaluationService(Protocol):
    """Evaluates a decision. Failures are reported with failed=True, never raised."""

    def evaluate(self, request: EvaluationRequest) -> AuditResult: ...


class VariableBinder(Protocol):
    """Replaces the default result binding."""

    def __call__(
        self,
        decision_result: list[RuleHit],
        decision_key: str,
        context: ExecutionContext,
        codec: Any,
    ) -> None: ...


LeaveCallback = Callable[[ExecutionContext], None]


def get_active_value(
    original_value: str,
    property_name: str,
    element_properties: dict[str, Any] | None,
) -> str:
    """Return the override for property_name if one is set, otherwise original_value."""
    if element_properties is None:
        return original_value
    override = element_properties.get(property_name)
    if override is None:
        return original_value
    return str(override)
