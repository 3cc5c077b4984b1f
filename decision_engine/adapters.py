"""In-process implementations of the decision task collaborators."""

from __future__ import annotations

import copy
import re
from typing import Any

from pydantic import BaseModel, Field

from models.schemas import AuditResult, ConfigurationEntry, EvaluationRequest, ExecutionContext


class StepDefinition(BaseModel):
    """A decision task step and the fields configured on it."""

    step_id: str = Field(description="Step id")
    name: str | None = Field(default=None, description="Display name")
    fields: list[ConfigurationEntry] = Field(default_factory=list, description="Configured fields")

    def get_field(self, name: str) -> ConfigurationEntry | None:
        for entry in self.fields:
            if entry.name == name:
                return entry
        return None


class InMemoryConfigurationSource:
    """ConfigurationSource over a set of step definitions."""

    def __init__(self, steps: list[StepDefinition] | None = None) -> None:
        self._steps = {step.step_id: step for step in steps or []}

    def add_step(self, step: StepDefinition) -> None:
        self._steps[step.step_id] = step

    def get_entry(self, step_id: str, name: str) -> ConfigurationEntry | None:
        step = self._steps.get(step_id)
        if step is None:
            return None
        return step.get_field(name)


class InMemoryOverrideStore:
    """
    Dynamic overrides, one document per process definition.

    Documents use the layout {"bpmn": {step_id: {property: value}}}.
    """

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self._documents = copy.deepcopy(documents or {})

    def set_property(
        self,
        process_definition_id: str,
        step_id: str,
        property_name: str,
        value: str,
    ) -> None:
        document = self._documents.setdefault(process_definition_id, {})
        document.setdefault("bpmn", {}).setdefault(step_id, {})[property_name] = value

    def get_element_properties(
        self, step_id: str, process_definition_id: str
    ) -> dict[str, Any] | None:
        document = self._documents.get(process_definition_id)
        if document is None:
            return None
        return document.get("bpmn", {}).get(step_id)


class StaticDeploymentResolver:
    """DeploymentResolver backed by a fixed mapping."""

    def __init__(self, deployments: dict[str, str] | None = None) -> None:
        self._deployments = dict(deployments or {})

    def get_deployment_id(self, process_definition_id: str) -> str | None:
        return self._deployments.get(process_definition_id)


class ExpressionError(ValueError):
    """Raised when an expression references something that does not exist."""


class VariableLookupEvaluator:
    """
    Minimal ExpressionEvaluator for running steps outside an engine.

    - "${name}" or "${a.b}" returns the variable value with its type
    - "${true}", "${false}", "${42}" and "${'text'}" return the literal
    - text containing "${...}" interpolates each lookup as a string
    - anything else is returned as-is
    """

    PLACEHOLDER = re.compile(r"\$\{\s*([^}]*?)\s*\}")
    INTEGER = re.compile(r"-?\d+")

    def evaluate(self, expression: str, context: ExecutionContext) -> Any:
        whole = self.PLACEHOLDER.fullmatch(expression.strip())
        if whole is not None:
            return self._lookup(whole.group(1), context)

        return self.PLACEHOLDER.sub(
            lambda m: str(self._lookup(m.group(1), context)),
            expression,
        )

    def _lookup(self, path: str, context: ExecutionContext) -> Any:
        if path == "true":
            return True
        if path == "false":
            return False
        if path == "null":
            return None
        if self.INTEGER.fullmatch(path):
            return int(path)
        if len(path) >= 2 and path[0] == path[-1] and path[0] in "'\"":
            return path[1:-1]

        head, *rest = path.split(".")
        if head not in context.variables:
            raise ExpressionError(f"Unknown variable '{head}' in expression '${{{path}}}'")

        value = context.variables[head]
        for part in rest:
            if isinstance(value, dict) and part in value:
                value = value[part]
            elif hasattr(value, part):
                value = getattr(value, part)
            else:
                raise ExpressionError(f"Cannot resolve '{part}' in expression '${{{path}}}'")
        return value


class RecordedEvaluationService:
    """DecisionEvaluationService that replays a stored audit result."""

    def __init__(self, audit: AuditResult) -> None:
        self.audit = audit
        self.requests: list[EvaluationRequest] = []

    def evaluate(self, request: EvaluationRequest) -> AuditResult:
        self.requests.append(request)
        return self.audit
