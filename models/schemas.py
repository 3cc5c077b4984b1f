"""Pydantic schemas for decision task configuration, requests and audit results."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Step Configuration Schemas
# =============================================================================


class ConfigurationEntry(BaseModel):
    """A named field attached to a workflow step, given as a literal or an expression."""

    name: str = Field(description="Field name, e.g. decisionTableReferenceKey")
    literal_value: str | None = Field(default=None, description="Literal string value")
    expression: str | None = Field(default=None, description="Expression source")

    def has_literal(self) -> bool:
        return bool(self.literal_value)

    def has_expression(self) -> bool:
        return bool(self.expression)

    def has_value(self) -> bool:
        """True when either the literal or the expression is non-empty."""
        return self.has_literal() or self.has_expression()


class DecisionReferenceKind(str, Enum):
    """Kind of decision artifact a step points at; the value is the field it is read from."""

    SERVICE = "decisionServiceReferenceKey"
    TABLE = "decisionTableReferenceKey"

    @property
    def field_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return "decision service" if self is DecisionReferenceKind.SERVICE else "decision table"


class DecisionReference(BaseModel):
    """The reference selected to drive one invocation."""

    kind: DecisionReferenceKind = Field(description="Active reference kind")
    raw_key_source: str = Field(description="Expression or literal the key is computed from")
    entry: ConfigurationEntry = Field(description="Entry the reference was read from")


# =============================================================================
# Execution Schemas
# =============================================================================


class ExecutionContext(BaseModel):
    """View of the token executing the step. Variables are owned by the engine."""

    process_definition_id: str = Field(description="Process definition id")
    process_instance_id: str = Field(description="Process instance id")
    execution_id: str = Field(description="Execution id")
    activity_id: str = Field(description="Id of the step being executed")
    tenant_id: str | None = Field(default=None, description="Tenant of the process instance")
    variables: dict[str, Any] = Field(default_factory=dict, description="Variable scope")

    def get_variable(self, name: str) -> Any:
        return self.variables.get(name)

    def set_variable(self, name: str, value: Any) -> None:
        self.variables[name] = value


class EvaluationRequest(BaseModel):
    """Request submitted to the decision-evaluation service."""

    decision_key: str = Field(description="Resolved decision or decision service key")
    instance_id: str = Field(description="Process instance id")
    execution_id: str = Field(description="Execution id")
    activity_id: str = Field(description="Step id")
    variables: dict[str, Any] = Field(default_factory=dict, description="Variable snapshot")
    tenant_id: str | None = Field(default=None, description="Tenant id")
    fallback_to_default_tenant: bool = Field(
        default=False, description="Fall back to the default tenant when no deployment matches"
    )
    parent_deployment_id: str | None = Field(
        default=None, description="Restrict lookup to this deployment"
    )

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


RuleHit = dict[str, Any]


class AuditResult(BaseModel):
    """Audit trail returned by the decision-evaluation service."""

    decision_key: str | None = Field(default=None, description="Evaluated decision key")
    decision_name: str | None = Field(default=None, description="Evaluated decision name")
    failed: bool = Field(default=False, description="Whether evaluation failed")
    exception_message: str | None = Field(default=None, description="Failure cause")
    multiple_results: bool = Field(
        default=False, description="Decision uses a multi-hit policy"
    )
    decision_result: list[RuleHit] = Field(
        default_factory=list, description="Output mappings, one per rule hit"
    )
    decision_service_result: dict[str, list[RuleHit]] | None = Field(
        default=None, description="Rule hits per decision, only for decision services"
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def is_decision_service(self) -> bool:
        return self.decision_service_result is not None


# =============================================================================
# Expression Value Schemas
# =============================================================================


class TextValue(BaseModel):
    kind: Literal["text"] = "text"
    value: str


class BooleanValue(BaseModel):
    kind: Literal["boolean"] = "boolean"
    value: bool


class NullValue(BaseModel):
    kind: Literal["null"] = "null"


class OtherValue(BaseModel):
    kind: Literal["other"] = "other"
    value: Any


ExpressionValue = Annotated[
    Union[TextValue, BooleanValue, NullValue, OtherValue],
    Field(discriminator="kind"),
]


# =============================================================================
# Engine Options and Outcome Schemas
# =============================================================================


class EngineOptions(BaseModel):
    """Engine-wide toggles handed to each invocation explicitly."""

    always_use_arrays_for_multi_hit: bool = Field(
        default=True, description="Bind multi-hit results as arrays"
    )
    enable_definition_info_cache: bool = Field(
        default=False, description="Apply dynamic overrides to the decision key"
    )
    variable_binder: Callable[..., None] | None = Field(
        default=None, description="Custom hook replacing the default result binding"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Any, variable_binder: Callable[..., None] | None = None) -> EngineOptions:
        return cls(
            always_use_arrays_for_multi_hit=settings.always_use_arrays_for_multi_hit,
            enable_definition_info_cache=settings.enable_definition_info_cache,
            variable_binder=variable_binder,
        )


class DecisionTaskOutcome(BaseModel):
    """Summary of a completed decision task invocation."""

    decision_key: str = Field(description="Key the service was called with")
    reference_kind: DecisionReferenceKind = Field(description="Reference kind used")
    rule_hits: int = Field(default=0, description="Number of rule hits in the plain result")
    bound_variables: list[str] = Field(
        default_factory=list, description="Variables written to the execution"
    )
