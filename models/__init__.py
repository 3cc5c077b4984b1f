"""Models module containing Pydantic schemas for all data structures."""

from models.schemas import (
    AuditResult,
    BooleanValue,
    ConfigurationEntry,
    DecisionReference,
    DecisionReferenceKind,
    DecisionTaskOutcome,
    EngineOptions,
    EvaluationRequest,
    ExecutionContext,
    ExpressionValue,
    NullValue,
    OtherValue,
    RuleHit,
    TextValue,
)

__all__ = [
    "AuditResult",
    "BooleanValue",
    "ConfigurationEntry",
    "DecisionReference",
    "DecisionReferenceKind",
    "DecisionTaskOutcome",
    "EngineOptions",
    "EvaluationRequest",
    "ExecutionContext",
    "ExpressionValue",
    "NullValue",
    "OtherValue",
    "RuleHit",
    "TextValue",
]
