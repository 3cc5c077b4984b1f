"""Conversion of raw expression results into typed values."""

from __future__ import annotations

from typing import Any

from models.schemas import BooleanValue, ExpressionValue, ExecutionContext, NullValue, OtherValue, TextValue
from decision_engine.ports import ExpressionEvaluator


def to_expression_value(raw: Any) -> ExpressionValue:
    """Tag a dynamically typed evaluation result."""
    if raw is None:
        return NullValue()
    # bool before anything numeric: bool is an int subclass
    if isinstance(raw, bool):
        return BooleanValue(value=raw)
    if isinstance(raw, str):
        return TextValue(value=raw)
    return OtherValue(value=raw)


def evaluate_expression(
    evaluator: ExpressionEvaluator,
    expression: str,
    context: ExecutionContext,
) -> ExpressionValue:
    return to_expression_value(evaluator.evaluate(expression, context))
