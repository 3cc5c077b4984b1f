"""Policy that turns an empty decision result into an error."""

from __future__ import annotations

import logging

from models.schemas import AuditResult, BooleanValue, ExecutionContext
from decision_engine.errors import NoHitError
from decision_engine.expressions import evaluate_expression
from decision_engine.extractor import THROW_ERROR_ON_NO_HITS, get_configuration_entry
from decision_engine.ports import ConfigurationSource, ExpressionEvaluator


logger = logging.getLogger(__name__)


class NoHitPolicy:
    """Applies the decisionTaskThrowErrorOnNoHits field of a step."""

    def __init__(self, source: ConfigurationSource, evaluator: ExpressionEvaluator) -> None:
        self.source = source
        self.evaluator = evaluator

    def policy_string(self, context: ExecutionContext) -> str | None:
        """Literal if set, otherwise the expression, otherwise None."""
        entry = get_configuration_entry(self.source, context, THROW_ERROR_ON_NO_HITS)
        if entry is None:
            return None
        if entry.has_literal():
            return entry.literal_value
        if entry.has_expression():
            return entry.expression
        return None

    def check(self, audit: AuditResult, decision_key: str, context: ExecutionContext) -> None:
        """
        Raise NoHitError when no rule matched and the step asks for it.

        Only the plain decision result is inspected; decision service results
        are not considered.
        """
        if audit.decision_result:
            return

        policy = self.policy_string(context)
        if policy is None or policy.lower() == "false":
            return

        if policy.lower() == "true" or self._evaluates_to_true(policy, context):
            raise NoHitError(
                f"DMN decision with key {decision_key} did not hit any rules for the provided input.",
                step_id=context.activity_id,
                decision_key=decision_key,
            )

    def _evaluates_to_true(self, expression: str, context: ExecutionContext) -> bool:
        value = evaluate_expression(self.evaluator, expression, context)
        logger.debug("No-hit policy %r evaluated to %r", expression, value)
        return isinstance(value, BooleanValue) and value.value
