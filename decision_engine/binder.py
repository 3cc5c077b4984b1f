"""Binding of decision results into workflow variables."""

from __future__ import annotations

import copy
import logging
from typing import Any

from models.schemas import AuditResult, EngineOptions, ExecutionContext, RuleHit
from decision_engine.json_codec import JsonCodec


logger = logging.getLogger(__name__)


def plan_decision_bindings(
    decision_result: list[RuleHit],
    decision_key: str,
    multiple_results: bool,
    codec: JsonCodec,
) -> dict[str, Any]:
    """
    Variables to write for a single decision result.

    Rules:
    - IF no rule hit and arrays are not forced: nothing
    - IF several rule hits or arrays are forced: one array variable named after the decision key
    - IF exactly one rule hit: each output becomes its own variable
    """
    if not decision_result and not multiple_results:
        return {}

    if len(decision_result) > 1 or multiple_results:
        return {decision_key: codec.array_node(decision_result)}

    return copy.deepcopy(dict(decision_result[0]))


def plan_decision_service_bindings(
    decision_service_result: dict[str, list[RuleHit]],
    decision_service_key: str,
    multiple_results: bool,
    codec: JsonCodec,
) -> dict[str, Any]:
    """
    Variables to write for a decision service result.

    Rules:
    - IF no decision and arrays are not forced: nothing
    - IF several decisions or arrays are forced: one object variable named after the
      service key, mapping each decision to its array of rule hits
    - IF exactly one decision: the outputs of its first rule hit become variables
    """
    if not decision_service_result and not multiple_results:
        return {}

    if len(decision_service_result) > 1 or multiple_results:
        return {
            decision_service_key: {
                str(decision): codec.array_node(rule_hits)
                for decision, rule_hits in decision_service_result.items()
            }
        }

    (rule_hits,) = decision_service_result.values()
    if not rule_hits:
        return {}
    return copy.deepcopy(dict(rule_hits[0]))


class ResultBinder:
    """Writes an AuditResult into the variables of an execution."""

    def __init__(self, codec: JsonCodec | None = None) -> None:
        self.codec = codec or JsonCodec()

    def plan(self, audit: AuditResult, decision_key: str, multiple_results: bool) -> dict[str, Any]:
        if audit.is_decision_service:
            return plan_decision_service_bindings(
                audit.decision_service_result or {}, decision_key, multiple_results, self.codec
            )
        return plan_decision_bindings(audit.decision_result, decision_key, multiple_results, self.codec)

    def bind(
        self,
        audit: AuditResult,
        decision_key: str,
        context: ExecutionContext,
        options: EngineOptions,
    ) -> list[str]:
        """
        Bind the result and return the names of the variables written.

        A configured variable binder hook takes over completely; the names it
        writes are not tracked.
        """
        if options.variable_binder is not None:
            logger.debug("Delegating binding of %s to custom variable binder", decision_key)
            options.variable_binder(list(audit.decision_result), decision_key, context, self.codec)
            return []

        multiple_results = audit.multiple_results and options.always_use_arrays_for_multi_hit
        variables = self.plan(audit, decision_key, multiple_results)

        for name, value in variables.items():
            context.set_variable(name, value)

        logger.debug("Bound %s from %s on step %s", list(variables), decision_key, context.activity_id)
        return list(variables)
