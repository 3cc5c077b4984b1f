"""Decision task step: resolve, evaluate, check, bind, leave."""

from __future__ import annotations

import logging

from models.schemas import AuditResult, DecisionTaskOutcome, EngineOptions, EvaluationRequest, ExecutionContext
from decision_engine.binder import ResultBinder
from decision_engine.errors import ExecutionFailure
from decision_engine.json_codec import JsonCodec
from decision_engine.policy import NoHitPolicy
from decision_engine.ports import (
    ConfigurationSource,
    DecisionEvaluationService,
    DeploymentResolver,
    DynamicOverrideStore,
    ExpressionEvaluator,
    LeaveCallback,
)
from decision_engine.request_builder import RequestBuilder
from decision_engine.resolver import DecisionReferenceResolver


logger = logging.getLogger(__name__)


class DecisionTaskActivity:
    """
    Behaviour of a rules-evaluation step.

    Holds only its collaborators; every invocation of execute() works on its
    own context, so one instance can serve concurrent executions.
    """

    def __init__(
        self,
        source: ConfigurationSource,
        evaluator: ExpressionEvaluator,
        deployment_resolver: DeploymentResolver,
        evaluation_service: DecisionEvaluationService,
        override_store: DynamicOverrideStore | None = None,
        on_leave: LeaveCallback | None = None,
        codec: JsonCodec | None = None,
    ) -> None:
        self.evaluation_service = evaluation_service
        self.on_leave = on_leave

        self.resolver = DecisionReferenceResolver(source, evaluator, override_store)
        self.request_builder = RequestBuilder(source, deployment_resolver)
        self.no_hit_policy = NoHitPolicy(source, evaluator)
        self.binder = ResultBinder(codec)

    def execute(self, context: ExecutionContext, options: EngineOptions) -> DecisionTaskOutcome:
        """Run the step for one execution; any DecisionTaskError aborts it."""
        reference, decision_key = self.resolver.resolve(context, options)

        request = self.request_builder.build(decision_key, context)
        audit = self.evaluate(request)

        self.no_hit_policy.check(audit, decision_key, context)
        bound = self.binder.bind(audit, decision_key, context, options)

        logger.info(
            "Step %s evaluated %s %s: %d rule hit(s), bound %s",
            context.activity_id,
            reference.kind.label,
            decision_key,
            len(audit.decision_result),
            bound,
        )

        self.leave(context)
        return DecisionTaskOutcome(
            decision_key=decision_key,
            reference_kind=reference.kind,
            rule_hits=len(audit.decision_result),
            bound_variables=bound,
        )

    def evaluate(self, request: EvaluationRequest) -> AuditResult:
        """Call the decision service and surface a reported failure."""
        audit = self.evaluation_service.evaluate(request)
        if audit.failed:
            raise ExecutionFailure(
                f"DMN decision with key {request.decision_key} execution failed. "
                f"Cause: {audit.exception_message}",
                step_id=request.activity_id,
                decision_key=request.decision_key,
                cause=audit.exception_message,
            )
        return audit

    def leave(self, context: ExecutionContext) -> None:
        if self.on_leave is not None:
            self.on_leave(context)
