"""Selection of the decision reference and computation of the decision key."""

from __future__ import annotations

import logging

from models.schemas import (
    DecisionReference,
    DecisionReferenceKind,
    EngineOptions,
    ExecutionContext,
    ExpressionValue,
    NullValue,
    TextValue,
)
from decision_engine.errors import ConfigurationError, DecisionKeyTypeError, EmptyValueError
from decision_engine.expressions import evaluate_expression
from decision_engine.extractor import get_present_entry
from decision_engine.ports import (
    ConfigurationSource,
    DynamicOverrideStore,
    ExpressionEvaluator,
    get_active_value,
)


logger = logging.getLogger(__name__)

DYNAMIC_DECISION_KEY_PROPERTY = "dmnTaskDecisionTableKey"

# Checked in this order and the last present one wins, so a table reference
# overrides a service reference when a step configures both.
REFERENCE_CANDIDATES: tuple[DecisionReferenceKind, ...] = (
    DecisionReferenceKind.SERVICE,
    DecisionReferenceKind.TABLE,
)


class DecisionReferenceResolver:
    """Decides which decision a step invokes and with what key."""

    def __init__(
        self,
        source: ConfigurationSource,
        evaluator: ExpressionEvaluator,
        override_store: DynamicOverrideStore | None = None,
    ) -> None:
        self.source = source
        self.evaluator = evaluator
        self.override_store = override_store

    def select_reference(self, context: ExecutionContext) -> DecisionReference:
        """Pick the active reference among the configured candidates."""
        selected: DecisionReference | None = None

        for kind in REFERENCE_CANDIDATES:
            entry = get_present_entry(self.source, context, kind.field_name)
            if entry is None:
                continue
            raw_key_source = entry.expression if entry.has_expression() else entry.literal_value
            selected = DecisionReference(kind=kind, raw_key_source=raw_key_source or "", entry=entry)

        if selected is None:
            raise ConfigurationError(
                f"at least one decision reference is required: configure "
                f"{DecisionReferenceKind.TABLE.field_name} or "
                f"{DecisionReferenceKind.SERVICE.field_name} on step '{context.activity_id}'",
                step_id=context.activity_id,
            )

        logger.debug(
            "Step %s uses %s reference %r",
            context.activity_id,
            selected.kind.label,
            selected.raw_key_source,
        )
        return selected

    def resolve(
        self,
        context: ExecutionContext,
        options: EngineOptions,
    ) -> tuple[DecisionReference, str]:
        """
        Resolve the decision key for the executing step.

        Returns:
            The active reference and the evaluated, non-empty decision key.
        """
        reference = self.select_reference(context)
        key_source = self._apply_override(reference.raw_key_source, context, options)
        value = evaluate_expression(self.evaluator, key_source, context)
        decision_key = self._to_decision_key(value, reference.kind, key_source, context)
        return reference, decision_key

    def _apply_override(
        self,
        key_source: str,
        context: ExecutionContext,
        options: EngineOptions,
    ) -> str:
        if not options.enable_definition_info_cache or self.override_store is None:
            return key_source

        properties = self.override_store.get_element_properties(
            context.activity_id, context.process_definition_id
        )
        active = get_active_value(key_source, DYNAMIC_DECISION_KEY_PROPERTY, properties)
        if active != key_source:
            logger.info(
                "Decision key of step %s overridden: %r -> %r",
                context.activity_id,
                key_source,
                active,
            )
        return active

    @staticmethod
    def _to_decision_key(
        value: ExpressionValue,
        kind: DecisionReferenceKind,
        key_source: str,
        context: ExecutionContext,
    ) -> str:
        if isinstance(value, NullValue):
            raise EmptyValueError(
                f"{kind.field_name} expression '{key_source}' on step "
                f"'{context.activity_id}' resolves to an empty value: None",
                step_id=context.activity_id,
                decision_key=key_source,
            )

        if not isinstance(value, TextValue):
            raise DecisionKeyTypeError(
                f"{kind.field_name} expression '{key_source}' on step "
                f"'{context.activity_id}' does not resolve to a string: {value.value!r}",
                step_id=context.activity_id,
                decision_key=key_source,
            )

        if not value.value:
            raise EmptyValueError(
                f"{kind.field_name} expression '{key_source}' on step "
                f"'{context.activity_id}' resolves to an empty value: {value.value!r}",
                step_id=context.activity_id,
                decision_key=key_source,
            )

        return value.value
