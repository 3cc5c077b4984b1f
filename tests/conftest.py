"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DECISION_SERVICE_URL", "http://dmn.test/dmn-api")

from decision_engine.activity import DecisionTaskActivity  # noqa: E402
from decision_engine.adapters import (  # noqa: E402
    InMemoryConfigurationSource,
    InMemoryOverrideStore,
    RecordedEvaluationService,
    StaticDeploymentResolver,
    StepDefinition,
    VariableLookupEvaluator,
)
from models.schemas import AuditResult, ConfigurationEntry, EngineOptions, ExecutionContext  # noqa: E402


STEP_ID = "decideTask"
PROCESS_DEFINITION_ID = "orderProcess:1:101"
DEPLOYMENT_ID = "dep-101"


def make_entry(
    name: str,
    literal: str | None = None,
    expression: str | None = None,
) -> ConfigurationEntry:
    """Factory for creating ConfigurationEntry test fixtures."""
    return ConfigurationEntry(name=name, literal_value=literal, expression=expression)


def make_step(*entries: ConfigurationEntry, step_id: str = STEP_ID) -> StepDefinition:
    """Factory for creating StepDefinition test fixtures."""
    return StepDefinition(step_id=step_id, fields=list(entries))


def make_source(*entries: ConfigurationEntry) -> InMemoryConfigurationSource:
    """Configuration source holding a single step with the given entries."""
    return InMemoryConfigurationSource([make_step(*entries)])


def make_context(
    variables: dict[str, Any] | None = None,
    tenant_id: str | None = "acme",
) -> ExecutionContext:
    """Factory for creating ExecutionContext test fixtures."""
    return ExecutionContext(
        process_definition_id=PROCESS_DEFINITION_ID,
        process_instance_id="pi-1",
        execution_id="ex-1",
        activity_id=STEP_ID,
        tenant_id=tenant_id,
        variables=dict(variables or {}),
    )


def make_audit(
    decision_result: list[dict[str, Any]] | None = None,
    decision_service_result: dict[str, list[dict[str, Any]]] | None = None,
    multiple_results: bool = False,
    failed: bool = False,
    exception_message: str | None = None,
) -> AuditResult:
    """Factory for creating AuditResult test fixtures."""
    return AuditResult(
        decision_result=decision_result or [],
        decision_service_result=decision_service_result,
        multiple_results=multiple_results,
        failed=failed,
        exception_message=exception_message,
    )


def make_activity(
    entries: list[ConfigurationEntry],
    audit: AuditResult,
    override_store: InMemoryOverrideStore | None = None,
    on_leave: Any = None,
) -> tuple[DecisionTaskActivity, RecordedEvaluationService]:
    """Activity wired with in-memory collaborators and a recorded service."""
    service = RecordedEvaluationService(audit)
    activity = DecisionTaskActivity(
        source=make_source(*entries),
        evaluator=VariableLookupEvaluator(),
        deployment_resolver=StaticDeploymentResolver({PROCESS_DEFINITION_ID: DEPLOYMENT_ID}),
        evaluation_service=service,
        override_store=override_store,
        on_leave=on_leave,
    )
    return activity, service


@pytest.fixture
def options() -> EngineOptions:
    """Engine options with array semantics for multi-hit policies enabled."""
    return EngineOptions(always_use_arrays_for_multi_hit=True)


@pytest.fixture
def evaluator() -> VariableLookupEvaluator:
    return VariableLookupEvaluator()


@pytest.fixture
def table_entry() -> ConfigurationEntry:
    return make_entry("decisionTableReferenceKey", literal="approveOrder")


@pytest.fixture
def service_entry() -> ConfigurationEntry:
    return make_entry("decisionServiceReferenceKey", literal="orderChecks")
