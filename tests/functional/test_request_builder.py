"""Functional tests for evaluation request building."""

from __future__ import annotations

import pytest

from conftest import DEPLOYMENT_ID, PROCESS_DEFINITION_ID, make_context, make_entry, make_source
from decision_engine.adapters import StaticDeploymentResolver
from decision_engine.request_builder import RequestBuilder, parse_boolean
from models.schemas import ConfigurationEntry


def _builder(*entries: ConfigurationEntry) -> RequestBuilder:
    return RequestBuilder(
        make_source(*entries),
        StaticDeploymentResolver({PROCESS_DEFINITION_ID: DEPLOYMENT_ID}),
    )


class TestRequestIdentity:
    """Test fields copied from the execution."""

    def test_identity_and_variables(self, table_entry: ConfigurationEntry) -> None:
        """Test: Identity, tenant and variables come from the context."""
        context = make_context({"amount": 250, "customer": {"tier": "gold"}}, tenant_id="acme")
        request = _builder(table_entry).build("approveOrder", context)

        assert request.decision_key == "approveOrder"
        assert request.instance_id == "pi-1"
        assert request.execution_id == "ex-1"
        assert request.activity_id == "decideTask"
        assert request.tenant_id == "acme"
        assert request.variables == {"amount": 250, "customer": {"tier": "gold"}}

    def test_variables_are_a_snapshot(self, table_entry: ConfigurationEntry) -> None:
        """Test: Later changes to the context do not leak into the request."""
        context = make_context({"amount": 250})
        request = _builder(table_entry).build("approveOrder", context)
        context.set_variable("amount", 999)
        assert request.variables == {"amount": 250}


class TestTenantFallback:
    """Test fallbackToDefaultTenant handling."""

    def test_absent_means_no_fallback(self, table_entry: ConfigurationEntry) -> None:
        """Test: No entry, no fallback."""
        request = _builder(table_entry).build("approveOrder", make_context())
        assert request.fallback_to_default_tenant is False

    @pytest.mark.parametrize(("literal", "expected"), [("true", True), ("TRUE", True), ("false", False), ("yes", False)])
    def test_literal_values(self, table_entry: ConfigurationEntry, literal: str, expected: bool) -> None:
        """Test: Only a case-insensitive "true" enables fallback."""
        entry = make_entry("fallbackToDefaultTenant", literal=literal)
        request = _builder(table_entry, entry).build("approveOrder", make_context())
        assert request.fallback_to_default_tenant is expected

    def test_expression_is_not_evaluated(self, table_entry: ConfigurationEntry) -> None:
        """Test: Fallback is read from the literal value only."""
        entry = make_entry("fallbackToDefaultTenant", expression="${true}")
        request = _builder(table_entry, entry).build("approveOrder", make_context())
        assert request.fallback_to_default_tenant is False


class TestDeploymentScoping:
    """Test sameDeployment handling."""

    def test_absent_attaches_parent_deployment(self, table_entry: ConfigurationEntry) -> None:
        """Test: Without the entry the parent deployment is attached."""
        request = _builder(table_entry).build("approveOrder", make_context())
        assert request.parent_deployment_id == DEPLOYMENT_ID

    def test_true_attaches_parent_deployment(self, table_entry: ConfigurationEntry) -> None:
        """Test: sameDeployment=true attaches the parent deployment."""
        entry = make_entry("sameDeployment", literal="true")
        request = _builder(table_entry, entry).build("approveOrder", make_context())
        assert request.parent_deployment_id == DEPLOYMENT_ID

    def test_false_omits_parent_deployment(self, table_entry: ConfigurationEntry) -> None:
        """Test: sameDeployment=false means a global lookup."""
        entry = make_entry("sameDeployment", literal="false")
        request = _builder(table_entry, entry).build("approveOrder", make_context())
        assert request.parent_deployment_id is None

    def test_present_without_value_omits_parent_deployment(self, table_entry: ConfigurationEntry) -> None:
        """Test: An entry with no literal is not true."""
        entry = make_entry("sameDeployment")
        request = _builder(table_entry, entry).build("approveOrder", make_context())
        assert request.parent_deployment_id is None

    def test_unknown_definition_gives_no_deployment(self, table_entry: ConfigurationEntry) -> None:
        """Test: An unresolvable definition leaves the deployment unset."""
        builder = RequestBuilder(make_source(table_entry), StaticDeploymentResolver())
        request = builder.build("approveOrder", make_context())
        assert request.parent_deployment_id is None


class TestParseBoolean:
    """Test boolean parsing of literal values."""

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("True", True), (" true ", False), ("TRUE", True), ("1", False), (None, False), ("", False)])
    def test_parse_boolean(self, value: str | None, expected: bool) -> None:
        """Test: Boolean parsing mirrors strict "true" matching."""
        assert parse_boolean(value) is expected
