"""Lookup of configuration entries attached to the current step."""

from __future__ import annotations

from models.schemas import ConfigurationEntry, ExecutionContext
from decision_engine.ports import ConfigurationSource


DECISION_TABLE_REFERENCE_KEY = "decisionTableReferenceKey"
DECISION_SERVICE_REFERENCE_KEY = "decisionServiceReferenceKey"
THROW_ERROR_ON_NO_HITS = "decisionTaskThrowErrorOnNoHits"
FALLBACK_TO_DEFAULT_TENANT = "fallbackToDefaultTenant"
SAME_DEPLOYMENT = "sameDeployment"


def get_configuration_entry(
    source: ConfigurationSource,
    context: ExecutionContext,
    name: str,
) -> ConfigurationEntry | None:
    """Return the entry named `name` on the executing step, if any."""
    return source.get_entry(context.activity_id, name)


def get_present_entry(
    source: ConfigurationSource,
    context: ExecutionContext,
    name: str,
) -> ConfigurationEntry | None:
    """Return the entry only if its literal or expression is non-empty."""
    entry = get_configuration_entry(source, context, name)
    if entry is None or not entry.has_value():
        return None
    return entry
