"""Errors raised by the decision task. All of them abort the current step."""

from __future__ import annotations


class DecisionTaskError(Exception):
    """Base exception for decision task failures."""

    def __init__(
        self,
        message: str,
        step_id: str | None = None,
        decision_key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.step_id = step_id
        self.decision_key = decision_key


class ConfigurationError(DecisionTaskError):
    """Neither a decision table nor a decision service reference is configured."""


class DecisionKeyTypeError(DecisionTaskError, TypeError):
    """The decision key expression did not evaluate to a string."""


class EmptyValueError(DecisionTaskError, ValueError):
    """The decision key evaluated to an empty value."""


class ExecutionFailure(DecisionTaskError):
    """The decision service reported a failed evaluation."""

    def __init__(
        self,
        message: str,
        step_id: str | None = None,
        decision_key: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message, step_id=step_id, decision_key=decision_key)
        self.cause = cause


class NoHitError(DecisionTaskError):
    """No rule matched and the step is configured to treat that as an error."""
