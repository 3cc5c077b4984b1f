"""Decision task dispatch and result binding."""

from decision_engine.activity import DecisionTaskActivity
from decision_engine.binder import ResultBinder
from decision_engine.errors import (
    ConfigurationError,
    DecisionKeyTypeError,
    DecisionTaskError,
    EmptyValueError,
    ExecutionFailure,
    NoHitError,
)
from decision_engine.json_codec import JsonCodec
from decision_engine.resolver import DecisionReferenceResolver

__all__ = [
    "ConfigurationError",
    "DecisionKeyTypeError",
    "DecisionReferenceResolver",
    "DecisionTaskActivity",
    "DecisionTaskError",
    "EmptyValueError",
    "ExecutionFailure",
    "JsonCodec",
    "NoHitError",
    "ResultBinder",
]
