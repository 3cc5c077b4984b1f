"""Encoding of arbitrary output values into the JSON data model."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from pydantic import TypeAdapter


JsonValue = bool | int | float | str | list[Any] | dict[str, Any] | None

_ANY: TypeAdapter[Any] = TypeAdapter(Any)


def _decimals_to_numbers(value: Any) -> Any:
    """Replace decimals with ints or floats so they encode as JSON numbers."""
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, dict):
        return {name: _decimals_to_numbers(item) for name, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_decimals_to_numbers(item) for item in value]
    return value


class JsonCodec:
    """Converts decision outputs to JSON-compatible values and text."""

    def to_json_value(self, value: Any) -> JsonValue:
        """
        Encode a value into plain dicts, lists and scalars.

        Pydantic models, dataclasses and dates are handled by pydantic's
        encoder; mapping keys become strings. Decimals become numbers, not
        the strings pydantic's JSON mode would produce.
        """
        plain = _ANY.dump_python(value)
        return _ANY.dump_python(_decimals_to_numbers(plain), mode="json")

    def object_node(self, outputs: dict[str, Any]) -> dict[str, JsonValue]:
        return {str(name): self.to_json_value(value) for name, value in outputs.items()}

    def array_node(self, rule_hits: list[dict[str, Any]]) -> list[dict[str, JsonValue]]:
        return [self.object_node(hit) for hit in rule_hits]

    def dumps(self, value: Any) -> str:
        return json.dumps(self.to_json_value(value))
