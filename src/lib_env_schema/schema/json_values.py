"""JSON field schema.

The raw value is trimmed and parsed with :func:`json.loads`. Empty input and the
non-standard constants ``NaN``/``Infinity`` (which :mod:`json` would accept by
default) are coercion failures.
"""

from __future__ import annotations

import json as jsonlib
from dataclasses import dataclass
from typing import Any, Callable

from .base import BaseSchema, CoercionResult, ValidationRule


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(f"{name} is not valid JSON")


@dataclass(frozen=True, slots=True)
class JsonSchema(BaseSchema[Any]):
    """Schema for JSON-encoded variables.

    Examples
    --------
    >>> JsonSchema().coerce('{"a": [1, 2]}').value
    {'a': [1, 2]}
    >>> JsonSchema().coerce("").error
    'Cannot parse empty string as JSON'
    >>> JsonSchema().object().first_failed_rule([1]).message
    'Must be a JSON object'
    """

    kind = "json"

    def coerce(self, raw: str) -> CoercionResult[Any]:
        trimmed = raw.strip()
        if trimmed == "":
            return CoercionResult.fail("Cannot parse empty string as JSON")
        try:
            return CoercionResult.ok(jsonlib.loads(trimmed, parse_constant=_reject_constant))
        except ValueError as exc:
            detail = exc.msg if isinstance(exc, jsonlib.JSONDecodeError) else str(exc)
            return CoercionResult.fail(f"Invalid JSON: {detail}")

    def array(self) -> JsonSchema:
        return self._with_rule(ValidationRule("array", "Must be a JSON array", lambda v: isinstance(v, list)))

    def object(self) -> JsonSchema:
        return self._with_rule(ValidationRule("object", "Must be a JSON object", lambda v: isinstance(v, dict)))

    def validate(self, check: Callable[[Any], bool], message: str) -> JsonSchema:
        """Append a custom predicate over the parsed document."""

        return self.refine(check, message, name="validate")

    def get_type_description(self) -> str:
        return "JSON"

    def _default_example(self) -> str:
        return '{"key":"value"}'


def json() -> JsonSchema:
    """Create a new JSON schema."""

    return JsonSchema()
