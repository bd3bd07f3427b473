"""Boolean field schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .base import BaseSchema, CoercionResult

BOOLEAN_TRUE_VALUES: Final[tuple[str, ...]] = ("true", "1", "yes", "on")
BOOLEAN_FALSE_VALUES: Final[tuple[str, ...]] = ("false", "0", "no", "off")


@dataclass(frozen=True, slots=True)
class BooleanSchema(BaseSchema[bool]):
    """Accept ``true/false``, ``1/0``, ``yes/no``, ``on/off`` in any case.

    Examples
    --------
    >>> BooleanSchema().coerce(" TRUE ").value, BooleanSchema().coerce("off").value
    (True, False)
    >>> BooleanSchema().coerce("maybe").success
    False
    """

    kind = "boolean"

    def coerce(self, raw: str) -> CoercionResult[bool]:
        normalized = raw.strip().lower()
        if normalized in BOOLEAN_TRUE_VALUES:
            return CoercionResult.ok(True)
        if normalized in BOOLEAN_FALSE_VALUES:
            return CoercionResult.ok(False)
        valid = ", ".join((*BOOLEAN_TRUE_VALUES, *BOOLEAN_FALSE_VALUES))
        return CoercionResult.fail(f'Cannot convert "{raw}" to boolean. Valid values: {valid}')

    def get_type_description(self) -> str:
        return "boolean (true/false, 1/0, yes/no, on/off)"

    def _default_example(self) -> str:
        return "true"


def boolean() -> BooleanSchema:
    """Create a new boolean schema."""

    return BooleanSchema()
