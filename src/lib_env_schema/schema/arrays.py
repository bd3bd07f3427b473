"""Array field schema: separator-delimited lists of typed items."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from ..domain.errors import SchemaDefinitionError
from .base import BaseSchema, CoercionResult, ValidationRule


@dataclass(frozen=True, slots=True)
class ArraySchema(BaseSchema[list[Any]]):
    """Split the raw value and validate every piece with :attr:`item_schema`.

    Pieces are trimmed and empty pieces dropped before coercion, so
    ``"a, b ,,c"`` yields ``["a", "b", "c"]``. The first bad item aborts
    coercion; its index counts only the surviving pieces.

    Examples
    --------
    >>> from lib_env_schema.schema import number, string
    >>> ArraySchema(item_schema=string()).coerce("a, b ,c").value
    ['a', 'b', 'c']
    >>> ArraySchema(item_schema=number().port()).coerce("80,99999").error
    'Invalid item at index 1: Must be at most 65535'
    """

    kind = "array"

    item_schema: BaseSchema[Any] | None = None
    separator_char: str = ","

    def __post_init__(self) -> None:
        if self.item_schema is None:
            raise SchemaDefinitionError("Array schema requires an item schema")
        if not self.separator_char:
            raise SchemaDefinitionError("Array separator must not be empty")

    def coerce(self, raw: str) -> CoercionResult[list[Any]]:
        item_schema = self._items()
        pieces = [piece.strip() for piece in raw.split(self.separator_char)]
        values: list[Any] = []
        for index, piece in enumerate(piece for piece in pieces if piece):
            result = item_schema.coerce(piece)
            if not result.success:
                return CoercionResult.fail(f"Invalid item at index {index}: {result.error}")
            failed = item_schema.first_failed_rule(result.value)
            if failed is not None:
                return CoercionResult.fail(f"Invalid item at index {index}: {failed.message}")
            values.append(result.value)
        return CoercionResult.ok(values)

    def separator(self, char: str) -> ArraySchema:
        return replace(self, separator_char=char)

    def min_length(self, minimum: int) -> ArraySchema:
        return self._with_rule(
            ValidationRule(
                "minLength", f"Must have at least {minimum} {_items_word(minimum)}", lambda v: len(v) >= minimum, minimum
            )
        )

    def max_length(self, maximum: int) -> ArraySchema:
        return self._with_rule(
            ValidationRule(
                "maxLength", f"Must have at most {maximum} {_items_word(maximum)}", lambda v: len(v) <= maximum, maximum
            )
        )

    def non_empty(self) -> ArraySchema:
        return self.min_length(1)

    def get_type_description(self) -> str:
        return f"array of {self._items().get_type_description()}"

    def _default_example(self) -> str:
        item = self._items().get_example()
        return f"{item}{self.separator_char}{item}"

    def _items(self) -> BaseSchema[Any]:
        assert self.item_schema is not None
        return self.item_schema


def _items_word(count: int) -> str:
    return "item" if count == 1 else "items"


def array(item_schema: BaseSchema[Any]) -> ArraySchema:
    """Create an array schema whose pieces are validated by *item_schema*."""

    return ArraySchema(item_schema=item_schema)
