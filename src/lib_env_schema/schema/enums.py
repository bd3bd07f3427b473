"""Enum field schema: one of a fixed, ordered set of string literals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..domain.errors import SchemaDefinitionError
from .base import BaseSchema, CoercionResult


@dataclass(frozen=True, slots=True)
class EnumSchema(BaseSchema[str]):
    """Schema restricting a variable to :attr:`values`.

    Matching is exact and case-sensitive after trimming the raw value.
    Constructing the schema without values raises
    :class:`~lib_env_schema.domain.errors.SchemaDefinitionError`.

    Examples
    --------
    >>> schema = EnumSchema(allowed=("development", "production"))
    >>> schema.coerce(" production ").value
    'production'
    >>> schema.coerce("Production").error
    'Invalid value "Production". Must be one of: development, production'
    >>> EnumSchema(allowed=())
    Traceback (most recent call last):
    ...
    lib_env_schema.domain.errors.SchemaDefinitionError: Enum must have at least one value
    """

    kind = "enum"

    allowed: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", tuple(self.allowed))
        if not self.allowed:
            raise SchemaDefinitionError("Enum must have at least one value")

    @property
    def values(self) -> tuple[str, ...]:
        """Allowed literals in declaration order."""

        return self.allowed

    def coerce(self, raw: str) -> CoercionResult[str]:
        trimmed = raw.strip()
        if trimmed in self.allowed:
            return CoercionResult.ok(trimmed)
        return CoercionResult.fail(f'Invalid value "{raw}". Must be one of: {", ".join(self.allowed)}')

    def get_type_description(self) -> str:
        return f"enum ({' | '.join(self.allowed)})"

    def _default_example(self) -> str:
        return self.allowed[0]


def enum(values: Iterable[str]) -> EnumSchema:
    """Create an enum schema from a non-empty ordered collection of literals."""

    if isinstance(values, str):
        raise SchemaDefinitionError("Enum values must be a collection of strings, not a single string")
    return EnumSchema(allowed=tuple(values))
