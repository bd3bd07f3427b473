"""Number field schema.

Coercion accepts decimal literals with an optional sign, fraction and exponent
(``"-1.5"``, ``"1e5"``) plus ``0x``/``0o``/``0b`` integer literals. Anything
that does not yield a finite number is rejected. Plain number schemas produce
``float`` values; schemas refined with :meth:`NumberSchema.integer` produce
``int`` for integral input so ports and counts can be used directly.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace

from .base import BaseSchema, CoercionResult, ValidationRule

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_PREFIXED_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY_RE = re.compile(r"^[+-]?Infinity$")


@dataclass(frozen=True, slots=True)
class NumberSchema(BaseSchema[float]):
    """Schema for numeric variables.

    Examples
    --------
    >>> NumberSchema().coerce("1e5").value
    100000.0
    >>> NumberSchema().coerce("NaN").error
    'Cannot convert "NaN" to number'
    >>> NumberSchema().between(5, 10).get_type_description()
    'number, 5-10'
    """

    kind = "number"

    is_integer: bool = False
    minimum: float | None = None
    maximum: float | None = None

    def coerce(self, raw: str) -> CoercionResult[float]:
        text = raw.strip()
        if text == "":
            return CoercionResult.fail("Cannot convert empty string to number")
        if _INFINITY_RE.match(text):
            return CoercionResult.fail(f'Value "{raw}" is not a finite number')
        if self.is_integer and _INTEGER_RE.match(text):
            return CoercionResult.ok(int(text))
        if _PREFIXED_RE.match(text):
            value = float(int(text, 0))
        elif _DECIMAL_RE.match(text):
            value = float(text)
        else:
            return CoercionResult.fail(f'Cannot convert "{raw}" to number')
        if not math.isfinite(value):
            return CoercionResult.fail(f'Value "{raw}" is not a finite number')
        if self.is_integer and value.is_integer():
            return CoercionResult.ok(int(value))
        return CoercionResult.ok(value)

    def integer(self) -> NumberSchema:
        """Reject values with a fractional part."""

        refined = self._with_rule(ValidationRule("integer", "Must be an integer", _is_integral))
        return replace(refined, is_integer=True)

    def min(self, minimum: float) -> NumberSchema:
        refined = self._with_rule(
            ValidationRule("min", f"Must be at least {_format(minimum)}", lambda v: v >= minimum, minimum)
        )
        return replace(refined, minimum=minimum)

    def max(self, maximum: float) -> NumberSchema:
        refined = self._with_rule(
            ValidationRule("max", f"Must be at most {_format(maximum)}", lambda v: v <= maximum, maximum)
        )
        return replace(refined, maximum=maximum)

    def positive(self) -> NumberSchema:
        """Require a value of at least 1.

        This is ``min(1)``, so positive fractions below one such as ``0.5`` are
        rejected as well.
        """

        return self.min(1)

    def non_negative(self) -> NumberSchema:
        return self.min(0)

    def between(self, minimum: float, maximum: float) -> NumberSchema:
        return self.min(minimum).max(maximum)

    def port(self) -> NumberSchema:
        """Shorthand for an integer TCP/UDP port in ``1..65535``."""

        return self.integer().min(1).max(65535)

    def get_type_description(self) -> str:
        parts = ["integer" if self.is_integer else "number"]
        if self.minimum is not None and self.maximum is not None:
            parts.append(f"{_format(self.minimum)}-{_format(self.maximum)}")
        elif self.minimum is not None:
            parts.append(f">= {_format(self.minimum)}")
        elif self.maximum is not None:
            parts.append(f"<= {_format(self.maximum)}")
        return ", ".join(parts)

    def _default_example(self) -> str:
        if self.is_integer and self.minimum == 1 and (self.maximum is None or self.maximum >= 3000):
            return "3000"
        if self.minimum is not None:
            return _format(self.minimum)
        if self.is_integer:
            return "42"
        return "3.14"


def _is_integral(value: float) -> bool:
    if isinstance(value, int):
        return True
    return float(value).is_integer()


def _format(value: float) -> str:
    """Render *value* without a trailing ``.0`` for integral floats.

    Examples
    --------
    >>> _format(5.0), _format(2.5), _format(7)
    ('5', '2.5', '7')
    """

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def number() -> NumberSchema:
    """Create a new number schema."""

    return NumberSchema()
