"""Duration field schema.

Purpose
-------
Turn human-friendly durations such as ``"30s"`` or ``"1.5h"`` into
milliseconds.

Contents
--------
* :data:`DURATION_UNITS` – unit name to millisecond multiplier.
* :func:`parse_duration` – public parser returning milliseconds or ``None``.
* :class:`DurationSchema` / :func:`duration` – the field schema.

System Role
-----------
Bare numbers are milliseconds. Units are case-insensitive and may be separated
from the number by whitespace. Results with no fractional part are ``int`` so
they can feed APIs that expect whole milliseconds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final, Mapping

from ..domain.errors import SchemaDefinitionError
from .base import BaseSchema, CoercionResult, ValidationRule

_SECOND: Final[int] = 1000
_MINUTE: Final[int] = 60 * _SECOND
_HOUR: Final[int] = 60 * _MINUTE
_DAY: Final[int] = 24 * _HOUR
_WEEK: Final[int] = 7 * _DAY

DURATION_UNITS: Final[Mapping[str, int]] = {
    "ms": 1,
    "s": _SECOND,
    "sec": _SECOND,
    "second": _SECOND,
    "seconds": _SECOND,
    "m": _MINUTE,
    "min": _MINUTE,
    "minute": _MINUTE,
    "minutes": _MINUTE,
    "h": _HOUR,
    "hr": _HOUR,
    "hour": _HOUR,
    "hours": _HOUR,
    "d": _DAY,
    "day": _DAY,
    "days": _DAY,
    "w": _WEEK,
    "week": _WEEK,
    "weeks": _WEEK,
}

_BARE_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")
_WITH_UNIT_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-z]+)$")

FORMAT_HINT: Final[str] = "Invalid duration format. Use formats like: 100ms, 5s, 30m, 1h, 7d"


def parse_duration(value: str) -> float | None:
    """Return *value* in milliseconds, or ``None`` when it is not a duration.

    Negative bare numbers parse (to a negative result) so callers can tell a
    malformed value from a negative one.

    Examples
    --------
    >>> parse_duration("1h"), parse_duration("30 s"), parse_duration("500"), parse_duration("2W")
    (3600000, 30000, 500, 1209600000)
    >>> parse_duration("1.5m")
    90000
    >>> parse_duration("5 fortnights") is None, parse_duration("") is None
    (True, True)
    """

    text = value.strip().lower()
    if _BARE_NUMBER_RE.match(text):
        return _whole(float(text))
    match = _WITH_UNIT_RE.match(text)
    if match is None:
        return None
    multiplier = DURATION_UNITS.get(match.group(2))
    if multiplier is None:
        return None
    return _whole(float(match.group(1)) * multiplier)


def _whole(milliseconds: float) -> float:
    if milliseconds.is_integer():
        return int(milliseconds)
    return milliseconds


@dataclass(frozen=True, slots=True)
class DurationSchema(BaseSchema[float]):
    """Schema for duration variables, valued in milliseconds.

    Examples
    --------
    >>> schema = DurationSchema().min("1s").max("1m")
    >>> schema.coerce("30s").value
    30000
    >>> schema.first_failed_rule(500).message
    'Must be at least 1s'
    >>> DurationSchema().default("24h").default_value
    86400000
    """

    kind = "duration"

    def coerce(self, raw: str) -> CoercionResult[float]:
        milliseconds = parse_duration(raw)
        if milliseconds is None:
            return CoercionResult.fail(FORMAT_HINT)
        if milliseconds < 0:
            return CoercionResult.fail("Duration must be non-negative")
        return CoercionResult.ok(milliseconds)

    def default(self, value: Any) -> DurationSchema:
        """Set the default; strings are parsed eagerly so the default is always milliseconds."""

        if isinstance(value, str):
            parsed = parse_duration(value)
            if parsed is None:
                raise SchemaDefinitionError(f'Invalid duration default "{value}". {FORMAT_HINT}')
            value = parsed
        return BaseSchema.default(self, value)

    def min(self, bound: str | float) -> DurationSchema:
        minimum = _bound_to_ms(bound)
        return self._with_rule(
            ValidationRule("min", f"Must be at least {_bound_label(bound)}", lambda v: v >= minimum, minimum)
        )

    def max(self, bound: str | float) -> DurationSchema:
        maximum = _bound_to_ms(bound)
        return self._with_rule(
            ValidationRule("max", f"Must be at most {_bound_label(bound)}", lambda v: v <= maximum, maximum)
        )

    def get_type_description(self) -> str:
        return "duration (e.g., 1h, 30m, 5s)"

    def _default_example(self) -> str:
        return "30s"


def _bound_to_ms(bound: str | float) -> float:
    if not isinstance(bound, str):
        return bound
    parsed = parse_duration(bound)
    if parsed is None:
        raise SchemaDefinitionError(f'Invalid duration bound "{bound}". {FORMAT_HINT}')
    return parsed


def _bound_label(bound: str | float) -> str:
    if isinstance(bound, str):
        return bound
    return f"{_whole(float(bound))}ms"


def duration() -> DurationSchema:
    """Create a new duration schema."""

    return DurationSchema()
