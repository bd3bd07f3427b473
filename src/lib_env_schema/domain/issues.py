"""Validation issue records and result containers.

Purpose
-------
Describe *what went wrong* for each variable as plain, immutable data so the
engine can aggregate failures and reporters can render them without access to
the schema that produced them.

Contents
--------
* :class:`ErrorReason` – the closed failure taxonomy.
* :class:`ValidationIssue` – one failed variable (or unknown/cross-field issue).
* :class:`CrossFieldIssue` – value returned by user cross-field validators.
* :class:`ValidationResult` – discriminated success/failure container.
* :data:`REDACTED` plus the ``*_issue`` factories that apply secret redaction.

System Role
-----------
Produced by :mod:`lib_env_schema.application.engine` and
:mod:`lib_env_schema.core`; consumed by the reporters and by
:class:`lib_env_schema.domain.errors.EnvValidationError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .env import EnvData

REDACTED: Final[str] = "[REDACTED]"
"""Placeholder that replaces received/example values of secret fields."""

SCHEMA_VARIABLE: Final[str] = "_schema"
"""Variable name used for cross-field issues that do not name a field."""


class ErrorReason(str, Enum):
    """Why a variable failed validation."""

    MISSING = "missing"
    EMPTY = "empty"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    PARSE_ERROR = "parse_error"
    UNKNOWN = "unknown"
    CROSS_FIELD = "cross_field"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Structured description of a single validation failure.

    Attributes
    ----------
    variable:
        Variable name as reported to the user (prefix stripped when requested).
    reason:
        Failure category, see :class:`ErrorReason`.
    message:
        Human-readable description.
    expected:
        Type/constraint summary of the field.
    received:
        Raw input, or :data:`REDACTED` for secret fields.
    example:
        Example value, or :data:`REDACTED` for secret fields.
    is_secret:
        Copied from the field metadata.
    """

    variable: str
    reason: ErrorReason
    message: str
    expected: str
    received: str | None = None
    example: str | None = None
    is_secret: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary, omitting unset optional values.

        Examples
        --------
        >>> ValidationIssue("A", ErrorReason.EMPTY, "Variable is set but empty", "string").to_dict()
        {'variable': 'A', 'reason': 'empty', 'message': 'Variable is set but empty', 'expected': 'string', 'isSecret': False}
        """

        payload: dict[str, Any] = {
            "variable": self.variable,
            "reason": self.reason.value,
            "message": self.message,
            "expected": self.expected,
        }
        if self.received is not None:
            payload["received"] = self.received
        if self.example is not None:
            payload["example"] = self.example
        payload["isSecret"] = self.is_secret
        return payload

    def renamed(self, variable: str) -> ValidationIssue:
        """Return a copy reported under *variable*."""

        return ValidationIssue(
            variable=variable,
            reason=self.reason,
            message=self.message,
            expected=self.expected,
            received=self.received,
            example=self.example,
            is_secret=self.is_secret,
        )


@dataclass(frozen=True, slots=True)
class CrossFieldIssue:
    """Issue returned by a cross-field validator; ``variable`` defaults to ``_schema``."""

    message: str
    variable: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a validation run.

    ``success`` discriminates: on success ``data`` holds the frozen
    :class:`~lib_env_schema.domain.env.EnvData` and ``errors`` is empty; on
    failure ``data`` is ``None`` and ``errors`` lists every detected issue.
    """

    success: bool
    data: EnvData | None = None
    errors: tuple[ValidationIssue, ...] = ()

    @classmethod
    def ok(cls, data: EnvData) -> ValidationResult:
        return cls(success=True, data=data, errors=())

    @classmethod
    def failed(cls, errors: list[ValidationIssue] | tuple[ValidationIssue, ...]) -> ValidationResult:
        return cls(success=False, data=None, errors=tuple(errors))


def _mask(value: str | None, is_secret: bool) -> str | None:
    if value is None:
        return None
    return REDACTED if is_secret else value


def missing_issue(variable: str, *, expected: str, example: str | None, is_secret: bool) -> ValidationIssue:
    """Build the issue for a required variable that is absent from the source."""

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.MISSING,
        message="Required variable is not set",
        expected=expected,
        example=_mask(example, is_secret),
        is_secret=is_secret,
    )


def empty_issue(variable: str, *, expected: str, example: str | None, is_secret: bool) -> ValidationIssue:
    """Build the issue for a required variable that is present but empty."""

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.EMPTY,
        message="Variable is set but empty",
        expected=expected,
        example=_mask(example, is_secret),
        is_secret=is_secret,
    )


def type_issue(
    variable: str, *, received: str, message: str, expected: str, example: str | None, is_secret: bool
) -> ValidationIssue:
    """Build the issue for a raw value that failed coercion.

    Examples
    --------
    >>> type_issue("TOKEN", received="abc", message="bad", expected="number", example="1", is_secret=True).received
    '[REDACTED]'
    """

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.INVALID_TYPE,
        message=message,
        expected=expected,
        received=_mask(received, is_secret),
        example=_mask(example, is_secret),
        is_secret=is_secret,
    )


def value_issue(
    variable: str, *, received: str, message: str, expected: str, example: str | None, is_secret: bool
) -> ValidationIssue:
    """Build the issue for a coerced value rejected by a refinement rule."""

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.INVALID_VALUE,
        message=message,
        expected=expected,
        received=_mask(received, is_secret),
        example=_mask(example, is_secret),
        is_secret=is_secret,
    )


def parse_issue(
    variable: str, *, received: str, message: str, expected: str, example: str | None, is_secret: bool
) -> ValidationIssue:
    """Build a ``parse_error`` issue; long received values are truncated to 50 characters.

    The default engine path reports parse failures as ``invalid_type``; this
    factory serves extensions that want the finer-grained reason.

    Examples
    --------
    >>> parse_issue("CFG", received="x" * 60, message="bad", expected="JSON", example=None, is_secret=False).received
    'xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx...'
    """

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.PARSE_ERROR,
        message=message,
        expected=expected,
        received=_mask(_truncate(received), is_secret),
        example=_mask(example, is_secret),
        is_secret=is_secret,
    )


def unknown_issue(variable: str) -> ValidationIssue:
    """Build the strict-mode issue for a source key no schema field consumes."""

    return ValidationIssue(
        variable=variable,
        reason=ErrorReason.UNKNOWN,
        message="Unknown environment variable",
        expected="not defined in schema",
    )


def cross_field_issue(message: str, variable: str | None = None) -> ValidationIssue:
    """Build the issue for a failed cross-field rule."""

    return ValidationIssue(
        variable=variable or SCHEMA_VARIABLE,
        reason=ErrorReason.CROSS_FIELD,
        message=message,
        expected="valid combination of variables",
    )


def _truncate(value: str, max_length: int = 50) -> str:
    if len(value) <= max_length:
        return value
    return f"{value[:max_length]}..."
