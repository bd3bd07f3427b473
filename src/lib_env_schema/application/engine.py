"""Validation engine.

Purpose
-------
Apply a schema to a flat mapping of raw strings and aggregate every failure
into one :class:`~lib_env_schema.domain.issues.ValidationResult`.

Contents
--------
* :func:`validate` – whole-schema validation with prefix and strict handling.
* :func:`validate_field` – resolution of one variable (presence, coercion,
  rules).

System Role
-----------
Free of I/O. :mod:`lib_env_schema.core` hands it a source snapshot and the
(environment-adjusted) schema; the engine never reads ``os.environ`` itself.
Resolution order per field: absent or empty input resolves to the default,
else to ``None`` when optional, else to a ``missing``/``empty`` issue;
present input is coerced (``invalid_type`` on failure) and then checked by the
rules in registration order (``invalid_value`` for the first failure).
"""

from __future__ import annotations

from typing import Any, Collection, Mapping

from ..domain.env import EnvData
from ..domain.issues import (
    ValidationIssue,
    ValidationResult,
    empty_issue,
    missing_issue,
    type_issue,
    unknown_issue,
    value_issue,
)
from ..observability import log_debug, make_event
from ..schema.base import BaseSchema

Source = Mapping[str, str | None]


def validate_field(name: str, raw: str | None, field: BaseSchema[Any]) -> tuple[Any, ValidationIssue | None]:
    """Resolve one variable.

    Parameters
    ----------
    name:
        Name reported in an issue (the lookup key).
    raw:
        Raw source value; ``None`` means absent.
    field:
        Field schema to apply.

    Returns
    -------
    tuple[Any, ValidationIssue | None]
        ``(value, None)`` on success, ``(None, issue)`` on failure.

    Examples
    --------
    >>> from lib_env_schema.schema import number
    >>> validate_field("PORT", "8080", number().port())
    (8080, None)
    >>> validate_field("PORT", "", number().default(3000))
    (3000, None)
    >>> validate_field("PORT", None, number())[1].reason.value
    'missing'
    """

    if raw is None or raw == "":
        if field.has_default:
            return field.default_value, None
        if field.is_optional:
            return None, None
        factory = missing_issue if raw is None else empty_issue
        return None, factory(
            name, expected=field.get_type_description(), example=field.get_example(), is_secret=field.is_secret
        )

    coerced = field.coerce(raw)
    if not coerced.success:
        return None, type_issue(
            name,
            received=raw,
            message=coerced.error or "Invalid value",
            expected=field.get_type_description(),
            example=field.get_example(),
            is_secret=field.is_secret,
        )

    failed = field.first_failed_rule(coerced.value)
    if failed is not None:
        return None, value_issue(
            name,
            received=raw,
            message=failed.message,
            expected=field.get_type_description(),
            example=field.get_example(),
            is_secret=field.is_secret,
        )
    return coerced.value, None


def validate(
    schema: Mapping[str, BaseSchema[Any]],
    source: Source,
    *,
    prefix: str | None = None,
    strip_prefix: bool = False,
    strict: bool = False,
    strict_ignore: Collection[str] = (),
) -> ValidationResult:
    """Validate *source* against *schema* and aggregate every issue.

    Why
    ----
    Reporting all problems at once lets operators fix a broken deployment in a
    single round trip.

    What
    ----
    Looks up ``prefix + name`` for each field (just ``name`` without a prefix),
    resolves it via :func:`validate_field`, and keys both data and issues by the
    bare name when ``strip_prefix`` is set together with a prefix, else by the
    lookup key. In strict mode every non-``None`` source key that no field
    consumed and that is not listed in *strict_ignore* adds an ``unknown``
    issue; those follow the field issues in sorted order.

    Returns
    -------
    ValidationResult
        Success with a frozen :class:`EnvData` holding every schema key, or
        failure with all issues in schema order.

    Examples
    --------
    >>> from lib_env_schema.schema import number, string
    >>> result = validate({"PORT": number()}, {"APP_PORT": "80"}, prefix="APP_", strip_prefix=True)
    >>> result.success, dict(result.data)
    (True, {'PORT': 80.0})
    >>> failed = validate({"HOST": string()}, {"HOST": "h", "EXTRA": "1"}, strict=True)
    >>> [(issue.variable, issue.reason.value) for issue in failed.errors]
    [('EXTRA', 'unknown')]
    """

    data: dict[str, Any] = {}
    secrets: set[str] = set()
    issues: list[ValidationIssue] = []
    consumed: set[str] = set()

    for name, field in schema.items():
        lookup = f"{prefix}{name}" if prefix else name
        output = name if strip_prefix and prefix else lookup
        consumed.add(lookup)
        value, issue = validate_field(lookup, source.get(lookup), field)
        if issue is not None:
            issues.append(issue if output == lookup else issue.renamed(output))
            continue
        data[output] = value
        if field.is_secret:
            secrets.add(output)

    unknown: list[str] = []
    if strict:
        ignored = set(strict_ignore)
        unknown = sorted(
            key for key, value in source.items() if value is not None and key not in consumed and key not in ignored
        )
        issues.extend(unknown_issue(key) for key in unknown)

    log_debug(
        "validation_completed",
        **make_event(
            "engine",
            None,
            {"fields": len(schema), "issues": len(issues), "unknown": len(unknown), "strict": strict},
        ),
    )

    if issues:
        return ValidationResult.failed(issues)
    return ValidationResult.ok(EnvData(data, frozenset(secrets)))
