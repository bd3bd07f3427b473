"""Reporters turning validation issues into text.

Contents
--------
* :func:`format_pretty` – boxed, coloured terminal output (default).
* :func:`format_json` – machine-readable document for CI.
* :func:`format_minimal` – one line for logs.
* :func:`format_errors` – dispatch by reporter name or callable.
* :func:`group_errors_by_reason` – grouping helper shared by renderers.
"""

from __future__ import annotations

from typing import Callable, Literal, Mapping, Sequence, Union

from ...domain.issues import ErrorReason, ValidationIssue
from .json_output import format_json
from .minimal import format_minimal
from .pretty import format_pretty

ReporterName = Literal["pretty", "json", "minimal"]
ReporterLike = Union[ReporterName, str, Callable[[Sequence[ValidationIssue]], str]]

REPORTERS: Mapping[str, Callable[[Sequence[ValidationIssue]], str]] = {
    "pretty": format_pretty,
    "json": format_json,
    "minimal": format_minimal,
}


def format_errors(errors: Sequence[ValidationIssue], reporter: ReporterLike = "pretty") -> str:
    """Render *errors* with *reporter*; unknown names fall back to ``pretty``.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import unknown_issue
    >>> format_errors([unknown_issue("X")], "minimal")
    'lib_env_schema: 1 invalid environment variable: X'
    >>> format_errors([unknown_issue("X")], lambda errors: f"{len(errors)} problem")
    '1 problem'
    """

    if callable(reporter):
        return reporter(errors)
    return REPORTERS.get(reporter, format_pretty)(errors)


def group_errors_by_reason(errors: Sequence[ValidationIssue]) -> dict[ErrorReason, list[ValidationIssue]]:
    """Group *errors* by reason, keeping first-seen order of reasons and issues.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import cross_field_issue, unknown_issue
    >>> grouped = group_errors_by_reason([unknown_issue("A"), cross_field_issue("bad"), unknown_issue("B")])
    >>> {reason.value: [issue.variable for issue in issues] for reason, issues in grouped.items()}
    {'unknown': ['A', 'B'], 'cross_field': ['_schema']}
    """

    grouped: dict[ErrorReason, list[ValidationIssue]] = {}
    for issue in errors:
        grouped.setdefault(issue.reason, []).append(issue)
    return grouped


__all__ = [
    "REPORTERS",
    "ReporterLike",
    "ReporterName",
    "format_errors",
    "format_json",
    "format_minimal",
    "format_pretty",
    "group_errors_by_reason",
]
