"""Single-line reporter for log-friendly output."""

from __future__ import annotations

from typing import Sequence

from ...domain.issues import ValidationIssue


def format_minimal(errors: Sequence[ValidationIssue]) -> str:
    """Summarise *errors* on one line.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import unknown_issue
    >>> format_minimal([unknown_issue("A"), unknown_issue("B")])
    'lib_env_schema: 2 invalid environment variables: A, B'
    >>> format_minimal([unknown_issue("A")])
    'lib_env_schema: 1 invalid environment variable: A'
    """

    noun = "variable" if len(errors) == 1 else "variables"
    names = ", ".join(issue.variable for issue in errors)
    return f"lib_env_schema: {len(errors)} invalid environment {noun}: {names}"
