"""Terminal reporter.

Renders issues as a boxed header followed by one section per issue family.
Colours come from :func:`click.style` so they follow the same conventions as
the CLI; pass ``color=False`` for plain text (log files, tests).
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import rich_click as click

from ...domain.issues import ErrorReason, ValidationIssue

WIDTH = 65

_SECTIONS: tuple[tuple[str, tuple[ErrorReason, ...]], ...] = (
    ("MISSING VARIABLES", (ErrorReason.MISSING, ErrorReason.EMPTY)),
    ("INVALID VALUES", (ErrorReason.INVALID_TYPE, ErrorReason.INVALID_VALUE, ErrorReason.PARSE_ERROR)),
    ("UNKNOWN VARIABLES", (ErrorReason.UNKNOWN,)),
    ("CROSS-FIELD ERRORS", (ErrorReason.CROSS_FIELD,)),
)

_STATUS = {
    ErrorReason.MISSING: "Missing (required)",
    ErrorReason.EMPTY: "Empty value",
    ErrorReason.INVALID_TYPE: "Invalid type",
    ErrorReason.PARSE_ERROR: "Parse error",
    ErrorReason.UNKNOWN: "Not defined in schema",
}


def format_pretty(errors: Sequence[ValidationIssue], *, color: bool = True) -> str:
    """Render *errors* for a terminal.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import missing_issue
    >>> text = format_pretty([missing_issue("PORT", expected="number", example="3000", is_secret=False)], color=False)
    >>> "1 error found" in text, "MISSING VARIABLES" in text, "Status:   Missing (required)" in text
    (True, True, True)
    """

    def paint(text: str, **style: Any) -> str:
        return click.style(text, **style) if color else text

    count = len(errors)
    lines = [
        "",
        paint(f"╭{'─' * WIDTH}╮", fg="red"),
        paint("│", fg="red") + _center("Environment Validation Failed", WIDTH) + paint("│", fg="red"),
        paint("│", fg="red") + _center(f"{count} error{'' if count == 1 else 's'} found", WIDTH) + paint("│", fg="red"),
        paint(f"╰{'─' * WIDTH}╯", fg="red"),
        "",
    ]

    for title, reasons in _SECTIONS:
        section = [issue for reason in reasons for issue in errors if issue.reason == reason]
        if not section:
            continue
        bar = paint("│", fg="yellow")
        lines.append(paint(f"┌─ {title} {'─' * max(WIDTH - len(title) - 4, 0)}", fg="yellow"))
        lines.append(bar)
        for issue in section:
            lines.extend(_format_issue(issue, bar, paint))
            lines.append(bar)
        lines.append(paint(f"└{'─' * WIDTH}", fg="yellow"))
        lines.append("")

    lines.append(
        f"{paint('Tip:', fg='cyan')} Run {paint('lib_env_schema generate', bold=True)} to create a .env.example file"
    )
    lines.append("")
    return "\n".join(lines)


def _format_issue(issue: ValidationIssue, bar: str, paint: Callable[..., str]) -> list[str]:
    prefix = f"{bar}  "
    rows = [
        ("Status:  ", paint(_status(issue), fg="red")),
        ("Expected:", paint(issue.expected, fg="cyan")),
    ]
    if issue.received is not None:
        rows.append(("Received:", paint(f'"{issue.received}"', fg="yellow")))
    if issue.example:
        rows.append(("Example: ", paint(issue.example, fg="green")))

    lines = [prefix + paint(issue.variable, bold=True)]
    for index, (label, value) in enumerate(rows):
        branch = "└" if index == len(rows) - 1 else "├"
        lines.append(f"{prefix}  {paint(f'{branch}─ {label}', dim=True)} {value}")
    return lines


def _status(issue: ValidationIssue) -> str:
    return _STATUS.get(issue.reason, issue.message)


def _center(text: str, width: int) -> str:
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + text + " " * max(0, width - len(text) - padding)
