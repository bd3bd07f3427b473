"""Machine-readable reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Sequence

from ...domain.issues import ValidationIssue


def format_json(errors: Sequence[ValidationIssue]) -> str:
    """Render *errors* as an indented JSON document.

    ``received`` and ``example`` appear only when the issue carries them;
    secret fields already hold ``"[REDACTED]"`` there.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import unknown_issue
    >>> document = json.loads(format_json([unknown_issue("EXTRA")]))
    >>> document["success"], document["errorCount"], document["errors"][0]["reason"]
    (False, 1, 'unknown')
    """

    payload = {
        "success": False,
        "errorCount": len(errors),
        "errors": [issue.to_dict() for issue in errors],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
