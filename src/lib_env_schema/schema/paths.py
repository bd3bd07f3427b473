"""Path field schema.

Coercion only trims and normalises the value; it never touches the
filesystem. The existence and permission refinements do, and they fail closed:
any :class:`OSError` while probing counts as a failed rule.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from .base import BaseSchema, CoercionResult, ValidationRule


def _probe(check: Callable[[str], bool]) -> Callable[[str], bool]:
    def guarded(value: str) -> bool:
        try:
            return check(value)
        except OSError:
            return False

    return guarded


@dataclass(frozen=True, slots=True)
class PathSchema(BaseSchema[str]):
    """Schema for file and directory paths.

    Examples
    --------
    >>> PathSchema().coerce("  ./config//app.json ").value.replace("\\\\", "/")
    'config/app.json'
    >>> PathSchema().extension(["json", ".YAML"]).first_failed_rule("app.yaml") is None
    True
    >>> PathSchema().is_file().exists().get_type_description()
    'path (file, existing)'
    """

    kind = "path"

    def coerce(self, raw: str) -> CoercionResult[str]:
        trimmed = raw.strip()
        if trimmed == "":
            return CoercionResult.fail("Path cannot be empty")
        return CoercionResult.ok(os.path.normpath(trimmed))

    def exists(self) -> PathSchema:
        return self._with_rule(
            ValidationRule("exists", "Path does not exist", _probe(lambda v: os.access(v, os.F_OK)))
        )

    def is_file(self) -> PathSchema:
        return self._with_rule(ValidationRule("isFile", "Must be a file", _probe(lambda v: Path(v).is_file())))

    def is_directory(self) -> PathSchema:
        return self._with_rule(
            ValidationRule("isDirectory", "Must be a directory", _probe(lambda v: Path(v).is_dir()))
        )

    def readable(self) -> PathSchema:
        return self._with_rule(
            ValidationRule("readable", "Path is not readable", _probe(lambda v: os.access(v, os.R_OK)))
        )

    def writable(self) -> PathSchema:
        return self._with_rule(
            ValidationRule("writable", "Path is not writable", _probe(lambda v: os.access(v, os.W_OK)))
        )

    def absolute(self) -> PathSchema:
        return self._with_rule(ValidationRule("absolute", "Must be an absolute path", os.path.isabs))

    def relative(self) -> PathSchema:
        return self._with_rule(
            ValidationRule("relative", "Must be a relative path", lambda v: not os.path.isabs(v))
        )

    def extension(self, ext: str | Sequence[str]) -> PathSchema:
        """Require one of the given extensions; the leading dot is optional and case is ignored."""

        candidates = [ext] if isinstance(ext, str) else list(ext)
        normalized = [item if item.startswith(".") else f".{item}" for item in candidates]
        accepted = {item.lower() for item in normalized}
        return self._with_rule(
            ValidationRule(
                "extension",
                f"Must have extension: {', '.join(normalized)}",
                lambda v: os.path.splitext(v)[1].lower() in accepted,
                tuple(normalized),
            )
        )

    def get_type_description(self) -> str:
        labels = {"isFile": "file", "isDirectory": "directory", "exists": "existing"}
        modifiers = [labels[rule.name] for rule in self.rules if rule.name in labels]
        if modifiers:
            return f"path ({', '.join(modifiers)})"
        return "path"

    def _default_example(self) -> str:
        return "/path/to/file"


def path() -> PathSchema:
    """Create a new path schema."""

    return PathSchema()
