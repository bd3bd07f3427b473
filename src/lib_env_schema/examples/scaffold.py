"""Project scaffolding for ``lib_env_schema init``.

Purpose
    Write a starter schema module plus the matching ``.env.example`` while
    refusing to overwrite existing files unless forced.

Contents
    - ``SCHEMA_TEMPLATE``: source of the generated ``env_config.py``.
    - ``template_schema``: the same schema as live objects, used to render the
      example file.
    - ``init_project``: public API orchestrating both writes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from ..domain.errors import OutputExistsError
from ..schema import BaseSchema, enum, number, string, url
from .generate import write_example_file

DEFAULT_SCHEMA_PATH = "env_config.py"
DEFAULT_EXAMPLE_PATH = ".env.example"

SCHEMA_TEMPLATE = '''"""Environment schema validated by ``lib_env_schema check``."""

from lib_env_schema import e

schema = {
    "APP_ENV": e.enum(["development", "staging", "production"])
    .default("development")
    .description("Deployment environment"),
    "PORT": e.number().port().default(3000).description("HTTP port"),
    "DATABASE_URL": e.url().description("Primary database URL"),
    "API_KEY": e.string().secret().optional().description("External API key"),
}
'''


def template_schema() -> dict[str, BaseSchema[Any]]:
    """Return the schema declared by :data:`SCHEMA_TEMPLATE`."""

    return {
        "APP_ENV": enum(["development", "staging", "production"])
        .default("development")
        .description("Deployment environment"),
        "PORT": number().port().default(3000).description("HTTP port"),
        "DATABASE_URL": url().description("Primary database URL"),
        "API_KEY": string().secret().optional().description("External API key"),
    }


def init_project(
    schema_path: str | os.PathLike[str] = DEFAULT_SCHEMA_PATH,
    output: str | os.PathLike[str] = DEFAULT_EXAMPLE_PATH,
    *,
    force: bool = False,
    cwd: str | os.PathLike[str] | None = None,
) -> tuple[Path, Path]:
    """Write the starter schema module and ``.env.example``.

    Both targets are checked before anything is written, so a conflict leaves
    the project untouched.

    Returns
    -------
    tuple[Path, Path]
        ``(schema_file, example_file)``.

    Raises
    ------
    OutputExistsError
        When either target exists and *force* is ``False``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> schema_file, example_file = init_project(cwd=tmp.name)
    >>> schema_file.name, "PORT=3000" in example_file.read_text(encoding="utf-8")
    ('env_config.py', True)
    >>> tmp.cleanup()
    """

    base = Path(cwd) if cwd is not None else Path.cwd()
    schema_file = _absolute(schema_path, base)
    example_file = _absolute(output, base)
    if not force:
        for target in (schema_file, example_file):
            if target.exists():
                raise OutputExistsError(f"File already exists: {target}. Use --force to overwrite.")

    schema_file.parent.mkdir(parents=True, exist_ok=True)
    schema_file.write_text(SCHEMA_TEMPLATE, encoding="utf-8")
    write_example_file(template_schema(), example_file, force=True)
    return schema_file, example_file


def _absolute(path: str | os.PathLike[str], base: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else base / candidate
