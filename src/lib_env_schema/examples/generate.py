"""``.env.example`` generation.

Purpose
-------
Document a schema as a ready-to-copy dotenv file so new contributors know
which variables exist, which are required, and what values look like.

Contents
    - ``DEFAULT_HEADER``: comment block written above the variables.
    - ``generate_example``: render the file content from a schema.
    - ``write_example_file``: persist the content, refusing to overwrite unless
      forced.
    - ``_field_block`` / ``_render_value``: tiny helpers that narrate how one
      variable is documented.

System Role
-----------
Backs ``lib_env_schema generate`` and ``lib_env_schema init``. Secret fields
never expose their default; without an explicit example their value is left
blank.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from ..domain.errors import OutputExistsError
from ..domain.issues import REDACTED
from ..observability import log_info, make_event
from ..schema.arrays import ArraySchema
from ..schema.base import BaseSchema

DEFAULT_HEADER = (
    "# Environment variables\n"
    "# Generated by lib_env_schema. Copy this file to .env and fill in the values."
)


def generate_example(
    schema: Mapping[str, BaseSchema[Any]],
    *,
    header: bool = True,
    header_text: str | None = None,
) -> str:
    """Return ``.env.example`` content documenting every field of *schema*.

    Parameters
    ----------
    schema:
        Mapping of variable names to field schemas, rendered in order.
    header:
        Emit the comment header at the top.
    header_text:
        Replacement header; lines not starting with ``#`` are commented.

    Examples
    --------
    >>> from lib_env_schema.schema import number, string
    >>> text = generate_example({"PORT": number().port().default(3000).description("HTTP port"),
    ...                          "API_KEY": string().secret()}, header=False)
    >>> print(text)
    # HTTP port
    # Type: integer, 1-65535
    # Default: 3000
    PORT=3000
    <BLANKLINE>
    # Type: string
    # Required
    # Secret
    API_KEY=
    <BLANKLINE>
    """

    blocks: list[str] = []
    if header:
        blocks.append(_comment_block(header_text) if header_text is not None else DEFAULT_HEADER)
        blocks.append("")
    for name, field in schema.items():
        blocks.extend(_field_block(name, field))
        blocks.append("")
    return "\n".join(blocks)


def write_example_file(
    schema: Mapping[str, BaseSchema[Any]],
    output: str | os.PathLike[str] = ".env.example",
    *,
    force: bool = False,
    header: bool = True,
    header_text: str | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> Path:
    """Write :func:`generate_example` output to *output* and return the path.

    Raises
    ------
    OutputExistsError
        When *output* exists and *force* is ``False``.
    """

    path = Path(output)
    if not path.is_absolute():
        path = (Path(cwd) if cwd is not None else Path.cwd()) / path
    if path.exists() and not force:
        raise OutputExistsError(f"File already exists: {path}. Use --force to overwrite.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_example(schema, header=header, header_text=header_text), encoding="utf-8")
    log_info("example_written", **make_event("examples", str(path), {"fields": len(schema)}))
    return path


def _field_block(name: str, field: BaseSchema[Any]) -> list[str]:
    lines: list[str] = []
    if field.metadata.description:
        lines.append(f"# {field.metadata.description}")
    lines.append(f"# Type: {field.get_type_description()}")
    if field.has_default:
        shown = REDACTED if field.is_secret else _render_value(field, field.default_value)
        lines.append(f"# Default: {shown}")
    elif field.is_optional:
        lines.append("# Optional")
    else:
        lines.append("# Required")
    if field.is_secret:
        lines.append("# Secret")
    lines.append(f"{name}={_example_value(field)}")
    return lines


def _example_value(field: BaseSchema[Any]) -> str:
    if field.metadata.example is not None:
        return field.metadata.example
    if field.is_secret:
        return ""
    if field.has_default:
        return _render_value(field, field.default_value)
    return field.get_example()


def _render_value(field: BaseSchema[Any], value: Any) -> str:
    """Render a typed default back into its raw environment form."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)) and isinstance(field, ArraySchema) and field.item_schema is not None:
        return field.separator_char.join(_render_value(field.item_schema, item) for item in value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _comment_block(text: str) -> str:
    return "\n".join(line if line.startswith("#") else f"# {line}".rstrip() for line in text.splitlines())
