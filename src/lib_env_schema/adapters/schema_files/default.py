"""Schema module discovery for the CLI.

Purpose
-------
Find the Python module in which an application declares its environment
schema, import it in isolation, and hand the schema mapping to the CLI.

Contents
--------
* :data:`DEFAULT_SCHEMA_PATHS` – search order relative to the working directory.
* :data:`SCHEMA_ATTRIBUTES` – attribute names probed inside the module.
* :class:`DefaultSchemaLoader` – implementation of
  :class:`lib_env_schema.application.ports.SchemaLoader`.
* :func:`is_env_schema` – runtime guard for schema-shaped objects.

System Role
-----------
Used by ``lib_env_schema check`` and ``lib_env_schema generate``. Discovery
problems surface as :class:`SchemaNotFoundError`; modules that fail to import
or that define no usable schema surface as :class:`SchemaLoadError`.
"""

from __future__ import annotations

import hashlib
import importlib.util
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from ...domain.errors import SchemaLoadError, SchemaNotFoundError
from ...observability import log_debug, log_error, make_event
from ...schema.base import BaseSchema

DEFAULT_SCHEMA_PATHS: Final[tuple[str, ...]] = ("env_config.py", "src/env_config.py", "config/env.py")
SCHEMA_ATTRIBUTES: Final[tuple[str, ...]] = ("schema", "env_schema", "SCHEMA")


def is_env_schema(value: object) -> bool:
    """Return ``True`` for a non-empty mapping of names to field schemas.

    Examples
    --------
    >>> from lib_env_schema.schema import string
    >>> is_env_schema({"HOST": string()}), is_env_schema({}), is_env_schema({"HOST": "x"})
    (True, False, False)
    """

    if not isinstance(value, Mapping) or not value:
        return False
    return all(isinstance(key, str) and isinstance(field, BaseSchema) for key, field in value.items())


class DefaultSchemaLoader:
    """Locate and import schema modules relative to a working directory."""

    def __init__(self, *, cwd: str | os.PathLike[str] | None = None) -> None:
        self._cwd = Path(cwd) if cwd is not None else None

    def search_paths(self, explicit: str | os.PathLike[str] | None = None) -> list[Path]:
        """Return candidate files: just *explicit* when given, else the defaults."""

        base = self._cwd or Path.cwd()
        names = [explicit] if explicit is not None else list(DEFAULT_SCHEMA_PATHS)
        return [base / name for name in names]

    def load(self, explicit: str | os.PathLike[str] | None = None) -> tuple[Path, Mapping[str, BaseSchema[Any]]]:
        """Import the first existing candidate and return ``(path, schema)``.

        Raises
        ------
        SchemaNotFoundError
            No candidate file exists.
        SchemaLoadError
            The module raised while importing or defines no schema attribute.
        """

        candidates = self.search_paths(explicit)
        for candidate in candidates:
            if candidate.is_file():
                schema = _import_schema(candidate)
                log_debug("schema_loaded", **make_event("cli", str(candidate), {"fields": len(schema)}))
                return candidate, schema
        raise SchemaNotFoundError([str(candidate) for candidate in candidates])


def _import_schema(path: Path) -> Mapping[str, BaseSchema[Any]]:
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    module_name = f"_lib_env_schema_user_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise SchemaLoadError(f"Cannot import schema module {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        log_error("schema_import_failed", **make_event("cli", str(path), {"error": type(exc).__name__}))
        raise SchemaLoadError(f"Failed to load schema from {path}: {exc}") from exc
    finally:
        sys.modules.pop(module_name, None)

    for attribute in SCHEMA_ATTRIBUTES:
        candidate = getattr(module, attribute, None)
        if is_env_schema(candidate):
            return candidate
    expected = ", ".join(SCHEMA_ATTRIBUTES)
    raise SchemaLoadError(f"{path} does not define a schema mapping (looked for: {expected})")
