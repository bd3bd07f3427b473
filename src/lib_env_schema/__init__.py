"""Public package surface for ``lib_env_schema``.

Declare the variables an application needs once, validate them at start-up,
and read typed, immutable values afterwards::

    from lib_env_schema import create_env, e

    env = create_env({
        "DATABASE_URL": e.url().protocols(["postgresql"]),
        "PORT": e.number().port().default(3000),
        "DEBUG": e.boolean().default(False),
    })
    env.PORT  # 3000

The ``e`` namespace is :mod:`lib_env_schema.schema`; everything else re-exported
here is stable API.
"""

from __future__ import annotations

from . import schema as e
from .adapters.dotenv.default import expand_dotenv_vars, load_dotenv, load_dotenv_files, parse_dotenv
from .adapters.reporters import format_errors, format_json, format_minimal, format_pretty, group_errors_by_reason
from .application.compose import extend_schema, merge_schemas, omit_schema, pick_schema, prefix_schema
from .application.engine import validate, validate_field
from .core import apply_environment_rules, create_env, validate_env
from .domain.env import EnvData
from .domain.errors import (
    EnvSchemaError,
    EnvValidationError,
    OutputExistsError,
    SchemaDefinitionError,
    SchemaLoadError,
    SchemaNotFoundError,
)
from .domain.issues import CrossFieldIssue, ErrorReason, ValidationIssue, ValidationResult
from .examples import generate_example, write_example_file
from .observability import bind_trace_id, get_logger

__all__ = [
    "CrossFieldIssue",
    "EnvData",
    "EnvSchemaError",
    "EnvValidationError",
    "ErrorReason",
    "OutputExistsError",
    "SchemaDefinitionError",
    "SchemaLoadError",
    "SchemaNotFoundError",
    "ValidationIssue",
    "ValidationResult",
    "apply_environment_rules",
    "bind_trace_id",
    "create_env",
    "e",
    "expand_dotenv_vars",
    "extend_schema",
    "format_errors",
    "format_json",
    "format_minimal",
    "format_pretty",
    "generate_example",
    "get_logger",
    "group_errors_by_reason",
    "load_dotenv",
    "load_dotenv_files",
    "merge_schemas",
    "omit_schema",
    "parse_dotenv",
    "pick_schema",
    "prefix_schema",
    "validate",
    "validate_env",
    "validate_field",
    "write_example_file",
]
