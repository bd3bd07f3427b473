"""Example-file generation and project scaffolding for ``lib_env_schema``."""

from .generate import DEFAULT_HEADER, generate_example, write_example_file
from .scaffold import SCHEMA_TEMPLATE, init_project, template_schema

__all__ = [
    "DEFAULT_HEADER",
    "SCHEMA_TEMPLATE",
    "generate_example",
    "init_project",
    "template_schema",
    "write_example_file",
]
