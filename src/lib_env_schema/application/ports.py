"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters satisfy so :mod:`lib_env_schema.core`
and the CLI can orchestrate behaviour without depending on concrete
implementations.

Contents
--------
* :class:`EnvLoader` – snapshots the process environment.
* :class:`DotEnvLoader` – loads ``.env`` files into a flat layer.
* :class:`Reporter` – renders validation issues for humans or machines.
* :class:`SchemaLoader` – locates and imports a schema module for the CLI.

System Role
-----------
These protocols enforce Dependency Inversion. They are runtime checkable so
contract tests can assert ``isinstance(adapter, Port)``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from ..domain.issues import ValidationIssue
from ..schema.base import BaseSchema


@runtime_checkable
class EnvLoader(Protocol):
    """Provide a flat snapshot of environment variables.

    Why
    ----
    Keeps the live, mutable process environment out of the validation engine.
    """

    def load(self, prefix: str | None = None) -> Mapping[str, str]:
        """Return variables, restricted to keys starting with *prefix* when given."""


@runtime_checkable
class DotEnvLoader(Protocol):
    """Read ``.env`` files into one flat mapping (later files win)."""

    def load(self, paths: Iterable[str | os.PathLike[str]]) -> Mapping[str, str]:
        """Return the merged contents of the files in *paths* that exist."""


@runtime_checkable
class Reporter(Protocol):
    """Render a sequence of issues into text."""

    def __call__(self, errors: Sequence[ValidationIssue]) -> str:
        """Return the rendered report."""


@runtime_checkable
class SchemaLoader(Protocol):
    """Locate and import the schema an application declares for the CLI."""

    def load(self, explicit: str | os.PathLike[str] | None = None) -> tuple[Path, Mapping[str, BaseSchema[Any]]]:
        """Return the schema file used and the schema it defines."""
