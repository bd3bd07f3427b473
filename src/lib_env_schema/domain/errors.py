"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by schema builders, adapters, the
composition root, and consuming applications. The hierarchy lives in the domain
layer so outer layers may depend on it without the reverse being true.

Contents
--------
* :class:`EnvSchemaError` – umbrella base class for everything the library
  raises.
* :class:`SchemaDefinitionError` – programmer misuse while building a schema.
* :class:`EnvValidationError` – raised by :func:`lib_env_schema.core.create_env`
  when validation fails in ``"throw"`` mode.
* :class:`SchemaNotFoundError` / :class:`SchemaLoadError` – CLI schema
  discovery failures.
* :class:`OutputExistsError` – refusal to overwrite a generated file.

System Role
-----------
Field-level validation failures are *data* (see
:mod:`lib_env_schema.domain.issues`) and never travel through these
exceptions. Only construction-time misuse and the caller-selected failure
behaviour of the entry points raise.
"""

from __future__ import annotations

from typing import Sequence

from .issues import ValidationIssue


class EnvSchemaError(Exception):
    """Base type for all exceptions emitted by ``lib_env_schema``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class SchemaDefinitionError(EnvSchemaError, ValueError):
    """Raised immediately when a schema is constructed with invalid arguments.

    Typical Sources
    ---------------
    An enum with no allowed values, a duration default that cannot be parsed,
    an unsupported IP version, or an empty array separator.
    """


class EnvValidationError(EnvSchemaError):
    """Carry the structured issue list together with a rendered report.

    Why
    ----
    Machine consumers read :attr:`errors`; terminal consumers print the
    exception. One raise serves both.

    Examples
    --------
    >>> from lib_env_schema.domain.issues import ErrorReason, ValidationIssue
    >>> issue = ValidationIssue("PORT", ErrorReason.MISSING, "Required variable is not set", "number")
    >>> exc = EnvValidationError([issue], "PORT is missing")
    >>> str(exc), exc.errors[0].variable
    ('PORT is missing', 'PORT')
    """

    def __init__(self, errors: Sequence[ValidationIssue], formatted_message: str) -> None:
        super().__init__(formatted_message)
        self.errors: tuple[ValidationIssue, ...] = tuple(errors)


class SchemaNotFoundError(EnvSchemaError):
    """No schema module was found at any of the searched locations."""

    def __init__(self, searched: Sequence[str]) -> None:
        self.searched: tuple[str, ...] = tuple(searched)
        super().__init__("Could not find env schema file. Searched: " + ", ".join(self.searched))


class SchemaLoadError(EnvSchemaError):
    """A schema module exists but could not be imported or holds no schema."""


class OutputExistsError(EnvSchemaError):
    """Refuse to overwrite an existing file unless ``force`` was requested."""
