"""Composition root for ``lib_env_schema``.

Purpose
-------
Provide the entry points applications call at start-up. They resolve the
variable source (process environment plus optional dotenv files), apply
environment-specific schema overrides, run the validation engine and
cross-field rules, and handle failures according to the caller's policy.

Contents
--------
* :func:`create_env` – validate and return a frozen :class:`EnvData`, or
  raise / return / exit on failure.
* :func:`validate_env` – never raises for validation failures; returns the
  :class:`ValidationResult`.
* :func:`apply_environment_rules` – production/development schema overrides.
* :func:`resolve_source` – builds the flat snapshot the engine reads.

System Role
-----------
Connects adapters (environment snapshot, dotenv files, reporters) with the
engine while emitting structured observability signals. It is the canonical
place to adjust precedence (``dotenv files → base source``).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Callable, Collection, Literal, Sequence, TypeVar, Union, overload

from .adapters.dotenv.default import DefaultDotEnvLoader, expand_dotenv_vars
from .adapters.env.default import DefaultEnvLoader
from .adapters.reporters import ReporterLike, format_errors, format_pretty
from .application.engine import validate
from .application.merge import merge_layers
from .domain.env import EnvData
from .domain.errors import EnvValidationError
from .domain.issues import CrossFieldIssue, ValidationIssue, ValidationResult, cross_field_issue
from .observability import log_debug, log_error, log_info, make_event
from .schema.base import BaseSchema

Schema = Mapping[str, BaseSchema[Any]]
OnError = Literal["throw", "return", "exit"]
DotenvOption = Union[bool, str, os.PathLike[str], Sequence[Union[str, os.PathLike[str]]], None]
CrossFieldOutcome = Union[None, str, CrossFieldIssue, Mapping[str, Any], Iterable[Any]]
CrossValidator = Callable[[EnvData], CrossFieldOutcome]
V = TypeVar("V")

PRODUCTION = "production"
DEVELOPMENT_NAMES = frozenset({"development", "dev"})


def apply_environment_rules(
    schema: Schema,
    environment: str | None,
    *,
    require_in_production: Collection[str] = (),
    optional_in_development: Collection[str] = (),
) -> dict[str, BaseSchema[Any]]:
    """Return a copy of *schema* adjusted for *environment*.

    In ``"production"`` the fields named in *require_in_production* that are
    optional and have no default become required. In ``"development"`` or
    ``"dev"`` the fields named in *optional_in_development* become optional.
    Other environments, and names missing from the schema, change nothing.
    The input mapping and its field schemas are never modified.

    Examples
    --------
    >>> from lib_env_schema.schema import string
    >>> base = {"SENTRY_DSN": string().optional()}
    >>> apply_environment_rules(base, "production", require_in_production=["SENTRY_DSN"])["SENTRY_DSN"].is_optional
    False
    >>> base["SENTRY_DSN"].is_optional
    True
    """

    adjusted = dict(schema)
    if environment == PRODUCTION:
        for name in require_in_production:
            field = adjusted.get(name)
            if field is not None and field.is_optional and not field.has_default:
                adjusted[name] = replace(field, is_optional=False)
    elif environment in DEVELOPMENT_NAMES:
        for name in optional_in_development:
            field = adjusted.get(name)
            if field is not None:
                adjusted[name] = field.optional()
    return adjusted


def resolve_source(
    source: Mapping[str, str | None] | None = None,
    *,
    prefix: str | None = None,
    dotenv: DotenvOption = None,
    dotenv_expand: bool = False,
    cwd: str | os.PathLike[str] | None = None,
) -> dict[str, str | None]:
    """Build the flat snapshot validated by the engine.

    Why
    ----
    Values must come from one immutable snapshot so a validation run cannot
    observe concurrent changes to the process environment.

    What
    ----
    Uses *source* when given, else a :class:`DefaultEnvLoader` snapshot
    (restricted to *prefix* when one is set). When *dotenv* is set the files
    are loaded, optionally ``${VAR}``-expanded against the whole base source
    (unprefixed process variables included), and layered underneath it via
    :func:`merge_layers`, so the base source wins.

    Parameters
    ----------
    dotenv:
        ``True`` for ``.env``, a single path, or a sequence of paths (later
        files win).
    cwd:
        Directory relative dotenv paths resolve against; defaults to the
        process working directory.

    Examples
    --------
    >>> resolve_source({"PORT": "80"})
    {'PORT': '80'}
    """

    from_loader = source is None
    snapshot: Mapping[str, str | None] = DefaultEnvLoader().load() if source is None else source
    base = _with_prefix(snapshot, prefix) if from_loader and prefix else snapshot
    paths = _dotenv_paths(dotenv)
    if not paths:
        return dict(base)

    loader = DefaultDotEnvLoader(cwd=cwd)
    file_values: Mapping[str, str] = loader.load(paths)
    if dotenv_expand:
        file_values = expand_dotenv_vars(file_values, snapshot)
    if from_loader and prefix:
        file_values = _with_prefix(file_values, prefix)

    dotenv_path = ", ".join(loader.last_loaded_paths) or None
    merged, provenance = merge_layers([("dotenv", file_values, dotenv_path), ("source", base, None)])
    from_files = sum(1 for entry in provenance.values() if entry["layer"] == "dotenv")
    log_debug(
        "source_resolved",
        **make_event("dotenv", dotenv_path, {"files": len(loader.last_loaded_paths), "keys_from_dotenv": from_files}),
    )
    return merged


def validate_env(
    schema: Schema,
    *,
    source: Mapping[str, str | None] | None = None,
    prefix: str | None = None,
    strip_prefix: bool = False,
    strict: bool = False,
    strict_ignore: Collection[str] = (),
    environment: str | None = None,
    require_in_production: Collection[str] = (),
    optional_in_development: Collection[str] = (),
    cross_validate: CrossValidator | None = None,
    dotenv: DotenvOption = None,
    dotenv_expand: bool = False,
    cwd: str | os.PathLike[str] | None = None,
) -> ValidationResult:
    """Validate without raising; inspect ``result.success`` afterwards.

    Examples
    --------
    >>> from lib_env_schema.schema import number
    >>> result = validate_env({"PORT": number()}, source={})
    >>> result.success, result.errors[0].variable, result.errors[0].reason.value
    (False, 'PORT', 'missing')
    """

    resolved_source = resolve_source(source, prefix=prefix, dotenv=dotenv, dotenv_expand=dotenv_expand, cwd=cwd)
    effective = apply_environment_rules(
        schema,
        environment,
        require_in_production=require_in_production,
        optional_in_development=optional_in_development,
    )
    if any(effective[name] is not field for name, field in schema.items()):
        log_debug("environment_rules_applied", **make_event("core", None, {"environment": environment}))

    result = validate(
        effective,
        resolved_source,
        prefix=prefix,
        strip_prefix=strip_prefix,
        strict=strict,
        strict_ignore=strict_ignore,
    )
    if not result.success or cross_validate is None:
        return result

    assert result.data is not None
    issues = _cross_field_issues(cross_validate(result.data))
    if issues:
        log_info("cross_field_failed", **make_event("core", None, {"variables": [issue.variable for issue in issues]}))
        return ValidationResult.failed(issues)
    return result


@overload
def create_env(
    schema: Schema,
    *,
    source: Mapping[str, str | None] | None = ...,
    prefix: str | None = ...,
    strip_prefix: bool = ...,
    strict: bool = ...,
    strict_ignore: Collection[str] = ...,
    environment: str | None = ...,
    require_in_production: Collection[str] = ...,
    optional_in_development: Collection[str] = ...,
    cross_validate: CrossValidator | None = ...,
    dotenv: DotenvOption = ...,
    dotenv_expand: bool = ...,
    cwd: str | os.PathLike[str] | None = ...,
    on_error: Literal["return"],
    exit_code: int = ...,
    reporter: ReporterLike = ...,
) -> ValidationResult: ...


@overload
def create_env(
    schema: Schema,
    *,
    source: Mapping[str, str | None] | None = ...,
    prefix: str | None = ...,
    strip_prefix: bool = ...,
    strict: bool = ...,
    strict_ignore: Collection[str] = ...,
    environment: str | None = ...,
    require_in_production: Collection[str] = ...,
    optional_in_development: Collection[str] = ...,
    cross_validate: CrossValidator | None = ...,
    dotenv: DotenvOption = ...,
    dotenv_expand: bool = ...,
    cwd: str | os.PathLike[str] | None = ...,
    on_error: Literal["throw", "exit"] = ...,
    exit_code: int = ...,
    reporter: ReporterLike = ...,
) -> EnvData: ...


def create_env(
    schema: Schema,
    *,
    source: Mapping[str, str | None] | None = None,
    prefix: str | None = None,
    strip_prefix: bool = False,
    strict: bool = False,
    strict_ignore: Collection[str] = (),
    environment: str | None = None,
    require_in_production: Collection[str] = (),
    optional_in_development: Collection[str] = (),
    cross_validate: CrossValidator | None = None,
    dotenv: DotenvOption = None,
    dotenv_expand: bool = False,
    cwd: str | os.PathLike[str] | None = None,
    on_error: OnError = "throw",
    exit_code: int = 1,
    reporter: ReporterLike = "pretty",
) -> EnvData | ValidationResult:
    """Validate the environment and return the typed, frozen result.

    Why
    ----
    Applications should fail at start-up, with every problem listed, instead of
    discovering a malformed variable on the first request that needs it.

    What
    ----
    Runs :func:`validate_env` and then applies *on_error*:

    * ``"throw"`` (default) raises :class:`EnvValidationError` carrying the
      issues and the rendered report;
    * ``"return"`` returns the :class:`ValidationResult` (on success too);
    * ``"exit"`` writes the rendered report to ``stderr`` and calls
      :func:`sys.exit` with *exit_code*.

    Parameters
    ----------
    schema:
        Mapping of variable names to field schemas.
    source:
        Explicit variables; defaults to a snapshot of :data:`os.environ`.
    prefix / strip_prefix:
        Look up ``prefix + name``; report bare names when *strip_prefix* is set.
    strict / strict_ignore:
        Report source keys no field consumes, except those listed.
    environment / require_in_production / optional_in_development:
        See :func:`apply_environment_rules`.
    cross_validate:
        Callable receiving the validated :class:`EnvData`; see
        :func:`_cross_field_issues` for accepted return values.
    dotenv / dotenv_expand / cwd:
        See :func:`resolve_source`; *cwd* anchors relative dotenv paths.
    reporter:
        ``"pretty"``, ``"json"``, ``"minimal"`` or a callable rendering issues.

    Returns
    -------
    EnvData | ValidationResult
        :class:`EnvData` unless ``on_error="return"``.

    Examples
    --------
    >>> from lib_env_schema.schema import boolean, number
    >>> env = create_env({"PORT": number().port().default(3000), "DEBUG": boolean()}, source={"DEBUG": "yes"})
    >>> env.PORT, env.DEBUG
    (3000, True)
    >>> create_env({"PORT": number()}, source={}, on_error="return").success
    False
    """

    result = validate_env(
        schema,
        source=source,
        prefix=prefix,
        strip_prefix=strip_prefix,
        strict=strict,
        strict_ignore=strict_ignore,
        environment=environment,
        require_in_production=require_in_production,
        optional_in_development=optional_in_development,
        cross_validate=cross_validate,
        dotenv=dotenv,
        dotenv_expand=dotenv_expand,
        cwd=cwd,
    )
    if on_error == "return":
        return result
    if result.success:
        assert result.data is not None
        return result.data

    log_error("env_validation_failed", **make_event("core", None, {"variables": [i.variable for i in result.errors]}))
    if on_error == "exit":
        sys.stderr.write(_render(result.errors, reporter, color=sys.stderr.isatty()) + "\n")
        sys.exit(exit_code)
    raise EnvValidationError(result.errors, _render(result.errors, reporter, color=False))


def _render(errors: Sequence[ValidationIssue], reporter: ReporterLike, *, color: bool) -> str:
    if reporter in ("json", "minimal") or callable(reporter):
        return format_errors(errors, reporter)
    return format_pretty(errors, color=color)


def _with_prefix(values: Mapping[str, V], prefix: str) -> dict[str, V]:
    return {key: value for key, value in values.items() if key.startswith(prefix)}


def _dotenv_paths(dotenv: DotenvOption) -> list[str | os.PathLike[str]]:
    """Normalise the ``dotenv`` option to a list of paths.

    Examples
    --------
    >>> _dotenv_paths(True), _dotenv_paths(".env.local"), _dotenv_paths([".env", ".env.local"]), _dotenv_paths(False)
    (['.env'], ['.env.local'], ['.env', '.env.local'], [])
    """

    if dotenv is None or dotenv is False:
        return []
    if dotenv is True:
        return [".env"]
    if isinstance(dotenv, (str, os.PathLike)):
        return [dotenv]
    return list(dotenv)


def _cross_field_issues(outcome: CrossFieldOutcome) -> list[ValidationIssue]:
    """Normalise a cross-field validator's return value into issues.

    Accepted values: ``None`` (no problem), a message ``str``, a
    :class:`CrossFieldIssue`, a mapping with ``"message"`` and optional
    ``"variable"``, or an iterable of any of these.

    Examples
    --------
    >>> [issue.variable for issue in _cross_field_issues(["a", {"message": "b", "variable": "TLS_KEY"}, None])]
    ['_schema', 'TLS_KEY']
    """

    if outcome is None:
        return []
    if isinstance(outcome, str):
        return [cross_field_issue(outcome)]
    if isinstance(outcome, CrossFieldIssue):
        return [cross_field_issue(outcome.message, outcome.variable)]
    if isinstance(outcome, Mapping):
        return [cross_field_issue(str(outcome["message"]), outcome.get("variable"))]
    if isinstance(outcome, Iterable):
        return [issue for item in outcome for issue in _cross_field_issues(item)]
    raise TypeError(f"Unsupported cross-field validation result: {outcome!r}")


__all__ = [
    "apply_environment_rules",
    "create_env",
    "resolve_source",
    "validate_env",
]
