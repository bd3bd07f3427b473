"""CLI adapter for ``lib_env_schema`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators validate a deployment's environment, and keep ``.env.example``
in sync with the schema, without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_check` – validates the current environment against the schema
  module discovered in the working directory.
* :func:`cli_generate` – writes ``.env.example`` from the schema.
* :func:`cli_init` – scaffolds ``env_config.py`` and ``.env.example``.
* :func:`cli_help` / :func:`cli_version` / :func:`cli_info` – diagnostics.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls :func:`lib_env_schema.core.validate_env`
and the example generator and never reaches into engine internals.
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI. Failing commands exit with code 1.
"""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env.default import DefaultEnvLoader
from .adapters.reporters import format_errors
from .adapters.schema_files.default import DefaultSchemaLoader
from .core import validate_env
from .domain.errors import OutputExistsError, SchemaLoadError, SchemaNotFoundError
from .examples import init_project, write_example_file
from .schema.base import BaseSchema

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

PROG_NAME: Final[str] = "lib_env_schema"
REPORTER_CHOICES: Final[tuple[str, ...]] = ("pretty", "json", "minimal")


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when metadata is unavailable."""

    try:
        return metadata.version(PROG_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Validate environment variables against a declarative schema",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=PROG_NAME,
    message="lib_env_schema version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Schema module (defaults to env_config.py, src/env_config.py, config/env.py)",
)
@click.option(
    "--strict/--no-strict",
    default=False,
    help="Report variables the schema does not define (unprefixed shell variables are exempt)",
)
@click.option("--prefix", default=None, help="Look up PREFIX + name and restrict strict checks to prefixed variables")
@click.option("--strict-ignore", "strict_ignore", multiple=True, help="Variable exempt from strict checks (repeatable)")
@click.option(
    "--reporter",
    type=click.Choice(REPORTER_CHOICES, case_sensitive=False),
    default="pretty",
    show_default=True,
    help="Output format for validation errors",
)
@click.option(
    "--dotenv",
    "dotenv_paths",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Dotenv file layered under the environment (repeatable, later files win)",
)
def cli_check(
    schema_path: Optional[Path],
    strict: bool,
    prefix: Optional[str],
    strict_ignore: Sequence[str],
    reporter: str,
    dotenv_paths: Sequence[Path],
) -> None:
    """Validate the current environment against the project schema.

    Exits with code 0 when every variable is valid and 1 on validation
    failures or when no schema can be loaded. Without ``--prefix``, strict
    mode skips every variable already exported by the shell and reports only
    unknown keys the dotenv files add.
    """

    schema_file, schema = _load_schema(schema_path)
    click.echo(f"Using schema: {_display(schema_file)}")
    ignored = set(strict_ignore)
    if strict and not prefix:
        ignored.update(DefaultEnvLoader().load())
    result = validate_env(
        schema,
        prefix=prefix,
        strict=strict,
        strict_ignore=ignored,
        dotenv=list(dotenv_paths) or None,
    )
    if result.success:
        click.echo("All environment variables are valid!")
        click.echo(f"   {len(schema)} variables checked")
        return
    click.echo(format_errors(result.errors, reporter.lower()), err=True)
    raise SystemExit(1)


@cli.command("generate", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Schema module (defaults to env_config.py, src/env_config.py, config/env.py)",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path(".env.example"),
    show_default=True,
    help="Destination of the generated example file",
)
@click.option("--force/--no-force", default=False, show_default=True, help="Overwrite an existing output file")
def cli_generate(schema_path: Optional[Path], output: Path, force: bool) -> None:
    """Write a documented ``.env.example`` generated from the schema."""

    schema_file, schema = _load_schema(schema_path)
    click.echo(f"Using schema: {_display(schema_file)}")
    try:
        written = write_example_file(schema, output, force=force)
    except OutputExistsError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    click.echo(f"Generated {_display(written)}")
    click.echo(f"   {len(schema)} variables documented")


@cli.command("init", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("env_config.py"),
    show_default=True,
    help="Schema module to create",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path(".env.example"),
    show_default=True,
    help="Example file to create",
)
@click.option("--force/--no-force", default=False, show_default=True, help="Overwrite existing files")
def cli_init(schema_path: Path, output: Path, force: bool) -> None:
    """Scaffold a starter schema module and its ``.env.example``."""

    try:
        schema_file, example_file = init_project(schema_path, output, force=force)
    except OutputExistsError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    click.echo(f"Created {_display(schema_file)} and {_display(example_file)}")
    click.echo("   Next step: run `lib_env_schema check` after setting your environment variables.")


@cli.command("help", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_help(ctx: click.Context) -> None:
    """Show the command overview."""

    parent = ctx.parent if ctx.parent is not None else ctx
    click.echo(parent.get_help())


@cli.command("version", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_version() -> None:
    """Print the installed version."""

    click.echo(f"{PROG_NAME} version {_resolve_version()}")


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(PROG_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{PROG_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', PROG_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


def _load_schema(schema_path: Optional[Path]) -> tuple[Path, Mapping[str, BaseSchema[Any]]]:
    """Load the schema module or exit with code 1 and a diagnostic on stderr."""

    try:
        return DefaultSchemaLoader().load(schema_path)
    except SchemaNotFoundError as exc:
        click.echo("Error: Could not find env schema file.", err=True)
        click.echo("", err=True)
        click.echo("Searched for:", err=True)
        for candidate in exc.searched:
            click.echo(f"  - {_display(Path(candidate))}", err=True)
        click.echo("", err=True)
        click.echo("Create a schema file or specify one with --schema <path>", err=True)
        raise SystemExit(1) from exc
    except SchemaLoadError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc


def _display(path: Path) -> str:
    """Render *path* relative to the working directory when possible."""

    try:
        return str(path.resolve().relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=PROG_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
