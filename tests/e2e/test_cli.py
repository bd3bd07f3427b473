"""End-to-end CLI coverage for the public commands exposed by lib_env_schema.

These tests exercise the documented workflows (init, generate, check,
metadata lookups) inside a temporary project directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from lib_env_schema import cli

SCHEMA_MODULE = """\
from lib_env_schema import e

schema = {
    "PORT": e.number().port().default(3000).description("HTTP port"),
    "DATABASE_URL": e.url(),
    "API_KEY": e.string().min_length(8).secret(),
}
"""


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide an empty working directory with the schema variables unset."""

    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "DATABASE_URL", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _write_schema(project: Path, relative: str = "env_config.py") -> Path:
    target = project / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(SCHEMA_MODULE, encoding="utf-8")
    return target


def test_cli_check_succeeds_with_valid_environment(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """`check` reports success and the number of checked variables."""

    _write_schema(project)
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("API_KEY", "sk_live_12345678")
    result = _runner().invoke(cli.cli, ["check"])
    assert result.exit_code == 0, result.output
    assert "Using schema: env_config.py" in result.output
    assert "All environment variables are valid!" in result.output
    assert "3 variables checked" in result.output


def test_cli_check_fails_and_redacts_secrets(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """`check` exits 1, lists each problem, and never prints secret values."""

    _write_schema(project)
    monkeypatch.setenv("API_KEY", "tiny-key")
    monkeypatch.setenv("PORT", "0")
    result = _runner().invoke(cli.cli, ["check", "--reporter", "json"])
    assert result.exit_code == 1
    document = json.loads(result.output[result.output.index("{") :])
    assert [error["variable"] for error in document["errors"]] == ["PORT", "DATABASE_URL"]
    assert "tiny-key" not in result.output


def test_cli_check_minimal_reporter_and_secret_rule(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_schema(project)
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("API_KEY", "short")
    result = _runner().invoke(cli.cli, ["check", "--reporter", "minimal"])
    assert result.exit_code == 1
    assert "lib_env_schema: 1 invalid environment variable: API_KEY" in result.output
    assert "short" not in result.output.replace("lib_env_schema", "")


def test_cli_check_reads_dotenv_files(project: Path) -> None:
    """`--dotenv` layers files under the real environment."""

    _write_schema(project)
    (project / ".env").write_text("DATABASE_URL=postgres://db/app\nAPI_KEY=sk_live_12345678\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["check", "--dotenv", ".env"])
    assert result.exit_code == 0, result.output


def test_cli_check_strict_flags_unknown_dotenv_variables(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_schema(project)
    monkeypatch.delenv("DATABSE_URL", raising=False)
    (project / ".env").write_text(
        "DATABASE_URL=postgres://db/app\nAPI_KEY=sk_live_12345678\nDATABSE_URL=typo\n", encoding="utf-8"
    )
    result = _runner().invoke(cli.cli, ["check", "--strict", "--reporter", "minimal", "--dotenv", ".env"])
    assert result.exit_code == 1
    assert "lib_env_schema: 1 invalid environment variable: DATABSE_URL" in result.output


def test_cli_check_strict_passes_with_ambient_shell_variables(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Variables the shell exports do not count as unknown without a prefix."""

    _write_schema(project)
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("API_KEY", "sk_live_12345678")
    monkeypatch.setenv("SOME_AMBIENT_VARIABLE", "1")
    result = _runner().invoke(cli.cli, ["check", "--strict", "--reporter", "minimal"])
    assert result.exit_code == 0, result.output
    assert "All environment variables are valid!" in result.output


def test_cli_check_strict_with_prefix_and_ignore(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_schema(project)
    monkeypatch.setenv("SVC_DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("SVC_API_KEY", "sk_live_12345678")
    monkeypatch.setenv("SVC_LEGACY", "1")
    monkeypatch.setenv("SVC_TYPO", "1")
    command = ["check", "--strict", "--prefix", "SVC_", "--reporter", "minimal", "--strict-ignore", "SVC_LEGACY"]
    result = _runner().invoke(cli.cli, command)
    assert result.exit_code == 1
    assert "lib_env_schema: 1 invalid environment variable: SVC_TYPO" in result.output

    monkeypatch.delenv("SVC_TYPO")
    assert _runner().invoke(cli.cli, command).exit_code == 0


def test_cli_check_without_schema_lists_search_paths(project: Path) -> None:
    result = _runner().invoke(cli.cli, ["check"])
    assert result.exit_code == 1
    assert "Could not find env schema file." in result.output
    for candidate in ("env_config.py", "src/env_config.py", "config/env.py"):
        assert str(Path(candidate)) in result.output
    assert "--schema <path>" in result.output


def test_cli_check_with_explicit_schema(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_schema(project, "settings/env_schema.py")
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("API_KEY", "sk_live_12345678")
    result = _runner().invoke(cli.cli, ["check", "--schema", "settings/env_schema.py"])
    assert result.exit_code == 0, result.output
    assert str(Path("settings/env_schema.py")) in result.output


def test_cli_check_reports_broken_schema_module(project: Path) -> None:
    (project / "env_config.py").write_text("import does_not_exist_anywhere\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["check"])
    assert result.exit_code == 1
    assert "Failed to load schema" in result.output


def test_cli_generate_writes_example_and_respects_force(project: Path) -> None:
    """`generate` writes `.env.example` once and only overwrites with --force."""

    _write_schema(project)
    first = _runner().invoke(cli.cli, ["generate"])
    assert first.exit_code == 0, first.output
    assert "Generated .env.example" in first.output
    assert "3 variables documented" in first.output
    content = (project / ".env.example").read_text(encoding="utf-8")
    assert "# HTTP port" in content
    assert "PORT=3000" in content
    assert "API_KEY=\n" in content

    second = _runner().invoke(cli.cli, ["generate"])
    assert second.exit_code == 1
    assert "File already exists" in second.output

    forced = _runner().invoke(cli.cli, ["generate", "--force", "--output", "deploy/.env.sample"])
    assert forced.exit_code == 0, forced.output
    assert (project / "deploy" / ".env.sample").is_file()


def test_cli_init_scaffolds_project_then_refuses_second_run(project: Path) -> None:
    first = _runner().invoke(cli.cli, ["init"])
    assert first.exit_code == 0, first.output
    assert (project / "env_config.py").is_file()
    assert (project / ".env.example").is_file()

    second = _runner().invoke(cli.cli, ["init"])
    assert second.exit_code == 1
    assert "File already exists" in second.output

    forced = _runner().invoke(cli.cli, ["init", "--force"])
    assert forced.exit_code == 0, forced.output


def test_cli_init_output_is_checkable(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The scaffolded schema validates once its required variable is set."""

    _runner().invoke(cli.cli, ["init"])
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.delenv("APP_ENV", raising=False)
    result = _runner().invoke(cli.cli, ["check"])
    assert result.exit_code == 0, result.output


def test_cli_version_and_help_commands() -> None:
    version = _runner().invoke(cli.cli, ["version"])
    assert version.exit_code == 0
    assert version.output.startswith("lib_env_schema version ")
    assert _runner().invoke(cli.cli, ["help"]).exit_code == 0
    assert _runner().invoke(cli.cli, ["--help"]).exit_code == 0


def test_cli_info_handles_missing_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    """`info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """`main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    _write_schema(project)
    monkeypatch.setenv("DATABASE_URL", "postgres://db/app")
    monkeypatch.setenv("API_KEY", "sk_live_12345678")
    exit_code = cli.main(["--traceback", "check"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
