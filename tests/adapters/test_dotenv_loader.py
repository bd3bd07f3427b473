from __future__ import annotations

from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from lib_env_schema.adapters.dotenv.default import (
    DefaultDotEnvLoader,
    expand_dotenv_vars,
    load_dotenv,
    load_dotenv_files,
    parse_dotenv,
)


def test_parse_dotenv_handles_comments_quotes_and_export() -> None:
    content = "\n".join(
        [
            "# leading comment",
            "",
            "export PORT=3000",
            "HOST = localhost # dev box",
            "SINGLE='kept # hash'",
            'DOUBLE="line\\nbreak \\"quoted\\""',
            "URL=postgres://u:p@h/db?x=1",
            "EMPTY=",
            "=novalue",
            "NOEQUALS",
            "HASHED=a#b",
        ]
    )
    assert parse_dotenv(content) == {
        "PORT": "3000",
        "HOST": "localhost",
        "SINGLE": "kept # hash",
        "DOUBLE": 'line\nbreak "quoted"',
        "URL": "postgres://u:p@h/db?x=1",
        "EMPTY": "",
        "HASHED": "a#b",
    }


def test_parse_dotenv_single_quotes_do_not_unescape() -> None:
    assert parse_dotenv("RAW='a\\nb'") == {"RAW": "a\\nb"}


def test_parse_dotenv_escaped_backslash_is_single_pass() -> None:
    assert parse_dotenv('PATHS="C:\\\\new"') == {"PATHS": "C:\\new"}


def test_parse_dotenv_later_duplicate_wins() -> None:
    assert parse_dotenv("A=1\nA=2") == {"A": "2"}


def test_load_dotenv_missing_file_is_empty(tmp_path: Path) -> None:
    assert load_dotenv(".env", cwd=tmp_path) == {}


def test_load_dotenv_reads_relative_to_cwd(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("PORT=1\n", encoding="utf-8")
    assert load_dotenv(cwd=tmp_path) == {"PORT": "1"}
    assert load_dotenv(tmp_path / ".env") == {"PORT": "1"}


def test_load_dotenv_files_later_files_win(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("A=base\nB=base\n", encoding="utf-8")
    (tmp_path / ".env.local").write_text("B=local\n", encoding="utf-8")
    assert load_dotenv_files(".env", ".env.local", ".env.absent", cwd=tmp_path) == {"A": "base", "B": "local"}


def test_dotenv_loader_records_loaded_paths(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TOKEN=x\n", encoding="utf-8")
    loader = DefaultDotEnvLoader(cwd=tmp_path)
    assert loader.load([".env", ".env.missing"]) == {"TOKEN": "x"}
    assert loader.last_loaded_paths == [str(env_file)]
    assert loader.load([".env.missing"]) == {}
    assert loader.last_loaded_paths == []


def test_expand_resolves_nested_and_context_references() -> None:
    values = {"HOST": "db", "PORT": "5432", "URL": "pg://${HOST}:${PORT}/${NAME}", "NAME": "${APP}_db"}
    expanded = expand_dotenv_vars(values, {"APP": "shop"})
    assert expanded["URL"] == "pg://db:5432/shop_db"
    assert list(expanded) == list(values)


def test_expand_prefers_file_values_over_context() -> None:
    assert expand_dotenv_vars({"A": "file", "B": "${A}"}, {"A": "context"})["B"] == "file"


def test_expand_unknown_reference_is_empty_and_cycles_terminate() -> None:
    assert expand_dotenv_vars({"A": "x${NOPE}y"}, {}) == {"A": "xy"}
    assert expand_dotenv_vars({"A": "${B}!", "B": "${C}", "C": "${A}"}, {}) == {"A": "!", "B": "", "C": ""}
    cyclic = expand_dotenv_vars({"SELF": "${SELF}x"}, {})
    assert cyclic == {"SELF": "x"}


def test_expand_escaped_reference_is_literal() -> None:
    assert expand_dotenv_vars({"A": "\\${B}", "B": "b"}, {}) == {"A": "${B}", "B": "b"}


def test_expand_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("LIB_ENV_SCHEMA_EXPAND_TEST", "from-os")
    assert expand_dotenv_vars({"A": "${LIB_ENV_SCHEMA_EXPAND_TEST}"}) == {"A": "from-os"}


KEY = st.text(alphabet="ABCDEFGHIJ_", min_size=1, max_size=6)
VALUE = st.text(alphabet="abcdefxyz0123456789-./:", max_size=10)


@given(st.dictionaries(KEY, VALUE, min_size=1, max_size=6))
def test_parse_dotenv_recovers_plain_assignments(entries) -> None:
    content = "\n".join(f"{key}={value}" for key, value in entries.items())
    assert parse_dotenv(content) == entries


@given(st.dictionaries(KEY, VALUE, max_size=6))
def test_expand_without_references_is_identity(entries) -> None:
    assert expand_dotenv_vars(entries, {}) == entries
