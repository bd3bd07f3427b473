"""URL, JSON, array, duration, and path schemas."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_env_schema import SchemaDefinitionError, e
from lib_env_schema.schema import DURATION_UNITS, ParsedUrl, parse_duration, parse_url


def _message(schema, raw: str) -> str | None:
    coerced = schema.coerce(raw)
    if not coerced.success:
        return coerced.error
    failed = schema.first_failed_rule(coerced.value)
    return None if failed is None else failed.message


# -- url ----------------------------------------------------------------------


def test_url_components() -> None:
    parsed = e.url().coerce("postgresql://admin:pw@db.internal:5432/app?ssl=true").value
    assert isinstance(parsed, ParsedUrl)
    assert parsed.protocol == "postgresql:"
    assert (parsed.username, parsed.password) == ("admin", "pw")
    assert (parsed.hostname, parsed.port, parsed.host) == ("db.internal", "5432", "db.internal:5432")
    assert (parsed.pathname, parsed.search) == ("/app", "?ssl=true")
    assert str(parsed) == "postgresql://admin:pw@db.internal:5432/app?ssl=true"


def test_url_drops_default_port_and_adds_root_path() -> None:
    parsed = parse_url("https://example.com:443")
    assert parsed is not None
    assert parsed.port == ""
    assert parsed.pathname == "/"
    assert parsed.origin == "https://example.com"


@pytest.mark.parametrize("raw", ["not a url", "/relative", "example.com", "http://", "https:// spaced.com"])
def test_url_rejects_malformed(raw: str) -> None:
    assert _message(e.url(), raw) == f'Invalid URL format: "{raw}"'


def test_url_protocols_and_host_rules() -> None:
    schema = e.url().protocols(["redis", "rediss:"])
    assert _message(schema, "redis://cache:6379") is None
    assert _message(schema, "rediss://cache:6380") is None
    assert _message(schema, "http://cache") == "Protocol must be one of: redis, rediss:"
    assert _message(e.url().host("api.example.com"), "https://other.example.com") == 'Host must be "api.example.com"'
    assert _message(e.url().with_path(), "https://example.com/") == "URL must have a path"
    assert _message(e.url().with_path(), "https://example.com/v1") is None


def test_url_host_rule_ignores_case_on_both_sides() -> None:
    schema = e.url().host("API.Example.com")
    assert _message(schema, "https://api.example.com/v1") is None
    assert _message(schema, "https://API.EXAMPLE.COM/v1") is None
    assert _message(schema, "https://other.example.com") == 'Host must be "API.Example.com"'


def test_url_examples_follow_protocols() -> None:
    assert e.url().protocols(["postgresql"]).get_example().startswith("postgresql://")
    assert e.url().protocols(["redis"]).get_example() == "redis://localhost:6379"
    assert e.url().get_example() == "https://example.com"
    assert e.url().get_type_description() == "URL"


# -- json ---------------------------------------------------------------------


def test_json_parses_documents() -> None:
    assert e.json().coerce(' {"a": 1} ').value == {"a": 1}
    assert e.json().coerce("[1, 2]").value == [1, 2]
    assert e.json().coerce("null").success


@pytest.mark.parametrize("raw", ["{bad", "NaN", "[Infinity]", "{'a': 1}"])
def test_json_rejects_invalid(raw: str) -> None:
    error = e.json().coerce(raw).error
    assert error is not None and error.startswith("Invalid JSON: ")


def test_json_shape_and_custom_rules() -> None:
    assert _message(e.json().array(), "{}") == "Must be a JSON array"
    assert _message(e.json().object(), "{}") is None
    schema = e.json().object().validate(lambda doc: "name" in doc, "Must contain a name")
    assert _message(schema, '{"id": 1}') == "Must contain a name"


# -- array --------------------------------------------------------------------


def test_array_splits_trims_and_drops_empty_pieces() -> None:
    assert e.array(e.string()).coerce(" a, b ,,c ,").value == ["a", "b", "c"]
    assert e.array(e.string()).coerce(",,").value == []


def test_array_custom_separator_and_typed_items() -> None:
    schema = e.array(e.number().integer()).separator(";")
    assert schema.coerce("1;2; 3").value == [1, 2, 3]
    assert _message(schema, "1;x") == 'Invalid item at index 1: Cannot convert "x" to number'


def test_array_length_rules() -> None:
    assert _message(e.array(e.string()).min_length(2), "a") == "Must have at least 2 items"
    assert _message(e.array(e.string()).max_length(1), "a,b") == "Must have at most 1 item"
    assert _message(e.array(e.string()).non_empty(), ",") == "Must have at least 1 item"


def test_array_description_and_example() -> None:
    schema = e.array(e.enum(["a", "b"]))
    assert schema.get_type_description() == "array of enum (a | b)"
    assert schema.get_example() == "a,a"


def test_array_definition_errors() -> None:
    with pytest.raises(SchemaDefinitionError):
        e.array(e.string()).separator("")


@given(st.lists(st.text(alphabet="abcxyz", min_size=1, max_size=6), max_size=8), st.sampled_from([",", ";", "|"]))
def test_array_recovers_joined_items(items: list[str], separator: str) -> None:
    assert e.array(e.string()).separator(separator).coerce(separator.join(items)).value == items


# -- duration -----------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("100", 100), ("100ms", 100), ("5s", 5000), ("5 SEC", 5000), ("30m", 1_800_000), ("1h", 3_600_000), ("7d", 604_800_000), ("1.5s", 1500), ("0.5ms", 0.5)],
)
def test_parse_duration(raw: str, expected: float) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "5 lightyears", "1h30m", "-5s"])
def test_parse_duration_rejects(raw: str) -> None:
    assert parse_duration(raw) is None


def test_duration_rejects_negative_bare_numbers() -> None:
    assert e.duration().coerce("-5").error == "Duration must be non-negative"
    assert e.duration().coerce("soon").error == "Invalid duration format. Use formats like: 100ms, 5s, 30m, 1h, 7d"


def test_duration_bounds_accept_strings_and_milliseconds() -> None:
    assert _message(e.duration().min("1s"), "500ms") == "Must be at least 1s"
    assert _message(e.duration().max(1000), "2s") == "Must be at most 1000ms"
    with pytest.raises(SchemaDefinitionError):
        e.duration().min("eventually")


def test_duration_default_is_parsed_eagerly() -> None:
    assert e.duration().default("2m").default_value == 120_000
    assert e.duration().default(250).default_value == 250
    with pytest.raises(SchemaDefinitionError):
        e.duration().default("forever")


@given(st.integers(min_value=0, max_value=10_000), st.sampled_from(sorted(DURATION_UNITS)))
def test_duration_units_multiply(amount: int, unit: str) -> None:
    assert parse_duration(f"{amount}{unit}") == amount * DURATION_UNITS[unit]


# -- path ---------------------------------------------------------------------


def test_path_normalises_without_touching_disk() -> None:
    assert e.path().coerce(" a/./b/../c ").value == os.path.normpath("a/c")
    assert e.path().coerce("   ").error == "Path cannot be empty"


def test_path_filesystem_rules(tmp_path: Path) -> None:
    existing = tmp_path / "app.json"
    existing.write_text("{}", encoding="utf-8")
    missing = tmp_path / "missing.json"
    assert _message(e.path().exists(), str(existing)) is None
    assert _message(e.path().exists(), str(missing)) == "Path does not exist"
    assert _message(e.path().is_file(), str(tmp_path)) == "Must be a file"
    assert _message(e.path().is_directory(), str(existing)) == "Must be a directory"
    assert _message(e.path().readable(), str(missing)) == "Path is not readable"
    assert _message(e.path().writable(), str(tmp_path)) is None


def test_path_shape_rules(tmp_path: Path) -> None:
    assert _message(e.path().absolute(), "relative/file") == "Must be an absolute path"
    assert _message(e.path().relative(), str(tmp_path)) == "Must be a relative path"
    assert _message(e.path().extension(["json", ".yaml"]), "conf.toml") == "Must have extension: .json, .yaml"
    assert _message(e.path().extension("json"), "CONF.JSON") is None


def test_path_description() -> None:
    assert e.path().get_type_description() == "path"
    assert e.path().is_directory().get_type_description() == "path (directory)"
