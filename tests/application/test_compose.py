from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_env_schema import e, extend_schema, merge_schemas, omit_schema, pick_schema, prefix_schema

NAMES = st.lists(st.text(alphabet="ABCXYZ", min_size=1, max_size=3), unique=True, max_size=6)


def _schema(names):
    return {name: e.string() for name in names}


def test_merge_later_schema_wins_and_keeps_first_position() -> None:
    base = {"PORT": e.string(), "HOST": e.string()}
    override = {"PORT": e.number()}
    merged = merge_schemas(base, override)
    assert list(merged) == ["PORT", "HOST"]
    assert merged["PORT"] is override["PORT"]
    assert list(base) == ["PORT", "HOST"] and base["PORT"].kind == "string"


def test_extend_schema_adds_fields() -> None:
    base = {"HOST": e.string()}
    extended = extend_schema(base, {"PORT": e.number()})
    assert list(extended) == ["HOST", "PORT"]
    assert list(base) == ["HOST"]


def test_pick_and_omit_ignore_unknown_names() -> None:
    schema = {"A": e.string(), "B": e.number(), "C": e.boolean()}
    assert list(pick_schema(schema, ["C", "A", "Z"])) == ["C", "A"]
    assert list(omit_schema(schema, ["B", "Z"])) == ["A", "C"]


def test_prefix_schema_renames_keys() -> None:
    schema = {"PORT": e.number()}
    prefixed = prefix_schema(schema, "API_")
    assert list(prefixed) == ["API_PORT"]
    assert prefixed["API_PORT"] is schema["PORT"]


@given(NAMES, NAMES)
def test_pick_and_omit_partition_the_schema(names, selected) -> None:
    schema = _schema(names)
    picked = pick_schema(schema, selected)
    omitted = omit_schema(schema, selected)
    assert set(picked) | set(omitted) == set(schema)
    assert not set(picked) & set(omitted)


@given(NAMES, NAMES, NAMES)
def test_merge_is_associative(first, second, third) -> None:
    a, b, c = _schema(first), _schema(second), _schema(third)
    assert merge_schemas(merge_schemas(a, b), c) == merge_schemas(a, merge_schemas(b, c)) == merge_schemas(a, b, c)
