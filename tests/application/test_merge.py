from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_env_schema.application.merge import merge_layers

KEY = st.text(alphabet="ABCDEFG_", min_size=1, max_size=4)
VALUE = st.one_of(st.none(), st.text(max_size=5))
MAPPING = st.dictionaries(KEY, VALUE, max_size=6)


def test_precedence_overwrites() -> None:
    layers = [
        ("dotenv", {"PORT": "3000", "HOST": "localhost"}, ".env"),
        ("source", {"PORT": "8080"}, None),
    ]
    merged, meta = merge_layers(layers)
    assert merged == {"PORT": "8080", "HOST": "localhost"}
    assert meta["PORT"] == {"layer": "source", "path": None, "key": "PORT"}
    assert meta["HOST"]["path"] == ".env"


def test_none_does_not_hide_lower_layer() -> None:
    merged, meta = merge_layers([("dotenv", {"TOKEN": "file"}, ".env"), ("source", {"TOKEN": None}, None)])
    assert merged["TOKEN"] == "file"
    assert meta["TOKEN"]["layer"] == "dotenv"


def test_none_only_key_is_kept_without_provenance() -> None:
    merged, meta = merge_layers([("source", {"UNSET": None}, None)])
    assert merged == {"UNSET": None}
    assert "UNSET" not in meta


def test_merge_is_idempotent() -> None:
    layers = [("dotenv", {"A": "1"}, ".env"), ("source", {"A": "2", "B": "3"}, None)]
    assert merge_layers(layers) == merge_layers(layers)


def test_inputs_are_not_modified() -> None:
    low = {"A": "1"}
    high = {"A": None, "B": "2"}
    merge_layers([("low", low, None), ("high", high, None)])
    assert low == {"A": "1"}
    assert high == {"A": None, "B": "2"}


@given(MAPPING, MAPPING, MAPPING)
def test_merge_associative(lhs, mid, rhs) -> None:
    left, _ = merge_layers([("lhs", lhs, None), ("mid", mid, None), ("rhs", rhs, None)])
    left_then_right, _ = merge_layers([("lhs-mid", merge_layers([("lhs", lhs, None), ("mid", mid, None)])[0], None), ("rhs", rhs, None)])
    right_then_left, _ = merge_layers(
        [("lhs", lhs, None), ("mid-rhs", merge_layers([("mid", mid, None), ("rhs", rhs, None)])[0], None)]
    )
    assert left == left_then_right == right_then_left


@given(MAPPING, MAPPING)
def test_highest_non_none_value_wins(low, high) -> None:
    merged, _ = merge_layers([("low", low, None), ("high", high, None)])
    for key in set(low) | set(high):
        expected = high.get(key) if high.get(key) is not None else low.get(key)
        assert merged[key] == expected
