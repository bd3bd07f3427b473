"""Environment loader adapter tests covering snapshots and prefix filtering."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_env_schema.adapters.env.default import DefaultEnvLoader


def test_env_loader_filters_by_prefix() -> None:
    """Only keys starting with the prefix survive; the prefix stays on the key."""

    loader = DefaultEnvLoader(environ={"APP_PORT": "80", "APP_HOST": "h", "HOME": "/root", "app_lower": "x"})
    assert loader.load("APP_") == {"APP_PORT": "80", "APP_HOST": "h"}


def test_env_loader_returns_snapshot_copy() -> None:
    environ = {"PORT": "80"}
    snapshot = DefaultEnvLoader(environ=environ).load()
    environ["PORT"] = "81"
    assert snapshot == {"PORT": "80"}


def test_env_loader_reads_process_environment_lazily(monkeypatch) -> None:
    loader = DefaultEnvLoader()
    monkeypatch.setenv("LIB_ENV_SCHEMA_TEST_VALUE", "late")
    assert loader.load("LIB_ENV_SCHEMA_TEST_")["LIB_ENV_SCHEMA_TEST_VALUE"] == "late"


KEYS = st.text(alphabet="ABC_", min_size=1, max_size=6)


@given(st.dictionaries(KEYS, st.text(max_size=4), max_size=10), st.sampled_from(["A", "AB", "C_", ""]))
def test_env_loader_prefix_property(environ, prefix) -> None:
    snapshot = DefaultEnvLoader(environ=environ).load(prefix or None)
    assert snapshot == {key: value for key, value in environ.items() if key.startswith(prefix)}
