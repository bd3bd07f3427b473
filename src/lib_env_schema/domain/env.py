"""Domain-level value object for validated environments.

Purpose
-------
Anchor the immutable :class:`EnvData` mapping handed to callers after a
successful validation. The module contains no I/O and no knowledge of schemas.

Contents
--------
* :class:`EnvData` – ``Mapping`` implementation with attribute access, deep
  immutability, JSON export, and secret-aware ``repr``.
* :func:`deep_freeze` / :func:`deep_thaw` – helpers converting nested
  containers to read-only equivalents and back.
* :data:`EMPTY_ENV` – canonical empty instance.

System Role
-----------
Every successful call to :func:`lib_env_schema.core.create_env` returns an
:class:`EnvData`. Writes fail loudly so validated configuration cannot drift
after start-up.
"""

from __future__ import annotations

import json
from collections.abc import Mapping as MappingABC
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, TypeVar, overload

T = TypeVar("T")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class EnvData(MappingABC[str, Any]):
    """Immutable mapping of variable name to resolved, typed value.

    Why
    ----
    Validated configuration must not be mutated by downstream code, yet it
    should read like a dictionary (``env["PORT"]``) and like an object
    (``env.PORT``).

    Attribute access falls back to the data only for names the class does not
    define, so variables named like mapping methods (``keys``, ``values``,
    ``items``, ``get``, ``as_dict``, ``to_json``) are reachable by item access
    alone.

    Parameters
    ----------
    _data:
        Resolved values. Deep-frozen during initialisation: nested mappings
        become ``mappingproxy`` objects, lists become tuples.
    _secrets:
        Names of secret fields; their values are masked in ``repr``.

    Examples
    --------
    >>> env = EnvData({"PORT": 8080, "HOSTS": ["a", "b"]})
    >>> env.PORT, env["HOSTS"]
    (8080, ('a', 'b'))
    >>> shadowed = EnvData({"items": "3"})
    >>> shadowed["items"], callable(shadowed.items)
    ('3', True)
    >>> env["PORT"] = 1
    Traceback (most recent call last):
    ...
    TypeError: 'EnvData' object does not support item assignment
    """

    _data: Mapping[str, Any]
    _secrets: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", deep_freeze(dict(self._data)))
        object.__setattr__(self, "_secrets", frozenset(self._secrets))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        """Expose variables as attributes; private names never hit the data."""

        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError as exc:
            raise AttributeError(f"{type(self).__name__!s} has no variable {name!r}") from exc

    def __repr__(self) -> str:
        shown = {key: ("[REDACTED]" if key in self._secrets else value) for key, value in self._data.items()}
        return f"EnvData({deep_thaw(shown)!r})"

    @overload
    def get(self, key: str, default: T) -> Any | T: ...

    @overload
    def get(self, key: str, default: None = ...) -> Any | None: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key* or *default* when the key is unknown.

        Optional variables that were absent are stored as ``None`` and are
        therefore returned as ``None``, not as *default*.
        """

        if key in self._data:
            return self._data[key]
        return default

    def as_dict(self) -> dict[str, Any]:
        """Return a deep, mutable copy of the data.

        Examples
        --------
        >>> env = EnvData({"CFG": {"hosts": ["a"]}})
        >>> clone = env.as_dict()
        >>> clone["CFG"]["hosts"].append("b")
        >>> env["CFG"]["hosts"]
        ('a',)
        """

        return deep_thaw(self._data)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the data to JSON; non-JSON values (URLs, paths) use ``str``.

        Secret values are serialised as-is; this is an export, not a log line.

        Examples
        --------
        >>> EnvData({"DEBUG": True, "PORT": 3000}).to_json()
        '{"DEBUG":true,"PORT":3000}'
        """

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False, default=str)

    @property
    def secret_keys(self) -> frozenset[str]:
        """Names of variables whose schema was marked secret."""

        return self._secrets


def deep_freeze(value: Any) -> Any:
    """Return a read-only equivalent of *value*.

    Examples
    --------
    >>> frozen = deep_freeze({"a": [1, {"b": 2}]})
    >>> type(frozen).__name__, frozen["a"][1]["b"]
    ('mappingproxy', 2)
    """

    if isinstance(value, MappingABC):
        return MappingProxyType({key: deep_freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(deep_freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(deep_freeze(item) for item in value)
    return value


def deep_thaw(value: Any) -> Any:
    """Return a mutable deep copy of a structure produced by :func:`deep_freeze`."""

    if isinstance(value, MappingABC):
        return {key: deep_thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [deep_thaw(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return set(value)
    return value


EMPTY_ENV = EnvData({})
"""Canonical empty environment, safe to share because :class:`EnvData` is immutable."""
