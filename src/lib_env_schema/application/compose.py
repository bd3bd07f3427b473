"""Schema composition helpers.

Purpose
-------
Build larger schemas from smaller ones (shared base plus service-specific
fields) without mutating any input.

Contents
--------
* :func:`merge_schemas` – combine several schemas; later ones win on key clash.
* :func:`extend_schema` – readable two-argument form of :func:`merge_schemas`.
* :func:`pick_schema` / :func:`omit_schema` – key subsets.
* :func:`prefix_schema` – rename every key with a prefix.

System Role
-----------
Pure functions over ``Mapping[str, BaseSchema]``. They return new ``dict``
objects and share the (immutable) field schemas unchanged.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..schema.base import BaseSchema

Schema = Mapping[str, BaseSchema[Any]]


def merge_schemas(*schemas: Schema) -> dict[str, BaseSchema[Any]]:
    """Merge *schemas* left to right; a later definition replaces an earlier one.

    Examples
    --------
    >>> from lib_env_schema.schema import number, string
    >>> merged = merge_schemas({"PORT": string()}, {"PORT": number(), "HOST": string()})
    >>> list(merged), merged["PORT"].kind
    (['PORT', 'HOST'], 'number')
    """

    merged: dict[str, BaseSchema[Any]] = {}
    for schema in schemas:
        merged.update(schema)
    return merged


def extend_schema(base: Schema, additions: Schema) -> dict[str, BaseSchema[Any]]:
    """Return *base* extended by *additions* (additions win)."""

    return merge_schemas(base, additions)


def pick_schema(schema: Schema, keys: Iterable[str]) -> dict[str, BaseSchema[Any]]:
    """Keep only *keys*; names not present in *schema* are ignored.

    Examples
    --------
    >>> from lib_env_schema.schema import string
    >>> sorted(pick_schema({"A": string(), "B": string()}, ["B", "Z"]))
    ['B']
    """

    return {key: schema[key] for key in keys if key in schema}


def omit_schema(schema: Schema, keys: Iterable[str]) -> dict[str, BaseSchema[Any]]:
    """Drop *keys*; names not present in *schema* are ignored."""

    excluded = set(keys)
    return {key: field for key, field in schema.items() if key not in excluded}


def prefix_schema(schema: Schema, prefix: str) -> dict[str, BaseSchema[Any]]:
    """Prepend *prefix* to every key.

    Examples
    --------
    >>> from lib_env_schema.schema import string
    >>> list(prefix_schema({"PORT": string(), "HOST": string()}, "APP_"))
    ['APP_PORT', 'APP_HOST']
    """

    return {f"{prefix}{key}": field for key, field in schema.items()}
