"""Field schema builders.

Purpose
-------
Offer the declarative vocabulary applications use to describe their
environment: ``string()``, ``number()``, ``boolean()``, ``enum()``, ``url()``,
``json()``, ``array()``, ``duration()`` and ``path()``.

Contents
--------
* Builder functions returning fresh, immutable schemas.
* The schema classes and shared value types for type annotations.

System Role
-----------
Re-exported by :mod:`lib_env_schema` as the ``e`` namespace so a schema reads
``{"PORT": e.number().port().default(3000)}``.
"""

from __future__ import annotations

from .arrays import ArraySchema, array
from .base import NO_DEFAULT, BaseSchema, CoercionResult, SchemaMetadata, ValidationRule
from .booleans import BOOLEAN_FALSE_VALUES, BOOLEAN_TRUE_VALUES, BooleanSchema, boolean
from .durations import DURATION_UNITS, DurationSchema, duration, parse_duration
from .enums import EnumSchema, enum
from .json_values import JsonSchema, json
from .numbers import NumberSchema, number
from .paths import PathSchema, path
from .strings import StringSchema, is_ipv4, is_ipv6, string
from .urls import ParsedUrl, UrlSchema, parse_url, url

__all__ = [
    "NO_DEFAULT",
    "BaseSchema",
    "CoercionResult",
    "SchemaMetadata",
    "ValidationRule",
    "ArraySchema",
    "BooleanSchema",
    "DurationSchema",
    "EnumSchema",
    "JsonSchema",
    "NumberSchema",
    "ParsedUrl",
    "PathSchema",
    "StringSchema",
    "UrlSchema",
    "BOOLEAN_FALSE_VALUES",
    "BOOLEAN_TRUE_VALUES",
    "DURATION_UNITS",
    "array",
    "boolean",
    "duration",
    "enum",
    "is_ipv4",
    "is_ipv6",
    "json",
    "number",
    "parse_duration",
    "parse_url",
    "path",
    "string",
    "url",
]
