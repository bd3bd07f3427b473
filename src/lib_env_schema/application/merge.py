"""Application-layer source layering.

Purpose
-------
Combine several flat variable sources (dotenv files, the process environment,
an explicit mapping) into the single snapshot the validation engine reads,
while remembering where every value came from.

Contents
    - ``merge_layers``: public entry point driven by a simple loop.
    - ``_merge_layer`` / ``_set_value``: small stanzas that narrate how
      precedence and provenance are updated.

System Role
-----------
Called by :mod:`lib_env_schema.core` with layers ordered from lowest to highest
precedence (``dotenv files → base source``). Free of I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable


def merge_layers(
    layers: Iterable[tuple[str, Mapping[str, str | None], str | None]],
) -> tuple[dict[str, str | None], dict[str, dict[str, object]]]:
    """Merge variable *layers* honouring precedence and provenance.

    Why
    ----
    Centralising precedence keeps ``create_env`` deterministic regardless of
    how many dotenv files are involved.

    What
    ----
    Iterates layer tuples and collects two dictionaries: the merged variables
    and provenance metadata. A ``None`` value in a higher layer does not hide a
    lower layer's value, matching how an unset variable behaves.

    Parameters
    ----------
    layers:
        Iterable of ``(layer_name, mapping, source_path)`` tuples ordered from
        lowest to highest precedence.

    Returns
    -------
    tuple[dict[str, str | None], dict[str, dict[str, object]]]
        ``(merged, provenance)`` where ``provenance`` maps each key to
        ``{"layer", "path", "key"}``.

    Side Effects
    ------------
    None; input mappings are only read.

    Examples
    --------
    >>> merged, meta = merge_layers([
    ...     ("dotenv", {"PORT": "3000", "HOST": "localhost"}, ".env"),
    ...     ("env", {"PORT": "8080"}, None),
    ... ])
    >>> merged["PORT"], merged["HOST"], meta["PORT"]["layer"], meta["HOST"]["path"]
    ('8080', 'localhost', 'env', '.env')
    """

    merged: dict[str, str | None] = {}
    meta: dict[str, dict[str, object]] = {}

    for layer_name, data, path in layers:
        _merge_layer(merged, meta, data, layer_name, path)
    return merged, meta


def _merge_layer(
    target: dict[str, str | None],
    meta: dict[str, dict[str, object]],
    payload: Mapping[str, str | None],
    layer: str,
    path: str | None,
) -> None:
    """Merge a single *payload* into *target* while tracking provenance."""

    for key, value in payload.items():
        if value is None:
            target.setdefault(key, None)
            continue
        _set_value(target, meta, key, value, layer, path)


def _set_value(
    target: dict[str, str | None],
    meta: dict[str, dict[str, object]],
    key: str,
    value: str,
    layer: str,
    path: str | None,
) -> None:
    """Assign *value* and record which layer supplied it."""

    target[key] = value
    meta[key] = {"layer": layer, "path": path, "key": key}
