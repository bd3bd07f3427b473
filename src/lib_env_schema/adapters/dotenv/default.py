"""`.env` adapter.

Purpose
-------
Read ``.env`` files into flat ``dict[str, str]`` layers and expand ``${VAR}``
references. Implements :class:`lib_env_schema.application.ports.DotEnvLoader`.

Contents
--------
* :func:`parse_dotenv` – text to key/value pairs.
* :func:`load_dotenv` / :func:`load_dotenv_files` – file reading; missing
  files are an empty layer, not an error.
* :func:`expand_dotenv_vars` – ``${VAR}`` substitution with cycle protection.
* :class:`DefaultDotEnvLoader` – port implementation remembering which files
  were actually read.

System Role
-----------
:mod:`lib_env_schema.core` layers the loaded values underneath the base
source so real environment variables always win over file defaults.

Syntax
------
``KEY=VALUE`` per line; blank lines and ``#`` comment lines are skipped, as are
lines without ``=`` or with an empty key. A leading ``export`` is ignored.
Values wrapped in matching single or double quotes are unwrapped; double
quoted values also unescape ``\\n``, ``\\r``, ``\\t``, ``\\\\`` and ``\\"``.
Unquoted values lose a trailing `` # comment``.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Iterable

from ...observability import log_debug, make_event

_EXPORT_RE = re.compile(r"^export\s+")
_ESCAPE_RE = re.compile(r'\\([nrt\\"])')
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", '"': '"'}
_REFERENCE_RE = re.compile(r"\\?\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def parse_dotenv(content: str) -> dict[str, str]:
    """Parse dotenv *content* into a flat mapping.

    Examples
    --------
    >>> parse_dotenv('# comment\\nexport PORT=3000\\nNAME="a\\\\tb"\\nHOST=localhost # dev\\nBROKEN')
    {'PORT': '3000', 'NAME': 'a\\tb', 'HOST': 'localhost'}
    """

    result: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = _EXPORT_RE.sub("", key.strip())
        if not key:
            continue
        result[key] = _unquote(value.strip())
    return result


def _unquote(value: str) -> str:
    """Unwrap quoted values and drop inline comments from unquoted ones.

    Examples
    --------
    >>> _unquote("'single # kept'"), _unquote('"a\\\\nb"'), _unquote('value # comment')
    ('single # kept', 'a\\nb', 'value')
    """

    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        inner = value[1:-1]
        if value[0] == '"':
            return _ESCAPE_RE.sub(lambda match: _ESCAPES[match.group(1)], inner)
        return inner
    if " #" in value:
        return value.split(" #", 1)[0].strip()
    return value


def load_dotenv(path: str | os.PathLike[str] = ".env", *, cwd: str | os.PathLike[str] | None = None) -> dict[str, str]:
    """Read and parse one dotenv file relative to *cwd* (default: the working directory).

    A missing or unreadable file yields ``{}``; dotenv files are optional.
    """

    resolved = _resolve(path, cwd)
    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        log_debug("dotenv_not_found", **make_event("dotenv", str(resolved)))
        return {}
    values = parse_dotenv(content)
    log_debug("dotenv_loaded", **make_event("dotenv", str(resolved), {"keys": sorted(values)}))
    return values


def load_dotenv_files(*paths: str | os.PathLike[str], cwd: str | os.PathLike[str] | None = None) -> dict[str, str]:
    """Load several dotenv files; later files override earlier ones."""

    merged: dict[str, str] = {}
    for path in paths:
        merged.update(load_dotenv(path, cwd=cwd))
    return merged


def expand_dotenv_vars(
    values: Mapping[str, str],
    context: Mapping[str, str | None] | None = None,
) -> dict[str, str]:
    """Expand ``${VAR}`` references inside *values*.

    References resolve against *values* first (recursively), then against
    *context* (default: :data:`os.environ`), else to ``""``. Reference cycles
    resolve to ``""`` instead of recursing forever. ``\\${VAR}`` produces the
    literal text ``${VAR}``.

    Examples
    --------
    >>> expand_dotenv_vars({"HOST": "db", "URL": "pg://${HOST}:${PORT}/x"}, {"PORT": "5432"})["URL"]
    'pg://db:5432/x'
    >>> expand_dotenv_vars({"A": "${B}", "B": "${A}"})
    {'A': '', 'B': ''}
    >>> expand_dotenv_vars({"RAW": "\\\\${HOME}"}, {})["RAW"]
    '${HOME}'
    """

    lookup: Mapping[str, str | None] = os.environ if context is None else context
    resolved: dict[str, str] = {}
    resolving: set[str] = set()

    def resolve(key: str) -> str:
        if key in resolved:
            return resolved[key]
        if key in resolving or key not in values:
            return ""
        resolving.add(key)

        def substitute(match: re.Match[str]) -> str:
            if match.group(0).startswith("\\"):
                return match.group(0)[1:]
            name = match.group(1)
            if name in values:
                return resolve(name)
            return lookup.get(name) or ""

        expanded = _REFERENCE_RE.sub(substitute, values[key])
        resolving.discard(key)
        resolved[key] = expanded
        return expanded

    return {key: resolve(key) for key in values}


def _resolve(path: str | os.PathLike[str], cwd: str | os.PathLike[str] | None) -> Path:
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return Path(cwd) / candidate if cwd is not None else Path.cwd() / candidate


class DefaultDotEnvLoader:
    """Load dotenv files into one flat layer.

    Why
    ----
    `.env` files supply secrets and developer defaults. Callers want to know
    which of the requested files actually existed, for diagnostics.
    """

    def __init__(self, *, cwd: str | os.PathLike[str] | None = None) -> None:
        """Initialise the loader; relative paths resolve against *cwd*."""

        self._cwd = cwd
        self.last_loaded_paths: list[str] = []

    def load(self, paths: Iterable[str | os.PathLike[str]]) -> dict[str, str]:
        """Return the merged contents of *paths* (later files win).

        Side Effects
        ------------
        Sets :attr:`last_loaded_paths` to the files that existed and were read.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> _ = (Path(tmp.name) / '.env').write_text('TOKEN=base\\nPORT=1', encoding='utf-8')
        >>> _ = (Path(tmp.name) / '.env.local').write_text('TOKEN=local', encoding='utf-8')
        >>> loader = DefaultDotEnvLoader(cwd=tmp.name)
        >>> loader.load(['.env', '.env.local', '.env.missing'])
        {'TOKEN': 'local', 'PORT': '1'}
        >>> [Path(p).name for p in loader.last_loaded_paths]
        ['.env', '.env.local']
        >>> tmp.cleanup()
        """

        merged: dict[str, str] = {}
        self.last_loaded_paths = []
        for path in paths:
            resolved = _resolve(path, self._cwd)
            if not resolved.is_file():
                log_debug("dotenv_not_found", **make_event("dotenv", str(resolved)))
                continue
            merged.update(load_dotenv(resolved))
            self.last_loaded_paths.append(str(resolved))
        return merged
