"""Environment variable adapter.

Purpose
-------
Take a snapshot of process environment variables for the validation engine.
It implements :class:`lib_env_schema.application.ports.EnvLoader` and is the
only place the library reads :data:`os.environ`.

Key behaviours
--------------
* Returns a plain ``dict`` copy so later changes to the environment cannot
  affect a validation run in progress.
* Optionally keeps only keys beginning with a prefix (the prefix is kept on the
  key; prefix stripping is the engine's job).
* Accepts an injected mapping for tests and embedding.
* Emits structured logging via :mod:`lib_env_schema.observability` with the
  number of captured keys, never their values.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from ...observability import log_debug, make_event


class DefaultEnvLoader:
    """Snapshot environment variables, optionally filtered by prefix."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`, read lazily at
            every :meth:`load` call.
        """

        self._environ = environ

    def load(self, prefix: str | None = None) -> dict[str, str]:
        """Return a copy of the environment, restricted to *prefix* when given.

        Parameters
        ----------
        prefix:
            Keep only keys starting with this exact, case-sensitive prefix.

        Returns
        -------
        dict[str, str]
            Snapshot suitable for :func:`lib_env_schema.application.engine.validate`.

        Side Effects
        ------------
        Emits an ``env_snapshot_loaded`` debug event with the key count.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'APP_PORT': '80', 'HOME': '/root'})
        >>> loader.load('APP_')
        {'APP_PORT': '80'}
        >>> sorted(loader.load())
        ['APP_PORT', 'HOME']
        """

        environ = os.environ if self._environ is None else self._environ
        snapshot = {key: value for key, value in environ.items() if not prefix or key.startswith(prefix)}
        log_debug("env_snapshot_loaded", **make_event("env", None, {"keys": len(snapshot), "prefix": prefix}))
        return snapshot
