"""Environment tables — where loaded variables end up.

Every process has an environment: a set of ``KEY=VALUE`` string pairs
inherited from its parent (``PATH``, ``HOME``, ``USER``, ...).  The
loader never reaches for ``os.environ`` directly.  Instead it talks to an
**environment table** — anything with ``get``, ``set``, ``unset`` and
``list_all`` — so the same code can populate the real process
environment or a throwaway in-memory copy.

Two tables ship with the library:
    - ``ProcessEnvironment`` — the host process's table (``os.environ``).
    - ``Environment`` — an independent in-memory table.  Handy for tests,
      shells and dry runs; modifying one never affects any other.

Both enforce the same rules on ``set``: keys must be non-empty, must not
contain ``=``, and neither keys nor values may contain NUL characters.
Violations raise ``EnvError``.

The module also carries the bulk helpers built on top of a table:
``set_env_map``, ``getenv_map`` and ``clear_env_setting``.
"""

import os
from collections.abc import Mapping
from typing import Protocol


class EnvError(Exception):
    """Raised when an environment variable cannot be set or read as requested."""


class EnvironmentTable(Protocol):
    """The operations the library needs from an environment table."""

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*."""
        ...

    def unset(self, key: str) -> None:
        """Remove *key* (missing keys are ignored)."""
        ...

    def list_all(self) -> list[str]:
        """Return every variable as a ``KEY=VALUE`` string."""
        ...


def _validate(key: str, value: str) -> None:
    if not key:
        msg = "environment variable name must not be empty"
        raise EnvError(msg)
    if "=" in key:
        msg = f"environment variable name must not contain '=': {key!r}"
        raise EnvError(msg)
    if "\x00" in key or "\x00" in value:
        msg = f"environment variable must not contain NUL characters: {key!r}"
        raise EnvError(msg)


class Environment:
    """An in-memory key-value store for environment variables.

    Each instance is an independent copy — modifying one does not
    affect any other.  This mirrors how Unix processes each have
    their own environment block.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites).

        Raises:
            EnvError: If *key* or *value* is not a legal variable.

        """
        _validate(key, value)
        self._vars[key] = value

    def unset(self, key: str) -> None:
        """Remove *key* from the environment, if present."""
        self._vars.pop(key, None)

    def list_all(self) -> list[str]:
        """Return all variables as ``KEY=VALUE`` strings."""
        return [f"{k}={v}" for k, v in self._vars.items()]

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs."""
        return list(self._vars.items())

    def copy(self) -> "Environment":
        """Return an independent copy of this environment."""
        return Environment(initial=self._vars)

    def __contains__(self, key: object) -> bool:
        """Return True if *key* is set."""
        return key in self._vars

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._vars)


class ProcessEnvironment:
    """The host process's environment, backed by ``os.environ``.

    Changes are visible to the whole process and inherited by any child
    process started afterwards.  There is no locking: callers that
    mutate the environment from several threads must serialize.
    """

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return os.environ.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* in the process environment.

        Raises:
            EnvError: If the variable is illegal or the platform refuses it.

        """
        _validate(key, value)
        try:
            os.environ[key] = value
        except (OSError, ValueError) as e:
            msg = f"cannot set environment variable {key!r}: {e}"
            raise EnvError(msg) from e

    def unset(self, key: str) -> None:
        """Remove *key* from the process environment, if present.

        Raises:
            EnvError: If the platform refuses to remove it.

        """
        try:
            os.environ.pop(key, None)
        except OSError as e:
            msg = f"cannot unset environment variable {key!r}: {e}"
            raise EnvError(msg) from e

    def list_all(self) -> list[str]:
        """Return all variables as ``KEY=VALUE`` strings."""
        return [f"{k}={v}" for k, v in os.environ.items()]


def set_env_map(mapping: Mapping[str, str], env: EnvironmentTable | None = None) -> None:
    """Set every variable in *mapping* on *env*, one ``set`` per key.

    The loop is not transactional: if a ``set`` fails, the keys before it
    stay set and the error is raised immediately.

    Args:
        mapping: Variables to apply.
        env: Target table (the process environment if omitted).

    Raises:
        EnvError: On the first variable the table refuses.

    """
    table = env if env is not None else ProcessEnvironment()
    for key, value in mapping.items():
        table.set(key, value)


def getenv_map(prefix: str = "", env: EnvironmentTable | None = None) -> dict[str, str]:
    """Return the variables whose names start with *prefix*.

    An empty prefix returns every variable.  Each ``KEY=VALUE`` entry is
    split on its first ``=`` only, so values may themselves contain ``=``.
    """
    table = env if env is not None else ProcessEnvironment()
    result: dict[str, str] = {}
    for entry in table.list_all():
        key, _, value = entry.partition("=")
        if key.startswith(prefix):
            result[key] = value
    return result


def clear_env_setting(*names: str, env: EnvironmentTable | None = None) -> None:
    """Unset each of *names*, in order, stopping at the first failure."""
    table = env if env is not None else ProcessEnvironment()
    for name in names:
        table.unset(name)
