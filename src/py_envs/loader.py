"""File loader — read ``.env`` files and apply them to an environment.

``read_env_file`` turns one file into a fresh ``dict`` of variables:

1. Each line is trimmed; blank lines and ``#`` comments are skipped.
2. The line recognizer extracts a key and raw value (an ``export``
   prefix is handled there).  Lines it doesn't recognize are skipped.
3. Key and value are unquoted and stored; a later assignment to the
   same key overwrites an earlier one.

Malformed lines are never fatal, but a file that can't be opened is:
the ``OSError`` reaches the caller unchanged, and so does the
``UnicodeDecodeError`` for a file that is not UTF-8.

``load`` is the startup convenience: read several files (or ``.env``),
merge them, then set every variable on an environment table.  All the
reading happens before any variable is set, so an unreadable file
leaves the environment untouched.
"""

from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import TypeAlias

from py_envs.env import EnvironmentTable, ProcessEnvironment, set_env_map
from py_envs.logging import Logger, LogLevel
from py_envs.parser import recognize, remove_quotes

DEFAULT_ENV_FILE = ".env"

StrPath: TypeAlias = str | PathLike[str]

_SOURCE = "loader"


def read_env_file(path: StrPath, *, logger: Logger | None = None) -> dict[str, str]:
    """Read a ``.env`` file into a new mapping.

    Args:
        path: The file to read (UTF-8).
        logger: Optional event log for skipped lines and a summary.

    Returns:
        The variables defined in the file, unquoted.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file is not valid UTF-8.  Nothing is
            guessed or replaced.

    """
    env_map: dict[str, str] = {}
    with Path(path).open(encoding="utf-8") as f:
        for number, raw_line in enumerate(f, start=1):
            line = raw_line.strip()
            if not line or line[0] == "#":
                continue
            assignment = recognize(line)
            if assignment is None:
                if logger is not None:
                    logger.log(
                        LogLevel.DEBUG,
                        "skipped unrecognized line",
                        source=_SOURCE,
                        path=path,
                        line=number,
                    )
                continue
            env_map[remove_quotes(assignment.key)] = remove_quotes(assignment.raw_value)

    if logger is not None:
        logger.log(LogLevel.INFO, f"read {len(env_map)} variable(s)", source=_SOURCE, path=path)
    return env_map


def merge_maps(*maps: Mapping[str, str]) -> dict[str, str]:
    """Merge *maps* into a new dict; later maps win on conflicting keys."""
    result: dict[str, str] = {}
    for m in maps:
        result.update(m)
    return result


def load(
    *paths: StrPath,
    env: EnvironmentTable | None = None,
    logger: Logger | None = None,
) -> dict[str, str]:
    """Read environment files and set their variables.

    Args:
        paths: Files to read in order; later files override earlier ones.
            With no paths, ``DEFAULT_ENV_FILE`` in the working directory
            is read.
        env: Target table (the process environment if omitted).
        logger: Optional event log.

    Returns:
        The merged mapping that was applied.

    Raises:
        OSError: If any file cannot be read.  Nothing has been set yet.
        UnicodeDecodeError: If any file is not valid UTF-8.  Nothing has
            been set yet.
        EnvError: If the table refuses a variable.  Variables applied
            before it stay set.

    """
    sources = paths or (DEFAULT_ENV_FILE,)
    env_map = merge_maps(*(read_env_file(p, logger=logger) for p in sources))

    table = env if env is not None else ProcessEnvironment()
    set_env_map(env_map, table)

    if logger is not None:
        logger.log(LogLevel.INFO, f"set {len(env_map)} variable(s)", source=_SOURCE)
    return env_map
