"""Write environment variables back out as a ``.env`` file.

The output is the simplest form the loader reads: one ``KEY=VALUE``
per line, values unquoted.  Lines are sorted by key so repeated dumps
of the same environment produce the same file.

Values are written verbatim.  A value holding ``#`` or surrounding
quotes won't read back identically; quote such values by hand.
"""

from collections.abc import Mapping
from pathlib import Path

from py_envs.env import EnvironmentTable, getenv_map
from py_envs.loader import StrPath


def format_env_lines(env_map: Mapping[str, str]) -> list[str]:
    """Render *env_map* as sorted ``KEY=VALUE`` lines (no newlines)."""
    return [f"{key}={env_map[key]}" for key in sorted(env_map)]


def write_env_file(prefix: str, path: StrPath, *, env: EnvironmentTable | None = None) -> int:
    """Write the variables starting with *prefix* to *path*.

    Nothing is written, and no file is created, when no variable matches.

    Args:
        prefix: Name prefix to select (``""`` selects everything).
        path: Destination file; created or truncated.
        env: Source table (the process environment if omitted).

    Returns:
        The number of variables written.

    Raises:
        OSError: If the file cannot be written.

    """
    env_map = getenv_map(prefix, env)
    if not env_map:
        return 0

    with Path(path).open("w", encoding="utf-8") as f:
        f.writelines(f"{line}\n" for line in format_env_lines(env_map))
    return len(env_map)
