"""Load ``.env`` files into the environment and read typed values back.

Re-exports public symbols so callers can write::

    from py_envs import load, get_int

    load()                       # reads ./.env into os.environ
    port = get_int("PORT", default=8000)
"""

from py_envs.env import (
    EnvError,
    Environment,
    EnvironmentTable,
    ProcessEnvironment,
    clear_env_setting,
    getenv_map,
    set_env_map,
)
from py_envs.getters import (
    get_bool,
    get_float32,
    get_float64,
    get_int,
    get_int8,
    get_int16,
    get_int32,
    get_int64,
    get_uint8,
    get_uint16,
    get_uint32,
    get_uint64,
    getenv_or_default,
)
from py_envs.loader import DEFAULT_ENV_FILE, load, merge_maps, read_env_file
from py_envs.logging import LogEntry, Logger, LogLevel
from py_envs.parser import Assignment, recognize, remove_quotes, strip_export
from py_envs.writer import format_env_lines, write_env_file

__all__ = [
    "DEFAULT_ENV_FILE",
    "Assignment",
    "EnvError",
    "Environment",
    "EnvironmentTable",
    "LogEntry",
    "LogLevel",
    "Logger",
    "ProcessEnvironment",
    "clear_env_setting",
    "format_env_lines",
    "get_bool",
    "get_float32",
    "get_float64",
    "get_int",
    "get_int8",
    "get_int16",
    "get_int32",
    "get_int64",
    "get_uint8",
    "get_uint16",
    "get_uint32",
    "get_uint64",
    "getenv_map",
    "getenv_or_default",
    "load",
    "merge_maps",
    "read_env_file",
    "recognize",
    "remove_quotes",
    "set_env_map",
    "strip_export",
    "write_env_file",
]
