"""The env shell — a small command interpreter over an environment table.

The shell reads a command string, splits it into a command name and
arguments, dispatches to a handler, and returns a string result.  It is
useful for poking at ``.env`` files interactively: parse one to see what
it defines, source it into a table, inspect and tweak variables, and
dump the result back out.

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable; the
      REPL and the web front end decide how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing a
      method and adding one dict entry.
    - **``export`` uses the line recognizer.**  ``export KEY="a # b"``
      behaves exactly like the same line in a ``.env`` file.
    - **Errors become text.**  ``EnvError``, ``OSError`` and
      ``UnicodeDecodeError`` are caught at the command boundary and
      rendered as ``Error: ...``.
"""

from collections.abc import Callable, Collection
from typing import TypeAlias

from py_envs.env import (
    EnvError,
    Environment,
    EnvironmentTable,
    clear_env_setting,
    getenv_map,
)
from py_envs.loader import load, read_env_file
from py_envs.logging import Logger, LogLevel
from py_envs.parser import recognize, remove_quotes
from py_envs.writer import format_env_lines, write_env_file

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_SOURCE = "shell"


class Shell:
    """Command interpreter bound to one environment table.

    By default the shell works on a private in-memory ``Environment`` so
    experiments never leak into the host process.  Pass
    ``ProcessEnvironment()`` to operate on the real thing.
    """

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        env: EnvironmentTable | None = None,
        logger: Logger | None = None,
        commands: Collection[str] | None = None,
    ) -> None:
        """Create a shell.

        Args:
            env: The table to operate on (a fresh ``Environment`` if omitted).
            logger: Event log shared with the loader (a new one if omitted).
            commands: If set, only these command names are available.

        """
        self._env: EnvironmentTable = env if env is not None else Environment()
        self._logger = logger if logger is not None else Logger()
        self._history: list[str] = []
        self._raw_args = ""

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "env": self._cmd_env,
            "get": self._cmd_get,
            "export": self._cmd_export,
            "unset": self._cmd_unset,
            "source": self._cmd_source,
            "parse": self._cmd_parse,
            "dump": self._cmd_dump,
            "log": self._cmd_log,
            "history": self._cmd_history,
            "exit": self._cmd_exit,
        }
        if commands is not None:
            self._commands = {n: h for n, h in self._commands.items() if n in commands}

    @property
    def env(self) -> EnvironmentTable:
        """Return the table this shell operates on."""
        return self._env

    @property
    def logger(self) -> Logger:
        """Return the shell's event log."""
        return self._logger

    def execute(self, command: str) -> str:
        """Parse and execute a single command.

        Args:
            command: The raw command string (e.g. "source .env").

        Returns:
            The command output, an error message, or ``EXIT_SENTINEL``.

        """
        stripped = command.strip()
        if not stripped:
            return ""
        self._history.append(stripped)

        name, *args = stripped.split()
        # Handlers that need the original spacing read the unsplit tail.
        self._raw_args = stripped[len(name) :].strip()
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"

        try:
            return handler(args)
        except (EnvError, OSError, UnicodeDecodeError) as e:
            self._logger.log(LogLevel.ERROR, f"{name}: {e}", source=_SOURCE)
            return f"Error: {e}"

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(sorted(self._commands))

    def _cmd_env(self, args: list[str]) -> str:
        """List variables, optionally only those starting with a prefix."""
        prefix = args[0] if args else ""
        lines = format_env_lines(getenv_map(prefix, self._env))
        return "\n".join(lines) if lines else "No variables set."

    def _cmd_get(self, args: list[str]) -> str:
        """Print the value of one variable."""
        if len(args) != 1:
            return "Usage: get KEY"
        value = self._env.get(args[0])
        if value is None:
            return f"Error: {args[0]} is not set"
        return value

    def _cmd_export(self, args: list[str]) -> str:
        """Set a variable from a ``KEY=VALUE`` assignment."""
        if not args:
            return "Usage: export KEY=VALUE"
        assignment = recognize(self._raw_args)
        if assignment is None:
            return "Usage: export KEY=VALUE"
        self._env.set(remove_quotes(assignment.key), assignment.value)
        return ""

    def _cmd_unset(self, args: list[str]) -> str:
        """Remove one or more variables."""
        if not args:
            return "Usage: unset KEY..."
        clear_env_setting(*args, env=self._env)
        return ""

    def _cmd_source(self, args: list[str]) -> str:
        """Load ``.env`` files (``.env`` by default) into the table."""
        loaded = load(*args, env=self._env, logger=self._logger)
        return f"Loaded {len(loaded)} variable(s)."

    def _cmd_parse(self, args: list[str]) -> str:
        """Show what a file defines without applying it."""
        if len(args) != 1:
            return "Usage: parse FILE"
        env_map = read_env_file(args[0], logger=self._logger)
        return "\n".join(format_env_lines(env_map)) if env_map else "No variables defined."

    def _cmd_dump(self, args: list[str]) -> str:
        """Write variables with a prefix to a file."""
        if len(args) != 2:  # noqa: PLR2004
            return "Usage: dump PREFIX FILE  (use '' for all)"
        prefix = remove_quotes(args[0])
        count = write_env_file(prefix, args[1], env=self._env)
        return f"Wrote {count} variable(s) to {args[1]}."

    def _cmd_log(self, _args: list[str]) -> str:
        """Show the event log."""
        entries = self._logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history."""
        lines = [f"  {i + 1}  {cmd}" for i, cmd in enumerate(self._history)]
        return "\n".join(lines)

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL
