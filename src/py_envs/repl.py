"""Interactive REPL (Read-Eval-Print Loop) for the env shell.

The REPL is the terminal front end.  It optionally sources some
``.env`` files, creates a shell, and enters the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

The shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.  The helper
functions (``build_prompt``, ``format_banner``) are pure and testable.
"""

import sys

from py_envs.env import EnvError, Environment, EnvironmentTable
from py_envs.loader import load
from py_envs.shell import Shell

_BANNER_WIDTH = 38


def format_banner(sources: list[str]) -> str:
    """Format the start-up banner.

    Args:
        sources: Files that were sourced before the loop started.

    Returns:
        A string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n            py-envs shell\n  {border}\n\n"
    body = "\n".join(f"  sourced {s}" for s in sources) if sources else "  (empty environment)"
    footer = "\n\nType 'help' for commands, 'exit' to quit.\n"
    return header + body + footer


def build_prompt(env: EnvironmentTable) -> str:
    """Build the prompt, showing how many variables are set.

    Returns:
        A prompt string like ``envs[3] $ ``.

    """
    return f"envs[{len(env.list_all())}] $ "


def run(argv: list[str] | None = None) -> None:
    """Source the given files and run the interactive REPL.

    This is the ``py-envs`` console entry point.  Command-line arguments
    are ``.env`` files to source into a fresh in-memory environment.
    """
    sources = list(sys.argv[1:] if argv is None else argv)
    shell = Shell(env=Environment())

    if sources:
        try:
            load(*sources, env=shell.env, logger=shell.logger)
        except (EnvError, OSError, UnicodeDecodeError) as e:
            print(f"Error: {e}", file=sys.stderr)  # noqa: T201
            sys.exit(1)

    print(format_banner(sources))  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(shell.env))
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201
