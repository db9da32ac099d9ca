"""Flask application factory for the py-envs HTTP API.

The ``create_app`` function creates a shell over an environment table
and returns a Flask app with three endpoints:

- ``POST /api/execute`` — execute a command and return JSON.
- ``GET /api/env`` — return the variables as a JSON object.
- ``GET /api/status`` — return whether the shell is running.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from py_envs.env import EnvironmentTable, getenv_map
from py_envs.shell import Shell

_HTTP_BAD_REQUEST = 400

# Commands that touch host files (source, parse, dump) are not served.
_WEB_COMMANDS = ("help", "env", "get", "export", "unset", "log", "history", "exit")


def create_app(env: EnvironmentTable | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        env: The table to serve (a fresh in-memory one if omitted).

    Returns:
        A configured Flask application ready to serve.

    """
    shell = Shell(env=env, commands=_WEB_COMMANDS)
    state = {"halted": False}

    app = Flask(__name__)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if state["halted"]:
            return jsonify({"output": "Shell exited.", "halted": True})

        command: str = data["command"]
        result = shell.execute(command)

        if result == Shell.EXIT_SENTINEL:
            state["halted"] = True
            return jsonify({"output": "Shell exited.", "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/env")
    def variables() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the variables whose names start with ``?prefix=``."""
        prefix = request.args.get("prefix", "")
        return jsonify(getenv_map(prefix, shell.env))

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return shell status for polling.

        Returns:
            JSON with ``running`` and ``variables`` fields.

        """
        return jsonify({"running": not state["halted"], "variables": len(shell.env.list_all())})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-envs-web`` console entry point.
    """
    app = create_app()
    app.run(port=8080)
