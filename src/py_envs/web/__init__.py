"""Browser-facing HTTP API for the env shell.

This package provides a Flask application that exposes an env shell
and its environment table over HTTP.  It is an **optional** extra —
install with::

    pip install py-envs[web]

The ``create_app`` factory in ``app.py`` creates a shell and serves
three endpoints:

- ``POST /api/execute`` — execute a shell command and return JSON.
  Commands that read or write host files are not available.
- ``GET /api/env`` — the current variables, optionally prefix-filtered.
- ``GET /api/status`` — whether the shell is still accepting commands.
"""
