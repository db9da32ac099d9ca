"""Tests for the REPL.

The REPL is the interactive terminal loop.  Its helpers are pure and
tested directly; the loop itself is driven with patched ``input``.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from py_envs.env import Environment
from py_envs.repl import build_prompt, format_banner, run


class TestREPLHelpers:
    """Verify REPL helper functions."""

    def test_prompt_shows_variable_count(self) -> None:
        """The prompt should show how many variables are set."""
        assert build_prompt(Environment({"A": "1", "B": "2"})) == "envs[2] $ "

    def test_banner_lists_sources(self) -> None:
        """The banner should mention each sourced file."""
        banner = format_banner(["a.env", "b.env"])
        assert "py-envs" in banner
        assert "sourced a.env" in banner
        assert "sourced b.env" in banner

    def test_banner_without_sources(self) -> None:
        """With nothing sourced, the banner should say so."""
        assert "empty environment" in format_banner([])


class TestREPLLoop:
    """Verify the read-eval-print loop."""

    def test_runs_commands_until_exit(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Commands should run against sourced files until exit."""
        env_file = tmp_path / "app.env"
        env_file.write_text("A=1\n", encoding="utf-8")
        with patch("builtins.input", side_effect=["get A", "exit", "get A"]):
            run([str(env_file)])
        out = capsys.readouterr().out
        assert "sourced" in out
        assert out.count("1\n") >= 1

    def test_eof_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Ctrl+D should end the loop cleanly."""
        with patch("builtins.input", side_effect=EOFError):
            run([])
        assert "empty environment" in capsys.readouterr().out

    def test_interrupt_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Ctrl+C should end the loop with a message."""
        with patch("builtins.input", side_effect=KeyboardInterrupt):
            run([])
        assert "Interrupted." in capsys.readouterr().out

    def test_bad_source_exits_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An unreadable start-up file should exit with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            run([str(tmp_path / "missing.env")])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_source_path_with_spaces(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A start-up file whose name contains spaces should load."""
        env_file = tmp_path / "my app" / "dev settings.env"
        env_file.parent.mkdir()
        env_file.write_text("GREETING=hi\n", encoding="utf-8")
        with patch("builtins.input", side_effect=["get GREETING", "exit"]):
            run([str(env_file)])
        out = capsys.readouterr().out
        assert f"sourced {env_file}" in out
        assert "hi\n" in out

    def test_non_utf8_source_exits_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A start-up file that isn't UTF-8 should exit with status 1."""
        env_file = tmp_path / "latin1.env"
        env_file.write_bytes(b"A=caf\xe9\n")
        with pytest.raises(SystemExit) as excinfo:
            run([str(env_file)])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err
