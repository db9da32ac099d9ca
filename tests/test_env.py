"""Tests for the environment tables and bulk helpers.

Environment variables are key-value string pairs that configure a
process.  ``Environment`` is an independent in-memory table;
``ProcessEnvironment`` is the real ``os.environ``.  The bulk helpers
(``set_env_map``, ``getenv_map``, ``clear_env_setting``) work on either.
"""

import os

import pytest

from py_envs.env import (
    EnvError,
    Environment,
    ProcessEnvironment,
    clear_env_setting,
    getenv_map,
    set_env_map,
)

_PREFIX = "PY_ENVS_TEST_"


@pytest.fixture
def process_env(monkeypatch: pytest.MonkeyPatch) -> ProcessEnvironment:
    """Return a process table with no leftover test variables."""
    for key in list(os.environ):
        if key.startswith(_PREFIX):
            monkeypatch.delenv(key)
    return ProcessEnvironment()


class TestEnvironment:
    """Verify the in-memory Environment table."""

    def test_get_and_set(self) -> None:
        """Setting a variable should make it retrievable."""
        env = Environment()
        env.set("HOME", "/root")
        assert env.get("HOME") == "/root"

    def test_get_missing_returns_none(self) -> None:
        """Getting a missing key should return None."""
        env = Environment()
        assert env.get("MISSING") is None

    def test_get_missing_with_default(self) -> None:
        """Getting a missing key with a default should return the default."""
        env = Environment()
        assert env.get("MISSING", "fallback") == "fallback"

    def test_set_overwrites(self) -> None:
        """Setting an existing key should overwrite the value."""
        env = Environment()
        env.set("X", "old")
        env.set("X", "new")
        assert env.get("X") == "new"

    def test_unset(self) -> None:
        """Unsetting a variable should remove it."""
        env = Environment()
        env.set("X", "val")
        env.unset("X")
        assert env.get("X") is None
        assert "X" not in env

    def test_unset_missing_is_noop(self) -> None:
        """Unsetting a missing key should not raise."""
        env = Environment()
        env.unset("NOPE")
        assert len(env) == 0

    def test_list_all(self) -> None:
        """list_all should render KEY=VALUE strings."""
        env = Environment({"A": "1", "B": "x=y"})
        assert sorted(env.list_all()) == ["A=1", "B=x=y"]

    def test_initial_is_copied(self) -> None:
        """The initial mapping should be copied, not referenced."""
        initial = {"A": "1"}
        env = Environment(initial)
        env.set("A", "2")
        assert initial == {"A": "1"}

    def test_copy_is_independent(self) -> None:
        """A copied environment should be independent of the original."""
        env = Environment()
        env.set("X", "original")
        child = env.copy()
        child.set("X", "modified")
        assert env.get("X") == "original"
        assert child.get("X") == "modified"

    def test_items_and_len(self) -> None:
        """items() and len() should reflect the stored variables."""
        env = Environment()
        env.set("A", "1")
        env.set("B", "2")
        assert dict(env.items()) == {"A": "1", "B": "2"}
        expected_len = 2
        assert len(env) == expected_len

    @pytest.mark.parametrize(
        ("key", "value"),
        [("", "v"), ("A=B", "v"), ("A\x00", "v"), ("A", "v\x00")],
    )
    def test_illegal_variables_rejected(self, key: str, value: str) -> None:
        """Empty keys, '=' in keys and NUL anywhere should raise EnvError."""
        env = Environment()
        with pytest.raises(EnvError):
            env.set(key, value)
        assert len(env) == 0


class TestProcessEnvironment:
    """Verify the os.environ-backed table."""

    def test_set_visible_in_os_environ(self, process_env: ProcessEnvironment) -> None:
        """A set variable should appear in os.environ."""
        process_env.set(f"{_PREFIX}A", "1")
        try:
            assert os.environ[f"{_PREFIX}A"] == "1"
            assert process_env.get(f"{_PREFIX}A") == "1"
        finally:
            process_env.unset(f"{_PREFIX}A")

    def test_unset_removes(self, process_env: ProcessEnvironment) -> None:
        """Unsetting should remove the variable from os.environ."""
        process_env.set(f"{_PREFIX}B", "1")
        process_env.unset(f"{_PREFIX}B")
        assert f"{_PREFIX}B" not in os.environ

    def test_unset_missing_is_noop(self, process_env: ProcessEnvironment) -> None:
        """Unsetting a variable that isn't set should not raise."""
        process_env.unset(f"{_PREFIX}NEVER_SET")

    def test_list_all_includes_variable(self, process_env: ProcessEnvironment) -> None:
        """list_all should include variables set through the table."""
        process_env.set(f"{_PREFIX}C", "v")
        try:
            assert f"{_PREFIX}C=v" in process_env.list_all()
        finally:
            process_env.unset(f"{_PREFIX}C")

    def test_illegal_key_rejected(self, process_env: ProcessEnvironment) -> None:
        """A key containing '=' should raise EnvError, not ValueError."""
        with pytest.raises(EnvError):
            process_env.set(f"{_PREFIX}A=B", "v")


class TestSetEnvMap:
    """Verify bulk setting."""

    def test_sets_every_key(self) -> None:
        """Every entry should be set on the table."""
        env = Environment()
        set_env_map({"A": "1", "B": "2"}, env)
        assert dict(env.items()) == {"A": "1", "B": "2"}

    def test_stops_at_first_error(self) -> None:
        """A refused variable should raise and leave later keys unset."""
        env = Environment()
        with pytest.raises(EnvError):
            set_env_map({"A": "1", "": "bad", "C": "3"}, env)
        assert env.get("A") == "1"
        assert env.get("C") is None


class TestGetenvMap:
    """Verify prefix-filtered reads."""

    def test_prefix_filter(self) -> None:
        """Only variables starting with the prefix should be returned."""
        env = Environment({"APP_A": "1", "APP_B": "2", "OTHER": "3"})
        assert getenv_map("APP_", env) == {"APP_A": "1", "APP_B": "2"}

    def test_empty_prefix_returns_all(self) -> None:
        """An empty prefix should return every variable."""
        env = Environment({"A": "1", "B": "2"})
        assert getenv_map("", env) == {"A": "1", "B": "2"}

    def test_values_with_equals_preserved(self) -> None:
        """Values containing '=' should survive the KEY=VALUE round trip."""
        env = Environment({"DSN": "host=db port=5432"})
        assert getenv_map("DSN", env) == {"DSN": "host=db port=5432"}

    def test_empty_value(self) -> None:
        """An empty value should come back as an empty string."""
        env = Environment({"EMPTY": ""})
        assert getenv_map("", env) == {"EMPTY": ""}

    def test_reads_process_environment(
        self, process_env: ProcessEnvironment, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without an explicit table, os.environ should be read."""
        monkeypatch.setenv(f"{_PREFIX}MAP", "yes")
        assert getenv_map(_PREFIX) == {f"{_PREFIX}MAP": "yes"}
        assert process_env.get(f"{_PREFIX}MAP") == "yes"


class TestClearEnvSetting:
    """Verify bulk unsetting."""

    def test_clears_named_variables(self) -> None:
        """Named variables should be removed; others kept."""
        env = Environment({"A": "1", "B": "2", "C": "3"})
        clear_env_setting("A", "B", env=env)
        assert dict(env.items()) == {"C": "3"}

    def test_missing_names_ignored(self) -> None:
        """Names that aren't set should not raise."""
        env = Environment({"A": "1"})
        clear_env_setting("NOPE", "A", env=env)
        assert len(env) == 0
