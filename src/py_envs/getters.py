"""Typed getters — read an environment variable as a number or boolean.

Environment variables are always strings.  These helpers look a key up
on an environment table and parse it into a Python value, checking the
range of fixed-width integer kinds the way a C or Go program reading the
same variable would.

Shared rules:
    - **Unset or empty** — return ``default`` if one was given, otherwise
      raise ``EnvError``.
    - **Unparsable or out of range** — always raise ``EnvError``, chained
      from the underlying ``ValueError``/``OverflowError``.
    - **Strict integers** — base 10, an optional sign for signed kinds,
      ASCII digits only.  ``int()`` would also accept ``" 1_000 "``; we
      don't.
"""

import math
import re
import struct

from py_envs.env import EnvError, EnvironmentTable, ProcessEnvironment

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _lookup(key: str, env: EnvironmentTable | None) -> str | None:
    """Return the value of *key*, treating an empty string as unset."""
    table = env if env is not None else ProcessEnvironment()
    value = table.get(key)
    return value or None


def _not_set(key: str) -> EnvError:
    msg = f"environment variable not set: {key}"
    return EnvError(msg)


def _parse_int(key: str, value: str, *, bits: int | None, signed: bool) -> int:
    pattern = _SIGNED_INT if signed else _UNSIGNED_INT
    if not pattern.fullmatch(value):
        msg = f"environment variable {key} is not a base-10 integer: {value!r}"
        raise EnvError(msg)
    number = int(value)
    if bits is None:
        return number
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= number <= high:
        kind = f"{'int' if signed else 'uint'}{bits}"
        msg = f"environment variable {key} is out of range for {kind}: {value}"
        raise EnvError(msg)
    return number


def _get_int(
    key: str,
    default: int | None,
    env: EnvironmentTable | None,
    *,
    bits: int | None,
    signed: bool = True,
) -> int:
    value = _lookup(key, env)
    if value is None:
        if default is None:
            raise _not_set(key)
        return default
    return _parse_int(key, value, bits=bits, signed=signed)


def get_int(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an integer of any size."""
    return _get_int(key, default, env, bits=None)


def get_int8(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an integer in ``[-128, 127]``."""
    return _get_int(key, default, env, bits=8)


def get_int16(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an integer in ``[-32768, 32767]``."""
    return _get_int(key, default, env, bits=16)


def get_int32(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as a signed 32-bit integer."""
    return _get_int(key, default, env, bits=32)


def get_int64(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as a signed 64-bit integer."""
    return _get_int(key, default, env, bits=64)


def get_uint8(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an integer in ``[0, 255]``."""
    return _get_int(key, default, env, bits=8, signed=False)


def get_uint16(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an integer in ``[0, 65535]``."""
    return _get_int(key, default, env, bits=16, signed=False)


def get_uint32(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an unsigned 32-bit integer."""
    return _get_int(key, default, env, bits=32, signed=False)


def get_uint64(key: str, *, default: int | None = None, env: EnvironmentTable | None = None) -> int:
    """Return *key* as an unsigned 64-bit integer."""
    return _get_int(key, default, env, bits=64, signed=False)


def _parse_float(key: str, value: str) -> float:
    if value != value.strip() or "_" in value:
        msg = f"environment variable {key} is not a number: {value!r}"
        raise EnvError(msg)
    try:
        return float(value)
    except ValueError as e:
        msg = f"environment variable {key} is not a number: {value!r}"
        raise EnvError(msg) from e


def get_float64(
    key: str,
    *,
    default: float | None = None,
    env: EnvironmentTable | None = None,
) -> float:
    """Return *key* as a double-precision float."""
    value = _lookup(key, env)
    if value is None:
        if default is None:
            raise _not_set(key)
        return default
    return _parse_float(key, value)


def get_float32(
    key: str,
    *,
    default: float | None = None,
    env: EnvironmentTable | None = None,
) -> float:
    """Return *key* rounded to the nearest single-precision float.

    Raises:
        EnvError: If the value is unset (and no default), not a number, or
            too large in magnitude for single precision.

    """
    value = _lookup(key, env)
    if value is None:
        if default is None:
            raise _not_set(key)
        return default
    number = _parse_float(key, value)
    msg = f"environment variable {key} is out of range for float32: {value}"
    try:
        (single,) = struct.unpack("f", struct.pack("f", number))
    except OverflowError as e:
        raise EnvError(msg) from e
    # Some builds round an oversized value to infinity instead of raising.
    if math.isinf(single) and not math.isinf(number):
        raise EnvError(msg)
    return single


def get_bool(key: str, *, default: bool = False, env: EnvironmentTable | None = None) -> bool:
    """Return *key* as a boolean.

    Accepts ``1 t T TRUE true True`` and ``0 f F FALSE false False``.
    An unset or empty variable gives *default*.
    """
    value = _lookup(key, env)
    if value is None:
        return default
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    msg = f"environment variable {key} is not a boolean: {value!r}"
    raise EnvError(msg)


def getenv_or_default(key: str, default: str, env: EnvironmentTable | None = None) -> str:
    """Return the value of *key*, or *default* when it is unset or empty."""
    return _lookup(key, env) or default
