"""Event log for loading and applying environment files.

Loading a ``.env`` file is deliberately forgiving: lines that don't look
like assignments are skipped instead of raising.  That makes it easy to
lose track of *why* a variable never showed up.  The event log keeps a
record of what the loader read, what it skipped, and what it applied.

Every entry says *where* it happened as data rather than prose: the
file it concerns and the 1-based line in that file.  So "which lines of
``prod.env`` were ignored?" is a ``filter`` call, not a string search.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — one record: level, message, source, file path, line.
- **Logger** — an append-only log with filtering and clearing.

Nothing here is wired into the standard ``logging`` tree; callers that
want one pass a ``Logger`` in and read it back afterwards.
"""

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import TypeAlias

_StrPath: TypeAlias = str | os.PathLike[str]


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: What happened, without the file location.
        source: The component that generated the event (e.g. "loader").
        path: The file the event concerns ("" = none).
        line: The 1-based line number in ``path`` (0 = none).

    """

    level: LogLevel
    message: str
    source: str
    path: str = ""
    line: int = 0

    @property
    def location(self) -> str:
        """Return ``path:line``, ``path``, ``line N`` or ``""``."""
        if self.path and self.line:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        if self.line:
            return f"line {self.line}"
        return ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: location: message``."""
        prefix = f"[{self.level.name}] {self.source}"
        where = self.location
        if where:
            return f"{prefix}: {where}: {self.message}"
        return f"{prefix}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        path: _StrPath | None = None,
        line: int = 0,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            path: File the event concerns, if any.
            line: Line number in *path*, if any.

        """
        entry = LogEntry(
            level=level,
            message=message,
            source=source,
            path=os.fspath(path) if path is not None else "",
            line=line,
        )
        self._entries.append(entry)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        path: _StrPath | None = None,
    ) -> list[LogEntry]:
        """Return entries matching every given criterion.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this component.
            path: If set, only return entries about this file.

        Returns:
            The matching entries in chronological order.

        """
        wanted_path = os.fspath(path) if path is not None else None
        return [
            e
            for e in self._entries
            if (min_level is None or e.level >= min_level)
            and (source is None or e.source == source)
            and (wanted_path is None or e.path == wanted_path)
        ]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
