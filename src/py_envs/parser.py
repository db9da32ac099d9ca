"""Line recognizer — turns one ``.env`` line into a key and a raw value.

A ``.env`` file is a list of shell-flavoured assignments::

    # database
    export DB_HOST=localhost
    DB_PASS='s3cr#t'        # quoted: the '#' is part of the value
    DB_NAME=app             # unquoted: the comment is dropped
    log.level: debug

The grammar for one line (after an optional ``export`` keyword)::

    line      := key separator value? trailing_comment?
    key       := one-or-more of [A-Za-z0-9_.]
    separator := optional_ws '=' optional_ws | ':' one-or-more_ws
    value     := single_quoted | double_quoted | unquoted
    trailing_comment := optional_ws '#' anything

The recognizer is a small hand-written scanner rather than one large
regular expression:

1. **Key** — scan the run of key characters.
2. **Separator** — ``=`` with optional whitespace around it, or ``:``
   followed by at least one whitespace character.
3. **Value** — a quoted value runs to the first unescaped matching
   quote and may only be followed by whitespace and a comment.  If that
   fails the value is read as unquoted: everything up to the first
   ``#``, with trailing whitespace trimmed.

Lines that don't fit return ``None``.  That is not an error; the loader
simply skips them.  Quotes are *not* removed here — ``remove_quotes``
does that as a separate step.
"""

import string
from dataclasses import dataclass

_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_.")
_WHITESPACE = " \t\n\r\f"
_QUOTES = "'\""
_ESCAPE = "\\"
_COMMENT = "#"
_EXPORT = "export"


@dataclass(frozen=True)
class Assignment:
    """A recognized ``key`` / ``raw_value`` pair.

    ``raw_value`` still carries any surrounding quotes; use ``value`` for
    the unquoted form.
    """

    key: str
    raw_value: str

    @property
    def value(self) -> str:
        """Return the raw value with one pair of matching quotes removed."""
        return remove_quotes(self.raw_value)


def remove_quotes(s: str) -> str:
    """Strip one matching pair of surrounding ``"`` or ``'`` quotes.

    Strings shorter than two characters, or whose first and last
    characters are not the same quote, are returned unchanged.
    """
    if len(s) < 2:  # noqa: PLR2004
        return s
    if s[0] == s[-1] and s[0] in _QUOTES:
        return s[1:-1]
    return s


def strip_export(line: str) -> str:
    """Drop leading ``export`` keywords (and the whitespace after them).

    Only the keyword followed by whitespace counts, so ``export=1`` and
    ``exported=1`` are left alone as ordinary assignments.  A repeated
    keyword (``export export KEY=1``) is dropped as well.
    """
    while line.startswith(_EXPORT):
        rest = line[len(_EXPORT) :]
        if not rest[:1] or rest[0] not in _WHITESPACE:
            break
        line = rest.lstrip(_WHITESPACE)
    return line


def recognize(line: str) -> Assignment | None:
    """Recognize a single assignment line.

    Args:
        line: One line of a ``.env`` file, already known not to be blank
            or a comment.

    Returns:
        The key and raw (possibly quoted) value, both trimmed, or ``None``
        if the line is not an assignment.

    """
    text = strip_export(line.strip(_WHITESPACE))

    key_end = _scan_key(text)
    if key_end == 0:
        return None

    value_start = _scan_separator(text, key_end)
    if value_start is None:
        return None

    raw_value = _scan_value(text[value_start:])
    return Assignment(key=text[:key_end].strip(), raw_value=raw_value.strip(_WHITESPACE))


def _scan_key(text: str) -> int:
    """Return the index just past the leading run of key characters."""
    end = 0
    while end < len(text) and text[end] in _KEY_CHARS:
        end += 1
    return end


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _scan_separator(text: str, pos: int) -> int | None:
    """Return where the value starts, or ``None`` if there is no separator."""
    after_ws = _skip_whitespace(text, pos)
    if after_ws < len(text) and text[after_ws] == "=":
        return _skip_whitespace(text, after_ws + 1)

    # ':' must touch the key and be followed by whitespace.
    if text[pos : pos + 1] == ":":
        value_start = _skip_whitespace(text, pos + 1)
        if value_start > pos + 1:
            return value_start
    return None


def _scan_value(text: str) -> str:
    if text[:1] and text[0] in _QUOTES:
        quoted = _scan_quoted(text)
        if quoted is not None:
            return quoted
    return _scan_unquoted(text)


def _scan_quoted(text: str) -> str | None:
    """Return the quoted value including its quotes, or ``None``.

    ``None`` means the quote is never closed, or the closing quote is
    followed by something other than whitespace and a comment.
    """
    quote = text[0]
    pos = 1
    while pos < len(text):
        char = text[pos]
        if char == _ESCAPE:
            pos += 2
            continue
        if char == quote:
            tail = text[pos + 1 :].lstrip(_WHITESPACE)
            if tail and not tail.startswith(_COMMENT):
                return None
            return text[: pos + 1]
        pos += 1
    return None


def _scan_unquoted(text: str) -> str:
    value, _, _comment = text.partition(_COMMENT)
    return value.rstrip(_WHITESPACE)
