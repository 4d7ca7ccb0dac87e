"""
Marker scanning for ${i18n("KEY", variables)} calls.

The variables argument is free-form JSON5 that may contain parentheses,
quoted strings and even complete nested markers with escaped quotes, so the
end of a call cannot be found with a regular expression. The scanner walks
the text with a two-state machine (NORMAL / IN_QUOTES) and a parenthesis
depth counter; the call ends at the ")}" that brings the depth back to zero.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from i18n_interpolator.engine.errors import MarkerSyntaxError

logger = logging.getLogger(__name__)

MARKER_PREFIX = '${i18n("'
MARKER_SUFFIX = ")}"


class _State(Enum):
    NORMAL = "normal"
    IN_QUOTES = "in_quotes"


@dataclass(frozen=True)
class MarkerCall:
    """One marker found in a string."""

    key: str
    raw_variables: str | None
    start: int
    end: int

    @property
    def has_variables(self) -> bool:
        return self.raw_variables is not None


def _read_key(text: str, pos: int) -> tuple[str, int] | None:
    """
    Read the quoted key starting at pos.

    Returns:
        (key, offset just past the closing quote), or None if the quote
        never closes
    """
    chars: list[str] = []
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and text.startswith("\\", i + 1):
            # An escaped backslash cannot escape the quote after it.
            chars.append("\\\\")
            i += 2
            continue
        if ch == "\\" and text.startswith('"', i + 1):
            chars.append('"')
            i += 2
            continue
        if ch == '"':
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    return None


def _find_call_end(text: str, pos: int, key: str, marker_start: int) -> int:
    """
    Find the offset of the ")}" that closes a call's variables fragment.

    Args:
        text: Text being scanned
        pos: Offset of the first character after the comma
        key: Key of the call (for error reporting)
        marker_start: Offset of the marker (for error reporting)

    Raises:
        MarkerSyntaxError: If the call never terminates
    """
    state = _State.NORMAL
    depth = 1
    i = pos
    n = len(text)

    while i < n:
        ch = text[i]

        # \" is consumed as a unit and never toggles quoting
        if ch == "\\" and text.startswith('"', i + 1):
            i += 2
            continue

        if ch == '"':
            state = _State.NORMAL if state is _State.IN_QUOTES else _State.IN_QUOTES
        elif state is _State.NORMAL:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0 and text.startswith(MARKER_SUFFIX, i):
                    return i
        i += 1

    raise MarkerSyntaxError("Unterminated i18n call", key=key, position=marker_start)


def find_marker(text: str, pos: int = 0) -> MarkerCall | None:
    """
    Find the next marker in text at or after pos.

    Args:
        text: Text to scan
        pos: Offset to start searching from

    Returns:
        The next MarkerCall, or None if there are no more markers

    Raises:
        MarkerSyntaxError: If a marker is found but is malformed
    """
    start = text.find(MARKER_PREFIX, pos)
    if start == -1:
        return None

    key_read = _read_key(text, start + len(MARKER_PREFIX))
    if key_read is None:
        logger.debug(f"Ignoring i18n prefix with unterminated key at offset {start}")
        return None
    key, cursor = key_read

    while cursor < len(text) and text[cursor].isspace():
        cursor += 1

    if text.startswith(MARKER_SUFFIX, cursor):
        return MarkerCall(key=key, raw_variables=None, start=start, end=cursor + len(MARKER_SUFFIX))

    if not text.startswith(",", cursor):
        raise MarkerSyntaxError("Expected ',' or ')}' after i18n key", key=key, position=start)

    fragment_start = cursor + 1
    fragment_end = _find_call_end(text, fragment_start, key, start)
    return MarkerCall(
        key=key,
        raw_variables=text[fragment_start:fragment_end],
        start=start,
        end=fragment_end + len(MARKER_SUFFIX),
    )


def iter_markers(text: str) -> Iterator[MarkerCall]:
    """Yield every top-level marker in text, left to right."""
    pos = 0
    while True:
        call = find_marker(text, pos)
        if call is None:
            return
        yield call
        pos = call.end
