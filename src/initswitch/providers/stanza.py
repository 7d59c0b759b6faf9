"""Line-oriented editing of upstart ``start on`` and ``manual`` stanzas.

A ``start on`` stanza may span several physical lines while its round
brackets are unbalanced::

    start on (filesystem
              and net-device-up IFACE!=lo)

The comment, uncomment and extract transforms walk the text once,
classifying each line and threading a bracket depth through the walk.
Brackets are only counted in the code part of a line, that is before any
trailing ``#`` comment, and a ``manual`` line always closes an open stanza.
Deciding which stanza comes last, and removing ``manual`` stanzas, looks at
each line on its own. Lines end at ``\n`` only. All functions are pure:
they take text and return text.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum

_START_ON_RE = re.compile(r"^\s*start\s+on\b")
_COMMENTED_START_ON_RE = re.compile(r"^\s*#+\s*start\s+on\b")
_MANUAL_RE = re.compile(r"^\s*manual\s*(?:#.*)?$")
_LEADING_COMMENT_RE = re.compile(r"^(\s*)#+")
_LINE_END_RE = re.compile(r"(?<=\n)")

MANUAL_STANZA = "manual"


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    COMMENTED_START_ON = "commented_start_on"
    START_ON_OPEN = "start_on_open"
    START_ON_CONTINUATION = "start_on_continuation"
    MANUAL = "manual"
    OTHER = "other"


_START_ON_KINDS = frozenset({LineKind.START_ON_OPEN, LineKind.START_ON_CONTINUATION})


def _lines(text: str) -> list[str]:
    # Only "\n" ends a line; form feeds and other separators stay inside it.
    return [line for line in _LINE_END_RE.split(text) if line]


def classify_line(line: str) -> LineKind:
    """Classify a single line without regard to its neighbours.

    Never returns START_ON_CONTINUATION; that needs the bracket depth.
    """
    if not line.strip():
        return LineKind.BLANK
    if _START_ON_RE.match(line):
        return LineKind.START_ON_OPEN
    if _COMMENTED_START_ON_RE.match(line):
        return LineKind.COMMENTED_START_ON
    if line.lstrip().startswith("#"):
        return LineKind.COMMENT
    if _MANUAL_RE.match(line):
        return LineKind.MANUAL
    return LineKind.OTHER


def code_portion(line: str) -> str:
    """Part of an uncommented line before any trailing comment."""
    return line.split("#", 1)[0]


def commented_code_portion(line: str) -> str:
    """Part of a commented-out line between its leading markers and the next ``#``."""
    return code_portion(_LEADING_COMMENT_RE.sub(r"\1", line, count=1))


def bracket_delta(code: str) -> int:
    """Signed count of unbalanced round brackets."""
    return code.count("(") - code.count(")")


def _next_depth(depth: int, code: str) -> int:
    # A stanza opened after an over-closed one starts from zero.
    return max(depth, 0) + bracket_delta(code)


def iter_classified(text: str) -> Iterator[tuple[LineKind, str]]:
    """Yield ``(kind, line)`` for every line, tracking multi-line stanzas.

    Lines following an open ``start on`` stanza whose brackets are still
    unbalanced are reported as START_ON_CONTINUATION, up to the next
    ``manual`` line.
    """
    depth = 0
    for line in _lines(text):
        kind = classify_line(line)
        if depth > 0 and kind is not LineKind.MANUAL:
            kind = LineKind.START_ON_CONTINUATION
        if kind in _START_ON_KINDS:
            depth = _next_depth(depth, code_portion(line))
        elif kind is LineKind.MANUAL:
            depth = 0
        yield kind, line


def iter_line_kinds(text: str) -> Iterator[tuple[LineKind, str]]:
    """Yield ``(kind, line)`` classifying every line on its own.

    Unlike :func:`iter_classified` there is no continuation tracking: a
    ``manual`` or ``start on`` line counts as a stanza even while an earlier
    stanza has unbalanced brackets. This is how upstart decides which stanza
    comes last.
    """
    for line in _lines(text):
        yield classify_line(line), line


def has_uncommented_start_on(text: str) -> bool:
    return any(kind is LineKind.START_ON_OPEN for kind, _ in iter_line_kinds(text))


def has_commented_start_on(text: str) -> bool:
    return any(kind is LineKind.COMMENTED_START_ON for kind, _ in iter_line_kinds(text))


def remove_manual_stanzas(text: str) -> str:
    """Delete every ``manual`` line."""
    return "".join(line for kind, line in iter_line_kinds(text) if kind is not LineKind.MANUAL)


def comment_start_on_stanza(text: str) -> str:
    """Comment out every uncommented ``start on`` stanza, continuation lines included."""
    return "".join(
        "#" + line if kind in _START_ON_KINDS else line
        for kind, line in iter_classified(text)
    )


def uncomment(line: str) -> str:
    """Strip the leading ``#`` markers of a line, keeping its indentation."""
    return _LEADING_COMMENT_RE.sub(r"\1", line, count=1)


def uncomment_start_on_stanza(text: str) -> str:
    """Uncomment every commented-out ``start on`` stanza.

    The inverse of :func:`comment_start_on_stanza`. Continuation lines are
    recognised from the brackets left open by the commented stanza.
    """
    depth = 0
    out: list[str] = []
    for line in _lines(text):
        if depth > 0 and _MANUAL_RE.match(line):
            depth = 0
            out.append(line)
        elif depth > 0 or _COMMENTED_START_ON_RE.match(line):
            depth = _next_depth(depth, commented_code_portion(line))
            out.append(uncomment(line))
        else:
            out.append(line)
    return "".join(out)


def extract_start_on_stanza(text: str) -> str:
    """Return only the lines of the uncommented ``start on`` stanzas."""
    return "".join(line for kind, line in iter_classified(text) if kind in _START_ON_KINDS)


def _terminated(text: str) -> str:
    if text and not text.endswith("\n"):
        return text + "\n"
    return text


def append_lines(text: str, addition: str) -> str:
    """Append ``addition`` on a fresh line of ``text``."""
    return _terminated(text) + _terminated(addition)


def add_default_start_on_stanza(text: str, stanza: str) -> str:
    """Append ``stanza``, separated from existing content by a blank line."""
    if text.strip():
        return _terminated(text) + "\n" + stanza + "\n"
    return stanza + "\n"


def ensure_manual_stanza(text: str) -> str:
    """Replace any ``manual`` stanzas by a single one at the end of ``text``."""
    return append_lines(remove_manual_stanzas(text), MANUAL_STANZA)
