"""Text processing utilities for texfmt.

Provides the comment-aware escaper used by the formatter for free text.

Example:
    >>> from texfmt.utils.text import escape_preserving_comments
    >>> escape_preserving_comments("a_b % keep_this")
    'a\\\\_b % keep_this'
"""

from __future__ import annotations

import re

# The seven characters escaped in free text. ``~`` and ``%`` are not among them.
SPECIAL_CHARS: frozenset[str] = frozenset("#$&_^{}")

_SPECIAL_RE = re.compile(r"([#$&_^{}])")


def escape_specials(text: str) -> str:
    """Prefix each of ``# $ & _ ^ { }`` with a backslash.

    Examples:
        >>> escape_specials("50% of R&D")
        '50% of R\\\\&D'
    """
    if not text:
        return ""
    return _SPECIAL_RE.sub(r"\\\1", text)


def find_comment_start(line: str) -> int:
    """Index of the first ``%`` not directly preceded by a backslash, or -1.

    Examples:
        >>> find_comment_start("100\\\\% sure % really")
        11
        >>> find_comment_start("no comment")
        -1
    """
    idx = line.find("%")
    while idx != -1:
        if idx == 0 or line[idx - 1] != "\\":
            return idx
        idx = line.find("%", idx + 1)
    return -1


def escape_preserving_comments(text: str) -> str:
    """Escape special characters in text while leaving comments alone.

    Works line by line:
    - a line whose first non-blank character is ``%`` is left untouched
    - otherwise only the part before the first unescaped ``%`` is escaped,
      and the comment (``%`` onwards) is kept verbatim
    - a line without a comment is escaped whole

    Args:
        text: Free text, possibly spanning several lines

    Returns:
        Text safe to emit as LaTeX source
    """
    if not text:
        return ""

    lines = []
    for line in text.split("\n"):
        if line.lstrip().startswith("%"):
            lines.append(line)
            continue
        idx = find_comment_start(line)
        if idx == -1:
            lines.append(escape_specials(line))
        else:
            lines.append(escape_specials(line[:idx]) + line[idx:])
    return "\n".join(lines)
