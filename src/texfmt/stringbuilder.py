"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

The formatter also needs to know what is on the current output line, so
it can decide whether a block starts a line (and gets indented) or sits
mid-line. The builder answers that by looking back only as far as the
last line break.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

_HORIZONTAL = " \t"


class StringBuilder:
    """Efficient string accumulator with line awareness.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("\\\\item a").append("\\n  ")
            >>> sb.at_line_start()
            True
            >>> sb.trim_line_tail().build()
            '\\\\item a\\n'

    Args:
        line_start: Whether the builder's first character begins a line.
            False for argument groups, which start right after ``{``.

    """

    __slots__ = ("_parts", "_line_start")

    def __init__(self, line_start: bool = True) -> None:
        self._parts: list[str] = []
        self._line_start = line_start

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def line_tail(self) -> tuple[str, bool]:
        """Text after the last line break.

        Returns:
            ``(tail, starts_line)`` where ``starts_line`` tells whether the
            tail begins at a line start (after a break, or at the start of
            a builder created with ``line_start=True``).
        """
        tail: list[str] = []
        for part in reversed(self._parts):
            cut = max(part.rfind("\n"), part.rfind("\r"))
            if cut != -1:
                tail.append(part[cut + 1 :])
                return "".join(reversed(tail)), True
            tail.append(part)
        return "".join(reversed(tail)), self._line_start

    def at_line_start(self) -> bool:
        """True if the current line holds nothing but spaces/tabs so far."""
        tail, starts_line = self.line_tail()
        return starts_line and not tail.strip(_HORIZONTAL)

    def trim_line_tail(self) -> StringBuilder:
        """Drop trailing spaces/tabs from the current line."""
        while self._parts:
            last = self._parts[-1]
            trimmed = last.rstrip(_HORIZONTAL)
            if trimmed:
                self._parts[-1] = trimmed
                break
            self._parts.pop()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
