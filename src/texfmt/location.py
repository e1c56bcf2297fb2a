"""Source location tracking for error messages and debugging.

Tokens only record an absolute offset; SourceLocation turns that offset
into the 1-based line/column pair reported to users.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column (1-indexed)
        offset: Absolute offset in the source buffer
        source_file: Source file path (optional)

    Examples:
            >>> SourceLocation.from_offset("ab\\ncd", 4)
            SourceLocation(lineno=2, col_offset=2, offset=4, source_file=None)

            >>> loc = SourceLocation(3, 7, source_file="paper.tex")
            >>> str(loc)
            'paper.tex:3:7'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "paper.tex:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls, source: str, offset: int, source_file: str | None = None
    ) -> SourceLocation:
        """Compute the line/column of ``offset`` within ``source``.

        Only ``\\n`` starts a new line. Offsets past the end are clamped.
        """
        offset = max(0, min(offset, len(source)))
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(
            lineno=source.count("\n", 0, offset) + 1,
            col_offset=offset - line_start + 1,
            offset=offset,
            source_file=source_file,
        )
