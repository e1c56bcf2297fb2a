"""Exception classes for texfmt.

Provides standardized exceptions for error handling throughout texfmt.
Every fatal parse failure is a ParseError, so callers that only need to
leave the document untouched can catch that one class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from texfmt.tokens import Token, TokenType


class TexfmtError(Exception):
    """Base exception for all texfmt errors."""

    pass


class ParseError(TexfmtError):
    """Error during LaTeX parsing.

    Raised when the parser meets input it refuses to repair: unclosed
    argument groups, mismatched block names, a missing delimiter.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        context: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column where error occurred (1-indexed)
            source_file: Path to source file (optional)
            context: Short excerpt of the source around the error (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.context = context

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    @property
    def line(self) -> int | None:
        """Alias for lineno."""
        return self.lineno

    @property
    def column(self) -> int | None:
        """Alias for col_offset."""
        return self.col_offset


class UnexpectedTokenError(ParseError):
    """A specific delimiter was required but another token was found."""

    def __init__(
        self,
        expected: TokenType,
        actual: Token,
        what: str,
        **location: object,
    ) -> None:
        self.expected = expected
        self.actual = actual
        got = actual.type.name if not actual.value else f"{actual.type.name} {actual.value!r}"
        super().__init__(f"Expected {expected.name} {what}, got {got}", **location)  # type: ignore[arg-type]


class UnclosedGroupError(ParseError):
    """An argument or name group ran into end of input before closing.

    Attributes:
        owner: The construct owning the group, e.g. ``\\textbf`` or
            ``\\begin{tabular}``
        group: Human-readable group kind, e.g. ``optional argument``
    """

    def __init__(self, owner: str, group: str, **location: object) -> None:
        self.owner = owner
        self.group = group
        super().__init__(f"Unclosed {group} for {owner}", **location)  # type: ignore[arg-type]


class BlockMismatchError(ParseError):
    """A block was closed with a different (trimmed) name than it opened."""

    def __init__(self, opened: str, closed: str, **location: object) -> None:
        self.opened = opened
        self.closed = closed
        super().__init__(
            f"\\begin{{{opened}}} closed by \\end{{{closed}}}",
            **location,  # type: ignore[arg-type]
        )


class RenderError(TexfmtError):
    """Error during formatting.

    Raised when the formatter is handed something that is not a tree node.
    """

    pass
