"""Token and TokenType definitions for the texfmt tokenizer.

The tokenizer produces Token objects one at a time; the parser pulls them
with one token of lookahead.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from texfmt.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Control words and text
    COMMAND = auto()  # \name (value excludes the backslash)
    TEXT = auto()  # text run, newline, line comment or escape sequence

    # Structural characters
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]

    # Math spans (value is the interior, without delimiters)
    MATH_INLINE = auto()  # $...$
    MATH_DISPLAY = auto()  # $$...$$

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the tokenizer.

    Attributes:
        type: The token type (from TokenType enum)
        value: Token text. Commands omit the backslash, math tokens
            omit their dollar delimiters, EOF is empty.
        escaped: True only for single-character escape sequences
            (backslash + non-letter). The formatter emits such values
            verbatim.
        offset: Absolute start offset in the source. EOF sits at
            ``len(source)``.

    """

    type: TokenType
    value: str
    escaped: bool = False
    offset: int = 0

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        flag = ", escaped" if self.escaped else ""
        return f"Token({self.type.name}, {val!r}{flag}, @{self.offset})"

    def location(self, source: str) -> SourceLocation:
        """Line/column of this token within ``source``."""
        from texfmt.location import SourceLocation

        return SourceLocation.from_offset(source, self.offset)
