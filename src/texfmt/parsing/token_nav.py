"""Token navigation utilities for the texfmt parser.

Provides mixin for token stream navigation and basic parsing operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from texfmt.errors import UnexpectedTokenError
from texfmt.tokens import Token, TokenType

if TYPE_CHECKING:
    from texfmt.lexer import Tokenizer

# Characters of source shown on each side of an error position
_CONTEXT_RADIUS = 30


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    The parser holds exactly one token of lookahead in ``_current``; the
    tokenizer cursor sits just past it.

    Required Host Attributes:
        - _tokenizer: Tokenizer
        - _current: Token
        - _source: str
        - _source_file: str | None

    """

    _tokenizer: Tokenizer
    _current: Token
    _source: str
    _source_file: str | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current.type is TokenType.EOF

    def _advance(self) -> Token:
        """Advance to next token and return it."""
        self._current = self._tokenizer.next_token()
        return self._current

    def _expect(self, token_type: TokenType, what: str) -> Token:
        """Consume the current token if it has ``token_type``, else fail.

        Args:
            token_type: Required token type
            what: Where the token was required, for the error message
                (e.g. "after \\begin")

        Returns:
            The consumed token.

        Raises:
            UnexpectedTokenError: If the current token has another type.
        """
        token = self._current
        if token.type is not token_type:
            raise UnexpectedTokenError(token_type, token, what, **self._error_location(token))
        self._advance()
        return token

    def _peek_end_name(self) -> str | None:
        """Read the ``{name}`` group following the current ``\\end`` token.

        Scans ahead without consuming anything. Returns the trimmed name,
        or None when no well-formed name group follows (a stray ``\\end``).
        """
        with self._tokenizer.lookahead() as ahead:
            if ahead.next_token().type is not TokenType.LBRACE:
                return None
            parts: list[str] = []
            token = ahead.next_token()
            while token.type in (TokenType.TEXT, TokenType.COMMAND):
                if token.type is TokenType.COMMAND:
                    parts.append("\\")
                parts.append(token.value)
                token = ahead.next_token()
            if token.type is not TokenType.RBRACE:
                return None
            return "".join(parts).strip()

    def _error_location(self, token: Token) -> dict[str, Any]:
        """Keyword arguments locating ``token`` for a ParseError."""
        loc = token.location(self._source)
        return {
            "lineno": loc.lineno,
            "col_offset": loc.col_offset,
            "source_file": self._source_file,
            "context": self._context_excerpt(token.offset),
        }

    def _context_excerpt(self, offset: int) -> str:
        """Source text around ``offset`` with the error point marked."""
        start = max(0, offset - _CONTEXT_RADIUS)
        end = min(len(self._source), offset + _CONTEXT_RADIUS)
        return f"{self._source[start:offset]}[ERROR HERE]{self._source[offset:end]}"
