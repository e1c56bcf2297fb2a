"""Pull-based tokenizer with O(n) total cost.

The parser asks for one token at a time with next_token(). The cursor
only moves forward, except inside a lookahead() block, which restores the
saved offset on exit. That is how the parser peeks at an ``\\end{name}``
without consuming it.

No regex in the hot path: every rule is a character test at the cursor
followed by a bounded scan.

Thread Safety:
Tokenizer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from texfmt.lexer.charsets import HORIZONTAL_WHITESPACE, LETTERS, NAME_CHARS, TEXT_STOP
from texfmt.location import SourceLocation
from texfmt.tokens import Token, TokenType

_STRUCTURAL: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


class Tokenizer:
    """Pull cursor over an immutable LaTeX source string.

    Rules, in priority order at each cursor position:

    1. ``%`` preceded on its line only by spaces/tabs: line comment up to
       (not including) the line break, emitted as TEXT
    2. ``\\n``, ``\\r`` or ``\\r\\n``: one TEXT token
    3. ``$$...$$``: MATH_DISPLAY
    4. ``$...$``: MATH_INLINE
    5. backslash + letter: COMMAND (letters and ``*``)
    6. backslash + anything else: escaped TEXT of two characters
       (one at end of input)
    7. ``{ } [ ]``: structural tokens
    8. anything else: the longest run of ordinary characters as TEXT

    Usage:
            >>> tok = Tokenizer("\\\\emph{hi}")
            >>> [t.type.name for t in tok.tokenize()]
            ['COMMAND', 'LBRACE', 'TEXT', 'RBRACE', 'EOF']

    """

    __slots__ = ("_source", "_source_len", "_pos", "_source_file")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize tokenizer with source text.

        Args:
            source: LaTeX source text
            source_file: Optional source file path for locations
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._source_file = source_file

    @property
    def source(self) -> str:
        """The text being tokenized."""
        return self._source

    @property
    def offset(self) -> int:
        """Current cursor offset (start of the next token)."""
        return self._pos

    def location(self, offset: int | None = None) -> SourceLocation:
        """Line/column of ``offset`` (default: the cursor)."""
        return SourceLocation.from_offset(
            self._source,
            self._pos if offset is None else offset,
            self._source_file,
        )

    def tokenize(self) -> Iterator[Token]:
        """Yield every remaining token, ending with exactly one EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    @contextmanager
    def lookahead(self) -> Iterator[Tokenizer]:
        """Scan ahead without consuming.

        The cursor offset is saved on entry and restored on exit, so tokens
        pulled inside the block are produced again afterwards.

        Example:
            >>> tok = Tokenizer("{x}")
            >>> with tok.lookahead():
            ...     tok.next_token().type.name
            'LBRACE'
            >>> tok.next_token().type.name
            'LBRACE'

        """
        saved = self._pos
        try:
            yield self
        finally:
            self._pos = saved

    def next_token(self) -> Token:
        """Return the token at the cursor and advance past it.

        At end of input, returns an EOF token on every call.
        """
        source = self._source
        start = self._pos
        if start >= self._source_len:
            return Token(TokenType.EOF, "", offset=self._source_len)

        char = source[start]

        if char == "%" and self._at_line_start(start):
            return self._scan_comment(start)

        if char == "\n":
            self._pos = start + 1
            return Token(TokenType.TEXT, "\n", offset=start)
        if char == "\r":
            if source.startswith("\r\n", start):
                self._pos = start + 2
                return Token(TokenType.TEXT, "\r\n", offset=start)
            self._pos = start + 1
            return Token(TokenType.TEXT, "\r", offset=start)

        if char == "$":
            if source.startswith("$$", start):
                return self._scan_math(start, "$$", TokenType.MATH_DISPLAY)
            return self._scan_math(start, "$", TokenType.MATH_INLINE)

        if char == "\\":
            return self._scan_backslash(start)

        structural = _STRUCTURAL.get(char)
        if structural is not None:
            self._pos = start + 1
            return Token(structural, char, offset=start)

        end = start + 1
        while end < self._source_len and source[end] not in TEXT_STOP:
            end += 1
        self._pos = end
        return Token(TokenType.TEXT, source[start:end], offset=start)

    # =========================================================================
    # Scanners
    # =========================================================================

    def _at_line_start(self, pos: int) -> bool:
        """True if only spaces/tabs separate ``pos`` from the start of its line."""
        source = self._source
        i = pos - 1
        while i >= 0 and source[i] not in "\n\r":
            if source[i] not in HORIZONTAL_WHITESPACE:
                return False
            i -= 1
        return True

    def _scan_comment(self, start: int) -> Token:
        end = start
        while end < self._source_len and self._source[end] not in "\n\r":
            end += 1
        self._pos = end
        return Token(TokenType.TEXT, self._source[start:end], offset=start)

    def _scan_math(self, start: int, delimiter: str, token_type: TokenType) -> Token:
        """Scan a math span; an unterminated span runs to end of input."""
        body_start = start + len(delimiter)
        close = self._source.find(delimiter, body_start)
        if close == -1:
            self._pos = self._source_len
            return Token(token_type, self._source[body_start:], offset=start)
        self._pos = close + len(delimiter)
        return Token(token_type, self._source[body_start:close], offset=start)

    def _scan_backslash(self, start: int) -> Token:
        source = self._source
        nxt = start + 1
        if nxt < self._source_len and source[nxt] in LETTERS:
            end = nxt + 1
            while end < self._source_len and source[end] in NAME_CHARS:
                end += 1
            self._pos = end
            return Token(TokenType.COMMAND, source[nxt:end], offset=start)

        # Escape sequence: backslash plus one character, or a lone
        # trailing backslash
        end = min(start + 2, self._source_len)
        self._pos = end
        return Token(TokenType.TEXT, source[start:end], escaped=True, offset=start)
