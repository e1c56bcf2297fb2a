"""Block (\\begin ... \\end) parsing for texfmt.

Provides mixin for begin/end regions. Math blocks keep their interior as
one verbatim text run; every other block parses its interior recursively.

A block that runs into end of input is accepted with whatever it
collected. Every other structural problem (mismatched names, malformed
name groups) is fatal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texfmt.errors import BlockMismatchError, UnclosedGroupError
from texfmt.nodes import Block, Document, TextRun
from texfmt.tokens import TokenType
from texfmt.utils.logger import get_logger

if TYPE_CHECKING:
    from texfmt.lexer import Tokenizer
    from texfmt.nodes import Element
    from texfmt.tokens import Token

logger = get_logger(__name__)


class BlockParsingMixin:
    """Mixin for begin/end blocks.

    Required Host Attributes:
        - _tokenizer: Tokenizer
        - _current: Token
        - _source: str
        - _math_blocks: frozenset[str]

    Required Host Methods:
        - _at_end(), _advance(), _expect(), _peek_end_name(), _error_location()
        - _parse_element(), _parse_group(), _emit()

    """

    _tokenizer: Tokenizer
    _current: Token
    _source: str
    _math_blocks: frozenset[str]

    def _parse_block(self) -> Block:
        """Parse ``\\begin{name}{arg}...`` through the matching ``\\end{name}``."""
        begin = self._current
        self._advance()  # \begin
        self._expect(TokenType.LBRACE, "after \\begin")
        name = self._read_block_name("\\begin").strip()

        args: list[Document] = []
        while self._current.type is TokenType.LBRACE:
            args.append(self._parse_group(TokenType.RBRACE, f"\\begin{{{name}}}", "argument"))

        self._emit("block.open", name=name, offset=begin.offset)
        if name in self._math_blocks:
            children: tuple[Element, ...] = (self._parse_math_body(name, begin),)
        else:
            children = self._parse_block_body(name, begin)
        return Block(name=name, args=tuple(args), children=children)

    def _read_block_name(self, owner: str) -> str:
        """Read a block name up to and including its closing brace.

        Command tokens inside the name keep their backslash.
        """
        parts: list[str] = []
        while self._current.type in (TokenType.TEXT, TokenType.COMMAND):
            if self._current.type is TokenType.COMMAND:
                parts.append("\\")
            parts.append(self._current.value)
            self._advance()
        if self._current.type is TokenType.EOF:
            raise UnclosedGroupError(owner, "block name", **self._error_location(self._current))
        self._expect(TokenType.RBRACE, f"to close the block name of {owner}")
        return "".join(parts)

    def _parse_math_body(self, name: str, begin: Token) -> TextRun:
        """Collect the verbatim interior of a math block.

        Ends at the ``\\end{name}`` found by _find_math_end(). The
        interior is the exact source slice, so nothing inside is reflowed.
        """
        start = self._current.offset
        end = self._find_math_end(name)
        if end is None:
            while not self._at_end():
                self._advance()
            self._truncated(name, begin)
            return TextRun(self._source[start:], escaped=True)

        while self._current.offset < end:
            self._advance()
        body = TextRun(self._source[start:end], escaped=True)
        self._consume_block_end(name)
        return body

    def _find_math_end(self, name: str) -> int | None:
        """Offset of the ``\\end{name}`` closing a math block, or None.

        The first match outside braces wins. When the braces never balance
        before end of input, the first match at any depth is used instead.
        Scans with lookahead; nothing is consumed.
        """
        fallback: int | None = None
        depth = 0
        token = self._current
        with self._tokenizer.lookahead() as ahead:
            while token.type is not TokenType.EOF:
                if (
                    token.type is TokenType.COMMAND
                    and token.value == "end"
                    and self._peek_end_name() == name
                ):
                    if depth == 0:
                        return token.offset
                    if fallback is None:
                        fallback = token.offset
                elif token.type is TokenType.LBRACE:
                    depth += 1
                elif token.type is TokenType.RBRACE and depth > 0:
                    depth -= 1
                token = ahead.next_token()
        return fallback

    def _parse_block_body(self, name: str, begin: Token) -> tuple[Element, ...]:
        """Parse block children until ``\\end{name}``.

        Raises:
            BlockMismatchError: On an ``\\end`` naming a different block.
        """
        children: list[Element] = []
        while True:
            token = self._current
            if token.type is TokenType.EOF:
                self._truncated(name, begin)
                return tuple(children)
            if token.type is TokenType.COMMAND and token.value == "end":
                end_name = self._peek_end_name()
                if end_name == name:
                    break
                if end_name is not None:
                    raise BlockMismatchError(name, end_name, **self._error_location(token))

            node = self._parse_element()
            if node is not None:
                children.append(node)
            elif self._current is token:
                self._advance()

        self._consume_block_end(name)
        return tuple(children)

    def _consume_block_end(self, name: str) -> None:
        """Consume ``\\end{name}`` for real after lookahead confirmed it."""
        end = self._current
        self._advance()  # \end
        self._expect(TokenType.LBRACE, f"after \\end of block {name}")
        closed = self._read_block_name("\\end").strip()
        if closed != name:
            raise BlockMismatchError(name, closed, **self._error_location(end))
        self._emit("block.close", name=name, offset=end.offset)

    def _truncated(self, name: str, begin: Token) -> None:
        """Record a block left open at end of input."""
        loc = begin.location(self._source)
        logger.warning(
            "\\begin{%s} at %s is not closed before end of input; keeping its content",
            name,
            loc,
        )
        self._emit("block.truncated", name=name, offset=begin.offset)
