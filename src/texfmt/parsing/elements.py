"""Element, command and argument-group parsing for texfmt.

Provides mixin for the one-token element dispatch and for commands with
their optional and required argument groups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texfmt.errors import UnclosedGroupError
from texfmt.nodes import Command, Document, MathSpan, TextRun
from texfmt.tokens import TokenType

if TYPE_CHECKING:
    from texfmt.nodes import Element
    from texfmt.tokens import Token


class ElementParsingMixin:
    """Mixin for element dispatch, commands and argument groups.

    Required Host Attributes:
        - _current: Token

    Required Host Methods:
        - _advance() -> Token
        - _error_location(token) -> dict
        - _parse_block() -> Block
        - _emit(event, **data) -> None

    """

    _current: Token

    def _parse_element(self) -> Element | None:
        """Parse one element starting at the current token.

        Returns None for a stray ``\\end`` (consumed, no node) and for EOF
        (not consumed).
        """
        token = self._current
        match token.type:
            case TokenType.TEXT:
                self._advance()
                return TextRun(token.value, escaped=token.escaped)
            case TokenType.MATH_INLINE | TokenType.MATH_DISPLAY:
                self._advance()
                return MathSpan(token.value, inline=token.type is TokenType.MATH_INLINE)
            case TokenType.LBRACE | TokenType.RBRACE | TokenType.LBRACKET | TokenType.RBRACKET:
                # Not attributable to an argument: keep the character as text
                self._advance()
                return TextRun(token.value)
            case TokenType.COMMAND:
                if token.value == "begin":
                    return self._parse_block()
                if token.value == "end":
                    self._advance()
                    self._emit("end.ignored", offset=token.offset)
                    return None
                return self._parse_command()
        return None

    def _parse_command(self) -> Command:
        """Parse ``\\name[opt]{arg}...``; zero argument groups is valid."""
        token = self._current
        self._advance()
        owner = f"\\{token.value}"

        optional_arg = None
        if self._current.type is TokenType.LBRACKET:
            optional_arg = self._parse_group(TokenType.RBRACKET, owner, "optional argument")

        required_args: list[Document] = []
        while self._current.type is TokenType.LBRACE:
            required_args.append(
                self._parse_group(TokenType.RBRACE, owner, "required argument")
            )

        return Command(token.value, optional_arg, tuple(required_args))

    def _parse_group(self, close: TokenType, owner: str, group: str) -> Document:
        """Parse a group from its opening token through the first close token.

        Groups do not nest by brace counting: a ``{`` inside a group is kept
        as literal text and the first ``close`` token ends the group, so
        ``\\textbf{a{b}c}`` yields the argument ``a{b`` followed by text.
        Commands inside the group still parse their own argument groups.

        Args:
            close: RBRACE or RBRACKET
            owner: Construct owning the group, for error messages
            group: Group kind, for error messages

        Raises:
            UnclosedGroupError: If end of input comes first.
        """
        self._advance()  # opening { or [
        children: list[Element] = []
        while True:
            token = self._current
            if token.type is TokenType.EOF:
                raise UnclosedGroupError(owner, group, **self._error_location(token))
            if token.type is close:
                self._advance()
                break

            node = self._parse_element()
            if node is not None:
                children.append(node)
            elif self._current is token:
                self._advance()
        return Document(tuple(children))
