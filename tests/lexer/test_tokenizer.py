"""Tests for the tokenizer's scanning rules.

One class per rule in the tokenizer's priority list, plus the cursor
helpers (offset, lookahead) the parser relies on.
"""

import pytest

from texfmt.lexer import Tokenizer
from texfmt.tokens import Token, TokenType


def _tokens(source: str) -> list[Token]:
    return list(Tokenizer(source).tokenize())


def _types(source: str) -> list[TokenType]:
    return [t.type for t in _tokens(source)]


class TestCommands:
    """Backslash followed by a letter."""

    def test_command_with_argument(self) -> None:
        tokens = _tokens("\\emph{hi}")
        assert [t.type for t in tokens] == [
            TokenType.COMMAND,
            TokenType.LBRACE,
            TokenType.TEXT,
            TokenType.RBRACE,
            TokenType.EOF,
        ]
        assert tokens[0].value == "emph"
        assert tokens[2].value == "hi"

    def test_starred_command(self) -> None:
        assert _tokens("\\section*{A}")[0].value == "section*"

    def test_name_stops_at_digit(self) -> None:
        tokens = _tokens("\\item2")
        assert tokens[0] == Token(TokenType.COMMAND, "item", offset=0)
        assert tokens[1] == Token(TokenType.TEXT, "2", offset=5)

    def test_commands_are_not_escaped(self) -> None:
        assert _tokens("\\label")[0].escaped is False


class TestEscapes:
    """Backslash followed by anything that is not a letter."""

    @pytest.mark.parametrize("source", ["\\%", "\\&", "\\_", "\\\\", "\\{", "\\$", "\\ "])
    def test_two_character_escape(self, source: str) -> None:
        token = _tokens(source)[0]
        assert token.type is TokenType.TEXT
        assert token.value == source
        assert token.escaped is True

    def test_lone_trailing_backslash(self) -> None:
        token = _tokens("a\\")[1]
        assert token == Token(TokenType.TEXT, "\\", escaped=True, offset=1)

    def test_escaped_brace_is_not_structural(self) -> None:
        assert TokenType.LBRACE not in _types("\\{x\\}")

    def test_backslash_newline(self) -> None:
        token = _tokens("\\\nx")[0]
        assert token.value == "\\\n"
        assert token.escaped is True


class TestMath:
    """Dollar-delimited math spans."""

    def test_inline(self) -> None:
        token = _tokens("$x^2$")[0]
        assert token == Token(TokenType.MATH_INLINE, "x^2", offset=0)

    def test_display(self) -> None:
        token = _tokens("$$y$$")[0]
        assert token == Token(TokenType.MATH_DISPLAY, "y", offset=0)

    def test_display_may_contain_single_dollar(self) -> None:
        assert _tokens("$$a$b$$")[0].value == "a$b"

    def test_unterminated_inline_runs_to_end(self) -> None:
        tokens = _tokens("a $x + y")
        assert tokens[1] == Token(TokenType.MATH_INLINE, "x + y", offset=2)
        assert tokens[2].type is TokenType.EOF

    def test_unterminated_display_runs_to_end(self) -> None:
        tokens = _tokens("$$")
        assert tokens[0] == Token(TokenType.MATH_DISPLAY, "", offset=0)

    def test_adjacent_inline_spans(self) -> None:
        values = [t.value for t in _tokens("$a$$b$") if t.type is TokenType.MATH_INLINE]
        assert values == ["a", "b"]

    def test_braces_inside_math_are_not_structural(self) -> None:
        assert _types("$\\frac{a}{b}$") == [TokenType.MATH_INLINE, TokenType.EOF]


class TestNewlinesAndText:
    """Line breaks and plain text runs."""

    def test_newline_is_its_own_token(self) -> None:
        assert [t.value for t in _tokens("a\nb")] == ["a", "\n", "b", ""]

    def test_crlf_is_one_token(self) -> None:
        assert [t.value for t in _tokens("a\r\nb")] == ["a", "\r\n", "b", ""]

    def test_lone_cr(self) -> None:
        assert [t.value for t in _tokens("a\rb")] == ["a", "\r", "b", ""]

    def test_text_run_stops_at_structural_chars(self) -> None:
        tokens = _tokens("a b[c]")
        assert [t.value for t in tokens] == ["a b", "[", "c", "]", ""]
        assert tokens[1].type is TokenType.LBRACKET
        assert tokens[3].type is TokenType.RBRACKET

    def test_specials_stay_in_text(self) -> None:
        assert _tokens("a_b & c#d")[0].value == "a_b & c#d"


class TestComments:
    """``%`` at the start of a line swallows the rest of the line."""

    def test_comment_at_start_of_input(self) -> None:
        tokens = _tokens("% note {x} $y\nz")
        assert tokens[0] == Token(TokenType.TEXT, "% note {x} $y", offset=0)
        assert tokens[1].value == "\n"
        assert tokens[2].value == "z"

    def test_comment_after_newline(self) -> None:
        tokens = _tokens("a\n% {c}")
        assert tokens[2] == Token(TokenType.TEXT, "% {c}", offset=2)

    def test_mid_line_percent_is_plain_text(self) -> None:
        tokens = _tokens("x % c {y}")
        assert tokens[0].value == "x % c "
        assert tokens[1].type is TokenType.LBRACE

    def test_comment_stops_before_crlf(self) -> None:
        tokens = _tokens("% c\r\nd")
        assert tokens[0].value == "% c"
        assert tokens[1].value == "\r\n"


class TestCursor:
    """Offsets, EOF and lookahead."""

    def test_offsets(self) -> None:
        assert [t.offset for t in _tokens("ab{c}")] == [0, 2, 3, 4, 5]

    def test_eof_repeats(self) -> None:
        tok = Tokenizer("a")
        tok.next_token()
        assert tok.next_token().type is TokenType.EOF
        assert tok.next_token() == Token(TokenType.EOF, "", offset=1)

    def test_empty_source(self) -> None:
        assert _tokens("") == [Token(TokenType.EOF, "", offset=0)]

    def test_offset_property_tracks_cursor(self) -> None:
        tok = Tokenizer("\\cmd{x}")
        assert tok.offset == 0
        tok.next_token()
        assert tok.offset == 4

    def test_lookahead_restores_cursor(self) -> None:
        tok = Tokenizer("{name}rest")
        with tok.lookahead() as ahead:
            assert ahead.next_token().type is TokenType.LBRACE
            assert ahead.next_token().value == "name"
        assert tok.offset == 0
        assert tok.next_token().type is TokenType.LBRACE

    def test_lookahead_restores_after_exception(self) -> None:
        tok = Tokenizer("abc{")
        with pytest.raises(RuntimeError), tok.lookahead():
            tok.next_token()
            raise RuntimeError
        assert tok.offset == 0

    def test_source_property(self) -> None:
        assert Tokenizer("x").source == "x"


class TestTokenRepr:
    """Compact debugging repr."""

    def test_plain(self) -> None:
        assert repr(Token(TokenType.TEXT, "a_b", offset=3)) == "Token(TEXT, 'a_b', @3)"

    def test_escaped(self) -> None:
        token = Token(TokenType.TEXT, "\\%", escaped=True, offset=0)
        assert repr(token) == "Token(TEXT, '\\\\%', escaped, @0)"

    def test_long_value_truncated(self) -> None:
        token = Token(TokenType.TEXT, "x" * 40)
        assert "..." in repr(token)
