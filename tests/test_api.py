"""Tests for the public API: parse, format, format_source and checks.

Includes the documented end-to-end properties and a property-based
fixed-point test over generated documents.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import texfmt
from texfmt import (
    ParseError,
    check_balance,
    check_document_balance,
    format,
    format_source,
    parse,
)
from texfmt.nodes import Document, TextRun


class TestPublicSurface:
    """Exports and version."""

    def test_version(self) -> None:
        assert texfmt.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        for name in texfmt.__all__:
            assert hasattr(texfmt, name), name


class TestDocumentedBehavior:
    """End-to-end examples."""

    def test_escaping(self) -> None:
        assert format(parse("a_b")) == "a\\_b"

    def test_raw_argument(self) -> None:
        assert format(parse("\\label{sec_1}")) == "\\label{sec_1}"

    def test_href_split(self) -> None:
        assert format(parse("\\href{http://a_b}{click_me}")) == "\\href{http://a_b}{click\\_me}"

    def test_math_block_pass_through(self) -> None:
        source = "\\begin{equation}a_b=c\\end{equation}"
        assert format(parse(source)) == source

    def test_comment_line(self) -> None:
        assert format(parse("% note_here")) == "% note_here"

    def test_trailing_comment(self) -> None:
        assert format(parse("a_b % note_here")) == "a\\_b % note_here"

    def test_mismatch_raises(self) -> None:
        with pytest.raises(ParseError):
            parse("\\begin{itemize}x\\end{enumerate}")

    def test_unclosed_argument_names_command(self) -> None:
        with pytest.raises(ParseError, match="textbf"):
            parse("\\textbf{bold")

    def test_balance_extra_closing(self) -> None:
        assert check_balance("a}b", "{", "}").message == "extra closing symbol"

    def test_balance_odd_dollars(self) -> None:
        assert check_balance("$a$b$", "$", "$").balanced is False

    def test_escaped_run_is_trusted(self) -> None:
        assert format(Document((TextRun("a_b % c_d", escaped=True),))) == "a_b % c_d"

    def test_truncated_block_formats_but_mismatch_fails(self) -> None:
        assert format_source("\\begin{a}x") == "\\begin{a}\nx\n\\end{a}"
        with pytest.raises(ParseError):
            format_source("\\begin{a}x\\end{b}")

    def test_balance_runs_on_formatted_text(self) -> None:
        formatted = format_source("\\begin{a}{x\\end{a}")
        assert check_document_balance(formatted) == ["unbalanced {}"]


class TestIdempotence:
    """Canonically formatted input is returned unchanged."""

    @pytest.mark.parametrize(
        "source",
        [
            "a\\_b",
            "\\section{Intro}\nText with \\ref{fig_1}.",
            "\\begin{itemize}\n\\item a\n  \\begin{enumerate}\n\\item b\n  \\end{enumerate}\n\\end{itemize}",
            "$$\nx\n$$",
            "\\begin{equation}a_b\\end{equation}",
        ],
    )
    def test_canonical_input_unchanged(self, source: str) -> None:
        assert format_source(source) == source


# =========================================================================
# Generated documents
# =========================================================================

_WORD = st.text(alphabet="abcxyz_&#^~,.:;!?0123 ", min_size=1, max_size=12)
_MATH = st.text(alphabet="xyz+-^_ 12", min_size=1, max_size=10)
_SEPARATOR = st.sampled_from([" ", "\n", "\n\n", "  ", "\n  "])

_LEAF = st.one_of(
    _WORD,
    st.sampled_from(["\\%", "\\&", "\\_", "\\\\", "\\#", "\\item"]),
    _MATH.map(lambda c: f"${c}$"),
    _MATH.map(lambda c: f"$${c}$$"),
    _WORD.map(lambda w: f"\\textbf{{{w}}}"),
    _WORD.map(lambda w: f"\\label{{{w}}}"),
    st.tuples(_WORD, _WORD).map(lambda p: f"\\href{{{p[0]}}}{{{p[1]}}}"),
    _WORD.map(lambda w: f"\n% {w}\n"),
    _MATH.map(lambda c: f"\\begin{{equation}}{c}\\end{{equation}}"),
)


def _join(parts: list[tuple[str, str]]) -> str:
    return "".join(sep + piece for sep, piece in parts)


def _block(body: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    names = st.sampled_from(["itemize", "center", "quote"])
    return st.tuples(names, body).map(lambda p: f"\\begin{{{p[0]}}}{p[1]}\\end{{{p[0]}}}")


_DOCUMENT = st.recursive(
    _LEAF,
    lambda inner: _block(st.lists(st.tuples(_SEPARATOR, inner), max_size=5).map(_join)),
    max_leaves=20,
)
_SOURCE = st.lists(st.tuples(_SEPARATOR, _DOCUMENT), max_size=8).map(_join)


class TestGeneratedDocuments:
    """Properties over generated well-formed documents."""

    @given(_SOURCE)
    @settings(max_examples=200, deadline=None)
    def test_fixed_point_after_one_pass(self, source: str) -> None:
        once = format_source(source)
        assert format_source(once) == once

    @given(_SOURCE)
    @settings(max_examples=100, deadline=None)
    def test_deterministic(self, source: str) -> None:
        assert parse(source) == parse(source)
        assert format_source(source) == format_source(source)

    @given(_SOURCE)
    @settings(max_examples=100, deadline=None)
    def test_formatting_keeps_braces_balanced(self, source: str) -> None:
        assert check_balance(format_source(source), "{", "}").balanced


class TestConcurrency:
    """Independent calls from many threads.

    Thread Safety:
        Each call builds its own tokenizer, parser and renderer state, so
        results match the single-threaded ones.
    """

    def test_parallel_format(self) -> None:
        sources = [f"\\begin{{a}}\\textbf{{x_{i}}}\\end{{a}}" for i in range(50)]
        expected = [format_source(s) for s in sources]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(format_source, sources))
        assert results == expected
