"""
texfmt: LaTeX source formatter core.

Tokenizes LaTeX source, parses it into an immutable typed tree and renders
the tree back to normalized source: special characters in free text are
escaped, comments are left alone, nested environments are indented and
math is kept verbatim. Zero runtime dependencies.

Quick Start:
    >>> from texfmt import format_source
    >>> format_source("R&D_2 costs #1")
    'R\\\\&D\\\\_2 costs \\\\#1'

    >>> # Or parse and format separately
    >>> from texfmt import parse, format
    >>> doc = parse("\\\\begin{itemize}\\n\\\\item a_1\\n\\\\end{itemize}")
    >>> print(format(doc))
    \\begin{itemize}
    \\item a\\_1
    \\end{itemize}

Balance Warnings:
    >>> from texfmt import check_document_balance
    >>> check_document_balance(format_source("\\\\textbf{a} {unclosed"))
    ['unbalanced {}']

"""

from __future__ import annotations

from texfmt.balance import BalanceResult, check_balance, check_document_balance
from texfmt.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from texfmt.errors import (
    BlockMismatchError,
    ParseError,
    RenderError,
    TexfmtError,
    UnclosedGroupError,
    UnexpectedTokenError,
)
from texfmt.lexer import Tokenizer
from texfmt.location import SourceLocation
from texfmt.nodes import Block, Command, Document, Element, MathSpan, Node, TextRun
from texfmt.parser import Parser, TraceHook
from texfmt.renderers import ASTRenderer, LatexRenderer
from texfmt.tokens import Token, TokenType

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    trace: TraceHook | None = None,
) -> Document:
    """Parse LaTeX source into a typed tree.

    Args:
        source: LaTeX source text
        source_file: Optional source file path for error messages
        trace: Optional hook receiving structured parse events

    Returns:
        Document root node

    Raises:
        ParseError: On an unclosed argument group, a malformed block name
            or a mismatched ``\\end``. Nothing partial is returned.

    Example:
        >>> parse("\\\\emph{hi}").children[0].name
        'emph'
    """
    return Parser(source, source_file=source_file, trace=trace).parse()


def format(tree: Node) -> str:  # noqa: A001 - public API name
    """Render a tree back to LaTeX source.

    Args:
        tree: Document (or any single node) to render

    Returns:
        Formatted LaTeX source

    Raises:
        RenderError: If the tree contains something that is not a node.
    """
    return LatexRenderer().render(tree)


def format_source(
    source: str,
    *,
    source_file: str | None = None,
    trace: TraceHook | None = None,
) -> str:
    """Parse and format in one step.

    Formatting its own output returns it unchanged.

    Raises:
        ParseError: As for parse(); the caller keeps the original text.
    """
    return format(parse(source, source_file=source_file, trace=trace))


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "format",
    "format_source",
    "check_balance",
    "check_document_balance",
    "BalanceResult",
    # Nodes
    "Node",
    "Document",
    "Element",
    "TextRun",
    "MathSpan",
    "Command",
    "Block",
    # Tokens
    "Token",
    "TokenType",
    "Tokenizer",
    "SourceLocation",
    # Parsing and rendering
    "Parser",
    "TraceHook",
    "LatexRenderer",
    "ASTRenderer",
    # Configuration
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
    # Errors
    "TexfmtError",
    "ParseError",
    "UnexpectedTokenError",
    "UnclosedGroupError",
    "BlockMismatchError",
    "RenderError",
]
