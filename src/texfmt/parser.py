"""Recursive descent parser producing a typed tree.

Pulls tokens from the Tokenizer with one token of lookahead and builds
immutable (frozen) dataclass nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal, end-name lookahead
- `ElementParsingMixin`: Text, math, commands and argument groups
- `BlockParsingMixin`: \\begin ... \\end blocks

Thread Safety:
- Parser instances are single-use; create one per parse
- Configuration is read from ContextVar (thread-local)
- The resulting tree is immutable and safe to share across threads

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeAlias

from texfmt.config import get_format_config
from texfmt.lexer import Tokenizer
from texfmt.nodes import Document, Element
from texfmt.parsing import (
    BlockParsingMixin,
    ElementParsingMixin,
    TokenNavigationMixin,
)

# Receives structured parse events such as ("block.open", {"name": ..., "offset": ...})
TraceHook: TypeAlias = Callable[[str, dict[str, Any]], None]


class Parser(
    TokenNavigationMixin,
    ElementParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for LaTeX source.

    Usage:
            >>> Parser("a_b").parse()
            Document(children=(TextRun(content='a_b', escaped=False),))

    Trace events (sent to the optional ``trace`` hook):
        - ``block.open``: name, offset
        - ``block.close``: name, offset
        - ``block.truncated``: name, offset (block still open at end of input)
        - ``end.ignored``: offset (stray ``\\end``)

    Raises:
        ParseError: From parse(), for any fatal syntax problem.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokenizer",
        "_current",
        "_trace",
        "_math_blocks",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        trace: TraceHook | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: LaTeX source text
            source_file: Optional source file path for error messages
            trace: Optional hook receiving structured parse events
        """
        self._source = source
        self._source_file = source_file
        self._tokenizer = Tokenizer(source, source_file)
        self._current = self._tokenizer.next_token()
        self._trace = trace
        self._math_blocks = get_format_config().math_blocks

    def parse(self) -> Document:
        """Parse the whole source into a Document.

        An element that yields no node without consuming anything has its
        token dropped, so the loop always makes progress.
        """
        children: list[Element] = []
        while not self._at_end():
            token = self._current
            node = self._parse_element()
            if node is not None:
                children.append(node)
            elif self._current is token:
                self._advance()
        return Document(tuple(children))

    def _emit(self, event: str, **data: Any) -> None:
        if self._trace is not None:
            self._trace(event, data)
