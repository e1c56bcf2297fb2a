"""Parsing subsystem for the texfmt parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal and end-name lookahead
- `ElementParsingMixin`: Element dispatch, commands, argument groups
- `BlockParsingMixin`: \\begin ... \\end blocks, math and non-math

Example:
    >>> from texfmt.parsing import (
    ...     TokenNavigationMixin,
    ...     ElementParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, ElementParsingMixin, BlockParsingMixin):
    ...     pass

"""

from texfmt.parsing.blocks import BlockParsingMixin
from texfmt.parsing.elements import ElementParsingMixin
from texfmt.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "ElementParsingMixin",
    "BlockParsingMixin",
]
