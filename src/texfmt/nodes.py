"""Typed tree nodes for texfmt.

All nodes are frozen dataclasses with slots:
- Immutability: a tree is built bottom-up by the parser and never changed
- Pattern matching: the formatter dispatches with ``match`` over the
  closed set of node classes
- Ownership: children live in tuples held by their parent; there are no
  parent back-references

Node Hierarchy:
Node (base)
├── Document   root, and every [...] / {...} argument group
├── TextRun    literal text, newline, comment or escape sequence
├── MathSpan   $...$ or $$...$$
├── Command    \\name[opt]{arg}{arg}
└── Block      \\begin{name}{arg} ... \\end{name}

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes."""


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Ordered sequence of elements.

    Used for the root of a parse and for every argument group. An empty
    group is ``Document()``, never ``None``.

    """

    children: tuple[Element, ...] = ()


@dataclass(frozen=True, slots=True)
class TextRun(Node):
    """Literal text.

    ``escaped=True`` marks content that must be emitted exactly as-is:
    escape sequences such as ``\\%`` and the interior of math blocks.

    """

    content: str
    escaped: bool = False


@dataclass(frozen=True, slots=True)
class MathSpan(Node):
    """Math span; content is the raw interior without dollar delimiters.

    LaTeX: $x^2$ (inline) or $$x^2$$ (display)

    """

    content: str
    inline: bool = True


@dataclass(frozen=True, slots=True)
class Command(Node):
    """Control word with its argument groups.

    LaTeX: \\section[short]{Long title}

    """

    name: str
    optional_arg: Document | None = None
    required_args: tuple[Document, ...] = ()


@dataclass(frozen=True, slots=True)
class Block(Node):
    """A \\begin{name} ... \\end{name} region.

    ``name`` is stored trimmed. ``args`` are the brace groups directly
    after the name, e.g. ``{ll}`` in ``\\begin{tabular}{ll}``. For math
    blocks ``children`` is exactly one escaped TextRun holding the
    verbatim interior.

    """

    name: str
    args: tuple[Document, ...] = ()
    children: tuple[Element, ...] = ()


# Type alias for nodes that can appear as children
Element: TypeAlias = TextRun | MathSpan | Command | Block
