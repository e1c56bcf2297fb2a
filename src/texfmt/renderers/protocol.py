"""ASTRenderer protocol: the interface every texfmt renderer satisfies.

Anything with ``render(node) -> str`` conforms. ``LatexRenderer`` is the
built-in implementation.

Example:
    from texfmt.renderers.protocol import ASTRenderer

    def reformat(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from texfmt.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for tree renderers."""

    def render(self, node: Document) -> str:
        """Render a Document tree to a string.

        Args:
            node: The parsed document.

        Returns:
            Rendered text.

        """
        ...
