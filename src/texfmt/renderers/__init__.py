"""texfmt renderers.

Renderers turn a typed tree back into text.

Available Renderers:
- LatexRenderer: Renders the tree to normalized LaTeX source

Thread Safety:
Renderers build output in a StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from texfmt.renderers.latex import LatexRenderer
from texfmt.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "LatexRenderer"]
