"""LaTeX renderer using StringBuilder pattern.

Renders the typed tree back to LaTeX source. Free text is escaped with the
comment-aware escaper; identifiers, paths and math are emitted untouched.

Two modes:
- normal: text is escaped and nested blocks are indented
- raw: everything is emitted as-is; used for math blocks and for the
  arguments of commands like ``\\label`` and ``\\url``

Idempotence:
The tree keeps source whitespace as text, so block output is normalized:
the indentation prefix replaces whatever horizontal whitespace started
the line, and block bodies lose leading blank lines and trailing
whitespace. Formatting formatted output therefore returns it unchanged.

Thread Safety:
All per-render state lives in StringBuilders created inside render().
Multiple threads can share a LatexRenderer instance.
"""

from __future__ import annotations

from texfmt.config import get_format_config
from texfmt.errors import RenderError
from texfmt.nodes import Block, Command, Document, MathSpan, Node, TextRun
from texfmt.stringbuilder import StringBuilder
from texfmt.utils.logger import get_logger
from texfmt.utils.text import escape_preserving_comments

logger = get_logger(__name__)

# Commands whose arguments are raw except for the listed indices
_NORMAL_ARGUMENT_EXCEPTIONS: dict[str, frozenset[int]] = {
    "href": frozenset({1}),
}


def _tidy_body(body: str) -> str:
    """Trim a block body to its content lines.

    Drops everything up to and including the last line break before the
    first non-blank character, and all trailing whitespace. A body that
    then ends in an odd run of backslashes keeps one space so the final
    backslash does not swallow the line break that follows.
    """
    stripped = body.lstrip()
    if not stripped:
        return ""
    first = len(body) - len(stripped)
    cut = max(body.rfind("\n", 0, first), body.rfind("\r", 0, first))
    body = body[cut + 1 :].rstrip()

    trailing = len(body) - len(body.rstrip("\\"))
    if trailing % 2:
        body += " "
    return body


class LatexRenderer:
    """Render a tree to LaTeX source.

    Usage:
            >>> from texfmt import parse
            >>> LatexRenderer().render(parse("a_b \\\\label{x_y}"))
            'a\\\\_b \\\\label{x_y}'

    Configuration (math block names, raw-argument commands, indentation
    unit) is read from the current FormatConfig when the renderer is
    created.

    Raises:
        RenderError: If the tree contains something that is not a node.
    """

    __slots__ = ("_math_blocks", "_raw_commands", "_indent")

    def __init__(self) -> None:
        config = get_format_config()
        self._math_blocks = config.math_blocks
        self._raw_commands = config.raw_argument_commands
        self._indent = config.indent

    def render(self, node: Node) -> str:
        """Render a Document (or any single node) to a string."""
        sb = StringBuilder()
        if isinstance(node, Document):
            for child in node.children:
                self._render_node(child, sb, 0, False)
        else:
            self._render_node(node, sb, 0, False)
        return sb.build()

    def _render_children(
        self,
        children: tuple[Node, ...],
        level: int,
        raw: bool,
        at_line_start: bool,
    ) -> str:
        sb = StringBuilder(line_start=at_line_start)
        for child in children:
            self._render_node(child, sb, level, raw)
        return sb.build()

    def _render_node(self, node: object, sb: StringBuilder, level: int, raw: bool) -> None:
        match node:
            case TextRun():
                self._render_text(node, sb, raw)
            case MathSpan():
                if node.inline:
                    sb.append("$").append(node.content).append("$")
                else:
                    sb.append("$$\n").append(node.content.strip()).append("\n$$")
            case Command():
                self._render_command(node, sb, level, raw)
            case Block():
                if node.name in self._math_blocks:
                    self._render_math_block(node, sb, level)
                else:
                    self._render_block(node, sb, level, raw)
            case Document():
                for child in node.children:
                    self._render_node(child, sb, level, raw)
            case _:
                logger.debug("Refusing to render %r", node)
                msg = f"Cannot format object of type {type(node).__name__}"
                raise RenderError(msg)

    def _render_text(self, text: TextRun, sb: StringBuilder, raw: bool) -> None:
        content = text.content
        if text.escaped or raw or content.strip() in ("{", "}"):
            sb.append(content)
        else:
            sb.append(escape_preserving_comments(content))

    def _render_command(self, cmd: Command, sb: StringBuilder, level: int, raw: bool) -> None:
        sb.append("\\").append(cmd.name)
        raw_args = raw or cmd.name in self._raw_commands
        normal_indices = _NORMAL_ARGUMENT_EXCEPTIONS.get(cmd.name, frozenset())

        if cmd.optional_arg is not None:
            sb.append("[")
            sb.append(self._render_children(cmd.optional_arg.children, level, raw_args, False))
            sb.append("]")

        for index, arg in enumerate(cmd.required_args):
            arg_raw = raw or (raw_args and index not in normal_indices)
            sb.append("{")
            sb.append(self._render_children(arg.children, level, arg_raw, False))
            sb.append("}")

    def _render_args(self, block: Block, sb: StringBuilder, level: int) -> None:
        for arg in block.args:
            sb.append("{").append(self._render_children(arg.children, level, True, False)).append("}")

    def _render_math_block(self, block: Block, sb: StringBuilder, level: int) -> None:
        sb.append("\\begin{").append(block.name).append("}")
        self._render_args(block, sb, level)
        sb.append(self._render_children(block.children, level, True, False))
        sb.append("\\end{").append(block.name).append("}")

    def _render_block(self, block: Block, sb: StringBuilder, level: int, raw: bool) -> None:
        indent = "" if raw else self._indent * level
        if not raw and sb.at_line_start():
            sb.trim_line_tail().append(indent)

        sb.append("\\begin{").append(block.name).append("}")
        self._render_args(block, sb, level)

        body = _tidy_body(self._render_children(block.children, level + 1, raw, True))
        # A body starting with % stays on the \begin line: at a line start
        # it would become a comment on the next pass
        if not body.startswith("%"):
            sb.append("\n")
        sb.append(body).append("\n")
        sb.append(indent).append("\\end{").append(block.name).append("}")
