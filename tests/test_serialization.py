"""Tests for tree serialization (to_dict/from_dict/to_json/from_json)."""

import json

import pytest

from texfmt import parse
from texfmt.nodes import Block, Command, Document, MathSpan, TextRun
from texfmt.serialization import from_dict, from_json, to_dict, to_json

SAMPLE = (
    "\\section[s]{Intro_1}\n"
    "See \\ref{a_b}, $x$ and $$y$$ 50\\%.\n"
    "\\begin{itemize}\\item one\\end{itemize}\n"
    "\\begin{equation}e=mc^2\\end{equation}"
)


class TestToDict:
    """Shape of serialized nodes."""

    def test_text_run(self) -> None:
        assert to_dict(TextRun("a")) == {"_type": "TextRun", "content": "a", "escaped": False}

    def test_math_span(self) -> None:
        assert to_dict(MathSpan("x", inline=False)) == {
            "_type": "MathSpan",
            "content": "x",
            "inline": False,
        }

    def test_command_without_optional(self) -> None:
        data = to_dict(Command("item"))
        assert data == {"_type": "Command", "name": "item", "optional_arg": None, "required_args": []}

    def test_block_children_are_lists(self) -> None:
        data = to_dict(Block("a", (Document(),), (TextRun("x"),)))
        assert data["args"] == [{"_type": "Document", "children": []}]
        assert data["children"][0]["_type"] == "TextRun"


class TestRoundTrip:
    """Parsed trees survive serialization unchanged."""

    def test_dict_round_trip(self) -> None:
        doc = parse(SAMPLE)
        assert from_dict(to_dict(doc)) == doc

    def test_json_round_trip(self) -> None:
        doc = parse(SAMPLE)
        assert from_json(to_json(doc)) == doc

    def test_json_is_deterministic(self) -> None:
        doc = parse(SAMPLE)
        assert to_json(doc) == to_json(parse(SAMPLE))

    def test_json_indent(self) -> None:
        text = to_json(Document((TextRun("a"),)), indent=2)
        assert "\n  " in text
        assert json.loads(text)["_type"] == "Document"


class TestErrors:
    """Malformed input is rejected."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing"):
            from_dict({"content": "a"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Paragraph"})

    def test_json_not_a_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(TextRun("a"))))
