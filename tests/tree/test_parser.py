"""
Tests for the tree parser.
"""

import pytest

from svgsvelte.core.errors import ParseError
from svgsvelte.ir.enums import ParseErrorCode
from svgsvelte.ir.schema import SvgNode
from svgsvelte.tree.parser import parse

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


class TestParseTree:
    """Tests for successful parses."""

    def test_basic_svg(self):
        tree = parse('<svg width="24" height="24"><circle cx="12" cy="12" r="10"/></svg>')
        assert tree.attributes == {"width": "24", "height": "24"}
        assert tree.children["circle"].attributes == {"cx": "12", "cy": "12", "r": "10"}

    def test_surrounding_whitespace(self):
        tree = parse('\n   <svg><path d="M0 0"/></svg>\n')
        assert "path" in tree.children

    def test_no_attributes(self):
        """A root without attributes is fine as long as it has children."""
        tree = parse('<svg>\n  <circle cx="12" cy="12" r="10"/>\n</svg>')
        assert tree.attributes == {}
        assert isinstance(tree.children["circle"], SvgNode)

    def test_repeated_tags_become_lists(self):
        tree = parse('<svg><path d="a"/><circle r="1"/><path d="b"/></svg>')
        assert list(tree.children) == ["path", "circle"]
        paths = tree.children["path"]
        assert isinstance(paths, list)
        assert [p.attributes["d"] for p in paths] == ["a", "b"]

    def test_attribute_order_preserved(self):
        tree = parse('<svg viewBox="0 0 1 1" width="1" fill="none"><path d="M0 0"/></svg>')
        assert list(tree.attributes) == ["viewBox", "width", "fill"]

    def test_text_payload_trimmed(self):
        tree = parse('<svg><title>  Hello  </title><path d="M0 0"/></svg>')
        assert tree.first_child("title").text == "Hello"

    def test_blank_text_is_none(self):
        tree = parse('<svg><title>   </title><path d="M0 0"/></svg>')
        assert tree.first_child("title").text is None

    def test_text_only_child_counts_as_child(self):
        tree = parse("<svg><title>Only a title</title></svg>")
        assert tree.first_child("title").text == "Only a title"

    def test_namespaced_attributes(self):
        tree = parse(
            f'<svg xmlns:xlink="{XLINK_NS}" xml:space="preserve"><use xlink:href="#a"/></svg>'
        )
        assert tree.attributes == {"xmlns:xlink": XLINK_NS, "xml:space": "preserve"}
        assert tree.children["use"].attributes == {"xlink:href": "#a"}

    def test_default_namespace(self):
        tree = parse(f'<svg xmlns="{SVG_NS}"><path d="M0 0"/></svg>')
        assert tree.attributes == {"xmlns": SVG_NS}
        assert list(tree.children) == ["path"]


class TestParseErrors:
    """Tests for rejected documents, in check order."""

    def test_missing_root(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<div>Not an SVG</div>")
        assert exc_info.value.code == ParseErrorCode.MISSING_ROOT
        assert str(exc_info.value) == "Invalid SVG: Content must start with <svg> tag"

    def test_prolog_is_missing_root(self):
        """The parser expects normalized text without an XML declaration."""
        with pytest.raises(ParseError) as exc_info:
            parse('<?xml version="1.0"?><svg><path d="M0 0"/></svg>')
        assert exc_info.value.code == ParseErrorCode.MISSING_ROOT

    def test_unclosed_tag(self):
        with pytest.raises(ParseError) as exc_info:
            parse('\n<svg width="24" height="24">\n    <circle cx="12" cy="12" r="10"/>')
        error = exc_info.value
        assert error.code == ParseErrorCode.SYNTAX
        assert error.line is not None
        assert str(error).startswith("Invalid SVG: ")
        assert f" at line {error.line}" in str(error)

    def test_mismatched_nesting(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<svg><g><path></g></svg>")
        assert exc_info.value.code == ParseErrorCode.SYNTAX

    def test_multiple_roots(self):
        text = '<svg width="1"><path d="M0 0"/></svg>\n<svg width="2"><path d="M0 0"/></svg>'
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        error = exc_info.value
        assert error.code == ParseErrorCode.SYNTAX
        assert error.line == 2
        assert str(error) == "Invalid SVG: Multiple possible root nodes found. at line 2"

    def test_wrong_root_name(self):
        with pytest.raises(ParseError) as exc_info:
            parse('<svg2 width="24"><circle r="1"/></svg2>')
        assert exc_info.value.code == ParseErrorCode.NO_ROOT
        assert str(exc_info.value) == "Invalid SVG: No SVG element found"

    def test_empty_root(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<svg/>")
        assert exc_info.value.code == ParseErrorCode.NO_ROOT

    def test_no_children(self):
        with pytest.raises(ParseError) as exc_info:
            parse('<svg width="24" height="24"></svg>')
        assert exc_info.value.code == ParseErrorCode.NO_CHILDREN
        assert str(exc_info.value) == "Invalid SVG: SVG has no child elements"

    def test_syntax_checked_before_children(self):
        with pytest.raises(ParseError) as exc_info:
            parse('<svg width="24"')
        assert exc_info.value.code == ParseErrorCode.SYNTAX
