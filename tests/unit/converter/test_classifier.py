"""Unit tests for converter.classifier module."""

import pytest

from src.converter.classifier import (
    IGNORABLE,
    TAG_TABLE,
    TRANSPARENT,
    NodeRole,
    classify,
    classify_tag,
)
from src.converter.dom import DomNode, NodeKind


class TestClassifyTag:
    """Test cases for classify_tag."""

    @pytest.mark.parametrize("tag,level", [("h1", 1), ("h3", 3), ("h6", 6)])
    def test_heading_levels(self, tag, level):
        """Headings carry their level."""
        info = classify_tag(tag)

        assert info.role is NodeRole.HEADING
        assert info.level == level

    def test_tag_lookup_is_case_insensitive(self):
        """Upper-case tag names classify like lower-case ones."""
        assert classify_tag("STRONG") == classify_tag("strong")

    @pytest.mark.parametrize("tag", ["script", "style", "noscript", "template", "head"])
    def test_non_content_tags_are_ignorable(self, tag):
        """Script-like and head content is dropped."""
        assert classify_tag(tag) is IGNORABLE

    def test_unknown_tags_are_transparent(self):
        """Unknown elements pass their children through."""
        assert classify_tag("my-widget") is TRANSPARENT
        assert classify_tag("span") is TRANSPARENT

    def test_emphasis_markers(self):
        """Emphasis and strong carry their markdown delimiters."""
        assert classify_tag("em").marker == "*"
        assert classify_tag("i").marker == "*"
        assert classify_tag("b").marker == "**"
        assert classify_tag("strong").role is NodeRole.STRONG

    def test_lists(self):
        """ul and ol differ only in ordering."""
        assert classify_tag("ul").role is NodeRole.LIST
        assert classify_tag("ul").ordered is False
        assert classify_tag("ol").ordered is True

    def test_void_elements(self):
        """img, br and hr never have children."""
        assert classify_tag("img").void is True
        assert classify_tag("br").void is True
        assert classify_tag("hr").void is True
        assert classify_tag("p").void is False

    def test_header_cells(self):
        """th is a table cell flagged as header."""
        assert classify_tag("th").role is NodeRole.TABLE_CELL
        assert classify_tag("th").header is True
        assert classify_tag("td").header is False

    def test_inline_flag(self):
        """Inline roles are flagged; block roles are not."""
        assert classify_tag("a").inline is True
        assert classify_tag("code").inline is True
        assert classify_tag("div").inline is False
        assert classify_tag("pre").inline is False

    def test_tag_table_is_read_only(self):
        """The tag table cannot be modified after import."""
        with pytest.raises(TypeError):
            TAG_TABLE["blink"] = TRANSPARENT


class TestClassifyNode:
    """Test cases for classify."""

    def test_text_node(self):
        assert classify(DomNode(kind=NodeKind.TEXT, text="x")).role is NodeRole.TEXT

    def test_comment_node_is_ignorable(self):
        assert classify(DomNode(kind=NodeKind.COMMENT, text="x")) is IGNORABLE

    def test_document_node(self):
        assert classify(DomNode(kind=NodeKind.DOCUMENT)).role is NodeRole.DOCUMENT

    def test_element_without_tag_is_transparent(self):
        """An element missing its tag name falls back to transparent."""
        assert classify(DomNode(kind=NodeKind.ELEMENT)) is TRANSPARENT
