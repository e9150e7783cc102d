"""Unit tests for converter.emitter module.

MarkdownEmitter output is raw: blocks are joined but the post-processing
pass (trailing newline, blank line collapsing) has not run yet.
"""

import pytest

from src.converter.dom import DomTree
from src.converter.emitter import MAX_COLSPAN, MarkdownEmitter, _colspan
from src.converter.errors import DepthExceededError, MalformedTreeError
from src.converter.tree_builder import HtmlTreeBuilder
from src.models.conversion_options import ConversionOptions
from tests.fixtures.trees import build_nested_tree, build_shared_child_nodes


def _emit(html, base_url=None, parser="lxml", **option_overrides):
    tree = HtmlTreeBuilder(parser=parser).parse(html)
    options = ConversionOptions(**option_overrides)
    return MarkdownEmitter(tree, base_url=base_url, options=options).emit()


class TestEmitterBlocks:
    """Test cases for headings, paragraphs and other simple blocks."""

    def test_heading_and_paragraph(self):
        assert _emit("<h1>Title</h1><p>Hello <b>world</b></p>") == "# Title\n\nHello **world**"

    def test_empty_heading_is_dropped(self):
        assert _emit("<h2> </h2><p>x</p>") == "x"

    def test_line_break_in_heading_becomes_space(self):
        assert _emit("<h2>a<br>b</h2>") == "## a b"

    def test_trailing_hashes_in_heading_are_escaped(self):
        assert _emit("<h2>C #</h2>") == "## C \\#"

    def test_horizontal_rule(self):
        assert _emit("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"

    def test_line_break_in_paragraph(self):
        assert _emit("<p>a<br>b</p>") == "a  \nb"

    def test_unknown_elements_are_transparent(self):
        assert _emit("<custom-box><p>x</p></custom-box>", parser="html.parser") == "x"

    def test_comments_are_dropped(self):
        assert _emit("<p>a<!-- hidden -->b</p>") == "ab"

    def test_empty_container(self):
        assert _emit("<div><span></span></div>") == ""

    def test_nested_blockquotes(self):
        html = "<blockquote><p>a</p><blockquote><p>b</p></blockquote></blockquote>"

        assert _emit(html) == "> a\n>\n> > b"


class TestEmitterInline:
    """Test cases for inline markup."""

    def test_space_inside_inline_element_is_kept(self):
        assert _emit("<p>Hello<b> world</b></p>") == "Hello **world**"

    def test_whitespace_only_emphasis_keeps_space(self):
        assert _emit("<p>x<em> </em>y</p>") == "x y"

    def test_nested_identical_emphasis_is_not_doubled(self):
        assert _emit("<p><b>a <strong>b</strong></b></p>") == "**a b**"

    def test_mixed_emphasis(self):
        assert _emit("<p><strong>bold <em>both</em></strong></p>") == "**bold *both***"

    def test_inline_code_collapses_whitespace(self):
        assert _emit("<p>a <code>x  y</code> b</p>") == "a `x y` b"

    def test_inline_code_with_backtick(self):
        assert _emit("<p>Use <code>a`b</code></p>") == "Use ``a`b``"

    def test_inline_code_is_not_escaped(self):
        assert _emit("<p><code>*ptr</code></p>") == "`*ptr`"

    def test_literal_text_is_escaped(self):
        assert _emit("<p>*not emphasis*</p>") == "\\*not emphasis\\*"

    def test_literal_block_marker_is_escaped(self):
        assert _emit("<p># not a heading</p>") == "\\# not a heading"


class TestEmitterLinks:
    """Test cases for anchors and images."""

    def test_link_resolved_against_base(self):
        html = '<a href="/x">link</a>'

        assert _emit(html, base_url="https://ex.com/a/") == "[link](https://ex.com/x)"

    def test_link_without_base_keeps_href(self):
        assert _emit('<a href="/x">x</a>') == "[x](/x)"

    def test_link_title(self):
        html = '<a href="/x" title="Go there">x</a>'

        assert _emit(html, base_url="https://ex.com/") == '[x](https://ex.com/x "Go there")'

    def test_anchor_without_href_is_plain_text(self):
        assert _emit('<p><a name="top">Top</a></p>') == "Top"

    def test_links_disabled_keeps_text(self):
        assert _emit('<p><a href="/x">text</a></p>', include_links=False) == "text"

    def test_empty_label_uses_url(self):
        html = '<a href="https://ex.com/a_b"></a>'

        assert _emit(html) == "[https://ex.com/a\\_b](https://ex.com/a_b)"

    def test_block_inside_anchor_is_flattened(self):
        html = '<a href="https://ex.com/"><div>Card</div></a>'

        assert _emit(html, parser="html.parser") == "[Card](https://ex.com/)"

    def test_image(self):
        html = '<img src="pic.png" alt="A pic">'

        assert _emit(html, base_url="https://ex.com/a/") == "![A pic](https://ex.com/a/pic.png)"

    def test_image_alt_is_escaped_and_collapsed(self):
        assert _emit('<img src="a.png" alt="a_b   c">') == "![a\\_b c](a.png)"

    def test_image_without_src_is_dropped(self):
        assert _emit('<p><img alt="x"></p>') == ""

    def test_images_disabled(self):
        assert _emit('<p>a<img src="a.png">b</p>', include_images=False) == "ab"


class TestEmitterLists:
    """Test cases for ordered and unordered lists."""

    def test_unordered_list(self):
        assert _emit("<ul><li>a</li><li>b</li></ul>") == "- a\n- b"

    def test_custom_bullet(self):
        assert _emit("<ul><li>a</li></ul>", bullet="*") == "* a"

    def test_ordered_list_start(self):
        assert _emit('<ol start="3"><li>x</li><li>y</li></ol>') == "3. x\n4. y"

    def test_ordered_list_value_of_first_item(self):
        assert _emit('<ol><li value="7">x</li><li>y</li></ol>') == "7. x\n8. y"

    def test_invalid_start_falls_back_to_one(self):
        assert _emit('<ol start="abc"><li>x</li></ol>') == "1. x"

    def test_nested_list_in_item(self):
        html = "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"

        assert _emit(html) == "- a\n  - b\n- c"

    def test_nested_list_under_ordered_item_aligns_with_text(self):
        html = "<ol><li>a<ul><li>b</li></ul></li></ol>"

        assert _emit(html) == "1. a\n   - b"

    def test_continuation_indent_follows_marker_width(self):
        """Two-digit markers push nested content four columns in."""
        html = '<ol start="10"><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li></ol>'

        assert _emit(html) == "10. a\n    - b\n      - c"

    def test_list_directly_inside_list_joins_previous_item(self):
        html = "<ul><li>a</li><ul><li>b</li></ul></ul>"

        assert _emit(html, parser="html.parser") == "- a\n  - b"

    def test_multi_paragraph_item(self):
        html = "<ul><li><p>one</p><p>two</p></li></ul>"

        assert _emit(html) == "- one\n\n  two"

    def test_stray_text_in_list_becomes_item(self):
        assert _emit("<ul>text<li>a</li></ul>", parser="html.parser") == "- text\n- a"

    def test_stray_list_item(self):
        assert _emit("<li>orphan</li>", parser="html.parser") == "- orphan"

    def test_empty_item_keeps_marker(self):
        assert _emit("<ul><li></li><li>b</li></ul>") == "-\n- b"

    def test_adjacent_unordered_lists_stay_separate(self):
        html = "<ul><li>a</li></ul><ul><li>b</li></ul>"

        assert _emit(html) == "- a\n\n<!-- -->\n\n- b"

    def test_adjacent_ordered_lists_stay_separate(self):
        html = "<ol><li>a</li></ol><ol><li>b</li></ol>"

        assert _emit(html) == "1. a\n\n<!-- -->\n\n1. b"

    def test_ordered_then_unordered_list_needs_no_separator(self):
        html = "<ol><li>a</li></ol><ul><li>b</li></ul>"

        assert _emit(html) == "1. a\n\n- b"

    def test_lists_in_sibling_containers_stay_separate(self):
        html = "<div><ul><li>a</li></ul></div><div><ul><li>b</li></ul></div>"

        assert _emit(html) == "- a\n\n<!-- -->\n\n- b"

    def test_adjacent_nested_lists_in_item(self):
        html = "<ul><li>x<ul><li>a</li></ul><ul><li>b</li></ul></li></ul>"

        assert _emit(html) == "- x\n  - a\n  <!-- -->\n  - b"

    def test_list_inside_list_after_nested_list(self):
        html = "<ul><li>a<ul><li>b</li></ul></li><ul><li>c</li></ul></ul>"

        assert _emit(html, parser="html.parser") == "- a\n  - b\n  <!-- -->\n  - c"

    def test_lists_split_by_paragraph(self):
        html = "<ul><li>a</li></ul><p>p</p><ul><li>b</li></ul>"

        assert _emit(html) == "- a\n\np\n\n- b"

    def test_nested_ordered_list_numbers_independently(self):
        html = "<ol><li>a<ol><li>b</li><li>c</li></ol></li><li>d</li></ol>"

        assert _emit(html) == "1. a\n   1. b\n   2. c\n2. d"

    def test_bullets_inside_ordered_list_keep_outer_count(self):
        html = '<ol start="5"><li>a<ul><li>b</li></ul></li><li>c</li></ol>'

        assert _emit(html) == "5. a\n   - b\n6. c"


class TestEmitterPreformatted:
    """Test cases for preformatted code blocks."""

    def test_language_from_code_class(self):
        html = '<pre><code class="language-python">x = 1\n</code></pre>'

        assert _emit(html) == "```python\nx = 1\n```"

    def test_language_from_pre_class(self):
        assert _emit('<pre class="lang-js">x</pre>') == "```js\nx\n```"

    def test_whitespace_preserved(self):
        html = "<pre>  indented\n\n\n  *x*</pre>"

        assert _emit(html) == "```\n  indented\n\n\n  *x*\n```"

    def test_fence_widened_for_backticks(self):
        html = "<pre><code>a\n```\nb</code></pre>"

        assert _emit(html) == "````\na\n```\nb\n````"

    def test_line_break_element_in_pre(self):
        assert _emit("<pre>one<br>two</pre>") == "```\none\ntwo\n```"

    def test_empty_pre(self):
        assert _emit("<pre></pre>") == "```\n```"


class TestEmitterTables:
    """Test cases for tables."""

    def test_first_row_is_header(self):
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"

        assert _emit(html) == "| A | B |\n| --- | --- |\n| 1 | 2 |"

    def test_short_rows_are_padded(self):
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>"

        assert _emit(html) == "| a | b |\n| --- | --- |\n| c |  |"

    def test_pipe_and_line_break_in_cell(self):
        html = "<table><tr><td>a|b<br>c</td></tr></table>"

        assert _emit(html) == "| a\\|b<br>c |\n| --- |"

    def test_caption_only(self):
        assert _emit("<table><caption>Only</caption></table>") == "Only"

    def test_empty_table(self):
        assert _emit("<table></table>") == ""

    @pytest.mark.parametrize("value,expected", [
        ("2", 2),
        ("0", 1),
        ("abc", 1),
        ("", 1),
        ("5000", MAX_COLSPAN),
    ])
    def test_colspan_is_clamped(self, value, expected):
        tree = DomTree()
        cell = tree.add_element(DomTree.ROOT, "td", {"colspan": value})

        assert _colspan(tree.node(cell)) == expected


class TestEmitterTreeChecks:
    """Test cases for depth limits and malformed trees."""

    def test_depth_within_limit(self):
        tree = build_nested_tree(150)

        assert MarkdownEmitter(tree).emit() == "deep"

    def test_depth_over_limit_raises(self):
        tree = build_nested_tree(250)

        with pytest.raises(DepthExceededError) as exc_info:
            MarkdownEmitter(tree).emit()

        assert exc_info.value.limit == 200

    def test_custom_depth_limit(self):
        options = ConversionOptions(max_depth=3)

        assert MarkdownEmitter(build_nested_tree(3), options=options).emit() == "deep"
        with pytest.raises(DepthExceededError):
            MarkdownEmitter(build_nested_tree(4), options=options).emit()

    def test_interpreter_recursion_limit_reported_as_depth_error(self):
        """Exhausting the interpreter stack fails like any other depth overflow."""
        options = ConversionOptions(max_depth=1_000_000)

        with pytest.raises(DepthExceededError):
            MarkdownEmitter(build_nested_tree(5000), options=options).emit()

    def test_node_visited_twice_raises(self):
        """Without validation, a shared child is caught during the walk."""
        tree = DomTree.from_nodes(build_shared_child_nodes())

        with pytest.raises(MalformedTreeError) as exc_info:
            MarkdownEmitter(tree).emit()

        assert exc_info.value.node_index == 3
