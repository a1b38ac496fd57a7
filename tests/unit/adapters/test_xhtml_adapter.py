"""Unit tests for the lxml XHTML adapter."""

import pytest
from lxml import etree

from component_escape.config import EscapeConfig
from component_escape.core.adapters.xhtml_adapter import (
    element_to_tree,
    escape_xhtml_fragment,
    map_hast_node,
    parse_xhtml_fragment,
    restore_xhtml_fragment,
    tree_to_element,
    unmap_hast_node,
)
from component_escape.core.component.ast import Component, Text
from component_escape.core.component.exceptions import (
    ClosingTagMismatchError,
    MarkupParsingError,
    OriginalNodeCountError,
)

XHTML_NS = "http://www.w3.org/1999/xhtml"
FLAT = EscapeConfig(flatten=True, fallback_to_source=True)
STRICT = EscapeConfig(flatten=True, fallback_to_source=False)


class TestElementToTree:
    """Test converting lxml elements to dictionary trees."""

    def test_text_and_tail(self):
        """Text and tails become text nodes in document order."""
        element = etree.fromstring("<p>Hello <b>World</b>!</p>")

        tree = element_to_tree(element)

        assert tree == {
            "type": "element",
            "tagName": "p",
            "properties": {},
            "children": [
                {"type": "text", "value": "Hello "},
                {"type": "element", "tagName": "b", "properties": {}, "children": [
                    {"type": "text", "value": "World"},
                ]},
                {"type": "text", "value": "!"},
            ],
        }

    def test_attributes(self):
        """Attributes are kept as properties."""
        element = etree.fromstring('<p><a href="x.html" class="link">a</a></p>')

        tree = element_to_tree(element)

        assert tree["children"][0]["properties"] == {"href": "x.html", "class": "link"}

    def test_comment_and_instruction(self):
        """Comments and processing instructions are converted."""
        element = etree.fromstring("<p>a<!-- note --><?page 4?>b</p>")

        children = element_to_tree(element)["children"]

        assert children[1] == {"type": "comment", "value": " note "}
        assert children[2] == {"type": "instruction", "target": "page", "value": "4"}
        assert children[3] == {"type": "text", "value": "b"}

    def test_namespaces_on_top_element_only(self):
        """Only the top-level element records its namespace map."""
        element = etree.fromstring(f'<p xmlns="{XHTML_NS}">a <b>b</b></p>')

        tree = element_to_tree(element)

        assert tree["namespaces"] == {None: XHTML_NS}
        assert tree["tagName"] == f"{{{XHTML_NS}}}p"
        assert "namespaces" not in tree["children"][1]


class TestTreeToElement:
    """Test rebuilding lxml elements."""

    @pytest.mark.parametrize("markup", [
        "<p>Hello <b>World</b>!</p>",
        '<p>See <a href="x.html">this <i>page</i></a> now<br/></p>',
        "<p>a<!-- note -->b<?page 4?>c</p>",
        f'<p xmlns="{XHTML_NS}">a <b>b</b></p>',
        "<div><p>one</p><p>two</p></div>",
    ])
    def test_round_trip(self, markup):
        """Converting to a tree and back reproduces the markup."""
        element = etree.fromstring(markup)

        rebuilt = tree_to_element(element_to_tree(element))

        assert etree.tostring(rebuilt, encoding="unicode") == etree.tostring(element, encoding="unicode")

    def test_rejects_non_element(self):
        """The top-level node must be an element."""
        with pytest.raises(ValueError):
            tree_to_element({"type": "text", "value": "x"})

    def test_rejects_unknown_child(self):
        """Unknown child nodes cannot be serialized."""
        tree = {"type": "element", "tagName": "p", "properties": {}, "children": [{"type": "html", "value": "<c0>"}]}

        with pytest.raises(ValueError, match="Unsupported node type"):
            tree_to_element(tree)


class TestHastMapping:
    """Test node classification for XHTML trees."""

    def test_element(self):
        """Elements become components with children."""
        node = {"type": "element", "tagName": "b", "properties": {}, "children": []}

        assert map_hast_node(node) == Component(original_nodes=[node], children=[])

    def test_text(self):
        """Text stays text."""
        assert map_hast_node({"type": "text", "value": "x"}) == Text("x")

    def test_comment(self):
        """Comments are leaf components."""
        mapped = map_hast_node({"type": "comment", "value": "x"})

        assert mapped.children is None

    def test_unmap_requires_single_node(self):
        """Unflattening must happen before unmapping."""
        with pytest.raises(OriginalNodeCountError):
            unmap_hast_node(Component(original_nodes=[{"type": "element"}, {"type": "element"}]))


class TestParseXhtmlFragment:
    """Test fragment parsing."""

    def test_parse(self):
        """Well-formed markup parses."""
        assert parse_xhtml_fragment("<p>x</p>").tag == "p"

    def test_malformed(self):
        """Parse errors are wrapped."""
        with pytest.raises(MarkupParsingError) as exc_info:
            parse_xhtml_fragment("<p>unclosed <b>x</p>")

        assert isinstance(exc_info.value.original_error, etree.XMLSyntaxError)
        assert exc_info.value.content_preview == "<p>unclosed <b>x</p>"


class TestEscapeXhtmlFragment:
    """Test escaping and restoring XHTML fragments."""

    def test_escape(self):
        """Inline elements become component tags."""
        escaped, source_tree = escape_xhtml_fragment("<p>Hello <b>World</b></p>", FLAT)

        assert escaped.text == "Hello <c0>World</c0>"
        assert source_tree["tagName"] == "p"

    def test_void_element(self):
        """Empty elements become self-closing tags."""
        escaped, _ = escape_xhtml_fragment("<p>line<br/>break</p>", FLAT)

        assert escaped.text == "line<c0/>break"

    def test_single_child_chain(self):
        """Nested single-child elements collapse into the root."""
        escaped, _ = escape_xhtml_fragment('<p><a href="x"><b>link</b></a></p>', FLAT)

        assert escaped.text == "link"

    def test_restore_translation(self):
        """Translated text and reordered tags are restored."""
        escaped, source_tree = escape_xhtml_fragment("<p>Hello <b>World</b></p>", FLAT)

        result = restore_xhtml_fragment("<c0>Welt</c0>, hallo", escaped, source_tree, FLAT)

        assert result == "<p><b>Welt</b>, hallo</p>"

    def test_restore_collapsed_chain(self):
        """Collapsed elements are rebuilt around the translation."""
        escaped, source_tree = escape_xhtml_fragment('<p><a href="x"><b>link</b></a></p>', FLAT)

        result = restore_xhtml_fragment("Verweis", escaped, source_tree, FLAT)

        assert result == '<p><a href="x"><b>Verweis</b></a></p>'

    def test_restore_keeps_namespace(self):
        """The default namespace survives the round trip."""
        markup = f'<p xmlns="{XHTML_NS}">Hello <i>World</i></p>'
        escaped, source_tree = escape_xhtml_fragment(markup, FLAT)

        result = restore_xhtml_fragment(escaped.text, escaped, source_tree, FLAT)

        assert result == markup

    def test_restore_fallback(self):
        """A malformed translation returns the source markup."""
        escaped, source_tree = escape_xhtml_fragment("<p>Hello <b>World</b></p>", FLAT)

        result = restore_xhtml_fragment("<c0>Welt", escaped, source_tree, FLAT)

        assert result == "<p>Hello <b>World</b></p>"

    def test_restore_strict(self):
        """Without fallback malformed translations raise."""
        escaped, source_tree = escape_xhtml_fragment("<p>Hello <b>World</b></p>", STRICT)

        with pytest.raises(ClosingTagMismatchError):
            restore_xhtml_fragment("<c0>Welt</c1>", escaped, source_tree, STRICT)
