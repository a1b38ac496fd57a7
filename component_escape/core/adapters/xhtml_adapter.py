"""
XHTML adapter for component escaping.

Converts lxml elements to and from unist-shaped (hast-like) trees so that
inline XHTML markup can go through the same escape pipeline as markdown:

    <p>Hello <b>World</b></p>  ->  "Hello <c0>World</c0>"
"""
import logging
from typing import Any, List, Optional, Tuple

from lxml import etree

from component_escape.config import EscapeConfig
from component_escape.core.component.ast import Component, Node, Text, UnistNode
from component_escape.core.component.exceptions import MarkupParsingError
from component_escape.core.component.mapping import unmap_mdast_node
from component_escape.core.pipeline import EscapedString, escape_tree, restore_translation

logger = logging.getLogger(__name__)

ELEMENT = "element"
TEXT = "text"
COMMENT = "comment"
INSTRUCTION = "instruction"


def _text_node(value: str) -> UnistNode:
    return {"type": TEXT, "value": value}


def _convert_child(child: Any) -> UnistNode:
    if isinstance(child, etree._Comment):
        return {"type": COMMENT, "value": child.text or ""}
    if isinstance(child, etree._ProcessingInstruction):
        return {"type": INSTRUCTION, "target": child.target, "value": child.text or ""}
    return element_to_tree(child, include_namespaces=False)


def element_to_tree(element: etree._Element, include_namespaces: bool = True) -> UnistNode:
    """
    Convert an lxml element into a hast-like dictionary tree.

    Text and tail content become ``text`` nodes in document order. The
    element's own tail is not part of the result.

    Args:
        element: lxml element
        include_namespaces: Store the element's namespace map, used on the
            top-level element so prefixes survive reconstruction

    Returns:
        ``{"type": "element", "tagName": ..., "properties": {...}, "children": [...]}``
    """
    children: List[UnistNode] = []
    if element.text:
        children.append(_text_node(element.text))

    for child in element:
        children.append(_convert_child(child))
        if child.tail:
            children.append(_text_node(child.tail))

    node: UnistNode = {
        "type": ELEMENT,
        "tagName": element.tag,
        "properties": dict(element.attrib),
        "children": children,
    }
    if include_namespaces and element.nsmap:
        node["namespaces"] = dict(element.nsmap)
    return node


def _append_children(element: etree._Element, children: List[UnistNode]) -> None:
    last: Optional[etree._Element] = None
    for child in children:
        node_type = child.get("type")

        if node_type == TEXT:
            if last is None:
                element.text = (element.text or "") + child.get("value", "")
            else:
                last.tail = (last.tail or "") + child.get("value", "")
            continue

        if node_type == ELEMENT:
            last = etree.SubElement(element, child["tagName"], attrib=child.get("properties") or {})
            _append_children(last, child.get("children") or [])
        elif node_type == COMMENT:
            last = etree.Comment(child.get("value", ""))
            element.append(last)
        elif node_type == INSTRUCTION:
            last = etree.ProcessingInstruction(child["target"], child.get("value") or None)
            element.append(last)
        else:
            raise ValueError(f"Unsupported node type for XHTML: {node_type}")


def tree_to_element(tree: UnistNode) -> etree._Element:
    """
    Rebuild an lxml element from a tree produced by ``element_to_tree``.

    Raises:
        ValueError: If the tree is not an element or contains unknown nodes
    """
    if tree.get("type") != ELEMENT:
        raise ValueError(f"Expected an element node, got: {tree.get('type')}")
    element = etree.Element(
        tree["tagName"],
        attrib=tree.get("properties") or {},
        nsmap=tree.get("namespaces") or None,
    )
    _append_children(element, tree.get("children") or [])
    return element


def map_hast_node(node: UnistNode) -> Node:
    """
    Classify an XHTML tree node.

    Elements become components (childless elements render self-closing),
    text stays text, comments and processing instructions become leaf
    components.
    """
    if node.get("type") == TEXT:
        return Text(node.get("value", ""))
    if "children" in node:
        return Component(original_nodes=[node], children=[])
    return Component(original_nodes=[node])


def unmap_hast_node(node: Node) -> UnistNode:
    """Convert a component AST node back to an XHTML tree node."""
    return unmap_mdast_node(node)


def parse_xhtml_fragment(markup: str) -> etree._Element:
    """
    Parse a single-rooted XHTML fragment.

    Raises:
        MarkupParsingError: If lxml rejects the markup
    """
    parser = etree.XMLParser(remove_blank_text=False)
    try:
        return etree.fromstring(markup.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise MarkupParsingError(
            f"Failed to parse XHTML fragment: {e}",
            original_error=e,
            content_preview=markup[:200]
        ) from e


def escape_xhtml_fragment(
    markup: str,
    config: Optional[EscapeConfig] = None
) -> Tuple[EscapedString, UnistNode]:
    """
    Escape an XHTML fragment for translation.

    Args:
        markup: Fragment with a single root element, e.g. "<p>Hi <b>x</b></p>"
        config: Pipeline options

    Returns:
        Tuple of (escaped_string, source_tree); keep the source tree for
        ``restore_xhtml_fragment``
    """
    source_tree = element_to_tree(parse_xhtml_fragment(markup))
    escaped = escape_tree(source_tree, map_hast_node, config)
    logger.debug(f"Escaped XHTML fragment <{source_tree['tagName']}> into: {escaped.text!r}")
    return escaped, source_tree


def restore_xhtml_fragment(
    translated: str,
    escaped: EscapedString,
    source_tree: UnistNode,
    config: Optional[EscapeConfig] = None
) -> str:
    """
    Rebuild XHTML markup from a translated placeholder string.

    Malformed translations fall back to the source markup (see
    ``restore_translation``).

    Returns:
        Serialized XHTML fragment
    """
    result = restore_translation(translated, escaped, source_tree, unmap_hast_node, config)
    return etree.tostring(tree_to_element(result.tree), encoding="unicode")
