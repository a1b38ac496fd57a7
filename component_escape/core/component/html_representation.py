"""
Representation of components as raw HTML nodes inside an external tree.

Markdown parsers read a placeholder such as ``<c0>`` as an inline ``html``
node. These helpers convert between component nodes embedded in a unist tree
(``{"type": "component", "componentIndex": 0, "children": [...]}``) and that
flat HTML form, where the opening tag, the children and the closing tag are
siblings.

The back-conversion is lenient: translated text is untrusted, so unmatched
or interleaved tags are left as HTML instead of raising.
"""
from typing import List, Optional, Tuple

from component_escape.common.tag_format import ComponentTag, ComponentTagFormat
from component_escape.core.component.ast import UnistNode, clone_unist_node

COMPONENT_NODE_TYPE = "component"
HTML_NODE_TYPE = "html"

_TAG_FORMAT = ComponentTagFormat.from_config()


def make_component_node(index: int, children: Optional[List[UnistNode]] = None) -> UnistNode:
    """Create a component node for embedding in a unist tree."""
    return {"type": COMPONENT_NODE_TYPE, "componentIndex": index, "children": list(children or [])}


def is_embedded_component(node: UnistNode) -> bool:
    return node.get("type") == COMPONENT_NODE_TYPE and isinstance(node.get("componentIndex"), int)


def _html(value: str) -> UnistNode:
    return {"type": HTML_NODE_TYPE, "value": value}


def component_tag_nodes(index: int, children: List[UnistNode]) -> List[UnistNode]:
    """
    HTML siblings standing for one component.

    Returns:
        ``[<cN/>]`` when there are no children, otherwise
        ``[<cN>, *children, </cN>]``
    """
    if not children:
        return [_html(_TAG_FORMAT.create_self_closing(index))]
    return [_html(_TAG_FORMAT.create_opening(index)), *children, _html(_TAG_FORMAT.create_closing(index))]


def _expand(node: UnistNode) -> List[UnistNode]:
    children = node.get("children")
    expanded_children = None
    if isinstance(children, list):
        expanded_children = [expanded for child in children for expanded in _expand(child)]

    if is_embedded_component(node):
        return component_tag_nodes(node["componentIndex"], expanded_children or [])

    clone = clone_unist_node(node)
    if expanded_children is not None:
        clone["children"] = expanded_children
    return [clone]


def component_nodes_to_html_nodes(tree: UnistNode) -> UnistNode:
    """
    Replace embedded component nodes by HTML tag nodes.

    The top-level node itself is kept; components anywhere below it are
    expanded into opening tag, children and closing tag siblings.

    Args:
        tree: unist tree containing component nodes

    Returns:
        New tree; the input is not modified

    Example:
        root[component#0[text "a"]] becomes root[html "<c0>", text "a", html "</c0>"]
    """
    clone = clone_unist_node(tree)
    children = tree.get("children")
    if isinstance(children, list):
        clone["children"] = [expanded for child in children for expanded in _expand(child)]
    return clone


def _parse_html_tag(node: UnistNode) -> Optional[ComponentTag]:
    if node.get("type") != HTML_NODE_TYPE or not isinstance(node.get("value"), str):
        return None
    return _TAG_FORMAT.parse(node["value"])


def _collapse_siblings(siblings: List[UnistNode]) -> List[UnistNode]:
    output: List[UnistNode] = []
    # (component index, position of the opening tag in output)
    open_tags: List[Tuple[int, int]] = []

    for sibling in siblings:
        node = html_nodes_to_component_nodes(sibling)
        tag = _parse_html_tag(node)

        if tag is None:
            output.append(node)
            continue

        if tag.is_self_closing:
            output.append(make_component_node(tag.index))
            continue

        if not tag.is_closing:
            open_tags.append((tag.index, len(output)))
            output.append(node)
            continue

        match = None
        for position in range(len(open_tags) - 1, -1, -1):
            if open_tags[position][0] == tag.index:
                match = position
                break

        if match is None:
            output.append(node)
            continue

        index, start = open_tags[match]
        children = output[start + 1:]
        del output[start:]
        # openers between the match and here stay inside as plain HTML
        del open_tags[match:]
        output.append(make_component_node(index, children))

    return output


def html_nodes_to_component_nodes(tree: UnistNode) -> UnistNode:
    """
    Rebuild component nodes from HTML tag nodes.

    Within each children list, a closing tag is paired with the most recent
    still-open opening tag with the same index; everything between them
    becomes the component's children. Self-closing tags become components
    with no children. Unmatched tags and other HTML are kept unchanged.

    Args:
        tree: unist tree, typically parsed from a translated string

    Returns:
        New tree; never raises on malformed tags

    Example:
        root[html "<c0>", text "a", html "</c1>"] is returned unchanged,
        root[html "<c0>", text "a", html "</c0>"] becomes root[component#0[text "a"]]
    """
    clone = clone_unist_node(tree)
    children = tree.get("children")
    if isinstance(children, list):
        clone["children"] = _collapse_siblings(children)
    return clone
