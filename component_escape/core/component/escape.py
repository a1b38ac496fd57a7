"""
Escaping of external tree nodes into component data.

``to_components`` swaps every node the caller cares about for component tags
(as HTML nodes) and returns the per-component data needed to restore it.
``from_components`` performs the reverse after translation, tolerating
missing, unknown and interleaved tags.
"""
from typing import Any, Callable, List, Optional, Sequence, Tuple

from component_escape.core.component.ast import UnistNode, clone_unist_node
from component_escape.core.component.html_representation import (
    component_nodes_to_html_nodes,
    component_tag_nodes,
    html_nodes_to_component_nodes,
    is_embedded_component,
    make_component_node,
)

NodeToData = Callable[[UnistNode], Optional[Any]]
DataToNode = Callable[[Any], UnistNode]


def to_components(tree: UnistNode, map_node_to_component_data: NodeToData) -> Tuple[UnistNode, List[Any]]:
    """
    Escape mapped nodes of a unist tree as component tags.

    Args:
        tree: External tree; its top-level node is never escaped
        map_node_to_component_data: Returns the data needed to rebuild a
            node, or None to keep the node as it is

    Returns:
        Tuple of (escaped_tree, components) where ``components[i]`` is the
        data for tag ``<ci>``, in pre-order

    Example:
        >>> tree = {"type": "root", "children": [{"type": "wrapping", "children": [{"type": "text", "value": "x"}]}]}
        >>> escaped, components = to_components(tree, lambda n: {"type": n["type"]} if n["type"] == "wrapping" else None)
        >>> [child["value"] for child in escaped["children"] if child["type"] == "html"]
        ['<c0>', '</c0>']
    """
    components: List[Any] = []

    def escape_node(node: UnistNode) -> UnistNode:
        data = map_node_to_component_data(node)
        children = node.get("children")

        if data is None:
            clone = clone_unist_node(node)
            if isinstance(children, list):
                clone["children"] = [escape_node(child) for child in children]
            return clone

        index = len(components)
        components.append(data)
        escaped_children = [escape_node(child) for child in children] if isinstance(children, list) else []
        return make_component_node(index, escaped_children)

    with_components = clone_unist_node(tree)
    if isinstance(tree.get("children"), list):
        with_components["children"] = [escape_node(child) for child in tree["children"]]

    return component_nodes_to_html_nodes(with_components), components


def from_components(
    tree: UnistNode,
    components: Sequence[Any],
    map_component_data_to_node: DataToNode
) -> UnistNode:
    """
    Restore nodes escaped by ``to_components``.

    Tags may be reordered by the translator. Components whose index has no
    data, and tags that cannot be paired, are left as HTML nodes.

    Args:
        tree: Parsed translated tree containing component HTML nodes
        components: Data list returned by ``to_components``
        map_component_data_to_node: Builds an (empty) node from its data

    Returns:
        New tree with the original nodes restored
    """
    def restore(node: UnistNode) -> List[UnistNode]:
        children = node.get("children")
        restored_children = None
        if isinstance(children, list):
            restored_children = [restored for child in children for restored in restore(child)]

        if not is_embedded_component(node):
            clone = clone_unist_node(node)
            if restored_children is not None:
                clone["children"] = restored_children
            return [clone]

        index = node["componentIndex"]
        if not 0 <= index < len(components):
            return component_tag_nodes(index, restored_children or [])

        restored = clone_unist_node(map_component_data_to_node(components[index]))
        if isinstance(restored.get("children"), list):
            restored["children"] = restored_children or []
            return [restored]
        # a leaf cannot hold the translated text, keep it next to the node
        return [restored, *(restored_children or [])]

    collapsed = html_nodes_to_component_nodes(tree)
    return restore(collapsed)[0]
