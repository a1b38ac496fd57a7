"""
Mapping between external unist trees and the component AST.

The generic mappers walk the tree top-down and delegate the classification
of each node to a caller-supplied function. ``map_mdast_node`` and
``unmap_mdast_node`` are the classification pair for markdown (mdast) trees.
"""
from typing import Callable

from component_escape.core.component.ast import (
    Component,
    Node,
    Text,
    UnistNode,
    clone_unist_node,
    is_component_node,
    is_text_node,
)
from component_escape.core.component.exceptions import (
    MissingOriginalNodesError,
    OriginalNodeCountError,
    UnexpectedNodeTypeError,
)

MapFunction = Callable[[UnistNode], Node]
UnmapFunction = Callable[[Node], UnistNode]


def map_mdast_node(node: UnistNode) -> Node:
    """
    Classify a markdown node.

    - nodes with children become components with an empty children list
      (filled in by the tree mapper)
    - text leaves pass through as text
    - any other leaf (html, inlineCode, image, ...) becomes a childless
      component, rendered later as a self-closing tag
    """
    if "children" in node:
        return Component(original_nodes=[node], children=[])
    if node.get("type") == "text":
        return Text(node.get("value", ""))
    return Component(original_nodes=[node])


def unmap_mdast_node(node: Node) -> UnistNode:
    """
    Convert a component AST node back to a markdown node.

    Raises:
        MissingOriginalNodesError: If the component payload was not injected
        OriginalNodeCountError: If the component was not unflattened
        UnexpectedNodeTypeError: For unknown node objects
    """
    if is_text_node(node):
        return {"type": "text", "value": node.value}

    if not is_component_node(node):
        raise UnexpectedNodeTypeError(node)

    if node.original_nodes is None:
        raise MissingOriginalNodesError(node.component_index)

    if len(node.original_nodes) != 1:
        raise OriginalNodeCountError(len(node.original_nodes), node.component_index)

    return node.original_nodes[0]


def map_to_component_ast(tree: UnistNode, map_function: MapFunction) -> Node:
    """
    Build a component AST from an external tree.

    Each external node is classified by ``map_function``. Original nodes are
    stored as detached copies without their children. When the external node
    has children, they are mapped recursively into the component's children.

    Args:
        tree: External root node
        map_function: Classification function, e.g. ``map_mdast_node``

    Returns:
        The mapped tree, normally a ``Component``

    Raises:
        UnexpectedNodeTypeError: If ``map_function`` returns something that
            is not a component AST node
    """
    mapped = map_function(tree)

    if is_text_node(mapped):
        return Text(mapped.value)

    if not is_component_node(mapped):
        raise UnexpectedNodeTypeError(mapped)

    original_nodes = None
    if mapped.original_nodes is not None:
        original_nodes = [clone_unist_node(original) for original in mapped.original_nodes]

    children = mapped.children
    if isinstance(tree.get("children"), list):
        children = [map_to_component_ast(child, map_function) for child in tree["children"]]
    elif children is not None:
        children = [child.clone() for child in children]

    return type(mapped)(
        component_index=mapped.component_index,
        children=children,
        original_nodes=original_nodes,
    )


def map_from_component_ast(tree: Node, map_function: UnmapFunction) -> UnistNode:
    """
    Reconstruct an external tree from a component AST.

    Structural inverse of ``map_to_component_ast``: every node is converted
    by ``map_function`` and, for components with children, the converted
    node's children are replaced by the recursively unmapped children.

    Args:
        tree: Unflattened component AST with payload injected
        map_function: Inverse classification, e.g. ``unmap_mdast_node``

    Returns:
        New external tree; the component AST is not modified
    """
    external = clone_unist_node(map_function(tree))
    if is_component_node(tree) and tree.children is not None:
        external["children"] = [map_from_component_ast(child, map_function) for child in tree.children]
    return external
