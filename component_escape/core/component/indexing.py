"""
Component index assignment.

Indices are assigned pre-order, depth-first: the root gets
``ROOT_COMPONENT_INDEX`` and every other component the next integer
starting at 0. The counter is threaded through the traversal, so the
function is reentrant.
"""
from typing import Tuple

from component_escape.config import ROOT_COMPONENT_INDEX
from component_escape.core.component.ast import (
    Component,
    Node,
    Root,
    clone_node,
    copy_original_nodes,
    is_component_node,
)
from component_escape.core.component.exceptions import UnexpectedNodeTypeError


def _enumerate_subtree(node: Node, next_index: int) -> Tuple[Node, int]:
    if not is_component_node(node):
        return clone_node(node), next_index

    component_index = next_index
    next_index += 1

    children = None
    if node.children is not None:
        children = []
        for child in node.children:
            enumerated, next_index = _enumerate_subtree(child, next_index)
            children.append(enumerated)

    enumerated_node = Component(
        component_index=component_index,
        children=children,
        original_nodes=copy_original_nodes(node.original_nodes),
    )
    return enumerated_node, next_index


def enumerate_components(tree: Component) -> Root:
    """
    Assign component indices to a tree.

    Args:
        tree: Component AST, typically fresh from the tree mapper

    Returns:
        New ``Root`` with index -1; descendants numbered 0, 1, 2, ...
        in pre-order. Text nodes are never indexed.

    Example:
        >>> root = enumerate_components(Component(children=[Component(children=[])]))
        >>> root.component_index, root.children[0].component_index
        (-1, 0)
    """
    if not is_component_node(tree):
        raise UnexpectedNodeTypeError(tree)

    children = []
    next_index = 0
    for child in tree.children or []:
        enumerated, next_index = _enumerate_subtree(child, next_index)
        children.append(enumerated)

    return Root(
        component_index=ROOT_COMPONENT_INDEX,
        children=children,
        original_nodes=copy_original_nodes(tree.original_nodes),
    )
