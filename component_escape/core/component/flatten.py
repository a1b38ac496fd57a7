"""
Flattening and unflattening of component chains.

A chain of components where each level has exactly one component child is
collapsed into a single component that remembers every absorbed original
node, outermost first. This keeps the escaped string shallow: ``<c0>x</c0>``
instead of ``<c0><c1><c2>x</c2></c1></c0>``.

Unflattening is the exact inverse on the ``original_nodes`` chain. Indices of
absorbed components are not restored, since they never appear on the wire.
"""
from typing import List, Optional

from component_escape.core.component.ast import (
    Component,
    Node,
    UnistNode,
    clone_node,
    copy_original_nodes,
    is_component_node,
)
from component_escape.core.component.exceptions import MissingOriginalNodesError


def _has_single_component_child(children: Optional[List[Node]]) -> bool:
    return children is not None and len(children) == 1 and is_component_node(children[0])


def _flatten_node(node: Node) -> Node:
    if not is_component_node(node):
        return clone_node(node)

    if node.original_nodes is None:
        raise MissingOriginalNodesError(node.component_index)

    original_nodes: List[UnistNode] = list(node.original_nodes)
    children = node.children

    # absorb the whole chain before descending
    while _has_single_component_child(children):
        child = children[0]
        # the root is never rendered, a leaf absorbed into it would vanish
        if node.is_root and child.children is None:
            break
        if child.original_nodes is None:
            raise MissingOriginalNodesError(child.component_index)
        original_nodes.extend(child.original_nodes)
        children = child.children

    flat_children = None
    if children is not None:
        flat_children = [_flatten_node(child) for child in children]

    return type(node)(
        component_index=node.component_index,
        children=flat_children,
        original_nodes=copy_original_nodes(original_nodes),
    )


def flatten_component_tree(tree: Component) -> Component:
    """
    Collapse single-child component chains.

    Chains of any depth collapse completely in one call. A component with
    no children, with a text child, or with two or more children is left
    as it is (its children are still visited). The root never absorbs a
    leaf component, so leaves always stay visible as self-closing tags.

    Args:
        tree: Component AST where every component carries ``original_nodes``

    Returns:
        New flattened tree; the input is not modified

    Raises:
        MissingOriginalNodesError: If a visited component has no original nodes

    Example:
        root -> paragraph -> emphasis -> text("x") becomes a single
        component with original nodes [root, paragraph, emphasis] and
        children [text("x")].
    """
    return _flatten_node(tree)


def _unflatten_node(node: Node) -> Node:
    if not is_component_node(node):
        return clone_node(node)

    if node.original_nodes is None:
        raise MissingOriginalNodesError(node.component_index)

    original_nodes = copy_original_nodes(node.original_nodes)
    children = node.children

    # peel the innermost original node off into a wrapping child
    while len(original_nodes) > 1:
        children = [Component(children=children, original_nodes=[original_nodes.pop()])]

    if children is not None:
        children = [_unflatten_node(child) for child in children]

    return type(node)(
        component_index=node.component_index,
        children=children,
        original_nodes=original_nodes,
    )


def unflatten_component_tree(tree: Component) -> Component:
    """
    Split components holding several original nodes back into chains.

    Inverse of ``flatten_component_tree``: a component with original nodes
    [a, b, c] becomes a -> b -> c, the innermost wrapping the original
    children. Components created this way have no index.

    Args:
        tree: Component AST with payload injected

    Returns:
        New tree where every component holds exactly one original node

    Raises:
        MissingOriginalNodesError: If a visited component has no original nodes
    """
    return _unflatten_node(tree)
