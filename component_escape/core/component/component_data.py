"""
Detachment and reattachment of component payloads.

The original external nodes are heavyweight and type-specific. They are
pulled out of the tree into a ``ComponentData`` map keyed by component
index, so that only the lightweight skeleton (indices and text) travels to
translators. After translation the payload is injected back by index.
"""
from typing import Dict, List

from component_escape.core.component.ast import (
    Node,
    UnistNode,
    clone_node,
    copy_original_nodes,
    is_component_node,
    iter_components,
)
from component_escape.core.component.exceptions import (
    MissingComponentDataError,
    MissingOriginalNodesError,
    UndefinedComponentIndexError,
)

ComponentData = Dict[int, List[UnistNode]]


def extract_component_data(tree: Node) -> ComponentData:
    """
    Collect the original nodes of every component, keyed by index.

    Args:
        tree: Enumerated (and usually flattened) component AST

    Returns:
        Mapping of component index to its list of original nodes. The tree
        itself keeps its payload.

    Raises:
        UndefinedComponentIndexError: If a component was never enumerated
        MissingOriginalNodesError: If a component has no original nodes

    Example:
        >>> data = extract_component_data(Root(original_nodes=[{"type": "root", "children": []}]))
        >>> data[-1]
        [{'type': 'root', 'children': []}]
    """
    data: ComponentData = {}
    for component in iter_components(tree):
        if component.component_index is None:
            raise UndefinedComponentIndexError("Component index is undefined")
        if component.original_nodes is None:
            raise MissingOriginalNodesError(component.component_index)
        data[component.component_index] = copy_original_nodes(component.original_nodes)
    return data


def strip_component_data(tree: Node) -> Node:
    """
    Return a bare skeleton: a copy of ``tree`` without any original nodes.
    """
    if not is_component_node(tree):
        return clone_node(tree)
    children = None
    if tree.children is not None:
        children = [strip_component_data(child) for child in tree.children]
    return type(tree)(component_index=tree.component_index, children=children)


def inject_component_data(tree: Node, component_data: ComponentData) -> Node:
    """
    Reattach original nodes to a skeleton by component index.

    A component index may appear several times in the skeleton (e.g. when a
    translator duplicated a tag); each occurrence gets its own copy.

    Args:
        tree: Skeleton, typically from ``parse_component_string``
        component_data: Map produced by ``extract_component_data``

    Returns:
        New tree with payload attached; the skeleton is not modified

    Raises:
        UndefinedComponentIndexError: If a component has no index
        MissingComponentDataError: If the map has no entry for an index
    """
    if not is_component_node(tree):
        return clone_node(tree)

    index = tree.component_index
    if index is None:
        raise UndefinedComponentIndexError()
    if index not in component_data:
        raise MissingComponentDataError(index)

    children = None
    if tree.children is not None:
        children = [inject_component_data(child, component_data) for child in tree.children]

    return type(tree)(
        component_index=index,
        children=children,
        original_nodes=copy_original_nodes(component_data[index]),
    )
