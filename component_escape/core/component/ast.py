"""
Component AST data model.

The component AST is the intermediate tree used to escape structural
subtrees of a document as numbered placeholder tags. It has three node
shapes:

- ``Text``: a literal leaf, never split or merged
- ``Component``: stands in for one (or, after flattening, a chain of)
  external tree nodes, kept in ``original_nodes``
- ``Root``: a component with the fixed index ``ROOT_COMPONENT_INDEX``,
  which is never rendered as a tag

External nodes are unist-shaped dictionaries and are treated as opaque
payload, apart from the presence of a ``children`` list.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Union

from component_escape.config import ROOT_COMPONENT_INDEX

UnistNode = Dict[str, Any]


class NodeKind(Enum):
    """Discriminator for component AST nodes."""
    TEXT = "text"
    COMPONENT = "component"


def clone_unist_node(node: UnistNode) -> UnistNode:
    """
    Copy an external node without its children.

    Nodes that have a children list get an empty one, so the copy never
    aliases the (still mutable) external tree.

    Args:
        node: unist-shaped dictionary

    Returns:
        Detached copy of the node

    Example:
        >>> clone_unist_node({"type": "emphasis", "children": [{"type": "text", "value": "x"}]})
        {'type': 'emphasis', 'children': []}
    """
    clone = {key: copy.deepcopy(value) for key, value in node.items() if key != "children"}
    if isinstance(node.get("children"), list):
        clone["children"] = []
    return clone


def copy_original_nodes(nodes: Optional[List[UnistNode]]) -> Optional[List[UnistNode]]:
    if nodes is None:
        return None
    return [copy.deepcopy(node) for node in nodes]


@dataclass
class Text:
    """Literal text leaf."""

    value: str
    kind: ClassVar[NodeKind] = NodeKind.TEXT

    def clone(self) -> 'Text':
        return Text(self.value)


@dataclass
class Component:
    """
    Structural placeholder for one or more external nodes.

    Attributes:
        component_index: Index rendered in the tag, None until enumerated
        children: Child nodes in document order, None for leaf components
        original_nodes: External nodes this component stands in for,
            outermost first; None once detached for transit
    """

    component_index: Optional[int] = None
    children: Optional[List['Node']] = None
    original_nodes: Optional[List[UnistNode]] = None
    kind: ClassVar[NodeKind] = NodeKind.COMPONENT

    @property
    def is_root(self) -> bool:
        return self.component_index is not None and self.component_index < 0

    def clone(self) -> 'Component':
        """Deep structural copy of this component and its subtree."""
        return type(self)(
            component_index=self.component_index,
            children=clone_children(self.children),
            original_nodes=copy_original_nodes(self.original_nodes),
        )


@dataclass
class Root(Component):
    """Top-level component, never rendered as a tag."""

    component_index: int = ROOT_COMPONENT_INDEX
    children: List['Node'] = field(default_factory=list)

    def __post_init__(self):
        if self.children is None:
            self.children = []


Node = Union[Root, Component, Text]


def clone_children(children: Optional[List[Node]]) -> Optional[List[Node]]:
    """Clone a children list, preserving the absent (None) state."""
    if children is None:
        return None
    return [clone_node(child) for child in children]


def clone_node(node: Node) -> Node:
    """
    Deep structural copy of any component AST node.

    Raises:
        TypeError: If the node is not a component AST node
    """
    if isinstance(node, (Text, Component)):
        return node.clone()
    raise TypeError(f"Unexpected node type: {type(node).__name__}")


def is_text_node(node: Any) -> bool:
    """Check whether ``node`` is a component AST text leaf."""
    return isinstance(node, Text) and isinstance(node.value, str)


def is_component_node(node: Any) -> bool:
    """
    Safely recognize a component node.

    Besides the node class, the optional fields are checked for shape:
    ``component_index`` must be an integer, ``children`` and
    ``original_nodes`` must be lists.

    Args:
        node: Any object

    Returns:
        True if ``node`` is a well-formed component

    Example:
        >>> is_component_node(Component(component_index=0, children=[]))
        True
        >>> is_component_node(Text("pizza"))
        False
    """
    if not isinstance(node, Component):
        return False
    index = node.component_index
    if index is not None and (isinstance(index, bool) or not isinstance(index, int)):
        return False
    if node.children is not None and not isinstance(node.children, list):
        return False
    if node.original_nodes is not None and not isinstance(node.original_nodes, list):
        return False
    return True


def iter_components(tree: Node) -> Iterator[Component]:
    """
    Yield every component node in pre-order, depth-first.

    The tree is only read, never modified. Traversal uses an explicit
    stack, so arbitrarily deep trees (e.g. parsed from untrusted strings)
    are safe to walk.
    """
    stack = [tree]
    while stack:
        node = stack.pop()
        if not is_component_node(node):
            continue
        yield node
        stack.extend(reversed(node.children or []))
