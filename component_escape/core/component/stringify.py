"""
String codec for component trees.

``stringify_component_tree`` renders a skeleton as the translator-facing
string, e.g. ``<c0>pizza</c0> spaghetti``. ``parse_component_string`` is the
reverse operation, used on the translated string.
"""
import logging
from typing import List

from component_escape.common.tag_format import ComponentTagFormat
from component_escape.core.component.ast import (
    Component,
    Node,
    Root,
    Text,
    is_component_node,
    is_text_node,
)
from component_escape.core.component.exceptions import (
    ClosingTagMismatchError,
    UnbalancedTagsError,
    UndefinedComponentIndexError,
    UnexpectedNodeTypeError,
)

logger = logging.getLogger(__name__)

_TAG_FORMAT = ComponentTagFormat.from_config()


def _render(node: Node, parts: List[str]) -> None:
    if is_text_node(node):
        parts.append(node.value)
        return

    if not is_component_node(node):
        raise UnexpectedNodeTypeError(node)

    index = node.component_index
    if index is None:
        raise UndefinedComponentIndexError("Component index is undefined")

    # the root is never rendered as a tag
    if index < 0:
        for child in node.children or []:
            _render(child, parts)
        return

    if not node.children:
        parts.append(_TAG_FORMAT.create_self_closing(index))
        return

    parts.append(_TAG_FORMAT.create_opening(index))
    for child in node.children:
        _render(child, parts)
    parts.append(_TAG_FORMAT.create_closing(index))


def stringify_component_tree(node: Node) -> str:
    """
    Render a component tree as a placeholder string.

    - text renders as its literal value
    - a component renders as ``<cN>...</cN>``, or ``<cN/>`` when it has no
      children
    - the root (negative index) renders only its children

    Args:
        node: Enumerated component tree; original nodes are ignored

    Returns:
        Translator-facing string

    Raises:
        UndefinedComponentIndexError: If a component was never enumerated
        UnexpectedNodeTypeError: For unknown node objects

    Example:
        >>> tree = Root(children=[Component(component_index=0, children=[Text("pizza")]), Text(" spaghetti")])
        >>> stringify_component_tree(tree)
        '<c0>pizza</c0> spaghetti'
    """
    parts: List[str] = []
    _render(node, parts)
    return "".join(parts)


def _append_child(parent: Component, child: Node) -> None:
    if parent.children is None:
        parent.children = []
    parent.children.append(child)


def parse_component_string(string: str) -> Root:
    """
    Parse a placeholder string back into a bare component tree.

    Single left-to-right scan with an explicit stack of open components,
    starting from a synthetic root.

    Childless components always come back with ``children=None``, whether
    the string holds ``<cN/>`` or ``<cN></cN>``. ``parse(stringify(S)) == S``
    therefore holds for skeletons whose childless components use None;
    a component with ``children=[]`` comes back with None instead.

    Args:
        string: Translated placeholder string

    Returns:
        ``Root`` without original nodes; self-closing tags yield components
        with no children

    Raises:
        ClosingTagMismatchError: If a closing tag does not match the
            innermost open component
        UnbalancedTagsError: If components are left open at the end

    Example:
        >>> parse_component_string("<c0>pizza</c0> spaghetti")
        Root(component_index=-1, children=[Component(component_index=0, children=[Text(value='pizza')], original_nodes=None), Text(value=' spaghetti')], original_nodes=None)
    """
    tree = Root()
    stack: List[Component] = [tree]

    position = 0
    length = len(string)
    while position < length:
        tag = _TAG_FORMAT.find_next(string, position)

        text_end = tag.position if tag is not None else length
        if text_end > position:
            _append_child(stack[-1], Text(string[position:text_end]))

        if tag is None:
            break

        position = tag.end

        if tag.is_closing:
            current_index = stack[-1].component_index
            if current_index != tag.index:
                raise ClosingTagMismatchError(current_index, tag.index, tag.position)
            stack.pop()
            continue

        component = Component(component_index=tag.index)
        _append_child(stack[-1], component)
        if not tag.is_self_closing:
            stack.append(component)

    if len(stack) != 1:
        raise UnbalancedTagsError(stack[-1].component_index, length)

    logger.debug(f"Parsed component string of {length} chars")
    return tree
