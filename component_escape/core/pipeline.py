"""
Escape pipeline: external tree to placeholder string and back.

Forward direction:
    map -> enumerate -> flatten -> extract payload -> strip -> stringify

Reverse direction (after translation):
    parse -> inject payload -> unflatten -> unmap

Malformed translated strings are contained per string by
``restore_translation``: the caller gets the untranslated source back
instead of losing the whole batch.
"""
import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from component_escape.config import MAX_RESTORED_DEPTH, EscapeConfig
from component_escape.core.component.ast import Root, UnistNode, is_component_node
from component_escape.core.component.component_data import (
    ComponentData,
    extract_component_data,
    inject_component_data,
    strip_component_data,
)
from component_escape.core.component.exceptions import (
    ComponentStringError,
    InvalidTreeStateError,
    NestingTooDeepError,
    UnknownComponentIndexError,
)
from component_escape.core.component.flatten import flatten_component_tree, unflatten_component_tree
from component_escape.core.component.indexing import enumerate_components
from component_escape.core.component.mapping import (
    MapFunction,
    UnmapFunction,
    map_from_component_ast,
    map_mdast_node,
    map_to_component_ast,
    unmap_mdast_node,
)
from component_escape.core.component.stringify import parse_component_string, stringify_component_tree

logger = logging.getLogger(__name__)


@dataclass
class EscapedString:
    """
    Translator-facing string plus the payload needed to restore it.

    Attributes:
        text: Placeholder string, e.g. "<c0>pizza</c0> spaghetti"
        component_data: Original nodes keyed by component index; stays in
            memory, the caller serializes it if it must cross a process
    """
    text: str
    component_data: ComponentData = field(default_factory=dict)

    @property
    def component_indices(self) -> List[int]:
        """Indices rendered as tags (the root is excluded)."""
        return sorted(index for index in self.component_data if index >= 0)


@dataclass
class RestoreResult:
    """
    Outcome of restoring one translated string.

    Attributes:
        tree: Reconstructed external tree, or a copy of the source tree
        fallback_used: True if the translation was rejected
        error: The parse error that caused the fallback, if any
    """
    tree: UnistNode
    fallback_used: bool = False
    error: Optional[ComponentStringError] = None


def escape_tree(
    tree: UnistNode,
    map_function: MapFunction = map_mdast_node,
    config: Optional[EscapeConfig] = None
) -> EscapedString:
    """
    Escape an external tree into a placeholder string.

    Args:
        tree: External root node (e.g. an mdast root)
        map_function: Node classification, defaults to markdown
        config: Pipeline options, defaults to environment settings

    Returns:
        EscapedString with the text and the detached payload

    Example:
        >>> mdast = {"type": "root", "children": [{"type": "paragraph", "children": [
        ...     {"type": "emphasis", "children": [{"type": "text", "value": "pizza"}]},
        ...     {"type": "text", "value": " spaghetti"}]}]}
        >>> escape_tree(mdast).text
        '<c1>pizza</c1> spaghetti'
    """
    config = config or EscapeConfig()

    component_tree = map_to_component_ast(tree, map_function)
    if not is_component_node(component_tree):
        raise InvalidTreeStateError("Tree root must map to a component")

    component_tree = enumerate_components(component_tree)
    if config.flatten:
        component_tree = flatten_component_tree(component_tree)

    component_data = extract_component_data(component_tree)
    text = stringify_component_tree(strip_component_data(component_tree))

    logger.debug(f"Escaped tree into {len(text)} chars with {len(component_data)} components")
    return EscapedString(text=text, component_data=component_data)


def _check_skeleton(skeleton: Root, component_data: ComponentData) -> None:
    """
    Reject translated skeletons that reference unknown components or would
    rebuild a tree deeper than ``MAX_RESTORED_DEPTH``.

    Each component contributes one level per original node it restores, so
    the depth is measured on the rebuilt tree, not on the tags alone.
    """
    unknown = []
    max_depth = 0
    stack = [(skeleton, 0)]
    while stack:
        node, depth = stack.pop()
        if not is_component_node(node):
            continue
        index = node.component_index
        if index >= 0 and index not in component_data:
            unknown.append(index)
        depth += max(len(component_data.get(index) or []), 1)
        max_depth = max(max_depth, depth)
        stack.extend((child, depth) for child in node.children or [])

    if unknown:
        raise UnknownComponentIndexError(unknown)
    if max_depth > MAX_RESTORED_DEPTH:
        raise NestingTooDeepError(max_depth, MAX_RESTORED_DEPTH)


def unescape_string(
    text: str,
    component_data: ComponentData,
    unmap_function: UnmapFunction = unmap_mdast_node
) -> UnistNode:
    """
    Rebuild an external tree from a (translated) placeholder string.

    Args:
        text: Placeholder string
        component_data: Payload from ``EscapedString.component_data``
        unmap_function: Inverse node classification, defaults to markdown

    Returns:
        Reconstructed external tree

    Raises:
        ComponentStringError: If the string is malformed, references
            components that do not exist or nests too deeply (recoverable
            per string)
        InvalidTreeStateError: If the payload itself is inconsistent
    """
    skeleton = parse_component_string(text)
    _check_skeleton(skeleton, component_data)

    component_tree = inject_component_data(skeleton, component_data)
    component_tree = unflatten_component_tree(component_tree)
    return map_from_component_ast(component_tree, unmap_function)


def restore_translation(
    translated: str,
    escaped: EscapedString,
    source_tree: UnistNode,
    unmap_function: UnmapFunction = unmap_mdast_node,
    config: Optional[EscapeConfig] = None
) -> RestoreResult:
    """
    Restore one translated string, falling back to the source when malformed.

    Args:
        translated: Translated placeholder string
        escaped: Result of ``escape_tree`` for the source
        source_tree: Untranslated external tree, used as fallback
        unmap_function: Inverse node classification
        config: Pipeline options; with ``fallback_to_source`` disabled the
            parse error propagates

    Returns:
        RestoreResult with the translated or the fallback tree
    """
    config = config or EscapeConfig()
    try:
        tree = unescape_string(translated, escaped.component_data, unmap_function)
    except ComponentStringError as e:
        if not config.fallback_to_source:
            raise
        logger.warning(f"Rejecting malformed translation, using source instead: {e}")
        return RestoreResult(tree=copy.deepcopy(source_tree), fallback_used=True, error=e)
    return RestoreResult(tree=tree)


def translate_tree(
    tree: UnistNode,
    translate: Callable[[str], str],
    map_function: MapFunction = map_mdast_node,
    unmap_function: UnmapFunction = unmap_mdast_node,
    config: Optional[EscapeConfig] = None
) -> RestoreResult:
    """
    Escape a tree, pass the string through ``translate`` and restore it.

    Args:
        tree: External tree to translate
        translate: Callable receiving and returning a placeholder string
        map_function: Node classification
        unmap_function: Inverse node classification
        config: Pipeline options

    Returns:
        RestoreResult for the translated tree
    """
    escaped = escape_tree(tree, map_function, config)
    translated = translate(escaped.text)
    return restore_translation(translated, escaped, tree, unmap_function, config)
