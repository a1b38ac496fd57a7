"""
Adapters between concrete document formats and the escape pipeline.
"""
from component_escape.core.adapters.xhtml_adapter import (
    element_to_tree,
    escape_xhtml_fragment,
    map_hast_node,
    restore_xhtml_fragment,
    tree_to_element,
    unmap_hast_node,
)

__all__ = [
    'element_to_tree',
    'tree_to_element',
    'map_hast_node',
    'unmap_hast_node',
    'escape_xhtml_fragment',
    'restore_xhtml_fragment',
]
