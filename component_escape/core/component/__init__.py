"""
Component AST module

Escapes structural subtrees of a document tree into a flat string of text
and numbered placeholder tags (``<c0>...</c0>``, ``<c1/>``), and rebuilds
the tree after translation.

Components:
    - ast: node model (Text, Component, Root)
    - mapping: external tree <-> component AST
    - indexing: component index assignment
    - flatten: single-child chain flattening and unflattening
    - component_data: payload extraction and injection
    - stringify: placeholder string codec
    - html_representation / escape: components as HTML nodes in a tree
    - validator: tag integrity checks on translated text
"""

from .ast import (
    Component,
    NodeKind,
    Root,
    Text,
    is_component_node,
    is_text_node,
)
from .component_data import (
    extract_component_data,
    inject_component_data,
    strip_component_data,
)
from .escape import from_components, to_components
from .flatten import flatten_component_tree, unflatten_component_tree
from .html_representation import component_nodes_to_html_nodes, html_nodes_to_component_nodes
from .indexing import enumerate_components
from .mapping import (
    map_from_component_ast,
    map_mdast_node,
    map_to_component_ast,
    unmap_mdast_node,
)
from .stringify import parse_component_string, stringify_component_tree
from .validator import ComponentTagValidator

__all__ = [
    # Node model
    'Text',
    'Component',
    'Root',
    'NodeKind',
    'is_component_node',
    'is_text_node',

    # Tree mapping
    'map_to_component_ast',
    'map_from_component_ast',
    'map_mdast_node',
    'unmap_mdast_node',

    # Indexing and flattening
    'enumerate_components',
    'flatten_component_tree',
    'unflatten_component_tree',

    # Payload
    'extract_component_data',
    'inject_component_data',
    'strip_component_data',

    # String codec
    'stringify_component_tree',
    'parse_component_string',

    # HTML representation
    'component_nodes_to_html_nodes',
    'html_nodes_to_component_nodes',
    'to_components',
    'from_components',

    # Validation
    'ComponentTagValidator',
]
