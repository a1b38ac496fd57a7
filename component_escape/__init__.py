"""
Component escaping for translatable document trees.

Main entry points:
    escape_tree() - external tree to placeholder string plus payload
    restore_translation() - translated string back to a tree, with fallback
"""
from component_escape.core.pipeline import (
    EscapedString,
    RestoreResult,
    escape_tree,
    restore_translation,
    translate_tree,
    unescape_string,
)

__version__ = "0.1.0"

__all__ = [
    'EscapedString',
    'RestoreResult',
    'escape_tree',
    'unescape_string',
    'restore_translation',
    'translate_tree',
]
