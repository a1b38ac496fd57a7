"""
Custom exceptions for component escaping.

Two families are defined here:

- Structural errors (``InvalidTreeStateError`` and subclasses) signal a
  caller-side ordering bug or corrupted intermediate state. They always
  abort processing of the current tree.
- Malformed string errors (``ComponentStringError`` and subclasses) come from
  untrusted translated text. The pipeline catches them per string and falls
  back to the untranslated source.
"""
from typing import Iterable, Optional


class ComponentEscapeError(Exception):
    """Base exception for all component escaping errors."""
    pass


class InvalidTreeStateError(ComponentEscapeError):
    """Raised when a component tree violates a structural invariant.

    Attributes:
        component_index: Index of the offending component, if known
    """
    def __init__(self, message: str, component_index: Optional[int] = None):
        super().__init__(message)
        self.component_index = component_index


class MissingOriginalNodesError(InvalidTreeStateError):
    """Raised when a component has no original nodes where they are required."""

    def __init__(self, component_index: Optional[int] = None):
        super().__init__("Invalid tree state: missing original nodes array", component_index)


class UndefinedComponentIndexError(InvalidTreeStateError):
    """Raised when a component has no index where one is required."""

    def __init__(self, message: str = "Invalid tree state: component index is undefined"):
        super().__init__(message)


class OriginalNodeCountError(InvalidTreeStateError):
    """Raised when unmapping a component that does not hold exactly one node.

    Attributes:
        count: Number of original nodes found on the component
    """
    def __init__(self, count: int, component_index: Optional[int] = None):
        super().__init__(
            f"Invalid tree state: expected exactly one original node, found {count}",
            component_index
        )
        self.count = count


class MissingComponentDataError(InvalidTreeStateError):
    """Raised when the payload map has no entry for a component index."""

    def __init__(self, component_index: int):
        super().__init__(
            f"Missing component data for component index {component_index}",
            component_index
        )


class UnexpectedNodeTypeError(InvalidTreeStateError, TypeError):
    """Raised when a visitor meets a node that is neither text nor component."""

    def __init__(self, node: object):
        super().__init__(f"Unexpected node type: {type(node).__name__}")
        self.node = node


class ComponentStringError(ComponentEscapeError):
    """Raised when an escaped string cannot be parsed back into a tree.

    Attributes:
        position: Character offset where the problem was detected
    """
    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class ClosingTagMismatchError(ComponentStringError):
    """Raised when a closing tag does not match the innermost open component.

    Attributes:
        expected_index: Index of the component currently open
        actual_index: Index found in the closing tag
    """
    def __init__(self, expected_index: int, actual_index: int, position: int):
        super().__init__(
            f"Closing component tag mismatch at position {position}: "
            f"expected </c{expected_index}> but got </c{actual_index}>",
            position
        )
        self.expected_index = expected_index
        self.actual_index = actual_index


class UnbalancedTagsError(ComponentStringError):
    """Raised when components are still open at the end of the input.

    Attributes:
        unclosed_index: Index of the innermost component left open
    """
    def __init__(self, unclosed_index: int, position: Optional[int] = None):
        super().__init__(
            f"Unbalanced component tags: failed to find closing tag for component {unclosed_index}",
            position
        )
        self.unclosed_index = unclosed_index


class UnknownComponentIndexError(ComponentStringError):
    """Raised when a translated string references components that never existed.

    Attributes:
        indices: Sorted list of the unknown indices
    """
    def __init__(self, indices: Iterable[int]):
        self.indices = sorted(set(indices))
        super().__init__(
            "Translated string references unknown components: "
            + ", ".join(f"c{index}" for index in self.indices)
        )


class NestingTooDeepError(ComponentStringError):
    """Raised when a translated string would rebuild a tree nested too deeply.

    Attributes:
        depth: Nesting depth the restored tree would reach
        limit: Maximum allowed depth
    """
    def __init__(self, depth: int, limit: int):
        super().__init__(
            f"Component nesting too deep: restoring would reach depth {depth}, limit is {limit}"
        )
        self.depth = depth
        self.limit = limit


class MarkupParsingError(ComponentEscapeError):
    """Raised when source markup cannot be parsed into an external tree.

    Attributes:
        original_error: The underlying parser error
        content_preview: First 200 chars of problematic content
    """
    def __init__(self, message: str, original_error: Exception = None, content_preview: str = None):
        super().__init__(message)
        self.original_error = original_error
        self.content_preview = content_preview
