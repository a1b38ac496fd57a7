"""
Component tag format: creation and scanning of placeholder tags.

The wire grammar is fixed:

- opening tag: ``<c`` + decimal digits + ``>``
- self-closing tag: ``<c`` + decimal digits + ``/>``
- closing tag: ``</c`` + decimal digits + ``>``

Anything else is literal text. Scanning is done by a small explicit lexer
(find the next ``<``, then match one of the three shapes) rather than a
regular expression, so the accepted grammar is exactly the one above.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from component_escape.config import COMPONENT_TAG_NAME

_DIGITS = "0123456789"


class TagKind(Enum):
    """Shape of a component tag."""
    OPENING = "opening"
    CLOSING = "closing"
    SELF_CLOSING = "self_closing"


@dataclass(frozen=True)
class ComponentTag:
    """
    A component tag found in a string.

    Attributes:
        index: Component index written in the tag
        kind: Opening, closing or self-closing
        position: Offset of the leading ``<``
        length: Number of characters the tag spans
    """
    index: int
    kind: TagKind
    position: int
    length: int

    @property
    def end(self) -> int:
        return self.position + self.length

    @property
    def is_closing(self) -> bool:
        return self.kind is TagKind.CLOSING

    @property
    def is_self_closing(self) -> bool:
        return self.kind is TagKind.SELF_CLOSING


class ComponentTagFormat:
    """
    Creates and recognizes component tags.

    Example:
        >>> fmt = ComponentTagFormat.from_config()
        >>> fmt.create_opening(3)
        '<c3>'
        >>> fmt.find_next("a <b> <c3/> z", 0)
        ComponentTag(index=3, kind=<TagKind.SELF_CLOSING: 'self_closing'>, position=6, length=5)
    """

    def __init__(self, tag_name: str = COMPONENT_TAG_NAME):
        """
        Initialize tag format.

        Args:
            tag_name: Name following ``<`` or ``</`` (e.g., "c")
        """
        if not tag_name or any(char in tag_name for char in "<>/" + _DIGITS):
            raise ValueError(f"Invalid component tag name: {tag_name!r}")
        self.tag_name = tag_name

    @classmethod
    def from_config(cls) -> 'ComponentTagFormat':
        """Create the format used on the wire (``<cN>``)."""
        return cls(COMPONENT_TAG_NAME)

    def create_opening(self, index: int) -> str:
        return f"<{self.tag_name}{index}>"

    def create_closing(self, index: int) -> str:
        return f"</{self.tag_name}{index}>"

    def create_self_closing(self, index: int) -> str:
        return f"<{self.tag_name}{index}/>"

    def scan_tag(self, text: str, position: int) -> Optional[ComponentTag]:
        """
        Try to read a component tag starting exactly at ``position``.

        Args:
            text: String being scanned
            position: Offset of a ``<`` character

        Returns:
            The tag, or None if the characters there do not form one
        """
        length = len(text)
        if position >= length or text[position] != "<":
            return None

        cursor = position + 1
        is_closing = text.startswith("/", cursor)
        if is_closing:
            cursor += 1

        if not text.startswith(self.tag_name, cursor):
            return None
        cursor += len(self.tag_name)

        digits_start = cursor
        while cursor < length and text[cursor] in _DIGITS:
            cursor += 1
        if cursor == digits_start:
            return None
        index = int(text[digits_start:cursor])

        if not is_closing and text.startswith("/>", cursor):
            return ComponentTag(index, TagKind.SELF_CLOSING, position, cursor + 2 - position)
        if text.startswith(">", cursor):
            kind = TagKind.CLOSING if is_closing else TagKind.OPENING
            return ComponentTag(index, kind, position, cursor + 1 - position)
        return None

    def find_next(self, text: str, start: int = 0) -> Optional[ComponentTag]:
        """
        Find the first component tag at or after ``start``.

        Returns:
            The tag, or None if the rest of the string is literal text
        """
        position = text.find("<", start)
        while position != -1:
            tag = self.scan_tag(text, position)
            if tag is not None:
                return tag
            position = text.find("<", position + 1)
        return None

    def find_all(self, text: str) -> List[ComponentTag]:
        """
        Find all component tags in text, in order of appearance.

        Example:
            >>> [tag.index for tag in ComponentTagFormat().find_all("<c0>a</c0><c1/>")]
            [0, 0, 1]
        """
        tags = []
        tag = self.find_next(text, 0)
        while tag is not None:
            tags.append(tag)
            tag = self.find_next(text, tag.end)
        return tags

    def parse(self, tag_text: str) -> Optional[ComponentTag]:
        """
        Parse a string consisting of exactly one component tag.

        Returns:
            The tag, or None if ``tag_text`` is anything else
        """
        tag = self.scan_tag(tag_text, 0)
        if tag is None or tag.length != len(tag_text):
            return None
        return tag

    def matches(self, text: str) -> bool:
        """Check if text is exactly one component tag."""
        return self.parse(text) is not None

    def remove_all(self, text: str) -> str:
        """
        Remove all component tags from text.

        Example:
            >>> ComponentTagFormat().remove_all("<c0>Hello</c0> world<c1/>")
            'Hello world'
        """
        parts = []
        position = 0
        for tag in self.find_all(text):
            parts.append(text[position:tag.position])
            position = tag.end
        parts.append(text[position:])
        return "".join(parts)

    def get_indices(self, text: str) -> List[int]:
        """Sorted list of distinct component indices referenced in text."""
        return sorted({tag.index for tag in self.find_all(text)})

    def __repr__(self) -> str:
        return f"ComponentTagFormat(tag_name={self.tag_name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ComponentTagFormat):
            return False
        return self.tag_name == other.tag_name
