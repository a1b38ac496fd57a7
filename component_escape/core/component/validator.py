"""
Validation of component tags in translated text.

Translators may reorder, duplicate or drop components, so these checks are
about integrity rather than exact equality: every tag must be known, tags
must nest properly, and (for strict validation) nothing may be missing.
"""
from typing import Iterable, List, Tuple

from component_escape.common.tag_format import ComponentTagFormat
from component_escape.core.component.exceptions import ComponentStringError
from component_escape.core.component.stringify import parse_component_string

_TAG_FORMAT = ComponentTagFormat.from_config()


class ComponentTagValidator:
    """Validates component tag integrity in translated text."""

    @staticmethod
    def validate_basic(text: str, expected_indices: Iterable[int]) -> bool:
        """Quick validation: check every expected component appears.

        Args:
            text: Translated placeholder string
            expected_indices: Indices present in the source string

        Returns:
            True if all expected indices are referenced, False otherwise
        """
        found = set(_TAG_FORMAT.get_indices(text))
        return all(index in found for index in expected_indices)

    @staticmethod
    def validate_strict(text: str, expected_indices: Iterable[int]) -> Tuple[bool, str]:
        """Strict validation with detailed error messages.

        Checks:
        1. Tags are well formed and properly nested
        2. No unknown component indices
        3. No missing component indices

        Args:
            text: Translated placeholder string
            expected_indices: Indices present in the source string

        Returns:
            Tuple of (is_valid, error_message)
            error_message is empty string if valid
        """
        expected = set(expected_indices)

        try:
            parse_component_string(text)
        except ComponentStringError as e:
            return False, str(e)

        unknown = ComponentTagValidator.get_unknown_indices(text, expected)
        if unknown:
            return False, f"Unknown component indices: {unknown}"

        missing = ComponentTagValidator.get_missing_indices(text, expected)
        if missing:
            return False, f"Missing component indices: {missing}"

        return True, ""

    @staticmethod
    def get_missing_indices(text: str, expected_indices: Iterable[int]) -> List[int]:
        """Sorted list of expected indices that do not appear in text."""
        found = set(_TAG_FORMAT.get_indices(text))
        return sorted(set(expected_indices) - found)

    @staticmethod
    def get_unknown_indices(text: str, expected_indices: Iterable[int]) -> List[int]:
        """Sorted list of indices in text that were never expected."""
        return sorted(set(_TAG_FORMAT.get_indices(text)) - set(expected_indices))
