"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from component_escape.core.component.ast import Component, Root, Text
from tests.unist_builder import u


@pytest.fixture
def sample_mdast():
    """Markdown: `<br/> regular ~~*italic strikethrough*~~`"""
    return u("root", [
        u("paragraph", [
            u("html", "<br/>"),
            u("text", " regular "),
            u("delete", [
                u("emphasis", [
                    u("text", "italic strikethrough"),
                ]),
            ]),
        ]),
    ])


@pytest.fixture
def sample_skeleton():
    """Bare skeleton for `<c0>pizza</c0> spaghetti`."""
    return Root(children=[
        Component(component_index=0, children=[Text("pizza")]),
        Text(" spaghetti"),
    ])
