"""Unit tests for the component AST node model."""

import pytest
from component_escape.config import ROOT_COMPONENT_INDEX
from component_escape.core.component.ast import (
    Component,
    NodeKind,
    Root,
    Text,
    clone_node,
    clone_unist_node,
    is_component_node,
    is_text_node,
    iter_components,
)
from tests.unist_builder import u


class TestIsComponentNode:
    """Test the component node predicate."""

    def test_recognizes_bare_component(self):
        """A component without optional fields is a component."""
        assert is_component_node(Component()) is True

    def test_recognizes_root(self):
        """Root is a component."""
        assert is_component_node(Root()) is True

    def test_rejects_text(self):
        """Text nodes are not components."""
        assert is_component_node(Text("pizza")) is False

    def test_rejects_non_nodes(self):
        """Arbitrary objects are not components."""
        assert is_component_node(None) is False
        assert is_component_node({"type": "component"}) is False
        assert is_component_node("component") is False

    def test_rejects_non_integer_index(self):
        """component_index must be an integer."""
        assert is_component_node(Component(component_index="0")) is False
        assert is_component_node(Component(component_index=True)) is False

    def test_rejects_non_list_children(self):
        """children must be a list when present."""
        assert is_component_node(Component(children=(Text("a"),))) is False

    def test_rejects_non_list_original_nodes(self):
        """original_nodes must be a list when present."""
        assert is_component_node(Component(original_nodes={"type": "html"})) is False


class TestNodeModel:
    """Test node construction and copying."""

    def test_kinds(self):
        """Each variant carries its kind."""
        assert Text("a").kind is NodeKind.TEXT
        assert Component().kind is NodeKind.COMPONENT
        assert Root().kind is NodeKind.COMPONENT

    def test_root_defaults(self):
        """Root always has the sentinel index and a children list."""
        root = Root()
        assert root.component_index == ROOT_COMPONENT_INDEX == -1
        assert root.children == []
        assert root.is_root is True
        assert Root(children=None).children == []

    def test_component_is_not_root(self):
        """Non-negative and missing indices are not roots."""
        assert Component(component_index=0).is_root is False
        assert Component().is_root is False

    def test_is_text_node(self):
        """Text predicate accepts text leaves only."""
        assert is_text_node(Text("x")) is True
        assert is_text_node(Component()) is False

    def test_clone_is_deep(self):
        """Cloning never shares children or payload."""
        original = Component(
            component_index=0,
            children=[Component(component_index=1, children=[Text("x")])],
            original_nodes=[u("emphasis", [])],
        )
        clone = original.clone()

        assert clone == original
        assert clone is not original
        assert clone.children is not original.children
        assert clone.children[0] is not original.children[0]
        assert clone.original_nodes[0] is not original.original_nodes[0]

    def test_clone_preserves_variant(self):
        """Cloning a root yields a root."""
        assert isinstance(Root(children=[Text("a")]).clone(), Root)

    def test_clone_node_rejects_unknown(self):
        """clone_node only accepts component AST nodes."""
        with pytest.raises(TypeError):
            clone_node({"type": "text", "value": "x"})


class TestCloneUnistNode:
    """Test detached copies of external nodes."""

    def test_children_are_emptied(self):
        """Parent nodes are copied with an empty children list."""
        node = u("emphasis", [u("text", "x")])
        clone = clone_unist_node(node)

        assert clone == {"type": "emphasis", "children": []}
        assert node["children"] == [u("text", "x")]

    def test_leaf_copied_as_is(self):
        """Leaves are copied without a children field."""
        node = u("html", "<br/>")
        clone = clone_unist_node(node)

        assert clone == node
        assert clone is not node
        assert "children" not in clone

    def test_nested_properties_not_shared(self):
        """Nested values are copied, not aliased."""
        node = u("link", [], url="x", data={"hProperties": {"id": "a"}})
        clone = clone_unist_node(node)
        clone["data"]["hProperties"]["id"] = "b"

        assert node["data"]["hProperties"]["id"] == "a"


class TestIterComponents:
    """Test depth-first component iteration."""

    def test_pre_order(self):
        """Components are yielded parent first, in document order."""
        tree = Root(children=[
            Component(component_index=0, children=[Component(component_index=1)]),
            Text("x"),
            Component(component_index=2),
        ])

        assert [c.component_index for c in iter_components(tree)] == [-1, 0, 1, 2]

    def test_deep_tree(self):
        """Trees deeper than the recursion limit can be walked."""
        tree = Component(component_index=0)
        for _ in range(5000):
            tree = Component(component_index=0, children=[tree])

        assert sum(1 for _ in iter_components(tree)) == 5001

    def test_text_yields_nothing(self):
        """A text node has no components."""
        assert list(iter_components(Text("x"))) == []
