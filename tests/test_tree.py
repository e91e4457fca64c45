"""Tests for the tree builder and document parsing."""

from __future__ import annotations

from typing import Any

import pytest

from flowchart2html.exceptions import DuplicateIdError, MalformedTreeError
from flowchart2html.schemas import ChildMode, NodeSpec, NodeType
from flowchart2html.tree import (
    FlowchartTree,
    build_tree,
    find_duplicate_ids,
    format_position_label,
    parse_document,
)


def _count_specs(spec: NodeSpec) -> int:
    return 1 + sum(_count_specs(child) for child in spec.children)


class TestFormatPositionLabel:
    """Tests for format_position_label."""

    def test_first_level_has_no_separator(self) -> None:
        assert format_position_label("", 0) == "01"

    def test_appends_zero_padded_segment(self) -> None:
        assert format_position_label("02", 2) == "02.03"

    def test_two_digit_index_is_not_padded_further(self) -> None:
        assert format_position_label("01.01", 11) == "01.01.12"


class TestParseDocument:
    """Tests for parse_document."""

    def test_returns_root_spec(self, scenario_payload: dict[str, Any]) -> None:
        root = parse_document(scenario_payload)

        assert root.id == "root"
        assert root.type is NodeType.SECTION
        assert [child.id for child in root.children] == ["A", "B"]

    def test_missing_root_is_malformed(self) -> None:
        with pytest.raises(MalformedTreeError, match="no root"):
            parse_document({"nodes": []})

    def test_null_root_is_malformed(self) -> None:
        with pytest.raises(MalformedTreeError):
            parse_document({"root": None})

    def test_non_object_payload_is_malformed(self) -> None:
        with pytest.raises(MalformedTreeError, match="must be an object"):
            parse_document(["root"])

    @pytest.mark.parametrize("missing", ["type", "label", "id"])
    def test_missing_required_field_is_malformed(self, missing: str) -> None:
        node = {"id": "x", "type": "info", "label": "X"}
        del node[missing]

        with pytest.raises(MalformedTreeError) as exc_info:
            parse_document({"root": {"id": "r", "type": "section", "label": "R", "children": [node]}})

        assert exc_info.value.__cause__ is not None

    def test_unknown_type_is_malformed(self) -> None:
        with pytest.raises(MalformedTreeError):
            parse_document({"root": {"id": "r", "type": "banana", "label": "R"}})

    def test_blank_label_is_malformed(self) -> None:
        with pytest.raises(MalformedTreeError):
            parse_document({"root": {"id": "r", "type": "info", "label": "  "}})

    def test_defaults_and_normalization(self) -> None:
        root = parse_document(
            {"root": {"id": "r", "type": "info", "label": "R", "detail": "", "children": None, "extra": 1}}
        )

        assert root.detail is None
        assert root.children == []
        assert root.child_mode is ChildMode.SEQUENTIAL

    def test_reads_child_mode_alias(self) -> None:
        root = parse_document(
            {"root": {"id": "r", "type": "decision", "label": "R", "childMode": "choice", "children": []}}
        )

        assert root.child_mode is ChildMode.CHOICE


class TestBuildTree:
    """Tests for build_tree and the initial state."""

    def test_preserves_shape_and_order(self, rich_payload: dict[str, Any]) -> None:
        spec = parse_document(rich_payload)
        root = build_tree(spec)

        def _shape(node) -> tuple:
            return (node.id, tuple(_shape(child) for child in node.children))

        def _spec_shape(node: NodeSpec) -> tuple:
            return (node.id, tuple(_spec_shape(child) for child in node.children))

        assert _shape(root) == _spec_shape(spec)
        assert len(FlowchartTree(root)) == _count_specs(spec)

    def test_depths_and_sibling_indices(self, rich_tree: FlowchartTree) -> None:
        assert rich_tree.get("start").depth == 0
        assert rich_tree.get("breach").depth == 1
        assert rich_tree.get("breach").sibling_index == 1
        assert rich_tree.get("rotate").depth == 3
        assert rich_tree.get("rotate").sibling_index == 0

    def test_position_labels(self, rich_tree: FlowchartTree) -> None:
        labels = {node.id: node.position_label for node in rich_tree}

        assert labels == {
            "start": "",
            "harassment": "01",
            "report": "01.01",
            "block": "01.02",
            "breach": "02",
            "passwords": "02.01",
            "rotate": "02.01.01",
            "notify": "02.02",
            "other": "03",
        }

    def test_label_segment_count_matches_depth(self, rich_tree: FlowchartTree) -> None:
        for node in rich_tree:
            segments = node.position_label.split(".") if node.position_label else []
            assert len(segments) == node.depth
            assert all(len(segment) == 2 for segment in segments)
            if node.parent is not None:
                assert node.position_label.startswith(node.parent.position_label)
                assert int(segments[-1]) == node.sibling_index + 1

    def test_initial_state(self, rich_tree: FlowchartTree) -> None:
        for node in rich_tree:
            assert node.detail_expanded is False
            if node.is_section and node.depth >= 1:
                assert node.children_expanded is False
            else:
                assert node.children_expanded is True

    def test_section_without_children_is_not_collapsible(self) -> None:
        tree = FlowchartTree.from_document(
            {
                "root": {
                    "id": "r",
                    "type": "section",
                    "label": "R",
                    "children": [{"id": "empty", "type": "section", "label": "Empty"}],
                }
            }
        )

        empty = tree.get("empty")
        assert not empty.is_section
        assert empty.children_expanded is True

    def test_non_section_with_children_starts_expanded(self, rich_tree: FlowchartTree) -> None:
        harassment = rich_tree.get("harassment")

        assert harassment.has_children
        assert not harassment.is_section
        assert harassment.children_expanded is True

    def test_parent_links(self, scenario_tree: FlowchartTree) -> None:
        assert scenario_tree.root.parent is None
        assert scenario_tree.get("C").parent is scenario_tree.get("B")

    def test_deep_chain(self) -> None:
        depth = 100
        node: dict[str, Any] = {"id": f"n{depth}", "type": "info", "label": "Leaf"}
        for level in range(depth - 1, -1, -1):
            node = {"id": f"n{level}", "type": "section", "label": f"Level {level}", "children": [node]}

        tree = FlowchartTree.from_document({"root": node})

        leaf = tree.get(f"n{depth}")
        assert len(tree) == depth + 1
        assert leaf.depth == depth
        assert leaf.position_label == ".".join(["01"] * depth)


class TestFlowchartTree:
    """Tests for the FlowchartTree arena."""

    def test_iterates_depth_first(self, rich_tree: FlowchartTree) -> None:
        assert [node.id for node in rich_tree] == [
            "start",
            "harassment",
            "report",
            "block",
            "breach",
            "passwords",
            "rotate",
            "notify",
            "other",
        ]

    def test_sections_and_details(self, rich_tree: FlowchartTree) -> None:
        assert [node.id for node in rich_tree.sections()] == ["start", "breach", "passwords"]
        assert [node.id for node in rich_tree.nodes_with_detail()] == [
            "start",
            "harassment",
            "report",
            "breach",
            "rotate",
        ]

    def test_get_unknown_id(self, rich_tree: FlowchartTree) -> None:
        with pytest.raises(KeyError, match="nope"):
            rich_tree.get("nope")

    def test_contains_only_own_nodes(self, rich_tree: FlowchartTree, scenario_tree: FlowchartTree) -> None:
        assert rich_tree.get("breach") in rich_tree
        assert scenario_tree.get("B") not in rich_tree

    def test_snapshot_exposes_state(self, scenario_tree: FlowchartTree) -> None:
        snapshot = scenario_tree.snapshot()

        assert set(snapshot) == {"root", "A", "B", "C"}
        assert snapshot["B"].depth == 1
        assert snapshot["B"].position_label == "02"
        assert snapshot["B"].children_expanded is False
        assert snapshot["B"].detail_expanded is False


class TestDuplicateIds:
    """Tests for id uniqueness validation."""

    @pytest.fixture
    def duplicate_payload(self) -> dict[str, Any]:
        return {
            "root": {
                "id": "r",
                "type": "section",
                "label": "R",
                "children": [
                    {"id": "dup", "type": "info", "label": "One"},
                    {"id": "dup", "type": "info", "label": "Two"},
                ],
            }
        }

    def test_find_duplicate_ids(self, duplicate_payload: dict[str, Any]) -> None:
        assert find_duplicate_ids(parse_document(duplicate_payload)) == ["dup"]

    def test_rejected_by_default(self, duplicate_payload: dict[str, Any]) -> None:
        with pytest.raises(DuplicateIdError, match="dup"):
            FlowchartTree.from_document(duplicate_payload, validate_ids=True)

    def test_duplicate_is_a_malformed_tree(self) -> None:
        assert issubclass(DuplicateIdError, MalformedTreeError)

    def test_allowed_when_validation_is_off(self, duplicate_payload: dict[str, Any]) -> None:
        tree = FlowchartTree.from_document(duplicate_payload, validate_ids=False)

        assert len(tree) == 3
        assert tree.get("dup").spec.label == "One"
