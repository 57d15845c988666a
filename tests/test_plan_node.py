"""Tests for PlanNode."""

from __future__ import annotations

import pytest

from plantree.analysis.plan_builder import PlanBuilder
from plantree.analysis.plan_node import PlanNode, format_plan_forest
from plantree.core.exceptions import InvalidPlanNodeError


def test_child_registers_with_parent() -> None:
    """It should append itself to the parent's children on construction."""

    root = PlanNode(0, "PROJECT")
    child = PlanNode(1, "SCAN", root)

    assert root.children == (child,)
    assert child.parent is root
    assert child.node_type == "Plan"
    assert str(child) == "SCAN"


def test_depth_gap_is_rejected() -> None:
    """It should refuse a child that is not exactly one level below its parent."""

    root = PlanNode(0, "A")

    with pytest.raises(InvalidPlanNodeError) as excinfo:
        PlanNode(2, "B", root)

    assert excinfo.value.parent_depth == 0
    assert root.children == ()


def test_root_must_have_depth_zero() -> None:
    """It should refuse a parentless node below depth 0."""

    with pytest.raises(InvalidPlanNodeError):
        PlanNode(1, "A")


def test_read_only_attributes() -> None:
    """It should not allow depth, label, parent or children to be reassigned."""

    node = PlanNode(0, "A")

    for attr in ("depth", "label", "parent", "children"):
        with pytest.raises(AttributeError):
            setattr(node, attr, None)


def test_ancestor_at_depth() -> None:
    """It should find the ancestor at a given depth, itself included."""

    (a,) = PlanBuilder().build([(0, "A"), (1, "B"), (2, "C")])
    c = a.children[0].children[0]

    assert c.ancestor_at_depth(0) is a
    assert c.ancestor_at_depth(2) is c
    assert c.ancestor_at_depth(3) is None


def test_traversal_helpers() -> None:
    """It should walk the subtree in pre-order."""

    (a,) = PlanBuilder().build([(0, "A"), (1, "B"), (2, "C"), (1, "D")])

    assert [n.label for n in a.get_all_nodes()] == ["A", "B", "C", "D"]
    assert a.is_root and not a.is_leaf
    assert a.children[1].is_leaf


def test_equality_is_structural() -> None:
    """It should compare depth, label and children but not identity."""

    left = PlanBuilder().build([(0, "A"), (1, "B")])
    right = PlanBuilder().build([(0, "A"), (1, "B")])
    other = PlanBuilder().build([(0, "A"), (1, "C")])

    assert left == right
    assert left != other
    assert "PlanNode(depth=0, label='A', children=1)" == repr(left[0])


def test_debug_string() -> None:
    """It should render one indented line per node."""

    roots = PlanBuilder().build([(0, "A"), (1, "B"), (0, "C")])

    assert format_plan_forest(roots) == (
        "[depth:  0] A\n"
        "[depth:  1] -B\n"
        "[depth:  0] C\n"
    )
