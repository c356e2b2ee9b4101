"""Tests for the built-in validation rules."""

import math

import pytest

from tm8.core.enums import EntityKind
from tm8.core.models import Position, Size
from tm8.utils.validation import GraphValidator


@pytest.fixture
def validator() -> GraphValidator:
    return GraphValidator()


def test_valid_node_has_no_issues(validator, make_node):
    """Test a well-formed node."""
    result = validator.validate_node_integrity(make_node("a", 10, 10))
    assert result.is_valid
    assert result.issues == []
    assert result.context == {"entity_id": "a", "entity_type": "node"}


@pytest.mark.parametrize(
    "field, value, code",
    [
        ("id", "", "NODE_INVALID_ID"),
        ("name", None, "NODE_INVALID_NAME"),
        ("position", "here", "NODE_INVALID_POSITION"),
        ("position", Position(math.nan, 0), "NODE_INVALID_X"),
        ("position", Position(0, math.inf), "NODE_INVALID_Y"),
        ("type", "mainframe", "NODE_INVALID_TYPE"),
        ("properties", ["not", "a", "dict"], "NODE_INVALID_PROPERTIES"),
    ],
)
def test_node_errors(validator, make_node, field, value, code):
    """Test error codes for malformed nodes."""
    node = make_node("a")
    setattr(node, field, value)

    result = validator.validate_node_integrity(node)

    assert not result.is_valid
    assert code in result.error_codes


def test_node_warnings(validator, make_node):
    """Test advisory warnings for unusual nodes."""
    node = make_node("a", 2_000_000, 0, name="x" * 150)
    node.properties = {f"p{i}": i for i in range(60)}
    node.properties["blob"] = "y" * 20_000

    result = validator.validate_node_integrity(node)

    assert result.is_valid
    assert set(result.warning_codes) == {
        "NODE_NAME_TOO_LONG",
        "NODE_EXTREME_POSITION",
        "NODE_TOO_MANY_PROPERTIES",
        "NODE_LARGE_PROPERTY",
    }


def test_edge_rules(validator, make_edge):
    """Test edge error and warning codes without store context."""
    assert validator.validate_edge_integrity(make_edge("e", "a", [])).error_codes == ["EDGE_NO_TARGETS"]
    assert "EDGE_INVALID_SOURCE" in validator.validate_edge_integrity(make_edge("e", "", ["b"])).error_codes
    assert "EDGE_INVALID_TARGET" in validator.validate_edge_integrity(make_edge("e", "a", ["b", ""])).error_codes

    many = validator.validate_edge_integrity(make_edge("e", "a", [f"t{i}" for i in range(11)]))
    assert many.is_valid and many.warning_codes == ["EDGE_MANY_TARGETS"]

    duplicate = validator.validate_edge_integrity(make_edge("e", "a", ["b", "b"]))
    assert duplicate.warning_codes == ["EDGE_DUPLICATE_TARGETS"]


def test_edge_targets_must_be_a_list(validator, make_edge):
    """Test a non-list targets field."""
    edge = make_edge("e", "a", ["b"])
    edge.targets = "b"
    assert validator.validate_edge_integrity(edge).error_codes == ["EDGE_INVALID_TARGETS"]


def test_edge_connections_need_store(validator, make_edge, store, make_node):
    """Test that referential checks run only against a store."""
    edge = make_edge("e", "a", ["b"])
    assert validator.validate_edge(edge)

    store.add_node(make_node("b"))
    result = validator.validate_edge_integrity(edge, store)
    assert result.error_codes == ["EDGE_SOURCE_NOT_FOUND"]


@pytest.mark.parametrize(
    "bounds, code",
    [
        (Size(10, 0), "BOUNDARY_INVALID_HEIGHT"),
        (Size(-5, 10), "BOUNDARY_INVALID_WIDTH"),
        (Size(math.nan, 10), "BOUNDARY_INVALID_WIDTH"),
        ({"width": 10}, "BOUNDARY_INVALID_BOUNDS"),
    ],
)
def test_boundary_size_errors(validator, make_boundary, bounds, code):
    """Test boundary extent checks."""
    boundary = make_boundary("zone", 0, 0, 10, 10)
    boundary.bounds = bounds

    result = validator.validate_boundary_integrity(boundary)

    assert result.error_codes == [code]


def test_boundary_warnings_and_type(validator, make_boundary):
    """Test very large boundaries and unknown types."""
    assert validator.validate_boundary_integrity(
        make_boundary("zone", 0, 0, 200_000, 10)
    ).warning_codes == ["BOUNDARY_VERY_LARGE"]

    boundary = make_boundary("zone", 0, 0, 10, 10)
    boundary.type = "castle-wall"
    assert validator.validate_boundary_integrity(boundary).error_codes == ["BOUNDARY_INVALID_TYPE"]


def test_issue_metadata(validator, make_edge):
    """Test that issues carry the offending entity."""
    issue = validator.validate_edge_integrity(make_edge("e9", "a", [])).errors[0]

    assert issue.entity_id == "e9"
    assert issue.entity_type is EntityKind.EDGE
    assert str(issue) == "[EDGE_NO_TARGETS] Edge must have at least one target"


def test_graph_rules(validator, make_node, make_edge, chain_graph):
    """Test graph-level errors and warnings."""
    assert validator.validate_graph(chain_graph).warning_codes == ["GRAPH_ISOLATED_NODES"]

    chain_graph.nodes.append(make_node("a"))
    chain_graph.edges.append(make_edge("bad", "a", ["ghost"]))
    result = validator.validate_graph(chain_graph)

    assert result.error_codes.count("GRAPH_DUPLICATE_ID") == 1
    assert result.error_codes.count("GRAPH_ORPHANED_EDGE") == 1
    assert result.context == {"nodes": 6, "edges": 4, "boundaries": 0}
