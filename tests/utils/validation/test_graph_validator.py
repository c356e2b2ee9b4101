"""Tests for the validator engine, property schemas and reporting."""

import json

import pytest

from tm8.core.enums import EdgeType, NodeType
from tm8.core.graph import GraphStore
from tm8.utils.validation import (
    VALIDATOR_ERROR,
    GraphValidator,
    PropertySchemaValidator,
    ValidationReporter,
    ValidationResult,
    ValidationRule,
)
from tm8.utils.validation.base import error, warning

DATASTORE_SCHEMA = {
    "type": "object",
    "properties": {"encrypted": {"type": "boolean"}},
    "required": ["encrypted"],
}


def test_custom_rule_function(make_node):
    """Test registration of a plain function as a rule."""
    validator = GraphValidator()

    def no_test_names(node, context):
        if node.name.startswith("Test"):
            return [warning("NODE_TEST_NAME", "Test nodes should not be committed", node.id)]
        return []

    validator.add_node_rule(no_test_names)

    result = validator.validate_node_integrity(make_node("a", name="Test Harness"))
    assert result.is_valid
    assert result.warning_codes == ["NODE_TEST_NAME"]


def test_custom_rule_class_blocks_store_mutation(make_node):
    """Test a rule subclass used by a store."""

    class NoDatastoresRule(ValidationRule):
        name = "no_datastores"

        def check(self, node, context=None):
            if node.type is NodeType.DATASTORE:
                return [error("NODE_FORBIDDEN_TYPE", "Datastores are not allowed here", node.id)]
            return []

    validator = GraphValidator()
    validator.add_node_rule(NoDatastoresRule())
    store = GraphStore(validator=validator)

    assert store.add_node(make_node("p")).is_valid
    assert store.add_node(make_node("d", node_type=NodeType.DATASTORE)).error_codes == ["NODE_FORBIDDEN_TYPE"]


def test_faulty_rule_becomes_validator_error(make_node, caplog):
    """Test that an exception inside a rule is reported instead of raised."""
    validator = GraphValidator()

    def broken(node, context):
        raise KeyError("missing")

    validator.add_node_rule(broken)

    result = validator.validate_node_integrity(make_node("a"))

    assert result.error_codes == [VALIDATOR_ERROR]
    assert "broken" in caplog.text
    assert not validator.validate_node(make_node("b"))


def test_uniqueness_only_for_new_entities(store, make_node):
    """Test that existing ids are only rejected on insertion."""
    store.add_node(make_node("a"))
    validator = store.validator

    assert validator.validate_node_integrity(make_node("a"), store).is_valid
    assert validator.validate_node_integrity(make_node("a"), store, is_new=True).error_codes == [
        "NODE_DUPLICATE_ID"
    ]


def test_property_schema(make_node, make_edge):
    """Test JSON schema checks on node properties."""
    schemas = PropertySchemaValidator()
    schemas.register_schema(NodeType.DATASTORE, DATASTORE_SCHEMA)
    validator = GraphValidator(schema_validator=schemas)

    good = make_node("db", node_type=NodeType.DATASTORE, encrypted=True)
    bad = make_node("db2", node_type=NodeType.DATASTORE, encrypted="yes")
    other = make_node("p")

    assert validator.validate_node(good)
    assert validator.validate_node_integrity(bad).error_codes == ["NODE_PROPERTIES_SCHEMA"]
    assert validator.validate_node(other)
    assert validator.validate_edge(make_edge("e", "a", ["b"], edge_type=EdgeType.GRPC))


def test_schema_registration_requires_entity_type():
    """Test that schemas are keyed by entity type enums."""
    schemas = PropertySchemaValidator()
    with pytest.raises(TypeError):
        schemas.register_schema("datastore", DATASTORE_SCHEMA)
    assert schemas.get_schema(NodeType.DATASTORE) is None


def test_validation_report(chain_graph, make_edge):
    """Test per-entity grouping of a graph report."""
    chain_graph.edges.append(make_edge("empty", "a", []))
    report = GraphValidator().get_validation_report(chain_graph)

    assert not report.is_valid
    assert list(report.edge_issues) == ["empty"]
    assert report.node_issues == {}
    assert [i.code for i in report.graph_issues] == ["GRAPH_ISOLATED_NODES"]
    assert report.summary == {"total_errors": 1, "total_warnings": 1, "is_valid": False}


def test_result_merge():
    """Test combining validation results."""
    first = ValidationResult.from_issues([warning("W", "w")], context={"a": 1})
    second = ValidationResult.from_issues([error("E", "e")], context={"b": 2})

    merged = first.merge(second)

    assert not merged.is_valid
    assert merged.error_codes == ["E"]
    assert merged.warning_codes == ["W"]
    assert merged.context == {"a": 1, "b": 2}
    assert merged.has_code("W")


def test_reporter_formats(store, make_node, make_edge):
    """Test text, dictionary and JSON output of results."""
    store.add_node(make_node("a"))
    result = store.add_edge(make_edge("e1", "a", []))

    text = ValidationReporter.format_result(result)
    assert text.startswith("Validation failed with the following errors:")
    assert "[EDGE_NO_TARGETS]" in text

    data = ValidationReporter.to_dict(result)
    assert data["is_valid"] is False
    assert data["errors"][0]["code"] == "EDGE_NO_TARGETS"
    assert data["errors"][0]["entity_type"] == "edge"
    assert json.loads(ValidationReporter.to_json(result)) == data

    assert ValidationReporter.format_result(ValidationResult(is_valid=True)) == "Validation passed successfully"


def test_report_formatting(chain_graph, make_edge):
    """Test text and dictionary output of graph reports."""
    chain_graph.edges.append(make_edge("empty", "a", []))
    report = GraphValidator().get_validation_report(chain_graph)

    text = ValidationReporter.format_report(report)
    assert text.splitlines()[0] == "Graph is invalid: 1 errors, 1 warnings"
    assert "Edge empty:" in text

    data = ValidationReporter.report_to_dict(report)
    assert data["edge_issues"]["empty"][0]["code"] == "EDGE_NO_TARGETS"
    assert data["graph_issues"][0]["code"] == "GRAPH_ISOLATED_NODES"
