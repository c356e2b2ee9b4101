"""
Tests for custom exceptions and configuration validation.
"""

import pytest

from tm8.core.config import HistoryConfig, SpatialConfig, StoreConfig
from tm8.core.exceptions import (
    BatchRejectedError,
    ConfigurationError,
    EdgeNotFoundError,
    GraphOperationError,
    NodeNotFoundError,
    ResourceNotFoundError,
    ValidationError,
)
from tm8.core.models import ViewportBounds


def test_validation_error_message():
    """Test validation error message formatting."""
    error = ValidationError("test message")
    assert str(error) == "Validation Error: test message"


def test_graph_operation_error_message():
    """Test graph operation error message formatting."""
    error = GraphOperationError("test message")
    assert str(error) == "Graph Operation Error: test message"


def test_batch_rejected_error_carries_result():
    """Test that batch rejections keep their result and message format."""
    error = BatchRejectedError("2 batch items were rejected", result="outcome")
    assert isinstance(error, GraphOperationError)
    assert error.result == "outcome"
    assert str(error) == "Graph Operation Error: 2 batch items were rejected"


def test_not_found_hierarchy():
    """Test that not-found errors share a base class."""
    assert issubclass(NodeNotFoundError, ResourceNotFoundError)
    assert issubclass(EdgeNotFoundError, ResourceNotFoundError)


def test_default_configuration():
    """Test default configuration values."""
    config = StoreConfig()
    assert config.history.max_history_size == 50
    assert config.history.compression_threshold == 10
    assert config.spatial.bounds == ViewportBounds(-10000, -10000, 20000, 20000)
    assert config.spatial.max_items == 10
    assert config.graph_name == "Untitled"


@pytest.mark.parametrize(
    "factory",
    [
        lambda: HistoryConfig(max_history_size=0),
        lambda: HistoryConfig(max_history_size=1),
        lambda: HistoryConfig(compression_threshold=0),
        lambda: SpatialConfig(bounds=ViewportBounds(0, 0, 0, 10)),
        lambda: SpatialConfig(max_items=0),
        lambda: SpatialConfig(max_depth=-1),
    ],
)
def test_invalid_configuration(factory):
    """Test that invalid configuration values are rejected."""
    with pytest.raises(ConfigurationError):
        factory()
