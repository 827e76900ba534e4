"""Validation tests."""

import pytest
from hypothesis import given, strategies as st

from a2ui.core import (
    PromptRequest,
    UnprocessableBatchError,
    ValidationError,
    ValidationResult,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)


def test_prompt_request_valid():
    """Test valid prompt."""
    req = PromptRequest(message="Show my todo list")
    assert req.message == "Show my todo list"


def test_prompt_request_empty():
    """Test empty message validation."""
    with pytest.raises(Exception):
        PromptRequest(message="")


def test_prompt_request_whitespace():
    """Test whitespace-only message validation."""
    with pytest.raises(Exception):
        PromptRequest(message="   ")


def test_prompt_request_strict():
    """Test that non-strings are rejected, not coerced."""
    with pytest.raises(Exception):
        PromptRequest(message=42)


def test_prompt_request_frozen():
    """Test immutability."""
    req = PromptRequest(message="hi")
    with pytest.raises(Exception):
        req.message = "changed"


def test_unprocessable_batch_error():
    """Test error hierarchy and element index."""
    error = UnprocessableBatchError("bad element", index=2)
    assert isinstance(error, ValidationError)
    assert error.index == 2
    assert str(error) == "bad element"


def test_validation_result_frozen():
    """Test Result-pattern error payload."""
    result = ValidationResult("bad", field="[0]")
    assert result.field == "[0]"
    with pytest.raises(Exception):
        result.message = "other"


def test_validate_json_size():
    """Test JSON size validation."""
    validate_json_size('[{"deleteSurface": {}}]', 1000)

    with pytest.raises(JSONParseError):
        validate_json_size("x" * 1_000_000, 1000)


def test_validate_json_size_counts_bytes():
    """Test that size is measured in UTF-8 bytes."""
    with pytest.raises(JSONParseError):
        validate_json_size("é" * 6, 10)


def test_validate_json_depth():
    """Test JSON depth validation."""
    shallow = {"a": {"b": {"c": 1}}}
    validate_json_depth(shallow, max_depth=5)

    deep = {"level": 1}
    current = deep
    for i in range(25):
        current["nested"] = {"level": i + 2}
        current = current["nested"]

    with pytest.raises(JSONParseError):
        validate_json_depth(deep, max_depth=20)


@given(st.text(min_size=1, max_size=1000))
def test_message_validation_property(message):
    """Property test: Any non-blank string should be valid."""
    if message.strip():
        req = PromptRequest(message=message)
        assert req.message == message.strip()
