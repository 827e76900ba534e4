"""JSON decoding tests with property-based testing."""

import json

import pytest
from hypothesis import given, strategies as st

from a2ui.core import extract_json, safe_json_dumps, JSONParseError
from a2ui.core.json import extract_json_boundaries, strip_code_fences


def test_extract_json_clean():
    """Test extracting a clean message array."""
    text = '[{"deleteSurface": {"surfaceId": "main"}}]'
    assert extract_json(text) == [{"deleteSurface": {"surfaceId": "main"}}]


def test_extract_json_with_markdown():
    """Test extracting JSON from markdown code blocks."""
    text = '''```json
[{"createSurface": {"surfaceId": "main"}}]
```'''
    assert extract_json(text) == [{"createSurface": {"surfaceId": "main"}}]


def test_extract_json_with_extra_text():
    """Test extracting an array with surrounding prose."""
    text = 'Sure! [{"deleteSurface": {"surfaceId": "a"}}] Let me know.'
    assert extract_json(text) == [{"deleteSurface": {"surfaceId": "a"}}]


def test_extract_json_object_fallback():
    """Test extracting an object when no array is present."""
    assert extract_json('result: {"a": 1}') == {"a": 1}


def test_extract_json_repairs_trailing_comma():
    """Test json_repair as last resort."""
    assert extract_json('[{"deleteSurface": {"surfaceId": "a"}},]') == [{"deleteSurface": {"surfaceId": "a"}}]


def test_extract_json_invalid():
    """Test error on text without JSON."""
    with pytest.raises(JSONParseError):
        extract_json("This has no JSON", repair=False)


def test_extract_json_empty():
    """Test error on empty input."""
    with pytest.raises(JSONParseError):
        extract_json("```json\n```")


def test_strip_code_fences():
    """Test fence removal."""
    assert strip_code_fences("```json\n[1]\n```") == "[1]"
    assert strip_code_fences("```\n[1]\n```") == "[1]"
    assert strip_code_fences("  [1]  ") == "[1]"


def test_extract_json_boundaries():
    """Test outermost container detection."""
    assert extract_json_boundaries("ab[1,[2]]cd") == (2, 9)
    assert extract_json_boundaries("no brackets") is None


def test_safe_json_dumps():
    """Test compact JSON serialization."""
    obj = {"title": "Test", "items": [1, 2, 3]}
    result = safe_json_dumps(obj)
    assert json.loads(result) == obj
    assert " " not in result


def test_safe_json_dumps_with_indent():
    """Test JSON serialization with indentation."""
    obj = {"title": "Test"}
    result = safe_json_dumps(obj, indent=2)
    assert json.loads(result) == obj
    assert "\n" in result


@given(st.lists(st.dictionaries(st.text(min_size=1), st.integers(min_value=-(2**53), max_value=2**53))))
def test_json_roundtrip(data):
    """Property test: encoding then extracting yields the same batch."""
    assert extract_json(safe_json_dumps(data)) == data
