"""Value resolver tests."""

import pytest

from a2ui.interpreter.values import resolve_bool, resolve_number, resolve_text, resolve_value, to_text
from a2ui.protocol.components import BoundValue


def bound(**tags):
    return BoundValue.model_validate(tags)


DATA = {"name": "Ann", "age": 41, "items": [{"title": "first"}, {"title": "second"}], "ok": True}


@pytest.mark.unit
class TestResolveValue:
    """Test literal/path precedence."""

    def test_plain_value_unchanged(self):
        assert resolve_value("hello", DATA) == "hello"
        assert resolve_value(3, DATA) == 3
        assert resolve_value(None, DATA) is None

    def test_literal_string(self):
        assert resolve_value(bound(literalString="hi"), DATA) == "hi"

    def test_literal_number(self):
        assert resolve_value(bound(literalNumber=2.5), DATA) == 2.5

    def test_literal_boolean(self):
        assert resolve_value(bound(literalBoolean=False), DATA) is False

    def test_literal_array(self):
        assert resolve_value(bound(literalArray=["a", "b"]), DATA) == ["a", "b"]

    def test_path(self):
        assert resolve_value(bound(path="/name"), DATA) == "Ann"

    def test_literal_beats_path(self):
        assert resolve_value(bound(literalString="X", path="/name"), DATA) == "X"

    def test_null_literal_still_beats_path(self):
        assert resolve_value(bound(literalString=None, path="/name"), DATA) is None

    def test_literal_order(self):
        assert resolve_value(bound(literalNumber=1, literalString="s"), DATA) == "s"

    def test_relative_path_in_context(self):
        assert resolve_value(bound(path="./title"), DATA, "/items/1") == "second"

    def test_unresolvable_path(self):
        assert resolve_value(bound(path="/missing/deep"), DATA) is None

    def test_empty_bound_value(self):
        assert resolve_value(bound(), DATA) is None


@pytest.mark.unit
class TestText:
    """Test display string conversion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, ""),
            ("x", "x"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            ([1, 2], "[1,2]"),
            ({"a": 1}, '{"a":1}'),
        ],
    )
    def test_to_text(self, value, expected):
        assert to_text(value) == expected

    def test_resolve_text_undefined(self):
        assert resolve_text(bound(path="/nope"), DATA) == ""

    def test_resolve_text_number_path(self):
        assert resolve_text(bound(path="/age"), DATA) == "41"


@pytest.mark.unit
class TestNumberAndBool:
    """Test typed resolution helpers."""

    def test_number_from_path(self):
        assert resolve_number(bound(path="/age"), DATA) == 41

    def test_number_from_numeric_string(self):
        assert resolve_number(bound(literalString=" 7.5 "), DATA) == 7.5

    def test_number_rejects_bool(self):
        assert resolve_number(bound(path="/ok"), DATA) is None

    def test_number_rejects_text(self):
        assert resolve_number(bound(path="/name"), DATA) is None

    def test_number_rejects_nan(self):
        assert resolve_number(float("nan"), DATA) is None

    def test_bool_from_path(self):
        assert resolve_bool(bound(path="/ok"), DATA) is True

    def test_bool_default(self):
        assert resolve_bool(bound(path="/name"), DATA) is False
        assert resolve_bool(None, DATA, default=True) is True
