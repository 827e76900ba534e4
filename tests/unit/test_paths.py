"""Path resolver tests."""

import pytest
from hypothesis import given, strategies as st

from a2ui.interpreter.paths import (
    delete_value_at_path,
    get_value_at_path,
    is_root_path,
    join_path,
    resolve_path,
    set_value_at_path,
    split_path,
)


@pytest.mark.unit
class TestSplit:
    """Test path splitting."""

    def test_discards_empty_segments(self):
        assert split_path("/a//b/") == ["a", "b"]

    def test_root_forms(self):
        assert split_path("/") == []
        assert split_path("") == []
        assert split_path(None) == []

    def test_is_root_path(self):
        assert is_root_path("/")
        assert is_root_path("")
        assert is_root_path(None)
        assert not is_root_path("/a")


@pytest.mark.unit
class TestGet:
    """Test tolerant lookups."""

    def test_nested_mapping(self):
        assert get_value_at_path({"a": {"b": 1}}, "/a/b") == 1

    def test_sequence_index(self):
        tree = {"items": [{"name": "x"}, {"name": "y"}]}
        assert get_value_at_path(tree, "/items/1/name") == "y"

    def test_root_returns_tree(self):
        tree = {"a": 1}
        assert get_value_at_path(tree, "/") is tree

    def test_missing_key(self):
        assert get_value_at_path({"a": 1}, "/b") is None

    def test_out_of_range_index(self):
        assert get_value_at_path({"items": [1]}, "/items/5") is None

    def test_non_numeric_index(self):
        assert get_value_at_path({"items": [1]}, "/items/first") is None

    def test_negative_index_is_not_an_index(self):
        assert get_value_at_path({"items": [1, 2]}, "/items/-1") is None

    def test_through_scalar(self):
        assert get_value_at_path({"a": "text"}, "/a/0") is None

    def test_on_none_tree(self):
        assert get_value_at_path(None, "/a") is None

    @given(st.recursive(
        st.none() | st.booleans() | st.integers() | st.text(max_size=5),
        lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=3), children, max_size=3),
        max_leaves=10,
    ), st.lists(st.text(alphabet="ab01/", max_size=4), max_size=4))
    def test_never_raises(self, tree, segments):
        """Property: lookups of any path in any tree never raise."""
        get_value_at_path(tree, "/".join(segments))


@pytest.mark.unit
class TestSet:
    """Test assignment with intermediate creation."""

    def test_root_replaces_tree(self):
        assert set_value_at_path({"a": 1}, "/", {"b": 2}) == {"b": 2}

    def test_creates_intermediates(self):
        tree = {}
        result = set_value_at_path(tree, "/user/address/city", "Oslo")
        assert result is tree
        assert tree == {"user": {"address": {"city": "Oslo"}}}

    def test_leaves_siblings(self):
        tree = {"a": 1, "b": {"c": 2, "d": 3}}
        set_value_at_path(tree, "/b/c", 20)
        assert tree == {"a": 1, "b": {"c": 20, "d": 3}}

    def test_replaces_null_intermediate(self):
        tree = {"a": None}
        set_value_at_path(tree, "/a/b", 1)
        assert tree == {"a": {"b": 1}}

    def test_sequence_index(self):
        tree = {"items": ["a", "b"]}
        set_value_at_path(tree, "/items/1", "B")
        assert tree == {"items": ["a", "B"]}

    def test_sequence_append_at_length(self):
        tree = {"items": ["a"]}
        set_value_at_path(tree, "/items/1", "b")
        assert tree == {"items": ["a", "b"]}

    def test_sequence_past_end_is_noop(self):
        tree = {"items": ["a"]}
        set_value_at_path(tree, "/items/5", "x")
        assert tree == {"items": ["a"]}

    def test_scalar_intermediate_is_noop(self):
        tree = {"a": 5}
        set_value_at_path(tree, "/a/b", 1)
        assert tree == {"a": 5}

    def test_into_sequence_element(self):
        tree = {"items": [{"done": False}]}
        set_value_at_path(tree, "/items/0/done", True)
        assert tree == {"items": [{"done": True}]}

    @given(st.lists(st.text(alphabet="abc", min_size=1, max_size=3), min_size=1, max_size=4), st.integers())
    def test_set_then_get(self, segments, value):
        """Property: a value set into a fresh mapping is read back at the same path."""
        path = "/" + "/".join(segments)
        tree = set_value_at_path({}, path, value)
        assert get_value_at_path(tree, path) == value


@pytest.mark.unit
class TestDelete:
    """Test deletion at path."""

    def test_mapping_key(self):
        tree = {"a": 1, "b": 2}
        assert delete_value_at_path(tree, "/a") == {"b": 2}

    def test_sequence_index_shifts(self):
        tree = {"items": ["a", "b", "c"]}
        delete_value_at_path(tree, "/items/0")
        assert tree == {"items": ["b", "c"]}

    def test_root_yields_empty_mapping(self):
        assert delete_value_at_path({"a": 1}, "/") == {}

    def test_missing_target_is_noop(self):
        tree = {"a": {"b": 1}}
        delete_value_at_path(tree, "/x/y")
        assert tree == {"a": {"b": 1}}


@pytest.mark.unit
class TestResolve:
    """Test relative path composition."""

    def test_relative_inside_context(self):
        assert resolve_path("./name", "/items/1") == "/items/1/name"

    def test_absolute_ignores_context(self):
        assert resolve_path("/title", "/items/1") == "/title"

    def test_relative_without_context(self):
        assert resolve_path("./name", "") == "/name"

    def test_dot_is_context_item(self):
        assert resolve_path(".", "/tags/2") == "/tags/2"
        assert resolve_path(".", "") == "/"

    def test_join_path(self):
        assert join_path("/items", 0) == "/items/0"
        assert join_path("/items/", "k") == "/items/k"
        assert join_path("/", 3) == "/3"

    @given(
        st.lists(st.text(alphabet="xyz", min_size=1, max_size=3), min_size=1, max_size=3),
        st.lists(st.text(alphabet="abc", min_size=1, max_size=3), min_size=1, max_size=3),
    )
    def test_relative_equals_absolute(self, context, relative):
        """Property: get(resolve("./p", ctx)) == get(ctx + "/p")."""
        context_path = "/" + "/".join(context)
        rel = "/".join(relative)
        tree = set_value_at_path({}, f"{context_path}/{rel}", "v")
        assert get_value_at_path(tree, resolve_path(f"./{rel}", context_path)) == get_value_at_path(
            tree, f"{context_path}/{rel}"
        ) == "v"
