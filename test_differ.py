"""Tests for the jsonkit diff engine."""

import copy

import pytest
from jsonkit import (
    MISSING,
    ChangeKind,
    DiffConfig,
    DiffEngine,
    InvalidInputError,
    MaxDepthExceededError,
    changed_paths,
    compare,
    format_value,
    highlight_paths,
)


def _flatten(changes):
    """Pre-order list of (kind, path) pairs."""
    result = []
    for change in changes:
        result.append((change.kind, change.path))
        if change.children:
            result.extend(_flatten(change.children))
    return result


class TestBasicComparison:
    """Test basic comparison functionality."""

    def setup_method(self):
        self.engine = DiffEngine()

    @pytest.mark.parametrize("value", [
        None,
        True,
        0,
        3.25,
        "text",
        [],
        {},
        [1, [2, [3, {"a": None}]]],
        {"name": "A", "tags": ["x", "y"], "nested": {"deep": {"n": 1.5}}},
    ])
    def test_identical_values(self, value):
        """Test that comparing a value with itself yields nothing."""
        assert self.engine.compare(value, copy.deepcopy(value)) == []

    def test_end_to_end_scenario(self):
        """Test a modified and an added key in key-union order."""
        old = {"name": "A", "age": 1}
        new = {"name": "B", "age": 1, "active": True}

        changes = self.engine.compare(old, new)

        assert len(changes) == 2
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].path == "name"
        assert changes[0].key == "name"
        assert changes[0].old_value == "A"
        assert changes[0].new_value == "B"
        assert changes[0].children is None
        assert changes[1].kind == ChangeKind.ADDED
        assert changes[1].path == "active"
        assert changes[1].new_value is True
        assert changes[1].has_old is False

    def test_removed_key(self):
        """Test that a key only in old is reported as removed."""
        changes = self.engine.compare({"a": 1, "b": 2}, {"a": 1})

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.REMOVED
        assert changes[0].path == "b"
        assert changes[0].old_value == 2
        assert changes[0].has_new is False

    def test_key_union_order(self):
        """Test that old keys come first, then keys only in new."""
        changes = self.engine.compare({"b": 1, "a": 1}, {"c": 1, "a": 2})

        assert [(c.kind, c.path) for c in changes] == [
            (ChangeKind.REMOVED, "b"),
            (ChangeKind.MODIFIED, "a"),
            (ChangeKind.ADDED, "c"),
        ]

    def test_root_primitive_change(self):
        """Test that a root-level change has an empty key and path."""
        changes = self.engine.compare(1, 2)

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].key == ""
        assert changes[0].path == ""

    def test_int_and_float_are_equal(self):
        """Test that numbers compare by value, not Python type."""
        assert self.engine.compare({"n": 1}, {"n": 1.0}) == []


class TestNullHandling:
    """Test null/absent handling."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_both_null(self):
        assert self.engine.compare(None, None) == []

    def test_null_to_value_is_added(self):
        changes = self.engine.compare(None, {"a": 1})

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.ADDED
        assert changes[0].new_value == {"a": 1}
        assert changes[0].old_value is MISSING

    def test_value_to_null_is_removed(self):
        changes = self.engine.compare([1], None)

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.REMOVED
        assert changes[0].old_value == [1]

    def test_null_member_becomes_modified(self):
        """Test that a key present on both sides surfaces as modified."""
        changes = self.engine.compare({"a": None}, {"a": 1})

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].has_old is True
        assert changes[0].old_value is None
        assert changes[0].new_value == 1


class TestTypeChanges:
    """Test that type changes replace the value without recursion."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_number_to_string(self):
        changes = self.engine.compare({"a": 1}, {"a": "1"})

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].children is None

    def test_array_to_object(self):
        changes = self.engine.compare({"a": [1]}, {"a": {"0": 1}})

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].old_value == [1]
        assert changes[0].new_value == {"0": 1}
        assert changes[0].children is None

    def test_boolean_is_not_number(self):
        changes = self.engine.compare(True, 1)

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED


class TestArrayComparison:
    """Test positional array comparison."""

    def setup_method(self):
        self.engine = DiffEngine()

    def test_insert_at_front_shifts_every_index(self):
        """Test that an insertion is reported as positional changes."""
        changes = self.engine.compare([1, 2, 3], [0, 1, 2, 3])

        assert [(c.kind, c.path) for c in changes] == [
            (ChangeKind.MODIFIED, "[0]"),
            (ChangeKind.MODIFIED, "[1]"),
            (ChangeKind.MODIFIED, "[2]"),
            (ChangeKind.ADDED, "[3]"),
        ]
        assert changes[0].old_value == 1
        assert changes[0].new_value == 0
        assert changes[3].new_value == 3
        assert changes[3].key == "[3]"

    def test_shorter_array_reports_removed_tail(self):
        changes = self.engine.compare([1, 2, 3], [1])

        assert [(c.kind, c.path, c.old_value) for c in changes] == [
            (ChangeKind.REMOVED, "[1]", 2),
            (ChangeKind.REMOVED, "[2]", 3),
        ]

    def test_nested_element_changes_are_flattened(self):
        """Test that element diffs are emitted directly, not wrapped per index."""
        changes = self.engine.compare([{"x": 1}], [{"x": 2}])

        assert len(changes) == 1
        assert changes[0].kind == ChangeKind.MODIFIED
        assert changes[0].path == "[0].x"
        assert changes[0].key == "x"


class TestNestedComparison:
    """Test the change tree for nested containers."""

    def setup_method(self):
        self.engine = DiffEngine()
        self.old = {"user": {"name": "A", "tags": ["x"]}, "id": 7}
        self.new = {"user": {"name": "B", "tags": ["x", "y"]}, "id": 7}

    def test_children_mirror_structure(self):
        changes = self.engine.compare(self.old, self.new)

        assert len(changes) == 1
        user = changes[0]
        assert user.kind == ChangeKind.MODIFIED
        assert user.path == "user"
        assert user.old_value == self.old["user"]
        assert [(c.kind, c.path) for c in user.children] == [
            (ChangeKind.MODIFIED, "user.name"),
            (ChangeKind.MODIFIED, "user.tags"),
        ]
        assert user.children[0].children is None

        tags = user.children[1]
        assert len(tags.children) == 1
        assert tags.children[0].kind == ChangeKind.ADDED
        assert tags.children[0].path == "user.tags[1]"
        assert tags.children[0].key == "[1]"
        assert tags.children[0].new_value == "y"

    def test_inputs_are_not_mutated(self):
        old = copy.deepcopy(self.old)
        new = copy.deepcopy(self.new)

        self.engine.compare(self.old, self.new)

        assert self.old == old
        assert self.new == new

    def test_changed_paths(self):
        changes = self.engine.compare(self.old, self.new)

        assert changed_paths(changes) == [
            "user",
            "user.name",
            "user.tags",
            "user.tags[1]",
        ]

    def test_to_dict(self):
        changes = self.engine.compare(self.old, self.new)
        data = changes[0].to_dict()

        assert data["type"] == "modified"
        assert data["path"] == "user"
        assert "oldValue" in data and "newValue" in data
        added = data["children"][1]["children"][0]
        assert added == {"type": "added", "key": "[1]", "path": "user.tags[1]", "newValue": "y"}


class TestDirectionSymmetry:
    """Test that swapping inputs swaps added/removed and old/new values."""

    @pytest.mark.parametrize("a,b", [
        ({"name": "A", "age": 1}, {"name": "B", "age": 1, "active": True}),
        ([1, 2, 3], [0, 1, 2, 3]),
        ({"a": {"b": [1, {"c": 2}]}, "d": 1}, {"a": {"b": [1, {"c": 3}, 4]}, "e": None}),
        ({"x": None}, {"x": [1]}),
    ])
    def test_swap_directions(self, a, b):
        forward = compare(a, b)
        backward = compare(b, a)

        swapped = {
            ChangeKind.ADDED: ChangeKind.REMOVED,
            ChangeKind.REMOVED: ChangeKind.ADDED,
            ChangeKind.MODIFIED: ChangeKind.MODIFIED,
        }
        assert sorted((swapped[k].value, p) for k, p in _flatten(forward)) == \
            sorted((k.value, p) for k, p in _flatten(backward))

        backward_modified = {c.path: c for c in backward if c.kind == ChangeKind.MODIFIED}
        for change in forward:
            if change.kind == ChangeKind.MODIFIED:
                other = backward_modified[change.path]
                assert other.old_value == change.new_value
                assert other.new_value == change.old_value


class TestEngineConfig:
    """Test engine configuration options."""

    def test_max_depth(self):
        """Test that documents deeper than the cap raise."""
        deep = current = {}
        for _ in range(10):
            current["a"] = {}
            current = current["a"]

        engine = DiffEngine(DiffConfig(max_depth=3))
        with pytest.raises(MaxDepthExceededError) as exc_info:
            engine.compare(deep, copy.deepcopy(deep))
        assert exc_info.value.depth == 3

    def test_ignore_paths_recursive(self):
        """Test that ignored changes are dropped along with emptied parents."""
        engine = DiffEngine(DiffConfig(ignore_paths=["$..updatedAt"]))
        old = {"id": 1, "updatedAt": "x", "meta": {"updatedAt": "x"}}
        new = {"id": 1, "updatedAt": "y", "meta": {"updatedAt": "y"}}

        assert engine.compare(old, new) == []

    def test_ignore_paths_keeps_other_children(self):
        engine = DiffEngine(DiffConfig(ignore_paths=["meta.trace"]))
        old = {"meta": {"trace": "a", "owner": "x"}}
        new = {"meta": {"trace": "b", "owner": "y"}}

        changes = engine.compare(old, new)

        assert len(changes) == 1
        assert [c.path for c in changes[0].children] == ["meta.owner"]

    def test_ignore_paths_wildcard_over_array(self):
        engine = DiffEngine(DiffConfig(ignore_paths=["$.items[*].seen"]))
        old = {"items": [{"id": 1, "seen": 1}, {"id": 2, "seen": 1}]}
        new = {"items": [{"id": 1, "seen": 2}, {"id": 3, "seen": 2}]}

        assert _flatten(engine.compare(old, new)) == [
            (ChangeKind.MODIFIED, "items"),
            (ChangeKind.MODIFIED, "items[1].id"),
        ]

    def test_ignore_paths_reach_added_and_removed_keys(self):
        engine = DiffEngine(DiffConfig(ignore_paths=["$..trace"]))
        old = {"a": {"trace": "x"}, "n": 1}
        new = {"b": {"trace": "y"}, "n": 1}

        changes = engine.compare(old, new)

        assert _flatten(changes) == [
            (ChangeKind.REMOVED, "a"),
            (ChangeKind.ADDED, "b"),
        ]
        assert DiffEngine(DiffConfig(ignore_paths=["a", "b"])).compare(old, new) == []

    def test_invalid_ignore_pattern(self):
        engine = DiffEngine(DiffConfig(ignore_paths=["$.[[["]))

        with pytest.raises(InvalidInputError) as exc_info:
            engine.compare({"a": 1}, {"a": 2})
        assert exc_info.value.details == {"ignore_paths": ["$.[[["]}

    def test_default_depth_allows_deep_documents(self):
        old, new = "x", "y"
        for _ in range(250):
            old, new = {"a": old}, {"a": new}

        changes = DiffEngine().compare(old, new)

        depth = 0
        while changes[0].children:
            changes = changes[0].children
            depth += 1
        assert depth == 249
        assert changes[0].path == ".".join(["a"] * 250)

    def test_report_summary(self):
        report = DiffEngine().report({"a": 1, "b": 2}, {"a": 2, "c": 3})

        assert report.is_identical is False
        assert report.summary.modified == 1
        assert report.summary.removed == 1
        assert report.summary.added == 1
        assert report.to_dict()["summary"]["total"] == 3
        assert report.execution.timestamp.endswith("Z")

    def test_report_identical(self):
        report = DiffEngine().report({"a": 1}, {"a": 1})

        assert report.is_identical is True
        assert report.to_dict()["changes"] == []


class TestHelpers:
    """Test derived helpers used by presentation code."""

    def test_highlight_paths(self):
        changes = compare({"a": 1, "b": 2}, {"a": 2, "c": 3})

        assert highlight_paths(changes, "old") == {"a", "b"}
        assert highlight_paths(changes, "new") == {"a", "c"}

    def test_highlight_paths_invalid_side(self):
        with pytest.raises(InvalidInputError):
            highlight_paths([], "middle")

    @pytest.mark.parametrize("value,expected", [
        (None, "null"),
        (MISSING, "undefined"),
        ("x", '"x"'),
        (True, "true"),
        (3, "3"),
        (2.5, "2.5"),
        ({"a": 1}, '{\n  "a": 1\n}'),
        ([1, 2], "[\n  1,\n  2\n]"),
    ])
    def test_format_value(self, value, expected):
        assert format_value(value) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
