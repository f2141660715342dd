"""Tests for the Node dataclass and NodeKind StrEnum.

Verifies:
- NodeKind has exactly 6 members with lowercase string values (StrEnum property)
- A fresh Node is an empty OBJECT
- set_value / get_value kind mapping, including bool-before-int dispatch
- Name accessor fails fast on non-object kinds
- Index accessor converts destructively and auto-vivifies empty objects
- Sorted member iteration
- Deep-copy ownership, assign, move_from
- from_python / to_python bridge
"""

from __future__ import annotations

import copy

import pytest

from json_document.errors import KindMismatchError
from json_document.tree.nodes import Node, NodeKind


class TestNodeKind:
    """Tests for the NodeKind StrEnum."""

    def test_has_exactly_six_members(self) -> None:
        assert len(NodeKind) == 6

    def test_values_are_lowercased(self) -> None:
        assert NodeKind.BOOL == "bool"
        assert NodeKind.INT == "int"
        assert NodeKind.FLOAT == "float"
        assert NodeKind.STRING == "string"
        assert NodeKind.ARRAY == "array"
        assert NodeKind.OBJECT == "object"

    def test_is_scalar(self) -> None:
        scalars = {k for k in NodeKind if k.is_scalar}
        assert scalars == {NodeKind.BOOL, NodeKind.INT, NodeKind.FLOAT, NodeKind.STRING}


# ---------------------------------------------------------------------------
# Construction and scalar values
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_new_node_is_empty_object(self) -> None:
        node = Node()
        assert node.kind == NodeKind.OBJECT
        assert node.get_type() == NodeKind.OBJECT
        assert node.get_child_count() == 0
        assert node.get_array_size() == 0

    def test_uses_slots(self) -> None:
        assert hasattr(Node, "__slots__")

    def test_cannot_add_arbitrary_attributes(self) -> None:
        node = Node()
        with pytest.raises(AttributeError):
            node.undefined_attribute = "should fail"  # type: ignore[attr-defined]

    def test_instances_do_not_share_members(self) -> None:
        a = Node()
        b = Node()
        a["x"]
        assert b.get_child_count() == 0


class TestSetValue:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (True, NodeKind.BOOL),
            (False, NodeKind.BOOL),
            (0, NodeKind.INT),
            (-12, NodeKind.INT),
            (2.5, NodeKind.FLOAT),
            ("text", NodeKind.STRING),
            ("", NodeKind.STRING),
        ],
    )
    def test_kind_follows_python_type(self, value: object, kind: NodeKind) -> None:
        node = Node()
        node.set_value(value)  # type: ignore[arg-type]
        assert node.kind == kind
        assert node.value == value

    def test_bool_is_not_stored_as_int(self) -> None:
        node = Node()
        node.set_value(True)
        assert node.kind == NodeKind.BOOL
        assert node.value is True

    def test_discards_container_content(self) -> None:
        node = Node.from_python({"a": 1, "b": [1, 2]})
        node.set_value(7)
        assert node.kind == NodeKind.INT
        assert node.get_child_count() == 0
        assert node.get_array_size() == 0

    def test_rejects_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Unsupported scalar type"):
            Node().set_value(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_float(self, value: float) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            Node().set_value(value)


class TestGetValue:
    def test_matching_types(self) -> None:
        assert Node.new_scalar(True).get_value(bool) is True
        assert Node.new_scalar(3).get_value(int) == 3
        assert Node.new_scalar(2.5).get_value(float) == 2.5
        assert Node.new_scalar("x").get_value(str) == "x"

    def test_int_widens_to_float(self) -> None:
        value = Node.new_scalar(3).get_value(float)
        assert value == 3.0
        assert isinstance(value, float)

    @pytest.mark.parametrize(
        ("value", "as_type"),
        [
            (1, str),
            (1, bool),
            (True, int),
            (2.5, int),
            ("1", int),
        ],
    )
    def test_mismatch_raises(self, value: object, as_type: type) -> None:
        node = Node.new_scalar(value)  # type: ignore[arg-type]
        with pytest.raises(KindMismatchError):
            node.get_value(as_type)

    def test_mismatch_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            Node.new_scalar("x").get_value(int)

    def test_container_raises(self) -> None:
        with pytest.raises(KindMismatchError, match="object"):
            Node().get_value(str)
        with pytest.raises(KindMismatchError, match="array"):
            Node.new_array().get_value(int)

    def test_unsupported_requested_type(self) -> None:
        with pytest.raises(TypeError, match="Unsupported value type") as exc_info:
            Node.new_scalar(1).get_value(list)  # type: ignore[type-var]
        assert not isinstance(exc_info.value, KindMismatchError)

    def test_huge_int_read_as_float(self) -> None:
        node = Node.new_scalar(10**400)
        with pytest.raises(ValueError, match="too large to read as float"):
            node.get_value(float)
        assert node.get_value(int) == 10**400

    def test_value_property_on_container(self) -> None:
        with pytest.raises(KindMismatchError):
            _ = Node().value


class TestScalarText:
    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (-3, "-3"),
            (2.5, "2.5"),
            (3.0, "3.0"),
            ("raw text", "raw text"),
        ],
    )
    def test_scalar_text(self, value: object, text: str) -> None:
        assert Node.new_scalar(value).scalar_text == text  # type: ignore[arg-type]

    def test_container_has_no_scalar_text(self) -> None:
        with pytest.raises(KindMismatchError):
            _ = Node().scalar_text


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


class TestNameAccessor:
    def test_creates_missing_member_as_empty_object(self) -> None:
        node = Node()
        child = node["a"]
        assert child.kind == NodeKind.OBJECT
        assert child.get_child_count() == 0
        assert node.get_child_count() == 1
        assert "a" in node

    def test_returns_existing_member(self) -> None:
        node = Node()
        node["a"].set_value(1)
        assert node["a"].get_value(int) == 1
        assert node.get_child_count() == 1

    def test_nested_auto_vivification(self) -> None:
        node = Node()
        node["a"]["b"]["c"].set_value("deep")
        assert node["a"]["b"]["c"].get_value(str) == "deep"

    @pytest.mark.parametrize("build", [lambda: Node.new_scalar(1), Node.new_array])
    def test_fails_fast_on_non_object(self, build: object) -> None:
        node = build()  # type: ignore[operator]
        before = node.copy()
        with pytest.raises(KindMismatchError, match="member access 'x'"):
            node["x"]
        assert node == before

    def test_members_iterate_in_sorted_order(self) -> None:
        node = Node()
        for name in ("b", "a", "c"):
            node[name].set_value(name)
        assert node.keys() == ["a", "b", "c"]
        assert [name for name, _ in node.members()] == ["a", "b", "c"]

    def test_contains_is_false_for_non_objects(self) -> None:
        assert "a" not in Node.new_scalar("a")
        assert "a" not in Node.new_array()


class TestIndexAccessor:
    def test_auto_vivification_grows_by_one(self) -> None:
        node = Node()
        for k in range(6):
            node[k]
            assert node.kind == NodeKind.ARRAY
            assert node.get_array_size() == k + 1
        assert all(e == Node() for e in node.elements())

    def test_jump_fills_intermediate_slots(self) -> None:
        node = Node()
        node[3].set_value(9)
        assert node.get_array_size() == 4
        elements = list(node.elements())
        assert [e.kind for e in elements[:3]] == [NodeKind.OBJECT] * 3
        assert elements[3].get_value(int) == 9

    def test_existing_index_does_not_grow(self) -> None:
        node = Node.from_python([1, 2, 3])
        assert node[1].get_value(int) == 2
        assert node.get_array_size() == 3

    def test_converts_scalar_destructively(self) -> None:
        node = Node.new_scalar("gone")
        node[0]
        assert node.kind == NodeKind.ARRAY
        assert node.get_array_size() == 1

    def test_converts_object_and_discards_members(self) -> None:
        node = Node.from_python({"a": 1})
        node[1]
        assert node.kind == NodeKind.ARRAY
        assert node.get_array_size() == 2
        assert node.get_child_count() == 0
        assert "a" not in node

    def test_negative_index_raises(self) -> None:
        with pytest.raises(IndexError):
            Node()[-1]

    @pytest.mark.parametrize("key", [True, 1.5, None])
    def test_invalid_key_type(self, key: object) -> None:
        with pytest.raises(TypeError, match="keys must be str or int"):
            Node()[key]  # type: ignore[index]


class TestSizesIgnoreKind:
    def test_scalar_reports_zero(self) -> None:
        node = Node.new_scalar(5)
        assert node.get_child_count() == 0
        assert node.get_array_size() == 0

    def test_array_reports_no_children(self) -> None:
        node = Node.from_python([1, 2])
        assert node.get_child_count() == 0
        assert node.get_array_size() == 2
        assert node.keys() == []
        assert list(node.members()) == []

    def test_object_reports_no_elements(self) -> None:
        node = Node.from_python({"a": 1})
        assert node.get_array_size() == 0
        assert list(node.elements()) == []


class TestSetItem:
    def test_scalar_assignment(self) -> None:
        node = Node()
        node["port"] = 8080
        node["debug"] = False
        assert node["port"].kind == NodeKind.INT
        assert node["debug"].kind == NodeKind.BOOL

    def test_container_assignment(self) -> None:
        node = Node()
        node["hosts"] = ["a", "b"]
        node["limits"] = {"cpu": 2}
        assert node["hosts"].get_array_size() == 2
        assert node["limits"]["cpu"].get_value(int) == 2

    def test_index_assignment_vivifies(self) -> None:
        node = Node()
        node[2] = "c"
        assert node.get_array_size() == 3
        assert node[2].get_value(str) == "c"

    def test_node_assignment_copies(self) -> None:
        source = Node.from_python({"x": 1})
        node = Node()
        node["copy"] = source
        source["x"].set_value(2)
        assert node["copy"]["x"].get_value(int) == 1

    def test_self_assignment_copies_previous_state(self) -> None:
        node = Node.from_python({"a": 1})
        node["self"] = node
        assert node["self"] == Node.from_python({"a": 1})
        assert node.keys() == ["a", "self"]

    def test_rejects_null(self) -> None:
        with pytest.raises(TypeError, match="null"):
            Node()["a"] = None


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------


class TestOwnership:
    def test_copy_is_deep(self) -> None:
        original = Node.from_python({"a": [1, {"b": 2}]})
        clone = original.copy()
        clone["a"][1]["b"].set_value(3)
        assert original["a"][1]["b"].get_value(int) == 2
        assert clone != original

    def test_copy_module_returns_deep_copies(self) -> None:
        original = Node.from_python({"a": [1]})
        for clone in (copy.copy(original), copy.deepcopy(original)):
            assert clone == original
            clone["a"][0].set_value(5)
            assert original["a"][0].get_value(int) == 1

    def test_assign_replaces_with_copy(self) -> None:
        target = Node.new_scalar(1)
        source = Node.from_python(["x"])
        target.assign(source)
        assert target == source
        source[0].set_value("y")
        assert target[0].get_value(str) == "x"

    def test_assign_to_self_is_noop(self) -> None:
        node = Node.from_python({"a": 1})
        node.assign(node)
        assert node == Node.from_python({"a": 1})

    def test_move_from_transfers_and_empties_source(self) -> None:
        source = Node.from_python({"big": list(range(100))})
        members_before = source["big"]
        target = Node()
        target.move_from(source)
        assert source.kind == NodeKind.OBJECT
        assert source.get_child_count() == 0
        assert target["big"] is members_before

    def test_move_from_ancestor_is_rejected(self) -> None:
        root = Node.from_python({"a": {"b": [1, {"c": 2}]}})
        deep = root["a"]["b"][1]
        with pytest.raises(ValueError, match="own descendants"):
            deep.move_from(root)
        assert root.to_python() == {"a": {"b": [1, {"c": 2}]}}
        assert deep.to_python() == {"c": 2}

    def test_move_from_descendant_is_allowed(self) -> None:
        root = Node.from_python({"a": {"b": 1}})
        root.move_from(root["a"])
        assert root.to_python() == {"b": 1}

    def test_move_between_siblings(self) -> None:
        root = Node.from_python({"x": [1, 2], "y": "old"})
        root["y"].move_from(root["x"])
        assert root.to_python() == {"x": {}, "y": [1, 2]}

    def test_reset(self) -> None:
        node = Node.from_python([1, 2])
        node.reset()
        assert node == Node()


# ---------------------------------------------------------------------------
# Python bridge and equality
# ---------------------------------------------------------------------------


class TestPythonBridge:
    def test_from_python_round_trip(self) -> None:
        data = {
            "name": "demo",
            "tags": ["a", "b"],
            "nested": {"on": True, "ratio": 0.5},
        }
        assert Node.from_python(data).to_python() == data

    def test_to_python_sorts_keys(self) -> None:
        node = Node.from_python({"b": 1, "a": 2})
        assert list(node.to_python()) == ["a", "b"]

    def test_from_python_rejects_none(self) -> None:
        with pytest.raises(TypeError, match="null"):
            Node.from_python({"a": None})

    def test_from_python_rejects_non_str_keys(self) -> None:
        with pytest.raises(TypeError, match="keys must be str"):
            Node.from_python({1: "x"})

    def test_from_python_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            Node.from_python((1, 2))


class TestEquality:
    def test_structural_equality(self) -> None:
        assert Node.from_python({"a": [1, "x"]}) == Node.from_python({"a": [1, "x"]})

    def test_bool_and_int_differ(self) -> None:
        assert Node.new_scalar(1) != Node.new_scalar(True)

    def test_int_and_float_differ(self) -> None:
        assert Node.new_scalar(1) != Node.new_scalar(1.0)

    def test_empty_object_and_array_differ(self) -> None:
        assert Node() != Node.new_array()

    def test_repr(self) -> None:
        node = Node.from_python({"b": 1, "a": 2})
        assert repr(node) == "Node(object, keys=['a', 'b'])"
        assert repr(Node.from_python([1, 2])) == "Node(array, size=2)"
        assert repr(Node.new_scalar(3)) == "Node(int, 3)"
