"""Tests for casting, path resolution, projection and mutation."""

import json

import pytest

from jnode._cast import cast_value, display_value
from jnode._path import path_to_display_string, resolve_parent, resolve_target
from jnode._project import container_placeholder, normalize, project
from jnode._types import JsonType, Node, Row
from jnode.errors import (
    CastError,
    InvalidDocumentError,
    NotAnObjectError,
    PathNotFoundError,
)
from jnode.mutate import apply_object_edit, apply_primitive_edit, serialize


class TestCastValue:
    """Draft text -> typed JSON value."""

    def test_null_ignores_input(self):
        assert cast_value("whatever", None) is None
        assert cast_value("whatever", JsonType.NULL) is None

    def test_number_int(self):
        assert cast_value(" 5 ", JsonType.NUMBER) == 5
        assert isinstance(cast_value("5", JsonType.NUMBER), int)

    def test_number_float(self):
        assert cast_value("-1.5e2", JsonType.NUMBER) == -150.0
        assert cast_value(".5", JsonType.NUMBER) == 0.5

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "abc", "nan", "inf", "0x10", "1_000", "1e400", "٣٤", "１.５", "9" * 5000],
    )
    def test_number_rejects(self, raw):
        with pytest.raises(CastError, match="Value must be a number"):
            cast_value(raw, JsonType.NUMBER)

    def test_boolean_case_insensitive(self):
        assert cast_value("TRUE", JsonType.BOOLEAN) is True
        assert cast_value(" False ", JsonType.BOOLEAN) is False

    def test_boolean_rejects(self):
        with pytest.raises(CastError, match="true or false"):
            cast_value("yes", JsonType.BOOLEAN)

    def test_string_trimmed_verbatim(self):
        assert cast_value('  "quoted" text ', JsonType.STRING) == '"quoted" text'

    def test_error_carries_key(self):
        with pytest.raises(CastError) as info:
            cast_value("x", JsonType.NUMBER, key="age")
        assert info.value.key == "age"
        assert info.value.value == "x"
        assert str(info.value) == "Property age must be a number"

    @pytest.mark.parametrize("value", [0, -3, 2.25, True, False, None, "hi"])
    def test_display_then_cast_is_stable(self, value):
        kind = JsonType.of(value)
        once = cast_value(display_value(value), kind)
        assert once == value
        assert cast_value(display_value(once), kind) == once


class TestPathNavigator:
    """Path resolution against parsed documents."""

    def test_resolve_target(self):
        data = {"a": [{"b": 1}]}
        assert resolve_target(data, ["a", 0, "b"]) == 1
        assert resolve_target(data, []) is data

    def test_missing_segment_names_it(self):
        with pytest.raises(PathNotFoundError) as info:
            resolve_target({"a": 1}, ["missing", "x"])
        assert info.value.segment == "missing"
        assert info.value.position == 0
        assert "missing" in str(info.value)

    def test_index_out_of_range(self):
        with pytest.raises(PathNotFoundError):
            resolve_target({"a": [1]}, ["a", 3])

    def test_type_mismatch_is_not_found(self):
        with pytest.raises(PathNotFoundError):
            resolve_target({"a": [1]}, ["a", "0"])
        with pytest.raises(PathNotFoundError):
            resolve_target({"a": 1}, ["a", "b"])

    def test_parent_does_not_read_last_slot(self):
        data = {"a": {}}
        ref = resolve_parent(data, ["a", "new"])
        ref.assign(3)
        assert data == {"a": {"new": 3}}

    def test_parent_of_root_is_rejected(self):
        with pytest.raises(ValueError):
            resolve_parent({}, [])

    def test_no_intermediate_structure(self):
        data = {"a": 1}
        with pytest.raises(PathNotFoundError):
            resolve_parent(data, ["x", "y", "z"])
        assert data == {"a": 1}

    def test_assign_into_scalar_parent_fails(self):
        ref = resolve_parent({"a": 1}, ["a", "b"])
        with pytest.raises(PathNotFoundError) as info:
            ref.assign(2)
        assert info.value.position == 1


class TestPathDisplay:
    def test_root(self):
        assert path_to_display_string([]) == "$"
        assert path_to_display_string(None) == "$"

    def test_mixed_segments(self):
        assert path_to_display_string(["customer", 0]) == '$["customer"][0]'

    def test_quote_in_key_is_escaped(self):
        assert path_to_display_string(['a"b']) == '$["a\\"b"]'


class TestProjector:
    """Editability and display form of nodes."""

    def test_primitive_leaf(self):
        node = Node(("a", 0), (Row(None, JsonType.NUMBER, 4),))
        result = project(node)
        assert result.is_primitive_leaf
        assert not result.is_object_editable

    def test_keyed_single_row_is_neither(self):
        node = Node(("a",), (Row("k", JsonType.STRING, "v"),))
        result = project(node)
        assert not result.is_primitive_leaf
        assert not result.is_object_editable

    def test_object_editable(self):
        node = Node((), (
            Row("k", JsonType.STRING, "v"),
            Row("nested", JsonType.OBJECT, children_count=2),
        ))
        assert project(node).is_object_editable

    def test_only_containers_not_editable(self):
        node = Node((), (
            Row("a", JsonType.OBJECT, children_count=1),
            Row("b", JsonType.ARRAY, children_count=0),
        ))
        result = project(node)
        assert not result.is_editable

    def test_none_node(self):
        result = project(None)
        assert result.rows == ()
        assert not result.is_editable

    def test_normalize_empty(self):
        assert normalize(()) == "{}"

    def test_normalize_single_value(self):
        assert normalize((Row(None, JsonType.BOOLEAN, True),)) == "true"
        assert normalize((Row(None, JsonType.STRING, "hi"),)) == "hi"

    def test_normalize_skips_containers(self):
        rows = (
            Row("a", JsonType.NUMBER, 1),
            Row("b", JsonType.ARRAY, children_count=3),
            Row("c", JsonType.NULL, None),
        )
        text = normalize(rows)
        assert json.loads(text) == {"a": 1, "c": None}
        assert text == '{\n  "a": 1,\n  "c": null\n}'

    def test_container_placeholder(self):
        assert container_placeholder(Row("o", JsonType.OBJECT, children_count=2)) == "{2 keys}"
        assert container_placeholder(Row("l", JsonType.ARRAY, children_count=3)) == "[3 items]"


class TestMutationEngine:
    """Document text in, document text out."""

    def test_primitive_edit(self):
        doc = '{"a":1,"b":{"c":2}}'
        updated = apply_primitive_edit(doc, ["a"], cast_value("5", JsonType.NUMBER))
        assert json.loads(updated) == {"a": 5, "b": {"c": 2}}

    def test_primitive_edit_round_trip(self):
        doc = '{"list": [1, {"x": "old"}]}'
        updated = apply_primitive_edit(doc, ["list", 1, "x"], "new")
        assert resolve_target(json.loads(updated), ["list", 1, "x"]) == "new"

    def test_root_replaces_document(self):
        assert apply_primitive_edit('"old"', [], 7) == "7"
        assert apply_primitive_edit('{"a": 1}', (), None) == "null"

    def test_pretty_printed(self):
        updated = apply_primitive_edit('{"a":1}', ["a"], 2)
        assert updated == '{\n  "a": 2\n}'

    def test_invalid_document(self):
        with pytest.raises(InvalidDocumentError):
            apply_primitive_edit("{not json", ["a"], 1)
        with pytest.raises(InvalidDocumentError):
            apply_primitive_edit("{not json", [], 1)

    def test_primitive_edit_missing_path(self):
        with pytest.raises(PathNotFoundError) as info:
            apply_primitive_edit('{"a":1}', ["missing", "x"], 1)
        assert info.value.segment == "missing"

    def test_object_edit(self):
        doc = '{"obj":{"k1":1,"k2":"y"}}'
        updated = apply_object_edit(
            doc, ["obj"], {"k1": "9"}, {"k1": JsonType.NUMBER, "k2": JsonType.STRING}
        )
        assert json.loads(updated) == {"obj": {"k1": 9, "k2": "y"}}

    def test_object_edit_ignores_unknown_and_container_keys(self):
        doc = '{"o": {"a": 1, "n": {"z": 0}}}'
        updated = apply_object_edit(
            doc,
            ["o"],
            {"a": "2", "ghost": "x", "n": "flattened"},
            {"a": JsonType.NUMBER, "n": JsonType.OBJECT},
        )
        assert json.loads(updated) == {"o": {"a": 2, "n": {"z": 0}}}

    def test_object_edit_untouched_properties(self):
        before = {"o": {"a": 1, "b": [1, 2], "c": "same", "d": None}}
        updated = apply_object_edit(
            json.dumps(before), ["o"], {"a": "3"}, {"a": JsonType.NUMBER}
        )
        after = json.loads(updated)
        for key in ("b", "c", "d"):
            assert after["o"][key] == before["o"][key]

    def test_object_edit_not_an_object(self):
        with pytest.raises(NotAnObjectError):
            apply_object_edit('{"l": [1, 2]}', ["l"], {}, {})

    def test_object_edit_cast_error_names_key(self):
        with pytest.raises(CastError) as info:
            apply_object_edit(
                '{"o": {"a": 1, "b": true}}',
                ["o"],
                {"a": "2", "b": "maybe"},
                {"a": JsonType.NUMBER, "b": JsonType.BOOLEAN},
            )
        assert info.value.key == "b"

    def test_object_edit_at_root(self):
        updated = apply_object_edit(
            '{"a": "x", "b": 1}', [], {"a": " y "}, {"a": JsonType.STRING}
        )
        assert json.loads(updated) == {"a": "y", "b": 1}

    @pytest.mark.parametrize(
        "doc",
        ['{"big": 1e400, "l": [1]}', '{"n": NaN, "l": [1]}', '{"l": [1], "i": -Infinity}'],
    )
    def test_non_standard_numbers_are_invalid(self, doc):
        with pytest.raises(InvalidDocumentError):
            apply_primitive_edit(doc, ["l", 0], 2)

    def test_overlong_integer_is_invalid(self):
        doc = '{"l": [1], "i": ' + "9" * 5000 + "}"
        with pytest.raises(InvalidDocumentError):
            apply_primitive_edit(doc, ["l", 0], 2)

    def test_serialize_refuses_non_finite(self):
        with pytest.raises(ValueError):
            serialize({"x": float("inf")})

    def test_unicode_kept(self):
        updated = apply_primitive_edit('{"name": "x"}', ["name"], "한글")
        assert "한글" in updated
