from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from chartschema.schema.model import RequiredNames, Schema
from chartschema.schema.required import fix_required_properties


def test_markers_become_parent_required_names() -> None:
    schema = Schema.from_mapping(
        {
            "properties": {
                "x": {"type": "string", "required": True},
                "y": {"type": "string", "required": False},
                "z": {"type": "string"},
            }
        }
    )
    fix_required_properties(schema)
    assert schema.required == RequiredNames(["x"])
    assert schema.type == ["object"]
    out = schema.to_dict()
    assert out["required"] == ["x"]
    assert all("required" not in child for child in out["properties"].values())
    assert schema.properties is not None
    assert schema.properties["x"].required_flag is None


def test_nested_markers_are_resolved_at_every_level() -> None:
    schema = Schema.from_mapping(
        {
            "type": "object",
            "properties": {
                "db": {
                    "required": True,
                    "properties": {"host": {"type": "string", "required": True}},
                }
            },
        }
    )
    fix_required_properties(schema)
    out = schema.to_dict()
    assert out["required"] == ["db"]
    assert out["properties"]["db"]["required"] == ["host"]
    assert out["properties"]["db"]["type"] == "object"


def test_existing_names_are_kept_and_deduplicated() -> None:
    schema = Schema.from_mapping({"required": ["a"], "properties": {"a": {"required": True}, "b": {"required": True}}})
    fix_required_properties(schema)
    assert schema.required_names == ["a", "b"]


def test_items_and_composition_members_are_normalized() -> None:
    schema = Schema.from_mapping(
        {
            "type": "array",
            "items": {"properties": {"name": {"type": "string", "required": True}}},
            "not": {"properties": {"bad": {"required": True}}},
            "additionalProperties": {"properties": {"inner": {"required": True}}},
        }
    )
    fix_required_properties(schema)
    assert schema.items is not None and schema.items.required_names == ["name"]
    assert schema.not_ is not None and schema.not_.required_names == ["bad"]
    assert isinstance(schema.additional_properties, Schema)
    assert schema.additional_properties.required_names == ["inner"]


def test_conditional_branch_clears_unconditional_required() -> None:
    schema = Schema.from_mapping(
        {
            "properties": {"mode": {"required": True}, "url": {"type": "string"}},
            "if": {"properties": {"mode": {"const": "remote"}}},
            "then": {"required": ["url"]},
        }
    )
    fix_required_properties(schema)
    assert schema.required_names == []
    assert schema.then is not None and schema.then.required_names == ["url"]


def test_one_of_member_with_required_clears_parent() -> None:
    schema = Schema.from_mapping(
        {
            "required": ["a"],
            "oneOf": [{"required": ["a"]}, {"properties": {"b": {"required": True}}}],
        }
    )
    fix_required_properties(schema)
    assert schema.required_names == []
    assert schema.one_of is not None
    assert schema.one_of[1].required_names == ["b"]


def test_members_without_required_keep_parent_list() -> None:
    schema = Schema.from_mapping({"required": ["a"], "anyOf": [{"type": "string"}], "else": {"type": "object"}})
    fix_required_properties(schema)
    assert schema.required_names == ["a"]


_NAMES = st.lists(st.from_regex(r"[a-z][a-z0-9]{0,7}", fullmatch=True), max_size=6, unique=True)


@given(_NAMES, st.lists(st.booleans(), min_size=6, max_size=6))
def test_normalization_is_idempotent(names: list[str], flags: list[bool]) -> None:
    payload = {"properties": {name: {"type": "string", "required": flag} for name, flag in zip(names, flags)}}
    schema = Schema.from_mapping(payload)
    fix_required_properties(schema)
    once = schema.to_dict()
    fix_required_properties(schema)
    assert schema.to_dict() == once
    assert schema.required_names == [name for name, flag in zip(names, flags) if flag]
