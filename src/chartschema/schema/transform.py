"""Values tree to JSON Schema transformation.

:func:`yaml_to_schema` wraps the root mapping of a values file;
:func:`build_schema` walks one mapping, combining the ``@schema`` annotation
of every key with what can be inferred from its value.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from yaml.constructor import SafeConstructor

from ..core.runtime.logging import log_event
from ..core.yaml_utils import ValuesDocument, content_end_mark, load_values
from ..errors import SchemaError, SchemaParseError
from .comments import get_schema_from_comment, remove_helm_docs_tags, remove_leading_comments
from .model import DRAFT_07_URI, RequiredNames, Schema, TypeList
from .options import BuildOptions
from .refs import resolve_reference
from .required import fix_required_properties
from .types import type_from_tag

GLOBAL_KEY = "global"
GLOBAL_DESCRIPTION = (
    "Global values are values that can be accessed from any chart or subchart by exactly the same name. "
    "This is a built-in helm object"
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def cast_node_value_by_type(raw: str, types: list[str]) -> Any:
    """Coerce a raw scalar to the first declared type it parses as; keep the text otherwise."""
    for kind in types:
        if kind == "boolean":
            # same literals the YAML 1.1 resolver tags as bool
            flag = SafeConstructor.bool_values.get(raw.lower())
            if flag is not None:
                return flag
        elif kind in ("integer", "number") and _INTEGER.fullmatch(raw):
            return int(raw)
        elif kind == "number" and _FLOAT.fullmatch(raw):
            return float(raw)
    return raw


def property_id(parent_id: str, key: str) -> str:
    if not parent_id:
        return f"#/properties/{key}"
    return f"{parent_id}/properties/{key}"


def _key_name(key_node: yaml.Node) -> str:
    if not isinstance(key_node, yaml.ScalarNode):
        raise SchemaParseError(f"unsupported non-scalar key at line {key_node.start_mark.line + 1}")
    return key_node.value


def _sequence_items(values: ValuesDocument, node: yaml.SequenceNode, options: BuildOptions, parent_id: str) -> Schema:
    members: list[Schema] = []
    for item in node.value:
        if isinstance(item, yaml.ScalarNode):
            members.append(Schema.of_type(type_from_tag(item.tag)))
        elif isinstance(item, yaml.MappingNode):
            item_required = RequiredNames()
            item_schema = build_schema(values, item, options, item_required, parent_id)
            names = item_schema.ensure_required_names()
            for name in item_required.names:
                names.add(name)
            if not options.skip.additional_properties:
                item_schema.additional_properties = False
            members.append(item_schema)
        else:
            nested = Schema.of_type("array")
            nested.items = _sequence_items(values, item, options, parent_id)
            members.append(nested)

    if not members:
        return Schema()
    first = members[0].to_dict()
    if all(member.to_dict() == first for member in members[1:]):
        return members[0]
    return Schema(any_of=members)


def _build_property(
    values: ValuesDocument,
    key: str,
    key_node: yaml.Node,
    value_node: yaml.Node,
    options: BuildOptions,
    parent_required: RequiredNames,
    key_id: str,
    previous_end: yaml.Mark | None,
) -> Schema:
    skip = options.skip
    comment = values.head_comment(key_node, after=previous_end)
    if not options.keep_full_comment:
        comment = remove_leading_comments(comment)
    schema, description = get_schema_from_comment(comment)
    if not options.keep_helm_docs_prefix:
        description = remove_helm_docs_tags(description)

    if schema.ref:
        schema = resolve_reference(schema, values.path, options)

    if schema.has_data:
        # const and enum carry their own type
        if not schema.type and schema.const is None and schema.enum is None:
            schema.type = TypeList([type_from_tag(value_node.tag)])
        schema.validate()
    else:
        schema.type = TypeList([type_from_tag(value_node.tag)])

    schema.id = key_id

    if schema.ref:
        return schema

    flag = schema.required_flag
    if flag or (flag is None and not schema.required_names and not skip.required and not schema.has_data):
        parent_required.add(key)
    if flag is not None:
        schema.required = RequiredNames()

    is_mapping = isinstance(value_node, yaml.MappingNode)
    if not skip.additional_properties and is_mapping and (not schema.has_data or schema.additional_properties is None):
        schema.additional_properties = False

    if not schema.title and not skip.title:
        schema.title = key
    if not schema.description and not skip.description:
        schema.description = description

    if not skip.default and schema.default is None and isinstance(value_node, yaml.ScalarNode):
        kinds = list(schema.type) or [type_from_tag(value_node.tag)]
        schema.default = cast_node_value_by_type(value_node.value, kinds)

    if is_mapping and schema.properties is None:
        names = schema.ensure_required_names()
        schema.properties = build_schema(values, value_node, options, names, key_id).properties or {}
        fix_required_properties(schema)
    elif isinstance(value_node, yaml.SequenceNode) and schema.items is None:
        schema.items = _sequence_items(values, value_node, options, key_id)
        schema.type = TypeList(["array"])
        fix_required_properties(schema)
    return schema


def build_schema(
    values: ValuesDocument,
    node: yaml.Node | None,
    options: BuildOptions,
    parent_required: RequiredNames,
    parent_id: str = "",
) -> Schema:
    """Build an object schema for the mapping ``node``.

    Keys that end up required are added to ``parent_required``; property
    ``$id`` values extend ``parent_id``. Any error aborts the walk and carries
    the ``$id`` of the offending key.
    """
    schema = Schema.of_type("object")
    if not isinstance(node, yaml.MappingNode):
        return schema
    schema.properties = {}
    previous_end = None
    for key_node, value_node in node.value:
        key = _key_name(key_node)
        key_id = property_id(parent_id, key)
        try:
            schema.properties[key] = _build_property(
                values, key, key_node, value_node, options, parent_required, key_id, previous_end
            )
        except SchemaError as exc:
            if exc.key_path is None:
                exc.key_path = key_id
            raise
        previous_end = content_end_mark(value_node)
    return schema


def yaml_to_schema(values: ValuesDocument, options: BuildOptions) -> Schema:
    schema = Schema.of_type("object")
    schema.schema = DRAFT_07_URI
    schema.properties = build_schema(values, values.root, options, schema.ensure_required_names()).properties or {}

    if GLOBAL_KEY not in schema.properties:
        global_schema = Schema.of_type("object")
        if not options.skip.title:
            global_schema.title = GLOBAL_KEY
        if not options.skip.description:
            global_schema.description = GLOBAL_DESCRIPTION
        schema.properties[GLOBAL_KEY] = global_schema

    if not options.skip.additional_properties:
        schema.additional_properties = False
    fix_required_properties(schema)
    return schema


def generate_schema(values_path: Path, options: BuildOptions | None = None) -> Schema:
    options = options or BuildOptions()
    values = load_values(values_path)
    schema = yaml_to_schema(values, options)
    log_event(options, "debug", "transform", "build", values=str(values_path), keys=len(schema.properties or {}))
    return schema
